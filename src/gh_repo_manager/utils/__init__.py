"""Process-wide helpers shared by every layer (currently logging setup)."""
