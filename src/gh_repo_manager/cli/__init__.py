"""Terminal front end: argument parsing, menus, prompts and rendering.

Only this package talks to the user.  It builds on ``core`` and
``infra``; nothing outside it imports from here.
"""
