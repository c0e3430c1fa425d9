"""Shared stdout console for every command.

Rich is imported on first use, not at import time, so ``help`` and
``--version`` still run without it.  Without Rich, output degrades to
plain ``print`` with the markup tags stripped.
"""

from __future__ import annotations

import re
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from gh_repo_manager.exceptions import EnvironmentError

_MARKUP_TAG = re.compile(r"\[/?[a-z #0-9_.]*\]")


def _load_rich_console_class() -> type[Any]:
	"""Return ``rich.console.Console`` class or raise ``EnvironmentError``."""
	try:
		from rich.console import Console
	except ModuleNotFoundError as exc:
		raise EnvironmentError(
			"rich is not installed. Install with: pip install rich",
		) from exc
	return Console


def get_rich_console() -> Any:
	"""Create a Rich console instance targeting stdout."""
	console_class = _load_rich_console_class()
	return console_class(highlight=False)


def strip_markup(text: str) -> str:
	"""Remove Rich markup tags for plain-text output."""
	return _MARKUP_TAG.sub("", text)


class _ConsoleProxy:
	"""Routes ``print`` and ``status`` to Rich, or to plain stdout."""

	def print(self, *objects: object) -> None:
		"""Render with Rich when available, else plain stdout print."""
		try:
			rich_console = get_rich_console()
		except EnvironmentError:
			print(*(strip_markup(str(obj)) for obj in objects))
			return
		rich_console.print(*objects)

	@contextmanager
	def status(self, message: str) -> Iterator[None]:
		"""Show a spinner while the block runs (plain line without Rich)."""
		try:
			rich_console = get_rich_console()
		except EnvironmentError:
			print(strip_markup(message))
			yield
			return
		with rich_console.status(message):
			yield


console = _ConsoleProxy()
