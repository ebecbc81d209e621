"""CLI utility modules."""

from linguistics.cli.utils.async_runner import open_checker, run_async
from linguistics.cli.utils.console import console, error_console

__all__ = ["run_async", "open_checker", "console", "error_console"]
