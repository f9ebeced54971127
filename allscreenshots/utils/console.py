"""Console output helpers for user-facing guidance.

A thin layer over ``rich`` that keeps colors and symbols consistent wherever
the SDK prints something meant for a human (hints, error summaries).
Library code never prints on its own; these helpers are only reached through
:func:`allscreenshots.shared.hints.render_hints` and :meth:`ShotConsole.render_exception`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.console import Console

if TYPE_CHECKING:
    from allscreenshots.shared.exceptions import AllscreenshotsError

RED = "rgb(220,50,47)"
DIM = "bright_black"
YELLOW = "yellow"
TEXT = "bright_white"
LINK = "rgb(108,113,196)"


class ShotConsole:
    """Styled output for SDK messages."""

    def __init__(self) -> None:
        self._stdout_console = Console(stderr=False)
        self._stderr_console = Console(stderr=True)

    @property
    def console(self) -> Console:
        return self._stderr_console

    def _pick(self, stderr: bool) -> Console:
        return self._stderr_console if stderr else self._stdout_console

    def error(self, message: str, stderr: bool = True) -> None:
        self._pick(stderr).print(f"[{RED} not bold]x {message}[/{RED} not bold]")

    def warning(self, message: str, stderr: bool = True) -> None:
        self._pick(stderr).print(f"! [{YELLOW} not bold]{message}[/{YELLOW} not bold]")

    def info(self, message: str, stderr: bool = True) -> None:
        self._pick(stderr).print(f"[{TEXT} not bold]{message}[/{TEXT} not bold]")

    def dim_info(self, label: str, value: str, stderr: bool = True) -> None:
        self._pick(stderr).print(f"[{DIM}]{label}:[/{DIM}] {value}")

    def link(self, url: str, stderr: bool = True) -> None:
        self._pick(stderr).print(f"[{LINK} underline]{url}[/{LINK} underline]")

    def render_exception(self, error: AllscreenshotsError, stderr: bool = True) -> None:
        """Print an SDK error followed by its hints.

        Args:
            error: The error to summarize
            stderr: If True, output to stderr (default), otherwise stdout
        """
        from allscreenshots.shared.hints import render_hints  # lazy import

        self.error(f"{type(error).__name__}: {error.message}", stderr=stderr)
        status = getattr(error, "status_code", None)
        if status:
            self.dim_info("Status", str(status), stderr=stderr)
        if error.retryable:
            self.dim_info("Retryable", "yes", stderr=stderr)
        render_hints(error.hints, design=self)


shot_console = ShotConsole()
