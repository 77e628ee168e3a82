"""ANSI-formatted stderr diagnostics using Rich."""

from rich.console import Console
from rich.text import Text


def make_console(*, color: bool = False, no_color: bool = False) -> Console:
    """Build the stderr console from CLI flags."""
    kwargs: dict = {"stderr": True, "highlight": False}
    if color:
        kwargs["force_terminal"] = True
        kwargs["no_color"] = False
    if no_color:
        kwargs["no_color"] = True
    return Console(**kwargs)


class Logger:
    """Diagnostic sink handed to every component that reports progress.

    Created once in ``main()``. ``debug`` lines are dropped unless the
    logger is verbose; everything else is always written.
    """

    def __init__(self, console: Console | None = None, *, verbose: bool = False):
        self.console = console if console is not None else make_console()
        self.verbose = verbose

    def _emit(self, text: Text) -> None:
        # soft_wrap keeps long paths on a single diagnostic line
        self.console.print(text, soft_wrap=True)

    def debug(self, msg: str) -> None:
        if not self.verbose:
            return
        self._emit(Text(msg, style="dim"))

    def info(self, msg: str) -> None:
        self._emit(Text(msg, style="dim"))

    def warning(self, msg: str) -> None:
        line = Text()
        line.append("⚠ Warning: ", style="yellow")
        line.append(msg, style="yellow")
        self._emit(line)

    def error(self, msg: str) -> None:
        line = Text()
        line.append("Error: ", style="bold red")
        line.append(msg, style="red")
        self._emit(line)
