"""Tests for the fmt module (stderr diagnostics)."""

from io import StringIO

from rich.console import Console

from rp.fmt import Logger, make_console


def _logger(verbose=False):
    buf = StringIO()
    return Logger(Console(file=buf, no_color=True, width=80), verbose=verbose), buf


class TestLevels:
    def test_debug_hidden_by_default(self):
        logger, buf = _logger()
        logger.debug("tracing")
        assert buf.getvalue() == ""

    def test_debug_when_verbose(self):
        logger, buf = _logger(verbose=True)
        logger.debug("tracing")
        assert "tracing" in buf.getvalue()

    def test_info(self):
        logger, buf = _logger()
        logger.info("note")
        assert "note" in buf.getvalue()

    def test_warning(self):
        logger, buf = _logger()
        logger.warning("careful")
        out = buf.getvalue()
        assert "Warning:" in out
        assert "careful" in out

    def test_error(self):
        logger, buf = _logger()
        logger.error("boom")
        assert buf.getvalue().startswith("Error: boom")


class TestOutputShape:
    def test_markup_not_interpreted(self):
        logger, buf = _logger()
        logger.error("[bold]file[/bold].txt")
        assert "[bold]file[/bold].txt" in buf.getvalue()

    def test_long_message_stays_on_one_line(self):
        logger, buf = _logger()
        logger.error("x" * 300)
        assert len(buf.getvalue().splitlines()) == 1


class TestMakeConsole:
    def test_stderr(self):
        assert make_console().stderr

    def test_no_color(self):
        assert make_console(no_color=True).no_color

    def test_force_color(self):
        console = make_console(color=True)
        assert console.is_terminal
