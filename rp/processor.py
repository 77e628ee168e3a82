"""Apply one pattern/replacement pair to files or standard input."""

import codecs
import sys

from .errors import IoError
from .resolve import read_text
from .scan_buffer import ScanBuffer
from .size import DEFAULT_PUMP_LIMIT
from .text import apply_compiled, compile_pattern

STDIN_NAME = "<stdin>"


def write_text(path: str, content: str) -> None:
    """Truncate ``path`` and write ``content`` to it as UTF-8."""
    try:
        with open(path, "w", encoding="utf-8", newline="") as f:
            f.write(content)
    except OSError as e:
        raise IoError(path, e) from e


class Processor:
    """Runs the substitution over files (one at a time) or over stdin.

    The pattern is compiled when the processor is built, so a bad pattern
    raises PatternCompileError before any input is touched.
    """

    def __init__(
        self,
        pattern: str,
        replacement: str,
        logger,
        *,
        inplace: bool = False,
        stream: bool = False,
        pump_limit: int = DEFAULT_PUMP_LIMIT,
        stdin=None,
        stdout=None,
    ):
        self.regex = compile_pattern(pattern)
        self.replacement = replacement
        self.logger = logger
        self.inplace = inplace
        self.stream = stream
        self.pump_limit = pump_limit
        self.stdin = stdin if stdin is not None else sys.stdin.buffer
        self.stdout = stdout if stdout is not None else sys.stdout

    def process_text(self, text: str) -> str:
        return apply_compiled(self.regex, self.replacement, text)

    # -- File mode -----------------------------------------------------------

    def process_file(self, path: str) -> None:
        """Substitute in one file. Raises IoError if it cannot be read or written."""
        self.logger.debug(f"Processing: {path}")
        try:
            result = self.process_text(read_text(path))
        except IoError:
            self.logger.debug(f"{path}: skipped")
            raise
        self.logger.debug(f"{path}: replaced")
        if self.inplace:
            write_text(path, result)
        else:
            self.stdout.write(result)

    def process_files(self, paths: list[str]) -> int:
        """Process every path in order. Returns the number that failed."""
        failures = 0
        for path in paths:
            try:
                self.process_file(path)
            except IoError as e:
                self.logger.error(e.message)
                failures += 1
        return failures

    # -- Stream mode ---------------------------------------------------------

    def process_stdin(self) -> None:
        """Read all of stdin, substitute once, write the result."""
        self.logger.debug("Reading stdin")
        try:
            text = self.stdin.read().decode("utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise IoError(STDIN_NAME, e) from e
        self.stdout.write(self.process_text(text))

    def stream_stdin(self) -> None:
        """Substitute over stdin one pump_limit-sized window at a time.

        Each window is matched on its own: a match that straddles two
        windows is not replaced.
        """
        self.logger.debug(f"Streaming stdin in {self.pump_limit} byte windows")
        buffer = ScanBuffer(self.pump_limit, self.pump_limit, 0, logger=self.logger)
        decoder = codecs.getincrementaldecoder("utf-8")()
        try:
            while True:
                count = buffer.fill(self.stdin)
                if count == 0:
                    break
                chunk = bytes(buffer.tail(count))
                text = decoder.decode(chunk)
                if text:
                    self.stdout.write(self.process_text(text))
            tail = decoder.decode(b"", final=True)
        except UnicodeDecodeError as e:
            raise IoError(STDIN_NAME, e) from e
        if tail:
            self.stdout.write(self.process_text(tail))

    # -- Entry point ---------------------------------------------------------

    def run(self, files: list[str]) -> int:
        """Process ``files``, or stdin when there are none. Returns an exit code."""
        if files:
            failures = self.process_files(files)
            if failures:
                self.logger.debug(f"{failures} of {len(files)} files failed")
            return 1 if failures else 0
        if self.stream:
            self.stream_stdin()
        else:
            self.process_stdin()
        return 0
