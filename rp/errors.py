"""Error types raised by rp.

Every failure carries a ``kind`` tag so callers can branch on what went
wrong without inspecting message text. ``message`` keeps the original
diagnostic.
"""


class RpError(Exception):
    """Base class for reportable rp failures."""

    kind = "error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class IoError(RpError):
    """A file or stream could not be opened, read, decoded or written."""

    kind = "io"

    def __init__(self, path: str, cause):
        self.path = path
        self.cause = cause
        detail = getattr(cause, "strerror", None) or str(cause)
        super().__init__(f"{path}: {detail}")


class PatternCompileError(RpError):
    """The regex engine rejected the pattern."""

    kind = "pattern"


class ConfigError(RpError):
    """Invalid configuration: arguments, config files or their combination."""

    kind = "config"


class MissingRequiredValue(ConfigError):
    kind = "missing"

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"No {name} was supplied")


class ConflictingArguments(ConfigError):
    kind = "conflict"


class InvalidSizeFormat(ConfigError):
    kind = "size"

    def __init__(self, value: str):
        self.value = value
        super().__init__(f"Invalid size string ({value})")
