"""Resolve the pattern and replacement from literal arguments or files."""

from .errors import ConflictingArguments, IoError, MissingRequiredValue


def read_text(path: str) -> str:
    """Read a whole UTF-8 file, raising IoError on any failure.

    Line endings are kept as they are on disk.
    """
    try:
        with open(path, encoding="utf-8", newline="") as f:
            return f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise IoError(path, e) from e


def check_exclusive(
    literal_value: str | None,
    file_path: str | None,
    literal_flag: str,
    file_flag: str,
) -> None:
    """Reject configurations that set both the literal and the file form."""
    if literal_value is not None and file_path is not None:
        raise ConflictingArguments(
            f"{literal_flag} and {file_flag} are mutually exclusive"
        )


def resolve(name: str, literal_value: str | None, file_path: str | None) -> str:
    """Return the literal value if given, else the full contents of file_path.

    An empty literal is returned as-is. File contents are never trimmed.
    Raises MissingRequiredValue when neither source is set and IoError when
    the file cannot be read.
    """
    if literal_value is not None:
        return literal_value
    if file_path is not None:
        return read_text(file_path)
    raise MissingRequiredValue(name)
