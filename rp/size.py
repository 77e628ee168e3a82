"""Human-readable byte sizes ("512", "4KiB", "1MiB") for --pump-limit."""

import re

from .errors import InvalidSizeFormat

DEFAULT_PUMP_LIMIT = 1024**2

_SIZE_RE = re.compile(r"(\d+)([KMGTP]iB)?")

# Suffix -> power of 1024
_MAGNITUDES = {
    "": 0,
    "KiB": 1,
    "MiB": 2,
    "GiB": 3,
    "TiB": 4,
    "PiB": 5,
}


def parse_size(size_str: str) -> int:
    """Return the byte count for ``size_str``.

    Raises InvalidSizeFormat when the string is not ``<digits>`` optionally
    followed by one of KiB, MiB, GiB, TiB or PiB.
    """
    m = _SIZE_RE.fullmatch(size_str)
    if m is None:
        raise InvalidSizeFormat(size_str)
    return int(m.group(1)) * 1024 ** _MAGNITUDES[m.group(2) or ""]


def size_or_default(size_str: str, logger) -> int:
    """Parse ``size_str``, warning and falling back to 1MiB when it is unusable."""
    try:
        size = parse_size(size_str)
    except InvalidSizeFormat as e:
        logger.warning(f"{e.message}, defaulting to 1MiB")
        return DEFAULT_PUMP_LIMIT
    if size == 0:
        logger.warning(f"Invalid size string ({size_str}), defaulting to 1MiB")
        return DEFAULT_PUMP_LIMIT
    return size
