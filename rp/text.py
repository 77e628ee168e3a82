"""Regex substitution engine for rp.

Provides `apply()`, which replaces every non-overlapping match of a pattern
in a piece of text, and `escape_pattern()` for turning arbitrary text into
a pattern that matches itself literally.

Replacement strings use dollar references instead of Python's backslash
syntax:

  ${1}, $1          numbered group
  ${name}, $name    named group
  $$                a literal dollar sign

An unbraced name is the longest run of letters, digits and underscores, so
``$1a`` refers to a group called ``1a``; write ``${1}a`` instead. Groups
that do not exist or did not take part in the match expand to nothing.
Backslashes in the replacement are plain text.
"""

from __future__ import annotations

import re
from typing import Callable

from .errors import PatternCompileError


# ---------------------------------------------------------------------------
# Replacement templates
# ---------------------------------------------------------------------------

_REF_RE = re.compile(r"\$(?:(\$)|\{([^}]+)\}|([A-Za-z0-9_]+))")


def _parse_template(replacement: str) -> list[tuple[bool, str]]:
    """Split a replacement into (is_reference, value) pieces.

    Adjacent literal text is merged. A ``$`` that does not start a valid
    reference stays literal.
    """
    pieces: list[tuple[bool, str]] = []
    literal: list[str] = []
    pos = 0
    for m in _REF_RE.finditer(replacement):
        literal.append(replacement[pos : m.start()])
        pos = m.end()
        if m.group(1):
            literal.append("$")
            continue
        if literal:
            pieces.append((False, "".join(literal)))
            literal = []
        pieces.append((True, m.group(2) or m.group(3)))
    literal.append(replacement[pos:])
    tail = "".join(literal)
    if tail:
        pieces.append((False, tail))
    return [p for p in pieces if p[0] or p[1]]


def _group_text(match: re.Match, ref: str) -> str:
    key: int | str = int(ref) if ref.isdecimal() else ref
    try:
        value = match.group(key)
    except IndexError:
        return ""
    return value or ""


def expand_template(replacement: str) -> Callable[[re.Match], str]:
    """Compile a replacement string into a callable usable with ``re.sub``."""
    pieces = _parse_template(replacement)

    if not any(is_ref for is_ref, _ in pieces):
        constant = "".join(value for _, value in pieces)
        return lambda match: constant

    def expand(match: re.Match) -> str:
        return "".join(
            _group_text(match, value) if is_ref else value for is_ref, value in pieces
        )

    return expand


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def compile_pattern(pattern: str) -> re.Pattern:
    """Compile ``pattern``, raising PatternCompileError if re rejects it."""
    try:
        return re.compile(pattern)
    except re.error as e:
        raise PatternCompileError(f"Failed to parse regex: {e}") from e


def apply_compiled(regex: re.Pattern, replacement: str, text: str) -> str:
    """Replace every match of an already compiled regex in ``text``."""
    return regex.sub(expand_template(replacement), text)


def apply(pattern: str, replacement: str, text: str) -> str:
    """Replace every non-overlapping match of ``pattern`` in ``text``.

    Matches are found leftmost first, scanning left to right. Text without
    a match is returned unchanged.

    Raises PatternCompileError if the pattern does not compile.
    """
    return apply_compiled(compile_pattern(pattern), replacement, text)


def escape_pattern(pattern: str) -> str:
    """Backslash-escape every regex metacharacter in ``pattern``."""
    return re.escape(pattern)
