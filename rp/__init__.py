"""rp: a multiline regex find/replace utility."""

__version__ = "0.3.0"
