"""timectl: parse, convert, shift, and compare loosely formatted times."""

__version__ = "0.1.0"
