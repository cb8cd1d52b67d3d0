"""
Exceptions raised by the splitter.
Errors coming from the byte source are not wrapped: they reach the caller as-is.
"""


class SplitterError(Exception):
    """Base class for errors raised by regex_splitter itself."""


class PatternCompileError(SplitterError, ValueError):
    """The delimiter could not be turned into a usable compiled pattern."""
