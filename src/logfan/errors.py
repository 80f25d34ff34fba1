"""
Error types raised by logfan.

Write and flush failures on a sink are plain ``OSError`` and are not wrapped.
"""


class LogfanError(Exception):
    """Base class for all logfan errors."""


class AlreadyInitializedError(LogfanError):
    """A logger was already installed in the registration slot."""


class TerminalUnavailableError(LogfanError):
    """The terminal streams a TermLogger needs could not be opened."""


class OffsetUnavailableError(LogfanError):
    """The local UTC offset could not be determined soundly."""
