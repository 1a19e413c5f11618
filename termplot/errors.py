from __future__ import annotations


class TermplotError(Exception):
    """Base class for termplot failures."""


class RenderSinkError(TermplotError):
    """Raised when a render sink rejects a write."""


class SinkFullError(TermplotError):
    pass


class ColorParseError(TermplotError, ValueError):
    pass
