"""Exception hierarchy. Every failure is non-fatal and leaves state retryable."""

from __future__ import annotations


class TradeScopeError(Exception):
    """Base class for all TradeScope errors."""


class InputError(TradeScopeError):
    """The user action cannot proceed with the current input."""


class UnsupportedImageError(InputError):
    pass


class MissingImageError(InputError):
    def __init__(self, message: str = "Please upload an image first.") -> None:
        super().__init__(message)


class MissingAnalysisError(InputError):
    def __init__(self, message: str = "Analyze the chart before generating a continuation.") -> None:
        super().__init__(message)


class SessionBusyError(TradeScopeError):
    """A request of the same kind is already in flight for this session."""


class SessionNotFoundError(TradeScopeError):
    pass
