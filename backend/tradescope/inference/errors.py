"""Inference failure types. One kind per call site, distinguished by message."""

from __future__ import annotations

from tradescope.errors import TradeScopeError


class InferenceError(TradeScopeError):
    label = "Request Failed"


class AnalysisFailedError(InferenceError):
    label = "Analysis Failed"


class GenerationFailedError(InferenceError):
    label = "Generation Failed"


class NoImageProducedError(GenerationFailedError):
    def __init__(self, message: str = "No image was generated in the response.") -> None:
        super().__init__(message)


class InvalidAnalysisStructureError(TradeScopeError):
    """Decoded JSON does not match the AnalysisResult shape.

    `problems` holds one "<field path>: <reason>" entry per failing rule.
    """

    message = "Invalid analysis data structure received from API."

    def __init__(self, problems: list[str] | None = None) -> None:
        self.problems = problems or []
        super().__init__(self.message)

    def __str__(self) -> str:
        if not self.problems:
            return self.message
        return f"{self.message} ({'; '.join(self.problems)})"
