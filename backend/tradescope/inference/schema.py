"""Validate untrusted JSON into an AnalysisResult. All-or-nothing."""

from __future__ import annotations

import json
from typing import Any

from pydantic import ValidationError

from tradescope.inference.errors import InvalidAnalysisStructureError
from tradescope.models.analysis import AnalysisResult, AnnotationType

_ANNOTATION_TYPES = {t.value for t in AnnotationType}


def _reject_constant(token: str) -> Any:
    raise ValueError(f"Invalid JSON: non-standard constant {token}")


def load_json(text: str) -> Any:
    """Decode strict JSON. NaN, Infinity and -Infinity are refused."""
    return json.loads(text.strip(), parse_constant=_reject_constant)


def _format_problem(error: dict[str, Any]) -> str:
    path = ".".join(str(part) for part in error.get("loc", ())) or "<root>"
    return f"{path}: {error.get('msg', 'invalid')}"


def validate_analysis(data: Any, strict_annotation: bool = False) -> AnalysisResult:
    """Turn a decoded JSON value into an AnalysisResult or raise.

    Field values are carried over unchanged; `confidence` is not clamped.
    With strict_annotation, `annotation.type` must be "arrow" or "line".
    """
    if not isinstance(data, dict):
        raise InvalidAnalysisStructureError([f"<root>: expected object, got {type(data).__name__}"])

    try:
        result = AnalysisResult.model_validate(data)
    except ValidationError as e:
        raise InvalidAnalysisStructureError([_format_problem(err) for err in e.errors()]) from e

    if strict_annotation and result.annotation.type not in _ANNOTATION_TYPES:
        raise InvalidAnalysisStructureError(
            [f"annotation.type: expected one of {sorted(_ANNOTATION_TYPES)}, got {result.annotation.type!r}"]
        )

    return result
