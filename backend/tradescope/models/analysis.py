"""Analysis result model returned by the inference service."""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Union

from pydantic import AllowInfNan, BaseModel, Field, Strict, StrictInt

# bool is rejected: strict int/float refuse True/False. inf and nan are not JSON numbers
Number = Union[StrictInt, Annotated[float, Strict(), AllowInfNan(False)]]


class Recommendation(str, Enum):
    BUY = "BUY"
    SELL = "SELL"
    HOLD = "HOLD"


class AnnotationType(str, Enum):
    ARROW = "arrow"
    LINE = "line"


class Point(BaseModel):
    """A point in percent (0-100) of the image box, origin top-left."""

    x: Number
    y: Number


class Annotation(BaseModel):
    # Lenient: any non-empty string. Tightened by validate_analysis(strict_annotation=True)
    type: Annotated[str, Field(strict=True, min_length=1)]
    start: Point
    end: Point


class AnalysisResult(BaseModel):
    prediction: Annotated[str, Field(strict=True, min_length=1)]
    recommendation: Recommendation
    confidence: Number  # 0-100 by convention, never clamped
    rationale: Annotated[str, Field(strict=True)]
    annotation: Annotation
