"""Annotation overlay and result panel for the chart viewer.

The overlay is an SVG in a 0..100 viewBox stretched over the image box
(preserveAspectRatio="none"), so annotation percentages are used as-is.
"""

from __future__ import annotations

from typing import Any

from tradescope.models.analysis import AnalysisResult, Annotation, Recommendation
from tradescope.svg.serializer import serialize_svg

FALLBACK_COLOR = "#ffffff"

RECOMMENDATION_COLORS: dict[Recommendation, str] = {
    Recommendation.BUY: "#22c55e",
    Recommendation.SELL: "#ef4444",
    Recommendation.HOLD: "#eab308",
}

RECOMMENDATION_TONES: dict[Recommendation, str] = {
    Recommendation.BUY: "green",
    Recommendation.SELL: "red",
    Recommendation.HOLD: "yellow",
}

ARROWHEAD_ID = "arrowhead"


def annotation_color(recommendation: Recommendation | None) -> str:
    if recommendation is None:
        return FALLBACK_COLOR
    return RECOMMENDATION_COLORS.get(recommendation, FALLBACK_COLOR)


def _arrowhead_marker(color: str) -> dict[str, Any]:
    return {
        "tag": "marker",
        "id": ARROWHEAD_ID,
        "markerWidth": 5,
        "markerHeight": 3.5,
        "refX": 5,
        "refY": 1.75,
        "orient": "auto",
        "children": [{"tag": "polygon", "points": "0 0, 5 1.75, 0 3.5", "fill": color}],
    }


def overlay_elements(annotation: Annotation, color: str, stroke_width: float) -> list[dict[str, Any]]:
    """SVG element dicts for one annotation, always ending in the arrowhead marker."""
    line: dict[str, Any] = {
        "tag": "line",
        "x1": annotation.start.x,
        "y1": annotation.start.y,
        "x2": annotation.end.x,
        "y2": annotation.end.y,
        "stroke": color,
        "stroke-width": float(stroke_width),
        "stroke-linecap": "round",
        "marker-end": f"url(#{ARROWHEAD_ID})",
    }
    return [{"tag": "defs", "children": [_arrowhead_marker(color)]}, line]


def render_overlay_svg(result: AnalysisResult, stroke_width: float) -> str:
    """Overlay markup for the result's annotation at the given viewBox stroke width."""
    color = annotation_color(result.recommendation)
    return serialize_svg(
        overlay_elements(result.annotation, color, stroke_width),
        canvas_w=100,
        canvas_h=100,
        title=result.prediction,
        preserve_aspect_ratio="none",
    )


def build_panel(result: AnalysisResult) -> dict[str, Any]:
    """Textual display data: recommendation badge, confidence, prediction, rationale."""
    return {
        "recommendation": result.recommendation.value,
        "tone": RECOMMENDATION_TONES.get(result.recommendation, "slate"),
        "color": annotation_color(result.recommendation),
        "confidence": result.confidence,
        "prediction": result.prediction,
        "rationale": result.rationale,
    }
