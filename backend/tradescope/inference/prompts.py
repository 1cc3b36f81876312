"""Prompt templates and the structured-output schema for the analysis call."""

from __future__ import annotations

from google.genai import types

from tradescope.models.analysis import AnalysisResult

_ANALYZE_TEMPLATE = """You are an expert market analyst AI named TradeScope. Analyze the provided stock market or cryptocurrency chart image. Based on the patterns, indicators, and trends visible in the chart, provide a detailed analysis. Your response must be in JSON format. The analysis should include:
1. A brief "prediction" of the likely future price movement.
2. A clear "recommendation" to either "BUY", "SELL", or "HOLD".
3. A "confidence" score from 0 to 100 on your recommendation.
4. A detailed "rationale" explaining the technical analysis that led to your conclusion.
5. An "annotation" object to draw the predicted trend. It must have a "type" of "arrow", a "start" point {{"x": number, "y": number}}, and an "end" point {{"x": number, "y": number}}. Coordinates are percentages (0-100) from the top-left corner."""

_CONTINUE_TEMPLATE = """You are a data visualization expert. The user has provided a financial chart and an AI analysis of it.
Your task is to generate a continuation of this chart that visually represents the prediction.
- Extend the chart to the right, adding about 25% more horizontal space.
- Draw the future price movement based on the analysis.
- The style of the extension (background, grid lines, colors, candle stick style) must seamlessly match the original image.

Analysis:
- Recommendation: {recommendation}
- Prediction: {prediction}

Based on this, draw the chart's future. For a 'BUY' recommendation, show a clear upward trend. For a 'SELL', show a downward trend. For a 'HOLD', show a sideways or volatile movement without a clear direction."""

_TEMPLATES = {
    "analyze": _ANALYZE_TEMPLATE,
    "continue": _CONTINUE_TEMPLATE,
}


def get_prompt_template(task: str) -> str:
    return _TEMPLATES.get(task, _ANALYZE_TEMPLATE)


def get_all_templates() -> dict[str, str]:
    """Return all prompt templates keyed by task name."""
    return dict(_TEMPLATES)


def build_analysis_prompt() -> str:
    return get_prompt_template("analyze").format()


def build_continuation_prompt(result: AnalysisResult) -> str:
    return get_prompt_template("continue").format(
        recommendation=result.recommendation.value,
        prediction=result.prediction,
    )


def _point_schema() -> types.Schema:
    return types.Schema(
        type=types.Type.OBJECT,
        properties={
            "x": types.Schema(type=types.Type.NUMBER),
            "y": types.Schema(type=types.Type.NUMBER),
        },
        required=["x", "y"],
    )


ANALYSIS_RESPONSE_SCHEMA = types.Schema(
    type=types.Type.OBJECT,
    properties={
        "prediction": types.Schema(
            type=types.Type.STRING,
            description="A brief prediction of future price movement.",
        ),
        "recommendation": types.Schema(
            type=types.Type.STRING,
            enum=["BUY", "SELL", "HOLD"],
            description="The trading recommendation.",
        ),
        "confidence": types.Schema(
            type=types.Type.INTEGER,
            description="Confidence score from 0 to 100.",
        ),
        "rationale": types.Schema(
            type=types.Type.STRING,
            description="Detailed rationale for the recommendation.",
        ),
        "annotation": types.Schema(
            type=types.Type.OBJECT,
            description="Annotation for drawing the predicted trend on the chart image.",
            properties={
                "type": types.Schema(type=types.Type.STRING, enum=["arrow", "line"]),
                "start": _point_schema(),
                "end": _point_schema(),
            },
            required=["type", "start", "end"],
        ),
    },
    required=["prediction", "recommendation", "confidence", "rationale", "annotation"],
)
