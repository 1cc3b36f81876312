"""Task → model selection. Text model for analysis, image model for continuations."""

from __future__ import annotations

from tradescope.config import Settings, settings as default_settings

_TASK_MODEL_MAP = {
    "analyze": "analysis",
    "continue": "image",
}


def get_model_for_task(task: str, settings: Settings | None = None) -> str:
    cfg = settings or default_settings
    kind = _TASK_MODEL_MAP.get(task, "analysis")
    if kind == "image":
        return cfg.model_image
    return cfg.model_analysis
