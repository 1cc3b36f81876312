"""Zoom/pan state for the chart viewer.

Screen space is pixels relative to the viewer container's top-left corner.
Image space is pixels of the untransformed image box, which sits at the
container origin. The two are related by

    screen = image * scale + offset

which is what the CSS `scale(s) translate(ox/s px, oy/s px)` with
`transform-origin: 0 0` produces. Annotation percentages live inside the
image box, so they go through the same mapping and stay locked to the chart.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from tradescope.config import Settings
from tradescope.models.analysis import Annotation
from tradescope.utils.geometry import (
    apply_affine,
    clamp,
    invert_affine,
    percent_to_box,
    scale_translate_matrix,
)

logger = logging.getLogger(__name__)

MIN_SCALE = 1.0
MAX_SCALE = 8.0
ZOOM_SENSITIVITY = 0.002
BASE_STROKE_WIDTH = 0.8


@dataclass
class ViewportState:
    scale: float = MIN_SCALE
    offset_x: float = 0.0
    offset_y: float = 0.0
    dragging: bool = False
    # Pointer position minus offset, captured on pointer-down
    anchor_x: float = 0.0
    anchor_y: float = 0.0

    @property
    def offset(self) -> tuple[float, float]:
        return (self.offset_x, self.offset_y)


class Viewport:
    """Wheel/pointer state machine over ViewportState."""

    def __init__(
        self,
        min_scale: float = MIN_SCALE,
        max_scale: float = MAX_SCALE,
        sensitivity: float = ZOOM_SENSITIVITY,
        base_stroke_width: float = BASE_STROKE_WIDTH,
    ) -> None:
        if min_scale <= 0 or max_scale < min_scale:
            raise ValueError(f"Invalid scale bounds [{min_scale}, {max_scale}]")
        self.min_scale = min_scale
        self.max_scale = max_scale
        self.sensitivity = sensitivity
        self.base_stroke_width = base_stroke_width
        self.state = ViewportState(scale=min_scale)

    @classmethod
    def from_settings(cls, settings: Settings) -> Viewport:
        return cls(
            min_scale=settings.viewport_min_scale,
            max_scale=settings.viewport_max_scale,
            sensitivity=settings.zoom_sensitivity,
            base_stroke_width=settings.overlay_stroke_width,
        )

    # -- input events -------------------------------------------------------

    def wheel(self, pointer_x: float, pointer_y: float, delta_y: float) -> bool:
        """Zoom about the pointer. Returns False when the clamped scale is unchanged."""
        s = self.state
        new_scale = clamp(s.scale * (1 + (-delta_y * self.sensitivity)), self.min_scale, self.max_scale)
        if new_scale == s.scale:
            return False

        # Image point under the pointer must stay under the pointer
        image_x, image_y = self.screen_to_image(pointer_x, pointer_y)
        s.offset_x = pointer_x - image_x * new_scale
        s.offset_y = pointer_y - image_y * new_scale
        s.scale = new_scale
        logger.debug("Zoom to %.3f about (%.1f, %.1f)", new_scale, pointer_x, pointer_y)
        return True

    def pointer_down(self, pointer_x: float, pointer_y: float) -> bool:
        """Start dragging. Ignored at rest scale."""
        s = self.state
        if s.scale <= self.min_scale:
            return False
        s.dragging = True
        s.anchor_x = pointer_x - s.offset_x
        s.anchor_y = pointer_y - s.offset_y
        return True

    def pointer_move(self, pointer_x: float, pointer_y: float) -> bool:
        s = self.state
        if not s.dragging:
            return False
        s.offset_x = pointer_x - s.anchor_x
        s.offset_y = pointer_y - s.anchor_y
        return True

    def pointer_up(self) -> None:
        self.state.dragging = False

    pointer_leave = pointer_up

    def reset(self) -> None:
        self.state = ViewportState(scale=self.min_scale)

    # -- mappings -----------------------------------------------------------

    @property
    def matrix(self) -> NDArray[np.float64]:
        """Image → screen affine matrix."""
        s = self.state
        return scale_translate_matrix(s.scale, s.offset_x, s.offset_y)

    def screen_to_image(self, x: float, y: float) -> tuple[float, float]:
        point = apply_affine(invert_affine(self.matrix), np.array([[x, y]]))[0]
        return (float(point[0]), float(point[1]))

    def image_to_screen(self, x: float, y: float) -> tuple[float, float]:
        point = apply_affine(self.matrix, np.array([[x, y]]))[0]
        return (float(point[0]), float(point[1]))

    def annotation_to_screen(
        self,
        annotation: Annotation,
        box_w: float,
        box_h: float,
    ) -> tuple[tuple[float, float], tuple[float, float]]:
        """Screen positions of the annotation endpoints for an image box of box_w x box_h."""
        pct = np.array(
            [
                [annotation.start.x, annotation.start.y],
                [annotation.end.x, annotation.end.y],
            ],
            dtype=np.float64,
        )
        screen = apply_affine(self.matrix, percent_to_box(pct, box_w, box_h))
        start, end = screen
        return (float(start[0]), float(start[1])), (float(end[0]), float(end[1]))

    @property
    def css_transform(self) -> str:
        s = self.state
        return f"scale({s.scale}) translate({s.offset_x / s.scale}px, {s.offset_y / s.scale}px)"

    @property
    def stroke_width(self) -> float:
        """Overlay stroke in viewBox units; constant on screen at any zoom."""
        return self.base_stroke_width / self.state.scale

    @property
    def cursor(self) -> str:
        if self.state.scale <= self.min_scale:
            return "default"
        return "grabbing" if self.state.dragging else "grab"
