"""API request models."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field


class WheelRequest(BaseModel):
    x: float = Field(..., description="Pointer x relative to the viewer container")
    y: float = Field(..., description="Pointer y relative to the viewer container")
    delta_y: float = Field(..., description="Wheel deltaY; negative zooms in")


class PointerRequest(BaseModel):
    x: float = Field(..., description="Pointer x relative to the viewer container")
    y: float = Field(..., description="Pointer y relative to the viewer container")


class ViewRequest(BaseModel):
    image: Literal["original", "generated"] = Field(..., description="Which chart the viewer shows")
