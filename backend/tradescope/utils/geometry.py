"""Leaf-node affine helpers for the viewer. No viewer imports."""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray


def clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, value))


def scale_translate_matrix(scale: float, tx: float, ty: float) -> NDArray[np.float64]:
    """3x3 homogeneous matrix for p' = p * scale + (tx, ty)."""
    return np.array(
        [
            [scale, 0.0, tx],
            [0.0, scale, ty],
            [0.0, 0.0, 1.0],
        ],
        dtype=np.float64,
    )


def apply_affine(matrix: NDArray[np.float64], points: NDArray[np.float64]) -> NDArray[np.float64]:
    """Apply a 3x3 affine matrix to an Nx2 array of points."""
    pts = np.atleast_2d(np.asarray(points, dtype=np.float64))
    homogeneous = np.hstack([pts, np.ones((len(pts), 1))])
    return (homogeneous @ matrix.T)[:, :2]


def invert_affine(matrix: NDArray[np.float64]) -> NDArray[np.float64]:
    return np.linalg.inv(matrix)


def percent_to_box(
    points: NDArray[np.float64],
    box_w: float,
    box_h: float,
) -> NDArray[np.float64]:
    """Map 0-100 percentages to pixels of a box anchored at the origin."""
    pts = np.atleast_2d(np.asarray(points, dtype=np.float64))
    return pts * np.array([box_w / 100.0, box_h / 100.0])
