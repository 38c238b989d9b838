"""Builders shared by the authored propositions."""

from __future__ import annotations

import math
from typing import Mapping, Tuple

import numpy as np

from ..types import BYRNE_GIVEN, ConstructionPoint, ConstructionSegment, Coord


def given_point(label: str, xy: Coord) -> ConstructionPoint:
    return ConstructionPoint(
        id=f"pt-{label}",
        x=float(xy[0]),
        y=float(xy[1]),
        label=label,
        color=BYRNE_GIVEN,
        origin="given",
    )


def given_segment(from_label: str, to_label: str) -> ConstructionSegment:
    return ConstructionSegment(
        id=f"seg-{from_label}{to_label}",
        from_id=f"pt-{from_label}",
        to_id=f"pt-{to_label}",
        color=BYRNE_GIVEN,
        origin="given",
    )


def position(positions: Mapping[str, Coord], point_id: str, default: Coord) -> np.ndarray:
    return np.array(positions.get(point_id, default), dtype=float)


def rotation(angle: float) -> np.ndarray:
    cos_t, sin_t = math.cos(angle), math.sin(angle)
    return np.array([[cos_t, -sin_t], [sin_t, cos_t]], dtype=float)


def angle_between(u: Coord, v: Coord) -> float:
    """Signed angle turning ``u`` onto ``v``."""

    cross = u[0] * v[1] - u[1] * v[0]
    dot = u[0] * v[0] + u[1] * v[1]
    return math.atan2(cross, dot)


def as_coord(vec: np.ndarray) -> Tuple[float, float]:
    return (float(vec[0]), float(vec[1]))
