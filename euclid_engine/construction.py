"""Pure value transformations over :class:`ConstructionState`.

Every mutator returns a fresh state together with the element it created and
leaves its input untouched.  Lookups never raise; a miss is ``None``.
"""

from __future__ import annotations

import logging
import math
import re
from dataclasses import replace
from typing import List, Optional, Sequence, Tuple

from .config import get_engine_config
from .logging_utils import apply_debug_logging
from .types import (
    ConstructionCircle,
    ConstructionElement,
    ConstructionPoint,
    ConstructionSegment,
    ConstructionState,
    ElementOrigin,
)

logger = logging.getLogger(__name__)

LABELS = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"

_LABEL_RE = re.compile(r"^([A-Z])([0-9]*)$")


def label_at(index: int) -> str:
    """Return the auto label for ``index``: ``A``..``Z`` then ``A2``, ``B2``, ..."""

    if index < len(LABELS):
        return LABELS[index]
    cycle = index // len(LABELS) + 1
    return f"{LABELS[index % len(LABELS)]}{cycle}"


def label_index(label: str) -> Optional[int]:
    """Inverse of :func:`label_at`; ``None`` for labels it never produces."""

    match = _LABEL_RE.match(label)
    if not match:
        return None
    letter, suffix = match.groups()
    base = LABELS.index(letter)
    if not suffix:
        return base
    cycle = int(suffix)
    if cycle < 2:
        return None
    return (cycle - 1) * len(LABELS) + base


def _advance_label(current: int, explicit_label: Optional[str]) -> int:
    if explicit_label is None:
        return current + 1
    idx = label_index(explicit_label)
    if idx is None:
        return current
    return max(current, idx + 1)


def create_initial_state() -> ConstructionState:
    return ConstructionState()


def initialize_given(given_elements: Sequence[ConstructionElement]) -> ConstructionState:
    """Seed a state with authored given elements."""

    next_label = 0
    for el in given_elements:
        if isinstance(el, ConstructionPoint):
            idx = label_index(el.label)
            if idx is not None:
                next_label = max(next_label, idx + 1)
    return ConstructionState(
        elements=tuple(given_elements),
        next_label_index=next_label,
        next_color_index=0,
    )


def add_point(
    state: ConstructionState,
    x: float,
    y: float,
    origin: ElementOrigin,
    explicit_label: Optional[str] = None,
) -> Tuple[ConstructionState, ConstructionPoint]:
    config = get_engine_config()
    label = explicit_label if explicit_label is not None else label_at(state.next_label_index)
    if origin == "given":
        color = config.given_color
    elif origin == "free":
        color = config.free_color
    else:
        color = config.palette[state.next_color_index % len(config.palette)]
    point = ConstructionPoint(
        id=f"pt-{label}",
        x=float(x),
        y=float(y),
        label=label,
        color=color,
        origin=origin,
    )
    consumes_color = origin not in ("given", "free")
    new_state = ConstructionState(
        elements=state.elements + (point,),
        next_label_index=_advance_label(state.next_label_index, explicit_label),
        next_color_index=state.next_color_index + (1 if consumes_color else 0),
    )
    return new_state, point


def _count_kind(state: ConstructionState, kind: str) -> int:
    return sum(1 for el in state.elements if el.kind == kind)


def add_circle(
    state: ConstructionState, center_id: str, radius_point_id: str
) -> Tuple[ConstructionState, ConstructionCircle]:
    palette = get_engine_config().palette
    circle = ConstructionCircle(
        id=f"cir-{_count_kind(state, 'circle') + 1}",
        center_id=center_id,
        radius_point_id=radius_point_id,
        color=palette[state.next_color_index % len(palette)],
        origin="compass",
    )
    new_state = replace(
        state,
        elements=state.elements + (circle,),
        next_color_index=state.next_color_index + 1,
    )
    return new_state, circle


def add_segment(
    state: ConstructionState, from_id: str, to_id: str
) -> Tuple[ConstructionState, ConstructionSegment]:
    palette = get_engine_config().palette
    segment = ConstructionSegment(
        id=f"seg-{_count_kind(state, 'segment') + 1}",
        from_id=from_id,
        to_id=to_id,
        color=palette[state.next_color_index % len(palette)],
        origin="straightedge",
    )
    new_state = replace(
        state,
        elements=state.elements + (segment,),
        next_color_index=state.next_color_index + 1,
    )
    return new_state, segment


def skip_point_label(state: ConstructionState, explicit_label: Optional[str] = None) -> ConstructionState:
    """Advance the label and color counters as if a point had been added.

    Replay calls this when an expected intersection no longer exists so that
    later auto labels come out identical to a successful run.
    """

    return replace(
        state,
        next_label_index=_advance_label(state.next_label_index, explicit_label),
        next_color_index=state.next_color_index + 1,
    )


# ── Lookups ────────────────────────────────────────────────────────────


def get_element(state: ConstructionState, element_id: str) -> Optional[ConstructionElement]:
    for el in state.elements:
        if el.id == element_id:
            return el
    return None


def get_point(state: ConstructionState, point_id: str) -> Optional[ConstructionPoint]:
    for el in state.elements:
        if isinstance(el, ConstructionPoint) and el.id == point_id:
            return el
    return None


def get_circle(state: ConstructionState, circle_id: str) -> Optional[ConstructionCircle]:
    for el in state.elements:
        if isinstance(el, ConstructionCircle) and el.id == circle_id:
            return el
    return None


def get_segment(state: ConstructionState, segment_id: str) -> Optional[ConstructionSegment]:
    for el in state.elements:
        if isinstance(el, ConstructionSegment) and el.id == segment_id:
            return el
    return None


def get_radius(state: ConstructionState, circle_id: str) -> float:
    circle = get_circle(state, circle_id)
    if circle is None:
        return 0.0
    center = get_point(state, circle.center_id)
    through = get_point(state, circle.radius_point_id)
    if center is None or through is None:
        return 0.0
    return math.hypot(through.x - center.x, through.y - center.y)


def get_all_points(state: ConstructionState) -> List[ConstructionPoint]:
    return [el for el in state.elements if isinstance(el, ConstructionPoint)]


def get_all_circles(state: ConstructionState) -> List[ConstructionCircle]:
    return [el for el in state.elements if isinstance(el, ConstructionCircle)]


def get_all_segments(state: ConstructionState) -> List[ConstructionSegment]:
    return [el for el in state.elements if isinstance(el, ConstructionSegment)]


def distance_between(state: ConstructionState, a_id: str, b_id: str) -> Optional[float]:
    a = get_point(state, a_id)
    b = get_point(state, b_id)
    if a is None or b is None:
        return None
    return math.hypot(b.x - a.x, b.y - a.y)


apply_debug_logging(
    globals(),
    logger=logger,
    skip={
        "label_at",
        "label_index",
        "get_element",
        "get_point",
        "get_circle",
        "get_segment",
        "get_radius",
        "get_all_points",
        "get_all_circles",
        "get_all_segments",
        "distance_between",
    },
)
