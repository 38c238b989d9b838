"""Selector resolution and the candidate-picking policy.

Intersection steps name their parent elements structurally ("the circle
centered at B through C") because element ids depend on construction order.
This module turns those descriptors into ids and picks which candidate an
intersection step means.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from .config import get_engine_config
from .construction import get_element
from .intersections import TOLERANCE, is_candidate_beyond_point
from .types import (
    CircleSelector,
    ConstructionCircle,
    ConstructionSegment,
    ConstructionState,
    ElementSelector,
    IntersectionAction,
    IntersectionCandidate,
    SegmentSelector,
)

logger = logging.getLogger(__name__)


def resolve_selector(selector: ElementSelector, state: ConstructionState) -> Optional[str]:
    """Return the id of the element ``selector`` describes, or ``None``."""

    if isinstance(selector, str):
        return selector if get_element(state, selector) is not None else None
    if isinstance(selector, CircleSelector):
        for el in state.elements:
            if (
                isinstance(el, ConstructionCircle)
                and el.center_id == selector.center_id
                and el.radius_point_id == selector.radius_point_id
            ):
                return el.id
        return None
    if isinstance(selector, SegmentSelector):
        wanted = {selector.from_id, selector.to_id}
        for el in state.elements:
            if isinstance(el, ConstructionSegment) and {el.from_id, el.to_id} == wanted:
                return el.id
        return None
    raise TypeError(f"unknown selector {selector!r}")


def select_default_candidate(
    candidates: Sequence[IntersectionCandidate],
) -> Optional[IntersectionCandidate]:
    """Highest-Y policy used whenever a step does not say which root it means.

    The layout of every authored proposition puts newly constructed points
    above their baseline, so the root with the greatest ``y`` is the intended
    one.  Ties keep the earliest candidate.  When the two best roots are
    level the policy cannot discriminate and a warning is logged.
    """

    if not candidates:
        return None
    best = candidates[0]
    for cand in candidates[1:]:
        if cand.y > best.y:
            best = cand
    if len(candidates) > 1 and get_engine_config().warn_on_ambiguous_pick:
        rivals = [c for c in candidates if c is not best and abs(c.y - best.y) < TOLERANCE]
        if any(abs(c.x - best.x) >= TOLERANCE for c in rivals):
            logger.warning(
                "Highest-Y pick is ambiguous: (%.4f, %.4f) vs %d level candidate(s)",
                best.x,
                best.y,
                len(rivals),
            )
    return best


def _joins(cand: IntersectionCandidate, id_a: str, id_b: str) -> bool:
    return (cand.of_a == id_a and cand.of_b == id_b) or (cand.of_a == id_b and cand.of_b == id_a)


def find_matching_candidate(
    expected: IntersectionAction,
    candidates: Sequence[IntersectionCandidate],
    state: ConstructionState,
) -> Optional[IntersectionCandidate]:
    """Pick the candidate an intersection step refers to, or ``None``.

    With both selectors resolved the candidates of that pair are filtered by
    ``beyond_id`` when present and by :func:`select_default_candidate`
    otherwise.  A step with no selectors at all takes the default pick over
    every candidate.  A step whose selectors do not resolve matches nothing.
    """

    if expected.of_a is None and expected.of_b is None:
        return select_default_candidate(candidates)

    resolved_a = resolve_selector(expected.of_a, state) if expected.of_a is not None else None
    resolved_b = resolve_selector(expected.of_b, state) if expected.of_b is not None else None
    if resolved_a is None or resolved_b is None:
        return None

    pair = [c for c in candidates if _joins(c, resolved_a, resolved_b)]
    if expected.beyond_id:
        for cand in pair:
            if is_candidate_beyond_point(cand, expected.beyond_id, cand.of_a, cand.of_b, state):
                return cand
        return None
    return select_default_candidate(pair)


def without_coincident(
    candidates: Sequence[IntersectionCandidate], picked: IntersectionCandidate
) -> List[IntersectionCandidate]:
    """Drop every candidate sitting on ``picked`` once it became a point."""

    return [
        c
        for c in candidates
        if not (abs(c.x - picked.x) < TOLERANCE and abs(c.y - picked.y) < TOLERANCE)
    ]
