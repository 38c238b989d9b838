"""Fact derivation rules applied when a candidate becomes a point."""

from __future__ import annotations

import logging
from typing import List

from .construction import get_circle, get_point
from .fact_store import FactStore, add_fact
from .facts import Def15Citation, EqualityFact, distance_pair
from .logging_utils import apply_debug_logging
from .types import ConstructionState, IntersectionCandidate

logger = logging.getLogger(__name__)


def _label(state: ConstructionState, point_id: str) -> str:
    point = get_point(state, point_id)
    return point.label if point is not None else point_id


def derive_def15_facts(
    candidate: IntersectionCandidate,
    new_point_id: str,
    state: ConstructionState,
    store: FactStore,
    at_step: int,
) -> List[EqualityFact]:
    """Definition 15: a point on a circle is as far from the center as the rim point.

    Applied to each parent of ``candidate`` that is a circle.
    """

    new_facts: List[EqualityFact] = []
    for parent_id in (candidate.of_a, candidate.of_b):
        circle = get_circle(state, parent_id)
        if circle is None:
            continue
        center = _label(state, circle.center_id)
        rim = _label(state, circle.radius_point_id)
        point = _label(state, new_point_id)
        new_facts.extend(
            add_fact(
                store,
                distance_pair(circle.center_id, new_point_id),
                distance_pair(circle.center_id, circle.radius_point_id),
                Def15Citation(circle_id=circle.id),
                f"{center}{point} = {center}{rim}",
                f"Def.15: {point} lies on circle centered at {center} through {rim}",
                at_step,
            )
        )
    return new_facts


apply_debug_logging(globals(), logger=logger)
