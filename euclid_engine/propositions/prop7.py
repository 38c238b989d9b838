"""Proposition I.7: on the same line and side, two pairs of equal lines from its ends cannot meet at two points.

All four points drag freely; AC = AD and BC = BD are stipulated as given
facts rather than enforced by the layout.
"""

from __future__ import annotations

import math
from typing import List, Mapping

from ..construction import get_point
from ..fact_store import FactStore, add_angle_fact
from ..facts import PropCitation, ProofFact, angle_measure, distance_pair
from ..types import (
    ConstructionElement,
    ConstructionPoint,
    ConstructionState,
    Coord,
    GivenFact,
    PropositionDef,
    PropositionStep,
    StraightedgeAction,
)
from .common import given_point, given_segment

DEFAULT_A: Coord = (-1.5, 0.0)
DEFAULT_B: Coord = (1.5, 0.0)
DEFAULT_C: Coord = (0.0, 2.5)
DEFAULT_D: Coord = (1.0, 2.3)


def compute_prop7_given_elements(positions: Mapping[str, Coord]) -> List[ConstructionElement]:
    return [
        given_point("A", positions.get("pt-A", DEFAULT_A)),
        given_point("B", positions.get("pt-B", DEFAULT_B)),
        given_point("C", positions.get("pt-C", DEFAULT_C)),
        given_point("D", positions.get("pt-D", DEFAULT_D)),
        given_segment("A", "B"),
        given_segment("A", "C"),
        given_segment("A", "D"),
        given_segment("B", "C"),
        given_segment("B", "D"),
    ]


def derive_prop7_conclusion(store: FactStore, state: ConstructionState, at_step: int) -> List[ProofFact]:
    new_facts: List[ProofFact] = []
    new_facts.extend(
        add_angle_fact(
            store,
            angle_measure("pt-C", "pt-A", "pt-D"),
            angle_measure("pt-D", "pt-A", "pt-C"),
            PropCitation(prop_id=5),
            "∠ACD = ∠ADC",
            "I.5: Triangle ACD is isosceles (AC = AD)",
            at_step,
        )
    )
    new_facts.extend(
        add_angle_fact(
            store,
            angle_measure("pt-C", "pt-B", "pt-D"),
            angle_measure("pt-D", "pt-B", "pt-C"),
            PropCitation(prop_id=5),
            "∠BCD = ∠BDC",
            "I.5: Triangle BCD is isosceles (BC = BD)",
            at_step,
        )
    )
    return new_facts


def _unsigned_angle(vertex: ConstructionPoint, p: ConstructionPoint, q: ConstructionPoint) -> float:
    diff = math.atan2(q.y - vertex.y, q.x - vertex.x) - math.atan2(p.y - vertex.y, p.x - vertex.x)
    diff = abs(diff) % (2 * math.pi)
    return 2 * math.pi - diff if diff > math.pi else diff


def prop7_contradiction(state: ConstructionState) -> str:
    """Narrate the C.N.5 contradiction in the direction the current layout demands.

    With D inside triangle ACB the chain runs through ∠BDC, otherwise
    through ∠ADC.
    """

    pts = [get_point(state, pid) for pid in ("pt-A", "pt-B", "pt-C", "pt-D")]
    if any(p is None for p in pts):
        return "C and D cannot be distinct (C.N.5: ∠BDC > ∠ADC = ∠ACD > ∠BCD = ∠BDC)"
    a, b, c, d = pts
    if _unsigned_angle(c, a, d) > _unsigned_angle(c, b, d):
        return "C and D cannot be distinct (C.N.5: ∠BDC > ∠ADC = ∠ACD > ∠BCD = ∠BDC)"
    return "C and D cannot be distinct (C.N.5: ∠ADC > ∠BDC = ∠BCD > ∠ACD = ∠ADC)"


PROP_7 = PropositionDef(
    id=7,
    title=(
        "Given two lines from the ends of a line meeting at a point, "
        "no two other equal lines can be constructed on the same side"
    ),
    kind="theorem",
    given_elements=tuple(compute_prop7_given_elements({})),
    given_facts=(
        GivenFact(left=distance_pair("pt-A", "pt-C"), right=distance_pair("pt-A", "pt-D"), statement="AC = AD"),
        GivenFact(left=distance_pair("pt-B", "pt-C"), right=distance_pair("pt-B", "pt-D"), statement="BC = BD"),
    ),
    steps=(
        PropositionStep(
            instruction="Join C to D",
            expected=StraightedgeAction(from_id="pt-C", to_id="pt-D"),
            highlight_ids=("pt-C", "pt-D"),
            tool="straightedge",
            citation="Post.1",
        ),
    ),
    draggable_point_ids=("pt-A", "pt-B", "pt-C", "pt-D"),
    compute_given_elements=compute_prop7_given_elements,
    derive_conclusion=derive_prop7_conclusion,
    theorem_conclusion=prop7_contradiction,
)
