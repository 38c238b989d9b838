"""Proposition I.6: if two angles of a triangle are equal, the opposite sides are equal.

Proved by reductio.  D is cut off on BA with BD = AC; D falls strictly
between A and B only while AB > AC, so C is kept at a fixed ratio and
angle from B around A during drags.
"""

from __future__ import annotations

import math
from typing import List, Mapping

from ..fact_store import FactStore, add_fact
from ..facts import PropCitation, ProofFact, angle_measure, distance_pair
from ..types import (
    ConstructionElement,
    ConstructionState,
    Coord,
    GivenAngleFact,
    MacroAction,
    PropositionDef,
    PropositionStep,
    ResultSegment,
    StraightedgeAction,
)
from .common import angle_between, as_coord, given_point, given_segment, position, rotation

DEFAULT_A: Coord = (0.0, 2.5)
DEFAULT_B: Coord = (-2.0, 0.0)
DEFAULT_C: Coord = (1.0, 0.0)

_AB = (DEFAULT_B[0] - DEFAULT_A[0], DEFAULT_B[1] - DEFAULT_A[1])
_AC = (DEFAULT_C[0] - DEFAULT_A[0], DEFAULT_C[1] - DEFAULT_A[1])

# |AC| / |AB| < 1 keeps AB the greater side.
AC_RATIO = math.hypot(*_AC) / math.hypot(*_AB)
ROTATION_ANGLE = angle_between(_AB, _AC)


def compute_prop6_given_elements(positions: Mapping[str, Coord]) -> List[ConstructionElement]:
    a = position(positions, "pt-A", DEFAULT_A)
    b = position(positions, "pt-B", DEFAULT_B)
    c = a + AC_RATIO * (rotation(ROTATION_ANGLE) @ (b - a))
    return [
        given_point("A", as_coord(a)),
        given_point("B", as_coord(b)),
        given_point("C", as_coord(c)),
        given_segment("A", "B"),
        given_segment("A", "C"),
        given_segment("B", "C"),
    ]


def derive_prop6_conclusion(store: FactStore, state: ConstructionState, at_step: int) -> List[ProofFact]:
    return list(
        add_fact(
            store,
            distance_pair("pt-A", "pt-B"),
            distance_pair("pt-A", "pt-C"),
            PropCitation(prop_id=4),
            "AB = AC",
            "Reductio: BD = AC (I.3), BC = BC, ∠DBC = ∠ACB (given) → △DBC ≅ △ACB (I.4). "
            "But D is between A and B, so △DBC ⊂ △ACB, contradicting C.N.5. Therefore AB = AC.",
            at_step,
        )
    )


PROP_6 = PropositionDef(
    id=6,
    title="If two angles of a triangle are equal, the sides opposite them are equal",
    kind="theorem",
    given_elements=tuple(compute_prop6_given_elements({})),
    given_angle_facts=(
        GivenAngleFact(
            left=angle_measure("pt-B", "pt-A", "pt-C"),
            right=angle_measure("pt-C", "pt-A", "pt-B"),
            statement="∠ABC = ∠ACB",
        ),
    ),
    steps=(
        PropositionStep(
            instruction="Cut off from BA a part equal to AC (I.3)",
            expected=MacroAction(
                prop_id=3,
                input_point_ids=("pt-B", "pt-A", "pt-A", "pt-C"),
                output_labels={"result": "D"},
            ),
            highlight_ids=("pt-B", "pt-A", "pt-C"),
            tool="macro",
            citation="I.3",
        ),
        PropositionStep(
            instruction="Join D to C",
            expected=StraightedgeAction(from_id="pt-D", to_id="pt-C"),
            highlight_ids=("pt-D", "pt-C"),
            tool="straightedge",
            citation="Post.1",
        ),
    ),
    result_segments=(
        ResultSegment(from_id="pt-A", to_id="pt-B"),
        ResultSegment(from_id="pt-A", to_id="pt-C"),
    ),
    draggable_point_ids=("pt-A", "pt-B"),
    compute_given_elements=compute_prop6_given_elements,
    derive_conclusion=derive_prop6_conclusion,
    theorem_conclusion="AB = AC",
)
