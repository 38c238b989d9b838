"""Proposition I.4 (SAS): two sides and the included angle fix the triangle.

Triangle DEF is the image of ABC under a rotation by ``THETA`` followed by
a translation to D, so the hypotheses hold exactly wherever A, B, C and D
are dragged.  The base EF is left for the user to draw.
"""

from __future__ import annotations

from typing import List, Mapping

from ..fact_store import FactStore, add_angle_fact, add_fact
from ..facts import CN4Citation, ProofFact, angle_measure, distance_pair
from ..types import (
    ConstructionElement,
    ConstructionState,
    Coord,
    GivenAngleFact,
    GivenFact,
    PropositionDef,
    PropositionStep,
    ResultSegment,
    StraightedgeAction,
)
from .common import as_coord, given_point, given_segment, position, rotation

DEFAULT_A: Coord = (-4.0, -0.5)
DEFAULT_B: Coord = (-6.2, -1.5)
DEFAULT_C: Coord = (-2.8, 1.8)
DEFAULT_D: Coord = (2.5, -0.5)
THETA = 0.4


def compute_prop4_given_elements(positions: Mapping[str, Coord]) -> List[ConstructionElement]:
    a = position(positions, "pt-A", DEFAULT_A)
    b = position(positions, "pt-B", DEFAULT_B)
    c = position(positions, "pt-C", DEFAULT_C)
    d = position(positions, "pt-D", DEFAULT_D)
    rot = rotation(THETA)
    e = d + rot @ (b - a)
    f = d + rot @ (c - a)
    return [
        given_point("A", as_coord(a)),
        given_point("B", as_coord(b)),
        given_point("C", as_coord(c)),
        given_segment("A", "B"),
        given_segment("A", "C"),
        given_segment("B", "C"),
        given_point("D", as_coord(d)),
        given_point("E", as_coord(e)),
        given_point("F", as_coord(f)),
        given_segment("D", "E"),
        given_segment("D", "F"),
    ]


def derive_prop4_conclusion(store: FactStore, state: ConstructionState, at_step: int) -> List[ProofFact]:
    new_facts: List[ProofFact] = []
    new_facts.extend(
        add_fact(
            store,
            distance_pair("pt-B", "pt-C"),
            distance_pair("pt-E", "pt-F"),
            CN4Citation(),
            "BC = EF",
            "C.N.4: Since AB = DE, AC = DF, and ∠BAC = ∠EDF, triangles coincide by superposition",
            at_step,
        )
    )
    new_facts.extend(
        add_angle_fact(
            store,
            angle_measure("pt-B", "pt-A", "pt-C"),
            angle_measure("pt-E", "pt-D", "pt-F"),
            CN4Citation(),
            "∠ABC = ∠DEF",
            "C.N.4: Remaining angles of congruent triangles coincide",
            at_step,
        )
    )
    new_facts.extend(
        add_angle_fact(
            store,
            angle_measure("pt-C", "pt-A", "pt-B"),
            angle_measure("pt-F", "pt-D", "pt-E"),
            CN4Citation(),
            "∠ACB = ∠DFE",
            "C.N.4: Remaining angles of congruent triangles coincide",
            at_step,
        )
    )
    return new_facts


PROP_4 = PropositionDef(
    id=4,
    title="If two triangles have two sides and the included angle equal, the triangles are congruent",
    kind="theorem",
    given_elements=tuple(compute_prop4_given_elements({})),
    given_facts=(
        GivenFact(left=distance_pair("pt-A", "pt-B"), right=distance_pair("pt-D", "pt-E"), statement="AB = DE"),
        GivenFact(left=distance_pair("pt-A", "pt-C"), right=distance_pair("pt-D", "pt-F"), statement="AC = DF"),
    ),
    given_angle_facts=(
        GivenAngleFact(
            left=angle_measure("pt-A", "pt-B", "pt-C"),
            right=angle_measure("pt-D", "pt-E", "pt-F"),
            statement="∠BAC = ∠EDF",
        ),
    ),
    steps=(
        PropositionStep(
            instruction="Join E to F",
            expected=StraightedgeAction(from_id="pt-E", to_id="pt-F"),
            highlight_ids=("pt-E", "pt-F"),
            tool="straightedge",
            citation="Post.1",
        ),
    ),
    result_segments=(
        ResultSegment(from_id="pt-B", to_id="pt-C"),
        ResultSegment(from_id="pt-E", to_id="pt-F"),
    ),
    draggable_point_ids=("pt-A", "pt-B", "pt-C", "pt-D"),
    compute_given_elements=compute_prop4_given_elements,
    derive_conclusion=derive_prop4_conclusion,
    theorem_conclusion="△ABC = △DEF; ∠ABC = ∠DEF, ∠ACB = ∠DFE",
)
