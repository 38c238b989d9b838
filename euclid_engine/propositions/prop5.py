"""Proposition I.5 (pons asinorum): the base angles of an isosceles triangle are equal."""

from __future__ import annotations

from typing import List, Mapping

from ..fact_store import FactStore, add_fact
from ..facts import CN3Citation, PropCitation, ProofFact, distance_pair
from ..types import (
    CircleSelector,
    CompassAction,
    ConstructionElement,
    ConstructionState,
    Coord,
    GivenFact,
    IntersectionAction,
    MacroAction,
    PropositionDef,
    PropositionStep,
    SegmentSelector,
    StraightedgeAction,
)
from .common import angle_between, as_coord, given_point, given_segment, position, rotation

DEFAULT_A: Coord = (0.0, 2.0)
DEFAULT_B: Coord = (-2.0, -1.0)
DEFAULT_C: Coord = (2.0, -1.0)

# Turns AB onto AC; C is always the image of B so AB = AC survives dragging.
ROTATION_ANGLE = angle_between(
    (DEFAULT_B[0] - DEFAULT_A[0], DEFAULT_B[1] - DEFAULT_A[1]),
    (DEFAULT_C[0] - DEFAULT_A[0], DEFAULT_C[1] - DEFAULT_A[1]),
)


def compute_prop5_given_elements(positions: Mapping[str, Coord]) -> List[ConstructionElement]:
    a = position(positions, "pt-A", DEFAULT_A)
    b = position(positions, "pt-B", DEFAULT_B)
    c = a + rotation(ROTATION_ANGLE) @ (b - a)
    return [
        given_point("A", as_coord(a)),
        given_point("B", as_coord(b)),
        given_point("C", as_coord(c)),
        given_segment("A", "B"),
        given_segment("A", "C"),
        given_segment("B", "C"),
    ]


def derive_prop5_conclusion(store: FactStore, state: ConstructionState, at_step: int) -> List[ProofFact]:
    new_facts: List[ProofFact] = []
    new_facts.extend(
        add_fact(
            store,
            distance_pair("pt-C", "pt-G"),
            distance_pair("pt-B", "pt-F"),
            CN3Citation(whole=distance_pair("pt-A", "pt-G"), part=distance_pair("pt-A", "pt-C")),
            "CG = BF",
            "C.N.3: AG − AC = AF − AB (since AG = AF, AB = AC)",
            at_step,
        )
    )
    new_facts.extend(
        add_fact(
            store,
            distance_pair("pt-F", "pt-C"),
            distance_pair("pt-G", "pt-B"),
            PropCitation(prop_id=4),
            "FC = GB",
            "I.4: △AFC ≅ △AGB (AF = AG, AC = AB, ∠FAC = ∠GAB)",
            at_step,
        )
    )
    return new_facts


PROP_5 = PropositionDef(
    id=5,
    title="In isosceles triangles the base angles are equal",
    kind="theorem",
    given_elements=tuple(compute_prop5_given_elements({})),
    given_facts=(
        GivenFact(left=distance_pair("pt-A", "pt-B"), right=distance_pair("pt-A", "pt-C"), statement="AB = AC"),
    ),
    steps=(
        PropositionStep(
            instruction="Draw a circle centered at B through C",
            expected=CompassAction(center_id="pt-B", radius_point_id="pt-C"),
            highlight_ids=("pt-B", "pt-C"),
            tool="compass",
            citation="Post.3",
        ),
        PropositionStep(
            instruction="Mark where the circle crosses line AB past B",
            expected=IntersectionAction(
                of_a=CircleSelector(center_id="pt-B", radius_point_id="pt-C"),
                of_b=SegmentSelector(from_id="pt-A", to_id="pt-B"),
                beyond_id="pt-B",
                label="F",
            ),
            citation="Def.15",
        ),
        PropositionStep(
            instruction="From AC, cut off a length equal to AF (I.3)",
            expected=MacroAction(
                prop_id=3,
                input_point_ids=("pt-A", "pt-C", "pt-A", "pt-F"),
                output_labels={"result": "G"},
            ),
            highlight_ids=("pt-A", "pt-C", "pt-F"),
            tool="macro",
            citation="I.3",
        ),
        PropositionStep(
            instruction="Join F to C",
            expected=StraightedgeAction(from_id="pt-F", to_id="pt-C"),
            highlight_ids=("pt-F", "pt-C"),
            tool="straightedge",
            citation="Post.1",
        ),
        PropositionStep(
            instruction="Join G to B",
            expected=StraightedgeAction(from_id="pt-G", to_id="pt-B"),
            highlight_ids=("pt-G", "pt-B"),
            tool="straightedge",
            citation="Post.1",
        ),
    ),
    draggable_point_ids=("pt-A", "pt-B"),
    compute_given_elements=compute_prop5_given_elements,
    derive_conclusion=derive_prop5_conclusion,
    theorem_conclusion="∠ABC = ∠ACB; ∠FBC = ∠GCB",
)
