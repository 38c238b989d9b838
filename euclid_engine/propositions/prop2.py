"""Proposition I.2: to place at a given point a straight line equal to a given straight line.

Construction (I.1 used as a macro)::

    1. join A to B                              Post.1
    2. equilateral triangle ABD on AB           I.1
    3. circle at B through C                    Post.3
    4. E where that circle meets DB past B      Def.15
    5. circle at D through E                    Post.3
    6. F where that circle meets DA past A      Def.15

Then AF = BE by subtraction and AF = BC by transitivity.
"""

from __future__ import annotations

from typing import List, Mapping

from ..fact_store import FactStore, add_fact
from ..facts import CN1Citation, CN3Citation, ProofFact, distance_pair
from ..types import (
    CircleSelector,
    CompassAction,
    ConstructionElement,
    ConstructionState,
    Coord,
    IntersectionAction,
    MacroAction,
    PropositionDef,
    PropositionStep,
    ResultSegment,
    SegmentSelector,
    StraightedgeAction,
)
from .common import given_point, given_segment

DEFAULT_A: Coord = (-1.5, 1.5)
DEFAULT_B: Coord = (0.0, 0.0)
DEFAULT_C: Coord = (1.5, 0.0)


def compute_prop2_given_elements(positions: Mapping[str, Coord]) -> List[ConstructionElement]:
    return [
        given_point("A", positions.get("pt-A", DEFAULT_A)),
        given_point("B", positions.get("pt-B", DEFAULT_B)),
        given_point("C", positions.get("pt-C", DEFAULT_C)),
        given_segment("B", "C"),
    ]


def derive_prop2_conclusion(store: FactStore, state: ConstructionState, at_step: int) -> List[ProofFact]:
    dp_af = distance_pair("pt-A", "pt-F")
    dp_be = distance_pair("pt-B", "pt-E")
    new_facts: List[ProofFact] = []
    new_facts.extend(
        add_fact(
            store,
            dp_af,
            dp_be,
            CN3Citation(whole=distance_pair("pt-D", "pt-F"), part=distance_pair("pt-D", "pt-A")),
            "AF = BE",
            "C.N.3: DF − DA = DE − DB (since DA = DB)",
            at_step,
        )
    )
    # Usually entailed by now (BE = BC from the circle at B); the store skips it then.
    new_facts.extend(
        add_fact(
            store,
            dp_af,
            distance_pair("pt-B", "pt-C"),
            CN1Citation(via=dp_be),
            "AF = BC",
            "C.N.1: AF = BE and BE = BC",
            at_step,
        )
    )
    return new_facts


PROP_2 = PropositionDef(
    id=2,
    title="Place a line equal to a given line at a given point",
    given_elements=tuple(compute_prop2_given_elements({})),
    steps=(
        PropositionStep(
            instruction="Join point A to point B",
            expected=StraightedgeAction(from_id="pt-A", to_id="pt-B"),
            highlight_ids=("pt-A", "pt-B"),
            tool="straightedge",
            citation="Post.1",
        ),
        PropositionStep(
            instruction="Construct equilateral triangle on AB (I.1)",
            expected=MacroAction(prop_id=1, input_point_ids=("pt-A", "pt-B"), output_labels={"apex": "D"}),
            highlight_ids=("pt-A", "pt-B"),
            tool="macro",
            citation="I.1",
        ),
        PropositionStep(
            instruction="Draw a circle centered at B through C",
            expected=CompassAction(center_id="pt-B", radius_point_id="pt-C"),
            highlight_ids=("pt-B", "pt-C"),
            tool="compass",
            citation="Post.3",
        ),
        PropositionStep(
            instruction="Mark where the circle crosses line DB, past B",
            expected=IntersectionAction(
                of_a=CircleSelector(center_id="pt-B", radius_point_id="pt-C"),
                of_b=SegmentSelector(from_id="pt-D", to_id="pt-B"),
                beyond_id="pt-B",
                label="E",
            ),
            citation="Def.15",
        ),
        PropositionStep(
            instruction="Draw a circle centered at D through E",
            expected=CompassAction(center_id="pt-D", radius_point_id="pt-E"),
            highlight_ids=("pt-D", "pt-E"),
            tool="compass",
            citation="Post.3",
        ),
        PropositionStep(
            instruction="Mark where the circle crosses line DA, past A",
            expected=IntersectionAction(
                of_a=CircleSelector(center_id="pt-D", radius_point_id="pt-E"),
                of_b=SegmentSelector(from_id="pt-D", to_id="pt-A"),
                beyond_id="pt-A",
                label="F",
            ),
            citation="Def.15",
        ),
    ),
    result_segments=(ResultSegment(from_id="pt-A", to_id="pt-F"),),
    draggable_point_ids=("pt-A", "pt-B", "pt-C"),
    compute_given_elements=compute_prop2_given_elements,
    derive_conclusion=derive_prop2_conclusion,
)
