"""Proposition I.1: on a given finite straight line to construct an equilateral triangle."""

from __future__ import annotations

from typing import List, Mapping

from ..fact_store import FactStore, add_fact
from ..facts import CN1Citation, ProofFact, distance_pair
from ..types import (
    CircleSelector,
    CompassAction,
    ConstructionElement,
    ConstructionState,
    Coord,
    IntersectionAction,
    PropositionDef,
    PropositionStep,
    ResultSegment,
    StraightedgeAction,
)
from .common import given_point, given_segment

DEFAULT_A: Coord = (-1.0, 0.0)
DEFAULT_B: Coord = (1.0, 0.0)


def compute_prop1_given_elements(positions: Mapping[str, Coord]) -> List[ConstructionElement]:
    return [
        given_point("A", positions.get("pt-A", DEFAULT_A)),
        given_point("B", positions.get("pt-B", DEFAULT_B)),
        given_segment("A", "B"),
    ]


def derive_prop1_conclusion(store: FactStore, state: ConstructionState, at_step: int) -> List[ProofFact]:
    # CA = AB and CB = BA come from the two circles; the sides meet through AB.
    return list(
        add_fact(
            store,
            distance_pair("pt-C", "pt-A"),
            distance_pair("pt-C", "pt-B"),
            CN1Citation(via=distance_pair("pt-A", "pt-B")),
            "CA = CB",
            "C.N.1: CA = AB and CB = AB",
            at_step,
        )
    )


PROP_1 = PropositionDef(
    id=1,
    title="Construct an equilateral triangle on a given finite line",
    given_elements=tuple(compute_prop1_given_elements({})),
    steps=(
        PropositionStep(
            instruction="Draw a circle centered at A through B",
            expected=CompassAction(center_id="pt-A", radius_point_id="pt-B"),
            highlight_ids=("pt-A", "pt-B"),
            tool="compass",
            citation="Post.3",
        ),
        PropositionStep(
            instruction="Draw a circle centered at B through A",
            expected=CompassAction(center_id="pt-B", radius_point_id="pt-A"),
            highlight_ids=("pt-B", "pt-A"),
            tool="compass",
            citation="Post.3",
        ),
        PropositionStep(
            instruction="Mark where the two circles meet",
            expected=IntersectionAction(
                of_a=CircleSelector(center_id="pt-A", radius_point_id="pt-B"),
                of_b=CircleSelector(center_id="pt-B", radius_point_id="pt-A"),
                label="C",
            ),
            citation="Def.15",
        ),
        PropositionStep(
            instruction="Join C to A",
            expected=StraightedgeAction(from_id="pt-C", to_id="pt-A"),
            highlight_ids=("pt-C", "pt-A"),
            tool="straightedge",
            citation="Post.1",
        ),
        PropositionStep(
            instruction="Join C to B",
            expected=StraightedgeAction(from_id="pt-C", to_id="pt-B"),
            highlight_ids=("pt-C", "pt-B"),
            tool="straightedge",
            citation="Post.1",
        ),
    ),
    result_segments=(
        ResultSegment(from_id="pt-C", to_id="pt-A"),
        ResultSegment(from_id="pt-C", to_id="pt-B"),
    ),
    draggable_point_ids=("pt-A", "pt-B"),
    compute_given_elements=compute_prop1_given_elements,
    derive_conclusion=derive_prop1_conclusion,
)
