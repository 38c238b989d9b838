"""Proposition I.3: given two unequal straight lines, to cut off from the greater a line equal to the less.

AE = CD comes from I.2 and AF = AE from the circle, so the union-find
already knows AF = CD when the construction ends; no conclusion step is
needed.
"""

from __future__ import annotations

from typing import List, Mapping

from ..types import (
    CircleSelector,
    CompassAction,
    ConstructionElement,
    Coord,
    IntersectionAction,
    MacroAction,
    PropositionDef,
    PropositionStep,
    ResultSegment,
    SegmentSelector,
)
from .common import given_point, given_segment

DEFAULT_A: Coord = (-2.5, 0.5)
DEFAULT_B: Coord = (1.5, 0.5)
DEFAULT_C: Coord = (0.5, -1.5)
DEFAULT_D: Coord = (2.0, -1.5)


def compute_prop3_given_elements(positions: Mapping[str, Coord]) -> List[ConstructionElement]:
    return [
        given_point("A", positions.get("pt-A", DEFAULT_A)),
        given_point("B", positions.get("pt-B", DEFAULT_B)),
        given_point("C", positions.get("pt-C", DEFAULT_C)),
        given_point("D", positions.get("pt-D", DEFAULT_D)),
        given_segment("A", "B"),
        given_segment("C", "D"),
    ]


PROP_3 = PropositionDef(
    id=3,
    title="Cut off from the greater a line equal to the less",
    given_elements=tuple(compute_prop3_given_elements({})),
    steps=(
        PropositionStep(
            instruction="Place at A a line equal to CD (I.2)",
            expected=MacroAction(prop_id=2, input_point_ids=("pt-A", "pt-C", "pt-D"), output_labels={"result": "E"}),
            highlight_ids=("pt-A", "pt-C", "pt-D"),
            tool="macro",
            citation="I.2",
        ),
        PropositionStep(
            instruction="Draw a circle centered at A through E",
            expected=CompassAction(center_id="pt-A", radius_point_id="pt-E"),
            highlight_ids=("pt-A", "pt-E"),
            tool="compass",
            citation="Post.3",
        ),
        PropositionStep(
            instruction="Mark where the circle crosses line AB",
            expected=IntersectionAction(
                of_a=CircleSelector(center_id="pt-A", radius_point_id="pt-E"),
                of_b=SegmentSelector(from_id="pt-A", to_id="pt-B"),
                label="F",
            ),
            citation="Def.15",
        ),
    ),
    result_segments=(ResultSegment(from_id="pt-A", to_id="pt-F"),),
    draggable_point_ids=("pt-A", "pt-B", "pt-C", "pt-D"),
    compute_given_elements=compute_prop3_given_elements,
)
