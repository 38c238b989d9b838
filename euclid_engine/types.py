from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable, Dict, Literal, Mapping, Optional, Sequence, Tuple, Union

if TYPE_CHECKING:  # pragma: no cover - import cycle guard
    from .fact_store import FactStore
    from .facts import AngleMeasure, DistancePair, ProofFact

PointId = str
ElementId = str
Coord = Tuple[float, float]

ElementOrigin = Literal["given", "compass", "straightedge", "intersection", "free"]
PropositionKind = Literal["construction", "theorem"]
ToolName = Literal["compass", "straightedge", "macro"]

# Byrne's Euclid palette.
BYRNE_RED = "#D42A20"
BYRNE_YELLOW = "#F0B429"
BYRNE_BLUE = "#2B59A8"
BYRNE_GIVEN = "#1A1A2E"
BYRNE_CYCLE: Tuple[str, str, str] = (BYRNE_RED, BYRNE_YELLOW, BYRNE_BLUE)


@dataclass(frozen=True)
class ConstructionPoint:
    id: PointId
    x: float
    y: float
    label: str
    color: str
    origin: ElementOrigin
    kind: Literal["point"] = field(default="point", init=False)


@dataclass(frozen=True)
class ConstructionSegment:
    id: ElementId
    from_id: PointId
    to_id: PointId
    color: str
    origin: ElementOrigin
    kind: Literal["segment"] = field(default="segment", init=False)


@dataclass(frozen=True)
class ConstructionCircle:
    id: ElementId
    center_id: PointId
    radius_point_id: PointId
    color: str
    origin: ElementOrigin
    kind: Literal["circle"] = field(default="circle", init=False)


ConstructionElement = Union[ConstructionPoint, ConstructionSegment, ConstructionCircle]


@dataclass(frozen=True)
class ConstructionState:
    """Immutable picture of a construction.

    ``elements`` is append-only across mutators; ``next_label_index`` always
    points past every label handed out so far.
    """

    elements: Tuple[ConstructionElement, ...] = ()
    next_label_index: int = 0
    next_color_index: int = 0


@dataclass(frozen=True)
class IntersectionCandidate:
    x: float
    y: float
    of_a: ElementId
    of_b: ElementId
    which: int


# ---------------------------------------------------------------------------
# Ghost geometry
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class GhostPoint:
    x: float
    y: float
    label: str
    color: str
    kind: Literal["point"] = field(default="point", init=False)


@dataclass(frozen=True)
class GhostSegment:
    x1: float
    y1: float
    x2: float
    y2: float
    color: str
    is_production: bool = False
    kind: Literal["segment"] = field(default="segment", init=False)


@dataclass(frozen=True)
class GhostCircle:
    cx: float
    cy: float
    r: float
    color: str
    kind: Literal["circle"] = field(default="circle", init=False)


GhostElement = Union[GhostPoint, GhostSegment, GhostCircle]


@dataclass(frozen=True)
class GhostLayer:
    prop_id: int
    depth: int
    at_step: int
    elements: Tuple[GhostElement, ...]


# ---------------------------------------------------------------------------
# Selectors and expected actions
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class CircleSelector:
    center_id: PointId
    radius_point_id: PointId
    kind: Literal["circle"] = field(default="circle", init=False)


@dataclass(frozen=True)
class SegmentSelector:
    from_id: PointId
    to_id: PointId
    kind: Literal["segment"] = field(default="segment", init=False)


ElementSelector = Union[str, CircleSelector, SegmentSelector]


@dataclass(frozen=True)
class StraightedgeAction:
    from_id: PointId
    to_id: PointId
    type: Literal["straightedge"] = field(default="straightedge", init=False)


@dataclass(frozen=True)
class CompassAction:
    center_id: PointId
    radius_point_id: PointId
    type: Literal["compass"] = field(default="compass", init=False)


@dataclass(frozen=True)
class IntersectionAction:
    of_a: Optional[ElementSelector] = None
    of_b: Optional[ElementSelector] = None
    beyond_id: Optional[PointId] = None
    label: Optional[str] = None
    type: Literal["intersection"] = field(default="intersection", init=False)


@dataclass(frozen=True)
class MacroAction:
    prop_id: int
    input_point_ids: Tuple[PointId, ...]
    output_labels: Optional[Mapping[str, str]] = None
    type: Literal["macro"] = field(default="macro", init=False)


ExpectedAction = Union[StraightedgeAction, CompassAction, IntersectionAction, MacroAction]


@dataclass(frozen=True)
class PropositionStep:
    instruction: str
    expected: ExpectedAction
    highlight_ids: Tuple[PointId, ...] = ()
    tool: Optional[ToolName] = None
    citation: Optional[str] = None


@dataclass(frozen=True)
class GivenFact:
    left: "DistancePair"
    right: "DistancePair"
    statement: str


@dataclass(frozen=True)
class GivenAngleFact:
    left: "AngleMeasure"
    right: "AngleMeasure"
    statement: str


@dataclass(frozen=True)
class ResultSegment:
    from_id: PointId
    to_id: PointId


ConclusionFn = Callable[["FactStore", ConstructionState, int], "list[ProofFact]"]
GivenElementsFn = Callable[[Mapping[PointId, Coord]], "list[ConstructionElement]"]


@dataclass(frozen=True)
class PropositionDef:
    """Authored description of one proposition of Book I."""

    id: int
    title: str
    given_elements: Tuple[ConstructionElement, ...]
    steps: Tuple[PropositionStep, ...]
    kind: PropositionKind = "construction"
    given_facts: Tuple[GivenFact, ...] = ()
    given_angle_facts: Tuple[GivenAngleFact, ...] = ()
    result_segments: Tuple[ResultSegment, ...] = ()
    draggable_point_ids: Tuple[PointId, ...] = ()
    compute_given_elements: Optional[GivenElementsFn] = None
    derive_conclusion: Optional[ConclusionFn] = None
    # Plain text, or a function of the finished state when the wording depends on the layout.
    theorem_conclusion: Union[str, Callable[[ConstructionState], str], None] = None


def needs_extended_segments(prop: PropositionDef) -> bool:
    """Whether any step produces a segment past an endpoint (Post.2)."""

    return any(
        isinstance(step.expected, IntersectionAction) and step.expected.beyond_id
        for step in prop.steps
    )


def point_positions(elements: Sequence[ConstructionElement]) -> Dict[PointId, Coord]:
    return {el.id: (el.x, el.y) for el in elements if isinstance(el, ConstructionPoint)}


def describe_theorem_conclusion(prop: PropositionDef, state: ConstructionState) -> Optional[str]:
    if callable(prop.theorem_conclusion):
        return prop.theorem_conclusion(state)
    return prop.theorem_conclusion
