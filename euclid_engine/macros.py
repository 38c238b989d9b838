"""Proven propositions exposed as single construction operations.

A macro performs the same primitive operations a manual construction would
but keeps the proof's auxiliary elements (for instance the two circles of
I.1) out of the visible state.  Those elements are returned as ghost layers
instead.  The only in-place mutation a macro performs is on the fact store
handed to it.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Mapping, Optional, Sequence, Tuple

import numpy as np

from .config import get_engine_config
from .construction import add_point, add_segment, get_point, label_at
from .fact_store import FactStore, add_fact, create_fact_store
from .facts import EqualityFact, PropCitation, Def15Citation, distance_pair
from .intersections import circle_circle_intersections, find_new_intersections
from .logging_utils import debug_log_call
from .selectors import select_default_candidate
from .types import (
    ConstructionElement,
    ConstructionPoint,
    ConstructionSegment,
    ConstructionState,
    GhostCircle,
    GhostElement,
    GhostLayer,
    GhostPoint,
    GhostSegment,
    IntersectionCandidate,
)

logger = logging.getLogger(__name__)

_DEGENERATE = 1e-9


@dataclass
class MacroResult:
    state: ConstructionState
    candidates: List[IntersectionCandidate]
    added_elements: List[ConstructionElement] = field(default_factory=list)
    new_facts: List[EqualityFact] = field(default_factory=list)
    ghost_layers: List[GhostLayer] = field(default_factory=list)


MacroExecute = Callable[
    [
        ConstructionState,
        Sequence[str],
        Sequence[IntersectionCandidate],
        FactStore,
        int,
        bool,
        Optional[Mapping[str, str]],
    ],
    MacroResult,
]


@dataclass(frozen=True)
class MacroDef:
    prop_id: int
    label: str
    input_count: int
    input_labels: Tuple[str, ...]
    # Given point ids of the source proposition, one per macro input.
    input_to_given_ids: Tuple[str, ...]
    execute: MacroExecute


def _unchanged(state: ConstructionState, candidates: Sequence[IntersectionCandidate]) -> MacroResult:
    return MacroResult(state=state, candidates=list(candidates))


def _xy(point: ConstructionPoint) -> np.ndarray:
    return np.array([point.x, point.y], dtype=float)


def _unit_or_up(vec: np.ndarray) -> np.ndarray:
    length = float(np.hypot(vec[0], vec[1]))
    if length < _DEGENERATE:
        return np.array([0.0, 1.0])
    return vec / length


def _color(index: int) -> str:
    palette = get_engine_config().palette
    return palette[index % len(palette)]


def _ghost_segment(a: np.ndarray, b: np.ndarray, color: str, is_production: bool = False) -> GhostSegment:
    return GhostSegment(
        x1=float(a[0]), y1=float(a[1]), x2=float(b[0]), y2=float(b[1]), color=color, is_production=is_production
    )


def _ghost_circle(center: np.ndarray, r: float, color: str) -> GhostCircle:
    return GhostCircle(cx=float(center[0]), cy=float(center[1]), r=float(r), color=color)


def _ghost_point(at: np.ndarray, label: str, color: str) -> GhostPoint:
    return GhostPoint(x=float(at[0]), y=float(at[1]), label=label, color=color)


def _equilateral_apex(a: np.ndarray, b: np.ndarray, a_id: str, b_id: str) -> Optional[np.ndarray]:
    radius = float(np.hypot(*(b - a)))
    roots = circle_circle_intersections(a[0], a[1], radius, b[0], b[1], radius)
    candidates = [
        IntersectionCandidate(x=x, y=y, of_a=f"internal-cir-{a_id}", of_b=f"internal-cir-{b_id}", which=i)
        for i, (x, y) in enumerate(roots)
    ]
    apex = select_default_candidate(candidates)
    if apex is None:
        return None
    return np.array([apex.x, apex.y], dtype=float)


def _join(
    state: ConstructionState,
    candidates: List[IntersectionCandidate],
    from_id: str,
    to_id: str,
    extend_segments: bool,
) -> Tuple[ConstructionState, List[IntersectionCandidate], ConstructionSegment]:
    state, segment = add_segment(state, from_id, to_id)
    candidates = candidates + find_new_intersections(state, segment, candidates, extend_segments)
    return state, candidates, segment


# ── I.1 ────────────────────────────────────────────────────────────────


def execute_prop1(
    state: ConstructionState,
    input_point_ids: Sequence[str],
    candidates: Sequence[IntersectionCandidate],
    store: FactStore,
    at_step: int,
    extend_segments: bool = False,
    output_labels: Optional[Mapping[str, str]] = None,
) -> MacroResult:
    """Equilateral triangle on two points.

    Adds the apex and both sides; the construction circles only appear as
    the depth-1 ghost layer.
    """

    if len(input_point_ids) < 2:
        return _unchanged(state, candidates)
    pt_a_id, pt_b_id = input_point_ids[0], input_point_ids[1]
    pt_a = get_point(state, pt_a_id)
    pt_b = get_point(state, pt_b_id)
    if pt_a is None or pt_b is None:
        return _unchanged(state, candidates)
    a, b = _xy(pt_a), _xy(pt_b)
    radius = float(np.hypot(*(b - a)))
    apex = _equilateral_apex(a, b, pt_a_id, pt_b_id)
    if apex is None:
        logger.debug("I.1 on %s, %s is degenerate", pt_a_id, pt_b_id)
        return _unchanged(state, candidates)

    added: List[ConstructionElement] = []
    new_facts: List[EqualityFact] = []
    current = list(candidates)

    state, apex_pt = add_point(state, apex[0], apex[1], "intersection", (output_labels or {}).get("apex"))
    added.append(apex_pt)

    for center, other in ((pt_a, pt_b), (pt_b, pt_a)):
        new_facts.extend(
            add_fact(
                store,
                distance_pair(center.id, apex_pt.id),
                distance_pair(center.id, other.id),
                Def15Citation(circle_id=f"internal-cir-{center.id}"),
                f"{center.label}{apex_pt.label} = {center.label}{other.label}",
                f"Def.15: {apex_pt.label} lies on circle centered at {center.label} through {other.label}",
                at_step,
            )
        )

    for end_id in (pt_a_id, pt_b_id):
        state, current, segment = _join(state, current, apex_pt.id, end_id, extend_segments)
        added.append(segment)

    ghost_layers: List[GhostLayer] = []
    if radius > _DEGENERATE:
        ghost_layers.append(
            GhostLayer(
                prop_id=1,
                depth=1,
                at_step=0,
                elements=(_ghost_circle(a, radius, _color(0)), _ghost_circle(b, radius, _color(1))),
            )
        )
    return MacroResult(state, current, added, new_facts, ghost_layers)


# ── I.2 ────────────────────────────────────────────────────────────────


def _prop2_ghosts(target: np.ndarray, seg_from: np.ndarray, dist: float) -> List[GhostLayer]:
    elements: List[GhostElement] = []
    children: List[GhostLayer] = []
    color_index = 0

    def next_color() -> str:
        nonlocal color_index
        color = _color(color_index)
        color_index += 1
        return color

    elements.append(_ghost_segment(target, seg_from, next_color()))
    ab_radius = float(np.hypot(*(seg_from - target)))

    if ab_radius > _DEGENERATE:
        apex = _equilateral_apex(target, seg_from, "A", "B")
        if apex is None:
            apex = target + np.array([0.0, ab_radius * math.sqrt(3) / 2])
        elements.append(_ghost_point(apex, "D", next_color()))
        da_color = next_color()
        elements.append(_ghost_segment(apex, target, da_color))
        db_color = next_color()
        elements.append(_ghost_segment(apex, seg_from, db_color))
        children.append(
            GhostLayer(
                prop_id=1,
                depth=2,
                at_step=0,
                elements=(_ghost_circle(target, ab_radius, _color(0)), _ghost_circle(seg_from, ab_radius, _color(1))),
            )
        )

        elements.append(_ghost_circle(seg_from, dist, next_color()))
        pt_e = seg_from + dist * _unit_or_up(seg_from - apex)
        elements.append(_ghost_point(pt_e, "E", next_color()))
        elements.append(_ghost_segment(seg_from, pt_e, db_color, is_production=True))

        de_radius = float(np.hypot(*(pt_e - apex)))
        elements.append(_ghost_circle(apex, de_radius, next_color()))
        pt_f = apex + de_radius * _unit_or_up(target - apex)
        elements.append(_ghost_point(pt_f, "F", next_color()))
        elements.append(_ghost_segment(target, pt_f, da_color, is_production=True))
    else:
        # Target already sits on the segment start; only the circle is meaningful.
        elements.append(_ghost_circle(seg_from, dist, next_color()))

    return [GhostLayer(prop_id=2, depth=1, at_step=0, elements=tuple(elements))] + children


def execute_prop2(
    state: ConstructionState,
    input_point_ids: Sequence[str],
    candidates: Sequence[IntersectionCandidate],
    store: FactStore,
    at_step: int,
    extend_segments: bool = False,
    output_labels: Optional[Mapping[str, str]] = None,
) -> MacroResult:
    """Place at a point a line equal to a given line.

    Inputs are ``[target, seg_from, seg_to]``.  The new point lies at distance
    ``|seg_from seg_to|`` from the target in the direction of ``seg_from``
    (straight up when the two coincide).
    """

    if len(input_point_ids) < 3:
        return _unchanged(state, candidates)
    target_id, seg_from_id, seg_to_id = input_point_ids[0], input_point_ids[1], input_point_ids[2]
    target_pt = get_point(state, target_id)
    seg_from_pt = get_point(state, seg_from_id)
    seg_to_pt = get_point(state, seg_to_id)
    if target_pt is None or seg_from_pt is None or seg_to_pt is None:
        return _unchanged(state, candidates)

    target, seg_from, seg_to = _xy(target_pt), _xy(seg_from_pt), _xy(seg_to_pt)
    dist = float(np.hypot(*(seg_to - seg_from)))
    placed = target + dist * _unit_or_up(seg_from - target)

    added: List[ConstructionElement] = []
    state, result_pt = add_point(state, placed[0], placed[1], "intersection", (output_labels or {}).get("result"))
    added.append(result_pt)
    state, current, segment = _join(state, list(candidates), target_id, result_pt.id, extend_segments)
    added.append(segment)

    new_facts = add_fact(
        store,
        distance_pair(target_id, result_pt.id),
        distance_pair(seg_from_id, seg_to_id),
        PropCitation(prop_id=2),
        f"{target_pt.label}{result_pt.label} = {seg_from_pt.label}{seg_to_pt.label}",
        f"I.2: placed at {target_pt.label} a line equal to {seg_from_pt.label}{seg_to_pt.label}",
        at_step,
    )
    return MacroResult(state, current, added, list(new_facts), _prop2_ghosts(target, seg_from, dist))


# ── I.3 ────────────────────────────────────────────────────────────────


def _transfer_labels(
    state: ConstructionState, output_labels: Optional[Mapping[str, str]]
) -> Optional[Mapping[str, str]]:
    # The intermediate I.2 point must not take the label reserved for the result.
    reserved = (output_labels or {}).get("result")
    if reserved is None or label_at(state.next_label_index) != reserved:
        return None
    return {"result": label_at(state.next_label_index + 1)}


def execute_prop3(
    state: ConstructionState,
    input_point_ids: Sequence[str],
    candidates: Sequence[IntersectionCandidate],
    store: FactStore,
    at_step: int,
    extend_segments: bool = False,
    output_labels: Optional[Mapping[str, str]] = None,
) -> MacroResult:
    """Cut off from the greater a part equal to the less.

    Inputs are ``[cut, target, seg_from, seg_to]``: the result lies on the ray
    from ``cut`` toward ``target`` at distance ``|seg_from seg_to|``.  I.2 runs
    first to carry the length over to ``cut``; when ``cut`` already is
    ``seg_from`` that run only feeds the ghost layers and gets a throwaway
    store.
    """

    if len(input_point_ids) < 4:
        return _unchanged(state, candidates)
    cut_id, target_id, seg_from_id, seg_to_id = input_point_ids[:4]
    cut_pt = get_point(state, cut_id)
    target_pt = get_point(state, target_id)
    seg_from_pt = get_point(state, seg_from_id)
    seg_to_pt = get_point(state, seg_to_id)
    if cut_pt is None or target_pt is None or seg_from_pt is None or seg_to_pt is None:
        return _unchanged(state, candidates)

    cut, target = _xy(cut_pt), _xy(target_pt)
    seg_from, seg_to = _xy(seg_from_pt), _xy(seg_to_pt)
    coincident = float(np.hypot(*(cut - seg_from))) < _DEGENERATE

    transfer = execute_prop2(
        state,
        [cut_id, seg_from_id, seg_to_id],
        candidates,
        create_fact_store() if coincident else store,
        at_step,
        extend_segments,
        _transfer_labels(state, output_labels),
    )

    added: List[ConstructionElement] = []
    new_facts: List[EqualityFact] = []
    current = list(candidates)
    if not coincident:
        state = transfer.state
        current = transfer.candidates
        added.extend(transfer.added_elements)
        new_facts.extend(transfer.new_facts)

    radius = float(np.hypot(*(seg_to - seg_from)))
    placed = cut + radius * _unit_or_up(target - cut)
    state, result_pt = add_point(state, placed[0], placed[1], "intersection", (output_labels or {}).get("result"))
    added.append(result_pt)

    new_facts.extend(
        add_fact(
            store,
            distance_pair(cut_id, result_pt.id),
            distance_pair(seg_from_id, seg_to_id),
            PropCitation(prop_id=3),
            f"{cut_pt.label}{result_pt.label} = {seg_from_pt.label}{seg_to_pt.label}",
            f"I.3: cut off from {cut_pt.label}{target_pt.label} a part equal to "
            f"{seg_from_pt.label}{seg_to_pt.label}",
            at_step,
        )
    )

    ghost_elements: List[GhostElement] = []
    for i, el in enumerate(transfer.added_elements):
        color = _color(i)
        if isinstance(el, ConstructionPoint):
            ghost_elements.append(GhostPoint(x=el.x, y=el.y, label=el.label, color=color))
        elif isinstance(el, ConstructionSegment):
            start = get_point(transfer.state, el.from_id)
            end = get_point(transfer.state, el.to_id)
            if start is not None and end is not None:
                ghost_elements.append(_ghost_segment(_xy(start), _xy(end), color))
    offset = len(transfer.added_elements)
    ghost_elements.append(_ghost_circle(cut, radius, _color(offset)))
    ghost_elements.append(_ghost_point(placed, result_pt.label, _color(offset + 1)))

    ghost_layers = [GhostLayer(prop_id=3, depth=1, at_step=0, elements=tuple(ghost_elements))]
    ghost_layers.extend(
        GhostLayer(prop_id=gl.prop_id, depth=gl.depth + 1, at_step=gl.at_step, elements=gl.elements)
        for gl in transfer.ghost_layers
    )
    return MacroResult(state, current, added, new_facts, ghost_layers)


MACRO_PROP_1 = MacroDef(
    prop_id=1,
    label="Equilateral triangle (I.1)",
    input_count=2,
    input_labels=("First endpoint", "Second endpoint"),
    input_to_given_ids=("pt-A", "pt-B"),
    execute=debug_log_call(logger, name="I.1")(execute_prop1),
)

MACRO_PROP_2 = MacroDef(
    prop_id=2,
    label="Transfer distance (I.2)",
    input_count=3,
    input_labels=("Target point", "Segment start", "Segment end"),
    input_to_given_ids=("pt-A", "pt-B", "pt-C"),
    execute=debug_log_call(logger, name="I.2")(execute_prop2),
)

MACRO_PROP_3 = MacroDef(
    prop_id=3,
    label="Cut off equal (I.3)",
    input_count=4,
    input_labels=("Start of greater", "End of greater", "Start of less", "End of less"),
    input_to_given_ids=("pt-A", "pt-B", "pt-C", "pt-D"),
    execute=debug_log_call(logger, name="I.3")(execute_prop3),
)

MACRO_REGISTRY: Dict[int, MacroDef] = {
    1: MACRO_PROP_1,
    2: MACRO_PROP_2,
    3: MACRO_PROP_3,
}


def get_macro(prop_id: int) -> Optional[MacroDef]:
    return MACRO_REGISTRY.get(prop_id)
