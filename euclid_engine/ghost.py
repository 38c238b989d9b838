"""Ghost geometry for macro steps.

When a proven proposition is used as a macro only its results enter the
construction.  :func:`compute_macro_ghost` replays the proposition's own
steps on the macro inputs in a private mini construction and reports
everything that replay draws, so a renderer can reveal how the macro's
result came about.  Nested macro steps recurse one level deeper.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Dict, List, Optional, Sequence

from .config import get_engine_config
from .construction import (
    add_circle,
    add_point,
    add_segment,
    get_point,
    get_radius,
    get_segment,
    initialize_given,
    skip_point_label,
)
from .fact_store import create_fact_store
from .intersections import find_new_intersections
from .logging_utils import apply_debug_logging
from .macros import get_macro
from .propositions import get_proposition
from .selectors import find_matching_candidate, resolve_selector, without_coincident
from .types import (
    CompassAction,
    ConstructionElement,
    ConstructionPoint,
    ConstructionSegment,
    ConstructionState,
    GhostCircle,
    GhostElement,
    GhostLayer,
    GhostPoint,
    GhostSegment,
    IntersectionAction,
    IntersectionCandidate,
    MacroAction,
    StraightedgeAction,
    needs_extended_segments,
)

logger = logging.getLogger(__name__)


def _segment_ghost(state: ConstructionState, segment: ConstructionSegment, color: str) -> Optional[GhostSegment]:
    start = get_point(state, segment.from_id)
    end = get_point(state, segment.to_id)
    if start is None or end is None:
        return None
    return GhostSegment(x1=start.x, y1=start.y, x2=end.x, y2=end.y, color=color)


def _production_color(state: ConstructionState, expected: IntersectionAction, beyond_id: str) -> str:
    for selector in (expected.of_a, expected.of_b):
        if selector is None:
            continue
        segment = get_segment(state, resolve_selector(selector, state) or "")
        if segment is not None and beyond_id in (segment.from_id, segment.to_id):
            return segment.color
    return get_engine_config().production_fallback_color


def _given_for_inputs(prop_id: int, input_point_ids: Sequence[str], parent_state: ConstructionState):
    prop = get_proposition(prop_id)
    macro = get_macro(prop_id)
    if prop is None or macro is None:
        return None
    mapping: Dict[str, ConstructionPoint] = {}
    for given_id, input_id in zip(macro.input_to_given_ids, input_point_ids):
        point = get_point(parent_state, input_id)
        if point is None:
            return None
        mapping[given_id] = point
    given: List[ConstructionElement] = []
    for el in prop.given_elements:
        if isinstance(el, ConstructionPoint) and el.id in mapping:
            parent = mapping[el.id]
            el = replace(el, x=parent.x, y=parent.y)
        given.append(el)
    return prop, given


def compute_macro_ghost(
    prop_id: int,
    input_point_ids: Sequence[str],
    parent_state: ConstructionState,
    at_step: int,
    depth: int = 1,
) -> List[GhostLayer]:
    """Replay proposition ``prop_id`` on the macro inputs and collect its drawing.

    The inputs are mapped positionally onto the proposition's given points.
    The replay uses its own state and a throwaway fact store, so nothing
    reaches the caller except the returned layers: this proposition's layer
    at ``depth`` (omitted when empty) followed by the layers of nested
    macros.
    """

    resolved = _given_for_inputs(prop_id, input_point_ids, parent_state)
    if resolved is None:
        logger.debug("No ghost for I.%s on %s", prop_id, list(input_point_ids))
        return []
    prop, given = resolved

    state = initialize_given(given)
    store = create_fact_store()
    candidates: List[IntersectionCandidate] = []
    extend = needs_extended_segments(prop)
    elements: List[GhostElement] = []
    children: List[GhostLayer] = []

    for step in prop.steps:
        expected = step.expected
        if isinstance(expected, CompassAction):
            state, circle = add_circle(state, expected.center_id, expected.radius_point_id)
            candidates = candidates + find_new_intersections(state, circle, candidates, extend)
            center = get_point(state, expected.center_id)
            if center is not None:
                r = get_radius(state, circle.id)
                elements.append(GhostCircle(cx=center.x, cy=center.y, r=r, color=circle.color))

        elif isinstance(expected, StraightedgeAction):
            state, segment = add_segment(state, expected.from_id, expected.to_id)
            candidates = candidates + find_new_intersections(state, segment, candidates, extend)
            ghost = _segment_ghost(state, segment, segment.color)
            if ghost is not None:
                elements.append(ghost)

        elif isinstance(expected, IntersectionAction):
            match = find_matching_candidate(expected, candidates, state)
            if match is None:
                state = skip_point_label(state, expected.label)
                continue
            state, point = add_point(state, match.x, match.y, "intersection", expected.label)
            candidates = without_coincident(candidates, match)
            elements.append(GhostPoint(x=point.x, y=point.y, label=point.label, color=point.color))
            if expected.beyond_id:
                beyond = get_point(state, expected.beyond_id)
                if beyond is not None:
                    elements.append(
                        GhostSegment(
                            x1=beyond.x,
                            y1=beyond.y,
                            x2=point.x,
                            y2=point.y,
                            color=_production_color(state, expected, expected.beyond_id),
                            is_production=True,
                        )
                    )

        elif isinstance(expected, MacroAction):
            inner = get_macro(expected.prop_id)
            if inner is None:
                continue
            before = state
            result = inner.execute(
                state, list(expected.input_point_ids), candidates, store, at_step, extend, expected.output_labels
            )
            state = result.state
            candidates = result.candidates
            for el in result.added_elements:
                if isinstance(el, ConstructionPoint):
                    elements.append(GhostPoint(x=el.x, y=el.y, label=el.label, color=el.color))
                elif isinstance(el, ConstructionSegment):
                    ghost = _segment_ghost(state, el, el.color)
                    if ghost is not None:
                        elements.append(ghost)
            children.extend(
                compute_macro_ghost(expected.prop_id, expected.input_point_ids, before, at_step, depth + 1)
            )

        else:
            raise TypeError(f"unknown action {expected!r}")

    layers: List[GhostLayer] = []
    if elements:
        layers.append(GhostLayer(prop_id=prop_id, depth=depth, at_step=at_step, elements=tuple(elements)))
    return layers + children


apply_debug_logging(globals(), logger=logger)
