"""Full reconstruction of a proposition from its given elements.

Dragging a given point invalidates everything built on it, so the whole
construction is replayed from scratch: the authored steps, the conclusion
and any free-play actions recorded after completion.  Replay is a pure
function of its inputs; running it twice yields equal results.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Literal, Optional, Sequence, Union

from .construction import add_circle, add_point, add_segment, initialize_given, skip_point_label
from .derivation import derive_def15_facts
from .fact_store import FactStore, add_angle_fact, add_fact, create_fact_store
from .facts import GivenCitation, ProofFact
from .ghost import compute_macro_ghost
from .intersections import find_new_intersections
from .logging_utils import apply_debug_logging
from .macros import get_macro
from .selectors import find_matching_candidate, without_coincident
from .types import (
    CompassAction,
    ConstructionElement,
    ConstructionState,
    GhostLayer,
    IntersectionAction,
    IntersectionCandidate,
    MacroAction,
    PropositionDef,
    PropositionStep,
    StraightedgeAction,
    needs_extended_segments,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CirclePostAction:
    center_id: str
    radius_point_id: str
    type: Literal["circle"] = field(default="circle", init=False)


@dataclass(frozen=True)
class SegmentPostAction:
    from_id: str
    to_id: str
    type: Literal["segment"] = field(default="segment", init=False)


@dataclass(frozen=True)
class IntersectionPostAction:
    """Free-play intersection, identified by its parents and root index."""

    of_a: str
    of_b: str
    which: int
    type: Literal["intersection"] = field(default="intersection", init=False)


PostCompletionAction = Union[CirclePostAction, SegmentPostAction, IntersectionPostAction]


@dataclass
class ReplayResult:
    state: ConstructionState
    fact_store: FactStore
    proof_facts: List[ProofFact]
    candidates: List[IntersectionCandidate]
    ghost_layers: List[GhostLayer]
    # Fewer than len(steps) means the construction broke down, e.g. a drag
    # removed an intersection a later step needed.
    steps_completed: int


def _preload_given_facts(prop_def: PropositionDef, store: FactStore) -> List[ProofFact]:
    facts: List[ProofFact] = []
    for gf in prop_def.given_facts:
        facts.extend(add_fact(store, gf.left, gf.right, GivenCitation(), gf.statement, "Given", -1))
    for gaf in prop_def.given_angle_facts:
        facts.extend(add_angle_fact(store, gaf.left, gaf.right, GivenCitation(), gaf.statement, "Given", -1))
    return facts


def _joins(cand: IntersectionCandidate, of_a: str, of_b: str) -> bool:
    return (cand.of_a == of_a and cand.of_b == of_b) or (cand.of_a == of_b and cand.of_b == of_a)


def replay_construction(
    given_elements: Sequence[ConstructionElement],
    steps: Sequence[PropositionStep],
    prop_def: PropositionDef,
    extra_actions: Optional[Sequence[PostCompletionAction]] = None,
) -> ReplayResult:
    """Rebuild the construction, proof and ghosts from ``given_elements``.

    Steps that cannot be performed any more (an intersection that vanished
    under a drag) are skipped, but they still consume a label so every later
    point keeps its name.  ``extra_actions`` are replayed after the
    conclusion with segment production always enabled.
    """

    state = initialize_given(given_elements)
    store = create_fact_store()
    candidates: List[IntersectionCandidate] = []
    ghost_layers: List[GhostLayer] = []
    extend = needs_extended_segments(prop_def)

    proof_facts = _preload_given_facts(prop_def, store)

    steps_completed = 0
    for step_idx, step in enumerate(steps):
        expected = step.expected
        succeeded = False

        if isinstance(expected, StraightedgeAction):
            state, segment = add_segment(state, expected.from_id, expected.to_id)
            candidates = candidates + find_new_intersections(state, segment, candidates, extend)
            succeeded = True

        elif isinstance(expected, CompassAction):
            state, circle = add_circle(state, expected.center_id, expected.radius_point_id)
            candidates = candidates + find_new_intersections(state, circle, candidates, extend)
            succeeded = True

        elif isinstance(expected, IntersectionAction):
            match = find_matching_candidate(expected, candidates, state)
            if match is not None:
                state, point = add_point(state, match.x, match.y, "intersection", expected.label)
                candidates = without_coincident(candidates, match)
                proof_facts.extend(derive_def15_facts(match, point.id, state, store, step_idx))
                succeeded = True
            else:
                logger.warning("Step %d of I.%d has no matching intersection", step_idx, prop_def.id)
                state = skip_point_label(state, expected.label)

        elif isinstance(expected, MacroAction):
            macro = get_macro(expected.prop_id)
            if macro is not None:
                result = macro.execute(
                    state,
                    list(expected.input_point_ids),
                    candidates,
                    store,
                    step_idx,
                    extend,
                    expected.output_labels,
                )
                if result.added_elements:
                    state = result.state
                    candidates = result.candidates
                    proof_facts.extend(result.new_facts)
                    ghost_layers.extend(
                        compute_macro_ghost(expected.prop_id, expected.input_point_ids, state, step_idx)
                    )
                    succeeded = True
                else:
                    logger.warning(
                        "Step %d of I.%d: I.%d could not run on %s",
                        step_idx,
                        prop_def.id,
                        expected.prop_id,
                        list(expected.input_point_ids),
                    )
            else:
                logger.warning("Step %d of I.%d names unknown macro I.%d", step_idx, prop_def.id, expected.prop_id)

        else:
            raise TypeError(f"unknown action {expected!r}")

        if succeeded:
            steps_completed = step_idx + 1

    if prop_def.derive_conclusion is not None:
        proof_facts.extend(prop_def.derive_conclusion(store, state, len(steps)))

    if extra_actions:
        if not extend:
            # The authored steps ran without Post.2; free play always has it.
            for el in state.elements:
                if el.kind == "point":
                    continue
                candidates = candidates + find_new_intersections(state, el, candidates, True)

        for action in extra_actions:
            if isinstance(action, CirclePostAction):
                state, circle = add_circle(state, action.center_id, action.radius_point_id)
                candidates = candidates + find_new_intersections(state, circle, candidates, True)
            elif isinstance(action, SegmentPostAction):
                state, segment = add_segment(state, action.from_id, action.to_id)
                candidates = candidates + find_new_intersections(state, segment, candidates, True)
            elif isinstance(action, IntersectionPostAction):
                match = next(
                    (
                        c
                        for c in candidates
                        if _joins(c, action.of_a, action.of_b) and c.which == action.which
                    ),
                    None,
                )
                if match is not None:
                    state, point = add_point(state, match.x, match.y, "intersection")
                    candidates = without_coincident(candidates, match)
                    proof_facts.extend(derive_def15_facts(match, point.id, state, store, len(steps)))
                else:
                    state = skip_point_label(state)
            else:
                raise TypeError(f"unknown post-completion action {action!r}")

    logger.info(
        "Replayed I.%d: %d/%d steps, %d facts", prop_def.id, steps_completed, len(steps), len(proof_facts)
    )
    return ReplayResult(
        state=state,
        fact_store=store,
        proof_facts=proof_facts,
        candidates=candidates,
        ghost_layers=ghost_layers,
        steps_completed=steps_completed,
    )


apply_debug_logging(globals(), logger=logger)
