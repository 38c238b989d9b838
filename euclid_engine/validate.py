from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional, Set

from .macros import get_macro
from .selectors import resolve_selector
from .types import (
    CircleSelector,
    CompassAction,
    ConstructionCircle,
    ConstructionElement,
    ConstructionPoint,
    ConstructionSegment,
    ConstructionState,
    ElementSelector,
    ExpectedAction,
    IntersectionAction,
    IntersectionCandidate,
    MacroAction,
    PropositionDef,
    SegmentSelector,
    StraightedgeAction,
)


class ValidationError(Exception):
    pass


@dataclass
class DefinitionError:
    point_id: Optional[str]
    field: str
    step_index: Optional[int]
    message: str

    def __str__(self) -> str:  # pragma: no cover - trivial string formatting
        return self.message


class _Checker:
    def __init__(self, known: Set[str]) -> None:
        self.known = known
        self.errors: List[DefinitionError] = []

    def check(self, point_id: str, field: str, step_index: Optional[int]) -> None:
        if point_id in self.known:
            return
        where = "given elements" if step_index is None else f"step {step_index}"
        self.errors.append(
            DefinitionError(
                point_id=point_id,
                field=field,
                step_index=step_index,
                message=f"{where}: {field} references {point_id} before it exists",
            )
        )

    def check_selector(self, selector: Optional[ElementSelector], field: str, step_index: int) -> None:
        if selector is None:
            return
        if isinstance(selector, str):
            # Element ids such as seg-2 depend on construction order; only point ids are checkable.
            if selector.startswith("pt-"):
                self.check(selector, field, step_index)
        elif isinstance(selector, CircleSelector):
            self.check(selector.center_id, field, step_index)
            self.check(selector.radius_point_id, field, step_index)
        elif isinstance(selector, SegmentSelector):
            self.check(selector.from_id, field, step_index)
            self.check(selector.to_id, field, step_index)

    def check_arity(self, action: MacroAction, step_index: int) -> None:
        macro = get_macro(action.prop_id)
        if macro is None or len(action.input_point_ids) == macro.input_count:
            return
        self.errors.append(
            DefinitionError(
                point_id=None,
                field="inputPointIds",
                step_index=step_index,
                message=(
                    f"step {step_index}: I.{action.prop_id} takes {macro.input_count} input point(s), "
                    f"got {len(action.input_point_ids)}"
                ),
            )
        )


def _introduced_points(expected: ExpectedAction) -> Iterable[str]:
    if isinstance(expected, IntersectionAction) and expected.label:
        return [f"pt-{expected.label}"]
    if isinstance(expected, MacroAction) and expected.output_labels:
        return [f"pt-{label}" for label in expected.output_labels.values()]
    return []


def validate_proposition_def(prop: PropositionDef) -> List[DefinitionError]:
    """Report every point id a definition uses before it is given or constructed.

    Findings come back in document order: given elements, then each step,
    then the result segments and given facts.  Points introduced by a step
    (an intersection label or a macro's output labels) only count from the
    next step on.
    """

    checker = _Checker({el.id for el in prop.given_elements if isinstance(el, ConstructionPoint)})

    for el in prop.given_elements:
        if isinstance(el, ConstructionSegment):
            checker.check(el.from_id, "givenElements.segment.fromId", None)
            checker.check(el.to_id, "givenElements.segment.toId", None)
        elif isinstance(el, ConstructionCircle):
            checker.check(el.center_id, "givenElements.circle.centerId", None)
            checker.check(el.radius_point_id, "givenElements.circle.radiusPointId", None)

    for idx, step in enumerate(prop.steps):
        expected = step.expected
        if isinstance(expected, CompassAction):
            checker.check(expected.center_id, "centerId", idx)
            checker.check(expected.radius_point_id, "radiusPointId", idx)
        elif isinstance(expected, StraightedgeAction):
            checker.check(expected.from_id, "fromId", idx)
            checker.check(expected.to_id, "toId", idx)
        elif isinstance(expected, IntersectionAction):
            checker.check_selector(expected.of_a, "ofA", idx)
            checker.check_selector(expected.of_b, "ofB", idx)
            if expected.beyond_id:
                checker.check(expected.beyond_id, "beyondId", idx)
        elif isinstance(expected, MacroAction):
            checker.check_arity(expected, idx)
            for point_id in expected.input_point_ids:
                checker.check(point_id, "inputPointIds", idx)
        else:
            raise TypeError(f"unknown action {expected!r}")

        for point_id in step.highlight_ids:
            checker.check(point_id, "highlightIds", idx)
        checker.known.update(_introduced_points(expected))

    for rs in prop.result_segments:
        checker.check(rs.from_id, "resultSegments.fromId", None)
        checker.check(rs.to_id, "resultSegments.toId", None)

    for gf in prop.given_facts:
        for point_id in (gf.left.a, gf.left.b, gf.right.a, gf.right.b):
            checker.check(point_id, "givenFacts", None)
    for gaf in prop.given_angle_facts:
        for am in (gaf.left, gaf.right):
            for point_id in (am.vertex, am.ray1, am.ray2):
                checker.check(point_id, "givenAngleFacts", None)

    return checker.errors


def ensure_valid_proposition_def(prop: PropositionDef) -> None:
    errors = validate_proposition_def(prop)
    if errors:
        details = "; ".join(str(err) for err in errors)
        raise ValidationError(f"I.{prop.id} is not well-formed ({len(errors)} problem(s)): {details}")


def validate_step(
    expected: ExpectedAction,
    state: ConstructionState,
    element: ConstructionElement,
    candidate: Optional[IntersectionCandidate] = None,
) -> bool:
    """Whether the element a user just produced satisfies ``expected``."""

    if isinstance(expected, CompassAction):
        return (
            isinstance(element, ConstructionCircle)
            and element.center_id == expected.center_id
            and element.radius_point_id == expected.radius_point_id
        )
    if isinstance(expected, StraightedgeAction):
        return isinstance(element, ConstructionSegment) and {element.from_id, element.to_id} == {
            expected.from_id,
            expected.to_id,
        }
    if isinstance(expected, IntersectionAction):
        if not isinstance(element, ConstructionPoint) or element.origin != "intersection":
            return False
        if expected.of_a is None and expected.of_b is None:
            return True
        if candidate is None or expected.of_a is None or expected.of_b is None:
            return False
        resolved_a = resolve_selector(expected.of_a, state)
        resolved_b = resolve_selector(expected.of_b, state)
        if resolved_a is None or resolved_b is None:
            return False
        return {candidate.of_a, candidate.of_b} == {resolved_a, resolved_b}
    if isinstance(expected, MacroAction):
        # Macro steps are confirmed by the macro tool itself.
        return False
    raise TypeError(f"unknown action {expected!r}")
