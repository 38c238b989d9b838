"""Plain-text summaries of a construction and its proof for narration."""

from __future__ import annotations

from typing import List, Sequence

from .facts import ProofFact, format_citation
from .types import ConstructionCircle, ConstructionPoint, ConstructionSegment, ConstructionState, GhostLayer


def _short(point_id: str) -> str:
    return point_id.replace("pt-", "", 1)


def serialize_proof_facts(facts: Sequence[ProofFact]) -> str:
    """Numbered list, e.g. ``1. CA = AB - Def.15: C lies on circle centered at A through B``."""

    if not facts:
        return "No facts proven yet."
    return "\n".join(f"{i}. {fact.statement} - {fact.justification}" for i, fact in enumerate(facts, start=1))


def serialize_construction_state(state: ConstructionState) -> str:
    points: List[str] = []
    segments: List[str] = []
    circles: List[str] = []
    for el in state.elements:
        if isinstance(el, ConstructionPoint):
            points.append(f"{el.label} ({el.origin})")
        elif isinstance(el, ConstructionSegment):
            segments.append(f"{_short(el.from_id)}{_short(el.to_id)}")
        elif isinstance(el, ConstructionCircle):
            circles.append(f"centered at {_short(el.center_id)}")

    lines: List[str] = []
    if points:
        lines.append(f"Points: {', '.join(points)}")
    if segments:
        lines.append(f"Segments: {', '.join(segments)}")
    if circles:
        lines.append(f"Circles: {len(circles)} ({'; '.join(circles)})")
    return "\n".join(lines) if lines else "Empty construction."


def serialize_full_proof_state(state: ConstructionState, facts: Sequence[ProofFact]) -> str:
    return (
        "=== Current Construction ===\n"
        f"{serialize_construction_state(state)}\n\n"
        "=== Proven Facts ===\n"
        f"{serialize_proof_facts(facts)}"
    )


def serialize_citations(facts: Sequence[ProofFact]) -> str:
    """One line per fact with its short citation label, e.g. ``[C.N.3] AF = BE``."""

    return "\n".join(f"[{format_citation(fact.citation)}] {fact.statement}" for fact in facts)


def serialize_ghost_layers(layers: Sequence[GhostLayer]) -> str:
    if not layers:
        return "No ghost geometry."
    lines = []
    for layer in layers:
        counts = {"point": 0, "segment": 0, "circle": 0}
        for el in layer.elements:
            counts[el.kind] += 1
        lines.append(
            f"{'  ' * (layer.depth - 1)}I.{layer.prop_id} at step {layer.at_step}: "
            f"{counts['point']} point(s), {counts['segment']} segment(s), {counts['circle']} circle(s)"
        )
    return "\n".join(lines)
