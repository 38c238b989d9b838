"""Undo history for an interactive session.

Snapshot ``k`` is captured before step ``k`` is committed, so snapshot 0 holds
the given figure and the stack always starts with it.  Undo and rewind truncate
the stack and rebuild a fact store from the retained snapshot's facts, so
the restored store never shares state with the one that kept going.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence, Tuple

from .fact_store import FactStore, rebuild_fact_store
from .facts import ProofFact
from .types import ConstructionState, GhostLayer, IntersectionCandidate

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Snapshot:
    construction: ConstructionState
    candidates: Tuple[IntersectionCandidate, ...]
    proof_facts: Tuple[ProofFact, ...]
    ghost_layers: Tuple[GhostLayer, ...]
    step_index: int


@dataclass(frozen=True)
class SnapshotStack:
    snapshots: Tuple[Snapshot, ...] = ()

    @property
    def current(self) -> Snapshot:
        return self.snapshots[-1]


@dataclass
class RestoredSession:
    snapshot: Snapshot
    fact_store: FactStore


def capture_snapshot(
    construction: ConstructionState,
    candidates: Sequence[IntersectionCandidate],
    proof_facts: Sequence[ProofFact],
    ghost_layers: Sequence[GhostLayer],
    step_index: int,
) -> Snapshot:
    return Snapshot(
        construction=construction,
        candidates=tuple(candidates),
        proof_facts=tuple(proof_facts),
        ghost_layers=tuple(ghost_layers),
        step_index=step_index,
    )


def push_snapshot(stack: SnapshotStack, snapshot: Snapshot) -> SnapshotStack:
    return SnapshotStack(snapshots=stack.snapshots + (snapshot,))


def _restore(stack: SnapshotStack) -> RestoredSession:
    snapshot = stack.current
    return RestoredSession(snapshot=snapshot, fact_store=rebuild_fact_store(snapshot.proof_facts))


def delete_last_step(stack: SnapshotStack) -> Tuple[SnapshotStack, RestoredSession]:
    """Drop the newest snapshot; the initial snapshot is never dropped.

    An empty stack has nothing to restore and raises ``ValueError``.
    """

    if not stack.snapshots:
        raise ValueError("cannot undo on an empty snapshot stack")
    if len(stack.snapshots) > 1:
        stack = SnapshotStack(snapshots=stack.snapshots[:-1])
    return stack, _restore(stack)


def rewind_to_step(stack: SnapshotStack, step: int) -> Tuple[SnapshotStack, RestoredSession]:
    """Keep ``snapshots[: step + 1]``: the state captured before step ``step`` was committed.

    ``step`` is clamped to the stack; an empty stack raises ``ValueError``.
    """

    if not stack.snapshots:
        raise ValueError("cannot rewind an empty snapshot stack")
    keep = max(1, min(step + 1, len(stack.snapshots)))
    stack = SnapshotStack(snapshots=stack.snapshots[:keep])
    logger.debug("Rewound to snapshot %d", keep - 1)
    return stack, _restore(stack)
