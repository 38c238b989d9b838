"""Append-only equality ledger with a private union-find.

:func:`add_fact` and :func:`add_angle_fact` are the only ways to insert a
fact.  Both refuse anything the union-find already entails, so a store never
holds a redundant equality and deriving the same conclusion twice is a no-op.

The union-find lives in private attributes of :class:`FactStore` and cannot be
shared.  An independent store is always produced by :func:`rebuild_fact_store`,
which replays the ledger into a fresh instance; ``copy.copy`` and
``copy.deepcopy`` are routed through it.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional, Union

from .facts import (
    AngleEqualityFact,
    AngleMeasure,
    Citation,
    DistancePair,
    EqualityFact,
    ProofFact,
    angle_measure_key,
    distance_pair_key,
)
from .logging_utils import apply_debug_logging

logger = logging.getLogger(__name__)

Relation = Union[DistancePair, AngleMeasure]


def _relation_key(relation: Relation) -> str:
    # Distances and angles share one union-find but never one class.
    if isinstance(relation, AngleMeasure):
        return "a:" + angle_measure_key(relation)
    return "d:" + distance_pair_key(relation)


class FactStore:
    """Ledger of proof facts.

    ``facts`` and ``next_id`` are public and mutated in place by the
    insertion functions; everything else is derived state.
    """

    def __init__(self) -> None:
        self.facts: List[ProofFact] = []
        self.next_id = 1
        self._parent: Dict[str, str] = {}
        self._relations: Dict[str, Relation] = {}
        self._root_fact: Dict[str, int] = {}

    def __repr__(self) -> str:
        return f"FactStore(facts={len(self.facts)}, next_id={self.next_id})"

    def __copy__(self) -> "FactStore":
        return rebuild_fact_store(self.facts)

    def __deepcopy__(self, memo: dict) -> "FactStore":
        return rebuild_fact_store(self.facts)

    # -- union-find -------------------------------------------------------

    def _register(self, key: str, relation: Relation) -> None:
        if key not in self._parent:
            self._parent[key] = key
            self._relations[key] = relation

    def _find(self, key: str) -> str:
        root = key
        while self._parent[root] != root:
            root = self._parent[root]
        while self._parent[key] != root:
            self._parent[key], key = root, self._parent[key]
        return root

    def _connected(self, left: str, right: str) -> bool:
        if left == right:
            return True
        if left not in self._parent or right not in self._parent:
            return False
        return self._find(left) == self._find(right)

    def _union(self, left: str, right: str, fact_id: int) -> None:
        root_left = self._find(left)
        root_right = self._find(right)
        if root_left == root_right:
            return
        # Attach the lexicographically larger root so class roots are stable.
        if root_right < root_left:
            root_left, root_right = root_right, root_left
        self._parent[root_right] = root_left
        self._root_fact.pop(root_right, None)
        self._root_fact[root_left] = fact_id

    def _class_members(self, key: str) -> List[Relation]:
        if key not in self._parent:
            return []
        root = self._find(key)
        return [self._relations[k] for k in self._parent if self._find(k) == root]

    def _insert(self, left: Relation, right: Relation) -> Optional[int]:
        key_left = _relation_key(left)
        key_right = _relation_key(right)
        if self._connected(key_left, key_right):
            return None
        self._register(key_left, left)
        self._register(key_right, right)
        fact_id = self.next_id
        self.next_id += 1
        self._union(key_left, key_right, fact_id)
        return fact_id


def create_fact_store() -> FactStore:
    return FactStore()


def add_fact(
    store: FactStore,
    left: DistancePair,
    right: DistancePair,
    citation: Citation,
    statement: str,
    justification: str,
    at_step: int,
) -> List[EqualityFact]:
    """Record ``left = right`` unless the store already entails it.

    Returns the new fact as a one-element list, or an empty list when the
    equality was already known.
    """

    fact_id = store._insert(left, right)
    if fact_id is None:
        logger.debug("Skipping entailed fact %s", statement)
        return []
    fact = EqualityFact(
        id=fact_id,
        left=left,
        right=right,
        citation=citation,
        statement=statement,
        justification=justification,
        at_step=at_step,
    )
    store.facts.append(fact)
    return [fact]


def add_angle_fact(
    store: FactStore,
    left: AngleMeasure,
    right: AngleMeasure,
    citation: Citation,
    statement: str,
    justification: str,
    at_step: int,
) -> List[AngleEqualityFact]:
    fact_id = store._insert(left, right)
    if fact_id is None:
        logger.debug("Skipping entailed angle fact %s", statement)
        return []
    fact = AngleEqualityFact(
        id=fact_id,
        left=left,
        right=right,
        citation=citation,
        statement=statement,
        justification=justification,
        at_step=at_step,
    )
    store.facts.append(fact)
    return [fact]


def query_equality(store: FactStore, a: DistancePair, b: DistancePair) -> bool:
    if a == b:
        return True
    return store._connected(_relation_key(a), _relation_key(b))


def query_angle_equality(store: FactStore, a: AngleMeasure, b: AngleMeasure) -> bool:
    if a == b:
        return True
    return store._connected(_relation_key(a), _relation_key(b))


def get_equal_distances(store: FactStore, dp: DistancePair) -> List[DistancePair]:
    """Every distance known equal to ``dp``, itself included."""

    members = store._class_members(_relation_key(dp))
    if not members:
        return [dp]
    return [m for m in members if isinstance(m, DistancePair)]


def get_equal_angles(store: FactStore, am: AngleMeasure) -> List[AngleMeasure]:
    members = store._class_members(_relation_key(am))
    if not members:
        return [am]
    return [m for m in members if isinstance(m, AngleMeasure)]


def root_fact_id(store: FactStore, relation: Relation) -> Optional[int]:
    """Id of the fact that last merged the class containing ``relation``."""

    key = _relation_key(relation)
    if key not in store._parent:
        return None
    return store._root_fact.get(store._find(key))


def rebuild_fact_store(facts: Iterable[ProofFact]) -> FactStore:
    """Fresh store holding ``facts`` replayed in their original order."""

    store = FactStore()
    for fact in facts:
        if isinstance(fact, AngleEqualityFact):
            add_angle_fact(
                store, fact.left, fact.right, fact.citation, fact.statement, fact.justification, fact.at_step
            )
        else:
            add_fact(
                store, fact.left, fact.right, fact.citation, fact.statement, fact.justification, fact.at_step
            )
    return store


def facts_up_to_step(facts: Iterable[ProofFact], step: int) -> List[ProofFact]:
    return [fact for fact in facts if fact.at_step < step]


apply_debug_logging(
    globals(),
    logger=logger,
    skip={"query_equality", "query_angle_equality", "create_fact_store", "facts_up_to_step"},
)
