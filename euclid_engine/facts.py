"""Canonical relation keys, citations and the proof facts built from them."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal, Union

CitationType = Literal["def15", "cn1", "cn3", "cn3_angle", "cn4", "given", "prop"]


@dataclass(frozen=True)
class DistancePair:
    """Distance between two points; ``a <= b`` always holds."""

    a: str
    b: str


@dataclass(frozen=True)
class AngleMeasure:
    """Angle at ``vertex``; the ray endpoints are stored sorted."""

    vertex: str
    ray1: str
    ray2: str


def distance_pair(p: str, q: str) -> DistancePair:
    if p <= q:
        return DistancePair(p, q)
    return DistancePair(q, p)


def angle_measure(vertex: str, p: str, q: str) -> AngleMeasure:
    if p <= q:
        return AngleMeasure(vertex, p, q)
    return AngleMeasure(vertex, q, p)


def distance_pair_key(dp: DistancePair) -> str:
    return f"{dp.a}|{dp.b}"


def angle_measure_key(am: AngleMeasure) -> str:
    return f"{am.vertex}:{am.ray1}|{am.ray2}"


# ── Citations ──────────────────────────────────────────────────────────


@dataclass(frozen=True)
class Def15Citation:
    circle_id: str
    type: Literal["def15"] = field(default="def15", init=False)


@dataclass(frozen=True)
class CN1Citation:
    via: DistancePair
    type: Literal["cn1"] = field(default="cn1", init=False)


@dataclass(frozen=True)
class CN3Citation:
    whole: DistancePair
    part: DistancePair
    type: Literal["cn3"] = field(default="cn3", init=False)


@dataclass(frozen=True)
class CN3AngleCitation:
    whole: AngleMeasure
    part: AngleMeasure
    type: Literal["cn3_angle"] = field(default="cn3_angle", init=False)


@dataclass(frozen=True)
class CN4Citation:
    type: Literal["cn4"] = field(default="cn4", init=False)


@dataclass(frozen=True)
class GivenCitation:
    type: Literal["given"] = field(default="given", init=False)


@dataclass(frozen=True)
class PropCitation:
    prop_id: int
    type: Literal["prop"] = field(default="prop", init=False)


Citation = Union[
    Def15Citation,
    CN1Citation,
    CN3Citation,
    CN3AngleCitation,
    CN4Citation,
    GivenCitation,
    PropCitation,
]


def format_citation(citation: Citation) -> str:
    if isinstance(citation, Def15Citation):
        return "Def.15"
    if isinstance(citation, CN1Citation):
        return "C.N.1"
    if isinstance(citation, (CN3Citation, CN3AngleCitation)):
        return "C.N.3"
    if isinstance(citation, CN4Citation):
        return "C.N.4"
    if isinstance(citation, GivenCitation):
        return "Given"
    if isinstance(citation, PropCitation):
        return f"I.{citation.prop_id}"
    raise TypeError(f"unknown citation {citation!r}")


# ── Facts ──────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class EqualityFact:
    id: int
    left: DistancePair
    right: DistancePair
    citation: Citation
    statement: str
    justification: str
    at_step: int


@dataclass(frozen=True)
class AngleEqualityFact:
    id: int
    left: AngleMeasure
    right: AngleMeasure
    citation: Citation
    statement: str
    justification: str
    at_step: int


ProofFact = Union[EqualityFact, AngleEqualityFact]


def is_angle_fact(fact: ProofFact) -> bool:
    return isinstance(fact, AngleEqualityFact)
