"""Intersection engine.

Primitive solvers return plain ``(x, y)`` float tuples in a fixed order:
circle/circle roots start with the one to the left of the center-to-center
direction, circle/line roots follow the line parameter from its first
endpoint.  :func:`find_new_intersections` turns those roots into
:class:`IntersectionCandidate` values for a freshly added element.
"""

from __future__ import annotations

import logging
import math
from typing import List, Optional, Sequence, Tuple

import numpy as np

from .construction import get_all_circles, get_all_points, get_all_segments, get_point, get_radius, get_segment
from .logging_utils import apply_debug_logging
from .types import (
    ConstructionCircle,
    ConstructionElement,
    ConstructionSegment,
    ConstructionState,
    IntersectionCandidate,
)

logger = logging.getLogger(__name__)

TOLERANCE = 1e-3

Point = Tuple[float, float]

_EPS = 1e-9
_PARAM_EPS = 1e-9


def _as_point(vec: np.ndarray) -> Point:
    return (float(vec[0]), float(vec[1]))


def _close(a: Sequence[float], b: Sequence[float]) -> bool:
    return abs(a[0] - b[0]) < TOLERANCE and abs(a[1] - b[1]) < TOLERANCE


# ── Primitive intersections ────────────────────────────────────────────


def circle_circle_intersections(
    c1x: float, c1y: float, r1: float, c2x: float, c2y: float, r2: float
) -> List[Point]:
    c1 = np.array([c1x, c1y], dtype=float)
    c2 = np.array([c2x, c2y], dtype=float)
    delta = c2 - c1
    d = float(np.hypot(delta[0], delta[1]))
    if d <= _EPS or r1 <= 0 or r2 <= 0:
        return []
    if d > r1 + r2 + _EPS or d < abs(r1 - r2) - _EPS:
        return []
    a = (r1 * r1 - r2 * r2 + d * d) / (2.0 * d)
    h_sq = r1 * r1 - a * a
    base = c1 + delta * (a / d)
    if h_sq <= _EPS * max(r1, 1.0):
        return [_as_point(base)]
    h = math.sqrt(h_sq)
    offset = np.array([-delta[1], delta[0]], dtype=float) * (h / d)
    return [_as_point(base + offset), _as_point(base - offset)]


def _circle_line_params(
    cx: float, cy: float, r: float, x1: float, y1: float, x2: float, y2: float
) -> List[float]:
    start = np.array([x1, y1], dtype=float)
    direction = np.array([x2 - x1, y2 - y1], dtype=float)
    rel = start - np.array([cx, cy], dtype=float)
    a = float(np.dot(direction, direction))
    if a <= _EPS * _EPS or r <= 0:
        return []
    b = 2.0 * float(np.dot(direction, rel))
    c = float(np.dot(rel, rel)) - r * r
    disc = b * b - 4.0 * a * c
    if disc < -_EPS * a:
        return []
    if disc <= _EPS * a:
        return [-b / (2.0 * a)]
    root = math.sqrt(disc)
    return [(-b - root) / (2.0 * a), (-b + root) / (2.0 * a)]


def _point_on_line(x1: float, y1: float, x2: float, y2: float, t: float) -> Point:
    start = np.array([x1, y1], dtype=float)
    end = np.array([x2, y2], dtype=float)
    return _as_point(start + (end - start) * t)


def circle_segment_intersections(
    cx: float, cy: float, r: float, x1: float, y1: float, x2: float, y2: float
) -> List[Point]:
    params = _circle_line_params(cx, cy, r, x1, y1, x2, y2)
    return [
        _point_on_line(x1, y1, x2, y2, t)
        for t in params
        if -_PARAM_EPS <= t <= 1.0 + _PARAM_EPS
    ]


def circle_line_intersections(
    cx: float, cy: float, r: float, x1: float, y1: float, x2: float, y2: float
) -> List[Point]:
    """Circle against the infinite line through two points (Post.2)."""

    if _close((x1, y1), (x2, y2)):
        return []
    params = _circle_line_params(cx, cy, r, x1, y1, x2, y2)
    return [_point_on_line(x1, y1, x2, y2, t) for t in params]


def segment_segment_intersection(
    a1x: float, a1y: float, a2x: float, a2y: float,
    b1x: float, b1y: float, b2x: float, b2y: float,
) -> List[Point]:
    p = np.array([a1x, a1y], dtype=float)
    r = np.array([a2x - a1x, a2y - a1y], dtype=float)
    q = np.array([b1x, b1y], dtype=float)
    s = np.array([b2x - b1x, b2y - b1y], dtype=float)
    denom = float(r[0] * s[1] - r[1] * s[0])
    if abs(denom) <= _EPS:
        # Parallel or collinear: no single crossing point.
        return []
    qp = q - p
    t = float(qp[0] * s[1] - qp[1] * s[0]) / denom
    u = float(qp[0] * r[1] - qp[1] * r[0]) / denom
    if -_PARAM_EPS <= t <= 1.0 + _PARAM_EPS and -_PARAM_EPS <= u <= 1.0 + _PARAM_EPS:
        return [_as_point(p + r * t)]
    return []


# ── High-level: find new intersections for a newly added element ──────


def _circle_data(state: ConstructionState, circle: ConstructionCircle) -> Optional[Tuple[float, float, float]]:
    center = get_point(state, circle.center_id)
    r = get_radius(state, circle.id)
    if center is None or r <= 0:
        return None
    return center.x, center.y, r


def _segment_data(
    state: ConstructionState, segment: ConstructionSegment
) -> Optional[Tuple[float, float, float, float]]:
    start = get_point(state, segment.from_id)
    end = get_point(state, segment.to_id)
    if start is None or end is None:
        return None
    return start.x, start.y, end.x, end.y


def _is_endpoint(cx: float, cy: float, seg: Tuple[float, float, float, float]) -> bool:
    x1, y1, x2, y2 = seg
    return _close((cx, cy), (x1, y1)) or _close((cx, cy), (x2, y2))


def _remove_already_found(line_pts: Sequence[Point], seg_pts: Sequence[Point]) -> List[Point]:
    return [lp for lp in line_pts if not any(_close(lp, sp) for sp in seg_pts)]


def _can_produce(segment: ConstructionSegment) -> bool:
    return segment.origin in ("straightedge", "given")


def is_candidate_beyond_point(
    candidate: IntersectionCandidate,
    beyond_id: str,
    of_a: str,
    of_b: str,
    state: ConstructionState,
) -> bool:
    """Whether ``candidate`` lies past ``beyond_id`` on the parent segment.

    With P the named endpoint and Q the segment's other endpoint the test is
    ``dot(candidate - P, P - Q) > 0``.  Anything that cannot be looked up
    makes the test vacuously true.
    """

    segment = get_segment(state, of_a) or get_segment(state, of_b)
    if segment is None:
        return True
    beyond = get_point(state, beyond_id)
    if beyond is None:
        return True
    start = get_point(state, segment.from_id)
    end = get_point(state, segment.to_id)
    if start is None or end is None:
        return True

    other = end if _close((beyond.x, beyond.y), (start.x, start.y)) else start
    direction = np.array([beyond.x - other.x, beyond.y - other.y], dtype=float)
    offset = np.array([candidate.x - beyond.x, candidate.y - beyond.y], dtype=float)
    return float(np.dot(direction, offset)) > 0


def find_new_intersections(
    state: ConstructionState,
    new_element: ConstructionElement,
    existing_candidates: Sequence[IntersectionCandidate],
    extend_segments: bool = False,
) -> List[IntersectionCandidate]:
    """Candidates created by ``new_element`` against everything already drawn.

    Roots within :data:`TOLERANCE` of an existing candidate, of a root found
    earlier in this call, or of an existing point are dropped.
    """

    if new_element.kind == "point":
        return []

    state_points = [(p.x, p.y) for p in get_all_points(state)]
    results: List[IntersectionCandidate] = []

    def is_duplicate(pt: Point) -> bool:
        for known in existing_candidates:
            if _close(pt, (known.x, known.y)):
                return True
        for known in results:
            if _close(pt, (known.x, known.y)):
                return True
        return any(_close(pt, sp) for sp in state_points)

    def add_candidates(pts: Sequence[Point], id_a: str, id_b: str, first_which: int = 0) -> None:
        for i, pt in enumerate(pts):
            if not is_duplicate(pt):
                results.append(
                    IntersectionCandidate(x=pt[0], y=pt[1], of_a=id_a, of_b=id_b, which=first_which + i)
                )

    def circle_vs_segment(
        circle: Tuple[float, float, float],
        segment: ConstructionSegment,
        seg: Tuple[float, float, float, float],
        first: str,
        second: str,
    ) -> None:
        cx, cy, r = circle
        seg_pts = circle_segment_intersections(cx, cy, r, *seg)
        add_candidates(seg_pts, first, second)
        if extend_segments and _can_produce(segment) and _is_endpoint(cx, cy, seg):
            line_pts = circle_line_intersections(cx, cy, r, *seg)
            add_candidates(_remove_already_found(line_pts, seg_pts), first, second, len(seg_pts))

    if isinstance(new_element, ConstructionCircle):
        new_data = _circle_data(state, new_element)
        if new_data is None:
            return []
        for circle in get_all_circles(state):
            if circle.id == new_element.id:
                continue
            data = _circle_data(state, circle)
            if data is None:
                continue
            pts = circle_circle_intersections(*new_data, *data)
            add_candidates(pts, new_element.id, circle.id)
        for segment in get_all_segments(state):
            seg = _segment_data(state, segment)
            if seg is None:
                continue
            circle_vs_segment(new_data, segment, seg, new_element.id, segment.id)

    elif isinstance(new_element, ConstructionSegment):
        new_seg = _segment_data(state, new_element)
        if new_seg is None:
            return []
        for circle in get_all_circles(state):
            data = _circle_data(state, circle)
            if data is None:
                continue
            circle_vs_segment(data, new_element, new_seg, new_element.id, circle.id)
        for segment in get_all_segments(state):
            if segment.id == new_element.id:
                continue
            seg = _segment_data(state, segment)
            if seg is None:
                continue
            pts = segment_segment_intersection(*new_seg, *seg)
            add_candidates(pts, new_element.id, segment.id)

    if results:
        logger.debug("Element %s produced %d candidate(s)", new_element.id, len(results))
    return results


apply_debug_logging(
    globals(),
    logger=logger,
    skip={
        "circle_circle_intersections",
        "circle_segment_intersections",
        "circle_line_intersections",
        "segment_segment_intersection",
        "is_candidate_beyond_point",
    },
)
