import math

import pytest

from euclid_engine import (
    IntersectionCandidate,
    add_circle,
    add_segment,
    find_new_intersections,
    initialize_given,
    is_candidate_beyond_point,
)
from euclid_engine.intersections import (
    circle_circle_intersections,
    circle_line_intersections,
    circle_segment_intersections,
    segment_segment_intersection,
)
from euclid_engine.propositions import PROP_1
from euclid_engine.propositions.common import given_point, given_segment


def assert_points(actual, expected):
    assert len(actual) == len(expected)
    for (ax, ay), (ex, ey) in zip(actual, expected):
        assert ax == pytest.approx(ex, abs=1e-9)
        assert ay == pytest.approx(ey, abs=1e-9)


def test_circle_circle_roots_are_ordered_left_of_center_line():
    pts = circle_circle_intersections(-1, 0, 2, 1, 0, 2)
    assert_points(pts, [(0, math.sqrt(3)), (0, -math.sqrt(3))])


def test_tangent_circles_meet_once():
    assert_points(circle_circle_intersections(0, 0, 1, 2, 0, 1), [(1, 0)])


@pytest.mark.parametrize(
    "args",
    [
        (0, 0, 1, 5, 0, 1),  # apart
        (0, 0, 3, 0.5, 0, 1),  # nested
        (0, 0, 1, 0, 0, 1),  # concentric
        (0, 0, 0, 1, 0, 1),  # zero radius
    ],
)
def test_circle_circle_without_crossing(args):
    assert circle_circle_intersections(*args) == []


def test_circle_segment_follows_segment_direction():
    assert_points(circle_segment_intersections(0, 0, 1, -2, 0, 2, 0), [(-1, 0), (1, 0)])
    assert_points(circle_segment_intersections(0, 0, 1, 2, 0, -2, 0), [(1, 0), (-1, 0)])


def test_circle_segment_clips_to_segment():
    assert_points(circle_segment_intersections(0, 0, 1, 0, 0, 2, 0), [(1, 0)])
    assert circle_segment_intersections(0, 0, 1, 2, 0, 3, 0) == []


def test_circle_line_extends_past_endpoints():
    assert_points(circle_line_intersections(0, 0, 1, 2, 0, 3, 0), [(-1, 0), (1, 0)])
    assert circle_line_intersections(0, 0, 1, 2, 0, 2, 0) == []


def test_segment_segment_crossing_and_parallel():
    assert_points(segment_segment_intersection(-1, -1, 1, 1, -1, 1, 1, -1), [(0, 0)])
    assert segment_segment_intersection(0, 0, 1, 0, 0, 1, 1, 1) == []
    assert segment_segment_intersection(0, 0, 1, 0, 2, -1, 2, 1) == []


def two_point_state():
    return initialize_given([given_point('A', (0, 0)), given_point('B', (1, 0))])


def test_second_circle_yields_both_roots_with_stable_which():
    state = two_point_state()
    state, first = add_circle(state, 'pt-A', 'pt-B')
    assert find_new_intersections(state, first, []) == []

    state, second = add_circle(state, 'pt-B', 'pt-A')
    found = find_new_intersections(state, second, [])

    assert [(c.of_a, c.of_b, c.which) for c in found] == [('cir-2', 'cir-1', 0), ('cir-2', 'cir-1', 1)]
    assert found[0].x == pytest.approx(0.5)
    assert found[0].y == pytest.approx(-math.sqrt(3) / 2)
    assert found[1].y == pytest.approx(math.sqrt(3) / 2)


def test_known_candidates_and_points_are_not_reported_again():
    state = two_point_state()
    state, first = add_circle(state, 'pt-A', 'pt-B')
    state, second = add_circle(state, 'pt-B', 'pt-A')
    found = find_new_intersections(state, second, [])

    state, segment = add_segment(state, 'pt-A', 'pt-B')
    # The segment only touches the circles at A and B, which are points already.
    assert find_new_intersections(state, segment, found) == []


def test_production_roots_continue_numbering_after_segment_roots():
    state = initialize_given(PROP_1.given_elements)
    state, circle = add_circle(state, 'pt-A', 'pt-B')

    assert find_new_intersections(state, circle, []) == []

    produced = find_new_intersections(state, circle, [], extend_segments=True)
    assert len(produced) == 1
    cand = produced[0]
    assert (cand.of_a, cand.of_b, cand.which) == ('cir-1', 'seg-AB', 1)
    assert (cand.x, cand.y) == pytest.approx((-3.0, 0.0))


def test_only_circles_centered_on_an_endpoint_produce_segments():
    state = initialize_given([given_point('A', (0, 0)), given_point('B', (2, 0)), given_point('C', (5, 3)),
                              given_segment('A', 'B')])
    state, circle = add_circle(state, 'pt-C', 'pt-A')

    extended = find_new_intersections(state, circle, [], extend_segments=True)
    plain = find_new_intersections(state, circle, [])
    assert extended == plain


def test_candidate_beyond_point_uses_direction_away_from_other_endpoint():
    state = initialize_given([given_point('A', (0, 0)), given_point('B', (2, 0)), given_segment('A', 'B')])
    past_b = IntersectionCandidate(x=3.0, y=0.0, of_a='cir-1', of_b='seg-AB', which=1)
    inside = IntersectionCandidate(x=1.0, y=0.0, of_a='cir-1', of_b='seg-AB', which=0)

    assert is_candidate_beyond_point(past_b, 'pt-B', 'cir-1', 'seg-AB', state)
    assert not is_candidate_beyond_point(inside, 'pt-B', 'cir-1', 'seg-AB', state)
    assert not is_candidate_beyond_point(past_b, 'pt-A', 'cir-1', 'seg-AB', state)


def test_candidate_beyond_point_is_vacuous_without_segment():
    state = two_point_state()
    cand = IntersectionCandidate(x=-5.0, y=0.0, of_a='cir-1', of_b='cir-2', which=0)
    assert is_candidate_beyond_point(cand, 'pt-B', 'cir-1', 'cir-2', state)
