import logging

import pytest

import euclid_engine.selectors as selectors
from euclid_engine import (
    CircleSelector,
    EngineConfig,
    IntersectionAction,
    IntersectionCandidate,
    SegmentSelector,
    add_circle,
    add_segment,
    find_matching_candidate,
    initialize_given,
    resolve_selector,
    select_default_candidate,
)
from euclid_engine.propositions.common import given_point, given_segment
from euclid_engine.selectors import without_coincident


def cand(x, y, of_a='cir-1', of_b='cir-2', which=0):
    return IntersectionCandidate(x=x, y=y, of_a=of_a, of_b=of_b, which=which)


@pytest.fixture
def state():
    st = initialize_given([
        given_point('A', (0, 0)),
        given_point('B', (2, 0)),
        given_point('C', (1, 3)),
        given_segment('A', 'B'),
    ])
    st, _ = add_circle(st, 'pt-A', 'pt-B')
    st, _ = add_circle(st, 'pt-B', 'pt-A')
    st, _ = add_segment(st, 'pt-C', 'pt-A')
    return st


def test_resolve_selector_by_id_and_structure(state):
    assert resolve_selector('cir-2', state) == 'cir-2'
    assert resolve_selector('cir-7', state) is None
    assert resolve_selector(CircleSelector('pt-B', 'pt-A'), state) == 'cir-2'
    assert resolve_selector(CircleSelector('pt-A', 'pt-C'), state) is None


def test_segment_selector_ignores_orientation(state):
    assert resolve_selector(SegmentSelector('pt-A', 'pt-B'), state) == 'seg-AB'
    assert resolve_selector(SegmentSelector('pt-B', 'pt-A'), state) == 'seg-AB'
    assert resolve_selector(SegmentSelector('pt-A', 'pt-C'), state) == 'seg-2'


def test_resolve_selector_rejects_unknown_type(state):
    with pytest.raises(TypeError):
        resolve_selector(42, state)


def test_default_pick_prefers_highest_y_then_earliest():
    assert select_default_candidate([]) is None
    low, high = cand(0, -1), cand(0, 1, which=1)
    assert select_default_candidate([low, high]) is high

    first, second = cand(0, 1), cand(0, 1, which=1)
    assert select_default_candidate([first, second]) is first


def test_level_candidates_log_ambiguity(caplog):
    left, right = cand(-1, 0.5), cand(1, 0.5, which=1)
    with caplog.at_level(logging.WARNING, logger='euclid_engine.selectors'):
        picked = select_default_candidate([left, right])

    assert picked is left
    assert any('ambiguous' in rec.getMessage() for rec in caplog.records)


def test_ambiguity_warning_can_be_disabled(caplog, monkeypatch):
    monkeypatch.setattr(selectors, "get_engine_config", lambda: EngineConfig(warn_on_ambiguous_pick=False))
    with caplog.at_level(logging.WARNING, logger='euclid_engine.selectors'):
        select_default_candidate([cand(-1, 0.5), cand(1, 0.5, which=1)])

    assert caplog.records == []


def test_matching_filters_by_parent_pair_in_either_order(state):
    candidates = [
        cand(1, 1.7, of_a='cir-2', of_b='cir-1'),
        cand(1, -1.7, of_a='cir-2', of_b='cir-1', which=1),
        cand(0.5, 5.0, of_a='seg-2', of_b='cir-2'),
    ]
    expected = IntersectionAction(
        of_a=CircleSelector('pt-A', 'pt-B'),
        of_b=CircleSelector('pt-B', 'pt-A'),
        label='D',
    )

    assert find_matching_candidate(expected, candidates, state) is candidates[0]


def test_matching_without_selectors_takes_default_pick(state):
    candidates = [cand(0, 1), cand(5, 4, of_a='seg-2', of_b='cir-2')]
    assert find_matching_candidate(IntersectionAction(), candidates, state) is candidates[1]


def test_matching_with_unresolved_selector_finds_nothing(state):
    expected = IntersectionAction(of_a=CircleSelector('pt-C', 'pt-A'), of_b='cir-1')
    assert find_matching_candidate(expected, [cand(0, 1)], state) is None


def test_matching_honours_beyond_point(state):
    candidates = [
        cand(1.0, 0.0, of_a='cir-1', of_b='seg-AB'),
        cand(3.0, 0.0, of_a='cir-1', of_b='seg-AB', which=1),
    ]
    expected = IntersectionAction(
        of_a=CircleSelector('pt-A', 'pt-B'),
        of_b=SegmentSelector('pt-A', 'pt-B'),
        beyond_id='pt-B',
    )
    assert find_matching_candidate(expected, candidates, state) is candidates[1]

    expected = IntersectionAction(of_a='cir-1', of_b='seg-AB', beyond_id='pt-B')
    assert find_matching_candidate(expected, candidates[:1], state) is None


def test_without_coincident_drops_every_copy_of_picked():
    picked = cand(1, 1)
    rest = [picked, cand(1.0002, 0.9999, of_a='seg-1', which=1), cand(2, 2)]
    assert without_coincident(rest, picked) == [cand(2, 2)]
