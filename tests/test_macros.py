import math

import pytest

from euclid_engine import (
    MACRO_REGISTRY,
    ConstructionCircle,
    ConstructionPoint,
    ConstructionSegment,
    create_fact_store,
    distance_pair,
    get_macro,
    get_point,
    initialize_given,
    query_equality,
)
from euclid_engine.facts import PropCitation
from euclid_engine.propositions.common import given_point


def points_state(**coords):
    return initialize_given([given_point(label, xy) for label, xy in coords.items()])


def run_macro(prop_id, state, inputs, output_labels=None, store=None):
    store = store if store is not None else create_fact_store()
    result = get_macro(prop_id).execute(state, inputs, [], store, 3, False, output_labels)
    return result, store


def test_registry_describes_inputs():
    assert sorted(MACRO_REGISTRY) == [1, 2, 3]
    for prop_id, macro in MACRO_REGISTRY.items():
        assert macro.prop_id == prop_id
        assert macro.input_count == len(macro.input_labels) == len(macro.input_to_given_ids)
    assert get_macro(4) is None


def test_equilateral_triangle_adds_apex_and_sides_only():
    state = points_state(A=(0, 0), B=(2, 0))
    result, store = run_macro(1, state, ['pt-A', 'pt-B'])

    apex = get_point(result.state, 'pt-C')
    assert apex is not None
    assert (apex.x, apex.y) == pytest.approx((1.0, math.sqrt(3)))
    assert [el.kind for el in result.added_elements] == ['point', 'segment', 'segment']
    assert not any(isinstance(el, ConstructionCircle) for el in result.state.elements)

    assert [f.statement for f in result.new_facts] == ['AC = AB', 'BC = BA']
    assert all(f.at_step == 3 for f in result.new_facts)
    assert query_equality(store, distance_pair('pt-A', 'pt-C'), distance_pair('pt-B', 'pt-C'))


def test_equilateral_triangle_ghosts_its_circles():
    result, _ = run_macro(1, points_state(A=(0, 0), B=(2, 0)), ['pt-A', 'pt-B'], {'apex': 'D'})

    assert get_point(result.state, 'pt-D') is not None
    assert len(result.ghost_layers) == 1
    layer = result.ghost_layers[0]
    assert (layer.prop_id, layer.depth) == (1, 1)
    assert [el.kind for el in layer.elements] == ['circle', 'circle']
    assert [el.r for el in layer.elements] == pytest.approx([2.0, 2.0])


def test_missing_input_leaves_everything_unchanged():
    state = points_state(A=(0, 0), B=(2, 0))
    result, store = run_macro(1, state, ['pt-A', 'pt-Z'])

    assert result.state is state
    assert result.added_elements == []
    assert result.new_facts == []
    assert store.facts == []


@pytest.mark.parametrize(
    "prop_id, inputs",
    [
        (1, ['pt-A']),
        (1, []),
        (2, ['pt-A', 'pt-B']),
        (3, ['pt-A', 'pt-B']),
        (3, ['pt-A', 'pt-B', 'pt-A']),
    ],
)
def test_short_input_list_leaves_everything_unchanged(prop_id, inputs):
    state = points_state(A=(0, 0), B=(2, 0))
    result, store = run_macro(prop_id, state, inputs)

    assert result.state is state
    assert result.added_elements == []
    assert result.new_facts == []
    assert result.ghost_layers == []
    assert store.facts == []


def test_equilateral_triangle_on_coincident_points_is_a_no_op():
    state = points_state(A=(1, 1), B=(1, 1))
    result, store = run_macro(1, state, ['pt-A', 'pt-B'])

    assert result.state is state
    assert result.added_elements == []
    assert result.new_facts == []
    assert store.facts == []


def test_transfer_places_length_toward_segment_start():
    state = points_state(A=(0, 0), B=(2, 0), C=(2, 1.5))
    result, store = run_macro(2, state, ['pt-A', 'pt-B', 'pt-C'], {'result': 'F'})

    placed = get_point(result.state, 'pt-F')
    assert (placed.x, placed.y) == pytest.approx((1.5, 0.0))
    assert isinstance(result.added_elements[1], ConstructionSegment)

    (new_fact,) = result.new_facts
    assert new_fact.statement == 'AF = BC'
    assert new_fact.citation == PropCitation(prop_id=2)
    assert [(gl.prop_id, gl.depth) for gl in result.ghost_layers] == [(2, 1), (1, 2)]


def test_transfer_from_coincident_point_goes_straight_up():
    state = points_state(A=(0, 0), B=(1, 0))
    result, _ = run_macro(2, state, ['pt-A', 'pt-A', 'pt-B'])

    placed = result.added_elements[0]
    assert isinstance(placed, ConstructionPoint)
    assert (placed.x, placed.y) == pytest.approx((0.0, 1.0))
    assert len(result.ghost_layers) == 1
    assert [el.kind for el in result.ghost_layers[0].elements] == ['segment', 'circle']


def test_cut_off_runs_transfer_first():
    state = points_state(A=(0, 0), B=(4, 0), C=(1, -2), D=(2, -2))
    result, store = run_macro(3, state, ['pt-A', 'pt-B', 'pt-C', 'pt-D'], {'result': 'F'})

    cut = get_point(result.state, 'pt-F')
    assert (cut.x, cut.y) == pytest.approx((1.0, 0.0))
    assert get_point(result.state, 'pt-E') is not None
    assert [f.statement for f in result.new_facts] == ['AE = CD', 'AF = CD']
    assert query_equality(store, distance_pair('pt-A', 'pt-F'), distance_pair('pt-A', 'pt-E'))
    assert [(gl.prop_id, gl.depth) for gl in result.ghost_layers] == [(3, 1), (2, 2), (1, 3)]


def test_cut_off_from_segment_start_skips_transfer():
    state = points_state(A=(0, 0), B=(4, 0), C=(0, 1))
    result, store = run_macro(3, state, ['pt-A', 'pt-B', 'pt-A', 'pt-C'], {'result': 'G'})

    assert [el.id for el in result.added_elements] == ['pt-G']
    (new_fact,) = result.new_facts
    assert new_fact.statement == 'AG = AC'
    assert len(store.facts) == 1
    placed = result.added_elements[0]
    assert (placed.x, placed.y) == pytest.approx((1.0, 0.0))


def test_cut_off_does_not_reuse_reserved_result_label():
    state = points_state(A=(0, 2.5), B=(-2, 0), C=(1, 0))
    result, _ = run_macro(3, state, ['pt-B', 'pt-A', 'pt-A', 'pt-C'], {'result': 'D'})

    ids = [el.id for el in result.state.elements]
    assert len(ids) == len(set(ids))
    assert 'pt-D' in ids and 'pt-E' in ids
    assert result.added_elements[-1].id == 'pt-D'
