import pytest

from euclid_engine import (
    EngineConfig,
    GhostSegment,
    IntersectionAction,
    compute_macro_ghost,
    initialize_given,
)
import euclid_engine.ghost as ghost
from euclid_engine.propositions import PROP_3
from euclid_engine.propositions.common import given_point


def test_equilateral_ghost_replays_every_step():
    parent = initialize_given([given_point('P', (0, 0)), given_point('Q', (2, 0))])
    layers = compute_macro_ghost(1, ['pt-P', 'pt-Q'], parent, at_step=4)

    assert len(layers) == 1
    layer = layers[0]
    assert (layer.prop_id, layer.depth, layer.at_step) == (1, 1, 4)
    assert [el.kind for el in layer.elements] == ['circle', 'circle', 'point', 'segment', 'segment']
    assert [el.r for el in layer.elements[:2]] == pytest.approx([2.0, 2.0])
    apex = layer.elements[2]
    assert (apex.x, apex.y) == pytest.approx((1.0, 3 ** 0.5))


def test_nested_macros_produce_deeper_layers():
    parent = initialize_given(PROP_3.given_elements)
    layers = compute_macro_ghost(3, ['pt-A', 'pt-B', 'pt-C', 'pt-D'], parent, at_step=2)

    assert [layer.depth for layer in layers] == [1, 2, 3]
    assert [layer.prop_id for layer in layers] == [3, 2, 1]
    assert all(layer.at_step == 2 for layer in layers)


def test_transfer_ghost_marks_productions():
    parent = initialize_given([given_point('P', (0, 0)), given_point('Q', (2, 0)), given_point('R', (2, 1))])
    layers = compute_macro_ghost(2, ['pt-P', 'pt-Q', 'pt-R'], parent, at_step=0)

    productions = [el for el in layers[0].elements if isinstance(el, GhostSegment) and el.is_production]
    assert len(productions) == 2


def test_fallback_color_comes_from_config(monkeypatch):
    state = initialize_given(PROP_3.given_elements)
    monkeypatch.setattr(ghost, "get_engine_config", lambda: EngineConfig(production_fallback_color="#abcdef"))

    expected = IntersectionAction(of_a='cir-1', of_b='seg-9', beyond_id='pt-B')
    assert ghost._production_color(state, expected, 'pt-B') == "#abcdef"


@pytest.mark.parametrize(
    "prop_id, inputs",
    [
        (4, ['pt-P', 'pt-Q', 'pt-P']),
        (1, ['pt-P', 'pt-Z']),
    ],
)
def test_no_ghost_for_unknown_macro_or_missing_input(prop_id, inputs):
    parent = initialize_given([given_point('P', (0, 0)), given_point('Q', (2, 0))])
    assert compute_macro_ghost(prop_id, inputs, parent, at_step=0) == []


def test_parent_state_is_not_touched():
    parent = initialize_given([given_point('P', (0, 0)), given_point('Q', (2, 0))])
    elements = parent.elements
    compute_macro_ghost(1, ['pt-P', 'pt-Q'], parent, at_step=0)

    assert parent.elements == elements
    assert parent.next_label_index == 17
