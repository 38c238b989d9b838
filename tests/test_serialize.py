from euclid_engine import (
    GhostCircle,
    GhostLayer,
    GhostPoint,
    GhostSegment,
    add_circle,
    add_fact,
    create_fact_store,
    distance_pair,
    get_proposition,
    initialize_given,
    replay_construction,
    serialize_citations,
    serialize_construction_state,
    serialize_full_proof_state,
    serialize_ghost_layers,
    serialize_proof_facts,
)
from euclid_engine.facts import Def15Citation
from euclid_engine.propositions.common import given_point, given_segment


def test_empty_inputs_have_placeholders():
    assert serialize_proof_facts([]) == "No facts proven yet."
    assert serialize_construction_state(initialize_given([])) == "Empty construction."
    assert serialize_ghost_layers([]) == "No ghost geometry."
    assert serialize_citations([]) == ""


def test_proof_facts_are_numbered():
    store = create_fact_store()
    facts = add_fact(
        store,
        distance_pair('pt-A', 'pt-C'),
        distance_pair('pt-A', 'pt-B'),
        Def15Citation(circle_id='cir-1'),
        "AC = AB",
        "Def.15: C lies on circle centered at A through B",
        2,
    )

    assert serialize_proof_facts(facts) == "1. AC = AB - Def.15: C lies on circle centered at A through B"
    assert serialize_citations(facts) == "[Def.15] AC = AB"


def test_construction_state_lists_elements_by_kind():
    state = initialize_given([given_point('A', (0, 0)), given_point('B', (1, 0)), given_segment('A', 'B')])
    state, _ = add_circle(state, 'pt-A', 'pt-B')
    state, _ = add_circle(state, 'pt-B', 'pt-A')

    assert serialize_construction_state(state) == (
        "Points: A (given), B (given)\n"
        "Segments: AB\n"
        "Circles: 2 (centered at A; centered at B)"
    )


def test_full_proof_state_of_replayed_proposition():
    prop = get_proposition(1)
    result = replay_construction(prop.given_elements, prop.steps, prop)
    text = serialize_full_proof_state(result.state, result.proof_facts)

    assert text.startswith("=== Current Construction ===\nPoints: A (given), B (given), C (intersection)")
    assert "=== Proven Facts ===\n1. BC = BA - Def.15" in text
    assert "Segments: AB, CA, CB" in text


def test_ghost_layers_are_indented_by_depth():
    layers = [
        GhostLayer(
            prop_id=2,
            depth=1,
            at_step=3,
            elements=(
                GhostSegment(0, 0, 1, 0, "#000"),
                GhostCircle(0, 0, 1, "#000"),
                GhostPoint(0, 1, "D", "#000"),
            ),
        ),
        GhostLayer(prop_id=1, depth=2, at_step=3, elements=(GhostCircle(0, 0, 1, "#000"),)),
    ]

    assert serialize_ghost_layers(layers) == (
        "I.2 at step 3: 1 point(s), 1 segment(s), 1 circle(s)\n"
        "  I.1 at step 3: 0 point(s), 0 segment(s), 1 circle(s)"
    )
