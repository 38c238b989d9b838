import copy

import pytest

from euclid_engine import (
    add_angle_fact,
    add_fact,
    angle_measure,
    create_fact_store,
    distance_pair,
    facts_up_to_step,
    format_citation,
    get_equal_distances,
    get_proposition,
    is_angle_fact,
    query_angle_equality,
    query_equality,
    rebuild_fact_store,
    replay_construction,
    root_fact_id,
)
from euclid_engine.facts import (
    CN1Citation,
    CN3Citation,
    CN4Citation,
    Def15Citation,
    GivenCitation,
    PropCitation,
)


def dp(a, b):
    return distance_pair(f"pt-{a}", f"pt-{b}")


def fact(store, left, right, step=0, citation=None):
    return add_fact(
        store,
        left,
        right,
        citation or Def15Citation(circle_id='cir-1'),
        f"{left.a}{left.b} = {right.a}{right.b}",
        "test",
        step,
    )


def test_distance_pair_and_angle_measure_are_canonical():
    assert distance_pair('pt-B', 'pt-A') == distance_pair('pt-A', 'pt-B')
    assert angle_measure('pt-A', 'pt-C', 'pt-B') == angle_measure('pt-A', 'pt-B', 'pt-C')
    assert angle_measure('pt-A', 'pt-B', 'pt-C') != angle_measure('pt-B', 'pt-A', 'pt-C')


def test_add_fact_assigns_sequential_ids():
    store = create_fact_store()
    first = fact(store, dp('A', 'B'), dp('C', 'D'))
    second = fact(store, dp('A', 'B'), dp('E', 'F'))

    assert [f.id for f in first + second] == [1, 2]
    assert store.next_id == 3
    assert store.facts == first + second


def test_entailed_fact_is_not_recorded():
    store = create_fact_store()
    fact(store, dp('A', 'B'), dp('C', 'D'))
    fact(store, dp('C', 'D'), dp('E', 'F'))

    assert fact(store, dp('E', 'F'), dp('B', 'A')) == []
    assert fact(store, dp('A', 'B'), dp('A', 'B')) == []
    assert len(store.facts) == 2
    assert store.next_id == 3


def test_query_equality_is_reflexive_and_transitive():
    store = create_fact_store()
    assert query_equality(store, dp('X', 'Y'), dp('Y', 'X'))
    assert not query_equality(store, dp('A', 'B'), dp('C', 'D'))

    fact(store, dp('A', 'B'), dp('C', 'D'))
    fact(store, dp('C', 'D'), dp('E', 'F'))
    assert query_equality(store, dp('F', 'E'), dp('B', 'A'))


def test_get_equal_distances_returns_whole_class():
    store = create_fact_store()
    assert get_equal_distances(store, dp('A', 'B')) == [dp('A', 'B')]

    fact(store, dp('A', 'B'), dp('C', 'D'))
    fact(store, dp('E', 'F'), dp('C', 'D'))
    assert set(get_equal_distances(store, dp('A', 'B'))) == {dp('A', 'B'), dp('C', 'D'), dp('E', 'F')}


def test_root_fact_id_tracks_latest_merge():
    store = create_fact_store()
    assert root_fact_id(store, dp('A', 'B')) is None

    fact(store, dp('A', 'B'), dp('C', 'D'))
    assert root_fact_id(store, dp('C', 'D')) == 1
    fact(store, dp('E', 'F'), dp('G', 'H'))
    fact(store, dp('A', 'B'), dp('G', 'H'))
    assert root_fact_id(store, dp('E', 'F')) == 3


def test_angles_and_distances_live_in_separate_classes():
    store = create_fact_store()
    abc = angle_measure('pt-B', 'pt-A', 'pt-C')
    def_ = angle_measure('pt-E', 'pt-D', 'pt-F')
    added = add_angle_fact(store, abc, def_, CN4Citation(), "∠ABC = ∠DEF", "test", 2)

    assert len(added) == 1
    assert is_angle_fact(added[0])
    assert query_angle_equality(store, def_, abc)
    assert add_angle_fact(store, def_, abc, CN4Citation(), "∠DEF = ∠ABC", "test", 3) == []
    assert not query_equality(store, dp('A', 'B'), dp('D', 'E'))


def test_rebuild_and_copies_are_independent():
    store = create_fact_store()
    fact(store, dp('A', 'B'), dp('C', 'D'))

    rebuilt = rebuild_fact_store(store.facts)
    cloned = copy.deepcopy(store)
    fact(rebuilt, dp('C', 'D'), dp('E', 'F'))

    assert query_equality(rebuilt, dp('A', 'B'), dp('E', 'F'))
    assert not query_equality(store, dp('A', 'B'), dp('E', 'F'))
    assert not query_equality(cloned, dp('A', 'B'), dp('E', 'F'))
    assert cloned.facts == store.facts
    assert cloned.facts is not store.facts


def test_facts_up_to_step_is_exclusive():
    store = create_fact_store()
    fact(store, dp('A', 'B'), dp('C', 'D'), step=-1)
    fact(store, dp('A', 'B'), dp('E', 'F'), step=0)
    fact(store, dp('A', 'B'), dp('G', 'H'), step=2)

    assert [f.at_step for f in facts_up_to_step(store.facts, 0)] == [-1]
    assert [f.at_step for f in facts_up_to_step(store.facts, 3)] == [-1, 0, 2]


@pytest.mark.parametrize(
    "citation, label",
    [
        (Def15Citation(circle_id='cir-1'), "Def.15"),
        (CN1Citation(via=distance_pair('pt-A', 'pt-B')), "C.N.1"),
        (CN3Citation(whole=distance_pair('pt-A', 'pt-C'), part=distance_pair('pt-A', 'pt-B')), "C.N.3"),
        (CN4Citation(), "C.N.4"),
        (GivenCitation(), "Given"),
        (PropCitation(prop_id=3), "I.3"),
    ],
)
def test_format_citation(citation, label):
    assert format_citation(citation) == label


def test_format_citation_rejects_unknown():
    with pytest.raises(TypeError):
        format_citation("def15")


def _naive_classes(facts):
    classes = []
    for f in facts:
        merged = {f.left, f.right}
        rest = []
        for cls in classes:
            if cls & merged:
                merged |= cls
            else:
                rest.append(cls)
        classes = rest + [merged]
    return classes


def test_rebuilt_prefixes_match_naive_closure():
    prop = get_proposition(2)
    facts = replay_construction(prop.given_elements, prop.steps, prop).proof_facts
    relations = sorted({r for f in facts for r in (f.left, f.right)}, key=lambda r: (r.a, r.b))

    for cutoff in range(-1, len(prop.steps) + 2):
        prefix = facts_up_to_step(facts, cutoff)
        rebuilt = rebuild_fact_store(prefix)
        classes = _naive_classes(prefix)
        for left in relations:
            for right in relations:
                expected = left == right or any(left in cls and right in cls for cls in classes)
                assert query_equality(rebuilt, left, right) == expected
