"""Sentence graph ingestion, generation and snapshot checks."""
import random

import pytest
from pydantic import ValidationError

from test_utils import corpus_graph

from sentencegraph.graph import GenerationResult, SentenceGraph
from sentencegraph.nodes import Tail


def test_analyze_creates_expected_transitions():
    graph = SentenceGraph(2)
    graph.analyze(["the", "cat", "sat"])

    start = graph.node_at("")
    assert (start.links, start.freqs, start.weight) == (["the"], [1], 1)

    the = graph.node_at("the")
    assert (the.links, the.freqs, the.weight) == (["cat"], [1], 1)

    thecat = graph.node_at("thecat")
    assert (thecat.links, thecat.freqs, thecat.weight) == (["sat"], [1], 1)

    end = graph.node_at("catsat")
    assert end.links == []
    assert end.weight == 1
    assert end.is_exit is True
    assert len(graph) == 4


def test_repeated_transitions_accumulate_frequency():
    graph = SentenceGraph(1)
    graph.analyze(["a", "b"])
    graph.analyze(["a", "b"])

    node = graph.node_at("a")
    assert node.links == ["b"]
    assert node.freqs == [2]
    assert node.weight == 2
    assert graph.node_at("b").exit_weight == 2


def test_tail_is_lowercased_but_words_keep_case():
    graph = SentenceGraph(1)
    graph.analyze(["The", "Cat"])

    assert graph.node_at("the").links == ["Cat"]
    assert graph.node_at("THE") is graph.node_at("the")
    assert graph.node_at(Tail.from_tokens(["The"])) is graph.node_at("the")
    assert "cat" in graph


def test_tail_keys_join_without_separator():
    assert Tail.from_tokens(["ab", "c"]) == Tail.from_tokens(["A", "bc"])
    assert hash(Tail.from_tokens(["ab", "c"])) == hash(Tail(("abc",)))
    assert Tail().key == ""


@pytest.mark.parametrize("order, expected", [(0, 1), (-3, 1), (1, 1), (2.7, 2), (4, 4)])
def test_order_is_floored_to_at_least_one(order, expected):
    assert SentenceGraph(order).order == expected


def test_empty_sequence_is_noop():
    graph = SentenceGraph(3)
    graph.analyze([])
    assert len(graph) == 0


def test_weight_equals_freqs_plus_exits():
    graph = corpus_graph(order=2)
    for _, node in graph.items():
        assert len(node.links) == len(node.freqs)
        assert node.weight >= sum(node.freqs)
        assert node.is_exit == (node.exit_weight > 0)


def test_unknown_start_context_yields_empty_result():
    graph = SentenceGraph(3)
    result = graph.generate_once(10, 20, ["deer"], 2.0, 1.5, rng=random.Random(1))
    assert result == GenerationResult("", 0.0)
    assert len(graph) == 0


def test_generation_does_not_mutate_graph():
    graph = corpus_graph(order=2)
    before = graph.to_snapshot().to_wire()
    rng = random.Random(3)
    for _ in range(50):
        graph.generate_once(5, 40, ["deer", "winter", "unseen"], 2.0, 1.5, rng=rng)
    assert graph.to_snapshot().to_wire() == before


def test_keyword_bias_prefers_matching_edges():
    graph = SentenceGraph(1)
    for _ in range(3):
        graph.analyze(["cat", "sat"])
    graph.analyze(["dog", "ran"])

    for seed in range(10):
        result = graph.generate_once(1, 10, ["DOG"], 1.0, 1.0, rng=random.Random(seed))
        # Every draw has chance 1: two edges, one keyword-bearing word.
        assert result == GenerationResult("dogran", 2.0)


def test_score_collapses_without_keyword_match():
    graph = corpus_graph(order=2)
    rng = random.Random(5)
    successes = 0
    for _ in range(40):
        result = graph.generate_once(3, 80, ["zebra"], 2.0, 1.5, rng=rng)
        assert result.score == 0.0
        successes += result.ok
    assert successes > 0


def test_no_keywords_scores_zero():
    graph = corpus_graph(order=2)
    result = graph.generate_once(3, 80, [], 2.0, 1.5, rng=random.Random(9))
    assert result.score == 0.0


def test_early_termination_becomes_sentence_break():
    graph = SentenceGraph(1)
    graph.analyze(["hi"])

    result = graph.generate_once(3, 10, ["hi"], 1.0, 1.0, rng=random.Random(0))
    # "hi", break, "hi" again (already found, so the filter falls back), then stop.
    assert result.text == "hi hi"
    assert result.score == 3.0


def test_exhausting_max_length_fails():
    graph = SentenceGraph(1)
    graph.analyze(["a", "a", "a"])
    result = graph.generate_once(100, 5, ["a"], 2.0, 1.5, rng=random.Random(2))
    assert result == GenerationResult.empty()
    assert not result.ok


def test_found_count_raises_score_by_beta():
    graph = SentenceGraph(1)
    graph.analyze(["deer", "forest"])

    result = graph.generate_once(1, 10, ["deer", "forest"], 1.0, 2.0, rng=random.Random(0))
    assert result.text == "deerforest"
    # Two forced draws, two distinct matches: 2 * 2 ** 2.
    assert result.score == pytest.approx(8.0)


@pytest.mark.parametrize("given, clamped", [(1000.0, 16.0), (0.0, 0.0625), (-4.0, 0.0625)])
def test_alpha_is_clamped(given, clamped):
    graph = corpus_graph(order=1)
    for seed in range(5):
        a = graph.generate_once(4, 60, ["deer"], given, 1.5, rng=random.Random(seed))
        b = graph.generate_once(4, 60, ["deer"], clamped, 1.5, rng=random.Random(seed))
        assert a == b


@pytest.mark.parametrize("given, clamped", [(99.0, 16.0), (0.0, 0.0625)])
def test_beta_is_clamped(given, clamped):
    graph = corpus_graph(order=1)
    for seed in range(5):
        a = graph.generate_once(4, 60, ["deer"], 2.0, given, rng=random.Random(seed))
        b = graph.generate_once(4, 60, ["deer"], 2.0, clamped, rng=random.Random(seed))
        assert a == b


def test_snapshot_round_trip():
    graph = corpus_graph(order=3)
    wire = graph.to_snapshot().to_wire()

    rebuilt = SentenceGraph.from_snapshot(wire)
    assert rebuilt.to_snapshot().to_wire() == wire
    assert wire["order"] == 3
    assert set(wire["graph"][""]) == {"links", "freqs", "weight", "isExit"}


def test_rebuilt_graph_samples_identically():
    graph = corpus_graph(order=2)
    rebuilt = SentenceGraph.from_snapshot(graph.to_snapshot())
    for seed in range(10):
        args = (4, 60, ["deer", "antlers"], 2.0, 1.5)
        assert graph.generate_once(*args, rng=random.Random(seed)) == rebuilt.generate_once(
            *args, rng=random.Random(seed)
        )


def test_snapshot_rejects_misaligned_node():
    with pytest.raises(ValidationError):
        SentenceGraph.from_snapshot(
            {"order": 1, "graph": {"": {"links": ["a", "b"], "freqs": [1], "weight": 1, "isExit": False}}}
        )


def test_snapshot_rejects_non_positive_order():
    with pytest.raises(ValidationError):
        SentenceGraph.from_snapshot({"order": 0, "graph": {}})
