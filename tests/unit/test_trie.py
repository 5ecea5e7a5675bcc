from __future__ import annotations

import random

import pytest

from src.domain.algorithms.trie import PrefixIndex, clean_string

WORDS = [
    "top dog",
    "top shelf",
    "tops",
    "toppings",
    "telegraph avenue",
    "berkeley bowl",
    "berkeley",
]


def _index(words: list[str]) -> PrefixIndex:
    index = PrefixIndex()
    for w in words:
        index.insert(w)
    return index


def test_clean_string_strips_punctuation_and_lowercases() -> None:
    assert clean_string("Top Dog!") == "top dog"
    assert clean_string("McDonald's #3") == "mcdonalds "
    assert clean_string("123") == ""


def test_suggest_returns_exact_prefix_subset_in_lexicographic_order() -> None:
    index = _index(WORDS)

    assert index.suggest("top") == ["top dog", "top shelf", "toppings", "tops"]
    assert index.suggest("berkeley") == ["berkeley", "berkeley bowl"]
    assert index.suggest("tel") == ["telegraph avenue"]


def test_suggest_includes_the_prefix_when_it_is_a_word() -> None:
    index = _index(["tops", "topsoil"])
    assert index.suggest("tops") == ["tops", "topsoil"]


def test_suggest_without_match_is_empty() -> None:
    index = _index(WORDS)
    assert index.suggest("zebra") == []
    assert index.suggest("topx") == []


def test_suggest_cleans_the_query() -> None:
    index = _index(WORDS)
    assert index.suggest("BERKELEY B.") == ["berkeley bowl"]


def test_insert_is_idempotent() -> None:
    once = _index(WORDS)
    twice = _index(WORDS + WORDS)

    assert len(once) == len(twice) == len(WORDS)
    for prefix in ["", "t", "top", "berk", "x"]:
        assert once.suggest(prefix) == twice.suggest(prefix)


def test_empty_cleaned_words_are_ignored() -> None:
    index = _index(["!!!", "42"])
    assert len(index) == 0
    assert index.suggest("") == []


def test_contains_checks_whole_words() -> None:
    index = _index(WORDS)
    assert "Top Dog" in index
    assert "top d" not in index


@pytest.mark.parametrize("seed", [5, 11])
def test_suggest_matches_filtering_on_random_words(seed: int) -> None:
    rng = random.Random(seed)
    alphabet = "abc "
    words = {
        "".join(rng.choice(alphabet) for _ in range(rng.randint(1, 6))) for _ in range(200)
    }
    index = _index(sorted(words))

    for prefix in ["", "a", "ab", "c ", "bca", "cc"]:
        expected = sorted(w for w in words if w.startswith(prefix))
        assert index.suggest(prefix) == expected
