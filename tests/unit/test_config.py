"""Tests for Config validation and loading."""

import sys

import pytest

from kindred.core.contracts import Config
from kindred.core.errors import ConfigurationError


def test_defaults():
    """Defaults follow classic more-like-this, with frequency minimums lowered to 1."""
    config = Config()
    assert config.min_term_freq == 1
    assert config.min_doc_freq == 1
    assert config.max_doc_freq == sys.maxsize
    assert config.max_query_terms == 25
    assert config.max_num_tokens_parsed == 5000
    assert config.max_clause_count == 1024
    assert config.boost_terms is False
    assert config.term_boost_factor == 1.0
    assert config.stop_words is None


def test_stop_words_frozen():
    """Stop words given as any iterable are stored as a frozenset."""
    config = Config(stop_words={"the", "a"})
    assert config.stop_words == frozenset({"the", "a"})


def test_word_length_bounds_validated():
    """min_word_length above max_word_length is rejected when both are enabled."""
    with pytest.raises(ConfigurationError):
        Config(min_word_length=5, max_word_length=3)
    # Disabled bound: no constraint
    assert Config(min_word_length=5, max_word_length=0).min_word_length == 5


@pytest.mark.parametrize(
    "kwargs",
    [
        {"min_term_freq": -1},
        {"max_query_terms": -1},
        {"min_doc_freq": 10, "max_doc_freq": 5},
        {"max_clause_count": 0},
        {"max_query_terms": "5"},
        {"min_doc_freq": 1.5},
        {"max_clause_count": True},
        {"boost_terms": "yes"},
        {"term_boost_factor": -1.0},
        {"term_boost_factor": float("nan")},
        {"term_boost_factor": float("inf")},
        {"term_boost_factor": "2"},
        {"stop_words": "the"},
    ],
)
def test_invalid_values_rejected(kwargs):
    with pytest.raises(ConfigurationError):
        Config(**kwargs)


def test_from_dict():
    """from_dict builds a config and rejects unknown keys."""
    config = Config.from_dict({"max_query_terms": 3, "boost_terms": True})
    assert config.max_query_terms == 3
    assert config.boost_terms is True

    with pytest.raises(ConfigurationError, match="max_terms"):
        Config.from_dict({"max_terms": 3})


def test_from_dict_rejects_wrongly_typed_values():
    """Values of the wrong type fail validation instead of raising TypeError."""
    with pytest.raises(ConfigurationError, match="max_query_terms"):
        Config.from_dict({"max_query_terms": "5"})


def test_integer_boost_factor_accepted():
    assert Config(term_boost_factor=0).term_boost_factor == 0
