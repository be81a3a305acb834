"""
Core data structures (dataclasses) for Kindred.

All core data structures are defined as explicit dataclasses.
"""

import math
import sys
from dataclasses import dataclass, fields
from typing import Any, Callable, FrozenSet, Mapping, Optional, Union

from kindred.core.errors import ConfigurationError

_COUNT_FIELDS = (
    "min_word_length",
    "max_word_length",
    "min_term_freq",
    "min_doc_freq",
    "max_doc_freq",
    "max_query_terms",
    "max_num_tokens_parsed",
    "max_clause_count",
)

# Lucene MoreLikeThis defaults
DEFAULT_MAX_NUM_TOKENS_PARSED = 5000
DEFAULT_MAX_QUERY_TERMS = 25
DEFAULT_MAX_CLAUSE_COUNT = 1024


@dataclass(frozen=True)
class Config:
    """
    Thresholds for one similarity query construction.

    Word length bounds and max_query_terms are disabled when zero. The term
    and document frequency minimums default to 1 because terms are scored per
    field rather than over the merged frequencies of all fields.
    """

    # Noise words
    min_word_length: int = 0
    max_word_length: int = 0
    stop_words: Optional[FrozenSet[str]] = None

    # Frequency bounds
    min_term_freq: int = 1
    min_doc_freq: int = 1
    max_doc_freq: int = sys.maxsize

    # Work caps
    max_query_terms: int = DEFAULT_MAX_QUERY_TERMS
    max_num_tokens_parsed: int = DEFAULT_MAX_NUM_TOKENS_PARSED
    max_clause_count: int = DEFAULT_MAX_CLAUSE_COUNT

    # Boosting
    boost_terms: bool = False
    term_boost_factor: float = 1.0

    def __post_init__(self):
        if isinstance(self.stop_words, str):
            raise ConfigurationError("stop_words must be a collection of words, not a string")
        if self.stop_words is not None and not isinstance(self.stop_words, frozenset):
            object.__setattr__(self, "stop_words", frozenset(self.stop_words))

        for name in _COUNT_FIELDS:
            value = getattr(self, name)
            # bool is an int subclass
            if isinstance(value, bool) or not isinstance(value, int):
                raise ConfigurationError(f"{name} must be an integer, got {value!r}")
            if value < 0:
                raise ConfigurationError(f"{name} must be >= 0, got {value}")

        if not isinstance(self.boost_terms, bool):
            raise ConfigurationError(f"boost_terms must be a boolean, got {self.boost_terms!r}")
        factor = self.term_boost_factor
        if isinstance(factor, bool) or not isinstance(factor, (int, float)):
            raise ConfigurationError(f"term_boost_factor must be a number, got {factor!r}")
        if not math.isfinite(factor) or factor < 0:
            raise ConfigurationError(f"term_boost_factor must be finite and >= 0, got {factor}")

        if self.min_word_length and self.max_word_length and self.min_word_length > self.max_word_length:
            raise ConfigurationError(
                f"min_word_length ({self.min_word_length}) is greater than "
                f"max_word_length ({self.max_word_length})"
            )
        if self.min_doc_freq > self.max_doc_freq:
            raise ConfigurationError(
                f"min_doc_freq ({self.min_doc_freq}) is greater than max_doc_freq ({self.max_doc_freq})"
            )
        if self.max_clause_count < 1:
            raise ConfigurationError(f"max_clause_count must be >= 1, got {self.max_clause_count}")

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Config":
        """
        Build a Config from a plain mapping (e.g. a parsed JSON file).

        Args:
            data: Mapping of Config field names to values

        Returns:
            Config instance
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigurationError(f"Unknown configuration keys: {', '.join(unknown)}")
        return cls(**data)


Query = Any  # kindred.search.query.Query; kept opaque here to avoid an import cycle
Transformer = Callable[[Any], Optional[str]]
Customizer = Callable[[Query], Query]


def _identity(query):
    return query


@dataclass(frozen=True)
class FieldSpec:
    """
    One field requested for similarity comparison.

    Attributes:
        name: Field name in the index
        transformer: Converts a projected raw value into text; None means the
            builder's document-wide transformer
        ignore_analyzer: Treat the field text as one opaque term
        customizer: Post-processor applied to the field's sub-query
    """

    name: str
    transformer: Optional[Transformer] = None
    ignore_analyzer: bool = False
    customizer: Customizer = _identity


@dataclass(frozen=True)
class ByIndexPosition:
    """Reference document already in the index, identified by document number."""

    position: int


@dataclass(frozen=True)
class ByFieldValues:
    """Reference entity that is not (necessarily) indexed; fields are projected from it."""

    entity: Any


ReferenceDocument = Union[ByIndexPosition, ByFieldValues]


@dataclass(frozen=True)
class ScoredTerm:
    """A candidate query term for one field."""

    term: str
    field: str
    score: float
    idf: float
    doc_freq: int  # documents in the corpus containing the term
    term_freq: int  # occurrences in the reference document

    @property
    def rank_key(self) -> float:
        """Sort key ordering terms by descending score."""
        return -self.score
