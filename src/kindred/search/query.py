"""
Query tree produced by the similarity query builder.

Only what a similarity query needs: point term queries combined with OR
semantics, each optionally boosted.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Tuple, Union

from kindred.core.contracts import DEFAULT_MAX_CLAUSE_COUNT
from kindred.core.errors import TooManyClauses


def _format_boost(boost: float) -> str:
    return "" if boost == 1.0 else f"^{boost:g}"


@dataclass(frozen=True)
class Term:
    """A (field, text) pair."""

    field: str
    text: str

    def __str__(self) -> str:
        return f"{self.field}:{self.text}"


@dataclass
class TermQuery:
    """Matches documents containing a single term."""

    term: Term
    boost: float = 1.0

    def terms(self) -> Iterator[Tuple[str, str]]:
        yield self.term.field, self.term.text

    def to_dict(self) -> Dict[str, Any]:
        return {"term": {self.term.field: self.term.text}, "boost": self.boost}

    def __str__(self) -> str:
        return f"{self.term}{_format_boost(self.boost)}"


@dataclass
class BooleanQuery:
    """
    Disjunction: matches if any clause matches.

    Holds at most ``max_clause_count`` clauses; ``add`` raises TooManyClauses
    beyond that.
    """

    max_clause_count: int = DEFAULT_MAX_CLAUSE_COUNT
    clauses: List["Query"] = field(default_factory=list)
    boost: float = 1.0

    def add(self, query: "Query"):
        """
        Add a SHOULD clause.

        Raises:
            TooManyClauses: If the clause ceiling is already reached
        """
        if len(self.clauses) >= self.max_clause_count:
            raise TooManyClauses(self.max_clause_count)
        self.clauses.append(query)

    def __len__(self) -> int:
        return len(self.clauses)

    def terms(self) -> Iterator[Tuple[str, str]]:
        """Iterate (field, term) pairs of every leaf clause, depth first."""
        for clause in self.clauses:
            yield from clause.terms()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "bool": {"should": [clause.to_dict() for clause in self.clauses]},
            "boost": self.boost,
        }

    def __str__(self) -> str:
        parts = []
        for clause in self.clauses:
            if isinstance(clause, BooleanQuery):
                parts.append(f"({clause})")
            else:
                parts.append(str(clause))
        body = " ".join(parts)
        if self.boost != 1.0:
            return f"({body}){_format_boost(self.boost)}"
        return body


Query = Union[TermQuery, BooleanQuery]


@dataclass(frozen=True)
class FieldCustomizer:
    """Per-field post-processor: multiplies the field sub-query's boost."""

    boost: float = 1.0

    def __call__(self, query: Query) -> Query:
        if self.boost != 1.0:
            query.boost *= self.boost
        return query
