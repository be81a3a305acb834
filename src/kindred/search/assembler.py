"""
Query assembly for the similarity query builder.

Each field contributes one disjunction of its top terms; several fields are
merged under an outer disjunction. Clause ceilings are soft limits.
"""

import logging
from typing import List, Optional

from kindred.core.contracts import Config, FieldSpec
from kindred.core.errors import ConfigurationError, TooManyClauses
from kindred.search.query import BooleanQuery, Query, Term, TermQuery
from kindred.search.scorer import ScoredTermQueue

logger = logging.getLogger(__name__)


class QueryAssembler:
    """Builds the final similarity query from ranked per-field terms."""

    def __init__(self, config: Config, entity_type: Optional[str] = None):
        self.config = config
        self.entity_type = entity_type

    def assemble(self, queues: List[Optional[ScoredTermQueue]], field_specs: List[FieldSpec]) -> Query:
        """
        Create the similarity query.

        The number of terms is limited per field, so the query holds up to
        ``len(field_specs) * max_query_terms`` terms.

        Args:
            queues: Ranked terms per field (None for an incompatible field),
                aligned with ``field_specs``
            field_specs: Requested fields

        Returns:
            The field's sub-query for a single field, otherwise a disjunction
            of the fields' sub-queries

        Raises:
            ConfigurationError: If no field was requested, or the only
                requested field is incompatible
        """
        if not field_specs:
            raise ConfigurationError("Querying more like this on 0 fields")

        if len(field_specs) == 1:
            return self.field_query(queues[0], field_specs[0])

        query = BooleanQuery(max_clause_count=self.config.max_clause_count)
        for queue, spec in zip(queues, field_specs):
            if queue is None:
                logger.debug("Dropping incompatible field %s", spec.name)
                continue
            disjunction = self._disjunction(queue, spec)
            if not disjunction.clauses:
                logger.debug("Dropping field %s: no term survived filtering", spec.name)
                continue
            try:
                query.add(spec.customizer(disjunction))
            except TooManyClauses:
                logger.debug("Clause ceiling reached, ignoring remaining fields from %s", spec.name)
                break
        return query

    def field_query(self, queue: Optional[ScoredTermQueue], spec: FieldSpec) -> Query:
        """
        Create the sub-query of one field, post-processed by its customizer.

        Raises:
            ConfigurationError: If the field is incompatible with term extraction
        """
        if queue is None:
            raise ConfigurationError(
                f"Field {spec.name} cannot be used in a more like this query on entity {self.entity_type}"
            )
        return spec.customizer(self._disjunction(queue, spec))

    def _disjunction(self, queue: ScoredTermQueue, spec: FieldSpec) -> BooleanQuery:
        config = self.config
        query = BooleanQuery(max_clause_count=config.max_clause_count)
        query_terms = 0
        best = queue.top()
        best_score = best.score if best is not None else 0.0

        for scored in queue.drain():
            term_query = TermQuery(Term(scored.field, scored.term))
            if config.boost_terms:
                if best_score:
                    term_query.boost = config.term_boost_factor * (scored.score / best_score)
                else:
                    term_query.boost = config.term_boost_factor

            try:
                query.add(term_query)
            except TooManyClauses:
                logger.debug("Clause ceiling reached for field %s after %d terms", spec.name, query_terms)
                break

            query_terms += 1
            if config.max_query_terms > 0 and query_terms >= config.max_query_terms:
                break
        return query
