"""
Term scoring for the similarity query builder.

Turns one field's term frequency map into a queue of ScoredTerm ordered by
descending tf * idf.
"""

import heapq
import logging
from itertools import count
from typing import Iterator, List, Optional, Tuple

from kindred.core.contracts import Config, ScoredTerm
from kindred.core.errors import index_operation
from kindred.index.reader import IndexReader
from kindred.search.collector import TermFrequencyMap
from kindred.search.similarity import Similarity

logger = logging.getLogger(__name__)


class ScoredTermQueue:
    """
    Bounded max-priority queue of ScoredTerm.

    Pops the highest score first; equal scores pop in insertion order. When
    full, the lowest-scoring entry is evicted.
    """

    def __init__(self, max_size: int):
        self.max_size = max_size
        self._heap: List[Tuple[float, int, ScoredTerm]] = []
        self._sequence = count()

    def insert_with_overflow(self, scored: ScoredTerm) -> Optional[ScoredTerm]:
        """
        Insert a term, evicting the lowest-ranked entry if the queue is full.

        Returns:
            The entry that did not fit (possibly ``scored`` itself), or None
        """
        entry = (scored.rank_key, next(self._sequence), scored)
        if len(self._heap) < self.max_size:
            heapq.heappush(self._heap, entry)
            return None
        if not self._heap:
            return scored
        worst = max(self._heap)
        if entry < worst:
            self._heap.remove(worst)
            heapq.heapify(self._heap)
            heapq.heappush(self._heap, entry)
            return worst[2]
        return scored

    def top(self) -> Optional[ScoredTerm]:
        """Highest-scoring term without removing it (None when empty)."""
        return self._heap[0][2] if self._heap else None

    def drain(self) -> Iterator[ScoredTerm]:
        """Pop every term in descending score order."""
        while self._heap:
            yield heapq.heappop(self._heap)[2]

    def __len__(self) -> int:
        return len(self._heap)


class TermScorer:
    """Scores and ranks the terms of a field."""

    def __init__(
        self,
        reader: IndexReader,
        similarity: Similarity,
        config: Config,
        num_docs: int,
        entity_type: Optional[str] = None,
    ):
        """
        Initialize the scorer.

        Args:
            reader: Index reader used for document frequencies
            similarity: Provides idf(doc_freq, num_docs)
            config: Frequency thresholds
            num_docs: Corpus size, read once per request so every field's
                scores are comparable
            entity_type: Entity type name for error context
        """
        self.reader = reader
        self.similarity = similarity
        self.config = config
        self.num_docs = num_docs
        self.entity_type = entity_type

    def score_field(self, field_name: str, term_freqs: Optional[TermFrequencyMap]) -> Optional[ScoredTermQueue]:
        """
        Rank a field's terms by tf * idf.

        Args:
            field_name: Field the terms belong to
            term_freqs: Term -> frequency in the reference document, or None
                for an incompatible field

        Returns:
            ScoredTermQueue, or None for an incompatible field
        """
        if term_freqs is None:
            return None

        config = self.config
        queue = ScoredTermQueue(len(term_freqs))
        for term, term_freq in term_freqs.items():
            if config.min_term_freq > 0 and term_freq < config.min_term_freq:
                continue

            with index_operation(self.entity_type, "doc_freq"):
                doc_freq = self.reader.doc_freq(field_name, term)

            if config.min_doc_freq > 0 and doc_freq < config.min_doc_freq:
                continue
            if doc_freq > config.max_doc_freq:
                continue
            if doc_freq == 0:
                # Term vector/stored text out of sync with the postings
                logger.debug("Field %s: skipping term %r with zero document frequency", field_name, term)
                continue

            idf = self.similarity.idf(doc_freq, self.num_docs)
            queue.insert_with_overflow(
                ScoredTerm(
                    term=term,
                    field=field_name,
                    score=term_freq * idf,
                    idf=idf,
                    doc_freq=doc_freq,
                    term_freq=term_freq,
                )
            )

        logger.debug("Field %s: %d of %d terms retained", field_name, len(queue), len(term_freqs))
        return queue
