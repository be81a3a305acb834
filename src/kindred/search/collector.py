"""
Term frequency collection for the similarity query builder.

For every requested field, produces either a term -> frequency map or None
when the field is not compatible with term extraction. Frequencies come from
the stored term vector when the reference document is indexed and the field
has one; otherwise the field text is tokenized.
"""

import logging
from itertools import chain
from typing import Any, Callable, Dict, Iterable, List, Optional

from kindred.analysis.tokenizer import PASS_THROUGH, Tokenizer
from kindred.core.contracts import ByFieldValues, ByIndexPosition, Config, FieldSpec, ReferenceDocument
from kindred.core.errors import index_operation
from kindred.index.reader import DocumentProjector, IndexReader
from kindred.search.compatibility import FieldCompatibilityFilter

logger = logging.getLogger(__name__)

TermFrequencyMap = Dict[str, int]


def to_text(value: Any) -> Optional[str]:
    """Document-wide default transformer: plain text for any non-None value."""
    if value is None:
        return None
    if isinstance(value, str):
        return value
    return str(value)


def is_noise_word(term: str, config: Config) -> bool:
    """
    Determine if a term is unlikely to be of interest in similarity comparisons.

    Args:
        term: Candidate term
        config: Word length bounds and stop words

    Returns:
        True if the term should be ignored
    """
    length = len(term)
    if config.min_word_length > 0 and length < config.min_word_length:
        return True
    if config.max_word_length > 0 and length > config.max_word_length:
        return True
    return config.stop_words is not None and term in config.stop_words


class TermFrequencyCollector:
    """Collects per-field term frequencies of a reference document."""

    def __init__(
        self,
        reader: IndexReader,
        tokenizer: Tokenizer,
        config: Config,
        compatibility: FieldCompatibilityFilter,
        projector: DocumentProjector,
        default_transformer: Callable[[Any], Optional[str]] = to_text,
        entity_type: Optional[str] = None,
    ):
        self.reader = reader
        self.tokenizer = tokenizer
        self.config = config
        self.compatibility = compatibility
        self.projector = projector
        self.default_transformer = default_transformer
        self.entity_type = entity_type

    def collect(
        self, reference: ReferenceDocument, field_specs: List[FieldSpec]
    ) -> List[Optional[TermFrequencyMap]]:
        """
        Collect term frequencies for each field.

        Args:
            reference: Indexed document position or entity to project
            field_specs: Requested fields

        Returns:
            One entry per field spec, in the same order: a term frequency map,
            or None for an incompatible field
        """
        compatible = [self.compatibility.is_compatible(spec.name) for spec in field_specs]
        for spec, ok in zip(field_specs, compatible):
            if not ok:
                logger.debug("Field %s is not compatible with term extraction", spec.name)

        if isinstance(reference, ByFieldValues):
            return self._collect_from_entity(reference.entity, field_specs, compatible)
        if isinstance(reference, ByIndexPosition):
            return self._collect_from_index(reference.position, field_specs, compatible)
        raise TypeError(f"Unsupported reference document: {reference!r}")

    def _collect_from_entity(
        self, entity: Any, field_specs: List[FieldSpec], compatible: List[bool]
    ) -> List[Optional[TermFrequencyMap]]:
        # One projection call for every field under consideration
        field_names = list(dict.fromkeys(spec.name for spec, ok in zip(field_specs, compatible) if ok))
        projected: Dict[str, List[Any]] = {}
        if field_names:
            with index_operation(self.entity_type, "project"):
                projected = self.projector.project(entity, field_names)

        results: List[Optional[TermFrequencyMap]] = []
        for spec, ok in zip(field_specs, compatible):
            if not ok:
                results.append(None)
                continue
            transformer = spec.transformer or self.default_transformer
            texts = []
            for value in projected.get(spec.name, []):
                text = transformer(value)
                if text is not None:
                    texts.append(text)
            term_freqs: TermFrequencyMap = {}
            self._add_token_frequencies(texts, spec, term_freqs)
            results.append(term_freqs)
        return results

    def _collect_from_index(
        self, doc_id: int, field_specs: List[FieldSpec], compatible: List[bool]
    ) -> List[Optional[TermFrequencyMap]]:
        stored_document = None
        results: List[Optional[TermFrequencyMap]] = []

        for spec, ok in zip(field_specs, compatible):
            if not ok:
                results.append(None)
                continue

            term_freqs: TermFrequencyMap = {}
            with index_operation(self.entity_type, "term_vector"):
                vector = self.reader.term_vector(doc_id, spec.name)

            if vector is None:
                # No term vector stored for this field: re-analyze the stored text
                if stored_document is None:
                    with index_operation(self.entity_type, "document"):
                        stored_document = self.reader.document(doc_id)
                texts = [v for v in stored_document.get(spec.name, []) if isinstance(v, str)]
                logger.debug("Field %s: tokenizing %d stored value(s)", spec.name, len(texts))
                self._add_token_frequencies(texts, spec, term_freqs)
            else:
                logger.debug("Field %s: reading term vector", spec.name)
                self._add_vector_frequencies(vector, term_freqs)
            results.append(term_freqs)
        return results

    def _add_vector_frequencies(self, vector, term_freqs: TermFrequencyMap):
        """Add terms and total frequencies from a stored term vector."""
        for term, freq in vector.items():
            if is_noise_word(term, self.config):
                continue
            term_freqs[term] = term_freqs.get(term, 0) + freq

    def _add_token_frequencies(self, texts: Iterable[str], spec: FieldSpec, term_freqs: TermFrequencyMap):
        """
        Add term frequencies found by tokenizing the field's texts.

        At most ``max_num_tokens_parsed`` tokens are examined per field.
        """
        tokenizer = PASS_THROUGH if spec.ignore_analyzer else self.tokenizer
        tokens = chain.from_iterable(tokenizer.token_stream(spec.name, text) for text in texts)
        token_count = 0
        for token in tokens:
            token_count += 1
            if token_count > self.config.max_num_tokens_parsed:
                logger.debug(
                    "Field %s: stopped after %d tokens", spec.name, self.config.max_num_tokens_parsed
                )
                break
            if is_noise_word(token, self.config):
                continue
            term_freqs[token] = term_freqs.get(token, 0) + 1
