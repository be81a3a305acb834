"""
"More like this" query builder.

Given a reference document (an indexed document number, or an entity whose
field values are projected directly) and a list of fields, selects each
field's most significant terms and assembles a disjunctive query ranking
other documents by similarity to the reference.
"""

import logging
from typing import Any, Callable, Iterable, List, Optional, Union

from kindred.analysis.tokenizer import Tokenizer, WordTokenizer
from kindred.core.contracts import ByFieldValues, ByIndexPosition, Config, FieldSpec, ReferenceDocument
from kindred.core.errors import ConfigurationError, index_operation
from kindred.index.projection import AttributeProjector
from kindred.index.reader import DocumentProjector, IndexReader
from kindred.search.assembler import QueryAssembler
from kindred.search.collector import TermFrequencyCollector, to_text
from kindred.search.compatibility import FieldCompatibilityFilter
from kindred.search.query import Query
from kindred.search.scorer import TermScorer
from kindred.search.similarity import ClassicSimilarity, Similarity

logger = logging.getLogger(__name__)


def _as_field_spec(field: Union[str, FieldSpec]) -> FieldSpec:
    return field if isinstance(field, FieldSpec) else FieldSpec(field)


class MoreLikeThisBuilder:
    """
    Fluent, single-use builder for similarity queries.

    Configure with chained calls, then call ``build()`` once:

        query = (
            MoreLikeThisBuilder(reader)
            .fields("title", "body")
            .document_number(42)
            .config(Config(max_query_terms=10))
            .build()
        )

    The builder cannot be reconfigured or built again once consumed.
    """

    def __init__(
        self,
        reader: Optional[IndexReader] = None,
        tokenizer: Optional[Tokenizer] = None,
        similarity: Optional[Similarity] = None,
        projector: Optional[DocumentProjector] = None,
    ):
        self._reader = reader
        self._tokenizer = tokenizer or WordTokenizer()
        self._similarity = similarity or ClassicSimilarity()
        self._projector = projector or AttributeProjector()
        self._config = Config()
        self._field_specs: List[FieldSpec] = []
        self._compatible_field_names: Optional[List[str]] = None
        self._reference: Optional[ReferenceDocument] = None
        self._default_transformer: Callable[[Any], Optional[str]] = to_text
        self._entity_type: Optional[str] = None
        self._consumed = False

    def _check_open(self):
        if self._consumed:
            raise ConfigurationError("MoreLikeThisBuilder has already been used to build a query")

    def index_reader(self, reader: IndexReader) -> "MoreLikeThisBuilder":
        self._check_open()
        self._reader = reader
        return self

    def fields(self, *fields: Union[str, FieldSpec]) -> "MoreLikeThisBuilder":
        """Add fields to compare on (names or FieldSpec)."""
        self._check_open()
        self._field_specs.extend(_as_field_spec(f) for f in fields)
        return self

    def compatible_field_names(self, *names: str) -> "MoreLikeThisBuilder":
        """
        Restrict term extraction to these fields.

        When never called, every requested field is considered compatible.
        """
        self._check_open()
        self._compatible_field_names = list(names)
        return self

    def reference(self, reference: ReferenceDocument) -> "MoreLikeThisBuilder":
        self._check_open()
        if self._reference is not None:
            raise ConfigurationError(
                "A reference document is already set; document number and input are mutually exclusive"
            )
        self._reference = reference
        return self

    def document_number(self, doc_id: int) -> "MoreLikeThisBuilder":
        """Use an already indexed document as reference."""
        return self.reference(ByIndexPosition(doc_id))

    def input(self, entity: Any) -> "MoreLikeThisBuilder":
        """Use an entity (indexed or not) as reference; its fields are projected."""
        return self.reference(ByFieldValues(entity))

    def config(self, config: Config) -> "MoreLikeThisBuilder":
        self._check_open()
        self._config = config
        return self

    def default_transformer(self, transformer: Callable[[Any], Optional[str]]) -> "MoreLikeThisBuilder":
        """Transformer for fields whose FieldSpec does not define one."""
        self._check_open()
        self._default_transformer = transformer
        return self

    def entity_type(self, name: str) -> "MoreLikeThisBuilder":
        """Entity type name used in error messages."""
        self._check_open()
        self._entity_type = name
        return self

    def _resolve_entity_type(self) -> str:
        if self._entity_type:
            return self._entity_type
        if isinstance(self._reference, ByFieldValues):
            return type(self._reference.entity).__name__
        return "document"

    def build(self) -> Query:
        """
        Build the similarity query.

        Returns:
            Query tree of term clauses combined with OR semantics

        Raises:
            ConfigurationError: No field requested, single incompatible field,
                missing reader/reference, or builder already consumed
            TransientIOError: Reading the index failed
        """
        self._check_open()
        self._consumed = True

        if not self._field_specs:
            raise ConfigurationError("Querying more like this on 0 fields")
        if self._reader is None:
            raise ConfigurationError("An index reader is required to build a more like this query")
        if self._reference is None:
            raise ConfigurationError("Either a document number or an input entity is required")

        entity_type = self._resolve_entity_type()
        field_specs = list(self._field_specs)
        compatible_names = (
            self._compatible_field_names
            if self._compatible_field_names is not None
            else [spec.name for spec in field_specs]
        )

        with index_operation(entity_type, "num_docs"):
            num_docs = self._reader.num_docs()

        collector = TermFrequencyCollector(
            reader=self._reader,
            tokenizer=self._tokenizer,
            config=self._config,
            compatibility=FieldCompatibilityFilter(compatible_names),
            projector=self._projector,
            default_transformer=self._default_transformer,
            entity_type=entity_type,
        )
        scorer = TermScorer(
            reader=self._reader,
            similarity=self._similarity,
            config=self._config,
            num_docs=num_docs,
            entity_type=entity_type,
        )

        term_freqs_per_field = collector.collect(self._reference, field_specs)
        queues = [
            scorer.score_field(spec.name, term_freqs)
            for spec, term_freqs in zip(field_specs, term_freqs_per_field)
        ]
        query = QueryAssembler(self._config, entity_type).assemble(queues, field_specs)
        logger.debug("Built more like this query on %s over %d field(s)", entity_type, len(field_specs))
        return query


def build_similarity_query(
    reader: IndexReader,
    fields: Iterable[Union[str, FieldSpec]],
    reference: ReferenceDocument,
    config: Optional[Config] = None,
    compatible_field_names: Optional[Iterable[str]] = None,
    tokenizer: Optional[Tokenizer] = None,
    similarity: Optional[Similarity] = None,
    projector: Optional[DocumentProjector] = None,
    entity_type: Optional[str] = None,
) -> Query:
    """
    Build a similarity query in one call.

    Args:
        reader: Index reader snapshot
        fields: Field names or FieldSpec objects to compare on
        reference: ByIndexPosition or ByFieldValues
        config: Thresholds (defaults to Config())
        compatible_field_names: Fields eligible for term extraction (default: all requested)
        tokenizer: Analyzer for the tokenization path (default: WordTokenizer)
        similarity: idf provider (default: ClassicSimilarity)
        projector: Entity projector (default: AttributeProjector)
        entity_type: Entity type name for error messages

    Returns:
        Similarity query
    """
    builder = MoreLikeThisBuilder(reader, tokenizer=tokenizer, similarity=similarity, projector=projector)
    builder.fields(*fields).reference(reference)
    if config is not None:
        builder.config(config)
    if compatible_field_names is not None:
        builder.compatible_field_names(*compatible_field_names)
    if entity_type is not None:
        builder.entity_type(entity_type)
    return builder.build()
