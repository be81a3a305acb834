"""
In-memory index reader for Kindred.

A read-only snapshot built from field dictionaries. Text fields are analyzed
with a tokenizer to compute document frequencies (untokenized fields index
each value as one term); term vectors are recorded
only for the fields that ask for them, and stored values are kept compressed.
"""

import logging
from collections import Counter, defaultdict
from typing import Any, Dict, Iterable, List, Mapping, Optional, Set, Tuple

from kindred.analysis.tokenizer import Tokenizer, WordTokenizer
from kindred.index.compression import pack_values, unpack_values

logger = logging.getLogger(__name__)


def _as_values(value: Any) -> List[Any]:
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return [v for v in value if v is not None]
    return [value]


class MemoryIndexReader:
    """
    In-memory IndexReader implementation.

    Not an index writer: documents are given once at construction and the
    snapshot never changes afterwards.
    """

    def __init__(self):
        self._stored: List[Dict[str, Tuple[bytes, int]]] = []
        self._term_vectors: List[Dict[str, Dict[str, int]]] = []
        self._doc_freqs: Dict[str, Counter] = defaultdict(Counter)
        self._text_fields: Set[str] = set()

    @classmethod
    def from_documents(
        cls,
        documents: Iterable[Mapping[str, Any]],
        tokenizer: Optional[Tokenizer] = None,
        term_vector_fields: Iterable[str] = (),
        untokenized_fields: Iterable[str] = (),
        stored_fields: Optional[Iterable[str]] = None,
        compression_level: int = 3,
    ) -> "MemoryIndexReader":
        """
        Build a reader snapshot from documents.

        Args:
            documents: Field name -> value (or list of values) per document
            tokenizer: Tokenizer used to analyze text values (default: WordTokenizer)
            term_vector_fields: Fields whose term vectors are recorded
            untokenized_fields: Fields indexed without analysis, each value one term
            stored_fields: Fields whose values are stored (None stores every field)
            compression_level: zstd level for stored values

        Returns:
            MemoryIndexReader instance
        """
        reader = cls()
        tokenizer = tokenizer or WordTokenizer()
        vector_fields = set(term_vector_fields)
        raw_fields = set(untokenized_fields)
        stored = set(stored_fields) if stored_fields is not None else None

        for document in documents:
            stored_doc: Dict[str, Tuple[bytes, int]] = {}
            vectors: Dict[str, Dict[str, int]] = {}

            for field_name, value in document.items():
                values = _as_values(value)
                if stored is None or field_name in stored:
                    stored_doc[field_name] = pack_values(values, level=compression_level)

                texts = [v for v in values if isinstance(v, str)]
                if not texts:
                    continue
                reader._text_fields.add(field_name)

                counts: Counter = Counter()
                if field_name in raw_fields:
                    counts.update(text for text in texts if text)
                else:
                    for text in texts:
                        counts.update(tokenizer.token_stream(field_name, text))
                for term in counts:
                    reader._doc_freqs[field_name][term] += 1
                if field_name in vector_fields:
                    vectors[field_name] = dict(counts)

            reader._stored.append(stored_doc)
            reader._term_vectors.append(vectors)

        logger.debug(
            "Built in-memory index: %d documents, text fields %s",
            len(reader._stored),
            sorted(reader._text_fields),
        )
        return reader

    def _check_doc_id(self, doc_id: int):
        if not 0 <= doc_id < len(self._stored):
            raise OSError(f"No document {doc_id} in index of {len(self._stored)} documents")

    def num_docs(self) -> int:
        return len(self._stored)

    def term_vector(self, doc_id: int, field: str) -> Optional[Mapping[str, int]]:
        self._check_doc_id(doc_id)
        return self._term_vectors[doc_id].get(field)

    def document(self, doc_id: int) -> Dict[str, List[Any]]:
        """
        Load the stored values of a document.

        Raises:
            OSError: If the document does not exist or a payload is corrupt
        """
        self._check_doc_id(doc_id)
        return {
            field_name: unpack_values(payload, checksum)
            for field_name, (payload, checksum) in self._stored[doc_id].items()
        }

    def doc_freq(self, field: str, term: str) -> int:
        return self._doc_freqs.get(field, {}).get(term, 0)

    def compatible_fields(self) -> List[str]:
        """Fields indexed as analyzed text, i.e. usable for term extraction."""
        return sorted(self._text_fields)
