"""
Basic usage example for Kindred.
"""

from kindred import Config, FieldSpec, MemoryIndexReader, MoreLikeThisBuilder
from kindred.search import FieldCustomizer

documents = [
    {"title": "The quick brown fox", "body": "The fox jumps over the lazy dog. The fox runs."},
    {"title": "Lazy dogs", "body": "Dogs sleep all day long."},
    {"title": "Foxes and hounds", "body": "A fox and a hound become friends."},
]

# Build an in-memory index snapshot (term vectors recorded for body only)
reader = MemoryIndexReader.from_documents(documents, term_vector_fields=["body"])

# Documents like document 0
print("Like document 0...")
query = (
    MoreLikeThisBuilder(reader)
    .fields("body", FieldSpec("title", customizer=FieldCustomizer(boost=2.0)))
    .compatible_field_names(*reader.compatible_fields())
    .document_number(0)
    .config(Config(max_query_terms=5, boost_terms=True))
    .build()
)
print(query)

# Documents like an entity that is not indexed
print("\nLike a new article...")
query = (
    MoreLikeThisBuilder(reader)
    .fields("title", "body")
    .compatible_field_names(*reader.compatible_fields())
    .input({"title": "Fox stories", "body": "A clever fox outruns the hound."})
    .build()
)
print(query)
