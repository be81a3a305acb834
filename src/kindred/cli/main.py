"""
Main CLI entry point for Kindred.
"""

import json
from pathlib import Path
from typing import Any, Dict, List

import click

from kindred.core.contracts import ByFieldValues, ByIndexPosition, Config, FieldSpec
from kindred.core.errors import KindredError
from kindred.index.memory import MemoryIndexReader
from kindred.logging_utils import configure_logging
from kindred.search.more_like_this import MoreLikeThisBuilder
from kindred.search.similarity import BM25Similarity, ClassicSimilarity


@click.group()
@click.option("--log-level", default="WARNING", help="Log level (DEBUG, INFO, WARNING, ...)")
def cli(log_level):
    """Kindred - build "more like this" queries."""
    configure_logging(log_level)


def load_corpus(corpus_path: Path) -> List[Dict[str, Any]]:
    """
    Load a JSONL corpus: one JSON object (field -> value) per line.

    Blank lines are skipped.
    """
    documents = []
    with open(corpus_path, "r", encoding="utf-8") as f:
        for line_number, line in enumerate(f, 1):
            if not line.strip():
                continue
            try:
                documents.append(json.loads(line))
            except json.JSONDecodeError as e:
                raise click.ClickException(f"{corpus_path}:{line_number}: invalid JSON ({e.msg})")
    return documents


def load_settings(config_path: Path) -> Dict[str, Any]:
    """Load a JSON config file holding one object of Config fields."""
    with open(config_path, "r", encoding="utf-8") as f:
        try:
            settings = json.load(f)
        except json.JSONDecodeError as e:
            raise click.ClickException(f"{config_path}: invalid JSON ({e.msg})")
    if not isinstance(settings, dict):
        raise click.ClickException(f"{config_path}: expected a JSON object, got {type(settings).__name__}")
    return settings


@cli.command()
@click.argument("corpus", type=click.Path(exists=True, dir_okay=False))
@click.option("--field", "fields", multiple=True, required=True, help="Field to compare on (repeatable)")
@click.option("--doc", "doc_id", type=int, default=None, help="Reference document number in the corpus")
@click.option("--text", default=None, help="Reference text, used for every requested field")
@click.option("--term-vectors", multiple=True, help="Fields to record term vectors for (repeatable)")
@click.option("--raw-field", "raw_fields", multiple=True, help="Fields compared without analysis (repeatable)")
@click.option("--config", "config_path", type=click.Path(exists=True, dir_okay=False), help="JSON config file")
@click.option("--max-query-terms", type=int, default=None, help="Maximum terms per field")
@click.option("--min-word-length", type=int, default=None)
@click.option("--max-word-length", type=int, default=None)
@click.option("--boost/--no-boost", default=None, help="Boost terms relative to the field's best score")
@click.option("--boost-factor", type=float, default=None)
@click.option("--similarity", type=click.Choice(["classic", "bm25"]), default="classic")
@click.option("--format", "output_format", default="text", type=click.Choice(["text", "json"]))
def similar(
    corpus,
    fields,
    doc_id,
    text,
    term_vectors,
    raw_fields,
    config_path,
    max_query_terms,
    min_word_length,
    max_word_length,
    boost,
    boost_factor,
    similarity,
    output_format,
):
    """Build the query for documents similar to a corpus document or a text."""
    if (doc_id is None) == (text is None):
        raise click.UsageError("Exactly one of --doc or --text is required")

    settings = load_settings(Path(config_path)) if config_path else {}
    overrides = {
        "max_query_terms": max_query_terms,
        "min_word_length": min_word_length,
        "max_word_length": max_word_length,
        "boost_terms": boost,
        "term_boost_factor": boost_factor,
    }
    settings.update({key: value for key, value in overrides.items() if value is not None})

    try:
        config = Config.from_dict(settings)
        reader = MemoryIndexReader.from_documents(
            load_corpus(Path(corpus)),
            term_vector_fields=term_vectors,
            untokenized_fields=raw_fields,
        )
        if doc_id is not None:
            reference = ByIndexPosition(doc_id)
        else:
            reference = ByFieldValues({name: text for name in fields})

        query = (
            MoreLikeThisBuilder(reader, similarity=BM25Similarity() if similarity == "bm25" else ClassicSimilarity())
            .fields(*[FieldSpec(name, ignore_analyzer=name in raw_fields) for name in fields])
            .compatible_field_names(*reader.compatible_fields())
            .reference(reference)
            .config(config)
            .entity_type(Path(corpus).stem)
            .build()
        )
    except KindredError as e:
        raise click.ClickException(str(e))

    if output_format == "json":
        click.echo(json.dumps(query.to_dict(), indent=2))
    else:
        click.echo(str(query))


if __name__ == "__main__":
    cli()
