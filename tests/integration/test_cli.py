"""
CLI tests: build similarity queries from a JSONL corpus.
"""

import json

import pytest
from click.testing import CliRunner

from kindred.cli.main import cli

DOCUMENTS = [
    {"title": "The quick brown fox", "body": "fox jumps over the lazy dog fox", "year": 2001},
    {"title": "Lazy dogs sleep", "body": "the dog sleeps all day", "year": 2002},
    {"title": "Foxes and hounds", "body": "a fox and a hound become friends", "year": 2003},
    {"title": "Cooking pasta", "body": "boil water add pasta salt", "year": 2004},
]


@pytest.fixture
def corpus(tmp_path):
    path = tmp_path / "articles.jsonl"
    path.write_text("\n".join(json.dumps(d) for d in DOCUMENTS) + "\n\n")
    return path


def test_similar_by_document_text_output(corpus):
    result = CliRunner().invoke(cli, ["similar", str(corpus), "--field", "body", "--doc", "0", "--max-query-terms", "1"])
    assert result.exit_code == 0, result.output
    assert result.output.strip() == "body:fox"


def test_similar_json_output(corpus):
    result = CliRunner().invoke(
        cli, ["similar", str(corpus), "--field", "body", "--doc", "0", "--max-query-terms", "1", "--format", "json"]
    )
    assert result.exit_code == 0, result.output
    assert json.loads(result.output) == {
        "bool": {"should": [{"term": {"body": "fox"}, "boost": 1.0}]},
        "boost": 1.0,
    }


def test_similar_by_text(corpus):
    result = CliRunner().invoke(cli, ["similar", str(corpus), "--field", "body", "--text", "fox fox dog"])
    assert result.exit_code == 0, result.output
    assert result.output.strip() == "body:fox body:dog"


def test_similar_with_config_file(corpus, tmp_path):
    config_path = tmp_path / "config.json"
    config_path.write_text(json.dumps({"max_query_terms": 2, "boost_terms": True, "term_boost_factor": 4.0}))
    result = CliRunner().invoke(
        cli, ["similar", str(corpus), "--field", "body", "--doc", "0", "--config", str(config_path)]
    )
    assert result.exit_code == 0, result.output
    assert result.output.startswith("body:fox^4 ")


def test_requires_exactly_one_reference(corpus):
    runner = CliRunner()
    assert runner.invoke(cli, ["similar", str(corpus), "--field", "body"]).exit_code == 2
    assert runner.invoke(cli, ["similar", str(corpus), "--field", "body", "--doc", "0", "--text", "x"]).exit_code == 2


def test_incompatible_single_field_reports_error(corpus):
    result = CliRunner().invoke(cli, ["similar", str(corpus), "--field", "year", "--doc", "0"])
    assert result.exit_code == 1
    assert "cannot be used" in result.output


@pytest.fixture
def cities(tmp_path):
    path = tmp_path / "cities.jsonl"
    path.write_text("\n".join(json.dumps({"city": c}) for c in ["New York", "New York", "Paris"]) + "\n")
    return path


def test_raw_field_matches_whole_value(cities):
    """A raw field is indexed and queried as one term."""
    runner = CliRunner()
    result = runner.invoke(cli, ["similar", str(cities), "--field", "city", "--raw-field", "city", "--doc", "0"])
    assert result.exit_code == 0, result.output
    assert result.output.strip() == "city:New York"

    result = runner.invoke(cli, ["similar", str(cities), "--field", "city", "--raw-field", "city", "--text", "Paris"])
    assert result.exit_code == 0, result.output
    assert result.output.strip() == "city:Paris"


@pytest.mark.parametrize(
    "content, message",
    [
        ('{"max_query_terms": "5"}', "max_query_terms must be an integer"),
        ('{"max_query_terms": ', "invalid JSON"),
        ("[1, 2]", "expected a JSON object"),
    ],
)
def test_bad_config_file_reports_error(corpus, tmp_path, content, message):
    config_path = tmp_path / "config.json"
    config_path.write_text(content)
    result = CliRunner().invoke(
        cli, ["similar", str(corpus), "--field", "body", "--doc", "0", "--config", str(config_path)]
    )
    assert result.exit_code == 1
    assert message in result.output
    assert not isinstance(result.exception, TypeError)
