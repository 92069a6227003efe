"""Tests for VocabularyDatabaseBuilder."""

import json

import pytest
from sqlalchemy import text
from sqlalchemy.exc import OperationalError

from privacykb.vocabulary.builder import VocabularyDatabaseBuilder, write_sql_file
from privacykb.vocabulary.models import VocabularyIngestionError


@pytest.fixture
def builder(tmp_path):
    builder = VocabularyDatabaseBuilder(tmp_path / "db" / "kb.db")
    yield builder
    builder.dispose()


def _count(builder, table, **where):
    clause = " AND ".join(f"{column} = :{column}" for column in where) or "1"
    with builder.engine.connect() as conn:
        return conn.execute(text(f"SELECT count(*) FROM {table} WHERE {clause}"), where).scalar()


class TestVocabularyDatabaseBuilder:
    """Test VocabularyDatabaseBuilder."""

    def test_populates_terms_and_children(self, builder, vocabulary_document):
        """Should load every term with its property rows."""
        builder.populate_from_document(vocabulary_document)

        assert _count(builder, "terms") == 2
        assert _count(builder, "term_labels") == 3
        assert _count(builder, "term_supertypes", supertype="https://w3id.org/dpv#Bar") == 1
        assert _count(builder, "term_notes", language="en") == 1

    def test_replaces_previous_vocabulary(self, builder, vocabulary_document):
        """Should drop the previous vocabulary on every run."""
        builder.populate_from_document(vocabulary_document)
        builder.populate_from_document([{"@id": "https://example.org/only"}])

        assert _count(builder, "terms") == 1
        assert _count(builder, "term_labels") == 0

    def test_duplicate_uri_keeps_one_term_with_duplicate_children(self, builder):
        """Should replace the term row but keep both child rows."""
        node = {"@id": "a", "skos:prefLabel": "A", "dct:created": "2020-01-01"}
        builder.populate_from_document([node, {**node, "dct:created": "2021-01-01"}])

        assert _count(builder, "terms") == 1
        assert _count(builder, "terms", created="2021-01-01") == 1
        assert _count(builder, "term_labels", uri="a") == 2

    def test_malformed_record_leaves_database_untouched(self, builder, vocabulary_document):
        """Should not apply anything when a record is malformed."""
        builder.populate_from_document(vocabulary_document)

        with pytest.raises(VocabularyIngestionError):
            builder.populate_from_document([{"@id": "new"}, {"skos:definition": "x"}])

        assert _count(builder, "terms") == 2

    def test_failed_statement_rolls_back_everything(self, builder, vocabulary_document):
        """Should roll back drops and creates as well as inserts."""
        builder.populate_from_document(vocabulary_document)

        with pytest.raises(OperationalError):
            builder.apply(
                [
                    "DROP TABLE IF EXISTS term_labels",
                    "CREATE TABLE scratch (x TEXT)",
                    "INSERT INTO no_such_table VALUES (1)",
                ]
            )

        assert _count(builder, "term_labels") == 3
        with builder.engine.connect() as conn:
            tables = conn.execute(
                text("SELECT name FROM sqlite_master WHERE name = 'scratch'")
            ).all()
        assert tables == []

    def test_values_with_colons_and_quotes(self, builder):
        """Should store values verbatim, including colons and quotes."""
        builder.populate_from_document(
            [{"@id": "dpv:Thing", "skos:note": "Note: it's :here"}]
        )

        with builder.engine.connect() as conn:
            note = conn.execute(text("SELECT note FROM term_notes")).scalar()
        assert note == "Note: it's :here"

    def test_populate_from_file(self, builder, tmp_path, vocabulary_document):
        """Should read JSON-LD from a file and optionally write the SQL."""
        input_file = tmp_path / "dpv.jsonld"
        input_file.write_text(json.dumps(vocabulary_document))
        sql_file = tmp_path / "out" / "dpv.sql"

        count = builder.populate_from_file(input_file, sql_file)

        lines = sql_file.read_text().splitlines()
        assert len(lines) == count
        assert lines[0] == "DROP TABLE IF EXISTS term_creators;"

    def test_populate_from_missing_file(self, builder, tmp_path):
        """Should raise FileNotFoundError for a missing input file."""
        with pytest.raises(FileNotFoundError):
            builder.populate_from_file(tmp_path / "missing.jsonld")

    def test_create_reference_schema_is_idempotent(self, builder):
        """Should create the reference tables and tolerate a second run."""
        builder.create_reference_schema()
        builder.create_reference_schema()

        assert _count(builder, "definitions") == 0
        assert _count(builder, "articles") == 0


def test_write_sql_file(tmp_path):
    """Should write one terminated statement per line."""
    sql_file = tmp_path / "nested" / "out.sql"

    write_sql_file(["SELECT 1", "SELECT 2"], sql_file)

    assert sql_file.read_text() == "SELECT 1;\nSELECT 2;\n"
