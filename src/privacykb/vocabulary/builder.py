"""Vocabulary database builder.

Loads a JSON-LD vocabulary export into the knowledge base SQLite file. All
statements of one run are applied inside a single transaction, so readers see
either the previous vocabulary or the complete new one.
"""

import json
import logging
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from sqlalchemy import create_engine, event

from privacykb.database.schema import reference_schema_statements
from privacykb.vocabulary.normalizer import ingest

logger = logging.getLogger(__name__)


class VocabularyDatabaseBuilder:
    """Builder for the vocabulary tables of a knowledge base database."""

    def __init__(self, db_path: Path | str):
        """Initialize vocabulary database builder.

        Args:
            db_path: Path to the SQLite database, created if missing
        """
        self.db_path = Path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self.engine = create_engine(f"sqlite:///{self.db_path}")

        # The sqlite3 driver only opens a transaction before DML, so the DROP and
        # CREATE statements would otherwise commit on their own. Take over
        # transaction control so engine.begin() covers every statement.
        @event.listens_for(self.engine, "connect")
        def disable_driver_transactions(
            dbapi_connection: Any,  # noqa: ANN401
            connection_record: Any,  # noqa: ANN401
        ) -> None:
            dbapi_connection.isolation_level = None

        @event.listens_for(self.engine, "begin")
        def begin_transaction(conn: Any) -> None:  # noqa: ANN401
            conn.exec_driver_sql("BEGIN")

    def apply(self, statements: Sequence[str]) -> None:
        """Execute statements in one transaction, rolling back on any failure."""
        # Raw driver execution: vocabulary values contain colons that text()
        # would read as bind parameters.
        with self.engine.begin() as conn:
            for statement in statements:
                conn.exec_driver_sql(statement)
        logger.info("Applied %d statements to %s", len(statements), self.db_path)

    def populate_from_document(self, document: Any, sql_file: Path | None = None) -> int:
        """Replace the vocabulary with the terms of a parsed JSON-LD document.

        Args:
            document: Parsed JSON-LD, an array of nodes or an object with @graph
            sql_file: Also write the generated statements to this file

        Returns:
            Number of statements applied

        Raises:
            VocabularyIngestionError: If any record is malformed; nothing is
                written in that case
        """
        statements = ingest(document)
        if sql_file is not None:
            write_sql_file(statements, sql_file)
        self.apply(statements)
        return len(statements)

    def populate_from_file(self, input_file: Path, sql_file: Path | None = None) -> int:
        """Replace the vocabulary with the terms of a JSON-LD file."""
        if not input_file.exists():
            raise FileNotFoundError(f"Vocabulary file not found: {input_file}")

        with open(input_file, encoding="utf-8") as f:
            document = json.load(f)
        return self.populate_from_document(document, sql_file)

    def create_reference_schema(self) -> None:
        """Create the reference tables read by the query side, if missing."""
        self.apply(reference_schema_statements())

    def dispose(self) -> None:
        self.engine.dispose()


def write_sql_file(statements: Sequence[str], sql_file: Path) -> None:
    """Write statements to a SQL script, one per line."""
    sql_file.parent.mkdir(parents=True, exist_ok=True)
    with open(sql_file, "w", encoding="utf-8") as f:
        for statement in statements:
            f.write(f"{statement};\n")
