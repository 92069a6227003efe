"""Vocabulary ingestion: linked-data term records to relational statements.

The input is a JSON-LD document, either an array of node objects or an object
with an ``@graph`` array. Every node is one term. The output is the complete
list of SQL statements that replaces the vocabulary tables:

1. drop the nine child tables, then the term table
2. create the term table, then the nine child tables
3. for each term, one ``INSERT OR REPLACE`` into ``terms`` followed by one
   ``INSERT`` per property value, property by property in source order

A record missing a required field raises VocabularyIngestionError before any
statement is produced, so a run yields either the whole vocabulary or nothing.
Repeating a URI within one input replaces its term row but duplicates its
child rows; the input is expected to be deduplicated.
"""

import logging
from collections.abc import Iterable
from typing import Any

from privacykb.vocabulary.models import (
    CREATED_KEYS,
    TERM_PROPERTIES,
    TERMS_TABLE,
    PropertyValue,
    TermProperty,
    TermRecord,
    VocabularyIngestionError,
)

logger = logging.getLogger(__name__)

TERMS_DDL = (
    f"CREATE TABLE {TERMS_TABLE} ("
    "uri TEXT PRIMARY KEY, "
    "created DATE NOT NULL DEFAULT CURRENT_DATE)"
)


def escape_sql_string(value: str) -> str:
    """Double embedded single quotes. No other normalization is applied."""
    return value.replace("'", "''")


def quote_sql_string(value: str) -> str:
    return f"'{escape_sql_string(value)}'"


def child_table_ddl(prop: TermProperty) -> str:
    """Get the CREATE TABLE statement for a property's child table."""
    columns = [f"uri TEXT NOT NULL REFERENCES {TERMS_TABLE}(uri)"]
    if prop.localized:
        columns.append("language TEXT NOT NULL")
    columns.append(f"{prop.column} TEXT NOT NULL")
    return f"CREATE TABLE {prop.table} ({', '.join(columns)})"


def schema_statements() -> list[str]:
    """Get the statements that drop and recreate the ten vocabulary tables."""
    drops = [f"DROP TABLE IF EXISTS {prop.table}" for prop in TERM_PROPERTIES]
    drops.append(f"DROP TABLE IF EXISTS {TERMS_TABLE}")
    creates = [TERMS_DDL, *(child_table_ddl(prop) for prop in TERM_PROPERTIES)]
    return [*drops, *creates]


def load_nodes(document: Any) -> list[dict[str, Any]]:
    """Get the node objects of a JSON-LD document.

    Raises:
        VocabularyIngestionError: If the document is neither a node, an array
            of nodes nor an object with an @graph array
    """
    if isinstance(document, dict):
        if "@graph" in document:
            document = document["@graph"]
        else:
            document = [document]
    if not isinstance(document, list):
        raise VocabularyIngestionError("Expected a JSON-LD array or an object with @graph")

    for index, node in enumerate(document):
        if not isinstance(node, dict):
            raise VocabularyIngestionError(f"Record {index} is not a JSON object")
    return document


def _as_list(value: Any) -> list[Any]:
    return value if isinstance(value, list) else [value]


def _literal(item: Any, uri: str, key: str) -> str:
    """Extract the string value of a JSON-LD value object, node reference or plain value."""
    if isinstance(item, dict):
        if "@value" in item:
            return str(item["@value"])
        if "@id" in item:
            return str(item["@id"])
        raise VocabularyIngestionError(f"Term {uri}: {key} entry has no @value or @id")
    if item is None:
        raise VocabularyIngestionError(f"Term {uri}: {key} entry is null")
    return str(item)


def _property_values(node: dict[str, Any], uri: str, prop: TermProperty) -> list[PropertyValue]:
    """Collect the values of one property from all keys it may appear under."""
    values = []
    for key in prop.keys:
        if key not in node:
            continue
        for item in _as_list(node[key]):
            value = _literal(item, uri, key)
            if not prop.localized:
                values.append(PropertyValue(value))
                continue

            language = item.get("@language") if isinstance(item, dict) else None
            if not language:
                if prop.default_language is None:
                    raise VocabularyIngestionError(f"Term {uri}: {key} entry has no @language")
                language = prop.default_language
            values.append(PropertyValue(value, language))
    return values


def _created(node: dict[str, Any], uri: str) -> str | None:
    """Get the first creation date of a node, if any."""
    for key in CREATED_KEYS:
        if key in node:
            items = _as_list(node[key])
            if items:
                return _literal(items[0], uri, key)
    return None


def parse_term_record(node: dict[str, Any]) -> TermRecord:
    """Read one term from a JSON-LD node object.

    Raises:
        VocabularyIngestionError: If the node has no @id, or a property entry
            lacks its value or a mandatory language
    """
    uri = node.get("@id")
    if not uri or not isinstance(uri, str):
        raise VocabularyIngestionError(f"Record has no @id: {sorted(node)}")

    record = TermRecord(uri=uri, created=_created(node, uri))
    for prop in TERM_PROPERTIES:
        values = _property_values(node, uri, prop)
        if values:
            record.values[prop.name] = values
    return record


def term_statements(record: TermRecord) -> list[str]:
    """Get the insert statements for one term and all its property values."""
    uri = quote_sql_string(record.uri)
    if record.created is not None:
        statements = [
            f"INSERT OR REPLACE INTO {TERMS_TABLE} (uri, created) "
            f"VALUES ({uri}, {quote_sql_string(record.created)})"
        ]
    else:
        statements = [f"INSERT OR REPLACE INTO {TERMS_TABLE} (uri) VALUES ({uri})"]

    for prop in TERM_PROPERTIES:
        for item in record.get(prop.name):
            value = quote_sql_string(item.value)
            if prop.localized:
                language = quote_sql_string(item.language or "")
                statements.append(
                    f"INSERT INTO {prop.table} (uri, language, {prop.column}) "
                    f"VALUES ({uri}, {language}, {value})"
                )
            else:
                statements.append(
                    f"INSERT INTO {prop.table} (uri, {prop.column}) VALUES ({uri}, {value})"
                )
    return statements


def normalize(records: Iterable[TermRecord]) -> list[str]:
    """Get the full statement sequence replacing the vocabulary with these records."""
    statements = schema_statements()
    for record in records:
        statements.extend(term_statements(record))
    return statements


def ingest(document: Any) -> list[str]:
    """Parse a JSON-LD document and get the statements that load it.

    Every record is parsed before any statement is produced, so a malformed
    record anywhere aborts the run without partial output.

    Raises:
        VocabularyIngestionError: On the first malformed record
    """
    records = [parse_term_record(node) for node in load_nodes(document)]
    statements = normalize(records)
    logger.info(
        "Normalized vocabulary",
        extra={"terms": len(records), "statements": len(statements)},
    )
    return statements
