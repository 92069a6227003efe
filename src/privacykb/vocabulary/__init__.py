"""Vocabulary ingestion from JSON-LD exports into relational tables."""

from privacykb.vocabulary.builder import VocabularyDatabaseBuilder
from privacykb.vocabulary.models import (
    TERM_PROPERTIES,
    PropertyValue,
    TermProperty,
    TermRecord,
    VocabularyIngestionError,
)
from privacykb.vocabulary.normalizer import (
    escape_sql_string,
    ingest,
    normalize,
    parse_term_record,
)

__all__ = [
    "TERM_PROPERTIES",
    "PropertyValue",
    "TermProperty",
    "TermRecord",
    "VocabularyDatabaseBuilder",
    "VocabularyIngestionError",
    "escape_sql_string",
    "ingest",
    "normalize",
    "parse_term_record",
]
