"""Relational schema of the knowledge base.

The reference tables are read by the query side. The vocabulary tables are
owned by the ingestion tool, which drops and recreates them on every run, so
their DDL lives in privacykb.vocabulary.normalizer next to the statements that
fill them.
"""

REFERENCE_TABLES: dict[str, str] = {
    "definitions": """
        CREATE TABLE IF NOT EXISTS definitions (
            language TEXT NOT NULL,
            term TEXT NOT NULL,
            definition TEXT NOT NULL
        )""",
    "gdpr": """
        CREATE TABLE IF NOT EXISTS gdpr (
            language TEXT NOT NULL,
            article INTEGER NOT NULL,
            clause INTEGER,
            subclause TEXT,
            text TEXT NOT NULL
        )""",
    "dpa": """
        CREATE TABLE IF NOT EXISTS dpa (
            language TEXT NOT NULL,
            country TEXT NOT NULL,
            name TEXT NOT NULL,
            address TEXT,
            tel TEXT,
            fax TEXT,
            email TEXT,
            url TEXT
        )""",
    "articles": """
        CREATE VIRTUAL TABLE IF NOT EXISTS articles USING fts5(
            language UNINDEXED,
            title,
            url UNINDEXED,
            body
        )""",
    "threats": """
        CREATE TABLE IF NOT EXISTS threats (
            category TEXT NOT NULL,
            language TEXT NOT NULL,
            description TEXT NOT NULL
        )""",
    "threat_actions": """
        CREATE TABLE IF NOT EXISTS threat_actions (
            category TEXT NOT NULL,
            language TEXT NOT NULL,
            action TEXT NOT NULL
        )""",
}

REFERENCE_INDEXES: list[str] = [
    "CREATE INDEX IF NOT EXISTS idx_definitions_term ON definitions (lower(term), language)",
    "CREATE INDEX IF NOT EXISTS idx_gdpr_article ON gdpr (language, article, clause, subclause)",
    "CREATE INDEX IF NOT EXISTS idx_dpa_country ON dpa (lower(country), language)",
    "CREATE INDEX IF NOT EXISTS idx_threats_category ON threats (lower(category), language)",
    "CREATE INDEX IF NOT EXISTS idx_threat_actions_category "
    "ON threat_actions (lower(category), language)",
]


def reference_schema_statements() -> list[str]:
    """Get the DDL statements that create the reference tables and their indexes."""
    return [*REFERENCE_TABLES.values(), *REFERENCE_INDEXES]
