"""Lookup of vocabulary terms by URI or label.

A term matches when its URI equals the query exactly or one of its labels
equals it case-insensitively in any language. Localized properties (labels,
definitions, statuses, notes) each follow the per-language fallback on their
own, so a term may come back with an English definition next to a French
label. Every localized value therefore carries its own language tag, and
references to other resources come back as ``{"@id": ...}`` node objects.
"""

from collections.abc import Sequence
from typing import Any

from sqlalchemy import TextClause, text
from sqlalchemy.ext.asyncio import AsyncSession

from privacykb.database.fallback import fetch_first
from privacykb.knowledge.models import language_value, reference_value
from privacykb.vocabulary.models import DCT, RDFS, SKOS, SW, TERM_PROPERTIES, TermProperty

TERM_CONTEXT = {"dct": DCT, "rdfs": RDFS, "skos": SKOS, "sw": SW}

FIND_TERMS = text("""
    SELECT uri, created
    FROM terms
    WHERE uri = :term
    OR uri IN (SELECT uri FROM term_labels WHERE lower(label) = lower(:term))
    ORDER BY uri
""")


def _property_query(prop: TermProperty) -> TextClause:
    if prop.localized:
        return text(f"""
            SELECT language, {prop.column} AS value
            FROM {prop.table}
            WHERE uri = :uri AND language = :language
            ORDER BY rowid
        """)  # nosemgrep
    return text(f"""
        SELECT {prop.column} AS value
        FROM {prop.table}
        WHERE uri = :uri
        ORDER BY rowid
    """)  # nosemgrep


PROPERTY_QUERIES: dict[str, TextClause] = {
    prop.name: _property_query(prop) for prop in TERM_PROPERTIES
}


class VocabularyQueryService:
    """Resolves vocabulary terms with all their properties."""

    async def find_terms(
        self, session: AsyncSession, languages: Sequence[str], term: str
    ) -> list[dict[str, Any]]:
        """Find the terms whose URI or label matches.

        Args:
            session: Database session
            languages: Language tags in preference order
            term: Term URI, or a label compared case-insensitively

        Returns:
            Term records ordered by URI, empty if nothing matched
        """
        result = await session.execute(FIND_TERMS, {"term": term})
        return [
            await self._describe(session, languages, row["uri"], row["created"])
            for row in result.mappings().all()
        ]

    async def _describe(
        self, session: AsyncSession, languages: Sequence[str], uri: str, created: Any
    ) -> dict[str, Any]:
        record: dict[str, Any] = {
            "@context": TERM_CONTEXT,
            "@id": uri,
            "created": str(created) if created is not None else None,
        }
        for prop in TERM_PROPERTIES:
            query = PROPERTY_QUERIES[prop.name]
            if not prop.localized:
                result = await session.execute(query, {"uri": uri})
                values = [row["value"] for row in result.mappings().all()]
                if prop.is_reference:
                    record[prop.name] = [reference_value(value) for value in values]
                else:
                    record[prop.name] = values
                continue

            async def lookup(language: str, query: TextClause = query) -> Sequence[Any]:
                result = await session.execute(query, {"uri": uri, "language": language})
                return result.mappings().all()

            rows = await fetch_first(languages, lookup)
            record[prop.name] = [language_value(row["language"], row["value"]) for row in rows]
        return record
