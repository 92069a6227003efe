"""Term definitions, looked up in the client's preferred language."""

from collections.abc import Sequence
from typing import Any

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from privacykb.database.fallback import fetch_first
from privacykb.knowledge.models import language_context

# TODO: match language variants ('fr' vs 'fr-be' vs 'fr-fr') against each other
FIND_DEFINITIONS = text("""
    SELECT language, term, definition
    FROM definitions
    WHERE lower(:term) = lower(term)
    AND language = :language
""")


class DefinitionQueryService:
    """Exact, case-insensitive lookup of term definitions."""

    async def find_definitions(
        self, session: AsyncSession, languages: Sequence[str], term: str
    ) -> list[dict[str, Any]]:
        """Find the definitions of a term in the first language that has any.

        Args:
            session: Database session
            languages: Language tags in preference order
            term: Term to look up, compared case-insensitively

        Returns:
            Definition records, empty if no language has a definition
        """

        async def lookup(language: str) -> Sequence[Any]:
            result = await session.execute(FIND_DEFINITIONS, {"term": term, "language": language})
            return result.mappings().all()

        rows = await fetch_first(languages, lookup)
        return [
            {
                "@context": language_context(row["language"]),
                "term": row["term"],
                "definition": row["definition"],
            }
            for row in rows
        ]
