"""GDPR article, clause and subclause lookup."""

from collections.abc import Sequence
from typing import Any

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from privacykb.database.fallback import fetch_first
from privacykb.knowledge.models import ArticleReference, format_article_number, language_context


class GdprQueryService:
    """Structured lookup of GDPR text by article, clause and subclause."""

    @staticmethod
    def _build_query(reference: ArticleReference) -> tuple[str, dict[str, Any]]:
        """Build the query and parameters for the components present in the reference.

        Returns:
            Tuple of (SQL text, parameters without the language)
        """
        query = """
            SELECT language, article, clause, subclause, text
            FROM gdpr
            WHERE language = :language AND article = :article"""
        params: dict[str, Any] = {"article": reference.article}

        if reference.clause is not None:
            query += " AND clause = :clause"
            params["clause"] = reference.clause
        if reference.subclause is not None:
            query += " AND subclause = :subclause"
            params["subclause"] = reference.subclause

        query += " ORDER BY clause, subclause"
        return query, params

    async def find_articles(
        self, session: AsyncSession, languages: Sequence[str], reference: ArticleReference
    ) -> list[dict[str, Any]]:
        """Find the text of an article, clause or subclause.

        An article without clause returns every clause of it; a clause without
        subclause returns every subclause of it.

        Args:
            session: Database session
            languages: Language tags in preference order
            reference: Parsed article reference

        Returns:
            Records with the cited number ("n") and the text, ordered by
            clause and subclause
        """
        query, params = self._build_query(reference)
        stmt = text(query)

        async def lookup(language: str) -> Sequence[Any]:
            result = await session.execute(stmt, {**params, "language": language})
            return result.mappings().all()

        rows = await fetch_first(languages, lookup)
        return [
            {
                "@context": language_context(row["language"]),
                "n": format_article_number(row["article"], row["clause"], row["subclause"]),
                "text": row["text"],
            }
            for row in rows
        ]
