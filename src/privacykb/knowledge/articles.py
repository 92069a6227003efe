"""Full-text search over online articles, filtered by language."""

from collections.abc import Sequence
from typing import Any

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from privacykb.database.fallback import fetch_first
from privacykb.knowledge.models import language_context

# FTS5 rank is bm25(), where lower means more relevant
SEARCH_ARTICLES = text("""
    SELECT language, title, url
    FROM articles
    WHERE articles MATCH :query
    AND language = :language
    ORDER BY rank
    LIMIT :limit
""")


def build_match_query(words: Sequence[str]) -> str:
    """Build an FTS5 query matching any of the words.

    Each word is quoted as a phrase so that FTS5 operators and punctuation in
    user input are taken literally.
    """
    phrases = ['"' + word.replace('"', '""') + '"' for word in words]
    return " OR ".join(phrases)


class ArticleSearchService:
    """Ranked full-text search of the article corpus."""

    def __init__(self, limit: int = 20):
        self.limit = limit

    async def search(
        self, session: AsyncSession, languages: Sequence[str], words: Sequence[str]
    ) -> list[dict[str, Any]]:
        """Find articles relevant to the words, most relevant first.

        Args:
            session: Database session
            languages: Language tags in preference order
            words: Search words or quoted phrases

        Returns:
            Article records in the first language with any match
        """
        if not words:
            return []
        query = build_match_query(words)

        async def lookup(language: str) -> Sequence[Any]:
            result = await session.execute(
                SEARCH_ARTICLES, {"query": query, "language": language, "limit": self.limit}
            )
            return result.mappings().all()

        rows = await fetch_first(languages, lookup)
        return [
            {
                "@context": language_context(row["language"]),
                "title": row["title"],
                "url": row["url"],
            }
            for row in rows
        ]
