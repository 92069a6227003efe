"""Data Protection Authority addresses, by country code or partial name.

Unlike the other lookups, the language fallback is embedded in the query: the
``NOT EXISTS`` subquery selects the English rows only when the requested
language has none, so a single probe already yields "preferred language, else
English".
"""

from collections.abc import Sequence
from typing import Any

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from privacykb.database.fallback import fetch_first
from privacykb.knowledge.models import language_context

DPA_COLUMNS = "language, country, name, address, tel, fax, email, url"

FIND_BY_COUNTRY = text(f"""
    SELECT {DPA_COLUMNS}
    FROM dpa
    WHERE lower(country) = lower(:country)
    AND (language = :language OR (language = :fallback AND NOT EXISTS (
        SELECT 1 FROM dpa
        WHERE lower(country) = lower(:country) AND language = :language)))
    ORDER BY rowid
""")  # nosemgrep

FIND_BY_NAME = text(f"""
    SELECT {DPA_COLUMNS}
    FROM dpa
    WHERE name LIKE :pattern ESCAPE '\\'
    AND (language = :language OR (language = :fallback AND NOT EXISTS (
        SELECT 1 FROM dpa
        WHERE name LIKE :pattern ESCAPE '\\' AND language = :language)))
    ORDER BY rowid
""")  # nosemgrep

FIND_ALL = text(f"""
    SELECT {DPA_COLUMNS}
    FROM dpa
    WHERE language = :fallback
    ORDER BY country
""")  # nosemgrep


def like_pattern(partial: str) -> str:
    """Build a LIKE pattern matching any value containing ``partial`` literally."""
    escaped = partial.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


class DpaQueryService:
    """Lookup of Data Protection Authority contact records."""

    def __init__(self, fallback_language: str = "en"):
        self.fallback_language = fallback_language

    async def find(
        self,
        session: AsyncSession,
        languages: Sequence[str],
        country: str | None = None,
        name: str | None = None,
    ) -> list[dict[str, Any]]:
        """Find DPAs by country code, else by partial name, else list all.

        Without a country or a name, every DPA is returned in the fallback
        language.

        Args:
            session: Database session
            languages: Language tags in preference order
            country: Country code, compared case-insensitively
            name: Substring of the authority's name

        Returns:
            DPA records, empty if nothing matched
        """
        if country is not None:
            stmt, params = FIND_BY_COUNTRY, {"country": country}
        elif name is not None:
            stmt, params = FIND_BY_NAME, {"pattern": like_pattern(name)}
        else:
            result = await session.execute(FIND_ALL, {"fallback": self.fallback_language})
            return [self._to_record(row) for row in result.mappings().all()]

        async def lookup(language: str) -> Sequence[Any]:
            result = await session.execute(
                stmt, {**params, "language": language, "fallback": self.fallback_language}
            )
            return result.mappings().all()

        rows = await fetch_first(languages, lookup)
        return [self._to_record(row) for row in rows]

    @staticmethod
    def _to_record(row: Any) -> dict[str, Any]:
        return {
            "@context": language_context(row["language"]),
            "country": row["country"],
            "name": row["name"],
            "address": row["address"],
            "tel": row["tel"],
            "fax": row["fax"],
            "email": row["email"],
            "url": row["url"],
        }
