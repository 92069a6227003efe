"""Threat category explanations with their mitigating actions.

The category description follows the usual per-language fallback. Actions are
taken in the language of the description when any exist there; otherwise the
first language in the chain that has actions is used, and each of those
actions carries its own language tag since it differs from the record's.
"""

from collections.abc import Sequence
from typing import Any

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from privacykb.database.fallback import fetch_first
from privacykb.knowledge.models import language_context, language_value

FIND_DESCRIPTION = text("""
    SELECT category, language, description
    FROM threats
    WHERE lower(category) = lower(:category)
    AND language = :language
    ORDER BY rowid
""")

FIND_ACTIONS = text("""
    SELECT language, action
    FROM threat_actions
    WHERE lower(category) = lower(:category)
    AND language = :language
    ORDER BY rowid
""")


class ThreatQueryService:
    """Explains threat categories and what can be done about them."""

    async def explain(
        self, session: AsyncSession, languages: Sequence[str], category: str
    ) -> dict[str, Any] | None:
        """Get the description and actions of one threat category.

        Args:
            session: Database session
            languages: Language tags in preference order
            category: Threat category, compared case-insensitively

        Returns:
            Threat record, or None if the category has no description in any
            of the languages
        """

        async def find_description(language: str) -> Sequence[Any]:
            result = await session.execute(
                FIND_DESCRIPTION, {"category": category, "language": language}
            )
            return result.mappings().all()

        async def find_actions(language: str) -> Sequence[Any]:
            result = await session.execute(
                FIND_ACTIONS, {"category": category, "language": language}
            )
            return result.mappings().all()

        descriptions = await fetch_first(languages, find_description)
        if not descriptions:
            return None
        description = descriptions[0]
        language = description["language"]

        actions: list[Any] = [row["action"] for row in await find_actions(language)]
        if not actions:
            actions = [
                language_value(row["language"], row["action"])
                for row in await fetch_first(languages, find_actions)
            ]

        return {
            "@context": language_context(language),
            "category": description["category"],
            "description": description["description"],
            "actions": actions,
        }
