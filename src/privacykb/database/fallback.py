"""Per-language probing of the knowledge base.

Languages are tried one at a time in preference order and the first non-empty
result set wins whole; results from different languages are never merged.
"""

import logging
from collections.abc import Awaitable, Callable, Sequence
from typing import TypeVar

logger = logging.getLogger(__name__)

RowT = TypeVar("RowT")

LanguageLookup = Callable[[str], Awaitable[Sequence[RowT]]]


async def fetch_first(languages: Sequence[str], lookup: LanguageLookup) -> list[RowT]:
    """Run a lookup for each language in turn until one returns rows.

    Args:
        languages: Language tags in preference order
        lookup: Async callable running the query bound to one language tag

    Returns:
        Rows of the first language with any result, or an empty list when
        every language came back empty
    """
    for language in languages:
        rows = await lookup(language)
        logger.debug("Tried language %s: %d rows", language, len(rows))
        if rows:
            return list(rows)
    return []
