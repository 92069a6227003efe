"""Result and parameter models shared by the knowledge base actions."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any

# "30", "30(1)" or "30(1)(g)", surrounding whitespace allowed
ARTICLE_PATTERN = re.compile(r"^\s*(\d+)(?:\((\d+)\)(?:\((\w)\))?)?\s*$")

# Largest value SQLite can bind as an INTEGER
MAX_ARTICLE_NUMBER = 2**63 - 1


@dataclass(frozen=True)
class ActionResult:
    """Transport-agnostic outcome of an action.

    A 200 result carries a JSON-serializable payload; any other status carries
    a human-readable HTML message.
    """

    status_code: int
    payload: Any

    @property
    def ok(self) -> bool:
        """Whether the action succeeded."""
        return self.status_code == 200


@dataclass(frozen=True)
class ArticleReference:
    """A GDPR article, optionally narrowed to a clause and a subclause."""

    article: int
    clause: int | None = None
    subclause: str | None = None

    @classmethod
    def parse(cls, raw: str) -> ArticleReference:
        """Parse an article number such as ``30(1)(g)``.

        Raises:
            ValueError: If the string does not follow the article grammar, or
                a number is too large to be looked up
        """
        match = ARTICLE_PATTERN.match(raw)
        if not match:
            raise ValueError(f"Invalid article reference: {raw!r}")
        article, clause, subclause = match.groups()
        numbers = [article] if clause is None else [article, clause]
        # Compare lengths first: int() refuses very long digit strings
        if any(len(n) > 19 or int(n) > MAX_ARTICLE_NUMBER for n in numbers):
            raise ValueError(f"Invalid article reference: {raw!r}")
        return cls(
            article=int(article),
            clause=int(clause) if clause is not None else None,
            subclause=subclause,
        )

    def __str__(self) -> str:
        return format_article_number(self.article, self.clause, self.subclause)


def format_article_number(article: int, clause: int | None, subclause: str | None) -> str:
    """Render an article number the way it is cited, e.g. ``30(1)(g)``."""
    number = str(article)
    if clause is not None:
        number += f"({clause})"
    if subclause:
        number += f"({subclause})"
    return number


def language_context(language: str) -> dict[str, str]:
    """JSON-LD context stating the language of every string in a record."""
    return {"@language": language}


def language_value(language: str, value: str) -> dict[str, str]:
    """JSON-LD value object for a single language-tagged string."""
    return {"@language": language, "@value": value}


def reference_value(uri: str) -> dict[str, str]:
    """JSON-LD node reference to another resource."""
    return {"@id": uri}
