"""Action dispatch for the knowledge base.

Every action takes the request parameters and the client's language
preferences and returns an ActionResult. Missing parameters and empty lookups
become 400 and 404 results with a localized message; a failing database is
turned into a 500 result once, at the top of dispatch.
"""

import logging
import os
import re
from collections.abc import Awaitable, Callable, Mapping, Sequence

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from privacykb.config.models import KnowledgeBaseConfig
from privacykb.database.core import KnowledgeBaseDatabaseService
from privacykb.i18n.language_preferences import with_fallback
from privacykb.i18n.messages import ErrorMessages
from privacykb.knowledge.articles import ArticleSearchService
from privacykb.knowledge.definitions import DefinitionQueryService
from privacykb.knowledge.dpa import DpaQueryService
from privacykb.knowledge.gdpr import GdprQueryService
from privacykb.knowledge.models import ActionResult, ArticleReference
from privacykb.knowledge.threats import ThreatQueryService
from privacykb.knowledge.vocabulary_terms import VocabularyQueryService

logger = logging.getLogger(__name__)

# A word is delimited by white space, commas or semicolons, or is anything
# between double quotes. The quoted text is captured so re.split keeps it.
WORD_SPLIT_PATTERN = re.compile(r'[,;\s]*"([^"]+)"[,;\s]*|[,;\s]+')

Params = Mapping[str, Sequence[str]]
ActionHandler = Callable[[AsyncSession, Params, list[str], ErrorMessages], Awaitable[ActionResult]]


def split_words(raw: str) -> list[str]:
    """Split a search string into words and quoted phrases."""
    return [word for word in WORD_SPLIT_PATTERN.split(raw) if word]


def split_categories(values: Sequence[str]) -> list[str]:
    """Collect threat categories from repeated and comma-separated parameters."""
    return [part.strip() for value in values for part in value.split(",") if part.strip()]


def first_param(params: Params, name: str) -> str | None:
    """Get the first non-blank value of a parameter, or None."""
    for value in params.get(name, ()):
        if value.strip():
            return value
    return None


class KnowledgeBaseService:
    """Runs knowledge base actions against the read-only database."""

    def __init__(
        self,
        database_service: KnowledgeBaseDatabaseService,
        config: KnowledgeBaseConfig,
        definition_query_service: DefinitionQueryService,
        gdpr_query_service: GdprQueryService,
        dpa_query_service: DpaQueryService,
        article_search_service: ArticleSearchService,
        vocabulary_query_service: VocabularyQueryService,
        threat_query_service: ThreatQueryService,
    ):
        self.database_service = database_service
        self.config = config
        self.definitions = definition_query_service
        self.gdpr = gdpr_query_service
        self.dpa = dpa_query_service
        self.articles = article_search_service
        self.vocabulary = vocabulary_query_service
        self.threats = threat_query_service

    async def dispatch(
        self,
        action: str | None,
        params: Params,
        languages: Sequence[str],
        messages: ErrorMessages,
    ) -> ActionResult:
        """Run one action.

        Args:
            action: Action name; anything unknown yields the usage message
            params: Request parameters, each with all of its values
            languages: The client's language preferences, highest first
            messages: Error messages in the client's language

        Returns:
            Status code with a JSON-serializable payload or an HTML message
        """
        if action == "status":
            return self._status(languages)

        handlers: dict[str, ActionHandler] = {
            "search": self._search,
            "definitions": self._definitions,
            "gdpr": self._gdpr,
            "dpa": self._dpa,
            "dpv": self._dpv,
            "threat": self._threat,
        }
        handler = handlers.get(action or "")
        if handler is None:
            return ActionResult(400, messages.usage())

        chain = with_fallback(languages, self.config.fallback_language)
        try:
            async with self.database_service.get_async_db() as session:
                return await handler(session, params, chain, messages)
        except SQLAlchemyError:
            logger.exception("Database error while running action %s", action)
            return ActionResult(500, messages.database())

    def _status(self, languages: Sequence[str]) -> ActionResult:
        return ActionResult(200, {"status": {"langs": list(languages), "cwd": os.getcwd()}})

    async def _search(
        self, session: AsyncSession, params: Params, languages: list[str], messages: ErrorMessages
    ) -> ActionResult:
        raw = first_param(params, "words")
        if raw is None:
            return ActionResult(400, messages.missing_words())

        words = split_words(raw)
        definitions = []
        for word in words:
            definitions.extend(await self.definitions.find_definitions(session, languages, word))
        articles = await self.articles.search(session, languages, words)
        return ActionResult(200, {"definitions": definitions, "articles": articles})

    async def _definitions(
        self, session: AsyncSession, params: Params, languages: list[str], messages: ErrorMessages
    ) -> ActionResult:
        term = first_param(params, "term")
        if term is None:
            return ActionResult(400, messages.missing_term("definitions"))

        definitions = await self.definitions.find_definitions(session, languages, term)
        return ActionResult(200, {"definitions": definitions})

    async def _gdpr(
        self, session: AsyncSession, params: Params, languages: list[str], messages: ErrorMessages
    ) -> ActionResult:
        raw = first_param(params, "article")
        if raw is None:
            return ActionResult(400, messages.missing_article())
        try:
            reference = ArticleReference.parse(raw)
        except ValueError:
            return ActionResult(400, messages.invalid_article())

        results = await self.gdpr.find_articles(session, languages, reference)
        if not results:
            return ActionResult(404, messages.no_such_article())
        return ActionResult(200, results)

    async def _dpa(
        self, session: AsyncSession, params: Params, languages: list[str], messages: ErrorMessages
    ) -> ActionResult:
        results = await self.dpa.find(
            session,
            languages,
            country=first_param(params, "country"),
            name=first_param(params, "name"),
        )
        if not results:
            return ActionResult(404, messages.no_such_dpa())
        return ActionResult(200, results)

    async def _dpv(
        self, session: AsyncSession, params: Params, languages: list[str], messages: ErrorMessages
    ) -> ActionResult:
        term = first_param(params, "term")
        if term is None:
            return ActionResult(400, messages.missing_term("dpv"))

        terms = await self.vocabulary.find_terms(session, languages, term)
        if not terms:
            return ActionResult(404, messages.no_such_term())
        return ActionResult(200, {"terms": terms})

    async def _threat(
        self, session: AsyncSession, params: Params, languages: list[str], messages: ErrorMessages
    ) -> ActionResult:
        categories = split_categories(params.get("category", ()))
        if not categories:
            return ActionResult(400, messages.missing_category())

        threats = []
        for category in categories:
            threat = await self.threats.explain(session, languages, category)
            if threat is None:
                return ActionResult(404, messages.no_such_threat(category))
            threats.append(threat)
        return ActionResult(200, {"threats": threats})
