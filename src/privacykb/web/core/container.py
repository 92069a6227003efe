"""Dependency injection container for the privacy knowledge base."""

from dependency_injector import containers, providers

from privacykb.database.core import KnowledgeBaseDatabaseService
from privacykb.i18n.translation_manager import TranslationManager
from privacykb.knowledge.articles import ArticleSearchService
from privacykb.knowledge.definitions import DefinitionQueryService
from privacykb.knowledge.dpa import DpaQueryService
from privacykb.knowledge.gdpr import GdprQueryService
from privacykb.knowledge.service import KnowledgeBaseService
from privacykb.knowledge.threats import ThreatQueryService
from privacykb.knowledge.vocabulary_terms import VocabularyQueryService
from privacykb.system.path_resolver import PathResolver
from privacykb.web.core.config import get_config


class Container(containers.DeclarativeContainer):
    """Application dependency injection container.

    Everything here is stateless apart from the database engine, so all
    services are singletons shared by every request.
    """

    # Core infrastructure services - singletons
    path_resolver = providers.Singleton(PathResolver)

    # Configuration - singleton instance that uses our path_resolver
    config = providers.Singleton(
        get_config,
        path_resolver=path_resolver,
    )

    translation_manager = providers.Singleton(
        TranslationManager,
        path_resolver=path_resolver,
    )

    # Database path provider
    database_path = providers.Factory(
        lambda resolver: resolver.get_database_path(),
        resolver=path_resolver,
    )

    kb_database = providers.Singleton(
        KnowledgeBaseDatabaseService,
        db_path=database_path,
    )

    # Query services
    definition_query_service = providers.Singleton(DefinitionQueryService)
    gdpr_query_service = providers.Singleton(GdprQueryService)
    dpa_query_service = providers.Singleton(
        DpaQueryService,
        fallback_language=config.provided.fallback_language,
    )
    article_search_service = providers.Singleton(ArticleSearchService)
    vocabulary_query_service = providers.Singleton(VocabularyQueryService)
    threat_query_service = providers.Singleton(ThreatQueryService)

    knowledge_base_service = providers.Singleton(
        KnowledgeBaseService,
        database_service=kb_database,
        config=config,
        definition_query_service=definition_query_service,
        gdpr_query_service=gdpr_query_service,
        dpa_query_service=dpa_query_service,
        article_search_service=article_search_service,
        vocabulary_query_service=vocabulary_query_service,
        threat_query_service=threat_query_service,
    )
