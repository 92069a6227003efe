from pathlib import Path
from typing import Any

import pytest
from dependency_injector import providers
from sqlalchemy import text
from starlette.testclient import TestClient

from privacykb.config import ConfigManager, KnowledgeBaseConfig
from privacykb.database.core import KnowledgeBaseDatabaseService
from privacykb.knowledge.articles import ArticleSearchService
from privacykb.knowledge.definitions import DefinitionQueryService
from privacykb.knowledge.dpa import DpaQueryService
from privacykb.knowledge.gdpr import GdprQueryService
from privacykb.knowledge.service import KnowledgeBaseService
from privacykb.knowledge.threats import ThreatQueryService
from privacykb.knowledge.vocabulary_terms import VocabularyQueryService
from privacykb.system.path_resolver import PathResolver
from privacykb.vocabulary.builder import VocabularyDatabaseBuilder
from privacykb.web.core.container import Container
from privacykb.web.core.factory import create_app

DPV = "https://w3id.org/dpv#"

DEFINITIONS = [
    {"language": "en", "term": "cookie",
     "definition": "A small piece of data stored by the browser."},
    {"language": "fr", "term": "cookie", "definition": "Petit fichier déposé par le navigateur."},
    {"language": "en", "term": "tracker", "definition": "Code that follows users across sites."},
    {"language": "en", "term": "personal data", "definition": "Information relating to a person."},
]

GDPR = [
    {"language": "en", "article": 1, "clause": 1, "subclause": None,
     "text": "This Regulation lays down rules relating to the protection of natural persons."},
    {"language": "en", "article": 30, "clause": 1, "subclause": "a",
     "text": "the name and contact details of the controller;"},
    {"language": "en", "article": 30, "clause": 1, "subclause": "b",
     "text": "the purposes of the processing;"},
    {"language": "en", "article": 30, "clause": 2, "subclause": None,
     "text": "Each processor shall maintain a record of all categories of processing."},
    {"language": "fr", "article": 30, "clause": 1, "subclause": "a",
     "text": "le nom et les coordonnées du responsable du traitement;"},
]

DPA = [
    {"language": "en", "country": "NL", "name": "Autoriteit Persoonsgegevens",
     "address": "Bezuidenhoutseweg 30, Den Haag", "tel": "+31 70 888 85 00", "fax": None,
     "email": None, "url": "https://autoriteitpersoonsgegevens.nl"},
    {"language": "en", "country": "FR", "name": "CNIL",
     "address": "3 Place de Fontenoy, Paris", "tel": "+33 1 53 73 22 22", "fax": None,
     "email": None, "url": "https://www.cnil.fr"},
    {"language": "fr", "country": "FR", "name": "CNIL",
     "address": "3 place de Fontenoy, TSA 80715, Paris Cedex 07", "tel": "01 53 73 22 22",
     "fax": None, "email": None, "url": "https://www.cnil.fr"},
    {"language": "en", "country": "DE", "name": "Der Bundesbeauftragte für den Datenschutz",
     "address": "Graurheindorfer Str. 153, Bonn", "tel": "+49 228 997799 0", "fax": None,
     "email": "poststelle@bfdi.bund.de", "url": "https://www.bfdi.bund.de"},
    {"language": "en", "country": "BE", "name": "Gegevensbeschermingsautoriteit",
     "address": "Drukpersstraat 35, Brussel", "tel": "+32 2 274 48 00", "fax": None,
     "email": None, "url": "https://www.gegevensbeschermingsautoriteit.be"},
]

ARTICLES = [
    {"language": "en", "title": "Cookie walls explained", "url": "https://example.org/cookie-walls",
     "body": "Why a cookie wall is not valid consent."},
    {"language": "en", "title": "Trackers in apps", "url": "https://example.org/trackers",
     "body": "How a tracker in a mobile app reports your location."},
    {"language": "fr", "title": "Les murs de cookies", "url": "https://example.org/fr/murs",
     "body": "Pourquoi un mur de cookie n'est pas un consentement valable."},
]

THREATS = [
    {"category": "phishing", "language": "en",
     "description": "Deceptive messages that trick you into revealing credentials."},
    {"category": "phishing", "language": "fr",
     "description": "Messages trompeurs qui vous poussent à révéler vos identifiants."},
    {"category": "malware", "language": "en", "description": "Software written to cause harm."},
]

THREAT_ACTIONS = [
    {"category": "phishing", "language": "en", "action": "Check the sender address."},
    {"category": "phishing", "language": "en", "action": "Never enter a password from a link."},
    {"category": "malware", "language": "en", "action": "Keep your software up to date."},
]


@pytest.fixture
def vocabulary_document() -> dict[str, Any]:
    """JSON-LD export with two related terms."""
    return {
        "@graph": [
            {
                "@id": f"{DPV}Foo",
                "dct:created": [{"@value": "2019-04-05", "@type": "xsd:date"}],
                "dct:creator": [{"@value": "Jane Doe"}],
                "sw:term_status": [{"@language": "en", "@value": "accepted"}],
                "skos:definition": [{"@language": "en", "@value": "A thing that is foo."}],
                "skos:prefLabel": [
                    {"@language": "en", "@value": "Foo"},
                    {"@language": "fr", "@value": "Truc"},
                ],
                "rdfs:subClassOf": [{"@id": f"{DPV}Bar"}],
                "rdfs:isDefinedBy": [{"@id": DPV}],
            },
            {
                "@id": f"{DPV}Bar",
                "skos:prefLabel": "Bar",
                "skos:note": [{"@value": "Bar's note"}],
            },
        ]
    }


@pytest.fixture
def kb_path(tmp_path: Path, vocabulary_document: dict[str, Any]) -> Path:
    """Build a populated knowledge base database file."""
    db_path = tmp_path / "database" / "kb.db"
    builder = VocabularyDatabaseBuilder(db_path)
    builder.create_reference_schema()
    builder.populate_from_document(vocabulary_document)

    with builder.engine.begin() as conn:
        conn.execute(
            text("INSERT INTO definitions VALUES (:language, :term, :definition)"), DEFINITIONS
        )
        conn.execute(
            text("INSERT INTO gdpr VALUES (:language, :article, :clause, :subclause, :text)"),
            GDPR,
        )
        conn.execute(
            text(
                "INSERT INTO dpa VALUES "
                "(:language, :country, :name, :address, :tel, :fax, :email, :url)"
            ),
            DPA,
        )
        conn.execute(
            text(
                "INSERT INTO articles (language, title, url, body) "
                "VALUES (:language, :title, :url, :body)"
            ),
            ARTICLES,
        )
        conn.execute(
            text("INSERT INTO threats VALUES (:category, :language, :description)"), THREATS
        )
        conn.execute(
            text("INSERT INTO threat_actions VALUES (:category, :language, :action)"),
            THREAT_ACTIONS,
        )
    builder.dispose()
    return db_path


@pytest.fixture
async def kb_database(kb_path: Path):
    """Read-only database service over the populated knowledge base."""
    service = KnowledgeBaseDatabaseService(kb_path)
    yield service
    # IMPORTANT: Dispose the engine to prevent file descriptor leaks
    await service.dispose()


@pytest.fixture
async def kb_session(kb_database: KnowledgeBaseDatabaseService):
    """Async session on the populated knowledge base."""
    async with kb_database.get_async_db() as session:
        yield session


@pytest.fixture
def test_config() -> KnowledgeBaseConfig:
    return KnowledgeBaseConfig()


@pytest.fixture
def kb_service(kb_database: KnowledgeBaseDatabaseService, test_config) -> KnowledgeBaseService:
    """Knowledge base service wired to real query services."""
    return KnowledgeBaseService(
        database_service=kb_database,
        config=test_config,
        definition_query_service=DefinitionQueryService(),
        gdpr_query_service=GdprQueryService(),
        dpa_query_service=DpaQueryService(test_config.fallback_language),
        article_search_service=ArticleSearchService(),
        vocabulary_query_service=VocabularyQueryService(),
        threat_query_service=ThreatQueryService(),
    )


@pytest.fixture
def path_resolver(tmp_path: Path, kb_path: Path) -> PathResolver:
    """Provide a PathResolver whose writable paths live in the test's temp directory."""
    resolver = PathResolver()

    temp_config_dir = tmp_path / "config"
    temp_config_dir.mkdir(parents=True, exist_ok=True)

    resolver.data_dir = tmp_path
    resolver.get_config_path = lambda: temp_config_dir / "privacykb.yaml"
    resolver.get_database_path = lambda: kb_path
    resolver.get_locales_dir = lambda: tmp_path / "locales"
    return resolver


@pytest.fixture
def app_with_temp_data(path_resolver: PathResolver):
    """Create FastAPI app with properly isolated paths.

    Providers are overridden at the class level BEFORE app creation, because
    create_app() resolves the config and translation manager immediately.
    """
    Container.path_resolver.override(providers.Singleton(lambda: path_resolver))
    Container.database_path.override(providers.Factory(lambda: path_resolver.get_database_path()))

    manager = ConfigManager(path_resolver)
    config = manager.load()
    Container.config.override(providers.Singleton(lambda: config))

    app = create_app()

    yield app

    Container.path_resolver.reset_override()
    Container.database_path.reset_override()
    Container.config.reset_override()


@pytest.fixture
def client(app_with_temp_data):
    """Test client running the application lifespan."""
    with TestClient(app_with_temp_data) as client:
        yield client
