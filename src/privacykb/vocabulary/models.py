"""Vocabulary term model and the linked-data properties it is read from.

A term is identified by its URI. Everything else about it is stored as child
rows keyed by that URI, one child table per property.
"""

from __future__ import annotations

from dataclasses import dataclass, field

DCT = "http://purl.org/dc/terms/"
RDFS = "http://www.w3.org/2000/01/rdf-schema#"
SKOS = "http://www.w3.org/2004/02/skos/core#"
SW = "http://www.w3.org/2003/06/sw-vocab-status/ns#"

TERMS_TABLE = "terms"
CREATED_KEYS = (f"{DCT}created", "dct:created", "dcterms:created")


class VocabularyIngestionError(ValueError):
    """A term record lacks a required field. Aborts the whole ingestion run."""


@dataclass(frozen=True)
class TermProperty:
    """A multi-valued term property and the child table it is stored in.

    Attributes:
        name: Name used in query results
        table: Child table holding one row per value
        column: Column of the value in that table
        keys: Accepted JSON-LD keys, full IRI first
        localized: Whether each value carries a language tag
        default_language: Language assumed when a localized value has none;
            None makes the language mandatory
        is_reference: Whether values are IRIs rather than literals
    """

    name: str
    table: str
    column: str
    keys: tuple[str, ...]
    localized: bool = False
    default_language: str | None = None
    is_reference: bool = False


# Emission order within one term
TERM_PROPERTIES: tuple[TermProperty, ...] = (
    TermProperty(
        "creators", "term_creators", "creator", (f"{DCT}creator", "dct:creator", "dcterms:creator")
    ),
    TermProperty(
        "sources",
        "term_sources",
        "source",
        (f"{DCT}source", "dct:source", "dcterms:source"),
        is_reference=True,
    ),
    TermProperty(
        "statuses",
        "term_statuses",
        "status",
        (f"{SW}term_status", "sw:term_status", "vs:term_status"),
        localized=True,
    ),
    TermProperty(
        "definitions",
        "term_definitions",
        "definition",
        (f"{SKOS}definition", "skos:definition"),
        localized=True,
    ),
    TermProperty(
        "labels",
        "term_labels",
        "label",
        (f"{SKOS}prefLabel", "skos:prefLabel"),
        localized=True,
        default_language="en",
    ),
    TermProperty(
        "supertypes",
        "term_supertypes",
        "supertype",
        (f"{RDFS}subClassOf", "rdfs:subClassOf", f"{SKOS}broader", "skos:broader"),
        is_reference=True,
    ),
    TermProperty(
        "notes",
        "term_notes",
        "note",
        (f"{SKOS}note", "skos:note"),
        localized=True,
        default_language="en",
    ),
    TermProperty(
        "related",
        "term_related",
        "related",
        (f"{SKOS}related", "skos:related"),
        is_reference=True,
    ),
    TermProperty(
        "vocabularies",
        "term_vocabularies",
        "vocabulary",
        (f"{RDFS}isDefinedBy", "rdfs:isDefinedBy", f"{SKOS}inScheme", "skos:inScheme"),
        is_reference=True,
    ),
)


@dataclass(frozen=True)
class PropertyValue:
    """One value of a term property, with its language when localized."""

    value: str
    language: str | None = None


@dataclass
class TermRecord:
    """A vocabulary term as read from one linked-data node."""

    uri: str
    created: str | None = None
    values: dict[str, list[PropertyValue]] = field(default_factory=dict)

    def get(self, name: str) -> list[PropertyValue]:
        """Get the values of a property by name, in source order."""
        return self.values.get(name, [])
