"""Tests for definition lookups."""

from privacykb.knowledge.definitions import DefinitionQueryService


class TestDefinitionQueryService:
    """Test DefinitionQueryService against a populated knowledge base."""

    async def test_finds_definition_in_preferred_language(self, kb_session):
        """Should return the definition in the first preferred language."""
        result = await DefinitionQueryService().find_definitions(kb_session, ["fr", "en"], "cookie")

        assert result == [
            {
                "@context": {"@language": "fr"},
                "term": "cookie",
                "definition": "Petit fichier déposé par le navigateur.",
            }
        ]

    async def test_falls_back_to_next_language(self, kb_session):
        """Should try the next language when the first has no definition."""
        result = await DefinitionQueryService().find_definitions(
            kb_session, ["fr", "en"], "tracker"
        )

        assert len(result) == 1
        assert result[0]["@context"] == {"@language": "en"}

    async def test_term_is_case_insensitive(self, kb_session):
        """Should match the term regardless of case."""
        result = await DefinitionQueryService().find_definitions(
            kb_session, ["en"], "Personal DATA"
        )

        assert [r["term"] for r in result] == ["personal data"]

    async def test_unknown_language_without_fallback(self, kb_session):
        """Should return nothing when no listed language has the term."""
        assert await DefinitionQueryService().find_definitions(kb_session, ["xx"], "cookie") == []
