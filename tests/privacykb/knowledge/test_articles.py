"""Tests for full-text article search."""

from privacykb.knowledge.articles import ArticleSearchService, build_match_query


class TestBuildMatchQuery:
    """Test build_match_query."""

    def test_quotes_each_word_as_phrase(self):
        """Should quote words and join them with OR."""
        assert build_match_query(["cookie", "personal data"]) == '"cookie" OR "personal data"'

    def test_escapes_embedded_quotes(self):
        """Should double quotes inside a word."""
        assert build_match_query(['a"b']) == '"a""b"'


class TestArticleSearchService:
    """Test ArticleSearchService against a populated knowledge base."""

    async def test_finds_matching_articles(self, kb_session):
        """Should return articles in the preferred language matching any word."""
        result = await ArticleSearchService().search(kb_session, ["en"], ["cookie", "tracker"])

        assert {r["title"] for r in result} == {"Cookie walls explained", "Trackers in apps"}
        assert all(r["@context"] == {"@language": "en"} for r in result)

    async def test_filters_by_language(self, kb_session):
        """Should only return articles of the first language with matches."""
        result = await ArticleSearchService().search(kb_session, ["fr", "en"], ["cookie"])

        assert result == [
            {
                "@context": {"@language": "fr"},
                "title": "Les murs de cookies",
                "url": "https://example.org/fr/murs",
            }
        ]

    async def test_operators_in_words_are_literal(self, kb_session):
        """Should not fail on FTS syntax in user input."""
        result = await ArticleSearchService().search(kb_session, ["en"], ["walls)", "-consent"])

        assert [r["title"] for r in result] == ["Cookie walls explained"]

    async def test_no_words(self, kb_session):
        """Should return nothing without querying for an empty word list."""
        assert await ArticleSearchService().search(kb_session, ["en"], []) == []

    async def test_limit(self, kb_session):
        """Should cap the number of results."""
        result = await ArticleSearchService(limit=1).search(
            kb_session, ["en"], ["cookie", "tracker"]
        )

        assert len(result) == 1
