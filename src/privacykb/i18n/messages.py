"""Localized HTML error messages returned by the knowledge base actions.

Each message is a small HTML document. The source strings are English; the
catalogs under ``locales/`` provide translations, selected by the translation
object handed to ErrorMessages.
"""

import html
from gettext import GNUTranslations, NullTranslations


class ErrorMessages:
    """Error message catalog bound to one request's translation."""

    def __init__(self, translation: GNUTranslations | NullTranslations):
        self._ = translation.gettext

    def usage(self) -> str:
        """Missing or unknown action."""
        return self._("""<html lang=en>
<title>Missing or unknown ‘action’ parameter</title>
<h1>Missing or unknown ‘action’ parameter</h1>
<p>The ‘action’ parameter must be present and must be one of
‘search’, ‘definitions’, ‘gdpr’, ‘dpa’, ‘dpv’, ‘threat’ or ‘status’.
""")

    def missing_words(self) -> str:
        return self._("""<html lang=en>
<title>Missing ‘words’ parameter</title>
<h1>Missing ‘words’ parameter</h1>
<p>When the ‘action’ parameter is ‘search’,
the ‘words’ parameter is required.
""")

    def missing_term(self, action: str) -> str:
        """Missing term, for the 'definitions' and 'dpv' actions."""
        return self._("""<html lang=en>
<title>Missing ‘term’ parameter</title>
<h1>Missing ‘term’ parameter</h1>
<p>When the ‘action’ parameter is ‘%(action)s’,
the ‘term’ parameter is required.
""") % {"action": action}

    def missing_article(self) -> str:
        return self._("""<html lang=en>
<title>Missing ‘article’ parameter</title>
<h1>Missing ‘article’ parameter</h1>
<p>When the ‘action’ parameter is ‘gdpr’,
the ‘article’ parameter is required.
""")

    def invalid_article(self) -> str:
        return self._("""<html lang=en>
<title>Invalid ‘article’ parameter</title>
<h1>Invalid ‘article’ parameter</h1>
<p>The ‘article’ parameter must be an article number, optionally followed
by a clause and a subclause, e.g., ‘30’, ‘30(1)’ or ‘30(1)(g)’.
""")

    def missing_category(self) -> str:
        return self._("""<html lang=en>
<title>Missing ‘category’ parameter</title>
<h1>Missing ‘category’ parameter</h1>
<p>When the ‘action’ parameter is ‘threat’,
at least one ‘category’ parameter is required.
""")

    def no_such_article(self) -> str:
        return self._("""<html lang=en>
<title>No such article</title>
<h1>No such article</h1>
<p>The requested article or clause does not exist.
""")

    def no_such_dpa(self) -> str:
        return self._("""<html lang=en>
<title>No such DPA</title>
<h1>No such DPA</h1>
<p>No Data Protection Agency exists for the selected country or with the given name.
""")

    def no_such_term(self) -> str:
        return self._("""<html lang=en>
<title>No such term</title>
<h1>No such term</h1>
<p>The requested term does not exist in the vocabulary.
""")

    def no_such_threat(self, category: str) -> str:
        return self._("""<html lang=en>
<title>No such threat category</title>
<h1>No such threat category</h1>
<p>There is no threat category ‘%(category)s’.
""") % {"category": html.escape(category)}

    def database(self) -> str:
        """Storage layer unavailable."""
        return self._("""<html lang=en>
<title>Server error: Database not available</title>
<h1>Server error: Database not available</h1>
<p>An error occurred when trying to open the database.
""")
