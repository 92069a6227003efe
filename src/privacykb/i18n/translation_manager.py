"""Translation service for localized error messages.

Uses Python's gettext with compiled message catalogs. Translations are
looked up per request from the client's preference list and passed explicitly
to whoever formats a message; nothing is installed globally.
"""

import copy
from collections.abc import Sequence
from gettext import GNUTranslations, NullTranslations
from pathlib import Path

from fastapi import Request

from privacykb.system.path_resolver import PathResolver


class TranslationManager:
    """Manages translations for the application.

    One catalog is cached per shipped locale, so the cache never outgrows the
    contents of the locales directory whatever the clients ask for.
    """

    DOMAIN = "messages"

    def __init__(self, path_resolver: PathResolver):
        self.path_resolver = path_resolver
        self.locales_dir = path_resolver.get_locales_dir()
        self.translations: dict[str, GNUTranslations] = {}
        self.default_language = "en"
        self.catalog_files = self._find_catalogs()

    def _find_catalogs(self) -> dict[str, Path]:
        """Map normalized language tags to the compiled catalog of that locale."""
        catalogs = self.locales_dir.glob(f"*/LC_MESSAGES/{self.DOMAIN}.mo")
        return {
            catalog.parents[1].name.lower().replace("_", "-"): catalog for catalog in catalogs
        }

    def resolve_locale(self, language: str) -> str | None:
        """Get the shipped locale for a language tag, trying its primary subtag next."""
        tag = language.lower().replace("_", "-")
        for candidate in (tag, tag.split("-")[0]):
            if candidate in self.catalog_files:
                return candidate
        return None

    def get_catalog(self, locale: str) -> GNUTranslations:
        """Get the cached catalog of one shipped locale."""
        if locale not in self.translations:
            with open(self.catalog_files[locale], "rb") as f:
                self.translations[locale] = GNUTranslations(f)
        return self.translations[locale]

    def get_translation(self, languages: Sequence[str]) -> GNUTranslations | NullTranslations:
        """Get translation object for an ordered list of languages.

        The first language with a catalog wins and later ones fill the gaps.
        Languages without a catalog are skipped.
        """
        locales: list[str] = []
        for language in languages or [self.default_language]:
            locale = self.resolve_locale(language)
            if locale is not None and locale not in locales:
                locales.append(locale)
        if not locales:
            return NullTranslations()

        # Chain copies: add_fallback mutates the catalog it is called on
        chain = copy.copy(self.get_catalog(locales[0]))
        for locale in locales[1:]:
            chain.add_fallback(copy.copy(self.get_catalog(locale)))
        return chain


# FastAPI dependency
def get_translation(request: Request) -> GNUTranslations | NullTranslations:
    """FastAPI dependency to get translation for current request."""
    translation_manager = request.app.state.translation_manager
    languages = getattr(request.state, "languages", [translation_manager.default_language])
    return translation_manager.get_translation(languages)
