"""Internationalization (i18n) domain: language negotiation and localized messages."""

from privacykb.i18n.language_preferences import (
    LanguagePreference,
    parse_language_preferences,
    preferred_languages,
    with_fallback,
)
from privacykb.i18n.messages import ErrorMessages
from privacykb.i18n.translation_manager import TranslationManager

__all__ = [
    "ErrorMessages",
    "LanguagePreference",
    "TranslationManager",
    "parse_language_preferences",
    "preferred_languages",
    "with_fallback",
]
