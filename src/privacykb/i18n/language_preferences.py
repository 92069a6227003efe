"""Accept-Language parsing and language fallback chains.

Every handler that returns language-specific text works from the ordered
preference list produced here.
"""

import logging
import re
from collections.abc import Sequence
from typing import NamedTuple

logger = logging.getLogger(__name__)

# A tag, optionally followed by a quality factor. Only the start of an entry is
# anchored, so trailing parameters after the q value are tolerated.
LANGUAGE_ENTRY_PATTERN = re.compile(
    r"^\s*([a-z-]+)\s*(?:;\s*q=([0-9]+(?:\.[0-9]*)?|\.[0-9]+))?", re.IGNORECASE
)


class LanguagePreference(NamedTuple):
    """A language tag with its quality factor."""

    tag: str
    weight: float


def parse_language_preferences(raw: str) -> list[LanguagePreference]:
    """Parse an Accept-Language-like string into a weighted preference sequence.

    Entries are comma-separated, each either ``tag`` or ``tag;q=weight``. Tags
    are lower-cased and the default weight is 1.0. Entries that do not match
    are skipped. The weight bound [0, 1] is not enforced.

    The result is ordered by non-increasing weight; entries with equal weight
    keep their input order.

    Args:
        raw: The raw header or override value

    Returns:
        Ordered list of LanguagePreference
    """
    preferences = []
    for entry in raw.split(","):
        match = LANGUAGE_ENTRY_PATTERN.match(entry)
        if not match:
            logger.debug("Skipping malformed language entry: %r", entry)
            continue
        tag, quality = match.groups()
        weight = float(quality) if quality is not None else 1.0
        preferences.append(LanguagePreference(tag.lower(), weight))

    # sorted() is stable, so equal weights keep first-seen order
    return sorted(preferences, key=lambda preference: -preference.weight)


def preferred_languages(raw: str | None, default: str = "en") -> list[str]:
    """Get the ordered list of language tags the client prefers.

    Args:
        raw: Accept-Language-like string, or None when the client sent nothing
        default: System default language

    Returns:
        Language tags, highest preference first. Never empty.
    """
    if raw is None:
        raw = default

    languages = [preference.tag for preference in parse_language_preferences(raw)]
    if not languages:
        return [default]
    return languages


def with_fallback(languages: Sequence[str], fallback: str = "en") -> list[str]:
    """Append the fallback language to a preference list unless already present."""
    if fallback in languages:
        return list(languages)
    return [*languages, fallback]
