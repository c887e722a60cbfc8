"""Language-specific filters that keep unsuitable root words out of play."""

from __future__ import annotations

import json
import os
from collections.abc import Iterable
from dataclasses import dataclass, field
from functools import lru_cache

from better_profanity import profanity as _profanity

__all__ = [
    "FilterConfig",
    "LanguageFilter",
    "apply_language_filters",
    "filter_candidates",
    "load_filter_config",
]

_profanity.load_censor_words()

# Shortest root word offered to the player.
MIN_ROOT_LENGTH = 4

FILTERS_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), "filters")


def _lowered(values: Iterable[str]) -> list[str]:
    return [v.strip().lower() for v in values if v and v.strip()]


def _read_word_file(filename: str) -> list[str]:
    """Return the entries of a blacklist file next to the JSON configs.

    Lines starting with ``#`` are comments. A missing file is treated as empty.
    """
    path = os.path.join(FILTERS_DIR, filename)
    if not os.path.isfile(path):
        return []
    with open(path, "r", encoding="utf-8") as word_file:
        return [w for w in _lowered(word_file) if not w.startswith("#")]


@dataclass(slots=True)
class FilterConfig:
    """Words and affixes that disqualify a root word in one language."""

    prefixes: tuple[str, ...] = field(default_factory=tuple)
    suffixes: tuple[str, ...] = field(default_factory=tuple)
    blacklist: tuple[str, ...] = field(default_factory=tuple)
    blacklist_files: tuple[str, ...] = field(default_factory=tuple)

    @classmethod
    def from_json(cls, data: dict) -> FilterConfig:
        """Build a config from parsed JSON, pulling in any listed word files."""
        files = tuple(name for name in data.get("blacklist_files", []) if name)
        banned = _lowered(data.get("blacklist", []))
        for name in files:
            banned += _read_word_file(name)
        return cls(
            prefixes=tuple(_lowered(data.get("prefixes", []))),
            suffixes=tuple(_lowered(data.get("suffixes", []))),
            blacklist=tuple(dict.fromkeys(banned)),
            blacklist_files=files,
        )


@lru_cache(maxsize=None)
def load_filter_config(archetype: str) -> FilterConfig:
    """Read ``filters/<archetype>.json``; an absent file means no restrictions."""
    path = os.path.join(FILTERS_DIR, f"{archetype}.json")
    if not os.path.isfile(path):
        return FilterConfig()
    with open(path, "r", encoding="utf-8") as config_file:
        return FilterConfig.from_json(json.load(config_file))


class LanguageFilter:
    """Root-word filter for one language archetype ("en", "de", "global")."""

    def __init__(self, archetype: str, config: FilterConfig | None = None) -> None:
        self.archetype = archetype
        self.config = config if config is not None else load_filter_config(archetype)

    def rejects(self, word: str) -> bool:
        """True when ``word`` should never be offered as a root word."""
        lower = word.lower()
        if len(lower) < MIN_ROOT_LENGTH or not lower.isalpha():
            return True
        if lower in self.config.blacklist:
            return True
        if lower.startswith(self.config.prefixes) or lower.endswith(self.config.suffixes):
            return True
        return bool(_profanity.contains_profanity(word))

    def apply(self, words: Iterable[str]) -> list[str]:
        """Keep the acceptable words, first occurrence only, in input order."""
        kept: dict[str, str] = {}
        for word in words:
            key = word.lower()
            if key not in kept and not self.rejects(word):
                kept[key] = word
        return list(kept.values())


@lru_cache(maxsize=None)
def _get_filter_for_archetype(archetype: str) -> LanguageFilter:
    return LanguageFilter(archetype)


def _language_archetype(lang: str) -> str | None:
    """Return the archetype key for a language code ("de-AT" -> "de")."""
    primary = (lang or "").strip().lower().replace("_", "-").partition("-")[0]
    return primary or None


def filter_candidates(
    words: Iterable[str],
    lang: str,
    *,
    enable_filters: bool = True,
) -> list[str]:
    """Run ``words`` through the global filter, then the one for ``lang``.

    With ``enable_filters`` off the words are only de-duplicated.
    """
    candidates = list(dict.fromkeys(words))
    if not enable_filters:
        return candidates

    archetypes = ["global"]
    language = _language_archetype(lang)
    if language is not None and language != "global":
        archetypes.append(language)
    for archetype in archetypes:
        candidates = _get_filter_for_archetype(archetype).apply(candidates)
    return candidates


def apply_language_filters(
    lang: str,
    words: Iterable[str],
    *,
    enable_filters: bool = True,
) -> list[str]:
    """Apply the appropriate language-specific filter to candidate root words."""
    return filter_candidates(words, lang, enable_filters=enable_filters)
