"""Dictionary lookups for WordScramble built from hunspell `.dic`/`.aff` pairs.

The game only needs one capability from a dictionary: "is this lower-cased
string a real word in language L". Everything here exists to provide that
answer from bundled hunspell dictionaries, with an on-disk cache so the affix
expansion only runs once per language.
"""

from __future__ import annotations

import hashlib
import logging
import os
import re
import sys
import unicodedata
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from typing import Protocol

logger = logging.getLogger("wordscramble")

LETTERS_RE = re.compile(r"^[a-zäöüß]+$")

CACHE_DIR = "cache"
GERMAN_ASCII = {"ä": "ae", "ö": "oe", "ü": "ue", "ß": "ss"}

# (strip, append, condition) as written in the .aff file
AffixRule = tuple[str, str, str]


class DictionaryService(Protocol):
    """Anything that can tell whether a word is real in a given language."""

    def is_valid_word(self, word: str, lang: str) -> bool:
        ...


def resource_path(relative_path: str) -> str:
    """Resolve ``relative_path`` against the bundle dir or this source tree."""
    bundle_dir = getattr(sys, "_MEIPASS", None)
    if bundle_dir is None:
        bundle_dir = os.path.dirname(os.path.abspath(__file__))
    return os.path.join(bundle_dir, relative_path)


def dictionaries_root() -> str:
    """Folder holding one sub-folder of hunspell files per language."""
    return os.path.normpath(
        resource_path(os.path.join("external", "dictionaries", "dictionaries"))
    )


def available_dictionary_codes(root: str | None = None) -> dict[str, str]:
    """Map lower-cased language codes to the folder names that provide them.

    A folder only counts when it holds both ``index.aff`` and ``index.dic``.
    """
    root = root or dictionaries_root()
    if not os.path.isdir(root):
        return {}

    codes: dict[str, str] = {}
    for folder in sorted(os.listdir(root)):
        candidate = os.path.join(root, folder)
        has_pair = all(
            os.path.isfile(os.path.join(candidate, f"index.{ext}"))
            for ext in ("aff", "dic")
        )
        if os.path.isdir(candidate) and has_pair:
            codes[folder.lower()] = folder
    return codes


def normalize_word(word: str) -> str:
    """Return ``word`` in NFC form, trimmed and lower-cased."""
    return unicodedata.normalize("NFC", word).strip().lower()


def primary_language(lang: str) -> str:
    """Return the primary subtag of a language code ("en-GB" -> "en")."""
    normalized = (lang or "").strip().lower().replace("_", "-")
    return normalized.split("-", 1)[0]


def transliterate_german(word: str) -> str:
    """Spell umlauts and ß the ASCII way ("straße" -> "strasse")."""
    return "".join(GERMAN_ASCII.get(letter, letter) for letter in word)


def find_matching_dict_pairs(directory: str) -> list[tuple[str, str]]:
    """List the ``(aff, dic)`` paths in ``directory`` that share a base name.

    Raises:
        FileNotFoundError: If ``directory`` is not a folder.
    """
    if not os.path.isdir(directory):
        raise FileNotFoundError(f"Dictionary directory '{directory}' does not exist.")

    by_kind: dict[str, dict[str, str]] = {".aff": {}, ".dic": {}}
    for filename in os.listdir(directory):
        stem, ext = os.path.splitext(filename)
        kind = by_kind.get(ext.lower())
        if kind is not None:
            kind[stem] = os.path.normpath(os.path.join(directory, filename))

    affs, dics = by_kind[".aff"], by_kind[".dic"]
    return [(affs[stem], dics[stem]) for stem in sorted(affs) if stem in dics]


def parse_dic_entries(dic_path: str) -> list[tuple[str, str]]:
    """Read a .dic file into ``(word, flags)`` pairs.

    Words are normalized; morphological fields after the first token are
    ignored, and so is the entry count hunspell puts on the first line.
    """
    entries: list[tuple[str, str]] = []
    with open(dic_path, "r", encoding="utf-8") as dic_file:
        lines = (line.strip() for line in dic_file)
        for index, text in enumerate(line for line in lines if line):
            if index == 0 and text.isdigit():
                continue
            word, _, flags = text.split()[0].partition("/")
            entries.append((normalize_word(word), flags))
    return entries


@dataclass(slots=True)
class AffRules:
    """Suffix (SFX) and prefix (PFX) rules keyed by flag character."""

    sfx: dict[str, list[AffixRule]] = field(default_factory=dict)
    pfx: dict[str, list[AffixRule]] = field(default_factory=dict)

    def add_rule(
        self, is_suffix: bool, flag: str, strip: str, add: str, cond: str
    ) -> None:
        table = self.sfx if is_suffix else self.pfx
        table.setdefault(flag, []).append((strip, add, cond))

    def merge(self, other: AffRules) -> None:
        """Fold the rules of another file into this one."""
        for mine, theirs in ((self.sfx, other.sfx), (self.pfx, other.pfx)):
            for flag, rule_list in theirs.items():
                mine.setdefault(flag, []).extend(rule_list)


def _zero_as_empty(value: str) -> str:
    return "" if value == "0" else value


def parse_aff_rules(aff_path: str) -> AffRules:
    """Collect the SFX/PFX rule lines of an .aff file.

    Only rule lines such as ``SFX S 0 s .`` are kept; group headers
    (``SFX S Y 1``), comments and every other directive are skipped.
    A missing file yields empty rules.
    """
    rules = AffRules()
    if not os.path.isfile(aff_path):
        return rules

    with open(aff_path, "r", encoding="utf-8") as aff_file:
        for raw in aff_file:
            parts = raw.split()
            if len(parts) < 5 or parts[0] not in ("SFX", "PFX"):
                continue
            kind, flag, strip, append, condition = parts[:5]
            if strip in ("Y", "N"):
                continue
            append = append.partition("/")[0]
            rules.add_rule(
                kind == "SFX",
                flag,
                _zero_as_empty(strip),
                _zero_as_empty(append),
                condition,
            )
    return rules


def _condition_holds(condition: str, base: str, *, at_end: bool) -> bool:
    """Apply an affix condition; unparsable conditions are treated as matching."""
    if not condition or condition == ".":
        return True
    pattern = condition + "$" if at_end else "^" + condition
    try:
        return re.search(pattern, base) is not None
    except re.error:
        return True


def _with_suffix(base: str, rule: AffixRule) -> str | None:
    strip, append, condition = rule
    if strip and not base.endswith(strip):
        return None
    if not _condition_holds(condition, base, at_end=True):
        return None
    stem = base[: len(base) - len(strip)]
    return stem + append


def _with_prefix(base: str, rule: AffixRule) -> str | None:
    strip, append, condition = rule
    if strip and not base.startswith(strip):
        return None
    if not _condition_holds(condition, base, at_end=False):
        return None
    return append + base[len(strip):]


def _playable(word: str, max_length: int) -> bool:
    return len(word) <= max_length and LETTERS_RE.match(word) is not None


def _generate_affixed_candidates(
    base: str, flags: str, rules: AffRules, max_length: int
) -> Iterator[str]:
    """Yield every single-affix form of ``base`` that could still be played."""
    for flag in flags:
        forms = [_with_suffix(base, rule) for rule in rules.sfx.get(flag, [])]
        forms += [_with_prefix(base, rule) for rule in rules.pfx.get(flag, [])]
        for form in forms:
            if form is None:
                continue
            form = normalize_word(form)
            if _playable(form, max_length):
                yield form


def expand_with_affixes(
    entries: Iterable[tuple[str, str]], rules: AffRules, max_length: int
) -> set[str]:
    """Return base words plus their affixed forms up to ``max_length`` letters.

    Only one prefix or one suffix is applied per form (no combinations) to
    keep the word set small.
    """
    words: set[str] = set()
    for base, flags in entries:
        if _playable(base, max_length):
            words.add(base)
        words.update(_generate_affixed_candidates(base, flags, rules, max_length))
    return words


def load_dictionary_words(dict_folder: str, max_length: int) -> set[str]:
    """Expand every aff/dic pair in ``dict_folder`` into one word set.

    Raises:
        FileNotFoundError: If ``dict_folder`` does not exist.
        ValueError: If the .dic files hold no entries at all.
    """
    rules = AffRules()
    entries: list[tuple[str, str]] = []

    for aff_path, dic_path in find_matching_dict_pairs(dict_folder):
        rules.merge(parse_aff_rules(aff_path))
        pair_entries = parse_dic_entries(dic_path)
        entries += pair_entries
        logger.info(
            "Read %d entries from %s (rules: %s)",
            len(pair_entries),
            os.path.basename(dic_path),
            os.path.basename(aff_path),
        )

    if not entries:
        raise ValueError(f"No dictionary entries found in '{dict_folder}'.")
    return expand_with_affixes(entries, rules, max_length)


def _folder_key(dict_folder: str) -> str:
    """Short stable tag for a dictionary folder, used in cache file names."""
    location = os.path.normcase(os.path.abspath(dict_folder))
    return hashlib.blake2s(location.encode("utf-8"), digest_size=4).hexdigest()


def cache_path(lang: str, max_length: int, dict_folder: str) -> str:
    """Return ``cache/<lang>_<max_length>_<folder>_utf-8.txt``, creating the folder if possible.

    ``<folder>`` is a hash of the dictionary folder's absolute path, so two
    folders for the same language never share a cache file.
    """
    try:
        os.makedirs(CACHE_DIR, exist_ok=True)
    except OSError as e:
        logger.warning("Cannot create cache folder '%s': %s", CACHE_DIR, e)
    filename = f"{lang.lower()}_{max_length}_{_folder_key(dict_folder)}_utf-8.txt"
    return os.path.normpath(os.path.join(CACHE_DIR, filename))


def load_cache(lang: str, max_length: int, dict_folder: str) -> set[str]:
    """Return the cached words for ``lang``, or an empty set when uncached."""
    path = cache_path(lang, max_length, dict_folder)
    if not os.path.isfile(path):
        return set()
    with open(path, "r", encoding="utf-8") as cached:
        return {word for word in map(str.strip, cached) if word}


def save_cache(lang: str, max_length: int, dict_folder: str, words: set[str]) -> None:
    path = cache_path(lang, max_length, dict_folder)
    with open(path, "w", encoding="utf-8") as cached:
        cached.writelines(f"{word}\n" for word in sorted(words))
    logger.info("Cache written: %s (%d words)", path, len(words))


def clear_cache(lang: str | None = None) -> None:
    """Remove cached word lists.

    With a language code only that language's files go; without one every
    cached list is deleted along with the cache folder itself.
    """
    if not os.path.isdir(CACHE_DIR):
        return

    code = (lang or "").strip().lower()
    for filename in os.listdir(CACHE_DIR):
        path = os.path.join(CACHE_DIR, filename)
        lowered = filename.lower()
        if not lowered.endswith(".txt") or not os.path.isfile(path):
            continue
        if code and not lowered.startswith(code + "_"):
            continue
        try:
            os.remove(path)
        except OSError as e:
            logger.warning("Could not remove cache file '%s': %s", path, e)

    if not code:
        try:
            os.rmdir(CACHE_DIR)
        except OSError as e:
            logger.warning("Could not remove cache folder '%s': %s", CACHE_DIR, e)


@dataclass(slots=True)
class WordSetDictionary:
    """Dictionary backed by an in-memory set of normalized words."""

    words: set[str]
    lang: str = "en"
    backend: str = "word-set"

    def __post_init__(self) -> None:
        self.words = {normalize_word(w) for w in self.words if w.strip()}
        self.lang = primary_language(self.lang)

    def __len__(self) -> int:
        return len(self.words)

    def __contains__(self, word: object) -> bool:
        return isinstance(word, str) and normalize_word(word) in self.words

    def is_valid_word(self, word: str, lang: str) -> bool:
        """Tell whether ``word`` is a real word in ``lang``.

        Only the primary subtag of ``lang`` has to match this dictionary's
        language. German words are also found under their transliterated
        spelling, so "straße" matches a list that only has "strasse".
        """
        if primary_language(lang) != self.lang:
            logger.warning(
                "Dictionary for '%s' asked about language '%s'", self.lang, lang
            )
            return False
        wanted = normalize_word(word)
        if wanted in self.words:
            return True
        if self.lang != "de":
            return False
        ascii_form = transliterate_german(wanted)
        found = ascii_form in self.words
        if found:
            logger.info("Accepted via transliteration: '%s' -> '%s'", word, ascii_form)
        return found


def build_dictionary(
    dict_folder: str,
    lang: str,
    max_length: int,
    *,
    extra_words: Iterable[str] = (),
) -> WordSetDictionary:
    """Create a dictionary for ``lang`` from the hunspell files in ``dict_folder``.

    The expanded word list is cached per language, ``max_length`` and
    dictionary folder; a later call with the same three reads the cache
    instead of the hunspell files. ``extra_words`` (typically the root
    words) are always accepted but never written to the cache.
    """
    logger.info("Using dictionary folder: %s", dict_folder)

    words = load_cache(lang, max_length, dict_folder)
    backend = "cache"
    if not words:
        words = load_dictionary_words(dict_folder, max_length)
        save_cache(lang, max_length, dict_folder, words)
        backend = ".dic/.aff"
    logger.info("Loaded %d words for %s/%s from %s", len(words), lang, max_length, backend)

    words |= {normalize_word(w) for w in extra_words}
    return WordSetDictionary(words, lang=lang, backend=backend)
