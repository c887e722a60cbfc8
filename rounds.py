"""Round state and lifecycle: choosing root words and starting fresh rounds."""

from __future__ import annotations

import logging
import os
import random
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, field

from dictionary import normalize_word, resource_path
from filter import apply_language_filters

__all__ = [
    "Chooser",
    "RoundState",
    "WordListUnavailableError",
    "load_start_words",
    "pick_root_word",
    "read_start_words",
    "restart_round",
    "start_round",
    "start_words_path",
]

logger = logging.getLogger("wordscramble")

Chooser = Callable[[Sequence[str]], str]


class WordListUnavailableError(ValueError):
    """Raised when no usable root words can be obtained."""


@dataclass(slots=True)
class RoundState:
    """All mutable data of one round.

    ``used_words`` is most-recent-first and ``score`` is always the summed
    length of its entries. ``last_error`` holds the (title, message) of the
    latest rejection until the front end consumes it; it takes no part in
    equality.
    """

    root_word: str
    used_words: list[str] = field(default_factory=list)
    score: int = 0
    last_error: tuple[str, str] | None = field(default=None, compare=False)

    def __post_init__(self) -> None:
        if not self.root_word:
            raise ValueError("A round needs a non-empty root word.")

    def record(self, word: str, points: int) -> None:
        """Prepend an accepted word and add its points."""
        self.used_words.insert(0, word)
        self.score += points


def start_words_path(lang: str) -> str:
    """Return the bundled start word file for a language (start_words/<lang>.txt)."""
    return os.path.normpath(
        resource_path(os.path.join("start_words", f"{lang.lower()}.txt"))
    )


def read_start_words(path: str) -> list[str]:
    """Read non-empty, normalized lines from a start word file.

    Args:
        path: Path to a newline-delimited word list.

    Returns:
        Words in file order.

    Raises:
        WordListUnavailableError: If the file is missing, unreadable or empty.
    """
    if not os.path.isfile(path):
        raise WordListUnavailableError(f"Could not find start word list '{path}'.")
    try:
        with open(path, "r", encoding="utf-8") as f:
            words = [w for w in (normalize_word(line) for line in f) if w]
    except (OSError, UnicodeDecodeError) as e:
        raise WordListUnavailableError(
            f"Could not read start word list '{path}': {e}"
        ) from e
    if not words:
        raise WordListUnavailableError(f"Start word list '{path}' contains no words.")
    return words


def load_start_words(
    path: str, lang: str, *, enable_filters: bool = True
) -> list[str]:
    """Read the start word list and drop unsuitable root words.

    Falls back to the unfiltered list when filtering removes everything.

    Raises:
        WordListUnavailableError: If the list cannot be read or is empty.
    """
    words = read_start_words(path)
    filtered = apply_language_filters(lang, words, enable_filters=enable_filters)
    if not filtered:
        logger.warning(
            "Filtered start word list '%s' is empty; falling back to unfiltered words.",
            path,
        )
        filtered = list(dict.fromkeys(words))
    logger.info(
        "Loaded %d start words from '%s' (%d before filtering)",
        len(filtered),
        path,
        len(words),
    )
    return filtered


def pick_root_word(
    candidates: Sequence[str],
    chooser: Chooser = random.choice,
    exclude: Iterable[str] = (),
) -> str:
    """Pick a root word, preferring ones not in ``exclude``.

    Args:
        candidates: Possible root words.
        chooser: Selection function, ``random.choice`` unless a test injects one.
        exclude: Root words already played; ignored once all have been played.

    Returns:
        The chosen root word.

    Raises:
        WordListUnavailableError: If ``candidates`` holds no non-blank word.
    """
    usable = [w for w in candidates if normalize_word(w)]
    if not usable:
        raise WordListUnavailableError("The start word list is empty.")
    excluded = set(exclude)
    remaining = [w for w in usable if w not in excluded]
    return chooser(remaining or usable)


def start_round(
    words: Sequence[str],
    chooser: Chooser = random.choice,
    *,
    exclude: Iterable[str] = (),
) -> RoundState:
    """Begin a round with a root word drawn from ``words``.

    Raises:
        WordListUnavailableError: If ``words`` holds no non-blank word.
    """
    root_word = normalize_word(pick_root_word(words, chooser, exclude))
    logger.info("Root word '%s' selected (length %d)", root_word, len(root_word))
    return RoundState(root_word=root_word)


def restart_round(
    words: Sequence[str],
    chooser: Chooser = random.choice,
    *,
    exclude: Iterable[str] = (),
) -> RoundState:
    """Throw the current round away and start a new one.

    Nothing carries over from the previous round; the caller simply replaces
    its state with the returned one.
    """
    return start_round(words, chooser, exclude=exclude)
