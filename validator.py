"""Submission pipeline: decide whether a candidate word scores this round."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from dictionary import DictionaryService, normalize_word
from rounds import RoundState

__all__ = [
    "MIN_WORD_LENGTH",
    "REJECTION_MESSAGES",
    "Rejection",
    "SubmitResult",
    "is_long_enough",
    "is_not_root",
    "is_original",
    "is_possible",
    "submit",
]

logger = logging.getLogger("wordscramble")

MIN_WORD_LENGTH = 3


class Rejection(Enum):
    """Reasons a candidate can be turned down, in the order they are checked."""

    ALREADY_USED = "already_used"
    NOT_POSSIBLE = "not_possible"
    NOT_REAL = "not_real"
    TOO_SHORT = "too_short"
    IS_ROOT_WORD = "is_root_word"

    @property
    def title(self) -> str:
        return REJECTION_MESSAGES[self][0]

    @property
    def message(self) -> str:
        return REJECTION_MESSAGES[self][1]


REJECTION_MESSAGES: dict[Rejection, tuple[str, str]] = {
    Rejection.ALREADY_USED: ("Word already used.", "Try again!"),
    Rejection.NOT_POSSIBLE: ("Word not possible.", "Please use the letters provided!"),
    Rejection.NOT_REAL: ("Word is not real.", "Please use a real word!"),
    Rejection.TOO_SHORT: ("Word is too short.", "Please use more than 2 characters!"),
    Rejection.IS_ROOT_WORD: ("Can't be root word.", "Please pick a different word!"),
}


@dataclass(frozen=True, slots=True)
class SubmitResult:
    """Outcome of one submission.

    Exactly one of three shapes: ignored (blank input), accepted (``word``
    and ``points`` set), or rejected (``rejection`` set).
    """

    word: str
    rejection: Rejection | None = None
    points: int = 0

    @property
    def ignored(self) -> bool:
        return not self.word

    @property
    def accepted(self) -> bool:
        return bool(self.word) and self.rejection is None


def is_original(word: str, state: RoundState) -> bool:
    """Return True if ``word`` has not been accepted yet this round."""
    return word not in state.used_words


def is_possible(word: str, root_word: str) -> bool:
    """Return True if ``word`` can be spelled with the letters of ``root_word``.

    Each letter of the root can be used at most once, so "tee" fits in
    "sleet" but "eee" does not.

    Args:
        word: Normalized candidate.
        root_word: Normalized root word.

    Returns:
        True if every letter of ``word`` finds an unused match in the root.
    """
    remaining = list(root_word)
    for letter in word:
        try:
            remaining.remove(letter)
        except ValueError:
            return False
    return True


def is_long_enough(word: str) -> bool:
    return len(word) >= MIN_WORD_LENGTH


def is_not_root(word: str, root_word: str) -> bool:
    return word != root_word


def _check(
    word: str, state: RoundState, dictionary: DictionaryService, lang: str
) -> Rejection | None:
    """Return the first failed check for ``word``, or None when all pass."""
    if not is_original(word, state):
        return Rejection.ALREADY_USED
    if not is_possible(word, state.root_word):
        return Rejection.NOT_POSSIBLE
    if not dictionary.is_valid_word(word, lang):
        return Rejection.NOT_REAL
    if not is_long_enough(word):
        return Rejection.TOO_SHORT
    if not is_not_root(word, state.root_word):
        return Rejection.IS_ROOT_WORD
    return None


def submit(
    candidate: str,
    state: RoundState,
    dictionary: DictionaryService,
    lang: str = "en",
) -> SubmitResult:
    """Validate ``candidate`` against the round and score it when it passes.

    The candidate is normalized (trimmed, lower-cased) first; a blank result
    is ignored without touching the state. Checks run in a fixed order and the
    first failure is reported. On success the word is prepended to
    ``state.used_words`` and its length added to ``state.score``; on any
    rejection the state is left as it was.

    Args:
        candidate: Raw text entered by the player.
        state: The live round.
        dictionary: Service answering whether a word is real.
        lang: Language tag passed through to the dictionary.

    Returns:
        SubmitResult describing what happened.
    """
    word = normalize_word(candidate)
    if not word:
        return SubmitResult(word="")

    rejection = _check(word, state, dictionary, lang)
    if rejection is not None:
        logger.info("Rejected '%s': %s", word, rejection.value)
        return SubmitResult(word=word, rejection=rejection)

    points = len(word)
    state.record(word, points)
    logger.info("Accepted '%s' (+%d, score %d)", word, points, state.score)
    return SubmitResult(word=word, points=points)
