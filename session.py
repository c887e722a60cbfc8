"""A player's game session: the live round plus change notifications."""

from __future__ import annotations

import logging
import random
from collections.abc import Sequence
from typing import Callable

from dictionary import DictionaryService, normalize_word
from rounds import Chooser, RoundState, restart_round, start_round
from validator import SubmitResult, submit

__all__ = ["GameSession", "Listener"]

logger = logging.getLogger("wordscramble")

Listener = Callable[["GameSession"], None]


class GameSession:
    """Own one player's round and tell front ends when it changes.

    Listeners are called after every accepted word, every rejection (so the
    front end can show ``state.last_error``) and every restart. Submissions
    are handled one at a time; a submission that arrives while another is
    still being validated is refused with ``RuntimeError``.
    """

    def __init__(
        self,
        words: Sequence[str],
        dictionary: DictionaryService,
        lang: str = "en",
        chooser: Chooser = random.choice,
    ) -> None:
        self.words = [w for w in (normalize_word(w) for w in words) if w]
        self.dictionary = dictionary
        self.lang = lang
        self.chooser = chooser
        self.played_roots: list[str] = []
        self._listeners: list[Listener] = []
        self._busy = False
        self.state = start_round(self.words, self.chooser)
        self.played_roots.append(self.state.root_word)

    def subscribe(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def unsubscribe(self, listener: Listener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)

    def submit(self, text: str) -> SubmitResult:
        """Run ``text`` through the submission pipeline for the live round."""
        if self._busy:
            raise RuntimeError("A submission is already being validated.")
        self._busy = True
        try:
            result = submit(text, self.state, self.dictionary, self.lang)
        finally:
            self._busy = False

        if result.ignored:
            return result
        if result.rejection is not None:
            self.state.last_error = (result.rejection.title, result.rejection.message)
        else:
            self.state.last_error = None
        self._notify()
        return result

    def consume_error(self) -> tuple[str, str] | None:
        """Return and clear the pending rejection message, if any."""
        error, self.state.last_error = self.state.last_error, None
        return error

    def restart(self) -> RoundState:
        """Replace the round with a new one, preferring an unplayed root word."""
        logger.info(
            "Restarting round '%s' (%d words, score %d)",
            self.state.root_word,
            len(self.state.used_words),
            self.state.score,
        )
        if set(self.words) <= set(self.played_roots):
            # every root has been played once; start a new cycle without the current one
            current = self.state.root_word
            self.played_roots = [current] if len(set(self.words)) > 1 else []
        self.state = restart_round(self.words, self.chooser, exclude=self.played_roots)
        self.played_roots.append(self.state.root_word)
        self._notify()
        return self.state
