import pytest

from rounds import WordListUnavailableError
from session import GameSession
from validator import Rejection


def make_session(word_set, words=('silkworm', 'sleet'), chooser=None):
    return GameSession(list(words), word_set, chooser=chooser or (lambda seq: seq[0]))


def test_session_starts_a_round(word_set):
    session = make_session(word_set)
    assert session.state.root_word == 'silkworm'
    assert session.state.used_words == []
    assert session.state.score == 0
    assert session.played_roots == ['silkworm']


def test_session_without_words_is_fatal(word_set):
    with pytest.raises(WordListUnavailableError):
        make_session(word_set, words=[])


def test_listeners_are_notified_after_accepted_word(word_set):
    session = make_session(word_set)
    seen = []
    session.subscribe(lambda s: seen.append((list(s.state.used_words), s.state.score)))
    result = session.submit('Silk')
    assert result.accepted
    assert seen == [(['silk'], 4)]
    assert session.state.last_error is None


def test_rejection_sets_last_error_and_notifies(word_set):
    session = make_session(word_set)
    calls = []
    session.subscribe(calls.append)
    result = session.submit('xz')
    assert result.rejection is Rejection.NOT_POSSIBLE
    assert calls == [session]
    assert session.state.last_error == ('Word not possible.', 'Please use the letters provided!')
    assert session.consume_error() == ('Word not possible.', 'Please use the letters provided!')
    assert session.consume_error() is None
    assert session.state.used_words == []


def test_accepted_word_clears_previous_error(word_set):
    session = make_session(word_set)
    session.submit('is')
    assert session.state.last_error == ('Word is too short.', 'Please use more than 2 characters!')
    session.submit('milk')
    assert session.state.last_error is None


def test_blank_submission_does_not_notify(word_set):
    session = make_session(word_set)
    calls = []
    session.subscribe(calls.append)
    assert session.submit('   ').ignored
    assert calls == []


def test_unsubscribe(word_set):
    session = make_session(word_set)
    calls = []
    session.subscribe(calls.append)
    session.unsubscribe(calls.append)
    session.unsubscribe(calls.append)
    session.submit('silk')
    assert calls == []


def test_restart_resets_state_and_prefers_new_root(word_set):
    session = make_session(word_set)
    session.submit('silk')
    session.submit('xz')
    calls = []
    session.subscribe(calls.append)
    state = session.restart()
    assert state is session.state
    assert state.root_word == 'sleet'
    assert state.used_words == []
    assert state.score == 0
    assert state.last_error is None
    assert calls == [session]
    assert session.played_roots == ['silkworm', 'sleet']


def test_restart_cycles_once_every_root_was_played(word_set):
    session = make_session(word_set)
    session.restart()
    assert session.state.root_word == 'sleet'
    session.restart()
    assert session.state.root_word == 'silkworm'
    assert session.played_roots == ['sleet', 'silkworm']


def test_new_cycle_never_repeats_the_current_root(word_set):
    offered = []

    def last(seq):
        offered.append(list(seq))
        return seq[-1]

    session = make_session(word_set, chooser=last)
    assert session.state.root_word == 'sleet'
    roots = []
    for _ in range(4):
        before = session.state.root_word
        session.restart()
        assert session.state.root_word != before
        roots.append(session.state.root_word)
    assert roots == ['silkworm', 'sleet', 'silkworm', 'sleet']
    assert offered[1:] == [['silkworm'], ['sleet'], ['silkworm'], ['sleet']]


def test_restart_with_single_word_keeps_root_but_clears_round(word_set):
    session = make_session(word_set, words=['silkworm'])
    session.submit('worm')
    session.restart()
    assert session.state.root_word == 'silkworm'
    assert session.state.used_words == []
    assert session.state.score == 0


def test_nested_submission_is_refused(word_set):
    class Reentrant:
        session = None

        def is_valid_word(self, word, lang):
            self.session.submit('milk')
            return True

    reentrant = Reentrant()
    session = make_session(reentrant)
    reentrant.session = session
    with pytest.raises(RuntimeError):
        session.submit('silk')
    assert session.state.used_words == []
    # the busy flag is released once the failing call unwinds
    reentrant.is_valid_word = lambda word, lang: True
    assert session.submit('silk').accepted


def test_language_is_passed_to_dictionary(word_set):
    session = GameSession(['silkworm'], word_set, lang='de', chooser=lambda seq: seq[0])
    assert session.submit('silk').rejection is Rejection.NOT_REAL
