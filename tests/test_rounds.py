import logging
import random

import pytest

from rounds import (
    RoundState,
    WordListUnavailableError,
    load_start_words,
    pick_root_word,
    read_start_words,
    restart_round,
    start_round,
    start_words_path,
)


def test_start_round_uses_chooser(chooser):
    state = start_round(['silkworm', 'sleet'], chooser)
    assert state == RoundState(root_word='silkworm')
    assert state.used_words == []
    assert state.score == 0
    assert state.last_error is None


def test_start_round_is_reproducible_with_seed():
    words = ['alphabet', 'baseball', 'computer', 'dinosaur', 'elephant']
    first = [start_round(words, random.Random(42).choice).root_word for _ in range(3)]
    assert len(set(first)) == 1
    assert first[0] in words


def test_start_round_normalizes_root_word():
    state = start_round(['  SilkWorm '], lambda seq: seq[0])
    assert state.root_word == 'silkworm'


def test_start_round_with_empty_list_is_fatal(chooser):
    with pytest.raises(WordListUnavailableError):
        start_round([], chooser)


def test_start_round_with_only_blank_words_is_fatal(chooser):
    with pytest.raises(WordListUnavailableError):
        start_round(['   ', ''], chooser)


def test_pick_root_word_skips_blank_entries(chooser):
    assert pick_root_word(['  ', 'sleet'], chooser) == 'sleet'


def test_round_state_requires_root_word():
    with pytest.raises(ValueError):
        RoundState(root_word='')


def test_restart_round_resets_everything(chooser):
    state = start_round(['silkworm'], chooser)
    state.record('silk', 4)
    state.last_error = ('Word already used.', 'Try again!')
    fresh = restart_round(['silkworm'], chooser)
    assert fresh is not state
    assert fresh.root_word == 'silkworm'
    assert fresh.used_words == []
    assert fresh.score == 0
    assert fresh.last_error is None


def test_pick_root_word_prefers_unplayed_words(chooser):
    assert pick_root_word(['silkworm', 'sleet'], chooser, exclude=['silkworm']) == 'sleet'
    # all played: fall back to the whole list
    assert pick_root_word(['silkworm'], chooser, exclude=['silkworm']) == 'silkworm'


def test_record_prepends_and_scores():
    state = RoundState(root_word='silkworm')
    state.record('silk', 4)
    state.record('owl', 3)
    assert state.used_words == ['owl', 'silk']
    assert state.score == 7


def test_read_start_words_normalizes_and_skips_blank_lines(tmp_path):
    path = tmp_path / 'start.txt'
    path.write_text('Silkworm\n\n  sleet  \nALPHABET\n', encoding='utf-8')
    assert read_start_words(str(path)) == ['silkworm', 'sleet', 'alphabet']


def test_read_start_words_missing_file_is_fatal(tmp_path):
    with pytest.raises(WordListUnavailableError):
        read_start_words(str(tmp_path / 'missing.txt'))


def test_read_start_words_empty_file_is_fatal(tmp_path):
    path = tmp_path / 'start.txt'
    path.write_text('\n   \n', encoding='utf-8')
    with pytest.raises(WordListUnavailableError):
        read_start_words(str(path))


def test_word_list_error_is_a_value_error():
    assert issubclass(WordListUnavailableError, ValueError)


def test_load_start_words_applies_filters(tmp_path):
    path = tmp_path / 'start.txt'
    path.write_text('silkworm\njacketed\nsilkworm\nab3c\nsleet\n', encoding='utf-8')
    assert load_start_words(str(path), 'en') == ['silkworm', 'sleet']
    assert load_start_words(str(path), 'en', enable_filters=False) == [
        'silkworm', 'jacketed', 'ab3c', 'sleet',
    ]


def test_load_start_words_falls_back_when_everything_is_filtered(tmp_path, caplog):
    path = tmp_path / 'start.txt'
    path.write_text('cat\ndog\ncat\n', encoding='utf-8')
    with caplog.at_level(logging.WARNING, logger='wordscramble'):
        words = load_start_words(str(path), 'en')
    assert words == ['cat', 'dog']
    assert 'falling back' in caplog.text


def test_bundled_start_words_load():
    words = load_start_words(start_words_path('en'), 'en')
    assert 'silkworm' in words
    assert all(w.isalpha() and w == w.lower() for w in words)
    assert len(words) == len(set(words))
