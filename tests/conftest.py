import os
import sys

import pytest

# Ensure the project root (containing the game modules) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
PROJECT_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from dictionary import WordSetDictionary
from rounds import RoundState


WORDS = [
    'silkworm', 'silk', 'worm', 'milk', 'mild', 'slim', 'owl', 'low', 'rim',
    'is', 'sleet', 'tee', 'eel', 'lee', 'let', 'set', 'steel', 'sle',
]


def first(seq):
    return seq[0]


@pytest.fixture()
def word_set():
    return WordSetDictionary(set(WORDS), lang='en')


@pytest.fixture()
def state():
    return RoundState(root_word='silkworm')


@pytest.fixture()
def chooser():
    return first


@pytest.fixture()
def workdir(tmp_path, monkeypatch):
    # Caches are written relative to the working directory
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture()
def hunspell_folder(tmp_path):
    folder = tmp_path / 'dicts' / 'en'
    folder.mkdir(parents=True)
    (folder / 'index.aff').write_text(
        'SET UTF-8\n'
        '# suffixes\n'
        'SFX S Y 1\n'
        'SFX S 0 s .\n'
        'SFX Y Y 1\n'
        'SFX Y y ies [^aeiou]y\n'
        'PFX U Y 1\n'
        'PFX U 0 un .\n',
        encoding='utf-8',
    )
    (folder / 'index.dic').write_text(
        '6\n'
        'silk/S\n'
        'worm/S po:noun\n'
        'tie/U\n'
        'berry/Y\n'
        'silkworm/S\n'
        'Milk\n',
        encoding='utf-8',
    )
    return folder
