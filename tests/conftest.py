import os
import sys
import pytest

# Add project root to sys.path (so tests can import core.*)
PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
sys.path.append(PROJECT_ROOT)

from core.serialization import loads

PUZZLES_DIR = os.path.join(PROJECT_ROOT, "puzzles_json")


@pytest.fixture
def puzzles_dir():
    return PUZZLES_DIR


@pytest.fixture
def load_puzzle():
    """Returns a function that loads a PuzzleRecord from puzzles_json/."""
    def _load(name):
        with open(os.path.join(PUZZLES_DIR, name), "r") as f:
            return loads(f.read())
    return _load
