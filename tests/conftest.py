import os
import random
import sys
from pathlib import Path

# Kivy parses sys.argv and writes logs on import unless told otherwise.
os.environ.setdefault("KIVY_NO_ARGS", "1")
os.environ.setdefault("KIVY_NO_CONSOLELOG", "1")
os.environ.setdefault("KIVY_NO_FILELOG", "1")

# Ensure the repo root is on sys.path for test imports without installing the package
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import pytest  # noqa: E402

from pixelpet.services.clock import ManualTicker  # noqa: E402
from pixelpet.services.state import PetEngine  # noqa: E402


class MemoryStore:
    """In-memory stand-in for Persistence that records every save."""

    def __init__(self, snapshot=None, fail=False):
        self.snapshot = snapshot
        self.saves = []
        self.fail = fail
        self.cleared = False

    def save(self, snapshot):
        if self.fail:
            return False
        self.saves.append(snapshot.to_dict())
        return True

    def load(self):
        return self.snapshot

    def clear(self):
        self.cleared = True
        self.snapshot = None
        return True


@pytest.fixture
def ticker():
    return ManualTicker()


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def engine(ticker, store):
    eng = PetEngine(ticker, persistence=store, rng=random.Random(1234), clock=lambda: 1_700_000_000.0)
    eng.adopt("Mochi", "cat", "pink")
    yield eng
    eng.shutdown()


@pytest.fixture
def events(engine):
    seen = []
    engine.add_listener(seen.append)
    return seen
