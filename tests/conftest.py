import os
import sys

# Ensure project root is on sys.path for imports like `core.*`
PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

import pytest


class RecordingProbe:
    """File-existence probe stub that records every URL it is asked about."""

    def __init__(self, reachable=()):
        self.reachable = set(reachable)
        self.calls = []

    async def __call__(self, url: str) -> bool:
        self.calls.append(url)
        return url in self.reachable


@pytest.fixture
def make_probe():
    return RecordingProbe
