from __future__ import annotations

import sys
from dataclasses import dataclass, field
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

# Ensure repo root is on sys.path so `import planet_stats` works under pytest.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from planet_stats.core.naming import encode_name  # noqa: E402
from planet_stats.main import app  # noqa: E402


@dataclass
class RecordingStatsClient:
    """Stats client that remembers every emission, in order."""

    calls: list[tuple] = field(default_factory=list)

    def inc_counter(self, name, tags, delta=1) -> None:
        self.calls.append(("counter", name, tags, delta))

    def record_timer(self, name, tags, duration) -> None:
        self.calls.append(("timer", name, tags, duration))

    def names(self) -> list[str]:
        return [encode_name(name, tags) for _, name, tags, _ in self.calls]


@pytest.fixture
def recorder() -> RecordingStatsClient:
    return RecordingStatsClient()


@pytest.fixture
def client() -> TestClient:
    return TestClient(app)
