"""
Shared fixtures for the npcaffect test suite.

Provides a controllable clock and ready-made engines so individual test
modules can focus on behavior rather than setup.
"""

from __future__ import annotations

import pytest

from npcaffect.affect.engine import AppraisalEngine
from npcaffect.config import AppraisalConfig


# ---------------------------------------------------------------------------
# Time helpers
# ---------------------------------------------------------------------------

class FakeClock:
    """Seconds-based clock that only moves when advanced."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


# ---------------------------------------------------------------------------
# Engine fixtures
# ---------------------------------------------------------------------------

@pytest.fixture()
def engine(clock: FakeClock) -> AppraisalEngine:
    """An empty engine with default gain and exponential decay."""
    return AppraisalEngine(AppraisalConfig(default_gain=1.0), clock=clock)


@pytest.fixture()
def trio(engine: AppraisalEngine) -> AppraisalEngine:
    """Agents A, B and C registered, no relations and no goals yet."""
    for name in ("A", "B", "C"):
        engine.create_agent(name)
    return engine
