"""
Tests for AppraisalEngine registries, configuration and reporting.

Covers: agent registration (last write wins), goal registration and sharing,
relation creation errors, gain broadcast, engine independence, config
wiring, emotional snapshots.
"""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from npcaffect.affect.agent import Agent
from npcaffect.affect.decay import exponential_decay, linear_decay
from npcaffect.affect.emotion import Emotion
from npcaffect.affect.engine import AppraisalEngine
from npcaffect.affect.goal import Goal
from npcaffect.config import AppraisalConfig, DecayConfig
from npcaffect.errors import (
    DuplicateGoalError,
    GainRangeError,
    RelationRangeError,
    UnknownAgentError,
)


# ---------------------------------------------------------------------------
# Agents
# ---------------------------------------------------------------------------

class TestAgentRegistry:
    def test_create_agent_registers_and_attaches(self, engine: AppraisalEngine):
        bob = engine.create_agent("Bob")
        assert engine.get_agent_by_name("Bob") is bob
        assert bob.engine is engine

    def test_unknown_agent_is_none(self, engine: AppraisalEngine):
        assert engine.get_agent_by_name("Nobody") is None

    def test_register_overwrites(self, engine: AppraisalEngine):
        engine.create_agent("Bob")
        replacement = Agent("Bob")
        engine.register_agent(replacement)
        assert engine.get_agent_by_name("Bob") is replacement
        assert len(engine.agents) == 1

    def test_create_agent_uses_configured_gain(self, clock):
        engine = AppraisalEngine(AppraisalConfig(default_gain=5.0), clock=clock)
        assert engine.create_agent("Bob").gain == 5.0


# ---------------------------------------------------------------------------
# Goals
# ---------------------------------------------------------------------------

class TestGoalRegistry:
    def test_duplicate_goal_rejected(self, engine: AppraisalEngine):
        engine.register_goal(Goal("survive", 1.0))
        with pytest.raises(DuplicateGoalError):
            engine.register_goal(Goal("survive", 0.5))

    def test_goal_for_unknown_agent_rejected(self, engine: AppraisalEngine):
        with pytest.raises(UnknownAgentError) as exc_info:
            engine.create_goal_for_agent("Nobody", "survive", 1.0)
        assert exc_info.value.agent_name == "Nobody"
        assert engine.get_goal_by_name("survive") is None

    def test_create_goal_registers(self, engine: AppraisalEngine):
        engine.create_agent("Bob")
        goal = engine.create_goal_for_agent("Bob", "survive", 0.8)
        assert engine.get_goal_by_name("survive") is goal
        assert engine.get_agent_by_name("Bob").get_goal("survive") is goal
        assert goal.utility == 0.8

    def test_existing_goal_shared(self, engine: AppraisalEngine):
        engine.create_agent("Bob")
        engine.create_agent("Sam")
        first = engine.create_goal_for_agent("Bob", "survive", 1.0)
        second = engine.create_goal_for_agent("Sam", "survive", 0.2)
        assert first is second
        assert second.utility == 1.0

    def test_maintenance_flag_applied(self, engine: AppraisalEngine):
        engine.create_agent("Bob")
        goal = engine.create_goal_for_agent("Bob", "eat", 1.0, is_maintenance=True)
        assert goal.is_maintenance
        engine.create_goal_for_agent("Bob", "eat", 1.0)
        assert goal.is_maintenance
        engine.create_goal_for_agent("Bob", "eat", 1.0, is_maintenance=False)
        assert not goal.is_maintenance


# ---------------------------------------------------------------------------
# Relations and gain
# ---------------------------------------------------------------------------

class TestRelationsAndGain:
    def test_create_relation(self, trio: AppraisalEngine):
        trio.create_relation("A", "B", 0.4)
        assert trio.get_agent_by_name("A").get_relation("B").like == 0.4
        assert not trio.get_agent_by_name("B").has_relation_with("A")

    @pytest.mark.parametrize("source, target", [("A", "Zed"), ("Zed", "A")])
    def test_unknown_agents_rejected(self, trio: AppraisalEngine, source, target):
        with pytest.raises(UnknownAgentError):
            trio.create_relation(source, target, 0.4)

    @pytest.mark.parametrize("like", [1.01, -1.5])
    def test_like_out_of_range_rejected(self, trio: AppraisalEngine, like):
        with pytest.raises(RelationRangeError):
            trio.create_relation("A", "B", like)
        assert not trio.get_agent_by_name("A").has_relation_with("B")

    @pytest.mark.parametrize("like", [-1.0, 1.0])
    def test_like_bounds_accepted(self, trio: AppraisalEngine, like):
        trio.create_relation("A", "B", like)
        assert trio.get_agent_by_name("A").get_relation("B").like == like

    def test_gain_broadcast(self, trio: AppraisalEngine):
        trio.set_gain(12.0)
        assert {a.gain for a in trio.agents.values()} == {12.0}

    def test_invalid_broadcast_changes_nothing(self, trio: AppraisalEngine):
        trio.set_gain(3.0)
        with pytest.raises(GainRangeError):
            trio.set_gain(0)
        assert {a.gain for a in trio.agents.values()} == {3.0}


# ---------------------------------------------------------------------------
# Independence and config
# ---------------------------------------------------------------------------

class TestEngineIsolation:
    def test_engines_do_not_share_registries(self):
        first, second = AppraisalEngine(), AppraisalEngine()
        first.create_agent("Bob")
        first.register_goal(Goal("survive", 1.0))
        assert second.get_agent_by_name("Bob") is None
        assert second.get_goal_by_name("survive") is None
        second.register_goal(Goal("survive", 1.0))

    def test_decay_configuration_per_engine(self):
        first, second = AppraisalEngine(), AppraisalEngine()
        first.set_decay(0.1, linear_decay)
        assert second.decay_function is exponential_decay
        assert second.decay_factor == pytest.approx(0.8)


class TestConfigWiring:
    def test_defaults(self, engine: AppraisalEngine):
        assert engine.decay_factor == pytest.approx(0.8)
        assert engine.decay_function is exponential_decay

    def test_linear_from_config(self, clock):
        config = AppraisalConfig(decay=DecayConfig(factor=0.3, function="linear"))
        engine = AppraisalEngine(config, clock=clock)
        assert engine.decay_function is linear_decay
        assert engine.decay_factor == pytest.approx(0.3)

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("NPCAFFECT_DECAY_FACTOR", "0.5")
        monkeypatch.setenv("NPCAFFECT_DECAY_FUNCTION", "linear")
        monkeypatch.setenv("NPCAFFECT_GAIN", "4")
        config = AppraisalConfig()
        assert config.decay.factor == pytest.approx(0.5)
        assert config.decay.function == "linear"
        assert config.default_gain == pytest.approx(4.0)

    @pytest.mark.parametrize("gain", [0, 21])
    def test_invalid_gain_rejected(self, gain):
        with pytest.raises(ValidationError):
            AppraisalConfig(default_gain=gain)

    def test_invalid_interval_rejected(self):
        with pytest.raises(ValidationError):
            DecayConfig(interval_seconds=0)

    def test_repr(self):
        assert "gain=" in repr(AppraisalConfig())


# ---------------------------------------------------------------------------
# Snapshot
# ---------------------------------------------------------------------------

class TestEmotionalSnapshot:
    def test_snapshot_structure(self, trio: AppraisalEngine):
        trio.create_relation("A", "B", 0.5)
        trio.create_goal_for_agent("B", "treasure", 1.0)
        trio.appraise_belief(1.0, "A", ["treasure"], [1.0])

        snapshot = trio.emotional_snapshot()
        assert set(snapshot) == {"A", "B", "C"}
        b = snapshot["B"]
        assert b["emotions"]["joy"] == pytest.approx(0.5)
        assert b["relations"]["A"]["like"] == 0.0
        assert b["relations"]["A"]["emotions"] == {"gratitude": pytest.approx(0.5)}
        assert set(b["pad"]) == {"pleasure", "arousal", "dominance"}

    def test_gained_snapshot_is_bounded(self, trio: AppraisalEngine):
        agent = trio.get_agent_by_name("A")
        agent.update_emotional_state(Emotion("anger", 50.0))
        snapshot = trio.emotional_snapshot(use_gain=True)
        assert 0 < snapshot["A"]["emotions"]["anger"] < 1
