"""
Tests for AppraisalEngine.agent_actions: attribution emotions.

Covers the four situations seen from the evaluating agent ("self"):
- someone else did it to me
- I did it to myself
- I did it to someone else
- someone else did it to a third party (including the causal-directed branch)
plus the negligible-intensity filter, events without a causal agent and
lazily created relations.
"""

from __future__ import annotations

import pytest

from npcaffect.affect.agent import Agent
from npcaffect.affect.engine import AppraisalEngine
from npcaffect.errors import UnknownAgentError


def _state(agent: Agent) -> dict[str, float]:
    return {e.name: e.intensity for e in agent.get_emotional_state()}


def _toward(agent: Agent, target: str) -> dict[str, float]:
    relation = agent.get_relation(target)
    assert relation is not None, f"{agent.name} has no relation with {target}"
    return {e.name: e.intensity for e in relation.emotions}


# ---------------------------------------------------------------------------
# Case one: someone else did it to me
# ---------------------------------------------------------------------------

class TestDoneToMe:
    def test_gratitude_toward_liked_causer(self, trio: AppraisalEngine):
        trio.create_relation("A", "B", 0.5)
        trio.agent_actions("A", "B", "A", desirability=-0.3, utility=1.0, delta_likelihood=-0.3)
        a = trio.get_agent_by_name("A")
        assert _state(a) == {"gratitude": pytest.approx(0.3)}
        assert _toward(a, "B") == {"gratitude": pytest.approx(0.3)}

    def test_anger_toward_disliked_causer(self, trio: AppraisalEngine):
        trio.create_relation("A", "B", -0.5)
        trio.agent_actions("A", "B", "A", 0.3, 1.0, 0.3)
        a = trio.get_agent_by_name("A")
        assert _state(a) == {"anger": pytest.approx(0.3)}
        assert _toward(a, "B") == {"anger": pytest.approx(0.3)}

    def test_missing_relation_is_created_neutral(self, trio: AppraisalEngine):
        trio.agent_actions("A", "B", "A", 0.2, 0.5, 0.4)
        a = trio.get_agent_by_name("A")
        assert a.get_relation("B").like == 0.0
        assert _toward(a, "B") == {"gratitude": pytest.approx(0.2)}

    def test_intensity_ignores_like_magnitude(self, trio: AppraisalEngine):
        trio.create_relation("A", "B", 0.01)
        trio.agent_actions("A", "B", "A", 0.5, 1.0, 0.5)
        assert _state(trio.get_agent_by_name("A")) == {"gratitude": pytest.approx(0.5)}


# ---------------------------------------------------------------------------
# Case two: I did it to myself
# ---------------------------------------------------------------------------

class TestDoneToMyself:
    def test_remorse_for_undesirable(self, trio: AppraisalEngine):
        trio.agent_actions("A", "A", "A", -0.2, 1.0, -0.2)
        a = trio.get_agent_by_name("A")
        assert _state(a) == {"remorse": pytest.approx(0.2)}
        assert not a.has_relation_with("A")

    def test_happy_for_when_desirable(self, trio: AppraisalEngine):
        trio.agent_actions("A", "A", "A", 0.2, 1.0, 0.2)
        assert _state(trio.get_agent_by_name("A")) == {"happy-for": pytest.approx(0.2)}


# ---------------------------------------------------------------------------
# Case three: I did it to someone else
# ---------------------------------------------------------------------------

class TestDoneByMeToOther:
    @pytest.mark.parametrize(
        "like, desirability, expected",
        [
            (0.5, 0.4, "gratification"),
            (-0.5, 0.4, "pity"),
            (0.5, -0.4, "remorse"),
            (-0.5, -0.4, "gloating"),
        ],
    )
    def test_label_matrix(self, trio: AppraisalEngine, like, desirability, expected):
        trio.create_relation("A", "B", like)
        trio.agent_actions("B", "A", "A", desirability, 1.0, desirability)
        a = trio.get_agent_by_name("A")
        assert _state(a) == {expected: pytest.approx(0.2)}
        assert _toward(a, "B") == {expected: pytest.approx(0.2)}

    def test_no_relation_means_no_emotion(self, trio: AppraisalEngine):
        trio.agent_actions("B", "A", "A", 0.4, 1.0, 0.4)
        a = trio.get_agent_by_name("A")
        assert _state(a) == {}
        assert not a.has_relation_with("B")


# ---------------------------------------------------------------------------
# Case four: someone else did it to a third party
# ---------------------------------------------------------------------------

class TestWitnessedThirdParty:
    @pytest.mark.parametrize(
        "like, desirability, toward_affected, toward_causal",
        [
            (0.5, 0.4, "happy-for", "happy-for"),
            (-0.5, 0.4, "resentment", "resentment"),
            (0.5, -0.4, "pity", "anger"),
            (-0.5, -0.4, "gloating", "gratitude"),
        ],
    )
    def test_label_matrix(self, trio, like, desirability, toward_affected, toward_causal):
        trio.create_relation("A", "B", like)
        trio.agent_actions("B", "C", "A", desirability, 1.0, desirability)
        a = trio.get_agent_by_name("A")
        assert _toward(a, "B") == {toward_affected: pytest.approx(0.2)}
        assert _toward(a, "C") == {toward_causal: pytest.approx(0.2)}

    def test_both_directions_merge_into_state(self, trio: AppraisalEngine):
        trio.create_relation("A", "B", 0.5)
        trio.agent_actions("B", "C", "A", 0.4, 1.0, 0.4)
        assert _state(trio.get_agent_by_name("A")) == {"happy-for": pytest.approx(0.4)}

    def test_causal_direction_uses_opinion_of_affected(self, trio: AppraisalEngine):
        trio.create_relation("A", "B", 0.5)
        trio.create_relation("A", "C", -1.0)
        trio.agent_actions("B", "C", "A", -0.4, 1.0, -0.4)
        assert _toward(trio.get_agent_by_name("A"), "C") == {"anger": pytest.approx(0.2)}

    def test_affected_is_causal_skips_causal_branch(self, trio: AppraisalEngine):
        trio.create_relation("A", "B", 0.1)
        trio.agent_actions("B", "B", "A", -0.02, 1.0, -0.02)
        a = trio.get_agent_by_name("A")
        assert _state(a) == {"pity": pytest.approx(0.002)}
        assert _toward(a, "B") == {"pity": pytest.approx(0.002)}


# ---------------------------------------------------------------------------
# Filters and errors
# ---------------------------------------------------------------------------

class TestFilters:
    def test_negligible_emotions_discarded(self, trio: AppraisalEngine):
        trio.create_relation("A", "B", 0.001)
        trio.agent_actions("B", "C", "A", 0.4, 1.0, 0.4)
        a = trio.get_agent_by_name("A")
        assert _state(a) == {}
        assert a.get_relation("B").emotions == []
        assert not a.has_relation_with("C")

    @pytest.mark.parametrize("causal", ["", None])
    def test_no_causal_agent_no_emotion(self, trio: AppraisalEngine, causal):
        trio.create_relation("A", "B", 0.8)
        trio.agent_actions("B", causal, "A", 0.4, 1.0, 0.4)
        assert _state(trio.get_agent_by_name("A")) == {}

    def test_unknown_self_raises(self, trio: AppraisalEngine):
        with pytest.raises(UnknownAgentError):
            trio.agent_actions("A", "B", "Nobody", 0.4, 1.0, 0.4)
