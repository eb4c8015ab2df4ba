"""
Typed errors raised by the appraisal engine.

Families that matter to callers:
  - referential errors: an agent name that was never registered
  - duplicate registration: a second goal under an already-used name
  - range errors: gain or relation values outside their allowed interval
  - malformed beliefs: goal and congruence lists of different length
  - lifecycle errors: an agent used through an engine it is not attached to

All of them indicate an integration bug in the caller, so they are raised
and never retried. Belief likelihoods and congruences are not in this list:
those are clamped at construction instead of rejected.
"""

from __future__ import annotations


class AppraisalError(Exception):
    """Base class for every error raised by npcaffect."""


class UnknownAgentError(AppraisalError, LookupError):
    """An operation referenced an agent that is not registered with the engine."""

    def __init__(self, agent_name: str, action: str = "") -> None:
        self.agent_name = agent_name
        suffix = f", so I cannot {action}" if action else ""
        super().__init__(f"Agent with name '{agent_name}' does not exist{suffix}.")


class DuplicateGoalError(AppraisalError, ValueError):
    """A second goal was registered under a name that is already taken."""

    def __init__(self, goal_name: str) -> None:
        self.goal_name = goal_name
        super().__init__(f"Failed adding a second goal with the same name: {goal_name}")


class GainRangeError(AppraisalError, ValueError):
    """Gain factor outside (0, 20]."""

    def __init__(self, gain: float) -> None:
        self.gain = gain
        super().__init__(
            f"Gain factor for appraisal integration must be in (0, 20], got {gain}"
        )


class RelationRangeError(AppraisalError, ValueError):
    """Relation 'like' value outside [-1, 1]."""

    def __init__(self, source: str, target: str, like: float) -> None:
        self.source = source
        self.target = target
        self.like = like
        super().__init__(
            f"Cannot relate '{source}' to '{target}' with like={like}; "
            "like must be in [-1, 1]"
        )


class MalformedBeliefError(AppraisalError, ValueError):
    """The affected-goal and congruence lists of a belief differ in length."""


class EngineNotAttachedError(AppraisalError, RuntimeError):
    """An agent-level convenience needs an engine but the agent is not registered."""
