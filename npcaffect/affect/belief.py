"""Beliefs: immutable descriptions of one event in the world."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from npcaffect.errors import MalformedBeliefError


def _clamp(value: float) -> float:
    return max(-1.0, min(1.0, float(value)))


@dataclass(frozen=True, init=False)
class Belief:
    """
    An event to be appraised.

    ``goal_congruences[i]`` says how good (+) or bad (-) the event is for
    ``affected_goal_names[i]``. Likelihood and congruences are clamped into
    [-1, 1] rather than rejected.

    An incremental belief adds ``likelihood * congruence`` to the current
    goal likelihood; an absolute one (the default) sets the likelihood
    outright.
    """
    likelihood: float
    causal_agent_name: str
    affected_goal_names: tuple[str, ...]
    goal_congruences: tuple[float, ...]
    is_incremental: bool

    def __init__(
        self,
        likelihood: float,
        causal_agent_name: str,
        affected_goal_names: Sequence[str],
        goal_congruences: Sequence[float],
        is_incremental: bool = False,
    ) -> None:
        if len(affected_goal_names) != len(goal_congruences):
            raise MalformedBeliefError(
                "The congruence list must be of the same length as the affected goal "
                f"list ({len(goal_congruences)} != {len(affected_goal_names)})"
            )
        object.__setattr__(self, "likelihood", _clamp(likelihood))
        object.__setattr__(self, "causal_agent_name", causal_agent_name or "")
        object.__setattr__(self, "affected_goal_names", tuple(affected_goal_names))
        object.__setattr__(
            self, "goal_congruences", tuple(_clamp(c) for c in goal_congruences)
        )
        object.__setattr__(self, "is_incremental", bool(is_incremental))

    def pairs(self) -> list[tuple[str, float]]:
        """(goal name, congruence) pairs in order."""
        return list(zip(self.affected_goal_names, self.goal_congruences))
