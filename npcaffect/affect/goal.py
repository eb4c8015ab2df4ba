"""
Goals: what an agent cares about.

A goal has a utility (how much the owner cares, negative for things the
owner wants to avoid) and a likelihood of being achieved. Beliefs move the
likelihood; the change in likelihood weighted by utility is what produces
emotion.

Goals are shared by reference. Two agents that own the same Goal object see
one likelihood, so a single appraisal updates both of them.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Protocol, runtime_checkable

# Unknown at the start: halfway between disconfirmed (0) and confirmed (1).
DEFAULT_LIKELIHOOD = 0.5


@runtime_checkable
class LikelihoodStrategy(Protocol):
    """
    Computes a goal's current likelihood from state the strategy owns.

    It receives no belief data. When a goal carries a strategy, belief
    congruence and likelihood are ignored for that goal.
    """

    def __call__(self) -> float: ...


@dataclass(eq=False)
class Goal:
    """
    A named target with a utility and a likelihood.

    ``is_maintenance`` distinguishes maintenance goals, whose likelihood may
    move freely, from achievement goals (the default), which freeze once the
    likelihood reaches 1 or -1. Only direct assignment or a likelihood
    strategy can move a frozen goal.
    """
    name: str
    utility: float
    is_maintenance: bool = False
    likelihood: float = DEFAULT_LIKELIHOOD
    likelihood_strategy: Optional[LikelihoodStrategy] = None

    @property
    def is_frozen(self) -> bool:
        return not self.is_maintenance and (self.likelihood >= 1 or self.likelihood <= -1)

    def __repr__(self) -> str:
        kind = "maintenance" if self.is_maintenance else "achievement"
        return (
            f"Goal({self.name!r}, utility={self.utility}, "
            f"likelihood={self.likelihood:.3f}, {kind})"
        )
