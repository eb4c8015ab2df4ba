"""
npcaffect: synthetic emotions for simulated agents.

Games describe what happens in the world as beliefs about goals. The
appraisal engine turns each belief into discrete emotions (hope, fear, joy,
anger, pity, gratitude, ...) for every agent that cares, keeps them per agent
and per relationship, and lets them fade over time.

Layers (bottom to top):
    1. Emotion, Goal, Belief: plain data
    2. Relation, Agent: per-entity emotional bookkeeping
    3. AppraisalEngine: appraisal and decay
    4. CLI: reporting and a demo scenario
"""

from npcaffect.affect import (
    Agent,
    AppraisalEngine,
    Belief,
    Emotion,
    EmotionLabel,
    Goal,
    Relation,
    exponential_decay,
    linear_decay,
)

__version__ = "0.1.0"

__all__ = [
    "Agent",
    "AppraisalEngine",
    "Belief",
    "Emotion",
    "EmotionLabel",
    "Goal",
    "Relation",
    "exponential_decay",
    "linear_decay",
]
