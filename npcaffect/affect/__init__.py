"""Affective core: goals, beliefs, emotions and the appraisal engine."""
from npcaffect.affect.agent import Agent
from npcaffect.affect.belief import Belief
from npcaffect.affect.decay import DecayTicker, exponential_decay, linear_decay
from npcaffect.affect.emotion import Emotion, EmotionLabel
from npcaffect.affect.engine import AppraisalEngine
from npcaffect.affect.goal import Goal, LikelihoodStrategy
from npcaffect.affect.pad import PAD, apply_gain
from npcaffect.affect.relation import Relation

__all__ = [
    "Agent",
    "AppraisalEngine",
    "Belief",
    "DecayTicker",
    "Emotion",
    "EmotionLabel",
    "Goal",
    "LikelihoodStrategy",
    "PAD",
    "Relation",
    "apply_gain",
    "exponential_decay",
    "linear_decay",
]
