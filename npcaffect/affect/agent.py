"""
Agent: the emotional bookkeeping for one entity (usually an NPC).

An agent owns goals (by reference), relations toward other agents and an
accumulated emotional state. It does not appraise anything on its own; the
AppraisalEngine decides which emotions arise and writes them here.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import TYPE_CHECKING, Mapping, Optional

import structlog

from npcaffect.affect.emotion import Emotion, copy_emotions, decay_emotions, merge_emotion
from npcaffect.affect.goal import Goal
from npcaffect.affect.pad import PAD, apply_gain, gain_pad, sum_pad
from npcaffect.affect.relation import Relation
from npcaffect.config import MAX_GAIN
from npcaffect.errors import EngineNotAttachedError, GainRangeError, RelationRangeError

if TYPE_CHECKING:
    from npcaffect.affect.belief import Belief
    from npcaffect.affect.engine import AppraisalEngine

logger = structlog.get_logger(__name__)


class Agent:
    """
    Emotional state of a single named participant.

    ``name`` is the key the engine and every belief use to refer to the
    agent. ``gain`` only affects reporting: stored intensities are raw sums.
    """

    def __init__(self, name: str, gain: float = 1.0) -> None:
        self.name = name
        self.gain = 1.0
        self.set_gain(gain)
        self._goals: dict[str, Goal] = {}
        self._relations: dict[str, Relation] = {}
        self._state: dict[str, Emotion] = {}
        self._engine: Optional[AppraisalEngine] = None

    # -------------------------------------------------------------------------
    # Goals
    # -------------------------------------------------------------------------

    @property
    def goals(self) -> Mapping[str, Goal]:
        return MappingProxyType(self._goals)

    def add_goal(self, goal: Goal) -> None:
        """Make this agent an owner of ``goal``. The object is kept, not copied."""
        self._goals[goal.name] = goal

    def remove_goal(self, goal_name: str) -> bool:
        return self._goals.pop(goal_name, None) is not None

    def has_goal(self, goal_name: str) -> bool:
        return goal_name in self._goals

    def get_goal(self, goal_name: str) -> Optional[Goal]:
        return self._goals.get(goal_name)

    # -------------------------------------------------------------------------
    # Relations
    # -------------------------------------------------------------------------

    @property
    def relations(self) -> Mapping[str, Relation]:
        return MappingProxyType(self._relations)

    def update_relation(self, target_agent_name: str, like: float) -> Relation:
        """
        Create the relation toward ``target_agent_name`` or update its like value.

        ``like`` must be in [-1, 1]; out-of-range values are rejected, not clamped.
        """
        if like < -1 or like > 1:
            raise RelationRangeError(self.name, target_agent_name, like)
        relation = self._relations.get(target_agent_name)
        if relation is None:
            relation = Relation(target_agent_name, like)
            self._relations[target_agent_name] = relation
        else:
            relation.like = like
        return relation

    def has_relation_with(self, agent_name: str) -> bool:
        return agent_name in self._relations

    def get_relation(self, target_agent_name: str) -> Optional[Relation]:
        return self._relations.get(target_agent_name)

    def get_relation_emotions(self, target_agent_name: str | None = None) -> dict[str, list[Emotion]]:
        """Emotions recorded per relation, optionally for one target only."""
        return {
            target: relation.emotions
            for target, relation in self._relations.items()
            if target_agent_name is None or target == target_agent_name
        }

    # -------------------------------------------------------------------------
    # Emotional state
    # -------------------------------------------------------------------------

    def update_emotional_state(self, emotion: Emotion) -> None:
        """
        Add an appraised emotion to the state.

        Appraisals add to the old value, so repeated appraisals without decay
        sum up over time.
        """
        merge_emotion(self._state, emotion)

    def get_emotion(self, name: str) -> Optional[Emotion]:
        emotion = self._state.get(name)
        return emotion.copy() if emotion is not None else None

    def set_gain(self, gain: float) -> None:
        """
        Set the reporting gain, in (0, 20].

        A high gain works well when appraisals are small and rare; a gain
        close to 0 dampens high-frequency or large appraisals.
        """
        if gain <= 0 or gain > MAX_GAIN:
            raise GainRangeError(gain)
        self.gain = gain

    def get_emotional_state(self, use_gain: bool = False) -> list[Emotion]:
        """The current emotions, raw or squashed through the gain limiter."""
        if not use_gain:
            return copy_emotions(self._state.values())
        return [
            Emotion(emotion.name, apply_gain(emotion.intensity, self.gain))
            for emotion in self._state.values()
        ]

    def get_pad_state(self, use_gain: bool = False) -> PAD:
        """
        Sum of every emotion's PAD coordinates weighted by its intensity.

        With ``use_gain`` each component is squashed by the agent's gain.
        """
        pad = sum_pad(self._state.values())
        return gain_pad(pad, self.gain) if use_gain else pad

    # -------------------------------------------------------------------------
    # Engine integration
    # -------------------------------------------------------------------------

    @property
    def engine(self) -> Optional[AppraisalEngine]:
        return self._engine

    def attach(self, engine: AppraisalEngine) -> None:
        self._engine = engine

    def appraise(self, belief: Belief) -> None:
        """Appraise ``belief`` with this agent as the only affected agent."""
        if self._engine is None:
            raise EngineNotAttachedError(
                f"Agent '{self.name}' is not registered with an appraisal engine"
            )
        self._engine.appraise(belief, self)

    def decay(self, engine: AppraisalEngine) -> None:
        """
        Age the emotional state and every relation by the engine's decay.

        Usually driven by ``engine.decay_all()``; call it directly to decay
        agents individually (for instance only those near the player).
        """
        removed = decay_emotions(self._state, engine.apply_decay)
        if removed:
            logger.debug("agent.emotions_decayed_out", agent=self.name, emotions=removed)
        for relation in self._relations.values():
            relation.decay(engine)

    def __repr__(self) -> str:
        return (
            f"Agent({self.name!r}, goals={len(self._goals)}, "
            f"relations={len(self._relations)}, emotions={len(self._state)})"
        )
