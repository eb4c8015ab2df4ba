"""
Relations: one agent's sentiment toward another.

Each agent keeps one relation per target. Besides the ``like`` value the
relation stores the emotions felt specifically because of the target
(angry at, pity for, grateful to), which decay like the agent's own state.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from npcaffect.affect.emotion import Emotion, copy_emotions, decay_emotions, merge_emotion

if TYPE_CHECKING:
    from npcaffect.affect.engine import AppraisalEngine

logger = structlog.get_logger(__name__)


class Relation:
    """Directed sentiment from the owning agent toward ``target_agent_name``."""

    def __init__(self, target_agent_name: str, like: float) -> None:
        self.target_agent_name = target_agent_name
        self.like = like
        self._emotions: dict[str, Emotion] = {}

    @property
    def emotions(self) -> list[Emotion]:
        """Snapshot of the emotions recorded toward the target."""
        return copy_emotions(self._emotions.values())

    def get_emotion(self, name: str) -> Emotion | None:
        emotion = self._emotions.get(name)
        return emotion.copy() if emotion is not None else None

    def add_emotion(self, emotion: Emotion) -> None:
        merge_emotion(self._emotions, emotion)

    def decay(self, engine: AppraisalEngine) -> None:
        removed = decay_emotions(self._emotions, engine.apply_decay)
        if removed:
            logger.debug(
                "relation.emotions_decayed_out",
                target=self.target_agent_name,
                emotions=removed,
            )

    def __repr__(self) -> str:
        return f"Relation(target={self.target_agent_name!r}, like={self.like})"
