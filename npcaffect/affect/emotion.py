"""
Emotions: the discrete output of an appraisal.

An emotion is nothing more than a label and an intensity. What makes the
collection interesting is the merge rule: emotions with the same name are
never replaced, they accumulate. Repeated appraisals without decay therefore
sum up over time, and only the decay pass brings them back down.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable


class EmotionLabel(str, Enum):
    """
    The closed vocabulary the engine produces or can project to PAD space.

    The first sixteen come out of the appraisal rules. The rest exist only so
    that emotions injected by a game can still be mapped to PAD values.
    """
    # Goal-centric (internal) emotions
    HOPE = "hope"
    FEAR = "fear"
    JOY = "joy"
    DISTRESS = "distress"
    SATISFACTION = "satisfaction"
    FEAR_CONFIRMED = "fear-confirmed"
    DISAPPOINTMENT = "disappointment"
    RELIEF = "relief"

    # Social / attribution emotions
    HAPPY_FOR = "happy-for"
    RESENTMENT = "resentment"
    PITY = "pity"
    GLOATING = "gloating"
    GRATITUDE = "gratitude"
    ANGER = "anger"
    GRATIFICATION = "gratification"
    REMORSE = "remorse"

    # Extended PAD vocabulary
    BORED = "bored"
    CURIOUS = "curious"
    DIGNIFIED = "dignified"
    ELATED = "elated"
    INHIBITED = "inhibited"
    LOVED = "loved"
    PUZZLED = "puzzled"
    SLEEPY = "sleepy"
    UNCONCERNED = "unconcerned"
    VIOLENT = "violent"


@dataclass
class Emotion:
    """A named intensity. ``name`` may be any string; labels are strings too."""
    name: str
    intensity: float

    def __post_init__(self) -> None:
        # Store the plain string so lookups by "joy" and EmotionLabel.JOY agree.
        if isinstance(self.name, EmotionLabel):
            self.name = self.name.value

    def copy(self) -> Emotion:
        return Emotion(self.name, self.intensity)


def merge_emotion(collection: dict[str, Emotion], emotion: Emotion) -> Emotion:
    """
    Add ``emotion`` into ``collection``, summing with any same-named entry.

    The stored object is always owned by the collection: a new name is kept
    as a copy so later changes to the caller's object do not leak in.
    Returns the stored entry.
    """
    existing = collection.get(emotion.name)
    if existing is not None:
        existing.intensity += emotion.intensity
        return existing
    stored = emotion.copy()
    collection[stored.name] = stored
    return stored


def decay_emotions(collection: dict[str, Emotion], decay) -> list[str]:
    """
    Age every emotion in ``collection`` with ``decay(intensity)``.

    Emotions whose aged intensity falls below zero are removed, not floored.
    Returns the names that were removed.
    """
    removed: list[str] = []
    for name, emotion in list(collection.items()):
        new_intensity = decay(emotion.intensity)
        if new_intensity < 0:
            del collection[name]
            removed.append(name)
        else:
            emotion.intensity = new_intensity
    return removed


def copy_emotions(emotions: Iterable[Emotion]) -> list[Emotion]:
    return [emotion.copy() for emotion in emotions]
