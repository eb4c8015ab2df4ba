"""
Pleasure–Arousal–Dominance projection and gain squashing.

Both are read-time transforms. Stored intensities are never modified here;
reporting code calls these to turn an unbounded sum of intensities into
something that saturates toward a bounded range.
"""

from __future__ import annotations

from typing import Iterable, NamedTuple

from npcaffect.affect.emotion import Emotion, EmotionLabel


class PAD(NamedTuple):
    """A point in Pleasure–Arousal–Dominance space."""
    pleasure: float = 0.0
    arousal: float = 0.0
    dominance: float = 0.0


# Emotions outside the table count fully on every axis.
DEFAULT_PAD = PAD(1.0, 1.0, 1.0)

PAD_TABLE: dict[str, PAD] = {
    EmotionLabel.DISTRESS.value: PAD(-0.61, 0.28, -0.36),
    EmotionLabel.FEAR.value: PAD(-0.64, 0.60, -0.43),
    EmotionLabel.HOPE.value: PAD(0.51, 0.23, 0.14),
    EmotionLabel.JOY.value: PAD(0.76, 0.48, 0.35),
    EmotionLabel.SATISFACTION.value: PAD(0.87, 0.20, 0.62),
    EmotionLabel.FEAR_CONFIRMED.value: PAD(-0.61, 0.06, -0.32),   # defeated
    EmotionLabel.DISAPPOINTMENT.value: PAD(-0.61, -0.15, -0.29),
    EmotionLabel.RELIEF.value: PAD(0.29, -0.19, -0.28),
    EmotionLabel.HAPPY_FOR.value: PAD(0.64, 0.35, 0.25),
    EmotionLabel.RESENTMENT.value: PAD(-0.35, 0.35, 0.29),
    EmotionLabel.PITY.value: PAD(-0.52, 0.02, -0.21),             # regretful
    EmotionLabel.GLOATING.value: PAD(-0.45, 0.48, 0.42),          # cruel
    EmotionLabel.GRATITUDE.value: PAD(0.64, 0.16, -0.21),
    EmotionLabel.ANGER.value: PAD(-0.51, 0.59, 0.25),
    EmotionLabel.GRATIFICATION.value: PAD(0.69, 0.57, 0.63),      # triumphant
    EmotionLabel.REMORSE.value: PAD(-0.57, 0.28, -0.34),          # guilty
    EmotionLabel.BORED.value: PAD(-0.65, -0.62, -0.33),
    EmotionLabel.CURIOUS.value: PAD(0.22, 0.62, -0.01),
    EmotionLabel.DIGNIFIED.value: PAD(0.55, 0.22, 0.61),
    EmotionLabel.ELATED.value: PAD(0.50, 0.42, 0.23),
    EmotionLabel.INHIBITED.value: PAD(-0.54, -0.04, -0.41),
    EmotionLabel.LOVED.value: PAD(0.87, 0.54, -0.18),
    EmotionLabel.PUZZLED.value: PAD(-0.41, 0.48, -0.33),
    EmotionLabel.SLEEPY.value: PAD(0.20, -0.70, -0.44),
    EmotionLabel.UNCONCERNED.value: PAD(-0.13, -0.41, 0.08),
    EmotionLabel.VIOLENT.value: PAD(-0.50, 0.62, 0.38),
}


def pad_for(name: str) -> PAD:
    """PAD coordinates for an emotion name, falling back to DEFAULT_PAD."""
    return PAD_TABLE.get(name, DEFAULT_PAD)


def apply_gain(value: float, gain: float) -> float:
    """
    Squash ``value`` monotonically toward (-1, 1).

    A high gain makes small, rare appraisals visible; a gain below 1
    dampens frequent or large ones.
    """
    if value >= 0:
        return gain * value / (gain * value + 1)
    return -gain * value / (gain * value - 1)


def sum_pad(emotions: Iterable[Emotion]) -> PAD:
    """Intensity-weighted sum of the PAD coordinates of ``emotions``."""
    pleasure = arousal = dominance = 0.0
    for emotion in emotions:
        p, a, d = pad_for(emotion.name)
        pleasure += emotion.intensity * p
        arousal += emotion.intensity * a
        dominance += emotion.intensity * d
    return PAD(pleasure, arousal, dominance)


def gain_pad(pad: PAD, gain: float) -> PAD:
    return PAD(*(apply_gain(component, gain) for component in pad))
