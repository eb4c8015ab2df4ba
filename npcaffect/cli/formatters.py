"""CLI formatters: rich tables for emotional state, relations and PAD."""

from __future__ import annotations

from typing import Any, Optional

from rich.console import Console
from rich.table import Table
from rich.text import Text

from npcaffect.affect.agent import Agent
from npcaffect.affect.engine import AppraisalEngine
from npcaffect.affect.pad import pad_for


def get_console(no_color: bool = False) -> Console:
    """Get a Rich Console, optionally with color disabled."""
    return Console(no_color=no_color)


def format_intensity(value: float) -> str:
    return f"{value:.4f}"


def valence_text(name: str, label: Optional[str] = None) -> Text:
    """Color an emotion name by the sign of its pleasure coordinate."""
    pleasure = pad_for(name).pleasure
    style = "green" if pleasure > 0 else ("red" if pleasure < 0 else "dim")
    return Text(label or name, style=style)


def build_table(title: str, columns: list[str], rows: list[list[Any]]) -> Table:
    """Build a Rich table with standard styling."""
    table = Table(title=title, show_header=True, header_style="bold")
    for col in columns:
        table.add_column(col)
    for row in rows:
        table.add_row(*(v if isinstance(v, Text) else str(v) for v in row))
    return table


def emotion_table(agent: Agent, use_gain: bool = False) -> Table:
    """What ``agent`` feels, strongest first."""
    emotions = sorted(agent.get_emotional_state(use_gain), key=lambda e: -e.intensity)
    suffix = f" (gain {agent.gain:g})" if use_gain else ""
    return build_table(
        f"{agent.name} feels{suffix}",
        ["Emotion", "Intensity"],
        [[valence_text(e.name), format_intensity(e.intensity)] for e in emotions],
    )


def relation_table(agent: Agent, target_agent_name: Optional[str] = None) -> Table:
    """The sentiments ``agent`` holds, for one target or all of them."""
    rows: list[list[Any]] = []
    for target, emotions in agent.get_relation_emotions(target_agent_name).items():
        relation = agent.relations[target]
        felt = ", ".join(f"{e.name}({format_intensity(e.intensity)})" for e in emotions)
        rows.append([target, f"{relation.like:+.2f}", felt or "-"])
    return build_table(
        f"{agent.name} has the following sentiments",
        ["Toward", "Like", "Emotions"],
        rows,
    )


def pad_table(engine: AppraisalEngine, use_gain: bool = False) -> Table:
    """Pleasure / arousal / dominance per agent."""
    rows = []
    for name, agent in engine.agents.items():
        pad = agent.get_pad_state(use_gain)
        rows.append([name, f"{pad.pleasure:+.4f}", f"{pad.arousal:+.4f}", f"{pad.dominance:+.4f}"])
    return build_table("PAD state", ["Agent", "Pleasure", "Arousal", "Dominance"], rows)


def print_all_emotions(
    engine: AppraisalEngine,
    use_gain: bool = False,
    console: Optional[Console] = None,
) -> None:
    """Print every agent's emotional state and non-empty relations."""
    console = console or get_console()
    for agent in engine.agents.values():
        if agent.get_emotional_state():
            console.print(emotion_table(agent, use_gain))
        if any(agent.get_relation_emotions().values()):
            console.print(relation_table(agent))
