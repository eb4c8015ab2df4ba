"""CLI application: Click-based commands for exploring the appraisal engine."""

from __future__ import annotations

import json

import click

from npcaffect.affect.belief import Belief
from npcaffect.affect.engine import AppraisalEngine
from npcaffect.cli.formatters import get_console, pad_table, print_all_emotions
from npcaffect.config import AppraisalConfig
from npcaffect.main import configure_logging


class SteppedClock:
    """A clock that only moves when told to, so demo decay is reproducible."""

    def __init__(self, start: float = 0.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def build_demo_engine(clock: SteppedClock, gain: float, decay_factor: float, decay_function: str) -> AppraisalEngine:
    """Two agents who mildly like each other and both want to survive and win."""
    engine = AppraisalEngine(AppraisalConfig(), clock=clock)
    engine.set_decay(decay_factor, decay_function)

    for name in ("Bob", "Sam"):
        engine.create_agent(name)
    engine.set_gain(gain)

    engine.create_relation("Bob", "Sam", 0.2)
    engine.create_relation("Sam", "Bob", 0.1)

    engine.create_goal_for_agent("Bob", "survive", 1)
    engine.create_goal_for_agent("Bob", "win", 0.7)
    engine.create_goal_for_agent("Sam", "survive", 1)
    engine.create_goal_for_agent("Sam", "win", 0.7)
    return engine


@click.group()
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output")
@click.option("--verbose", "-v", is_flag=True, help="Log every appraisal step")
@click.option("--no-color", is_flag=True, help="Disable ANSI colors")
@click.pass_context
def cli(ctx: click.Context, json_output: bool, verbose: bool, no_color: bool) -> None:
    """npcaffect - appraisal-based emotions for simulated agents."""
    ctx.ensure_object(dict)
    ctx.obj["json"] = json_output
    ctx.obj["verbose"] = verbose
    ctx.obj["no_color"] = no_color
    configure_logging("DEBUG" if verbose else AppraisalConfig().log_level)


@cli.command("demo")
@click.option("--gain", type=float, default=10.0, show_default=True, help="Reporting gain (0, 20]")
@click.option("--decay-factor", type=float, default=0.8, show_default=True)
@click.option(
    "--decay-function",
    type=click.Choice(["linear", "exponential"]),
    default="exponential",
    show_default=True,
)
@click.option("--elapsed", type=float, default=1.0, show_default=True, help="Seconds of decay after the event")
@click.option("--pad", "show_pad", is_flag=True, help="Also show the PAD projection")
@click.pass_context
def demo_cmd(
    ctx: click.Context,
    gain: float,
    decay_factor: float,
    decay_function: str,
    elapsed: float,
    show_pad: bool,
) -> None:
    """Bob hurts his own chance of survival; watch everyone react, then decay."""
    clock = SteppedClock()
    try:
        engine = build_demo_engine(clock, gain, decay_factor, decay_function)
    except ValueError as e:
        raise click.BadParameter(str(e)) from e

    console = get_console(no_color=ctx.obj["no_color"])
    json_output = ctx.obj["json"]

    engine.appraise(Belief(0.1, "Bob", ["survive"], [-0.2], is_incremental=True))
    after_event = engine.emotional_snapshot(use_gain=True)
    if not json_output:
        console.print("[bold]After the event[/bold]")
        print_all_emotions(engine, use_gain=True, console=console)

    clock.advance(elapsed)
    engine.decay_all()

    if json_output:
        after_decay = engine.emotional_snapshot(use_gain=True)
        click.echo(json.dumps({"after_event": after_event, "after_decay": after_decay}, indent=2))
        return

    console.print(f"[bold]After {elapsed:g}s of {decay_function} decay[/bold]")
    print_all_emotions(engine, use_gain=True, console=console)
    if show_pad:
        console.print(pad_table(engine, use_gain=True))
