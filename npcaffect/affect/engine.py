"""
Appraisal Engine: turning events into emotions.

This is the heart of npcaffect. A game describes something that happened as
a Belief ("Sam's attack makes it less likely that Bob survives") and the
engine works out what every agent feels about it:

  1. For each affected goal, the belief shifts the goal's likelihood.
  2. The shift weighted by the goal's utility is the event's desirability.
  3. The goal owner feels goal-centric emotions: hope and fear while the
     outcome is open, joy, distress, relief and so on once it is settled.
  4. Every spectator feels attribution emotions depending on who caused the
     event, who it happened to, and how they feel about both: gratitude,
     anger, pity, gloating, happy-for, resentment, remorse, gratification.

Emotions accumulate in the agents and in their relations, and fade through
``decay_all()``, which a timer outside the appraisal path drives.

One engine instance owns its registries, decay configuration and clock.
Multiple engines never share state.
"""

from __future__ import annotations

import time
from types import MappingProxyType
from typing import Any, Callable, Iterable, Mapping, NamedTuple, Optional, Union

import structlog

from npcaffect.affect.agent import Agent
from npcaffect.affect.belief import Belief
from npcaffect.affect.decay import DecayFunction, DecayTicker, resolve_decay_function
from npcaffect.affect.emotion import Emotion, EmotionLabel
from npcaffect.affect.goal import Goal
from npcaffect.config import MAX_GAIN, AppraisalConfig
from npcaffect.errors import (
    DuplicateGoalError,
    GainRangeError,
    UnknownAgentError,
)

logger = structlog.get_logger(__name__)

# Below this magnitude an event or an emotion is emotionally irrelevant.
NEGLIGIBLE_INTENSITY = 0.001

# Likelihood thresholds for treating a goal as settled.
DEBUNKED_THRESHOLD = 0.05
CONFIRMED_THRESHOLD = 0.95

AgentRef = Union[Agent, str]


class GoalEvaluation(NamedTuple):
    """The outcome of applying one belief entry to one goal, before commit."""
    goal: Goal
    utility: float
    delta_likelihood: float
    new_likelihood: float
    desirability: float

    @property
    def negligible(self) -> bool:
        return abs(self.desirability) < NEGLIGIBLE_INTENSITY


class AppraisalEngine:
    """
    Registry of agents and goals plus the appraisal and decay algorithms.

    ``clock`` returns the current time in seconds and exists so tests and
    simulations can control the elapsed time seen by ``decay_all()``.
    """

    def __init__(
        self,
        config: Optional[AppraisalConfig] = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._config = config or AppraisalConfig()
        self._clock = clock
        self._agents: dict[str, Agent] = {}
        self._goals: dict[str, Goal] = {}

        self.decay_factor: float = self._config.decay.factor
        self._decay_function: DecayFunction = resolve_decay_function(
            self._config.decay.function
        )
        self._last_tick: float = clock()
        self.ms_passed: float = 0.0

    @property
    def config(self) -> AppraisalConfig:
        return self._config

    # -------------------------------------------------------------------------
    # Agents
    # -------------------------------------------------------------------------

    @property
    def agents(self) -> Mapping[str, Agent]:
        return MappingProxyType(self._agents)

    def create_agent(self, agent_name: str) -> Agent:
        """Create an agent with the configured default gain and register it."""
        agent = Agent(agent_name, gain=self._config.default_gain)
        self.register_agent(agent)
        return agent

    def register_agent(self, agent: Agent) -> None:
        """Register ``agent``; a previous agent with the same name is replaced."""
        if agent.name in self._agents:
            logger.info("engine.agent_replaced", agent=agent.name)
        self._agents[agent.name] = agent
        agent.attach(self)

    def get_agent_by_name(self, agent_name: str) -> Optional[Agent]:
        return self._agents.get(agent_name)

    def _require_agent(self, agent_name: str, action: str) -> Agent:
        agent = self._agents.get(agent_name)
        if agent is None:
            raise UnknownAgentError(agent_name, action)
        return agent

    # -------------------------------------------------------------------------
    # Goals
    # -------------------------------------------------------------------------

    @property
    def goals(self) -> Mapping[str, Goal]:
        return MappingProxyType(self._goals)

    def register_goal(self, goal: Goal) -> None:
        if goal.name in self._goals:
            raise DuplicateGoalError(goal.name)
        self._goals[goal.name] = goal

    def get_goal_by_name(self, goal_name: str) -> Optional[Goal]:
        return self._goals.get(goal_name)

    def create_goal_for_agent(
        self,
        agent_name: str,
        goal_name: str,
        utility: float,
        is_maintenance: Optional[bool] = None,
    ) -> Goal:
        """
        Give ``agent_name`` the goal ``goal_name``.

        If a goal of that name is already registered it is shared with this
        agent rather than recreated, and ``utility`` is ignored.
        ``is_maintenance`` is applied whenever it is given.
        """
        agent = self._require_agent(agent_name, "create a goal for it")

        goal = self._goals.get(goal_name)
        if goal is None:
            goal = Goal(goal_name, utility)
            self.register_goal(goal)

        agent.add_goal(goal)
        if is_maintenance is not None:
            goal.is_maintenance = is_maintenance
        return goal

    # -------------------------------------------------------------------------
    # Relations and gain
    # -------------------------------------------------------------------------

    def create_relation(self, source_name: str, target_name: str, like: float) -> None:
        """Set how much ``source_name`` likes ``target_name``, in [-1, 1]."""
        source = self._require_agent(source_name, "relate it to another agent")
        self._require_agent(target_name, "relate another agent to it")
        source.update_relation(target_name, like)

    def set_gain(self, gain: float) -> None:
        """Set the same reporting gain on every registered agent."""
        if gain <= 0 or gain > MAX_GAIN:
            raise GainRangeError(gain)
        for agent in self._agents.values():
            agent.set_gain(gain)

    # -------------------------------------------------------------------------
    # Appraisal
    # -------------------------------------------------------------------------

    def appraise_belief(
        self,
        likelihood: float,
        causal_agent_name: str,
        affected_goal_names: list[str],
        goal_congruences: list[float],
        is_incremental: bool = False,
    ) -> None:
        """Build a Belief and appraise it for every registered agent."""
        self.appraise(
            Belief(likelihood, causal_agent_name, affected_goal_names, goal_congruences, is_incremental)
        )

    def appraise(
        self,
        belief: Belief,
        target: Optional[AgentRef] = None,
        witnesses: Optional[Iterable[AgentRef]] = None,
    ) -> None:
        """
        Appraise one event.

        Without ``target`` every spectator appraises the event against its
        own goal of each affected name, and each goal is committed right
        after its spectator. With ``target`` only the target's goals are
        evaluated (once per goal) and every spectator reacts to what happens
        to the target; the goal is committed after all spectators.

        ``witnesses`` restricts the spectators; by default every registered
        agent is one.
        """
        target_agent = self._resolve_target(target)
        spectators = self._resolve_spectators(witnesses)
        all_affected = target_agent is None

        logger.debug(
            "engine.appraise",
            causal=belief.causal_agent_name,
            goals=list(belief.affected_goal_names),
            target=None if all_affected else target_agent.name,
            spectators=[s.name for s in spectators],
        )

        for goal_name, congruence in belief.pairs():
            evaluation: Optional[GoalEvaluation] = None
            if not all_affected:
                goal = target_agent.get_goal(goal_name)
                if goal is None:
                    logger.debug("engine.goal_not_owned", agent=target_agent.name, goal=goal_name)
                    continue
                evaluation = self._evaluate_goal(goal, congruence, belief)

            for spectator in spectators:
                affected = spectator if all_affected else target_agent
                if all_affected:
                    goal = affected.get_goal(goal_name)
                    if goal is None:
                        continue
                    evaluation = self._evaluate_goal(goal, congruence, belief)

                if evaluation.negligible:
                    continue

                if spectator.name == affected.name:
                    self.evaluate_internal_emotion(
                        evaluation.utility,
                        evaluation.delta_likelihood,
                        evaluation.new_likelihood,
                        affected,
                    )
                self.agent_actions(
                    affected.name,
                    belief.causal_agent_name,
                    spectator.name,
                    evaluation.desirability,
                    evaluation.utility,
                    evaluation.delta_likelihood,
                )

                if all_affected:
                    self._commit(evaluation)

            if not all_affected and not evaluation.negligible:
                self._commit(evaluation)

    def _resolve_target(self, target: Optional[AgentRef]) -> Optional[Agent]:
        if target is None or isinstance(target, Agent):
            return target
        return self._require_agent(target, "appraise an event for it")

    def _resolve_spectators(self, witnesses: Optional[Iterable[AgentRef]]) -> list[Agent]:
        if witnesses is None:
            return list(self._agents.values())
        # A repeated witness still reacts once.
        spectators: dict[str, Agent] = {}
        for witness in witnesses:
            name = witness.name if isinstance(witness, Agent) else witness
            if name not in spectators:
                spectators[name] = self._require_agent(name, "use it as a witness")
        return list(spectators.values())

    def _evaluate_goal(self, goal: Goal, congruence: float, belief: Belief) -> GoalEvaluation:
        delta, new_likelihood = self.calculate_delta_likelihood(
            goal, congruence, belief.likelihood, belief.is_incremental
        )
        evaluation = GoalEvaluation(
            goal=goal,
            utility=goal.utility,
            delta_likelihood=delta,
            new_likelihood=new_likelihood,
            desirability=delta * goal.utility,
        )
        logger.debug(
            "engine.goal_evaluated",
            goal=goal.name,
            utility=goal.utility,
            delta_likelihood=delta,
            new_likelihood=new_likelihood,
        )
        return evaluation

    @staticmethod
    def _commit(evaluation: GoalEvaluation) -> None:
        evaluation.goal.likelihood = evaluation.new_likelihood

    @staticmethod
    def calculate_delta_likelihood(
        goal: Goal,
        congruence: float,
        likelihood: float,
        is_incremental: bool = False,
    ) -> tuple[float, float]:
        """
        Change in ``goal``'s likelihood caused by one belief entry.

        Returns ``(delta, new_likelihood)`` without touching the goal, so
        several spectators can evaluate the same goal before a single commit.
        An achievement goal at 1 or -1 is frozen and yields no change.
        """
        old_likelihood = goal.likelihood
        if goal.is_frozen:
            return 0.0, old_likelihood

        if goal.likelihood_strategy is not None:
            new_likelihood = goal.likelihood_strategy()
        elif is_incremental:
            new_likelihood = max(-1.0, min(1.0, old_likelihood + likelihood * congruence))
        else:
            new_likelihood = (congruence * likelihood + 1.0) / 2.0

        return new_likelihood - old_likelihood, new_likelihood

    def evaluate_internal_emotion(
        self,
        utility: float,
        delta_likelihood: float,
        likelihood: float,
        agent: Agent,
    ) -> None:
        """Goal-centric emotions that need no relation: hope, fear, joy, relief..."""
        positive = (utility >= 0) == (delta_likelihood >= 0)
        labels: list[EmotionLabel] = []

        if DEBUNKED_THRESHOLD < likelihood < CONFIRMED_THRESHOLD:
            labels.append(EmotionLabel.HOPE if positive else EmotionLabel.FEAR)
        elif likelihood >= CONFIRMED_THRESHOLD:
            if utility >= 0:
                if delta_likelihood < 0.5:
                    labels.append(EmotionLabel.SATISFACTION)
                labels.append(EmotionLabel.JOY)
            else:
                if delta_likelihood < 0.5:
                    labels.append(EmotionLabel.FEAR_CONFIRMED)
                labels.append(EmotionLabel.DISTRESS)
        else:
            if utility >= 0:
                if delta_likelihood > 0.5:
                    labels.append(EmotionLabel.DISAPPOINTMENT)
                labels.append(EmotionLabel.DISTRESS)
            else:
                if delta_likelihood > 0.5:
                    labels.append(EmotionLabel.RELIEF)
                labels.append(EmotionLabel.JOY)

        intensity = abs(utility * delta_likelihood)
        if intensity == 0:
            return
        for label in labels:
            agent.update_emotional_state(Emotion(label, intensity))
        logger.debug(
            "engine.internal_emotion",
            agent=agent.name,
            emotions=[label.value for label in labels],
            intensity=intensity,
        )

    def agent_actions(
        self,
        affected_name: str,
        causal_name: str,
        self_name: str,
        desirability: float,
        utility: float,
        delta_likelihood: float,
    ) -> None:
        """
        Attribution emotions felt by ``self_name`` about who did what to whom.

        Four situations, judged from self's point of view:
          - someone else did it to me: gratitude or anger toward them
          - I did it to myself: happy-for or remorse
          - I did it to someone else: gratification, pity, remorse or gloating
          - someone else did it to a third party: happy-for, resentment, pity
            or gloating toward the affected, plus a reaction toward the causer

        An event without a causal agent produces none of these.
        """
        if not causal_name:
            return

        me = self._require_agent(self_name, "evaluate its relational emotions")
        relation_to_affected = me.get_relation(affected_name)
        opinion_of_affected = relation_to_affected.like if relation_to_affected else 0.0
        relation_to_causal = me.get_relation(causal_name)
        opinion_of_causal = relation_to_causal.like if relation_to_causal else 0.0

        desirable = desirability >= 0
        magnitude = abs(utility * delta_likelihood)
        toward_causal: list[Emotion] = []
        toward_affected: list[Emotion] = []

        if causal_name != self_name and affected_name == self_name:
            label = EmotionLabel.GRATITUDE if opinion_of_causal >= 0 else EmotionLabel.ANGER
            toward_causal.append(Emotion(label, magnitude))

        if causal_name == self_name and affected_name == self_name:
            label = EmotionLabel.HAPPY_FOR if desirable else EmotionLabel.REMORSE
            toward_causal.append(Emotion(label, magnitude))

        if causal_name == self_name and affected_name != self_name:
            liked = opinion_of_affected >= 0
            if desirable:
                label = EmotionLabel.GRATIFICATION if liked else EmotionLabel.PITY
            else:
                label = EmotionLabel.REMORSE if liked else EmotionLabel.GLOATING
            toward_affected.append(Emotion(label, abs(magnitude * opinion_of_affected)))

        if causal_name != self_name and affected_name != self_name:
            liked = opinion_of_affected >= 0
            intensity = abs(magnitude * opinion_of_affected)
            if desirable:
                label = EmotionLabel.HAPPY_FOR if liked else EmotionLabel.RESENTMENT
            else:
                label = EmotionLabel.PITY if liked else EmotionLabel.GLOATING
            toward_affected.append(Emotion(label, intensity))

            if affected_name != causal_name:
                # The desirable side repeats the affected-directed labels.
                if desirable:
                    label = EmotionLabel.HAPPY_FOR if liked else EmotionLabel.RESENTMENT
                else:
                    label = EmotionLabel.ANGER if liked else EmotionLabel.GRATITUDE
                toward_causal.append(Emotion(label, intensity))

        self._record(me, causal_name, toward_causal)
        self._record(me, affected_name, toward_affected)

    @staticmethod
    def _record(me: Agent, target_name: str, emotions: list[Emotion]) -> None:
        """Store emotions felt because of ``target_name`` in ``me``."""
        for emotion in emotions:
            if emotion.intensity < NEGLIGIBLE_INTENSITY:
                continue
            if target_name != me.name:
                relation = me.get_relation(target_name) or me.update_relation(target_name, 0.0)
                relation.add_emotion(emotion)
            me.update_emotional_state(emotion)
            logger.debug(
                "engine.relational_emotion",
                agent=me.name,
                toward=target_name,
                emotion=emotion.name,
                intensity=emotion.intensity,
            )

    # -------------------------------------------------------------------------
    # Decay
    # -------------------------------------------------------------------------

    def set_decay(self, decay_factor: float, decay_function: DecayFunction | str) -> None:
        """Choose the decay factor and function (a callable or "linear"/"exponential")."""
        if isinstance(decay_function, str):
            decay_function = resolve_decay_function(decay_function)
        self._decay_function = decay_function
        self.decay_factor = decay_factor

    @property
    def decay_function(self) -> DecayFunction:
        return self._decay_function

    def apply_decay(self, value: float) -> float:
        return self._decay_function(value, self.decay_factor, self.ms_passed)

    def decay_all(self) -> None:
        """
        Decay every agent's state and relations by the time since the last call.

        Elapsed time is measured, so calling this more or less often changes
        the step size, not the overall rate.
        """
        now = self._clock()
        elapsed_ms = (now - self._last_tick) * 1000.0
        if elapsed_ms < 0:
            logger.warning("engine.clock_went_backwards", elapsed_ms=elapsed_ms)
            elapsed_ms = 0.0
        self.ms_passed = elapsed_ms
        self._last_tick = now

        for agent in self._agents.values():
            agent.decay(self)
        logger.debug("engine.decay_tick", ms_passed=elapsed_ms, agents=len(self._agents))

    def start_decay(self, interval_seconds: Optional[float] = None) -> DecayTicker:
        """
        Start calling ``decay_all()`` every ``interval_seconds`` on the running loop.

        Defaults to the configured interval. Stop it with ``await ticker.stop()``.
        """
        if interval_seconds is None:
            interval_seconds = self._config.decay.interval_seconds
        ticker = DecayTicker(self, interval_seconds)
        ticker.start()
        return ticker

    # -------------------------------------------------------------------------
    # Reporting
    # -------------------------------------------------------------------------

    def emotional_snapshot(self, use_gain: bool = False) -> dict[str, dict[str, Any]]:
        """Plain-data view of every agent's state, PAD and relation emotions."""
        snapshot: dict[str, dict[str, Any]] = {}
        for name, agent in self._agents.items():
            snapshot[name] = {
                "emotions": {e.name: e.intensity for e in agent.get_emotional_state(use_gain)},
                "pad": agent.get_pad_state(use_gain)._asdict(),
                "relations": {
                    target: {
                        "like": agent.relations[target].like,
                        "emotions": {e.name: e.intensity for e in emotions},
                    }
                    for target, emotions in agent.get_relation_emotions().items()
                },
            }
        return snapshot
