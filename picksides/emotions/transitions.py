"""
State transition policy.

Maps the dominant trigger of an analysis onto the next emotional state.
The mapping is a coarse heuristic kept as an explicit table:
each category names a base target state and, optionally, an escalated
state reached when the effective strength clears a category threshold.

Three outcomes are possible for one update:
- escalation: the dominant trigger is stronger than the activation
  threshold, so its category rule picks the state;
- cooldown: nothing fired at all, so a non-neutral state returns to
  neutral with probability ``cooldown_rate`` (the only random step);
- hold: something fired but too weakly, so the state is kept.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from picksides.config import EngineConfig
from picksides.emotions.profiles import PersonaProfile, StateProgression
from picksides.emotions.states import EmotionalState
from picksides.emotions.triggers import TriggerScan
from picksides.logging_config import get_logger
from picksides.protocols import RandomSource

logger = get_logger(__name__)


@dataclass(frozen=True)
class TransitionRule:
    """Target state for one trigger category.

    ``escalated`` applies when effective strength is strictly greater than
    ``threshold``; otherwise ``target`` applies.
    """

    target: EmotionalState
    threshold: Optional[float] = None
    escalated: Optional[EmotionalState] = None

    def resolve(self, effective_strength: float) -> EmotionalState:
        if (
            self.threshold is not None
            and self.escalated is not None
            and effective_strength > self.threshold
        ):
            return self.escalated
        return self.target


_S = EmotionalState

_FALLACY = TransitionRule(_S.ENGAGED, 0.6, _S.FRUSTRATED)
_ATTACK = TransitionRule(_S.DEFENSIVE, 0.7, _S.PASSIONATE)
_STIMULATING = TransitionRule(_S.ENGAGED)
_WEAK = TransitionRule(_S.CONFIDENT)
_AUTHORITY = TransitionRule(_S.ENGAGED, 0.5, _S.FRUSTRATED)
_CONFORMITY = TransitionRule(_S.FRUSTRATED, 0.6, _S.PASSIONATE)

TRANSITION_TABLE: Mapping[str, TransitionRule] = {
    "logical_fallacy": _FALLACY,
    "circular_reasoning": _FALLACY,
    "anti_intellectualism": _FALLACY,
    "shallow_thinking": _FALLACY,
    "personal_attack": _ATTACK,
    "strong_evidence": _STIMULATING,
    "creative_insight": _STIMULATING,
    "weak_argument": _WEAK,
    "appeal_to_authority": _AUTHORITY,
    "dogmatism": _AUTHORITY,
    "moral_absolutism": _CONFORMITY,
    "herd_mentality": _CONFORMITY,
    "collectivism": _CONFORMITY,
    "traditionalism": _CONFORMITY,
    "artistic_critique": _STIMULATING,
    "moral_complexity": _STIMULATING,
}

# Categories without an entry (and unknown categories) use this rule.
FALLBACK_RULE = TransitionRule(_S.NEUTRAL, 0.5, _S.ENGAGED)


@dataclass(frozen=True)
class TransitionDecision:
    """Outcome of one transition step.

    ``kind`` is "escalation", "cooldown" or "hold". ``effective_strength``
    is only set for escalations.
    """

    state: EmotionalState
    kind: str
    effective_strength: Optional[float] = None


def round_multiplier(round_number: Any, step: float = 0.2) -> float:
    """Escalation multiplier for a 1-based round; rounds <= 1 give 1.0."""
    if isinstance(round_number, bool) or not isinstance(round_number, (int, float)):
        return 1.0
    if round_number > 1:
        return 1 + (round_number - 1) * step
    return 1.0


def effective_strength(
    strength: float,
    progression: StateProgression,
    round_number: Any,
    step: float = 0.2,
) -> float:
    """Trigger strength after persona escalation, capped at max intensity."""
    scaled = strength * progression.escalation_rate * round_multiplier(round_number, step)
    return min(scaled, progression.max_intensity)


def target_state(category: Optional[str], strength: float) -> EmotionalState:
    """State a dominant ``category`` at ``strength`` maps to."""
    rule = TRANSITION_TABLE.get(category or "", FALLBACK_RULE)
    return rule.resolve(strength)


def next_state(
    scan: TriggerScan,
    current_state: EmotionalState,
    profile: PersonaProfile,
    round_number: Any,
    rng: RandomSource,
    config: EngineConfig,
) -> TransitionDecision:
    """Decide the next state for one side.

    Args:
        scan: Triggers detected in the opponent's text.
        current_state: State held before this update.
        profile: Persona profile of the side being updated.
        round_number: Current 1-based round.
        rng: Source for the cooldown roll.
        config: Engine thresholds.

    Returns:
        TransitionDecision with the new state and how it was reached.
    """
    progression = profile.state_progression

    if scan.dominant is not None and scan.max_strength > config.activation_threshold:
        strength = effective_strength(
            scan.max_strength, progression, round_number, config.round_escalation_step
        )
        return TransitionDecision(
            state=target_state(scan.dominant, strength),
            kind="escalation",
            effective_strength=strength,
        )

    if not scan.fired:
        if current_state == EmotionalState.NEUTRAL:
            return TransitionDecision(state=current_state, kind="hold")
        roll = rng.random()
        cooled = roll < progression.cooldown_rate
        logger.debug(
            "Cooldown roll",
            state=current_state.value,
            roll=round(roll, 3),
            cooldown_rate=progression.cooldown_rate,
            cooled=cooled,
        )
        if cooled:
            return TransitionDecision(state=EmotionalState.NEUTRAL, kind="cooldown")
        return TransitionDecision(state=current_state, kind="hold")

    # Weak triggers are ignored and do not fall through to cooldown.
    return TransitionDecision(state=current_state, kind="hold")


__all__ = [
    "TransitionRule",
    "TRANSITION_TABLE",
    "FALLBACK_RULE",
    "TransitionDecision",
    "round_multiplier",
    "effective_strength",
    "target_state",
    "next_state",
]
