"""
Argument impact analysis.

Combines trigger detection and the transition policy into a single
Analysis of how an opponent's argument affects one persona.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from picksides.config import EngineConfig
from picksides.emotions.profiles import PersonaProfile
from picksides.emotions.states import EmotionalState, parse_state
from picksides.emotions.transitions import next_state
from picksides.emotions.triggers import (
    TRIGGER_CATEGORIES,
    DetectedTrigger,
    normalize_text,
    scan_triggers,
)
from picksides.protocols import RandomSource
from picksides.serialization import SerializableMixin

NO_TEXT_REASONING = "No opponent text to analyze"


@dataclass(frozen=True)
class Analysis(SerializableMixin):
    """Impact of one opponent argument on one persona.

    Attributes:
        new_state: Recommended state after the argument.
        confidence: Dominant trigger strength, capped at 1.0.
        triggers: Detected triggers sorted by descending strength.
        dominant_trigger: Category of the strongest trigger, if any.
        max_trigger_strength: Strength of the dominant trigger.
        reasoning: Human-readable explanation.
        transition: "escalation", "cooldown", "hold" or "no_text".
        effective_strength: Escalated strength used for state mapping.
    """

    new_state: EmotionalState
    confidence: float
    triggers: tuple[DetectedTrigger, ...] = ()
    dominant_trigger: Optional[str] = None
    max_trigger_strength: float = 0.0
    reasoning: str = ""
    transition: str = "hold"
    effective_strength: Optional[float] = None

    @property
    def trigger_categories(self) -> list[str]:
        return [t.category for t in self.triggers]


def analyze_argument(
    opponent_text: Any,
    current_state: Any,
    profile: PersonaProfile,
    round_number: Any,
    rng: RandomSource,
    config: Optional[EngineConfig] = None,
) -> Analysis:
    """Analyze an opponent's argument for a persona.

    Missing or non-string text is not an error: it yields a zero-confidence
    neutral analysis.

    Args:
        opponent_text: Opponent's previous-round argument.
        current_state: State held before this argument (name or member).
        profile: Persona profile of the side being analyzed.
        round_number: Current 1-based round.
        rng: Source for the cooldown roll.
        config: Engine thresholds (defaults to EngineConfig()).

    Returns:
        Analysis with the recommended next state.
    """
    config = config or EngineConfig()

    if normalize_text(opponent_text) is None:
        return Analysis(
            new_state=EmotionalState.NEUTRAL,
            confidence=0.0,
            reasoning=NO_TEXT_REASONING,
            transition="no_text",
        )

    state = parse_state(current_state)
    scan = scan_triggers(
        opponent_text,
        profile,
        categories=TRIGGER_CATEGORIES,
        default_sensitivity=config.default_sensitivity,
    )
    decision = next_state(scan, state, profile, round_number, rng, config)

    if scan.fired:
        reasoning = (
            f"Detected {scan.dominant or 'none'} "
            f"(strength: {scan.max_strength:.2f}) → {decision.state.value}"
        )
    elif decision.kind == "cooldown":
        reasoning = (
            f"No significant triggers detected, cooling down from {state.value} to neutral"
        )
    else:
        reasoning = f"No significant triggers detected, maintaining {state.value}"

    return Analysis(
        new_state=decision.state,
        confidence=min(scan.max_strength, 1.0),
        triggers=scan.triggers,
        dominant_trigger=scan.dominant,
        max_trigger_strength=scan.max_strength,
        reasoning=reasoning,
        transition=decision.kind,
        effective_strength=decision.effective_strength,
    )


__all__ = [
    "NO_TEXT_REASONING",
    "Analysis",
    "analyze_argument",
]
