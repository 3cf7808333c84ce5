"""
Emotional state engine.

Facade tying together profiles, trigger analysis, the transition policy,
modulation and per-debate sessions. The engine performs no I/O and holds
no per-debate state itself; every debate owns its own EmotionalSession.

Usage:
    engine = EmotionalStateEngine()
    session = engine.initialize("Socrates", "Nietzsche")

    # After round N (N >= 1) completes, before generating round N + 1:
    engine.update(session, "pro", con_argument, round_number=N + 1)
    engine.update(session, "con", pro_argument, round_number=N + 1)

    result = engine.modulate(base_prompt, session.pro, language="en")
"""

from __future__ import annotations

import random
from typing import Any, Optional

from picksides.config import EngineConfig, get_engine_config
from picksides.emotions.analyzer import Analysis, analyze_argument
from picksides.emotions.modulation import ModulationResult, apply_emotional_state
from picksides.emotions.profiles import PersonaProfile, ProfileRegistry
from picksides.emotions.session import EmotionalSession, SideState, UpdateSummary
from picksides.emotions.states import EmotionalState
from picksides.logging_config import LogContext, get_logger
from picksides.protocols import RandomSource

logger = get_logger(__name__)

# Shared by every engine that is not given its own source.
_PROCESS_RNG = random.Random()


class EmotionalStateEngine:
    """Tracks and applies persona emotional state across debate rounds.

    Args:
        profiles: Persona lookup table (defaults to the built-in profiles).
        rng: Source for cooldown rolls (defaults to a process-wide
            ``random.Random``); inject a seeded source for reproducibility.
        config: Engine thresholds (defaults to get_engine_config()).
    """

    def __init__(
        self,
        profiles: Optional[ProfileRegistry] = None,
        rng: Optional[RandomSource] = None,
        config: Optional[EngineConfig] = None,
    ):
        self.config = config or get_engine_config()
        if profiles is None:
            profiles = ProfileRegistry(default_persona=self.config.default_persona)
        self.profiles = profiles
        self.rng: RandomSource = rng if rng is not None else _PROCESS_RNG

    def profile_for(self, persona: Optional[str]) -> PersonaProfile:
        """Profile for ``persona``, falling back to the default persona."""
        return self.profiles.get(persona)

    def initialize(
        self, pro_persona: Optional[str], con_persona: Optional[str]
    ) -> EmotionalSession:
        """Start a session with both sides neutral."""
        session = EmotionalSession.initialize(
            pro_persona, con_persona, history_limit=self.config.history_limit
        )
        logger.debug(
            "Emotional session initialized",
            pro_persona=pro_persona,
            con_persona=con_persona,
        )
        return session

    def analyze(
        self,
        opponent_text: Any,
        persona: Optional[str],
        current_state: Any = EmotionalState.NEUTRAL,
        round_number: int = 1,
    ) -> Analysis:
        """Analyze an opponent's argument without touching any session."""
        return analyze_argument(
            opponent_text,
            current_state,
            self.profile_for(persona),
            round_number,
            self.rng,
            self.config,
        )

    def update(
        self,
        session: EmotionalSession,
        side: str,
        opponent_text: Any,
        round_number: int,
    ) -> Optional[UpdateSummary]:
        """Update one side from the opponent's previous-round argument.

        Returns:
            UpdateSummary, or None when ``side`` is not "pro" or "con".
        """
        side_state = session.side(side)
        if side_state is None:
            logger.warning("Ignoring emotional update for unknown side", side=str(side))
            return None

        with LogContext(side=side, persona=side_state.persona):
            analysis = self.analyze(
                opponent_text, side_state.persona, side_state.current_state, round_number
            )
            previous = side_state.record(analysis.new_state, analysis)

            logger.debug(
                "Argument analyzed",
                triggers=analysis.trigger_categories,
                reasoning=analysis.reasoning,
            )
            if analysis.new_state != previous:
                logger.info(
                    "Emotional state transition",
                    round=round_number,
                    previous_state=previous.value,
                    new_state=analysis.new_state.value,
                    dominant_trigger=analysis.dominant_trigger,
                    strength=round(analysis.max_trigger_strength, 3),
                    transition=analysis.transition,
                )

        return UpdateSummary(
            side=side,
            previous_state=previous,
            new_state=analysis.new_state,
            analysis=analysis,
            persona=side_state.persona,
        )

    def modulate(
        self,
        base_prompt: str,
        side_state: SideState,
        language: Optional[str] = None,
    ) -> ModulationResult:
        """Apply a side's current state to its next prompt."""
        return self.modulate_state(
            base_prompt, side_state.current_state, side_state.persona, language
        )

    def modulate_state(
        self,
        base_prompt: str,
        state: Any,
        persona: Optional[str],
        language: Optional[str] = None,
    ) -> ModulationResult:
        """Apply an explicit state for ``persona`` to a prompt."""
        return apply_emotional_state(
            base_prompt,
            state,
            self.profile_for(persona),
            language=language,
            config=self.config,
        )


__all__ = ["EmotionalStateEngine"]
