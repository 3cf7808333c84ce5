"""
Prompt and sampling modulation.

Turns a side's emotional state into an "EMOTIONAL CONTEXT" addendum for
its generation prompt and a sampling temperature scaled by the persona's
maximum intensity.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from picksides.config import EngineConfig
from picksides.emotions.profiles import PersonaProfile
from picksides.emotions.states import EmotionalState, get_state_modifier, parse_state
from picksides.serialization import SerializableMixin

EMOTIONAL_CONTEXT_HEADER = "EMOTIONAL CONTEXT:"


@dataclass(frozen=True)
class ModulationDebug(SerializableMixin):
    """Observability data for one modulation; never used for control flow."""

    original_state: EmotionalState
    applied_instructions: tuple[str, ...]
    temperature_adjustment: float
    intensity_modifier: float
    persona_temperament: str


@dataclass(frozen=True)
class ModulationResult(SerializableMixin):
    """Prompt and sampling parameters for one generation.

    Attributes:
        enhanced_prompt: Base prompt plus the emotional context section.
        prompt_addendum: The appended section alone ("" when none applies).
        temperature: Sampling temperature after intensity scaling and clamp.
        style_modifiers: Style hints of the active state.
        response_length: Length hint of the active state.
        debug: Applied instructions, intensity multiplier and temperament.
    """

    enhanced_prompt: str
    prompt_addendum: str
    temperature: float
    style_modifiers: tuple[str, ...] = ()
    response_length: str = "normal"
    debug: Optional[ModulationDebug] = field(default=None, compare=False)


def build_emotional_context(instructions: tuple[str, ...]) -> str:
    """Delimited prompt section for ``instructions`` ("" when empty)."""
    if not instructions:
        return ""
    return f"\n\n{EMOTIONAL_CONTEXT_HEADER} {' '.join(instructions)}\n"


def apply_emotional_state(
    base_prompt: str,
    state: Any,
    profile: PersonaProfile,
    language: Optional[str] = None,
    config: Optional[EngineConfig] = None,
) -> ModulationResult:
    """Modulate a prompt and temperature for an emotional state.

    Temperature is ``base_temperature(state) * min(max_intensity, 1.0)``,
    clamped to ``config.max_temperature``. Unknown states behave like
    neutral; unknown languages use English instructions and a missing or
    non-string language uses ``config.default_language``.

    Args:
        base_prompt: Caller's prompt to augment.
        state: Emotional state (member or name).
        profile: Persona profile supplying intensity and temperament.
        language: "en" or "ro"; defaults to ``config.default_language``.
        config: Engine configuration (defaults to EngineConfig()).

    Returns:
        ModulationResult for the next generation.
    """
    config = config or EngineConfig()
    resolved = parse_state(state)
    modifier = get_state_modifier(resolved)
    if not isinstance(language, str) or not language:
        language = config.default_language
    instructions = modifier.instructions_for(language)

    addendum = build_emotional_context(instructions)
    intensity = min(profile.state_progression.max_intensity, 1.0)
    temperature = min(modifier.temperature * intensity, config.max_temperature)

    return ModulationResult(
        enhanced_prompt=f"{base_prompt or ''}{addendum}",
        prompt_addendum=addendum,
        temperature=temperature,
        style_modifiers=modifier.style_modifiers,
        response_length=modifier.response_length,
        debug=ModulationDebug(
            original_state=resolved,
            applied_instructions=instructions,
            temperature_adjustment=temperature,
            intensity_modifier=intensity,
            persona_temperament=profile.base_temperament,
        ),
    )


__all__ = [
    "EMOTIONAL_CONTEXT_HEADER",
    "ModulationDebug",
    "ModulationResult",
    "build_emotional_context",
    "apply_emotional_state",
]
