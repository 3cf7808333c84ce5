"""
Emotional states and how each one shapes generation.

Every state carries a base sampling temperature, a set of style hints, a
response-length hint and the instructional sentences appended to a
debater's prompt. Instruction sets exist per language and must stay in
parity: the same sentences, in the same order, in every language.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping


class EmotionalState(str, Enum):
    """Emotional state of one debate side.

    Inherits from ``str`` so states compare equal to their plain names::

        assert EmotionalState.ENGAGED == "engaged"
    """

    NEUTRAL = "neutral"
    ENGAGED = "engaged"
    FRUSTRATED = "frustrated"
    CONFIDENT = "confident"
    DEFENSIVE = "defensive"
    PASSIONATE = "passionate"


def parse_state(value: Any) -> EmotionalState:
    """Coerce a state name (any case) or member to an EmotionalState.

    Unknown values resolve to NEUTRAL.
    """
    if isinstance(value, EmotionalState):
        return value
    if isinstance(value, str):
        try:
            return EmotionalState(value.strip().lower())
        except ValueError:
            return EmotionalState.NEUTRAL
    return EmotionalState.NEUTRAL


@dataclass(frozen=True)
class StateModifier:
    """Generation parameters attached to an emotional state.

    Attributes:
        temperature: Base sampling temperature before persona intensity.
        style_modifiers: Short style hints for downstream formatting.
        response_length: "terse", "normal" or "extended".
        instructions: Language code -> sentences appended to the prompt.
    """

    temperature: float
    style_modifiers: tuple[str, ...] = ()
    response_length: str = "normal"
    instructions: Mapping[str, tuple[str, ...]] = field(default_factory=dict)

    def instructions_for(self, language: Any) -> tuple[str, ...]:
        """Instructions in ``language``; unknown or non-string codes get English."""
        if isinstance(language, str) and language in self.instructions:
            return self.instructions[language]
        return self.instructions.get("en", ())


STATE_MODIFIERS: dict[EmotionalState, StateModifier] = {
    EmotionalState.NEUTRAL: StateModifier(
        temperature=0.8,
        response_length="normal",
        instructions={"en": (), "ro": ()},
    ),
    EmotionalState.ENGAGED: StateModifier(
        temperature=0.85,
        style_modifiers=("more_examples", "deeper_analysis", "thoughtful_connections"),
        response_length="extended",
        instructions={
            "en": (
                "Show genuine intellectual curiosity about this topic.",
                "Provide specific examples or analogies to illustrate your points.",
                "Build thoughtfully on the previous arguments.",
            ),
            "ro": (
                "Arată curiozitate intelectuală genuină despre acest subiect.",
                "Oferă exemple specifice sau analogii pentru a-ți ilustra punctele.",
                "Construiește în mod gânditor asupra argumentelor precedente.",
            ),
        },
    ),
    EmotionalState.FRUSTRATED: StateModifier(
        temperature=0.9,
        style_modifiers=("shorter_sentences", "rhetorical_questions", "mild_sarcasm"),
        response_length="terse",
        instructions={
            "en": (
                "You are somewhat frustrated with the quality of the opposing argument.",
                "Use shorter, more direct sentences.",
                "Include a pointed rhetorical question or mild skepticism.",
                "Avoid being overly polite - be more direct.",
            ),
            "ro": (
                "Ești oarecum frustrat de calitatea argumentului opus.",
                "Folosește propoziții mai scurte și mai directe.",
                "Include o întrebare retorică sau un scepticism ușor.",
                "Evită să fii prea politicos - fii mai direct.",
            ),
        },
    ),
    EmotionalState.CONFIDENT: StateModifier(
        temperature=0.75,
        style_modifiers=("bold_claims", "direct_refutation", "authoritative_tone"),
        response_length="normal",
        instructions={
            "en": (
                "You feel very confident about your position.",
                "Make bold, clear statements without hedging.",
                "Directly refute weak points in the opposing argument.",
                "Use an authoritative, assured tone.",
            ),
            "ro": (
                "Te simți foarte încrezător în poziția ta.",
                "Fă declarații îndrăznețe și clare fără ezitare.",
                "Refută direct punctele slabe din argumentul opus.",
                "Folosește un ton autoritar și sigur.",
            ),
        },
    ),
    EmotionalState.DEFENSIVE: StateModifier(
        temperature=0.85,
        style_modifiers=("hedging", "clarifications", "emphasis_on_misunderstanding"),
        response_length="extended",
        instructions={
            "en": (
                "You feel the need to defend your position more carefully.",
                "Clarify any potential misunderstandings.",
                "Address counterarguments preemptively.",
                "Use qualifying language where appropriate.",
            ),
            "ro": (
                "Simți nevoia să-ți aperi poziția mai atent.",
                "Clarifică orice neînțelegeri potențiale.",
                "Abordează contraargumentele în mod preventiv.",
                "Folosește limbaj calificat acolo unde este cazul.",
            ),
        },
    ),
    EmotionalState.PASSIONATE: StateModifier(
        temperature=0.88,
        style_modifiers=("personal_anecdotes", "emphatic_language", "moral_appeals"),
        response_length="extended",
        instructions={
            "en": (
                "You feel deeply passionate about this issue.",
                "Use more emphatic, emotionally resonant language.",
                "Appeal to values and principles where relevant.",
                "Show the personal stakes or broader implications.",
            ),
            "ro": (
                "Te simți profund pasionat de această problemă.",
                "Folosește un limbaj mai emfatic și rezonant emoțional.",
                "Fă apel la valori și principii acolo unde este relevant.",
                "Arată miza personală sau implicațiile mai largi.",
            ),
        },
    ),
}


def get_state_modifier(state: Any) -> StateModifier:
    """Modifier for ``state``; unknown states use the neutral modifier."""
    return STATE_MODIFIERS[parse_state(state)]


__all__ = [
    "EmotionalState",
    "StateModifier",
    "STATE_MODIFIERS",
    "parse_state",
    "get_state_modifier",
]
