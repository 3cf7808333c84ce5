"""Prompt templates for generated debate rounds."""

from __future__ import annotations

from typing import Optional, Sequence

from picksides.debate.models import DebateRound

STANCES = {"pro": "FOR", "con": "AGAINST"}

OPENING_TEMPLATE = (
    'You are arguing {stance} the position: "{topic}". {persona}'
    "Write a compelling opening statement in exactly {word_limit} words or less. "
    "Be persuasive, factual, and clear.{language}"
)

COUNTER_TEMPLATE = (
    'You are arguing {stance}: "{topic}". {persona}'
    'The opposing side said: "{opponent}". '
    "Write a counter-argument in exactly {word_limit} words or less that addresses "
    "their points while strengthening your position.{language}"
)

CLOSING_TEMPLATE = (
    'You are arguing {stance}: "{topic}". {persona}'
    "Based on this debate history: {history}. "
    "Write a powerful closing statement in exactly {word_limit} words or less.{language}"
)

LANGUAGE_DIRECTIVES = {
    "en": "",
    "ro": " Respond in Romanian.",
}


def round_kind(round_number: int, total_rounds: int) -> str:
    """Kind of a round: opening first, closing last, counter in between."""
    if round_number <= 1:
        return "opening"
    if round_number >= total_rounds:
        return "closing"
    return "counter"


def format_history(rounds: Sequence[DebateRound]) -> str:
    parts = []
    for r in rounds:
        label = r.kind.capitalize()
        parts.append(f'{label} Pro: "{r.pro}"')
        parts.append(f'{label} Con: "{r.con}"')
    return ", ".join(parts)


def build_round_prompt(
    side: str,
    topic: str,
    kind: str,
    previous_rounds: Sequence[DebateRound],
    persona: Optional[str] = None,
    word_limit: int = 75,
    language: str = "en",
) -> str:
    """Base prompt for one side's argument, before emotional modulation.

    Args:
        side: "pro" or "con".
        topic: Debate motion.
        kind: "opening", "counter" or "closing".
        previous_rounds: Rounds already generated, oldest first.
        persona: Persona whose voice the argument should take.
        word_limit: Word limit stated in the prompt.
        language: Language code of the debate.
    """
    fields = {
        "stance": STANCES[side],
        "topic": topic,
        "persona": f"Speak as {persona}, in their voice and style. " if persona else "",
        "word_limit": word_limit,
        "language": LANGUAGE_DIRECTIVES.get(language, ""),
    }

    if kind == "opening" or not previous_rounds:
        return OPENING_TEMPLATE.format(**fields)
    if kind == "closing":
        return CLOSING_TEMPLATE.format(history=format_history(previous_rounds), **fields)

    last = previous_rounds[-1]
    opponent = last.con if side == "pro" else last.pro
    return COUNTER_TEMPLATE.format(opponent=opponent, **fields)


__all__ = [
    "STANCES",
    "LANGUAGE_DIRECTIVES",
    "round_kind",
    "format_history",
    "build_round_prompt",
]
