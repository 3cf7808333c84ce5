"""Data types for generated debates."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional

from picksides.emotions.session import UpdateSummary
from picksides.emotions.states import EmotionalState
from picksides.serialization import SerializableMixin


@dataclass
class DebateRound(SerializableMixin):
    """Both sides' arguments for one round, with the state each spoke in."""

    number: int
    kind: str  # "opening", "counter" or "closing"
    pro: str
    con: str
    pro_state: EmotionalState = EmotionalState.NEUTRAL
    con_state: EmotionalState = EmotionalState.NEUTRAL
    pro_temperature: float = 0.8
    con_temperature: float = 0.8


@dataclass
class DebateTranscript(SerializableMixin):
    """A fully generated debate, ready for the caller to persist."""

    debate_id: str
    topic: str
    pro_persona: Optional[str]
    con_persona: Optional[str]
    language: str = "en"
    rounds: list[DebateRound] = field(default_factory=list)
    emotional_updates: list[UpdateSummary] = field(default_factory=list)
    generated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def round(self, number: int) -> Optional[DebateRound]:
        for r in self.rounds:
            if r.number == number:
                return r
        return None


__all__ = ["DebateRound", "DebateTranscript"]
