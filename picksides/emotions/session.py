"""
Per-debate emotional session state.

A session holds one state machine per debate side. It is created when a
debate starts, mutated once per side per round after the first, and
discarded when generation finishes. It is never persisted.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar, Literal, Optional

from picksides.emotions.analyzer import Analysis
from picksides.emotions.states import EmotionalState
from picksides.serialization import SerializableMixin

Side = Literal["pro", "con"]
SIDES: tuple[str, ...] = ("pro", "con")


@dataclass
class SideState(SerializableMixin):
    """Emotional state of one side.

    Invariants: ``state_history`` holds at most ``history_limit`` entries
    and its last entry is ``current_state``.
    """

    persona: Optional[str] = None
    current_state: EmotionalState = EmotionalState.NEUTRAL
    state_history: list[EmotionalState] = field(
        default_factory=lambda: [EmotionalState.NEUTRAL]
    )
    last_analysis: Optional[Analysis] = None
    history_limit: int = 5

    _exclude_fields: ClassVar[tuple[str, ...]] = ("history_limit",)

    def record(self, state: EmotionalState, analysis: Optional[Analysis] = None) -> EmotionalState:
        """Move to ``state``, evicting the oldest history entries.

        Returns:
            The state held before this call.
        """
        previous = self.current_state
        self.current_state = state
        self.state_history.append(state)
        if len(self.state_history) > self.history_limit:
            del self.state_history[: len(self.state_history) - self.history_limit]
        self.last_analysis = analysis
        return previous


@dataclass
class EmotionalSession(SerializableMixin):
    """Both sides' emotional state for one debate."""

    pro: SideState
    con: SideState

    @classmethod
    def initialize(
        cls,
        pro_persona: Optional[str],
        con_persona: Optional[str],
        history_limit: int = 5,
    ) -> EmotionalSession:
        """Fresh session with both sides neutral."""
        return cls(
            pro=SideState(persona=pro_persona, history_limit=history_limit),
            con=SideState(persona=con_persona, history_limit=history_limit),
        )

    def side(self, name: str) -> Optional[SideState]:
        """State for ``name`` ("pro" or "con"), or None for any other value."""
        if name == "pro":
            return self.pro
        if name == "con":
            return self.con
        return None


@dataclass(frozen=True)
class UpdateSummary(SerializableMixin):
    """What one state update did, for logging and telemetry."""

    side: str
    previous_state: EmotionalState
    new_state: EmotionalState
    analysis: Analysis
    persona: Optional[str]

    @property
    def changed(self) -> bool:
        return self.previous_state != self.new_state


__all__ = [
    "Side",
    "SIDES",
    "SideState",
    "EmotionalSession",
    "UpdateSummary",
]
