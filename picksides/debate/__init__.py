"""
Debate generation around the emotional state engine.

The runner is vendor-neutral: it consumes any CompletionClient and leaves
persistence of the resulting transcript to the caller.
"""

from picksides.debate.models import DebateRound, DebateTranscript
from picksides.debate.prompts import build_round_prompt, round_kind
from picksides.debate.runner import DebateRunner

__all__ = [
    "DebateRound",
    "DebateTranscript",
    "DebateRunner",
    "build_round_prompt",
    "round_kind",
]
