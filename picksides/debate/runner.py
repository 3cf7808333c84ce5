"""
Debate round runner.

Generates a multi-round pro/con debate through any CompletionClient,
updating each side's emotional state between rounds and modulating the
next prompts with it.

Per round N:
1. For N > 1, update each side from the opponent's round N - 1 argument.
2. Build both base prompts and apply each side's emotional modulation.
3. Await both completions concurrently.

Usage:
    runner = DebateRunner(client)
    transcript = await runner.run("Cities should ban cars", "Socrates", "Ayn Rand")
"""

from __future__ import annotations

import asyncio
import uuid
from typing import Optional

from picksides.config import DebateConfig
from picksides.debate.models import DebateRound, DebateTranscript
from picksides.debate.prompts import build_round_prompt, round_kind
from picksides.emotions.engine import EmotionalStateEngine
from picksides.emotions.session import EmotionalSession, SideState
from picksides.exceptions import (
    DebateGenerationError,
    InputValidationError,
    RoundLimitExceededError,
)
from picksides.logging_config import LogContext, get_logger, log_function
from picksides.protocols import CompletionClient

logger = get_logger(__name__)


class DebateRunner:
    """Runs debates against a completion service.

    Args:
        client: Completion service used for every argument.
        engine: Emotional state engine (defaults to built-in profiles).
        config: Round count, word limit, sampling and language settings.
    """

    def __init__(
        self,
        client: CompletionClient,
        engine: Optional[EmotionalStateEngine] = None,
        config: Optional[DebateConfig] = None,
    ):
        self.client = client
        self.engine = engine or EmotionalStateEngine()
        self.config = config or DebateConfig()

    @log_function(level="INFO")
    async def run(
        self,
        topic: str,
        pro_persona: Optional[str] = None,
        con_persona: Optional[str] = None,
        debate_id: Optional[str] = None,
    ) -> DebateTranscript:
        """Generate every round of a debate.

        Raises:
            InputValidationError: If the topic is empty or not a string.
            RoundLimitExceededError: If configured rounds exceed max_rounds.
            DebateGenerationError: If the completion service fails.
        """
        if not isinstance(topic, str) or not topic.strip():
            raise InputValidationError("topic", "must be a non-empty string")
        if self.config.rounds > self.config.max_rounds:
            raise RoundLimitExceededError(self.config.max_rounds, self.config.rounds)

        topic = topic.strip()
        transcript = DebateTranscript(
            debate_id=debate_id or uuid.uuid4().hex[:12],
            topic=topic,
            pro_persona=pro_persona,
            con_persona=con_persona,
            language=self.config.language,
        )
        session = self.engine.initialize(pro_persona, con_persona)

        with LogContext(debate_id=transcript.debate_id):
            logger.info(
                "Debate generation started",
                rounds=self.config.rounds,
                pro_persona=pro_persona,
                con_persona=con_persona,
            )
            for number in range(1, self.config.rounds + 1):
                debate_round = await self._run_round(number, topic, session, transcript)
                transcript.rounds.append(debate_round)
            logger.info("Debate generation finished", rounds=len(transcript.rounds))

        return transcript

    async def _run_round(
        self,
        number: int,
        topic: str,
        session: EmotionalSession,
        transcript: DebateTranscript,
    ) -> DebateRound:
        kind = round_kind(number, self.config.rounds)

        if number > 1:
            previous = transcript.rounds[-1]
            for side, opponent_text in (("pro", previous.con), ("con", previous.pro)):
                summary = self.engine.update(session, side, opponent_text, number)
                if summary is not None:
                    transcript.emotional_updates.append(summary)

        pro_prompt, pro_temperature = self._prepare(
            number, kind, "pro", topic, session.pro, transcript
        )
        con_prompt, con_temperature = self._prepare(
            number, kind, "con", topic, session.con, transcript
        )

        with LogContext(round=number):
            results = await asyncio.gather(
                self._complete(number, "pro", pro_prompt, pro_temperature),
                self._complete(number, "con", con_prompt, con_temperature),
                return_exceptions=True,
            )

        # Both completions have settled; report the pro side's failure first.
        for result in results:
            if isinstance(result, BaseException):
                raise result
        pro_text, con_text = results

        return DebateRound(
            number=number,
            kind=kind,
            pro=pro_text,
            con=con_text,
            pro_state=session.pro.current_state,
            con_state=session.con.current_state,
            pro_temperature=pro_temperature,
            con_temperature=con_temperature,
        )

    def _prepare(
        self,
        number: int,
        kind: str,
        side: str,
        topic: str,
        side_state: SideState,
        transcript: DebateTranscript,
    ) -> tuple[str, float]:
        """Base prompt plus modulation; round 1 is generated unmodulated."""
        prompt = build_round_prompt(
            side,
            topic,
            kind,
            transcript.rounds,
            persona=side_state.persona,
            word_limit=self.config.word_limit,
            language=self.config.language,
        )
        if number == 1:
            return prompt, self.config.base_temperature

        modulation = self.engine.modulate(prompt, side_state, language=self.config.language)
        return modulation.enhanced_prompt, modulation.temperature

    async def _complete(self, number: int, side: str, prompt: str, temperature: float) -> str:
        try:
            text = await self.client.complete(
                prompt,
                temperature=temperature,
                max_tokens=self.config.max_tokens,
            )
        except Exception as e:
            logger.error("Completion failed", exc_info=True, side=side, round=number)
            raise DebateGenerationError(number, side, str(e) or type(e).__name__) from e

        if not isinstance(text, str):
            raise DebateGenerationError(
                number, side, f"completion returned {type(text).__name__}, expected str"
            )
        return text.strip()


__all__ = ["DebateRunner"]
