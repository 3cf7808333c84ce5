"""Tests for debate prompts and the async round runner."""

import asyncio
from unittest.mock import AsyncMock

import pytest

from picksides.config import DebateConfig
from picksides.debate.models import DebateRound
from picksides.debate.prompts import build_round_prompt, format_history, round_kind
from picksides.debate.runner import DebateRunner
from picksides.emotions.engine import EmotionalStateEngine
from picksides.emotions.states import EmotionalState
from picksides.exceptions import (
    DebateGenerationError,
    InputValidationError,
    RoundLimitExceededError,
)
from picksides.protocols import CompletionClient

TOPIC = "Cities should ban cars"
EVIDENCE_TEXT = (
    "Research shows, studies indicate, data suggests and statistics show empirical results."
)


class StanceClient:
    """Replies by stance so results do not depend on scheduling order."""

    def __init__(self, pro_reply="Cars harm cities.", con_reply=EVIDENCE_TEXT):
        self.pro_reply = pro_reply
        self.con_reply = con_reply
        self.calls = []

    async def complete(self, prompt, *, temperature, max_tokens):
        side = "con" if "arguing AGAINST" in prompt else "pro"
        self.calls.append(
            {"side": side, "prompt": prompt, "temperature": temperature, "max_tokens": max_tokens}
        )
        return f"  {self.pro_reply if side == 'pro' else self.con_reply}  "

    def for_side(self, side):
        return [c for c in self.calls if c["side"] == side]


@pytest.fixture
def runner_engine(registry_with, never_cool):
    return EmotionalStateEngine(profiles=registry_with, rng=never_cool)


# ============================================================================
# Prompts
# ============================================================================


class TestRoundKind:
    """Tests for round_kind."""

    @pytest.mark.parametrize(
        "number,total,expected",
        [(1, 3, "opening"), (2, 3, "counter"), (3, 3, "closing"), (1, 1, "opening"), (2, 2, "closing")],
    )
    def test_kinds(self, number, total, expected):
        assert round_kind(number, total) == expected


class TestBuildRoundPrompt:
    """Tests for build_round_prompt."""

    def test_opening(self):
        prompt = build_round_prompt("pro", TOPIC, "opening", [], persona="Socrates")
        assert prompt.startswith(f'You are arguing FOR the position: "{TOPIC}".')
        assert "Speak as Socrates" in prompt
        assert "75 words or less" in prompt

    def test_counter_quotes_opponent(self):
        previous = [DebateRound(number=1, kind="opening", pro="Pro said", con="Con said")]
        prompt = build_round_prompt("con", TOPIC, "counter", previous, word_limit=50)
        assert prompt.startswith(f'You are arguing AGAINST: "{TOPIC}".')
        assert 'The opposing side said: "Pro said".' in prompt
        assert "50 words or less" in prompt

    def test_closing_includes_history(self):
        previous = [
            DebateRound(number=1, kind="opening", pro="P1", con="C1"),
            DebateRound(number=2, kind="counter", pro="P2", con="C2"),
        ]
        prompt = build_round_prompt("pro", TOPIC, "closing", previous)
        assert format_history(previous) in prompt
        assert 'Opening Pro: "P1", Opening Con: "C1", Counter Pro: "P2"' in prompt

    def test_romanian_directive(self):
        prompt = build_round_prompt("pro", TOPIC, "opening", [], language="ro")
        assert prompt.endswith("Respond in Romanian.")


# ============================================================================
# Runner
# ============================================================================


class TestDebateRunner:
    """Tests for DebateRunner.run."""

    def test_stance_client_satisfies_protocol(self):
        assert isinstance(StanceClient(), CompletionClient)

    @pytest.mark.asyncio
    async def test_generates_every_round(self, runner_engine):
        client = StanceClient()
        runner = DebateRunner(client, engine=runner_engine)

        transcript = await runner.run(TOPIC, "Evidence Lover", "Socrates", debate_id="d1")

        assert transcript.debate_id == "d1"
        assert [r.kind for r in transcript.rounds] == ["opening", "counter", "closing"]
        assert len(client.calls) == 6
        assert transcript.round(1).pro == "Cars harm cities."
        assert transcript.round(1).con == EVIDENCE_TEXT
        assert all(c["max_tokens"] == 150 for c in client.calls)

    @pytest.mark.asyncio
    async def test_first_round_unmodulated(self, runner_engine):
        client = StanceClient()
        transcript = await DebateRunner(client, engine=runner_engine).run(
            TOPIC, "Evidence Lover", "Socrates"
        )

        first = transcript.round(1)
        assert first.pro_temperature == 0.8
        assert first.con_temperature == 0.8
        assert first.pro_state == EmotionalState.NEUTRAL
        for call in client.calls[:2]:
            assert "EMOTIONAL CONTEXT" not in call["prompt"]

    @pytest.mark.asyncio
    async def test_states_feed_later_prompts(self, runner_engine):
        """Opponent evidence engages the pro side from round 2 on."""
        client = StanceClient()
        transcript = await DebateRunner(client, engine=runner_engine).run(
            TOPIC, "Evidence Lover", "Socrates"
        )

        second = transcript.round(2)
        assert second.pro_state == EmotionalState.ENGAGED
        assert second.con_state == EmotionalState.NEUTRAL
        assert second.pro_temperature == pytest.approx(0.85 * 0.8)

        pro_prompts = [c["prompt"] for c in client.for_side("pro")]
        assert "EMOTIONAL CONTEXT: Show genuine intellectual curiosity" in pro_prompts[1]
        assert 'The opposing side said: "' + EVIDENCE_TEXT + '"' in pro_prompts[1]

    @pytest.mark.asyncio
    async def test_emotional_updates_recorded(self, runner_engine):
        transcript = await DebateRunner(client=StanceClient(), engine=runner_engine).run(
            TOPIC, "Evidence Lover", "Socrates"
        )
        updates = transcript.emotional_updates
        assert len(updates) == 4
        assert [u.side for u in updates] == ["pro", "con", "pro", "con"]
        assert updates[0].new_state == EmotionalState.ENGAGED

    @pytest.mark.asyncio
    async def test_single_round(self, runner_engine):
        client = StanceClient()
        runner = DebateRunner(client, engine=runner_engine, config=DebateConfig(rounds=1))
        transcript = await runner.run(TOPIC)
        assert len(transcript.rounds) == 1
        assert transcript.emotional_updates == []

    @pytest.mark.asyncio
    async def test_romanian_debate(self, runner_engine):
        client = StanceClient()
        runner = DebateRunner(client, engine=runner_engine, config=DebateConfig(language="ro"))
        transcript = await runner.run(TOPIC, "Evidence Lover", "Socrate")
        assert transcript.language == "ro"
        later = client.for_side("pro")[1]["prompt"]
        assert "Arată curiozitate intelectuală genuină" in later
        assert "Respond in Romanian." in later

    @pytest.mark.asyncio
    async def test_transcript_to_dict(self, runner_engine):
        transcript = await DebateRunner(StanceClient(), engine=runner_engine).run(TOPIC)
        data = transcript.to_dict()
        assert data["topic"] == TOPIC
        assert data["rounds"][1]["kind"] == "counter"
        assert isinstance(data["generated_at"], str)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("topic", ["", "   ", None])
    async def test_rejects_empty_topic(self, topic, runner_engine):
        client = AsyncMock()
        with pytest.raises(InputValidationError, match="Invalid topic"):
            await DebateRunner(client, engine=runner_engine).run(topic)
        client.complete.assert_not_called()

    @pytest.mark.asyncio
    async def test_round_limit(self, runner_engine):
        config = DebateConfig(rounds=5, max_rounds=3)
        with pytest.raises(RoundLimitExceededError) as exc_info:
            await DebateRunner(AsyncMock(), engine=runner_engine, config=config).run(TOPIC)
        assert exc_info.value.current_round == 5

    @pytest.mark.asyncio
    async def test_client_failure_wrapped(self, runner_engine):
        client = AsyncMock()
        client.complete.side_effect = ConnectionError("service down")
        with pytest.raises(DebateGenerationError) as exc_info:
            await DebateRunner(client, engine=runner_engine).run(TOPIC)
        assert exc_info.value.round_number == 1
        assert "service down" in exc_info.value.reason
        assert isinstance(exc_info.value.__cause__, ConnectionError)

    @pytest.mark.asyncio
    async def test_failure_waits_for_other_side(self, runner_engine):
        """When one side fails, the other side's completion still runs to the end."""
        finished = []

        class OneSideDown:
            async def complete(self, prompt, *, temperature, max_tokens):
                if "arguing AGAINST" not in prompt:
                    raise ConnectionError("pro backend down")
                for _ in range(5):
                    await asyncio.sleep(0)
                finished.append("con")
                return "Con argument."

        with pytest.raises(DebateGenerationError) as exc_info:
            await DebateRunner(OneSideDown(), engine=runner_engine).run(TOPIC)

        assert exc_info.value.side == "pro"
        assert finished == ["con"]

    @pytest.mark.asyncio
    async def test_con_failure_reported(self, runner_engine):
        client = StanceClient()

        async def complete(prompt, *, temperature, max_tokens):
            if "arguing AGAINST" in prompt:
                raise TimeoutError("slow")
            return "Pro argument."

        client.complete = complete
        with pytest.raises(DebateGenerationError) as exc_info:
            await DebateRunner(client, engine=runner_engine).run(TOPIC)
        assert exc_info.value.side == "con"

    @pytest.mark.asyncio
    async def test_non_string_completion(self, runner_engine):
        client = AsyncMock()
        client.complete.return_value = {"text": "nope"}
        with pytest.raises(DebateGenerationError, match="expected str"):
            await DebateRunner(client, engine=runner_engine).run(TOPIC)

    @pytest.mark.asyncio
    async def test_uses_async_mock_client(self, runner_engine):
        client = AsyncMock()
        client.complete.return_value = "An argument."
        config = DebateConfig(rounds=2, max_tokens=90, base_temperature=0.7)
        transcript = await DebateRunner(client, engine=runner_engine, config=config).run(TOPIC)

        assert client.complete.await_count == 4
        first_kwargs = client.complete.await_args_list[0].kwargs
        assert first_kwargs == {"temperature": 0.7, "max_tokens": 90}
        assert transcript.round(2).kind == "closing"
        assert len(transcript.debate_id) == 12

    @pytest.mark.asyncio
    async def test_runs_with_fake_client(self, fake_client):
        transcript = await DebateRunner(fake_client).run(TOPIC, "Nietzsche", "Ayn Rand")
        assert len(fake_client.calls) == 6
        assert {r.pro for r in transcript.rounds} | {r.con for r in transcript.rounds} == {
            f"argument {n}" for n in range(1, 7)
        }
