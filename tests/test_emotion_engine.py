"""Tests for the emotional state engine, its sessions and argument analysis."""

import json
import logging

import pytest

from picksides.config import EngineConfig
from picksides.emotions.analyzer import NO_TEXT_REASONING, analyze_argument
from picksides.emotions.engine import EmotionalStateEngine
from picksides.emotions.profiles import BUILTIN_PROFILES, ProfileRegistry
from picksides.emotions.session import EmotionalSession, SideState
from picksides.emotions.states import EmotionalState
from picksides.logging_config import JSONFormatter, LogContext, get_context

FALLACY_TEXT = (
    "That is a strawman and an ad hominem, a false dichotomy, "
    "a slippery slope, circular logic; therefore you lose."
)
EVIDENCE_TEXT = (
    "Research shows, studies indicate, data suggests and statistics show empirical results."
)
ATTACK_TEXT = (
    "You are wrong. You don't understand. Ignorant, stupid, foolish, naive. "
    "Clearly you have no idea."
)
WEAKNESS_TEXT = "Give up, we can't handle it, too difficult, impossible, helpless victim."
PLAIN_TEXT = "Let us consider the facts on the table."


# ============================================================================
# Session State
# ============================================================================


class TestSideState:
    """Tests for per-side state bookkeeping."""

    def test_defaults(self):
        state = SideState(persona="Socrates")
        assert state.current_state == EmotionalState.NEUTRAL
        assert state.state_history == [EmotionalState.NEUTRAL]
        assert state.last_analysis is None

    def test_record_returns_previous(self):
        state = SideState()
        previous = state.record(EmotionalState.ENGAGED)
        assert previous == EmotionalState.NEUTRAL
        assert state.current_state == EmotionalState.ENGAGED
        assert state.state_history == [EmotionalState.NEUTRAL, EmotionalState.ENGAGED]

    def test_history_bounded(self):
        """History keeps only the most recent entries."""
        state = SideState()
        sequence = [EmotionalState.ENGAGED, EmotionalState.FRUSTRATED, EmotionalState.PASSIONATE] * 4
        for s in sequence:
            state.record(s)
        assert len(state.state_history) == 5
        assert state.state_history == sequence[-5:]
        assert state.state_history[-1] == state.current_state

    def test_custom_history_limit(self):
        state = SideState(history_limit=2)
        for s in (EmotionalState.ENGAGED, EmotionalState.CONFIDENT, EmotionalState.DEFENSIVE):
            state.record(s)
        assert state.state_history == [EmotionalState.CONFIDENT, EmotionalState.DEFENSIVE]

    def test_to_dict_excludes_limit(self):
        data = SideState(persona="Nietzsche").to_dict()
        assert data == {
            "persona": "Nietzsche",
            "current_state": "neutral",
            "state_history": ["neutral"],
            "last_analysis": None,
        }


class TestEmotionalSession:
    """Tests for the two-sided session."""

    def test_initialize(self):
        session = EmotionalSession.initialize("Socrates", "Nietzsche", history_limit=3)
        assert session.pro.persona == "Socrates"
        assert session.con.persona == "Nietzsche"
        assert session.pro.history_limit == 3
        assert session.pro is not session.con

    @pytest.mark.parametrize("side", ["judge", "PRO", "", None])
    def test_unknown_side(self, side):
        session = EmotionalSession.initialize(None, None)
        assert session.side(side) is None

    def test_known_sides(self):
        session = EmotionalSession.initialize("A", "B")
        assert session.side("pro") is session.pro
        assert session.side("con") is session.con


# ============================================================================
# Analysis
# ============================================================================


class TestAnalyzeArgument:
    """Tests for analyze_argument."""

    @pytest.mark.parametrize("text", [None, "", 42])
    def test_no_text(self, text, always_cool):
        """Missing text yields a zero-confidence neutral analysis."""
        analysis = analyze_argument(
            text, EmotionalState.FRUSTRATED, BUILTIN_PROFILES["Socrates"], 3, always_cool
        )
        assert analysis.new_state == EmotionalState.NEUTRAL
        assert analysis.confidence == 0.0
        assert analysis.triggers == ()
        assert analysis.reasoning == NO_TEXT_REASONING
        assert analysis.transition == "no_text"
        assert always_cool.calls == 0

    def test_socrates_fallacies_engage(self, never_cool):
        """Socrates facing several fallacies in round 3 becomes engaged."""
        analysis = analyze_argument(
            FALLACY_TEXT, "neutral", BUILTIN_PROFILES["Socrates"], 3, never_cool
        )
        assert analysis.dominant_trigger == "logical_fallacy"
        assert analysis.max_trigger_strength > 0.3
        assert analysis.new_state == EmotionalState.ENGAGED
        assert analysis.effective_strength == pytest.approx(6 / 11 * 0.8 * 0.3 * 1.4)
        assert analysis.reasoning == "Detected logical_fallacy (strength: 0.44) → engaged"

    def test_strong_evidence_engages(self, evidence_profile, never_cool):
        analysis = analyze_argument(EVIDENCE_TEXT, "neutral", evidence_profile, 2, never_cool)
        assert analysis.dominant_trigger == "strong_evidence"
        assert analysis.max_trigger_strength == pytest.approx(0.625)
        assert analysis.new_state == EmotionalState.ENGAGED
        assert analysis.confidence == pytest.approx(0.625)

    def test_personal_attack_escalates_with_rounds(self, evidence_profile, never_cool):
        """Repeated attacks move from defensive to passionate as rounds grow."""
        early = analyze_argument(ATTACK_TEXT, "neutral", evidence_profile, 3, never_cool)
        late = analyze_argument(ATTACK_TEXT, "neutral", evidence_profile, 5, never_cool)
        assert early.new_state == EmotionalState.DEFENSIVE
        assert late.new_state == EmotionalState.PASSIONATE

    def test_unmapped_category_uses_fallback(self, never_cool):
        """Nietzsche reacts to weakness through the fallback rule."""
        analysis = analyze_argument(
            WEAKNESS_TEXT, "neutral", BUILTIN_PROFILES["Nietzsche"], 1, never_cool
        )
        assert analysis.dominant_trigger == "weakness"
        assert analysis.new_state == EmotionalState.ENGAGED

    def test_cooldown_reasoning(self, always_cool):
        analysis = analyze_argument(
            PLAIN_TEXT, "frustrated", BUILTIN_PROFILES["Default AI"], 2, always_cool
        )
        assert analysis.new_state == EmotionalState.NEUTRAL
        assert analysis.transition == "cooldown"
        assert analysis.reasoning == (
            "No significant triggers detected, cooling down from frustrated to neutral"
        )

    def test_maintain_reasoning(self, never_cool):
        analysis = analyze_argument(
            PLAIN_TEXT, "confident", BUILTIN_PROFILES["Default AI"], 2, never_cool
        )
        assert analysis.new_state == EmotionalState.CONFIDENT
        assert analysis.reasoning == "No significant triggers detected, maintaining confident"

    def test_confidence_capped(self, never_cool):
        analysis = analyze_argument(
            EVIDENCE_TEXT, "neutral", BUILTIN_PROFILES["Default AI"], 1, never_cool
        )
        assert 0.0 <= analysis.confidence <= 1.0

    def test_to_dict(self, never_cool):
        data = analyze_argument(
            FALLACY_TEXT, "neutral", BUILTIN_PROFILES["Socrates"], 1, never_cool
        ).to_dict()
        assert data["new_state"] == "engaged"
        assert data["triggers"][0]["category"] == "logical_fallacy"


# ============================================================================
# Engine
# ============================================================================


class TestEngineInit:
    """Tests for engine construction."""

    def test_defaults(self):
        engine = EmotionalStateEngine()
        assert "Socrates" in engine.profiles
        assert engine.config == EngineConfig()

    def test_custom_default_persona(self):
        engine = EmotionalStateEngine(config=EngineConfig(default_persona="Socrates"))
        assert engine.profile_for("Nobody") is BUILTIN_PROFILES["Socrates"]

    def test_unknown_persona_uses_default(self, engine):
        assert engine.profile_for("Unknown Person") is BUILTIN_PROFILES["Default AI"]
        assert engine.profile_for(None) is BUILTIN_PROFILES["Default AI"]

    def test_initialize_uses_history_limit(self):
        engine = EmotionalStateEngine(config=EngineConfig(history_limit=3))
        session = engine.initialize("Socrates", "Nietzsche")
        assert session.pro.history_limit == 3
        assert session.con.current_state == EmotionalState.NEUTRAL


class TestEngineUpdate:
    """Tests for EmotionalStateEngine.update."""

    def test_update_moves_state(self, engine):
        session = engine.initialize("Socrates", "Nietzsche")
        summary = engine.update(session, "pro", FALLACY_TEXT, 3)

        assert summary.side == "pro"
        assert summary.persona == "Socrates"
        assert summary.previous_state == EmotionalState.NEUTRAL
        assert summary.new_state == EmotionalState.ENGAGED
        assert summary.changed
        assert session.pro.current_state == EmotionalState.ENGAGED
        assert session.pro.last_analysis is summary.analysis
        assert session.con.current_state == EmotionalState.NEUTRAL

    def test_update_round_one(self, engine):
        """Updates are accepted for round 1 without escalation."""
        session = engine.initialize("Default AI", "Default AI")
        summary = engine.update(session, "con", "Possibly", 1)
        assert summary.new_state == EmotionalState.NEUTRAL
        assert not summary.changed

    def test_unknown_side_is_ignored(self, engine, caplog):
        session = engine.initialize("Socrates", "Nietzsche")
        before = session.to_dict()
        with caplog.at_level(logging.WARNING, logger="picksides"):
            assert engine.update(session, "judge", FALLACY_TEXT, 2) is None
        assert session.to_dict() == before
        assert "Ignoring emotional update for unknown side" in caplog.messages

    def test_no_text_resets_to_neutral(self, engine):
        session = engine.initialize("Socrates", "Nietzsche")
        engine.update(session, "pro", FALLACY_TEXT, 2)
        summary = engine.update(session, "pro", "", 3)
        assert summary.new_state == EmotionalState.NEUTRAL
        assert summary.analysis.confidence == 0.0

    def test_history_invariants_over_many_rounds(self, seeded_rng):
        """History stays bounded and ends with the current state."""
        engine = EmotionalStateEngine(rng=seeded_rng)
        session = engine.initialize("Nietzsche", "Socrates")
        texts = [FALLACY_TEXT, PLAIN_TEXT, ATTACK_TEXT, WEAKNESS_TEXT, EVIDENCE_TEXT]
        for round_number in range(2, 14):
            for side in ("pro", "con"):
                engine.update(session, side, texts[round_number % len(texts)], round_number)
                side_state = session.side(side)
                assert 1 <= len(side_state.state_history) <= 5
                assert side_state.state_history[-1] == side_state.current_state

    def test_seeded_runs_are_reproducible(self):
        def run(seed):
            import random

            engine = EmotionalStateEngine(rng=random.Random(seed))
            session = engine.initialize("Ayn Rand", "Shakespeare")
            states = []
            for round_number, text in enumerate([ATTACK_TEXT, PLAIN_TEXT, PLAIN_TEXT], start=2):
                states.append(engine.update(session, "pro", text, round_number).new_state)
            return states

        assert run(7) == run(7)

    def test_transition_logged(self, engine, caplog):
        session = engine.initialize("Socrates", "Nietzsche")
        with caplog.at_level(logging.INFO, logger="picksides"):
            engine.update(session, "pro", FALLACY_TEXT, 2)

        records = [r for r in caplog.records if r.getMessage() == "Emotional state transition"]
        assert len(records) == 1
        assert records[0].debate_scope == {"side": "pro", "persona": "Socrates"}
        fields = records[0].structured_fields
        assert fields["round"] == 2
        assert fields["previous_state"] == "neutral"
        assert fields["new_state"] == "engaged"
        assert fields["dominant_trigger"] == "logical_fallacy"

    def test_update_logs_inside_side_scope(self, engine, caplog):
        """Every record of an update, cooldown rolls included, carries the side."""
        session = engine.initialize("Nietzsche", "Socrates")
        session.con.record(EmotionalState.FRUSTRATED)
        with LogContext(debate_id="d9"):
            with caplog.at_level(logging.DEBUG, logger="picksides"):
                engine.update(session, "con", PLAIN_TEXT, 2)

        roll = next(r for r in caplog.records if r.getMessage() == "Cooldown roll")
        assert roll.debate_scope == {"debate_id": "d9", "side": "con", "persona": "Socrates"}
        parsed = json.loads(JSONFormatter().format(roll))
        assert parsed["side"] == "con"
        assert parsed["persona"] == "Socrates"
        assert get_context() == {}

    def test_custom_registry(self, registry_with, never_cool):
        engine = EmotionalStateEngine(profiles=registry_with, rng=never_cool)
        session = engine.initialize("Evidence Lover", "Socrates")
        assert engine.update(session, "pro", EVIDENCE_TEXT, 2).new_state == EmotionalState.ENGAGED

    def test_empty_registry_still_resolves(self, never_cool):
        """A registry built from no profiles gains the default entry."""
        engine = EmotionalStateEngine(profiles=ProfileRegistry({}), rng=never_cool)
        assert len(engine.profiles) == 1
        assert engine.profile_for("Socrates") is BUILTIN_PROFILES["Default AI"]


class TestEngineModulate:
    """Tests for engine modulation helpers."""

    def test_modulate_uses_side_state(self, engine):
        session = engine.initialize("Nietzsche", "Socrates")
        session.pro.record(EmotionalState.FRUSTRATED)
        result = engine.modulate("Base.", session.pro, language="en")
        assert "EMOTIONAL CONTEXT:" in result.enhanced_prompt
        assert result.temperature == pytest.approx(0.9)

    def test_modulate_state_for_unknown_persona(self, engine):
        result = engine.modulate_state("Base.", "engaged", "Nobody")
        assert result.temperature == pytest.approx(0.85 * 0.6)

    def test_modulate_state_with_list_language(self, engine):
        result = engine.modulate_state("Base.", "engaged", "Socrates", language=["ro"])
        assert "Show genuine intellectual curiosity" in result.prompt_addendum


class TestStrongEvidenceFirstRound:
    """Evidence alone engages a moderately escalating persona in round 1."""

    def test_round_one(self, evidence_profile, never_cool):
        analysis = analyze_argument(EVIDENCE_TEXT, "neutral", evidence_profile, 1, never_cool)
        assert analysis.trigger_categories == ["strong_evidence"]
        assert analysis.effective_strength == pytest.approx(0.625 * 0.5)
        assert analysis.new_state == EmotionalState.ENGAGED

    def test_cooldown_roll_logged(self, always_cool, caplog):
        with caplog.at_level(logging.DEBUG, logger="picksides"):
            analyze_argument(PLAIN_TEXT, "defensive", BUILTIN_PROFILES["Socrates"], 2, always_cool)
        assert "Cooldown roll" in caplog.messages
