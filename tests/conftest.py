"""
Shared pytest fixtures for the picksides test suite.

Provides deterministic random sources, engines wired to them and a fake
completion client, so emotional state tests never depend on chance.
"""

import random
from typing import Iterable

import pytest

from picksides.config import EngineConfig
from picksides.emotions.engine import EmotionalStateEngine
from picksides.emotions.profiles import PersonaProfile, ProfileRegistry, StateProgression


# ============================================================================
# Random Sources
# ============================================================================


class ScriptedRandom:
    """RandomSource returning a fixed sequence of values, then repeating the last."""

    def __init__(self, values: Iterable[float]):
        self._values = list(values) or [0.5]
        self.calls = 0

    def random(self) -> float:
        index = min(self.calls, len(self._values) - 1)
        self.calls += 1
        return self._values[index]


@pytest.fixture
def seeded_rng():
    """random.Random with a fixed seed."""
    return random.Random(1234)


@pytest.fixture
def always_cool():
    """Source whose rolls always trigger a cooldown."""
    return ScriptedRandom([0.0])


@pytest.fixture
def never_cool():
    """Source whose rolls never trigger a cooldown."""
    return ScriptedRandom([0.999999])


# ============================================================================
# Profiles and Engines
# ============================================================================


@pytest.fixture
def evidence_profile():
    """Profile that reacts strongly to evidence, used for escalation tests."""
    return PersonaProfile(
        base_temperament="curious",
        trigger_sensitivity={"strong_evidence": 1.0, "personal_attack": 1.0},
        state_progression=StateProgression(
            escalation_rate=0.5, cooldown_rate=0.6, max_intensity=0.8
        ),
    )


@pytest.fixture
def engine_config():
    return EngineConfig()


@pytest.fixture
def engine(never_cool, engine_config):
    """Engine with built-in profiles and no random cooldown."""
    return EmotionalStateEngine(rng=never_cool, config=engine_config)


@pytest.fixture
def registry_with(evidence_profile):
    """Registry of built-ins plus an "Evidence Lover" persona."""
    return ProfileRegistry().merged({"Evidence Lover": evidence_profile})


# ============================================================================
# Completion Client
# ============================================================================


class FakeCompletionClient:
    """CompletionClient that records prompts and replies from a script."""

    def __init__(self, replies=None):
        self.replies = list(replies or [])
        self.calls = []

    async def complete(self, prompt, *, temperature, max_tokens):
        self.calls.append(
            {"prompt": prompt, "temperature": temperature, "max_tokens": max_tokens}
        )
        if self.replies:
            return self.replies.pop(0)
        return f"argument {len(self.calls)}"


@pytest.fixture
def fake_client():
    return FakeCompletionClient()


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    """Strip PICKSIDES_* overrides inherited from the environment."""
    import os

    for name in list(os.environ):
        if name.startswith("PICKSIDES_"):
            monkeypatch.delenv(name, raising=False)


@pytest.fixture
def scripted_rng():
    """Factory for ScriptedRandom sources."""
    return ScriptedRandom


@pytest.fixture(autouse=True)
def _restore_logging():
    """Undo configure_logging() calls made by a test."""
    import logging

    root = logging.getLogger()
    package = logging.getLogger("picksides")
    saved = (root.handlers[:], root.level, package.level, package.propagate)
    yield
    root.handlers[:] = saved[0]
    root.setLevel(saved[1])
    package.setLevel(saved[2])
    package.propagate = saved[3]
