"""
picksides: emotional state engine for AI-vs-AI debates.

Each debate side is played by a persona (Socrates, Nietzsche, ...). After
every round the engine reads the opponent's argument, detects rhetorical
and logical triggers, moves the persona's emotional state and feeds that
state into the next prompt and sampling temperature.

=== COMPONENTS ===

EMOTIONS (picksides.emotions):
- Trigger analyzer: weighted phrase detection across fixed categories
- Transition policy: category -> state table with persona escalation,
  intensity caps and stochastic cooldown
- Modulator: "EMOTIONAL CONTEXT" prompt section (en/ro) and temperature
- Session: per-debate pro/con state with bounded history
- Persona profiles: built-in table, YAML overrides, enrichment conversion

DEBATE (picksides.debate):
- DebateRunner: opening/counter/closing rounds against any CompletionClient

AMBIENT:
- Structured logging (picksides.logging_config)
- Exception hierarchy (picksides.exceptions)
- Engine/debate configuration with env overrides (picksides.config)
"""

from __future__ import annotations

import importlib
from typing import Any

from picksides.__version__ import __version__

_EXPORT_MAP = {
    'Analysis': ('picksides.emotions.analyzer', 'Analysis'),
    'BUILTIN_PROFILES': ('picksides.emotions.profiles', 'BUILTIN_PROFILES'),
    'CompletionClient': ('picksides.protocols', 'CompletionClient'),
    'DebateConfig': ('picksides.config', 'DebateConfig'),
    'DebateGenerationError': ('picksides.exceptions', 'DebateGenerationError'),
    'DebateRound': ('picksides.debate.models', 'DebateRound'),
    'DebateRunner': ('picksides.debate.runner', 'DebateRunner'),
    'DebateTranscript': ('picksides.debate.models', 'DebateTranscript'),
    'EmotionalSession': ('picksides.emotions.session', 'EmotionalSession'),
    'EmotionalState': ('picksides.emotions.states', 'EmotionalState'),
    'EmotionalStateEngine': ('picksides.emotions.engine', 'EmotionalStateEngine'),
    'EngineConfig': ('picksides.config', 'EngineConfig'),
    'ModulationResult': ('picksides.emotions.modulation', 'ModulationResult'),
    'PersonaProfile': ('picksides.emotions.profiles', 'PersonaProfile'),
    'PickSidesError': ('picksides.exceptions', 'PickSidesError'),
    'ProfileConfigurationError': ('picksides.exceptions', 'ProfileConfigurationError'),
    'ProfileRegistry': ('picksides.emotions.profiles', 'ProfileRegistry'),
    'RandomSource': ('picksides.protocols', 'RandomSource'),
    'SideState': ('picksides.emotions.session', 'SideState'),
    'StateProgression': ('picksides.emotions.profiles', 'StateProgression'),
    'TRIGGER_CATEGORIES': ('picksides.emotions.triggers', 'TRIGGER_CATEGORIES'),
    'UpdateSummary': ('picksides.emotions.session', 'UpdateSummary'),
    'analyze_argument': ('picksides.emotions.analyzer', 'analyze_argument'),
    'apply_emotional_state': ('picksides.emotions.modulation', 'apply_emotional_state'),
    'configure_logging': ('picksides.logging_config', 'configure_logging'),
    'get_engine_config': ('picksides.config', 'get_engine_config'),
    'get_logger': ('picksides.logging_config', 'get_logger'),
    'get_profile_registry': ('picksides.emotions.profiles', 'get_profile_registry'),
    'load_profiles': ('picksides.emotions.profiles', 'load_profiles'),
    'profile_from_enrichment': ('picksides.emotions.profiles', 'profile_from_enrichment'),
}


def __getattr__(name: str) -> Any:
    """Lazily import public symbols to avoid heavy import side effects."""
    try:
        module_name, attr_name = _EXPORT_MAP[name]
    except KeyError as exc:
        raise AttributeError(f"module 'picksides' has no attribute {name!r}") from exc
    module = importlib.import_module(module_name)
    value = getattr(module, attr_name)
    globals()[name] = value
    return value


def __dir__() -> list[str]:
    return sorted(set(globals()) | set(__all__))


__all__ = ["__version__", *sorted(_EXPORT_MAP)]
