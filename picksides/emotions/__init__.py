"""
Emotional state engine for debate personas.

Analyzes each opponent argument for rhetorical triggers, moves the
persona's emotional state accordingly and feeds that state back into the
next prompt and sampling temperature.
"""

from picksides.emotions.analyzer import NO_TEXT_REASONING, Analysis, analyze_argument
from picksides.emotions.engine import EmotionalStateEngine
from picksides.emotions.modulation import (
    EMOTIONAL_CONTEXT_HEADER,
    ModulationDebug,
    ModulationResult,
    apply_emotional_state,
)
from picksides.emotions.profiles import (
    BUILTIN_PROFILES,
    DEFAULT_PERSONA,
    PersonaProfile,
    ProfileRegistry,
    StateProgression,
    get_profile_registry,
    load_profiles,
    profile_from_enrichment,
)
from picksides.emotions.session import SIDES, EmotionalSession, SideState, UpdateSummary
from picksides.emotions.states import (
    STATE_MODIFIERS,
    EmotionalState,
    StateModifier,
    parse_state,
)
from picksides.emotions.transitions import (
    FALLBACK_RULE,
    TRANSITION_TABLE,
    TransitionDecision,
    TransitionRule,
    next_state,
)
from picksides.emotions.triggers import (
    CATEGORY_NAMES,
    TRIGGER_CATEGORIES,
    DetectedTrigger,
    TriggerCategory,
    TriggerScan,
    scan_triggers,
)

__all__ = [
    "Analysis",
    "analyze_argument",
    "NO_TEXT_REASONING",
    "EmotionalStateEngine",
    "EMOTIONAL_CONTEXT_HEADER",
    "ModulationDebug",
    "ModulationResult",
    "apply_emotional_state",
    "BUILTIN_PROFILES",
    "DEFAULT_PERSONA",
    "PersonaProfile",
    "ProfileRegistry",
    "StateProgression",
    "get_profile_registry",
    "load_profiles",
    "profile_from_enrichment",
    "SIDES",
    "EmotionalSession",
    "SideState",
    "UpdateSummary",
    "STATE_MODIFIERS",
    "EmotionalState",
    "StateModifier",
    "parse_state",
    "FALLBACK_RULE",
    "TRANSITION_TABLE",
    "TransitionDecision",
    "TransitionRule",
    "next_state",
    "CATEGORY_NAMES",
    "TRIGGER_CATEGORIES",
    "DetectedTrigger",
    "TriggerCategory",
    "TriggerScan",
    "scan_triggers",
]
