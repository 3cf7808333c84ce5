"""
Persona emotional profiles.

A profile describes how a persona reacts to rhetorical triggers: how
sensitive it is to each trigger category and how fast it escalates, cools
down and how intense it may get. Profiles are static data, keyed by the
persona's display name, with a fallback profile for unknown personas.

Profiles can be extended from YAML files of the form::

    personas:
      Hypatia:
        base_temperament: curious
        trigger_sensitivity:
          strong_evidence: 0.8
          dogmatism: 0.7
        state_progression:
          escalation_rate: 0.4
          cooldown_rate: 0.6
          max_intensity: 0.8
"""

from __future__ import annotations

import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Iterator, Mapping, Optional

import yaml

from picksides.exceptions import ProfileConfigurationError
from picksides.logging_config import get_logger, log_function
from picksides.serialization import SerializableMixin

logger = get_logger(__name__)

DEFAULT_PERSONA = "Default AI"
PROFILES_ENV_VAR = "PICKSIDES_PERSONA_PROFILES"
ENRICHMENT_SOURCE = "emotional_triggers"


def _check_unit_interval(name: str, value: float) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"{name} must be a number, got {type(value).__name__}")
    if not 0.0 <= value <= 1.0:
        raise ValueError(f"{name} must be between 0 and 1, got {value}")


@dataclass(frozen=True)
class StateProgression(SerializableMixin):
    """How quickly a persona escalates and recovers.

    Attributes:
        escalation_rate: Scales trigger strength before state mapping.
        cooldown_rate: Probability of returning to neutral when no trigger fires.
        max_intensity: Ceiling on effective strength; also scales temperature.
    """

    escalation_rate: float = 0.4
    cooldown_rate: float = 0.6
    max_intensity: float = 0.6

    def __post_init__(self) -> None:
        _check_unit_interval("escalation_rate", self.escalation_rate)
        _check_unit_interval("cooldown_rate", self.cooldown_rate)
        _check_unit_interval("max_intensity", self.max_intensity)


@dataclass(frozen=True)
class PersonaProfile(SerializableMixin):
    """Emotional profile of one persona.

    ``base_temperament`` is informational only; it is reported in
    modulation debug output but never drives a decision.
    """

    base_temperament: str = "neutral"
    trigger_sensitivity: Mapping[str, float] = field(default_factory=dict)
    state_progression: StateProgression = field(default_factory=StateProgression)

    def __post_init__(self) -> None:
        for category, value in self.trigger_sensitivity.items():
            _check_unit_interval(f"trigger_sensitivity[{category}]", value)
        object.__setattr__(
            self, "trigger_sensitivity", MappingProxyType(dict(self.trigger_sensitivity))
        )

    def sensitivity(self, category: str, default: float = 0.3) -> float:
        """Sensitivity to ``category``.

        Unlisted categories and categories listed as 0 get ``default``, so a
        matched phrase always yields a positive strength.
        """
        return self.trigger_sensitivity.get(category) or default

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> PersonaProfile:
        progression = data.get("state_progression") or {}
        if not isinstance(progression, Mapping):
            raise ValueError("state_progression must be a mapping")
        sensitivity = data.get("trigger_sensitivity") or {}
        if not isinstance(sensitivity, Mapping):
            raise ValueError("trigger_sensitivity must be a mapping")
        return cls(
            base_temperament=str(data.get("base_temperament", "neutral")),
            trigger_sensitivity=dict(sensitivity),
            state_progression=StateProgression.from_dict(dict(progression)),
        )


def _profile(
    temperament: str,
    sensitivity: dict[str, float],
    escalation: float,
    cooldown: float,
    intensity: float,
) -> PersonaProfile:
    return PersonaProfile(
        base_temperament=temperament,
        trigger_sensitivity=sensitivity,
        state_progression=StateProgression(
            escalation_rate=escalation,
            cooldown_rate=cooldown,
            max_intensity=intensity,
        ),
    )


_SOCRATES = _profile(
    "calm",
    {
        "logical_fallacy": 0.8,
        "personal_attack": 0.2,
        "strong_evidence": 0.7,
        "circular_reasoning": 0.9,
        "appeal_to_authority": 0.6,
        "weak_argument": 0.5,
    },
    escalation=0.3,
    cooldown=0.5,
    intensity=0.7,
)

_DEFAULT_AI = _profile(
    "neutral",
    {
        "logical_fallacy": 0.5,
        "personal_attack": 0.3,
        "strong_evidence": 0.6,
        "weak_argument": 0.4,
    },
    escalation=0.4,
    cooldown=0.6,
    intensity=0.6,
)

BUILTIN_PROFILES: Mapping[str, PersonaProfile] = MappingProxyType(
    {
        "Socrates": _SOCRATES,
        "Socrate": _SOCRATES,
        "Albert Einstein": _profile(
            "curious",
            {
                "scientific_inaccuracy": 0.8,
                "anti_intellectualism": 0.9,
                "strong_evidence": 0.8,
                "creative_insight": 0.9,
                "dogmatism": 0.7,
                "weak_argument": 0.4,
            },
            escalation=0.4,
            cooldown=0.6,
            intensity=0.8,
        ),
        "Shakespeare": _profile(
            "dramatic",
            {
                "personal_attack": 0.6,
                "artistic_critique": 0.7,
                "moral_complexity": 0.8,
                "strong_evidence": 0.6,
                "shallow_thinking": 0.8,
                "weak_argument": 0.7,
            },
            escalation=0.6,
            cooldown=0.4,
            intensity=0.9,
        ),
        "Nietzsche": _profile(
            "intense",
            {
                "moral_absolutism": 0.9,
                "herd_mentality": 0.8,
                "weakness": 0.8,
                "strong_evidence": 0.7,
                "personal_attack": 0.7,
                "conventional_wisdom": 0.8,
            },
            escalation=0.8,
            cooldown=0.3,
            intensity=1.0,
        ),
        "Ayn Rand": _profile(
            "assertive",
            {
                "collectivism": 0.9,
                "altruism": 0.8,
                "government_intervention": 0.8,
                "strong_evidence": 0.6,
                "personal_attack": 0.7,
                "weak_argument": 0.6,
            },
            escalation=0.7,
            cooldown=0.4,
            intensity=0.9,
        ),
        "Tristan Tzara": _profile(
            "rebellious",
            {
                "traditionalism": 0.8,
                "rationalism": 0.7,
                "bourgeois_values": 0.9,
                "strong_evidence": 0.5,
                "personal_attack": 0.6,
                "conventional_logic": 0.8,
            },
            escalation=0.7,
            cooldown=0.3,
            intensity=0.9,
        ),
        DEFAULT_PERSONA: _DEFAULT_AI,
        "IA Implicită": _DEFAULT_AI,
    }
)


class ProfileRegistry:
    """Lookup table of persona profiles with a fallback entry.

    Lookups never fail: a missing, empty or unknown persona name resolves
    to the profile registered under ``default_persona``.
    """

    def __init__(
        self,
        profiles: Optional[Mapping[str, PersonaProfile]] = None,
        default_persona: str = DEFAULT_PERSONA,
    ):
        self._profiles: dict[str, PersonaProfile] = dict(
            BUILTIN_PROFILES if profiles is None else profiles
        )
        if default_persona not in self._profiles:
            self._profiles[default_persona] = _DEFAULT_AI
        self.default_persona = default_persona

    def __contains__(self, name: object) -> bool:
        return name in self._profiles

    def __len__(self) -> int:
        return len(self._profiles)

    def __iter__(self) -> Iterator[str]:
        return iter(self._profiles)

    def resolve_name(self, name: Optional[str]) -> str:
        """Name of the profile that ``name`` resolves to."""
        if isinstance(name, str) and name in self._profiles:
            return name
        return self.default_persona

    def get(self, name: Optional[str]) -> PersonaProfile:
        """Profile for ``name``, or the default profile."""
        return self._profiles[self.resolve_name(name)]

    def names(self) -> list[str]:
        return sorted(self._profiles)

    def merged(self, overrides: Mapping[str, PersonaProfile]) -> ProfileRegistry:
        """New registry with ``overrides`` layered over these profiles."""
        return ProfileRegistry({**self._profiles, **overrides}, self.default_persona)


@log_function(log_result=True)
def load_profiles(path: str | Path) -> dict[str, PersonaProfile]:
    """Load persona profiles from a YAML file.

    Args:
        path: File with a top-level ``personas`` mapping.

    Returns:
        Mapping of persona display name to profile.

    Raises:
        ProfileConfigurationError: If the file is unreadable, is not valid
            YAML, or describes an invalid profile.
    """
    source = str(path)
    try:
        with open(path, encoding="utf-8") as f:
            document = yaml.safe_load(f)
    except OSError as e:
        raise ProfileConfigurationError(source, f"cannot read file: {e}") from e
    except yaml.YAMLError as e:
        raise ProfileConfigurationError(source, f"invalid YAML: {e}") from e

    if not isinstance(document, Mapping) or not isinstance(document.get("personas"), Mapping):
        raise ProfileConfigurationError(source, "expected a top-level 'personas' mapping")

    profiles: dict[str, PersonaProfile] = {}
    for name, data in document["personas"].items():
        if not isinstance(data, Mapping):
            raise ProfileConfigurationError(source, f"profile for {name!r} must be a mapping")
        try:
            profiles[str(name)] = PersonaProfile.from_dict(data)
        except (TypeError, ValueError) as e:
            raise ProfileConfigurationError(source, f"profile for {name!r}: {e}") from e

    logger.info("Loaded persona profiles", source=source, count=len(profiles))
    return profiles


def get_profile_registry(extra_path: Optional[str | Path] = None) -> ProfileRegistry:
    """Built-in profiles merged with an optional YAML file.

    The file is ``extra_path`` if given, otherwise the path in the
    PICKSIDES_PERSONA_PROFILES environment variable, if set.
    """
    registry = ProfileRegistry()
    path = extra_path or os.environ.get(PROFILES_ENV_VAR)
    if path:
        registry = registry.merged(load_profiles(path))
    return registry


# Keywords that map an enriched persona's free-text triggers onto the
# generic trigger categories.
_GENERIC_KEYWORDS = {
    "logical_fallacy": "logic",
    "personal_attack": "personal",
    "strong_evidence": "evidence",
    "weak_argument": "weakness",
    "circular_reasoning": "reasoning",
    "appeal_to_authority": "authority",
}


def _trigger_key(trigger: str) -> str:
    return re.sub(r"\s+", "_", trigger.lower())


def _mentions(triggers: Mapping[str, Any], bucket: str, keyword: str) -> bool:
    return any(keyword in str(t).lower() for t in triggers.get(bucket) or ())


def _generic_sensitivity(triggers: Mapping[str, Any], keyword: str) -> float:
    score = max(
        0.8 if _mentions(triggers, "strong_negative", keyword) else 0.0,
        0.6 if _mentions(triggers, "moderate_negative", keyword) else 0.0,
        0.7 if _mentions(triggers, "strong_positive", keyword) else 0.0,
    )
    return score or 0.4


def profile_from_enrichment(emotional_triggers: Mapping[str, Any]) -> PersonaProfile:
    """Build a profile from an enriched persona's ``emotional_triggers`` block.

    The block lists free-text triggers under ``strong_negative``,
    ``moderate_negative`` and ``strong_positive`` plus optional
    ``escalation_rate``, ``cooldown_rate``, ``max_intensity`` and
    ``base_temperament``. Generic categories are scored by keyword; each
    listed trigger also becomes its own category (0.9 strong negative,
    0.6 moderate negative, 0.8 strong positive; later buckets win).

    Raises:
        ProfileConfigurationError: If a rate is not a number in [0, 1].
    """
    sensitivity = {
        category: _generic_sensitivity(emotional_triggers, keyword)
        for category, keyword in _GENERIC_KEYWORDS.items()
    }
    buckets = (("strong_negative", 0.9), ("moderate_negative", 0.6), ("strong_positive", 0.8))
    for bucket, score in buckets:
        for trigger in emotional_triggers.get(bucket) or ():
            sensitivity[_trigger_key(str(trigger))] = score

    def _rate(key: str, default: float) -> float:
        value = emotional_triggers.get(key)
        return default if value is None else float(value)

    try:
        progression = StateProgression(
            escalation_rate=_rate("escalation_rate", 0.5),
            cooldown_rate=_rate("cooldown_rate", 0.5),
            max_intensity=_rate("max_intensity", 0.8),
        )
    except (TypeError, ValueError) as e:
        raise ProfileConfigurationError(ENRICHMENT_SOURCE, str(e)) from e

    return PersonaProfile(
        base_temperament=str(emotional_triggers.get("base_temperament") or "neutral"),
        trigger_sensitivity=sensitivity,
        state_progression=progression,
    )


__all__ = [
    "DEFAULT_PERSONA",
    "PROFILES_ENV_VAR",
    "StateProgression",
    "PersonaProfile",
    "BUILTIN_PROFILES",
    "ProfileRegistry",
    "load_profiles",
    "get_profile_registry",
    "profile_from_enrichment",
]
