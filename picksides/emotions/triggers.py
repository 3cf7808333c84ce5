"""
Trigger detection for opponent arguments.

A trigger category is a named bucket of lowercase phrases that signal a
rhetorical or logical feature (an appeal to authority, a personal attack,
strong evidence...). Detection is plain case-insensitive substring
matching; a category's strength is the fraction of its phrases present,
scaled by the persona's sensitivity to that category.

The category table is persona-independent. Personas differ only in how
sensitive they are to each category.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Sequence

from picksides.emotions.profiles import PersonaProfile
from picksides.serialization import SerializableMixin


@dataclass(frozen=True)
class TriggerCategory:
    """A named bucket of detection phrases (all lowercase)."""

    name: str
    patterns: tuple[str, ...]

    def matches(self, normalized_text: str) -> list[str]:
        """Phrases of this category found in already-lowercased text."""
        return [p for p in self.patterns if p in normalized_text]


TRIGGER_CATEGORIES: tuple[TriggerCategory, ...] = (
    TriggerCategory("logical_fallacy", (
        "strawman", "ad hominem", "false dichotomy", "slippery slope",
        "circular logic", "therefore", "proves that", "obviously",
        "everyone knows", "common sense", "appeal to emotion",
    )),
    TriggerCategory("personal_attack", (
        "you are wrong", "you don't understand", "ignorant", "stupid",
        "foolish", "naive", "clearly you", "obviously you don't",
    )),
    TriggerCategory("strong_evidence", (
        "research shows", "studies indicate", "data suggests", "evidence demonstrates",
        "according to", "statistics show", "peer reviewed", "empirical",
    )),
    TriggerCategory("circular_reasoning", (
        "because it is", "by definition", "it's true because", "we know because",
    )),
    TriggerCategory("appeal_to_authority", (
        "experts say", "authorities agree", "scientists believe", "studies show",
        "research proves", "according to experts",
    )),
    TriggerCategory("weak_argument", (
        "i think", "maybe", "possibly", "could be", "might be",
        "perhaps", "i believe", "in my opinion", "seems like",
    )),
    TriggerCategory("scientific_inaccuracy", (
        "theory is just", "evolution is just a theory", "climate change is fake",
        "vaccines cause", "natural immunity", "chemicals are bad",
    )),
    TriggerCategory("anti_intellectualism", (
        "too much thinking", "overthinking", "academic nonsense", "ivory tower",
        "common sense is better", "real world experience",
    )),
    TriggerCategory("creative_insight", (
        "imagine if", "what if we", "another way to think", "creative solution",
        "innovative approach", "fresh perspective",
    )),
    TriggerCategory("dogmatism", (
        "absolutely must", "never acceptable", "always wrong", "period",
        "end of discussion", "no exceptions",
    )),
    TriggerCategory("artistic_critique", (
        "art is", "beauty is", "aesthetic", "creative expression",
        "artistic merit", "cultural value",
    )),
    TriggerCategory("moral_complexity", (
        "right and wrong", "ethical dilemma", "moral question", "virtue",
        "justice", "good and evil", "moral responsibility",
    )),
    TriggerCategory("shallow_thinking", (
        "simple answer", "black and white", "easy solution", "obvious choice",
        "common sense", "just do it",
    )),
    TriggerCategory("moral_absolutism", (
        "always wrong", "never right", "absolute truth", "universal law",
        "moral imperative", "categorically",
    )),
    TriggerCategory("herd_mentality", (
        "everyone believes", "society expects", "normal people", "most people",
        "conventional wisdom", "traditional values",
    )),
    TriggerCategory("weakness", (
        "give up", "can't handle", "too difficult", "impossible",
        "helpless", "victim", "need help",
    )),
    TriggerCategory("conventional_wisdom", (
        "traditional approach", "way things are done", "established practice",
        "conventional method", "standard procedure",
    )),
    TriggerCategory("collectivism", (
        "for the greater good", "society needs", "collective responsibility",
        "community over individual", "sacrifice for others",
    )),
    TriggerCategory("altruism", (
        "selfless act", "helping others", "sacrifice yourself", "put others first",
        "altruistic", "for the benefit of others",
    )),
    TriggerCategory("government_intervention", (
        "government should", "regulation is needed", "state control",
        "public sector", "government program", "federal oversight",
    )),
    TriggerCategory("traditionalism", (
        "traditional values", "way things were", "old ways", "established order",
        "conventional approach", "time tested",
    )),
    TriggerCategory("rationalism", (
        "logical approach", "rational thinking", "reasoned argument",
        "systematic analysis", "objective truth",
    )),
    TriggerCategory("bourgeois_values", (
        "middle class", "property rights", "material success",
        "conventional success", "respectability", "social status",
    )),
    TriggerCategory("conventional_logic", (
        "logical progression", "reasonable conclusion", "rational argument",
        "systematic approach", "methodical thinking",
    )),
)

CATEGORY_NAMES: tuple[str, ...] = tuple(c.name for c in TRIGGER_CATEGORIES)


@dataclass(frozen=True)
class DetectedTrigger(SerializableMixin):
    """One trigger category found in a text."""

    category: str
    strength: float
    patterns: tuple[str, ...]
    sensitivity: float


@dataclass(frozen=True)
class TriggerScan(SerializableMixin):
    """Result of scanning one text against every category.

    ``triggers`` is sorted by descending strength. ``dominant`` is the
    first category (in table order) reaching the highest non-zero
    strength, or None when nothing fired with positive strength.
    """

    triggers: tuple[DetectedTrigger, ...] = ()
    dominant: Optional[str] = None
    max_strength: float = 0.0

    @property
    def fired(self) -> bool:
        return bool(self.triggers)


def normalize_text(text: Any) -> Optional[str]:
    """Lowercased text, or None when there is nothing to analyze."""
    if not isinstance(text, str) or not text:
        return None
    return text.lower()


def scan_triggers(
    text: str,
    profile: PersonaProfile,
    categories: Sequence[TriggerCategory] = TRIGGER_CATEGORIES,
    default_sensitivity: float = 0.3,
) -> TriggerScan:
    """Detect trigger categories in ``text`` for a persona.

    For every category with at least one phrase present, strength is
    ``matches / len(patterns) * sensitivity``. Pure function of its inputs.

    Args:
        text: Opponent argument text; matched case-insensitively.
        profile: Persona whose sensitivities scale the strengths.
        categories: Category table to scan against.
        default_sensitivity: Sensitivity for categories the profile omits.

    Returns:
        TriggerScan with detected triggers sorted by descending strength.
    """
    normalized = text.lower()
    detected: list[DetectedTrigger] = []
    dominant: Optional[str] = None
    max_strength = 0.0

    for category in categories:
        found = category.matches(normalized)
        if not found:
            continue
        sensitivity = profile.sensitivity(category.name, default_sensitivity)
        strength = (len(found) / len(category.patterns)) * sensitivity
        detected.append(
            DetectedTrigger(
                category=category.name,
                strength=strength,
                patterns=tuple(found),
                sensitivity=sensitivity,
            )
        )
        if strength > max_strength:
            max_strength = strength
            dominant = category.name

    # Stable sort: equal strengths keep table order
    detected.sort(key=lambda t: t.strength, reverse=True)
    return TriggerScan(triggers=tuple(detected), dominant=dominant, max_strength=max_strength)


__all__ = [
    "TriggerCategory",
    "TRIGGER_CATEGORIES",
    "CATEGORY_NAMES",
    "DetectedTrigger",
    "TriggerScan",
    "normalize_text",
    "scan_triggers",
]
