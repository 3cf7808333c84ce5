"""
Engine and debate configuration.

Provides the tunable constants of the emotional state engine and the
debate runner, with environment variable overrides. The defaults are the
values the engine's heuristics were calibrated against; changing them
changes observable behavior.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

SUPPORTED_LANGUAGES = ("en", "ro")


@dataclass(frozen=True)
class EngineConfig:
    """Configuration for the emotional state engine.

    Attributes:
        activation_threshold: A dominant trigger must be strictly stronger
            than this to move the state.
        default_sensitivity: Sensitivity used for trigger categories a
            persona profile does not list.
        round_escalation_step: Extra escalation per round after the first.
        history_limit: Number of states kept per side.
        max_temperature: Upper clamp for modulated sampling temperature.
        default_language: Instruction language when none is given.
        default_persona: Profile used for unknown or missing persona names.

    Example:
        config = EngineConfig().with_overrides(history_limit=3)
    """

    activation_threshold: float = 0.3
    default_sensitivity: float = 0.3
    round_escalation_step: float = 0.2
    history_limit: int = 5
    max_temperature: float = 1.0
    default_language: str = "en"
    default_persona: str = "Default AI"

    def __post_init__(self) -> None:
        """Validate configuration values."""
        if not 0.0 <= self.activation_threshold <= 1.0:
            raise ValueError("activation_threshold must be between 0 and 1")
        if not 0.0 <= self.default_sensitivity <= 1.0:
            raise ValueError("default_sensitivity must be between 0 and 1")
        if self.round_escalation_step < 0:
            raise ValueError("round_escalation_step must be non-negative")
        if self.history_limit < 1:
            raise ValueError("history_limit must be at least 1")
        if not 0.0 < self.max_temperature <= 2.0:
            raise ValueError("max_temperature must be in (0, 2]")
        if self.default_language not in SUPPORTED_LANGUAGES:
            raise ValueError(f"default_language must be one of {SUPPORTED_LANGUAGES}")

    def with_overrides(
        self,
        activation_threshold: Optional[float] = None,
        default_sensitivity: Optional[float] = None,
        round_escalation_step: Optional[float] = None,
        history_limit: Optional[int] = None,
        max_temperature: Optional[float] = None,
        default_language: Optional[str] = None,
        default_persona: Optional[str] = None,
    ) -> EngineConfig:
        """Create a new config with the given values replaced."""
        return EngineConfig(
            activation_threshold=(
                activation_threshold
                if activation_threshold is not None
                else self.activation_threshold
            ),
            default_sensitivity=(
                default_sensitivity if default_sensitivity is not None else self.default_sensitivity
            ),
            round_escalation_step=(
                round_escalation_step
                if round_escalation_step is not None
                else self.round_escalation_step
            ),
            history_limit=history_limit if history_limit is not None else self.history_limit,
            max_temperature=(
                max_temperature if max_temperature is not None else self.max_temperature
            ),
            default_language=(
                default_language if default_language is not None else self.default_language
            ),
            default_persona=(
                default_persona if default_persona is not None else self.default_persona
            ),
        )


@dataclass(frozen=True)
class DebateConfig:
    """Configuration for a generated debate.

    Attributes:
        rounds: Number of rounds to generate (opening, counter, closing...).
        word_limit: Word limit stated in every generation prompt.
        max_tokens: Completion budget per argument.
        base_temperature: Temperature used when no modulation applies.
        language: Language code for prompts and emotional instructions.
        max_rounds: Hard ceiling on ``rounds``.
    """

    rounds: int = 3
    word_limit: int = 75
    max_tokens: int = 150
    base_temperature: float = 0.8
    language: str = "en"
    max_rounds: int = 10

    def __post_init__(self) -> None:
        if self.rounds < 1:
            raise ValueError("rounds must be at least 1")
        if self.word_limit < 1:
            raise ValueError("word_limit must be at least 1")
        if self.max_tokens < 1:
            raise ValueError("max_tokens must be at least 1")
        if self.language not in SUPPORTED_LANGUAGES:
            raise ValueError(f"language must be one of {SUPPORTED_LANGUAGES}")


LOG_FORMATS = ("json", "text")


@dataclass(frozen=True)
class LoggingConfig:
    """Configuration for log output.

    Attributes:
        level: Level name applied to the root and ``picksides`` loggers.
        log_format: "json" for one JSON object per line, "text" for humans.
        log_file: Optional path of a rotating log file.
        max_bytes: Size at which the log file rotates.
        backup_count: Rotated files kept.
    """

    level: str = "INFO"
    log_format: str = "json"
    log_file: str = ""
    max_bytes: int = 10 * 1024 * 1024
    backup_count: int = 5

    def __post_init__(self) -> None:
        """Validate configuration values."""
        if self.log_format not in LOG_FORMATS:
            raise ValueError(f"log_format must be one of {LOG_FORMATS}")
        if self.max_bytes < 0:
            raise ValueError("max_bytes must be non-negative")
        if self.backup_count < 0:
            raise ValueError("backup_count must be non-negative")


def _get_env_int(name: str) -> Optional[int]:
    """Get an integer from environment variable, or None if not set/invalid."""
    value = os.environ.get(name)
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        return None


def _get_env_float(name: str) -> Optional[float]:
    """Get a float from environment variable, or None if not set/invalid."""
    value = os.environ.get(name)
    if value is None:
        return None
    try:
        return float(value)
    except ValueError:
        return None


def _get_env_language(name: str) -> Optional[str]:
    value = os.environ.get(name)
    if value is None:
        return None
    value = value.strip().lower()
    return value if value in SUPPORTED_LANGUAGES else None


def get_engine_config(base: Optional[EngineConfig] = None) -> EngineConfig:
    """Get the engine configuration with environment overrides applied.

    Environment variables:
        PICKSIDES_ACTIVATION_THRESHOLD: Override activation threshold
        PICKSIDES_DEFAULT_SENSITIVITY: Override default trigger sensitivity
        PICKSIDES_HISTORY_LIMIT: Override per-side history length
        PICKSIDES_DEFAULT_LANGUAGE: Override instruction language (en/ro)

    Unparseable values are ignored.

    Args:
        base: Config to apply overrides on (defaults to EngineConfig())

    Returns:
        EngineConfig with overrides applied
    """
    base_config = base or EngineConfig()

    env_threshold = _get_env_float("PICKSIDES_ACTIVATION_THRESHOLD")
    env_sensitivity = _get_env_float("PICKSIDES_DEFAULT_SENSITIVITY")
    env_history = _get_env_int("PICKSIDES_HISTORY_LIMIT")
    env_language = _get_env_language("PICKSIDES_DEFAULT_LANGUAGE")

    if any(v is not None for v in [env_threshold, env_sensitivity, env_history, env_language]):
        return base_config.with_overrides(
            activation_threshold=env_threshold,
            default_sensitivity=env_sensitivity,
            history_limit=env_history,
            default_language=env_language,
        )

    return base_config


def get_logging_config() -> LoggingConfig:
    """Get the logging configuration from the environment.

    Environment variables:
        PICKSIDES_LOG_LEVEL: Level name (default INFO)
        PICKSIDES_LOG_FORMAT: "json" or "text" (default json)
        PICKSIDES_LOG_FILE: Rotating log file path (default none)
        PICKSIDES_LOG_MAX_BYTES: Rotation size in bytes
        PICKSIDES_LOG_BACKUP_COUNT: Rotated files kept

    Unparseable or unknown values fall back to the defaults.
    """
    defaults = LoggingConfig()
    log_format = os.environ.get("PICKSIDES_LOG_FORMAT", defaults.log_format).strip().lower()
    max_bytes = _get_env_int("PICKSIDES_LOG_MAX_BYTES")
    backup_count = _get_env_int("PICKSIDES_LOG_BACKUP_COUNT")

    return LoggingConfig(
        level=os.environ.get("PICKSIDES_LOG_LEVEL", defaults.level).strip().upper(),
        log_format=log_format if log_format in LOG_FORMATS else defaults.log_format,
        log_file=os.environ.get("PICKSIDES_LOG_FILE", defaults.log_file),
        max_bytes=max_bytes if max_bytes is not None and max_bytes >= 0 else defaults.max_bytes,
        backup_count=(
            backup_count
            if backup_count is not None and backup_count >= 0
            else defaults.backup_count
        ),
    )


__all = [
    "SUPPORTED_LANGUAGES",
    "LOG_FORMATS",
    "EngineConfig",
    "DebateConfig",
    "LoggingConfig",
    "get_engine_config",
    "get_logging_config",
]
