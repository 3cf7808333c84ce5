"""
Custom exception types for PickSides.

The emotional state engine itself never raises for runtime inputs; these
exceptions cover configuration loading and debate generation, where a
failure has to reach the caller.
"""

from __future__ import annotations

from typing import Any


class PickSidesError(Exception):
    """Base exception for all PickSides errors.

    All custom exceptions should inherit from this class so callers can
    catch every PickSides-specific error with a single handler.
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} (details: {self.details})"
        return self.message


# ============================================================================
# Configuration Errors
# ============================================================================


class ConfigurationError(PickSidesError):
    """Raised when engine or debate configuration is invalid."""

    pass


class ProfileConfigurationError(ConfigurationError):
    """Raised when a persona profile table cannot be loaded or is invalid."""

    def __init__(self, source: str, reason: str):
        super().__init__(
            f"Invalid persona profiles in {source}: {reason}",
            {"source": source, "reason": reason},
        )
        self.source = source
        self.reason = reason


# ============================================================================
# Validation Errors
# ============================================================================


class ValidationError(PickSidesError):
    """Base exception for validation errors."""

    pass


class InputValidationError(ValidationError):
    """Raised when caller-supplied input fails validation."""

    def __init__(self, field: str, reason: str):
        super().__init__(f"Invalid {field}: {reason}", {"field": field, "reason": reason})
        self.field = field
        self.reason = reason


# ============================================================================
# Debate Errors
# ============================================================================


class DebateError(PickSidesError):
    """Base exception for debate-related errors."""

    pass


class DebateGenerationError(DebateError):
    """Raised when the completion service fails while generating a round."""

    def __init__(self, round_number: int, side: str, reason: str):
        super().__init__(
            f"Round {round_number} generation failed for {side}: {reason}",
            {"round": round_number, "side": side, "reason": reason},
        )
        self.round_number = round_number
        self.side = side
        self.reason = reason


class RoundLimitExceededError(DebateError):
    """Raised when more rounds are requested than allowed."""

    def __init__(self, max_rounds: int, current_round: int):
        super().__init__(
            f"Round limit exceeded: {current_round}/{max_rounds}",
            {"max_rounds": max_rounds, "current_round": current_round},
        )
        self.max_rounds = max_rounds
        self.current_round = current_round


__all__ = [
    "PickSidesError",
    "ConfigurationError",
    "ProfileConfigurationError",
    "ValidationError",
    "InputValidationError",
    "DebateError",
    "DebateGenerationError",
    "RoundLimitExceededError",
]
