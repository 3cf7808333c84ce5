"""
Protocol definitions for the services picksides consumes.

The engine and runner depend on these interfaces rather than on concrete
implementations, so tests can inject deterministic fakes.

Usage:
    from picksides.protocols import CompletionClient, RandomSource

    async def argue(client: CompletionClient, prompt: str) -> str:
        return await client.complete(prompt, temperature=0.8, max_tokens=150)
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class RandomSource(Protocol):
    """Source of uniform floats in [0, 1), e.g. ``random.Random``."""

    def random(self) -> float:
        """Return the next uniform value in [0, 1)."""
        ...


@runtime_checkable
class CompletionClient(Protocol):
    """Protocol for LLM completion services (prompt in, text out)."""

    async def complete(
        self,
        prompt: str,
        *,
        temperature: float,
        max_tokens: int,
    ) -> str:
        """Generate a completion for a single user prompt."""
        ...


__all__ = [
    "RandomSource",
    "CompletionClient",
]
