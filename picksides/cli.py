"""
Command line interface for inspecting the emotional state engine.

Usage:
    python -m picksides personas
    python -m picksides analyze --persona Socrates --round 3 "That is a strawman..."
    python -m picksides modulate --persona Nietzsche --state passionate --language ro
"""

from __future__ import annotations

import argparse
import json
import random
import sys
from typing import Any, Optional, Sequence

from picksides.__version__ import __version__
from picksides.config import SUPPORTED_LANGUAGES, get_engine_config
from picksides.emotions.engine import EmotionalStateEngine
from picksides.emotions.profiles import get_profile_registry
from picksides.emotions.states import EmotionalState
from picksides.exceptions import ProfileConfigurationError
from picksides.logging_config import configure_logging

STATE_CHOICES = [s.value for s in EmotionalState]


def _dump(data: Any) -> None:
    print(json.dumps(data, indent=2, ensure_ascii=False, default=str))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="picksides",
        description="Inspect persona emotional profiles, trigger analysis and modulation.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--log-level", default="WARNING", help="Log level (default: WARNING)")
    parser.add_argument("--profiles", help="YAML file with extra persona profiles")

    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("personas", help="List known personas")

    analyze = sub.add_parser("analyze", help="Analyze an opponent argument for a persona")
    analyze.add_argument("text", help="Opponent argument text")
    analyze.add_argument("--persona", default=None, help="Persona display name")
    analyze.add_argument("--round", type=int, default=1, dest="round_number")
    analyze.add_argument("--state", choices=STATE_CHOICES, default="neutral",
                         help="Current state of the persona")
    analyze.add_argument("--seed", type=int, default=None, help="Seed for the cooldown roll")

    modulate = sub.add_parser("modulate", help="Show prompt/temperature modulation for a state")
    modulate.add_argument("prompt", nargs="?", default="", help="Base prompt to augment")
    modulate.add_argument("--persona", default=None, help="Persona display name")
    modulate.add_argument("--state", choices=STATE_CHOICES, required=True)
    modulate.add_argument("--language", choices=SUPPORTED_LANGUAGES, default=None)

    return parser


def cmd_personas(engine: EmotionalStateEngine) -> int:
    registry = engine.profiles
    for name in registry.names():
        profile = registry.get(name)
        progression = profile.state_progression
        marker = " (default)" if name == registry.default_persona else ""
        print(
            f"{name}{marker}: {profile.base_temperament} "
            f"escalation={progression.escalation_rate} "
            f"cooldown={progression.cooldown_rate} "
            f"max_intensity={progression.max_intensity}"
        )
    return 0


def cmd_analyze(engine: EmotionalStateEngine, args: argparse.Namespace) -> int:
    analysis = engine.analyze(args.text, args.persona, args.state, args.round_number)
    _dump(
        {
            "persona": engine.profiles.resolve_name(args.persona),
            **analysis.to_dict(),
        }
    )
    return 0


def cmd_modulate(engine: EmotionalStateEngine, args: argparse.Namespace) -> int:
    result = engine.modulate_state(args.prompt, args.state, args.persona, args.language)
    _dump(result.to_dict())
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    configure_logging(level=args.log_level, json_output=False)

    try:
        registry = get_profile_registry(args.profiles)
    except ProfileConfigurationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    seed = getattr(args, "seed", None)
    rng = random.Random(seed) if seed is not None else None
    engine = EmotionalStateEngine(profiles=registry, rng=rng, config=get_engine_config())

    if args.command == "personas":
        return cmd_personas(engine)
    if args.command == "analyze":
        return cmd_analyze(engine, args)
    return cmd_modulate(engine, args)


__all__ = ["build_parser", "main"]
