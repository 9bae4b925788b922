#!/usr/bin/env python3
"""
Idea Oracle - score a startup idea from the command line.

Runs the same pipeline as the web API:
  - Heuristic keyword metrics
  - Text-generation verdict (needs LLM_API_KEY)
  - Composite score and founder rank

Usage:
    python main.py "Uber for dog walkers, powered by AI"
    python main.py --json "..."           # Print the raw ScoreSet JSON
    python main.py --seed 42 "..."        # Reproducible jitter
    python main.py --show-config          # Show configuration and exit
"""

import argparse
import json
import random
import sys

from idea_oracle import __version__
from idea_oracle.config import print_config_summary, validate_config
from idea_oracle.errors import OracleError
from idea_oracle.models.score_set import METRIC_KEYS, ScoreSet
from idea_oracle.observability.logging import setup_logging
from idea_oracle.pipeline import build_engine
from idea_oracle.storage.memory import MockScoreStorage


def create_parser() -> argparse.ArgumentParser:
    """Create the command-line argument parser."""
    parser = argparse.ArgumentParser(
        prog="idea-oracle",
        description="Score a startup idea with The Oracle.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s "AI-powered AI agent for AI"      Score one idea
  %(prog)s --json "B2B SaaS for dentists"    Print raw JSON
  %(prog)s --seed 7 "..."                    Same jitter every run
  %(prog)s --show-config                     Show configuration
        """,
    )

    parser.add_argument(
        "idea",
        nargs="?",
        help="Idea text to score (use quotes)",
    )

    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the ScoreSet as JSON",
    )

    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        metavar="N",
        help="Seed the jitter random source for reproducible heuristics",
    )

    parser.add_argument(
        "--identity",
        default="cli",
        help="Rate-limit identity for this request (default: cli)",
    )

    parser.add_argument(
        "--idea-id",
        default=None,
        help="Idea id; with --user-id the result is stored",
    )

    parser.add_argument(
        "--user-id",
        default=None,
        help="User id; with --idea-id the result is stored",
    )

    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Show debug logging",
    )

    parser.add_argument(
        "--show-config",
        action="store_true",
        help="Show current configuration and exit",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    return parser


def show_config() -> None:
    """Display current configuration."""
    print("=" * 60)
    print("Idea Oracle Configuration")
    print("=" * 60)
    print_config_summary()

    errors = validate_config()
    if errors:
        print("\nConfiguration warnings:")
        for error in errors:
            print(f"  ⚠️  {error}")
    else:
        print("\n✓ Configuration valid")
    print("=" * 60)


def format_score_set(score_set: ScoreSet) -> str:
    """Human-readable scorecard."""
    labels = {key: key.replace("_", " ").title() for key in METRIC_KEYS}
    width = max(len(label) for label in labels.values())

    lines = ["=" * 60, "THE ORACLE HAS SPOKEN", "=" * 60]
    for key in METRIC_KEYS:
        lines.append(f"  {labels[key]:<{width}}  {getattr(score_set, key):>3}/100")
    lines.extend([
        "-" * 60,
        f"  {'Composite Score':<{width}}  {score_set.composite_score:>3}/100",
        f"  {'Founder Rank':<{width}}  {score_set.founder_rank.value}",
        "",
        score_set.goblin_verdict,
        "=" * 60,
    ])
    return "\n".join(lines)


def main(argv: list = None) -> int:
    """
    Main entry point.

    Args:
        argv: Command-line arguments (default: sys.argv[1:]).

    Returns:
        Exit code (0 = success, 1 = error, 2 = usage error).
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    setup_logging("DEBUG" if args.verbose else "WARNING")

    if args.show_config:
        show_config()
        return 0

    if args.idea is None:
        parser.print_usage(sys.stderr)
        print("error: an idea is required", file=sys.stderr)
        return 2

    rng = random.Random(args.seed) if args.seed is not None else None
    storage = None if (args.idea_id and args.user_id) else MockScoreStorage()
    engine = build_engine(storage=storage, rng=rng)

    try:
        score_set = engine.score_idea(
            args.idea,
            identity=args.identity,
            idea_id=args.idea_id,
            user_id=args.user_id,
        )
    except OracleError as e:
        print(f"\n❌ {e.public_message}", file=sys.stderr)
        if args.verbose:
            print(f"   {type(e).__name__}: {e.detail}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\n\nInterrupted by user")
        return 130

    if args.json:
        print(json.dumps(score_set.to_dict(), indent=2))
    else:
        print(format_score_set(score_set))
    return 0


if __name__ == "__main__":
    sys.exit(main())
