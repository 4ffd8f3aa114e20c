# src/main.py — v3
"""CLI entry point — route and stats commands.

Usage:
    firstcontact route navigator "I need help with housing"
    firstcontact route triage '{"needs": ["housing"], "urgency": "critical"}'
    firstcontact stats
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from typing import Any

from firstcontact.version import __version__

logger = logging.getLogger(__name__)

TASKS = ("navigator", "triage", "careplan")


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if not hasattr(args, "func"):
        parser.print_help()
        return 1

    try:
        _setup_logging(args.verbose)
        return asyncio.run(args.func(args))
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130
    except Exception as exc:
        logger.error("Fatal error: %s", exc, exc_info=args.verbose)
        return 1


def _build_parser() -> argparse.ArgumentParser:
    """Build CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="firstcontact",
        description=f"firstcontact v{__version__} — tiered AI assistant for human-services intake",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command")

    # --- route ---
    p_route = subparsers.add_parser(
        "route", help="Route one request and print the JSON result",
    )
    p_route.add_argument("task", choices=TASKS, help="Task kind")
    p_route.add_argument(
        "input",
        help="Free-text query (navigator) or JSON client record (triage, careplan)",
    )
    p_route.add_argument(
        "--options", default=None,
        help="JSON object of routing options (context, caseworkerContext, ...)",
    )
    p_route.add_argument(
        "--simulate", action="store_true",
        help="Use the offline simulated generator for the model tiers",
    )
    p_route.set_defaults(func=_cmd_route)

    # --- stats ---
    p_stats = subparsers.add_parser(
        "stats", help="Show AI availability, budget limits and counters",
    )
    p_stats.set_defaults(func=_cmd_stats)

    return parser


async def _cmd_route(args: argparse.Namespace) -> int:
    """Route a single request."""
    from firstcontact.config.settings import Settings
    from firstcontact.router.factory import create_router

    try:
        input_data = _parse_input(args.task, args.input)
        options = json.loads(args.options) if args.options else None
    except json.JSONDecodeError as e:
        logger.error("Invalid JSON argument: %s", e)
        return 1

    overrides: dict[str, Any] = (
        {"ai_provider": "simulated", "ai_enable": True} if args.simulate else {}
    )
    router = create_router(Settings(**overrides))
    result = await router.route(args.task, input_data, options)
    print(result.model_dump_json(indent=2))
    return 0


async def _cmd_stats(args: argparse.Namespace) -> int:
    """Print router stats and active limits for this configuration."""
    from firstcontact.router.factory import create_router

    router = create_router()
    payload = {
        "stats": router.get_stats().model_dump(),
        "limits": router.budget.limits.model_dump(),
    }
    print(json.dumps(payload, indent=2))
    return 0


def _parse_input(task: str, raw: str) -> Any:
    """Navigator takes text; other tasks take a JSON client record."""
    if task == "navigator":
        return raw
    return json.loads(raw)


def _setup_logging(verbose: bool) -> None:
    """Configure logging for CLI usage from settings."""
    from firstcontact.config.settings import Settings
    from firstcontact.logging.logger import setup_logging

    settings = Settings()
    setup_logging(
        level="DEBUG" if verbose else settings.log_level,
        log_format=settings.log_format,
        log_file=settings.log_file,
        rotation=settings.log_rotation,
        backups=settings.log_retention,
    )
    # Quiet noisy libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("openai").setLevel(logging.WARNING)


if __name__ == "__main__":
    sys.exit(main())
