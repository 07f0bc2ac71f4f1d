"""Command-line entry point: ``python -m elbert [QUERY]``.

Builds the index from the configured application directories and plugin
manifests, runs one query and prints the results as JSON on stdout.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys

import structlog
from pydantic import ValidationError
from pydantic_settings import SettingsError

from elbert.config import Settings
from elbert.errors import ElbertError
from elbert.logging_config import setup_logging
from elbert.state import AppState

log = structlog.get_logger()


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="elbert",
        description="Search installed applications and plugin commands.",
    )
    parser.add_argument("query", nargs="?", default="", help="search text (empty for browse list)")
    parser.add_argument("--limit", type=int, default=None, help="print at most this many results")
    return parser.parse_args(argv)


async def _run(state: AppState, query: str) -> list[dict[str, object]]:
    await state.refresh()
    return [result.model_dump(mode="json") for result in state.search(query)]


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)

    try:
        settings = Settings()
    except (ValidationError, SettingsError) as exc:
        print(f"Invalid configuration:\n{exc}", file=sys.stderr)
        return 2

    setup_logging(settings.logging)
    state = AppState.from_settings(settings)

    try:
        results = asyncio.run(_run(state, args.query))
    except ElbertError as exc:
        log.error("refresh_failed", code=exc.code.value, reason=exc.message)
        print(json.dumps(exc.to_dict()), file=sys.stderr)
        return 1

    if args.limit is not None:
        results = results[: max(args.limit, 0)]
    print(json.dumps(results, indent=2))
    return 0
