"""Command-line entrypoint for seeding base recipes."""

import argparse
import asyncio
import logging
from collections.abc import Sequence

from fitswap.app_logging import configure_logging
from fitswap.config import Settings
from fitswap.containers import AppContainer, build_container
from fitswap.domain.recipe import Goal
from fitswap.services.seeding import SeedReport

_logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="fitswap-seed",
        description="Generate base recipes for each goal and category.",
    )
    parser.add_argument(
        "--goal",
        action="append",
        choices=[goal.value for goal in Goal],
        help="Goal to seed (repeatable). Defaults to every goal.",
    )
    parser.add_argument(
        "--per-category",
        type=int,
        default=1,
        help="Recipes to generate per category (default: 1).",
    )
    parser.add_argument(
        "--delay",
        type=float,
        default=None,
        help="Seconds to wait between recipes (default: from settings).",
    )
    return parser


async def run(
    container: AppContainer,
    goals: Sequence[Goal],
    per_category: int,
    delay: float | None = None,
) -> SeedReport:
    """Run the seeder and release container resources."""
    seeder = container.seeder
    try:
        if seeder is None:
            raise RuntimeError("Seeding requires OPENAI_API_KEY to be configured")
        if delay is not None:
            seeder.delay_seconds = delay
        return await seeder.seed(goals, per_category=per_category)
    finally:
        await container.close_resources()


def main(argv: Sequence[str] | None = None) -> int:
    """Seed recipes and return a process exit code."""
    args = build_parser().parse_args(argv)
    configure_logging()
    goals = [Goal(value) for value in args.goal] if args.goal else list(Goal)
    container = build_container(Settings())
    try:
        report = asyncio.run(run(container, goals, args.per_category, args.delay))
    except RuntimeError as exc:
        _logger.error("%s", exc)
        return 2
    _logger.info("Saved %s recipes, %s failed", len(report.saved), len(report.failed))
    return 1 if report.failed and not report.saved else 0


if __name__ == "__main__":
    raise SystemExit(main())
