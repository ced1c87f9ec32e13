"""Main entry point for the marble genetic algorithm.

Runs the evolution headless: a level is loaded from a configuration file, a
random population is launched into the arena and evolved for a number of
generations, logging the best marble of every generation.
"""

import argparse
import logging
import random
import sys
from pathlib import Path

import orjson

from marble_ga.config.loader import DEFAULT_CONFIG_PATH, load_configuration
from marble_ga.exceptions import MarbleError
from marble_ga.logging_config import configure_logging
from marble_ga.runner import DEFAULT_MAX_TICKS_PER_GENERATION, build_runner

logger = logging.getLogger(__name__)


def export_stats(path: Path, reports, seed, level: int) -> None:
    """Write the per-generation reports of a run to a JSON file."""
    payload = {
        "seed": seed,
        "level": level,
        "generations": [report.to_dict() for report in reports],
    }
    path.write_bytes(orjson.dumps(payload, option=orjson.OPT_INDENT_2))
    logger.info("Stats exported to %s", path)


def run(args: argparse.Namespace) -> int:
    configuration = load_configuration(args.config)
    rng = random.Random(args.seed)

    runner = build_runner(
        configuration,
        level_number=args.level,
        rng=rng,
        max_ticks_per_generation=args.max_ticks,
    )
    reports = runner.run(args.generations, stop_on_goal=args.stop_on_goal)

    if reports:
        best = max(reports, key=lambda report: report.best_fitness)
        logger.info(
            "Best marble: generation %d, power %.3f, angle %.3f, distance %.2f",
            best.generation,
            best.best_genome["power"],
            best.best_genome["angle"],
            best.closest_distance,
        )

    if args.export_stats:
        export_stats(Path(args.export_stats), reports, args.seed, args.level)
    return 0


def main(argv=None) -> int:
    """Parse command-line arguments and run the evolution."""
    parser = argparse.ArgumentParser(
        description="Marble genetic algorithm",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Evolve the first level of the bundled configuration for 50 generations
  python main.py --generations 50

  # Reproducible run on the second level, stopping once the goal is reached
  python main.py --level 1 --seed 42 --stop-on-goal

  # Export per-generation stats
  python main.py --generations 100 --export-stats run.json
        """,
    )

    parser.add_argument(
        "--config",
        type=str,
        default=str(DEFAULT_CONFIG_PATH),
        help="Level configuration file (default: bundled default.json)",
    )
    parser.add_argument(
        "--level", type=int, default=0, help="Level number within the configuration (default: 0)"
    )
    parser.add_argument(
        "--generations",
        type=int,
        default=30,
        help="Number of generations to evaluate (default: 30)",
    )
    parser.add_argument(
        "--max-ticks",
        type=int,
        default=DEFAULT_MAX_TICKS_PER_GENERATION,
        help="Ticks a generation may take to settle "
        f"(default: {DEFAULT_MAX_TICKS_PER_GENERATION})",
    )
    parser.add_argument(
        "--seed", type=int, default=None, help="Random seed for deterministic behavior (optional)"
    )
    parser.add_argument(
        "--stop-on-goal",
        action="store_true",
        help="Stop as soon as a generation's best marble rests inside the goal",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        help="Log level (default: MARBLE_GA_LOG_LEVEL or INFO)",
    )
    parser.add_argument(
        "--export-stats",
        type=str,
        default=None,
        metavar="FILENAME",
        help="Export per-generation stats to a JSON file",
    )

    args = parser.parse_args(argv)
    configure_logging(level=args.log_level)

    try:
        return run(args)
    except MarbleError as e:
        logger.error("Run failed: %s", e)
        return 1


if __name__ == "__main__":
    sys.exit(main())
