#!/usr/bin/env python3
"""Example: run a full horse race and print the results.

By default the race runs in real time on a background ticker (a few seconds
per round). With --fast the ticks are driven manually against a simulated
clock, so the race completes instantly with the same finish times it would
have had in real time.

Usage:
    python examples/run_race.py [--seed N] [--fast] [--export]

Examples:
    python examples/run_race.py --fast --seed 42
    python examples/run_race.py --config race.json --export --output-dir out
"""

import argparse
import logging
import sys
import time
from pathlib import Path

# Add src to path for development
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from derbysim import RaceConfig, RaceEngine, load_config
from derbysim.analysis import compute_standings
from derbysim.exceptions import ConfigurationError
from derbysim.output import ConsoleOutput, Exporter
from derbysim.simulation import EngineStatus, ManualTicker, SimulatedClock


def main():
    parser = argparse.ArgumentParser(description="Simulate a multi-round horse race")
    parser.add_argument(
        "--config",
        help="JSON race configuration (default: built-in settings)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        help="Random seed (overrides the config seed)",
    )
    parser.add_argument(
        "--fast",
        action="store_true",
        help="Run ticks against a simulated clock instead of waiting",
    )
    parser.add_argument(
        "--progress",
        action="store_true",
        help="Print the track every second while running in real time",
    )
    parser.add_argument(
        "--export",
        action="store_true",
        help="Export results to CSV/JSON",
    )
    parser.add_argument(
        "--output-dir",
        default="output",
        help="Output directory for exports (default: output)",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Log every finish and pause",
    )
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)-7s %(name)s: %(message)s",
    )

    try:
        config = load_config(args.config) if args.config else RaceConfig()
    except ConfigurationError as e:
        print(f"Error loading configuration: {e}")
        for error in e.details.get("errors", []):
            print(f"  {'.'.join(str(p) for p in error['loc'])}: {error['msg']}")
        return 1

    if args.seed is not None:
        config = config.model_copy(update={"seed": args.seed})

    print("Horse Race Simulation")
    print(f"{'=' * 40}")
    print(f"Horses: {config.pool_size} ({config.competitors_per_round} per round)")
    print(f"Rounds: {', '.join(f'{d}m' for d in config.distances)}")
    print(f"Mode: {'fast' if args.fast else 'real time'}")
    print()

    if args.fast:
        clock = SimulatedClock()
        ticker = ManualTicker(clock=clock)
        engine = RaceEngine(config=config, ticker=ticker, clock=clock)
        engine.start()
        ticks = ticker.run_until_stopped()
        print(f"Simulated {ticks} ticks ({clock.now() / 1000:.1f}s of race time)")
    else:
        engine = RaceEngine(config=config)
        engine.start()
        try:
            while engine.status != EngineStatus.FINISHED:
                time.sleep(1.0)
                if args.progress:
                    ConsoleOutput.print_progress(engine)
        except KeyboardInterrupt:
            engine.reset()
            print("\nRace aborted")
            return 130

    roster = engine.roster
    for result in engine.results:
        ConsoleOutput.print_round_result(result, roster)

    ConsoleOutput.print_race_summary(engine.results, roster)
    ConsoleOutput.print_standings(compute_standings(engine.results, roster))

    if args.export:
        print(f"\nExporting results to {args.output_dir}/...")
        exporter = Exporter(output_dir=args.output_dir)
        files = exporter.export_all(engine.results, roster, prefix="race")

        print("Exported files:")
        for fmt, path in files.items():
            print(f"  {fmt}: {path}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
