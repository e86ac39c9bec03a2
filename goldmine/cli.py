from __future__ import annotations

import argparse
import logging
import sys

from goldmine.achievement import ACHIEVEMENTS
from goldmine.catalog import default_catalog
from goldmine.config import EngineConfig
from goldmine.formatting import format_catalog, format_text_report
from goldmine.requirement import Req
from goldmine.simulation import Simulation
from goldmine.strategy import STRATEGY_CATEGORIES, ClickProfile, GreedyCheapest, Strategy


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="goldmine",
        description="Terminal Gold Mine idle game simulation core",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )
    sub = parser.add_subparsers(dest="command")

    sub.add_parser("catalog", help="Show upgrades and achievements")

    sim = sub.add_parser("simulate", help="Autoplay the game headlessly")
    sim.add_argument(
        "--strategy",
        default="greedy",
        choices=sorted(STRATEGY_CATEGORIES),
        help="Purchase strategy (default: greedy)",
    )
    sim.add_argument("--cps", type=float, default=0.0, help="Click attempts per second")
    sim.add_argument(
        "--click-until",
        action="append",
        default=None,
        metavar="ID",
        choices=[u.id for u in default_catalog()] + [a.id for a in ACHIEVEMENTS],
        help="Stop clicking once this upgrade is owned or achievement unlocked"
        " (repeatable; any one stops clicking)",
    )
    sim.add_argument(
        "--duration", type=float, default=3600, help="Game time to simulate (s)"
    )
    sim.add_argument(
        "--tick-resolution", type=float, default=0.5, help="Seconds per tick"
    )
    sim.add_argument(
        "--click-cooldown", type=float, default=None, help="Override click cooldown (s)"
    )
    sim.add_argument("--export-csv", default=None, help="CSV export path prefix")
    sim.add_argument("--export-json", default=None, help="JSON export path")
    sim.add_argument("--plot", default=None, help="Plot output path (PNG)")

    return parser


def build_strategy(
    name: str, cps: float, click_until: list[str] | None = None
) -> Strategy:
    click_profile = None
    if cps > 0:
        catalog = default_catalog()
        stops = [
            Req.owns(target) if target in catalog else Req.achievement(target)
            for target in click_until or []
        ]
        click_profile = ClickProfile(
            clicks_per_second=cps,
            active_until=Req.any(*stops) if stops else None,
        )
    return GreedyCheapest(
        click_profile=click_profile, categories=STRATEGY_CATEGORIES.get(name)
    )


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "catalog":
        print(format_catalog(default_catalog()))

    elif args.command == "simulate":
        config = EngineConfig()
        if args.click_cooldown is not None:
            config.click_cooldown = args.click_cooldown

        try:
            sim = Simulation(
                strategy=build_strategy(args.strategy, args.cps, args.click_until),
                duration=args.duration,
                tick_resolution=args.tick_resolution,
                config=config,
            )
        except ValueError as exc:
            print(f"Error: {exc}", file=sys.stderr)
            sys.exit(2)

        report = sim.run()
        print(format_text_report(report))

        if args.export_csv:
            from goldmine.export import export_csv
            export_csv(report, args.export_csv)
            print(f"\nCSV exported to {args.export_csv}_*.csv")

        if args.export_json:
            from goldmine.export import export_json
            export_json(report, args.export_json)
            print(f"\nJSON exported to {args.export_json}")

        if args.plot:
            from goldmine.visualization import plot_simulation
            plot_simulation(report, args.plot)
            print(f"\nPlot saved to {args.plot}")


if __name__ == "__main__":
    main()
