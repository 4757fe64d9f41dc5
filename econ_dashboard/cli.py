"""Command-line summary and JSON export of the indicator dashboard."""

import argparse
import json
import logging
import sys
from pathlib import Path

from econ_dashboard.config import COLUMN_VARIANTS, INDICATOR_SETS, Settings, format_value
from econ_dashboard.data import DataLoadError, DatasetLoader
from econ_dashboard.indicators.calculator import ANALYSIS_INFO
from econ_dashboard.indicators.dashboard import DashboardView, default_state, recompute
from econ_dashboard.models import DashboardState, LatestChange, MAX_SELECTED_INDICATORS


logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Economic indicators dashboard data")
    source = parser.add_mutually_exclusive_group()
    source.add_argument("--csv", type=Path, help="Local CSV file to load")
    source.add_argument("--url", type=str, help="Remote CSV URL to fetch")
    parser.add_argument(
        "--variant",
        choices=sorted(COLUMN_VARIANTS),
        help="CSV column naming variant (default from ECON_DASHBOARD_VARIANT)",
    )
    parser.add_argument(
        "--quote-aware",
        action="store_true",
        help="Honour double-quoted fields containing commas",
    )
    parser.add_argument(
        "--select",
        action="append",
        metavar="ID",
        help=f"Indicator to chart (repeatable, up to {MAX_SELECTED_INDICATORS})",
    )
    parser.add_argument(
        "--indexed",
        action="store_true",
        help="Rebase selected indicators to 100 at their first value",
    )
    parser.add_argument(
        "--range",
        nargs=2,
        type=int,
        metavar=("START", "END"),
        help="Inclusive observation positions to chart",
    )
    parser.add_argument("--export", type=Path, help="Write chart data as JSON")
    parser.add_argument("--verbose", action="store_true", help="Debug logging")
    return parser


def format_change(latest: LatestChange) -> str:
    """Signed change, in percentage points or percent."""
    if latest.change is None:
        return "change n/a"
    unit = "pp" if latest.is_percentage_point else "%"
    return f"{latest.change:+.2f}{unit}"


def print_summary(view: DashboardView, indicators: dict) -> None:
    """Print the dashboard headline numbers."""
    print("\nEconomic Indicators Dashboard")
    print("=" * 60)
    print(f"Observations: {view.observation_count} ({view.rejected_rows} rows rejected)")

    if view.latest:
        print("\nLatest values:")
        for indicator_id, latest in view.latest.items():
            definition = indicators[indicator_id]
            if latest is None:
                print(f"  {definition.label:25} | N/A")
                continue
            value = format_value(definition, latest.value)
            print(f"  {definition.label:25} | {value:>10} ({format_change(latest)}, {latest.date})")

    print("\n" + "-" * 60)
    sahm = view.derived.latest_sahm
    if sahm is not None:
        status = "RECESSION SIGNAL" if sahm.is_recession else "no signal"
        print(f"{ANALYSIS_INFO['sahm']['name']:25} | {sahm.sahm_value:5.2f} ({status})")
    else:
        print(f"{ANALYSIS_INFO['sahm']['name']:25} | insufficient history")

    misery = view.derived.latest_misery
    if misery is not None:
        print(f"{ANALYSIS_INFO['misery']['name']:25} | {misery.misery_index:5.2f}")
    else:
        print(f"{ANALYSIS_INFO['misery']['name']:25} | insufficient history")

    if view.derived.has_buffett_data and view.derived.buffett:
        ratio = view.derived.buffett[-1].ratio
        print(f"{ANALYSIS_INFO['buffett']['name']:25} | {ratio:5.1f}%")
    else:
        print(f"{ANALYSIS_INFO['buffett']['name']:25} | {ANALYSIS_INFO['buffett']['missing']}")

    if len(view.state.selected) >= 2:
        r2 = "insufficient data" if view.r_squared is None else f"{view.r_squared:.2f}"
        print(f"{'R-squared':25} | {r2}")


def main(argv: list[str] | None = None) -> None:
    """CLI entry point."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )

    try:
        settings = Settings()
        if args.variant:
            settings.variant = args.variant
        if args.quote_aware:
            settings.quote_aware = True
        settings.validate()

        with DatasetLoader(settings) as loader:
            variant = settings.variant
            if args.csv:
                loader.load_file(args.csv)
            elif args.url:
                loader.load_url(args.url)
            elif settings.csv_path is not None or settings.has_remote():
                loader.load_default()
            else:
                logger.info("No CSV configured, using bundled sample data")
                loader.load_sample()
                variant = "legacy"
            store = loader.store

        indicators = INDICATOR_SETS[variant]
        if args.select:
            unknown = [i for i in args.select if i not in indicators]
            if unknown:
                raise ValueError(
                    f"Unknown indicator(s): {', '.join(unknown)}. "
                    f"Available: {', '.join(indicators)}"
                )
            if len(args.select) > MAX_SELECTED_INDICATORS:
                raise ValueError(f"Select at most {MAX_SELECTED_INDICATORS} indicators")
            state = DashboardState(selected=tuple(dict.fromkeys(args.select)))
        else:
            state = default_state(variant)
        state = state.with_view_mode("indexed" if args.indexed else "raw")
        if args.range:
            state = state.with_date_range(tuple(args.range))

        view = recompute(store, state, indicators, COLUMN_VARIANTS[variant])

    except ValueError as e:
        print(f"Configuration error: {e}")
        sys.exit(1)
    except DataLoadError as e:
        print(f"Load error: {e}")
        sys.exit(1)

    print_summary(view, indicators)

    if args.export:
        with open(args.export, "w") as f:
            json.dump(view.to_dict(), f, indent=2)
        print(f"\nSaved {len(view.chart)} chart rows to {args.export}")


if __name__ == "__main__":
    main()
