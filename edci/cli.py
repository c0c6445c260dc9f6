"""
EDCI Engine CLI
"""

import argparse
import logging
from pathlib import Path
import sys
from typing import List, Optional

from edci.__version__ import __version__
from edci.config.loader import load_config
from edci.reporting.export import EXPORT_FORMATS

logger = logging.getLogger(__name__)


def _print_overview(overview: dict) -> None:
    print(
        f"Hospitals: {overview['hospitals']} | "
        f"normal: {overview['normal']} | "
        f"warning: {overview['warning']} | "
        f"critical: {overview['critical']} | "
        f"patients: {overview['total_patients']} | "
        f"average EDCI: {overview['average_edci']:.2f}"
    )


# -------------------------------------------------
# CLI ENTRY
# -------------------------------------------------
def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description=f"EDCI Engine v{__version__}"
    )

    parser.add_argument("input", nargs="?", help="Census CSV or Excel file to score")
    parser.add_argument("--config", required=False, help="Path to config YAML")

    parser.add_argument("--once", action="store_true", help="Run one fetch-and-score cycle")
    parser.add_argument("--poll", action="store_true", help="Poll the upstream API on an interval")
    parser.add_argument("--watch", help="Watch folder for new census files")

    parser.add_argument("--check-api", action="store_true", help="Test the upstream API connection")
    parser.add_argument("--trend", metavar="CODE", help="Plot a synthetic 24h EDCI trend for a hospital")

    parser.add_argument("--user", help="Only show hospitals this user may view")
    parser.add_argument("--format", choices=EXPORT_FORMATS, help="Export format")
    parser.add_argument("--legacy", action="store_true",
                        help="Score without nurse and patient flow data")
    parser.add_argument("--version", action="store_true")
    parser.add_argument("-v", "--verbose", action="store_true")

    args = parser.parse_args(argv)

    # ---- VERSION ----
    if args.version:
        print(f"EDCI Engine v{__version__}")
        return 0

    # ---- LOGGING ----
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
    )

    config = load_config(args.config)

    # ---- API CHECK ----
    if args.check_api:
        from edci.acquisition.fetcher import check_api_connection
        from edci.config.loader import load_api_settings

        status = check_api_connection(load_api_settings(config))
        print(status["message"])
        return 0 if status["success"] else 1

    # ---- TREND CHART ----
    if args.trend:
        from edci.acquisition.mock_data import generate_trend_data
        from edci.automation.batch_runner import run_dir_for
        from edci.config.loader import load_weight_config
        from edci.reporting.visuals import plot_edci_trend

        thresholds = load_weight_config(config).thresholds
        series = generate_trend_data(args.trend, thresholds=thresholds)
        out = plot_edci_trend(
            series,
            run_dir_for(config.get("output_dir", "runs")) / f"{args.trend}_trend.png",
            thresholds=thresholds,
            title=f"{args.trend} EDCI (last 24h)",
        )
        print(f"📈 Trend chart: {out}")
        return 0

    # ---- WATCH ----
    if args.watch:
        from edci.automation.file_watcher import start_watcher

        start_watcher(args.watch, args.config)
        return 0

    # ---- POLL ----
    if args.poll:
        from edci.automation.poller import start_poller

        start_poller(args.config, username=args.user)
        return 0

    # ---- ONE CYCLE ----
    if args.once:
        from edci.automation.poller import run_cycle

        if args.format:
            config["export"]["format"] = args.format
            config["export"]["enabled"] = True

        report = run_cycle(config, username=args.user)

        print(f"Data source: {report.source}")
        if report.error:
            print(f"Warning: {report.error}")
        _print_overview(report.overview)
        for alert in report.alerts:
            print(alert.message)
        if report.export:
            print(f"Export: {report.export}")
        return 0

    # ---- SINGLE FILE ----
    if not args.input:
        parser.error("Input file required (or use --once, --poll, --watch)")

    input_path = Path(args.input)
    if not input_path.exists():
        raise FileNotFoundError(input_path)

    from edci.automation.batch_runner import run_dir_for, score_census_file

    run_dir = run_dir_for(config.get("output_dir", "runs"))
    run_dir.mkdir(parents=True, exist_ok=True)
    logger.info("Run directory: %s", run_dir)

    result = score_census_file(
        input_path,
        config,
        run_dir,
        fmt=args.format,
        legacy=args.legacy,
        username=args.user,
    )

    print("\n✅ Census scored")
    _print_overview(result["overview"])
    print(f"📄 Export: {result['export']}")
    print(f"📁 Run folder: {run_dir}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
