"""access-report — percentage breakdown of an access log by country, OS and browser."""

import logging
import sys
from argparse import ArgumentParser

from access_report.config import LOG_LEVELS, OUTPUT_FORMATS, load_config
from access_report.formatter import get_formatter
from access_report.geo import GeoDatabaseError
from access_report.pipeline import run_report

logger = logging.getLogger("access_report")


def build_parser() -> ArgumentParser:
    """Build the CLI argument parser."""
    parser = ArgumentParser(
        prog="access-report",
        description="Report request distribution by country, OS and browser.",
    )
    parser.add_argument(
        "log_file",
        nargs="?",
        help="Access log to analyse (default: config / ACCESS_LOG_FILE)",
    )
    parser.add_argument(
        "--geoip-db",
        help="Path to a GeoLite2/GeoIP2 country database (.mmdb)",
    )
    parser.add_argument(
        "--threshold",
        type=float,
        help="Minimum percentage for a label to be listed on its own (default: 1.0)",
    )
    parser.add_argument(
        "--output",
        choices=OUTPUT_FORMATS,
        help="Output format (default: text)",
    )
    parser.add_argument(
        "--dimensions",
        help="Comma-separated dimensions to report: country,os,browser",
    )
    parser.add_argument(
        "--config",
        help="YAML config file (default: CONFIG_PATH env var)",
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        help="Diagnostic log level written to stderr (default: WARNING)",
    )
    return parser


def run(argv=None) -> int:
    args = build_parser().parse_args(argv)

    try:
        config = load_config(
            args.config,
            log_file=args.log_file,
            geoip_db=args.geoip_db,
            threshold=args.threshold,
            output_format=args.output,
            dimensions=args.dimensions,
            log_level=args.log_level,
        )
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    logging.basicConfig(
        level=getattr(logging, config.log_level),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        stream=sys.stderr,
    )
    logger.debug("Config: %s", config)

    try:
        result = run_report(config)
    except FileNotFoundError as e:
        print(f"Error: File not found - {e}", file=sys.stderr)
        return 2
    except (GeoDatabaseError, OSError, ValueError) as e:
        logger.debug("Run failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except Exception as e:
        logger.debug("Unexpected failure", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if result.skipped_lines > 0:
        print(f"Warning: Skipped {result.skipped_lines} unparseable lines.", file=sys.stderr)

    formatter = get_formatter(config.output_format)
    print(formatter(
        result.reports,
        skipped_lines=result.skipped_lines,
        total_entries=result.total_entries,
    ))
    return 0


def main():
    sys.exit(run())


if __name__ == "__main__":
    try:
        main()
    except KeyboardInterrupt:
        sys.exit(0)
    except BrokenPipeError:
        sys.exit(0)
