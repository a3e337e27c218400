"""
Command-line entry point for the promo curator.

Exit codes: 0 when the check passes, 1 when issues were found, 2 when the
configuration, the catalog or a URL could not be processed.
"""

import argparse
import sys
from datetime import date
from typing import List, Optional

from . import __version__
from .components.expiry_checker import find_expired_promos
from .components.promo_validator import check_submission, validate_promo_entries
from .components.report_formatter import ReportFormatter
from .models.config import InvalidUrlPolicy, ValidatorConfig
from .models.promo import PromoEntry
from .services.catalog_loader import CatalogLoader
from .services.config_manager import ConfigurationManager
from .utils.error_handling import PromoCuratorError
from .utils.logging import get_logger, setup_logging

EXIT_OK = 0
EXIT_ISSUES = 1
EXIT_ERROR = 2


def _iso_date(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not an ISO date: {value!r}") from None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="promo-curator",
        description="Validate and curate the AI promo catalog.",
    )
    parser.add_argument("--version", action="version", version=__version__)
    parser.add_argument("--config", help="Path to a configuration file")
    parser.add_argument("--catalog", help="Path to the catalog file (YAML or JSON)")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        type=str.upper,
        help="Override the configured log level",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    validate_parser = subparsers.add_parser(
        "validate", help="Check the catalog for duplicate URLs and similar titles"
    )
    validate_parser.add_argument(
        "--threshold", type=float, help="Minimum title similarity to report"
    )
    validate_parser.add_argument(
        "--invalid-urls",
        choices=[policy.value for policy in InvalidUrlPolicy],
        help="Fail on unparseable URLs (raise) or report and continue (skip)",
    )

    check_parser = subparsers.add_parser(
        "check", help="Check one proposed promo against the catalog"
    )
    check_parser.add_argument("--title", required=True, help="Proposed promo title")
    check_parser.add_argument("--url", required=True, help="Proposed promo URL")
    check_parser.add_argument("--id", default="submission", help="Proposed promo id")
    check_parser.add_argument(
        "--threshold", type=float, help="Minimum title similarity to report"
    )

    expired_parser = subparsers.add_parser(
        "expired", help="List promos whose expiry date has passed"
    )
    expired_parser.add_argument(
        "--today", type=_iso_date, help="Reference date (YYYY-MM-DD)"
    )
    expired_parser.add_argument(
        "--json", action="store_true", help="Print a JSON array for automation"
    )

    return parser


def _resolve_config(args: argparse.Namespace) -> ValidatorConfig:
    config = ConfigurationManager(args.config).load_config()

    if args.catalog:
        config.catalog_path = args.catalog
    if args.log_level:
        config.log_level = args.log_level
    if getattr(args, "threshold", None) is not None:
        config.title_similarity_threshold = args.threshold
    if getattr(args, "invalid_urls", None):
        config.invalid_url_policy = InvalidUrlPolicy(args.invalid_urls)

    config.validate()
    return config


def run_validate(config: ValidatorConfig, formatter: ReportFormatter) -> int:
    entries = CatalogLoader(config.catalog_path).load()
    report = validate_promo_entries(
        entries,
        threshold=config.title_similarity_threshold,
        invalid_url_policy=config.invalid_url_policy,
    )
    text = formatter.format_validation_report(report, config.title_similarity_threshold)

    if report.has_issues:
        print(text, file=sys.stderr)
        return EXIT_ISSUES

    print(text)
    return EXIT_OK


def run_check(
    args: argparse.Namespace, config: ValidatorConfig, formatter: ReportFormatter
) -> int:
    catalog = CatalogLoader(config.catalog_path).load()
    candidate = PromoEntry(id=args.id, title=args.title, url=args.url)
    result = check_submission(
        candidate,
        catalog,
        threshold=config.title_similarity_threshold,
        invalid_url_policy=config.invalid_url_policy,
    )
    text = formatter.format_submission_check(result, config.title_similarity_threshold)

    if result.is_duplicate:
        print(text, file=sys.stderr)
        return EXIT_ISSUES

    print(text)
    return EXIT_OK


def run_expired(
    args: argparse.Namespace, config: ValidatorConfig, formatter: ReportFormatter
) -> int:
    entries = CatalogLoader(config.catalog_path).load()
    expired = find_expired_promos(entries, today=args.today)

    if args.json:
        print(formatter.format_expired_json(expired))
        return EXIT_OK

    print(formatter.format_expired(expired))
    return EXIT_ISSUES if expired else EXIT_OK


def main(argv: Optional[List[str]] = None) -> int:
    """Main application entry point."""
    args = build_parser().parse_args(argv)

    try:
        config = _resolve_config(args)
    except (ValueError, FileNotFoundError) as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return EXIT_ERROR

    setup_logging(log_dir=config.log_dir, log_level=config.log_level)
    logger = get_logger("main")
    logger.info(
        "Running command",
        extra={"command": args.command, "catalog_path": config.catalog_path},
    )

    formatter = ReportFormatter()

    try:
        if args.command == "validate":
            return run_validate(config, formatter)
        if args.command == "check":
            return run_check(args, config, formatter)
        return run_expired(args, config, formatter)
    except (PromoCuratorError, ValueError) as e:
        # candidate validation and expiry date parsing raise plain ValueErrors
        logger.error("Command failed", extra={"error": str(e)})
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR


if __name__ == "__main__":
    sys.exit(main())
