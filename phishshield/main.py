"""Command line entry point for PhishShield.

Usage:
    phishshield check https://secure-login-verify.info/login
    phishshield check --json example.com facebok.com
    phishshield report some-site.com
    phishshield stats [--reset]
    phishshield maintenance
    phishshield --env-file /etc/phishshield/phishshield.env check example.com
"""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys

from . import __version__
from .config import load_config, validate_config
from .constants import Verdict
from .errors import PhishShieldError
from .presentation import format_result
from .service import ShieldService

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_DANGEROUS = 2


def _load_env_file(path: str) -> None:
    """Load environment variables from a .env-style file."""
    from dotenv import dotenv_values

    values = dotenv_values(path)
    for key, value in values.items():
        if value is None:
            continue
        os.environ[key] = value


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="phishshield", description="Classify hostnames for phishing risk.")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--env-file", help="Load environment variables from this file first")
    subparsers = parser.add_subparsers(dest="command", required=True)

    check = subparsers.add_parser("check", help="Classify one or more URLs or hostnames")
    check.add_argument("targets", nargs="+")
    check.add_argument("--json", action="store_true", help="Emit JSON lines instead of text")

    report = subparsers.add_parser("report", help="Report a false positive and whitelist the domain")
    report.add_argument("domain")
    report.add_argument("--note", default="", help="Optional note stored with the report")

    stats = subparsers.add_parser("stats", help="Show usage statistics")
    stats.add_argument("--reset", action="store_true")

    subparsers.add_parser("maintenance", help="Drop expired reports")
    return parser


def run(args: argparse.Namespace, service: ShieldService) -> int:
    if args.command == "check":
        exit_code = EXIT_OK
        for target in args.targets:
            result = service.check(target)
            if args.json:
                print(json.dumps(result.to_dict()))
            else:
                print(format_result(result))
            if result.status == Verdict.DANGEROUS:
                exit_code = EXIT_DANGEROUS
        return exit_code

    if args.command == "report":
        details = {"note": args.note} if args.note else {}
        report = service.report_false_positive(args.domain, details)
        print(f"Report submitted{' (' + report['report_id'] + ')' if report else ''}; domain whitelisted")
        return EXIT_OK

    if args.command == "stats":
        stats = service.stats.reset() if args.reset else service.stats.snapshot()
        for key, value in stats.items():
            print(f"{key}: {value}")
        return EXIT_OK

    if args.command == "maintenance":
        fp_cleaned, err_cleaned = service.run_maintenance()
        print(f"Removed {fp_cleaned} false positive reports and {err_cleaned} error reports")
        return EXIT_OK

    raise ValueError(f"Unknown command: {args.command}")


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    if args.env_file:
        _load_env_file(args.env_file)

    try:
        config = load_config()
    except ValueError as exc:
        _configure_logging("INFO")
        logger.error("Configuration error: %s", exc)
        return EXIT_ERROR
    _configure_logging(config.log_level)

    errors = validate_config(config)
    if errors:
        for error in errors:
            logger.error("Configuration error: %s", error)
        return EXIT_ERROR

    try:
        service = ShieldService(config)
        return run(args, service)
    except (PhishShieldError, ValueError, OSError) as exc:
        logger.error("%s", exc)
        return EXIT_ERROR


if __name__ == "__main__":
    sys.exit(main())
