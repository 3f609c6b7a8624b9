"""
Catalog Preflight command line

Checks a product CSV against a marketplace format and optionally writes a
safely auto-fixed copy.

Usage:
    catalog-preflight check products.csv --format shopify
    catalog-preflight check products.csv --format shopify --fix fixed.csv --fix-log fixes.txt
    catalog-preflight check listings.csv --format ebay --report report.json
    catalog-preflight formats
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

from .common.csv_utils import read_csv, write_csv
from .common.exceptions import PreflightError
from .common.log_config import setup_logging
from .common.settings import get_settings
from .fixing import generate_fixes_log_text
from .pipeline import PreflightReport, run_preflight
from .schema import list_formats

logger = logging.getLogger(__name__)

EXIT_SUCCESS = 0
EXIT_COMMAND_ERROR = 1
EXIT_NOT_READY = 2

# Issues printed per severity before summarising the rest
_ISSUES_SHOWN = 20


class CliError(Exception):
    def __init__(self, message: str, code: int = EXIT_COMMAND_ERROR) -> None:
        super().__init__(message)
        self.code = code


def build_parser(default_format: str) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="catalog-preflight",
        description="Validate and safely auto-fix product catalog CSVs before marketplace import",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable verbose (debug) logging")
    parser.add_argument("--quiet", action="store_true",
                        help="Suppress info messages, show only warnings and errors")
    sub = parser.add_subparsers(dest="command", required=True)

    check = sub.add_parser("check", help="Validate a CSV file")
    check.add_argument("csv", help="Input CSV file")
    check.add_argument("--format", dest="format_id", default=default_format,
                       help=f"Target format id (default: {default_format})")
    check.add_argument("--fix", metavar="OUTPUT_CSV", help="Write the auto-fixed table to this file")
    check.add_argument("--fix-log", metavar="PATH", help="Write a plain-text fix log (needs --fix)")
    check.add_argument("--report", metavar="PATH",
                       help="Write the full report as JSON ('-' for stdout)")

    sub.add_parser("formats", help="List available formats")
    return parser


def print_report(report: PreflightReport, source: str) -> None:
    """Print a human-readable summary."""
    breakdown = report.breakdown
    print("=" * 60)
    print("Catalog Preflight")
    print("=" * 60)
    print(f"  File:    {source}")
    print(f"  Format:  {report.format_id}")
    print(f"  Rows:    {len(report.table.rows)}")
    if report.table.unknown_headers:
        print(f"  Kept unrecognized columns: {', '.join(report.table.unknown_headers)}")
    for canonical, headers in report.diagnostics.alias_collisions:
        print(f"  Note: {', '.join(headers)} all map to '{canonical}'; used '{headers[0]}'")

    print(f"\nSCORE: {breakdown.score}/100  ({breakdown.label})")
    counts = breakdown.counts
    print(f"  Errors: {counts.errors}  Warnings: {counts.warnings}  "
          f"Info: {counts.infos}  Blocking: {counts.blocking_errors}")
    for note in report.score_notes:
        print(f"  {note.label:12} {note.score:>3}  {note.note}")

    if report.readiness.blocking_groups:
        print("\nBLOCKING:")
        for group in report.readiness.blocking_groups:
            fixable = f", {group.auto_fixable_count} auto-fixable" if group.auto_fixable_count else ""
            print(f"  {group.count:>4}x  {group.title} [{group.code}]{fixable}")

    if report.issues:
        print("\nISSUES:")
        for issue in report.issues[:_ISSUES_SHOWN]:
            print(f"  [{issue.severity:7}] {issue.message}")
        if len(report.issues) > _ISSUES_SHOWN:
            print(f"  ... and {len(report.issues) - _ISSUES_SHOWN} more (use --report for all)")
    else:
        print("\nNo issues found!")

    if report.fix_result is not None:
        fixed = report.fixed_breakdown
        print(f"\nAUTO-FIX: {len(report.fix_result.fixes_applied)} change(s)")
        if fixed is not None:
            print(f"  Score after fixes: {fixed.score}/100  ({fixed.label})")
    print("=" * 60)


def cmd_check(args: argparse.Namespace) -> int:
    source = Path(args.csv)
    if not source.exists():
        raise CliError(f"CSV file not found: {source}")
    if args.fix_log and not args.fix:
        raise CliError("--fix-log needs --fix")

    parsed = read_csv(source)
    report = run_preflight(
        parsed.headers,
        parsed.rows,
        args.format_id,
        parse_errors=parsed.parse_errors,
        apply_fixes=bool(args.fix),
    )

    if args.report == "-":
        print(json.dumps(report.to_dict(), indent=2, ensure_ascii=False))
    else:
        print_report(report, str(source))
        if args.report:
            Path(args.report).write_text(
                json.dumps(report.to_dict(), indent=2, ensure_ascii=False), encoding="utf-8"
            )
            logger.info("Report saved to: %s", args.report)

    if report.fix_result is not None:
        written = write_csv(args.fix, report.fix_result.fixed_headers, report.fix_result.fixed_rows)
        logger.info("Fixed CSV saved to: %s (%d rows)", args.fix, written)
        if args.fix_log:
            Path(args.fix_log).write_text(
                generate_fixes_log_text(report.fix_result.fixes_applied,
                                        file_name=source.name, format_id=args.format_id),
                encoding="utf-8",
            )
            logger.info("Fix log saved to: %s", args.fix_log)
        ready = report.fixed_breakdown.ready if report.fixed_breakdown else report.breakdown.ready
    else:
        ready = report.breakdown.ready

    return EXIT_SUCCESS if ready else EXIT_NOT_READY


def cmd_formats(args: argparse.Namespace) -> int:
    for format_id, name in list_formats():
        print(f"{format_id:18} {name}")
    return EXIT_SUCCESS


def main(argv: Optional[List[str]] = None) -> int:
    load_dotenv()
    settings = get_settings()
    parser = build_parser(settings.default_format)
    args = parser.parse_args(argv)

    setup_logging(verbose=args.verbose, quiet=args.quiet, verbosity=settings.log_verbosity)

    try:
        if args.command == "formats":
            return cmd_formats(args)
        return cmd_check(args)
    except CliError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return exc.code
    except PreflightError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return EXIT_COMMAND_ERROR


if __name__ == "__main__":
    sys.exit(main())
