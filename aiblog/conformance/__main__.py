"""
CLI entry point for the conformance checker.

Usage:
    # Check the installed aiblog package
    python -m aiblog.conformance

    # Check another package laid out the same way
    python -m aiblog.conformance --root path/to/pkg --package pkg

Exit status is 0 when every rule passes, 1 on violations, 2 when the
package cannot be scanned. The report goes to stdout, log lines to stderr.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from aiblog.conformance.checker import check
from aiblog.conformance.codebase import ScanError, scan_package
from aiblog.conformance.policy import default_rules
from aiblog.shared.logging import configure_logging

logger = logging.getLogger(__name__)

DEFAULT_ROOT = Path(__file__).resolve().parent.parent


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="python -m aiblog.conformance",
        description="Check layering, placement, cycles, entity shape and AI boundaries.",
    )
    parser.add_argument("--root", type=Path, default=DEFAULT_ROOT, help="Root package directory")
    parser.add_argument("--package", default=None, help="Import name of the root package")
    parser.add_argument(
        "--entity-base",
        action="append",
        dest="entity_bases",
        default=None,
        help="Declarative base class name (repeatable, default: Base)",
    )
    parser.add_argument("--log-level", default="WARNING", help="Log level for diagnostics")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(level=args.log_level, stream=sys.stderr)

    try:
        codebase = scan_package(args.root, args.package)
    except ScanError as exc:
        logger.error("Cannot scan %s: %s", args.root, exc.message)
        return 2

    rules = default_rules(codebase.package, tuple(args.entity_bases or ("Base",)))
    report = check(codebase, rules)
    print(report.format())
    return 0 if report.passed else 1


if __name__ == "__main__":
    sys.exit(main())
