"""Command-line entrypoint for geofeed verification."""
from __future__ import annotations

import argparse
import logging
import sys

from geofeed_verifier import __version__
from geofeed_verifier.application.dto import VerificationOptions
from geofeed_verifier.application.use_cases import process_geofeed
from geofeed_verifier.config import SETTINGS
from geofeed_verifier.domain.errors import GeofeedError, InvalidGeofeedError
from geofeed_verifier.logging_config import configure_logging
from geofeed_verifier.presentation.diff_report import invalid_summary_lines, render_text

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="geofeed-verifier",
        description="Verify an RFC 8805 geofeed and compare it against a MaxMind database",
    )
    parser.add_argument("-gf", "--gf", dest="gf", default="", help="Path to local geofeed file to verify")
    parser.add_argument(
        "-db",
        "--db",
        dest="db",
        default=SETTINGS.city_db_path,
        help="Path to MMDB file to compare geofeed file against",
    )
    parser.add_argument("-isp", "--isp", dest="isp", default="", help="Path to ISP MMDB file (optional)")
    parser.add_argument(
        "-lax",
        "--lax",
        dest="lax",
        action="store_true",
        help="Enable lax mode: geofeed's region code may be provided without country code prefix",
    )
    parser.add_argument(
        "-empty-ok",
        "--empty-ok",
        dest="empty_ok",
        action="store_true",
        help="Allow empty geofeeds to be considered valid",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log every invalid and differing row")
    parser.add_argument("-V", action="version", version=f"geofeed-verifier {__version__}")
    return parser


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = build_parser()
    args = parser.parse_args(argv)
    if not args.gf and not args.db:
        parser.error("-gf is required and -db can not be an empty string")
    if not args.gf:
        parser.error("-gf is required")
    if not args.db:
        parser.error("-db is required")
    return args


def main(argv: list[str] | None = None) -> int:
    args = parse_args(sys.argv[1:] if argv is None else argv)
    configure_logging(args.verbose)

    options = VerificationOptions(lax_mode=args.lax, empty_ok=args.empty_ok)
    try:
        report = process_geofeed(args.gf, args.db, args.isp or None, options)
    except GeofeedError as exc:
        logger.error("unable to process geofeed %s: %s", args.gf, exc)
        return 1

    if not report.ok:
        if isinstance(report.error, InvalidGeofeedError):
            for line in invalid_summary_lines(report.result):
                logger.warning(line)
        logger.error("unable to process geofeed %s: %s", args.gf, report.error)
        return 1

    sys.stdout.write(render_text(report))
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
