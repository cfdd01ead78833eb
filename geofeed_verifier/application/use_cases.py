"""Application services orchestrating the geofeed verification workflow."""
from __future__ import annotations

import logging
from contextlib import ExitStack
from dataclasses import dataclass, field
from io import BytesIO
from pathlib import Path

from geofeed_verifier.application.dto import GeofeedReport, VerificationOptions
from geofeed_verifier.config import SETTINGS
from geofeed_verifier.domain.errors import (
    DatabaseOpenError,
    EmptyGeofeedError,
    GeofeedReadError,
    InvalidGeofeedError,
)
from geofeed_verifier.domain.invalidity import RowInvalidity
from geofeed_verifier.domain.models import InvalidRow
from geofeed_verifier.domain.repositories import CityLookup, IspLookup
from geofeed_verifier.domain.results import GeofeedAccumulator
from geofeed_verifier.domain.services import RowVerifier
from geofeed_verifier.infrastructure.parsing.geofeed_csv import iter_geofeed_rows
from geofeed_verifier.infrastructure.parsing.utils import (
    compute_file_hash,
    decode_geofeed,
    ensure_bytes,
)
from geofeed_verifier.infrastructure.repositories.mmdb_repositories import (
    OPEN_ERRORS,
    MaxMindCityRepository,
    MaxMindIspRepository,
)

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class GeofeedVerificationContext:
    city_lookup: CityLookup
    isp_lookup: IspLookup | None = None
    options: VerificationOptions = field(default_factory=VerificationOptions)


class ProcessGeofeedUseCase:
    """Verifies every row of one geofeed and folds the outcomes into a report.

    Fatal problems (undecodable content, unreadable CSV) raise a
    ``GeofeedError``. An empty or partly invalid geofeed still produces a full
    report whose ``error`` says why the file as a whole is rejected.
    """

    def __init__(self, context: GeofeedVerificationContext) -> None:
        self._context = context
        self._verifier = RowVerifier(
            context.city_lookup,
            context.isp_lookup,
            lax_mode=context.options.lax_mode,
        )

    def execute(self, source: BytesIO | Path | bytes, source_name: str = "geofeed") -> GeofeedReport:
        options = self._context.options
        raw_bytes = ensure_bytes(source)
        text = decode_geofeed(raw_bytes)

        accumulator = GeofeedAccumulator()
        expected = SETTINGS.expected_fields
        try:
            for row in iter_geofeed_rows(text):
                if not row.has_expected_fields(expected):
                    outcome = InvalidRow.classify(
                        RowInvalidity.FEWER_FIELDS_THAN_EXPECTED,
                        row.line,
                        f"expected {expected} fields but got {len(row.fields)}, row: '{row.raw()}'",
                    )
                else:
                    outcome = self._verifier.verify(row.fields, row.line)
                if isinstance(outcome, InvalidRow):
                    logger.debug("%s: %s", outcome.kind, outcome.message)
                accumulator.record(outcome)
        except GeofeedReadError as exc:
            if options.hide_file_paths_in_errors:
                raise GeofeedReadError(f"unable to read next row: {exc}") from exc
            raise GeofeedReadError(f"unable to read next row in {source_name}: {exc}") from exc

        result = accumulator.result
        report = GeofeedReport(
            result=result,
            diff_lines=accumulator.diff_lines,
            differing_rows=accumulator.differing_rows,
            asn_counts=accumulator.asn_counts,
            file_hash=compute_file_hash(raw_bytes),
        )
        if result.total == 0 and not options.empty_ok:
            report.error = EmptyGeofeedError()
        elif result.has_invalid_rows():
            report.error = InvalidGeofeedError()

        logger.info(
            "%s: %d rows, %d differences, %d invalid",
            source_name,
            result.total,
            result.differences,
            result.invalid,
        )
        return report


def _read_geofeed(path: Path, hide_paths: bool) -> bytes:
    try:
        return path.read_bytes()
    except OSError as exc:
        if hide_paths:
            raise GeofeedReadError(f"unable to open file: {exc.strerror or exc}") from exc
        raise GeofeedReadError(f"unable to open {path}: {exc}") from exc


def _open_database(repository_cls, path: Path, label: str, hide_paths: bool):
    try:
        return repository_cls.open(path)
    except OPEN_ERRORS as exc:
        if hide_paths:
            reason = exc.strerror if isinstance(exc, OSError) and exc.strerror else type(exc).__name__
            raise DatabaseOpenError(f"unable to open {label}: {reason}") from exc
        raise DatabaseOpenError(f"unable to open {label} {path}: {exc}") from exc


def verify_geofeed_content(
    content: BytesIO | Path | bytes,
    mmdb_path: str | Path = SETTINGS.city_db_path,
    isp_path: str | Path | None = None,
    options: VerificationOptions | None = None,
    source_name: str = "geofeed",
) -> GeofeedReport:
    """Verify geofeed content against a City database and an optional ISP database."""
    options = options or VerificationOptions()
    hide_paths = options.hide_file_paths_in_errors

    # Decode before opening databases so a non UTF-8 geofeed fails fast.
    content = ensure_bytes(content)
    decode_geofeed(content)

    with ExitStack() as stack:
        city_repo = stack.enter_context(
            _open_database(MaxMindCityRepository, Path(mmdb_path), "MMDB", hide_paths)
        )
        isp_repo = None
        if isp_path:
            isp_repo = stack.enter_context(
                _open_database(MaxMindIspRepository, Path(isp_path), "ISP MMDB", hide_paths)
            )
        context = GeofeedVerificationContext(
            city_lookup=city_repo,
            isp_lookup=isp_repo,
            options=options,
        )
        return ProcessGeofeedUseCase(context).execute(content, source_name=source_name)


def process_geofeed(
    geofeed_path: str | Path,
    mmdb_path: str | Path = SETTINGS.city_db_path,
    isp_path: str | Path | None = None,
    options: VerificationOptions | None = None,
) -> GeofeedReport:
    """Verify a geofeed file against a City database and an optional ISP database."""
    options = options or VerificationOptions()
    hide_paths = options.hide_file_paths_in_errors
    geofeed_path = Path(geofeed_path)
    content = _read_geofeed(geofeed_path, hide_paths)
    return verify_geofeed_content(
        content,
        mmdb_path,
        isp_path,
        options,
        source_name="geofeed" if hide_paths else str(geofeed_path),
    )
