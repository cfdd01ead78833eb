"""Application-level DTOs for geofeed verification."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence

from geofeed_verifier.domain.errors import GeofeedError
from geofeed_verifier.domain.models import ValidRow
from geofeed_verifier.domain.results import AsnHistogram, CheckResult, sorted_asn_counts


@dataclass(slots=True, frozen=True)
class VerificationOptions:
    # Accept region codes without the ISO 3166-1 country prefix, e.g. "NY".
    lax_mode: bool = False
    # Keep file system paths out of error messages that may be shown to others.
    hide_file_paths_in_errors: bool = False
    # Treat a geofeed without any records as valid.
    empty_ok: bool = False


@dataclass(slots=True)
class GeofeedReport:
    """Outcome of verifying one geofeed.

    ``error`` holds an aggregate failure (empty or invalid geofeed). The counts,
    diff lines and ASN histogram are complete even when it is set.
    """

    result: CheckResult
    diff_lines: Sequence[str] = field(default_factory=list)
    differing_rows: Sequence[ValidRow] = field(default_factory=list)
    asn_counts: AsnHistogram = field(default_factory=AsnHistogram)
    error: GeofeedError | None = None
    file_hash: str = ""

    @property
    def ok(self) -> bool:
        return self.error is None

    def raise_for_status(self) -> None:
        if self.error is not None:
            raise self.error

    def asn_counts_by_frequency(self) -> list[tuple[int, int]]:
        return sorted_asn_counts(self.asn_counts)
