"""Domain-level results for geofeed verification."""
from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field

from .invalidity import RowInvalidity
from .models import InvalidRow, RowOutcome, ValidRow

AsnHistogram = Counter[int]  # AS number -> number of differing rows


@dataclass
class CheckResult:
    """Counts for one geofeed file plus one sample message per invalidity kind."""

    total: int = 0
    differences: int = 0
    invalid: int = 0
    sample_invalid_rows: dict[RowInvalidity, str] = field(default_factory=dict)

    def has_invalid_rows(self) -> bool:
        return self.invalid > 0 or bool(self.sample_invalid_rows)


class GeofeedAccumulator:
    """Folds row outcomes into the result, diff lines and ASN histogram of one file."""

    def __init__(self) -> None:
        self.result = CheckResult()
        self.diff_lines: list[str] = []
        self.differing_rows: list[ValidRow] = []
        self.asn_counts: AsnHistogram = Counter()

    def record(self, outcome: RowOutcome) -> None:
        self.result.total += 1

        if isinstance(outcome, InvalidRow):
            self.result.invalid += 1
            self.result.sample_invalid_rows.setdefault(outcome.kind, outcome.message)
            return

        if not outcome.differs:
            return
        self.result.differences += 1
        self.diff_lines.append(outcome.diff_text)
        self.differing_rows.append(outcome)
        if outcome.as_number > 0:
            self.asn_counts[outcome.as_number] += 1

    def asn_counts_by_frequency(self) -> list[tuple[int, int]]:
        return sorted_asn_counts(self.asn_counts)


def sorted_asn_counts(asn_counts: AsnHistogram) -> list[tuple[int, int]]:
    """Most frequent first; equal counts are ordered by AS number."""
    return sorted(asn_counts.items(), key=lambda item: (-item[1], item[0]))
