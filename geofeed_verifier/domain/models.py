"""Domain models for geofeed verification.

These dataclasses capture a submitted geofeed row, the reference data it is
checked against, and the outcome of checking it.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from ipaddress import IPv4Address, IPv6Address
from typing import Sequence, Union

from .invalidity import RowInvalidity, describe


@dataclass(frozen=True)
class GeofeedRow:
    """One CSV record from a geofeed, in file order."""

    line: int
    fields: Sequence[str]

    def has_expected_fields(self, expected: int) -> bool:
        return len(self.fields) >= expected

    def raw(self) -> str:
        return ",".join(self.fields)


@dataclass(frozen=True)
class NormalizedNetwork:
    """A submitted network as a CIDR prefix and the address used for lookups."""

    prefix: str
    address: IPv4Address | IPv6Address

    def __str__(self) -> str:
        return self.prefix


@dataclass(frozen=True)
class LookupResult:
    """Reference geolocation for one address."""

    country_iso: str = ""
    most_specific_subdivision_iso: str = ""
    city_name_en: str = ""
    postal_code: str = ""


@dataclass(frozen=True)
class IspLookupResult:
    """Reference network ownership for one address. An AS number of 0 means unknown."""

    as_number: int = 0
    as_org_name: str = ""
    isp_name: str = ""


@dataclass(frozen=True)
class FieldDifference:
    field_name: str
    current: str
    suggested: str


@dataclass(frozen=True)
class ValidRow:
    """A row that passed every check. ``diff_text`` is empty when nothing differs."""

    network: NormalizedNetwork
    diff_text: str = ""
    differences: Sequence[FieldDifference] = field(default_factory=tuple)
    isp: IspLookupResult | None = None

    @property
    def differs(self) -> bool:
        return bool(self.diff_text)

    @property
    def as_number(self) -> int:
        return self.isp.as_number if self.isp else 0


@dataclass(frozen=True)
class InvalidRow:
    kind: RowInvalidity
    message: str

    @classmethod
    def classify(cls, kind: RowInvalidity, line: int, reason: str) -> "InvalidRow":
        return cls(kind=kind, message=describe(line, reason))


RowOutcome = Union[ValidRow, InvalidRow]
