"""Lookup interfaces anchoring the domain layer."""
from __future__ import annotations

from ipaddress import IPv4Address, IPv6Address
from typing import Protocol

from .models import IspLookupResult, LookupResult


class RecordNotFound(LookupError):
    """No usable reference record exists for an address."""


class CityLookup(Protocol):
    """Provides reference geolocation keyed by IP address."""

    def lookup_city(self, address: IPv4Address | IPv6Address) -> LookupResult:
        ...


class IspLookup(Protocol):
    """Provides reference AS and ISP data keyed by IP address."""

    def lookup_isp(self, address: IPv4Address | IPv6Address) -> IspLookupResult:
        ...
