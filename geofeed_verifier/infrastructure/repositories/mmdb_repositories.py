"""MaxMind DB backed lookups for reference geolocation and ISP data."""
from __future__ import annotations

import logging
from ipaddress import IPv4Address, IPv6Address
from pathlib import Path
from typing import Any, Mapping

import maxminddb

from geofeed_verifier.config import SETTINGS
from geofeed_verifier.domain.models import IspLookupResult, LookupResult
from geofeed_verifier.domain.repositories import CityLookup, IspLookup, RecordNotFound

logger = logging.getLogger(__name__)

# Raised by maxminddb.open_database for missing, unreadable or corrupt files.
OPEN_ERRORS = (OSError, ValueError, maxminddb.InvalidDatabaseError)


def open_reader(path: str | Path) -> maxminddb.Reader:
    reader = maxminddb.open_database(str(path))
    logger.debug("opened %s database from %s", reader.metadata().database_type, path)
    return reader


def _get(record: Mapping[str, Any], *path: str) -> Any:
    value: Any = record
    for key in path:
        if not isinstance(value, Mapping):
            return None
        value = value.get(key)
    return value


class _MaxMindRepository:
    def __init__(self, reader: maxminddb.Reader) -> None:
        self._reader = reader

    @classmethod
    def open(cls, path: str | Path):
        return cls(open_reader(path))

    def close(self) -> None:
        self._reader.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _record(self, address: IPv4Address | IPv6Address) -> Mapping[str, Any]:
        try:
            record = self._reader.get(address)
        except (ValueError, maxminddb.InvalidDatabaseError) as exc:
            raise RecordNotFound(str(exc)) from exc
        if record is None:
            raise RecordNotFound(f"no record for {address}")
        if not isinstance(record, Mapping):
            raise RecordNotFound(f"unexpected record type {type(record).__name__} for {address}")
        return record


class MaxMindCityRepository(_MaxMindRepository, CityLookup):
    """Reads country, subdivisions, city and postal code from a City style database."""

    def lookup_city(self, address: IPv4Address | IPv6Address) -> LookupResult:
        record = self._record(address)
        subdivisions = record.get("subdivisions") or []
        most_specific = _get(subdivisions[-1], "iso_code") if subdivisions else None
        return LookupResult(
            country_iso=_get(record, "country", "iso_code") or "",
            most_specific_subdivision_iso=most_specific or "",
            city_name_en=_get(record, "city", "names", SETTINGS.name_language) or "",
            postal_code=_get(record, "postal", "code") or "",
        )


class MaxMindIspRepository(_MaxMindRepository, IspLookup):
    """Reads AS number, AS organization and ISP name from an ISP or ASN database."""

    def lookup_isp(self, address: IPv4Address | IPv6Address) -> IspLookupResult:
        record = self._record(address)
        return IspLookupResult(
            as_number=int(record.get("autonomous_system_number") or 0),
            as_org_name=record.get("autonomous_system_organization") or "",
            isp_name=record.get("isp") or "",
        )
