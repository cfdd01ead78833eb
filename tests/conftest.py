from __future__ import annotations

from ipaddress import ip_address
from pathlib import Path
from typing import Any

import pytest

from geofeed_verifier.domain.models import IspLookupResult, LookupResult
from geofeed_verifier.domain.repositories import RecordNotFound

TEST_DATA = Path(__file__).parent / "test_data"

CITY_RECORDS = {
    "2a02:ecc0::": LookupResult(
        country_iso="US",
        most_specific_subdivision_iso="NJ",
        city_name_en="Parsippany",
        postal_code="07054",
    ),
    "81.2.69.142": LookupResult(
        country_iso="GB",
        most_specific_subdivision_iso="WBK",
        city_name_en="Boxford",
        postal_code="OX1",
    ),
    "89.160.20.112": LookupResult(
        country_iso="SE",
        most_specific_subdivision_iso="E",
        city_name_en="Linköping",
        postal_code="34021",
    ),
    "216.160.83.56": LookupResult(
        country_iso="US",
        most_specific_subdivision_iso="WA",
        city_name_en="Milton",
        postal_code="98354",
    ),
}

ISP_RECORDS = {
    "2a02:ecc0::": IspLookupResult(as_number=209, as_org_name="Qwest Communications Company, LLC", isp_name="Century Link"),
    "81.2.69.142": IspLookupResult(as_number=0, as_org_name="", isp_name="Andrews & Arnold Ltd"),
    "89.160.20.112": IspLookupResult(as_number=29518, as_org_name="Bredband2 AB", isp_name="Bredband2 AB"),
    "216.160.83.56": IspLookupResult(as_number=209, as_org_name="Qwest Communications Company, LLC", isp_name="Century Link"),
}


class FakeCityLookup:
    def __init__(self, records: dict[str, LookupResult] | None = None) -> None:
        self.records = CITY_RECORDS if records is None else records
        self.calls: list[str] = []

    def lookup_city(self, address) -> LookupResult:
        self.calls.append(str(address))
        try:
            return self.records[str(address)]
        except KeyError:
            raise RecordNotFound(f"no record for {address}") from None


class FakeIspLookup:
    def __init__(self, records: dict[str, IspLookupResult] | None = None) -> None:
        self.records = ISP_RECORDS if records is None else records

    def lookup_isp(self, address) -> IspLookupResult:
        try:
            return self.records[str(address)]
        except KeyError:
            raise RecordNotFound(f"no record for {address}") from None


class StubReader:
    """Stands in for ``maxminddb.Reader``; records are keyed by address text."""

    def __init__(self, records: dict[str, Any], database_type: str = "GeoIP2-City") -> None:
        self._records = {str(ip_address(key)): value for key, value in records.items()}
        self._database_type = database_type
        self.closed = False

    def get(self, address):
        return self._records.get(str(address))

    def metadata(self):
        return type("Metadata", (), {"database_type": self._database_type})()

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def city_lookup() -> FakeCityLookup:
    return FakeCityLookup()


@pytest.fixture
def isp_lookup() -> FakeIspLookup:
    return FakeIspLookup()


@pytest.fixture
def test_data() -> Path:
    return TEST_DATA
