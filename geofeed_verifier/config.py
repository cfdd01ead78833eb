"""Central configuration for the geofeed verifier package."""
from __future__ import annotations

import os
from dataclasses import dataclass

DEFAULT_CITY_DB = "/usr/local/share/GeoIP/GeoIP2-City.mmdb"

# Only the first five fields of a geofeed row carry meaning.
EXPECTED_FIELDS_PER_RECORD = 5

# A bare IPv6 host is treated as covering its /64.
IPV4_HOST_PREFIX = 32
IPV6_HOST_PREFIX = 64


@dataclass(slots=True, frozen=True)
class Settings:
    city_db_path: str
    expected_fields: int
    ipv4_host_prefix: int
    ipv6_host_prefix: int
    diff_indent: str
    name_language: str


SETTINGS = Settings(
    city_db_path=os.getenv("GEOFEED_VERIFIER_DB", DEFAULT_CITY_DB),
    expected_fields=EXPECTED_FIELDS_PER_RECORD,
    ipv4_host_prefix=IPV4_HOST_PREFIX,
    ipv6_host_prefix=IPV6_HOST_PREFIX,
    diff_indent="\t\t",
    name_language="en",
)
