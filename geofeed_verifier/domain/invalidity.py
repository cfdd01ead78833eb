"""Closed set of reasons a geofeed row can be rejected."""
from __future__ import annotations

from enum import Enum


class RowInvalidity(Enum):
    FEWER_FIELDS_THAN_EXPECTED = "FewerFieldsThanExpected"
    EMPTY_NETWORK = "EmptyNetwork"
    UNABLE_TO_PARSE_NETWORK = "UnableToParseNetwork"
    UNABLE_TO_FIND_CITY_RECORD = "UnableToFindCityRecord"
    UNABLE_TO_FIND_ISP_RECORD = "UnableToFindISPRecord"
    INVALID_REGION_CODE = "InvalidRegionCode"

    def __str__(self) -> str:
        return self.value


def describe(line: int, reason: str) -> str:
    return f"line {line}: {reason}"
