"""Domain services implementing the per-row verification rules."""
from __future__ import annotations

import logging
from typing import Sequence

from geofeed_verifier.config import SETTINGS

from .invalidity import RowInvalidity
from .models import FieldDifference, InvalidRow, IspLookupResult, LookupResult, RowOutcome, ValidRow
from .network import InvalidNetwork, normalize_network
from .repositories import CityLookup, IspLookup

logger = logging.getLogger(__name__)

# 0: network (CIDR or single IP)
# 1: ISO 3166-1 country code
# 2: ISO 3166-2 region code
# 3: city name
# 4: postal code
NETWORK, COUNTRY, REGION, CITY, POSTAL = range(5)


class RowVerifier:
    """Checks geofeed rows against reference lookups and describes what differs.

    Strict mode (the default) requires region codes in full ISO 3166-2 form,
    e.g. ``US-NY``. Lax mode also accepts the bare subdivision part, ``NY``.
    """

    def __init__(
        self,
        city_lookup: CityLookup,
        isp_lookup: IspLookup | None = None,
        lax_mode: bool = False,
    ) -> None:
        self._city_lookup = city_lookup
        self._isp_lookup = isp_lookup
        self._lax_mode = lax_mode

    def verify(self, fields: Sequence[str], line: int) -> RowOutcome:
        correction = [value.strip() for value in fields[: SETTINGS.expected_fields]]
        row_text = ",".join(correction)

        if not correction[NETWORK]:
            return InvalidRow.classify(
                RowInvalidity.EMPTY_NETWORK, line, f"network field is empty, row: '{row_text}'"
            )

        try:
            network = normalize_network(correction[NETWORK])
        except InvalidNetwork as exc:
            return InvalidRow.classify(
                exc.kind, line, f"unable to parse network {exc.token}: {exc.reason}"
            )

        # TODO: look up every covered address instead of only the first one.
        try:
            record = self._city_lookup.lookup_city(network.address)
        except LookupError as exc:
            return InvalidRow.classify(
                RowInvalidity.UNABLE_TO_FIND_CITY_RECORD,
                line,
                f"unable to find city record for {network}: {exc}",
            )

        region = correction[REGION]
        current_region = record.most_specific_subdivision_iso
        if "-" in region:
            current_region = f"{record.country_iso}-{current_region}"
        elif region and not self._lax_mode:
            return InvalidRow.classify(
                RowInvalidity.INVALID_REGION_CODE,
                line,
                f"invalid ISO 3166-2 region code format in strict (default) mode, row: '{row_text}'",
            )

        isp: IspLookupResult | None = None
        if self._isp_lookup is not None:
            try:
                isp = self._isp_lookup.lookup_isp(network.address)
            except LookupError as exc:
                return InvalidRow.classify(
                    RowInvalidity.UNABLE_TO_FIND_ISP_RECORD,
                    line,
                    f"unable to find ISP record for {network}: {exc}",
                )

        differences = self._compare(correction, record, current_region)
        if not differences:
            return ValidRow(network=network, isp=isp)
        logger.debug("line %d: %d field(s) differ for %s", line, len(differences), network)
        return ValidRow(
            network=network,
            diff_text=render_diff(network.prefix, differences, isp),
            differences=differences,
            isp=isp,
        )

    @staticmethod
    def _compare(
        correction: Sequence[str], record: LookupResult, current_region: str
    ) -> tuple[FieldDifference, ...]:
        checks = [
            ("country", record.country_iso, correction[COUNTRY]),
            ("region", current_region, correction[REGION]),
            ("city", record.city_name_en, correction[CITY]),
        ]
        # Postal codes are deprecated in RFC 8805 and often omitted, so an
        # empty one never counts as a difference.
        if correction[POSTAL]:
            checks.append(("postal code", record.postal_code, correction[POSTAL]))

        return tuple(
            FieldDifference(field_name=name, current=current, suggested=suggested)
            for name, current, suggested in checks
            if not equal_fold(suggested, current)
        )


def equal_fold(left: str, right: str) -> bool:
    """Case-insensitive match one character at a time.

    Unlike ``str.casefold`` no character expands to several, so ``Straße``
    and ``STRASSE`` differ.
    """
    if len(left) != len(right):
        return False
    return all(
        a == b or a.lower() == b.lower() or a.upper() == b.upper()
        for a, b in zip(left, right)
    )


def render_diff(
    prefix: str,
    differences: Sequence[FieldDifference],
    isp: IspLookupResult | None = None,
) -> str:
    indent = SETTINGS.diff_indent
    lines = [f"\nFound a potential improvement: '{prefix}'"]
    for item in differences:
        lines.append(
            f"current {item.field_name}: '{item.current}'{indent}"
            f"suggested {item.field_name}: '{item.suggested}'"
        )
    if isp is not None:
        if isp.as_number > 0:
            lines.append(f"AS Number: {isp.as_number}")
        if isp.as_org_name:
            lines.append(f"AS Name: {isp.as_org_name}")
        if isp.isp_name:
            lines.append(f"ISP Name: {isp.isp_name}")
    return f"\n{indent}".join(lines)
