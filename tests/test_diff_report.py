import csv
import io
from collections import Counter

from conftest import FakeCityLookup, FakeIspLookup

from geofeed_verifier.application.dto import GeofeedReport
from geofeed_verifier.application.use_cases import GeofeedVerificationContext, ProcessGeofeedUseCase
from geofeed_verifier.domain.invalidity import RowInvalidity
from geofeed_verifier.domain.results import CheckResult
from geofeed_verifier.presentation.diff_report import (
    differences_to_rows,
    invalid_summary_lines,
    render_csv,
    render_html,
    render_text,
)


def make_report() -> GeofeedReport:
    content = (
        "216.160.83.56,US,US-WA,Seattle,\n"
        "81.2.69.142,GB,GB-WBK,Boxford,\n"
        "89.160.20.112,SE,SE-E,Linköping,1060\n"
    ).encode("utf-8")
    context = GeofeedVerificationContext(city_lookup=FakeCityLookup(), isp_lookup=FakeIspLookup())
    return ProcessGeofeedUseCase(context).execute(content)


def test_render_text_matches_cli_output():
    report = GeofeedReport(
        result=CheckResult(total=4, differences=2),
        diff_lines=["first", "second"],
        asn_counts=Counter({64500: 1, 209: 3}),
    )

    assert render_text(report) == (
        "first\n\nsecond"
        "\n\nOut of 4 potential corrections, 2 may be different than our current mappings\n\n"
        "ASN: 209, count: 3\n"
        "ASN: 64500, count: 1\n"
    )


def test_render_text_without_differences():
    report = GeofeedReport(result=CheckResult(total=3))

    assert render_text(report) == (
        "\n\nOut of 3 potential corrections, 0 may be different than our current mappings\n\n"
    )


def test_invalid_summary_lines():
    result = CheckResult(
        total=5,
        invalid=2,
        sample_invalid_rows={
            RowInvalidity.EMPTY_NETWORK: "line 2: network field is empty, row: ',,,,'",
            RowInvalidity.INVALID_REGION_CODE: "line 4: invalid region",
        },
    )

    assert invalid_summary_lines(result) == [
        "Found 2 invalid rows out of 5 rows in total, examples by type:",
        "EmptyNetwork: 'line 2: network field is empty, row: ',,,,''",
        "InvalidRegionCode: 'line 4: invalid region'",
    ]


def test_differences_to_rows():
    rows = differences_to_rows(make_report().differing_rows)

    assert rows == [
        {
            "network": "216.160.83.56/32",
            "field": "city",
            "current": "Milton",
            "suggested": "Seattle",
            "as_number": "209",
            "as_name": "Qwest Communications Company, LLC",
            "isp_name": "Century Link",
        },
        {
            "network": "89.160.20.112/32",
            "field": "postal code",
            "current": "34021",
            "suggested": "1060",
            "as_number": "29518",
            "as_name": "Bredband2 AB",
            "isp_name": "Bredband2 AB",
        },
    ]


def test_render_csv():
    data = render_csv(make_report().differing_rows)

    records = list(csv.DictReader(io.StringIO(data.decode("utf-8"))))
    assert [r["field"] for r in records] == ["city", "postal code"]


def test_render_csv_without_differences_keeps_header():
    assert render_csv([]).decode("utf-8").strip() == "network,field,current,suggested,as_number,as_name,isp_name"


def test_render_html_escapes_values():
    html = render_html(make_report())

    assert html.startswith("<table>")
    assert "<td>Qwest Communications Company, LLC</td>" in html


def test_render_html_without_differences():
    assert render_html(GeofeedReport(result=CheckResult(total=1))) == "<p>No differences detected.</p>"
