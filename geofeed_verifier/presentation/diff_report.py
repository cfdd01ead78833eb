"""Report generators for geofeed differences."""
from __future__ import annotations

import csv
import html
import io
from typing import Sequence

from geofeed_verifier.application.dto import GeofeedReport
from geofeed_verifier.domain.models import ValidRow
from geofeed_verifier.domain.results import CheckResult

FIELDNAMES = [
    "network",
    "field",
    "current",
    "suggested",
    "as_number",
    "as_name",
    "isp_name",
]


def render_text(report: GeofeedReport) -> str:
    """Diff blocks, the summary line and the ASN counts, as printed by the CLI."""
    result = report.result
    parts = [
        "\n\n".join(report.diff_lines),
        f"\n\nOut of {result.total} potential corrections, "
        f"{result.differences} may be different than our current mappings\n\n",
    ]
    parts.extend(f"ASN: {asn}, count: {count}\n" for asn, count in report.asn_counts_by_frequency())
    return "".join(parts)


def invalid_summary_lines(result: CheckResult) -> list[str]:
    lines = [
        f"Found {result.invalid} invalid rows out of {result.total} rows in total, examples by type:"
    ]
    lines.extend(f"{kind}: '{message}'" for kind, message in result.sample_invalid_rows.items())
    return lines


def differences_to_rows(rows: Sequence[ValidRow]) -> list[dict[str, str]]:
    records: list[dict[str, str]] = []
    for row in rows:
        isp = row.isp
        for item in row.differences:
            records.append(
                {
                    "network": row.network.prefix,
                    "field": item.field_name,
                    "current": item.current,
                    "suggested": item.suggested,
                    "as_number": str(isp.as_number) if isp and isp.as_number else "",
                    "as_name": isp.as_org_name if isp else "",
                    "isp_name": isp.isp_name if isp else "",
                }
            )
    return records


def render_csv(rows: Sequence[ValidRow]) -> bytes:
    buffer = io.StringIO()
    writer = csv.DictWriter(buffer, fieldnames=FIELDNAMES)
    writer.writeheader()
    writer.writerows(differences_to_rows(rows))
    return buffer.getvalue().encode("utf-8")


def render_html(report: GeofeedReport) -> str:
    records = differences_to_rows(report.differing_rows)
    if not records:
        return "<p>No differences detected.</p>"
    header = "".join(f"<th>{col}</th>" for col in FIELDNAMES)
    body_parts = []
    for record in records:
        body_parts.append(
            "<tr>" + "".join(f"<td>{html.escape(record[col])}</td>" for col in FIELDNAMES) + "</tr>"
        )
    body_html = "".join(body_parts)
    return f"<table><thead><tr>{header}</tr></thead><tbody>{body_html}</tbody></table>"
