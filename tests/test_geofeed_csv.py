import pytest

from geofeed_verifier.domain.errors import GeofeedReadError, NotUTF8Error
from geofeed_verifier.infrastructure.parsing.geofeed_csv import has_bare_quote, iter_geofeed_rows
from geofeed_verifier.infrastructure.parsing.utils import decode_geofeed, ensure_bytes, strip_bom


def test_comments_and_blank_lines_are_skipped():
    text = "# header\n\n192.0.2.0/24,US,US-CA,Fresno,\n# trailer\n"

    rows = list(iter_geofeed_rows(text))

    assert len(rows) == 1
    assert rows[0].line == 1
    assert rows[0].fields == ("192.0.2.0/24", "US", "US-CA", "Fresno", "")


def test_variable_field_counts():
    text = "192.0.2.0/24,US\n192.0.2.0/24,US,US-CA,Fresno,93650,extra\n"

    rows = list(iter_geofeed_rows(text))

    assert [len(row.fields) for row in rows] == [2, 6]
    assert [row.line for row in rows] == [1, 2]


def test_leading_whitespace_is_trimmed():
    rows = list(iter_geofeed_rows("192.0.2.0/24,  US, US-CA,\tFresno,\n"))

    assert rows[0].fields[1:4] == ("US", "US-CA", "Fresno")


def test_quoted_fields():
    rows = list(iter_geofeed_rows('192.0.2.0/24,US,US-CA,"Fresno, CA",\n'))

    assert rows[0].fields[3] == "Fresno, CA"


def test_crlf_line_endings():
    rows = list(iter_geofeed_rows("192.0.2.0/24,US,US-CA,Fresno,\r\n198.51.100.0/24,US,US-NY,,\r\n"))

    assert len(rows) == 2
    assert rows[1].fields == ("198.51.100.0/24", "US", "US-NY", "", "")


def test_malformed_quotes_raise():
    with pytest.raises(GeofeedReadError):
        list(iter_geofeed_rows('192.0.2.0/24,"US"x,US-CA,Fresno,\n'))


def test_strip_bom():
    assert strip_bom(b"\xef\xbb\xbf1.2.3.4,US,,,") == b"1.2.3.4,US,,,"
    assert strip_bom(b"1.2.3.4,US,,,") == b"1.2.3.4,US,,,"


def test_decode_geofeed_rejects_invalid_utf8():
    with pytest.raises(NotUTF8Error):
        decode_geofeed(b"1.2.3.4,SE,SE-E,Link\xf6ping,")


def test_ensure_bytes_rejects_text():
    with pytest.raises(TypeError):
        ensure_bytes("1.2.3.4,US,,,")


def test_comment_marker_inside_quoted_field_is_data():
    rows = list(iter_geofeed_rows('# header\n81.2.69.142,GB,GB-WBK,"Box\n#ford",\n# trailer\n'))

    assert len(rows) == 1
    assert rows[0].line == 1
    assert rows[0].fields[3] == "Box\n#ford"


def test_escaped_quotes_are_allowed():
    rows = list(iter_geofeed_rows('192.0.2.0/24,US,US-CA,"Fresno ""Central""",\n'))

    assert rows[0].fields[3] == 'Fresno "Central"'


@pytest.mark.parametrize(
    "text",
    ['81.2.69.142,GB,GB-WBK,Box"ford,\n', '81.2.69.142,GB,GB-WBK,Boxford",\n'],
)
def test_bare_quote_in_unquoted_field_raises(text: str):
    with pytest.raises(GeofeedReadError, match='bare " in non-quoted field'):
        list(iter_geofeed_rows(text))


def test_has_bare_quote():
    assert has_bare_quote('1.2.3.4,GB,,Box"ford,')
    assert not has_bare_quote('1.2.3.4,GB,, "Boxford",')
    assert not has_bare_quote('1.2.3.4,GB,,"Box""ford",')
