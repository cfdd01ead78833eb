"""Shared parsing utilities for geofeed ingestion."""
from __future__ import annotations

import codecs
import hashlib
from io import BytesIO
from pathlib import Path

from geofeed_verifier.domain.errors import NotUTF8Error


def ensure_bytes(source: BytesIO | Path | bytes) -> bytes:
    if isinstance(source, bytes):
        return source
    if isinstance(source, BytesIO):
        return source.getvalue()
    if isinstance(source, Path):
        return source.read_bytes()
    raise TypeError(f"Unsupported source type: {type(source)!r}")


def compute_file_hash(data: bytes) -> str:
    return hashlib.sha256(data).hexdigest()


def strip_bom(data: bytes) -> bytes:
    """Drop a leading UTF-8 byte order mark, common on files saved on Windows."""
    if data.startswith(codecs.BOM_UTF8):
        return data[len(codecs.BOM_UTF8):]
    return data


def decode_geofeed(data: bytes) -> str:
    try:
        return strip_bom(data).decode("utf-8")
    except UnicodeDecodeError as exc:
        raise NotUTF8Error() from exc
