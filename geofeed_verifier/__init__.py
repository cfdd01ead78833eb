"""RFC 8805 geofeed verification against MaxMind reference databases."""
from geofeed_verifier.application.dto import GeofeedReport, VerificationOptions
from geofeed_verifier.application.use_cases import (
    GeofeedVerificationContext,
    ProcessGeofeedUseCase,
    process_geofeed,
    verify_geofeed_content,
)
from geofeed_verifier.domain.errors import (
    EmptyGeofeedError,
    GeofeedError,
    InvalidGeofeedError,
    NotUTF8Error,
)
from geofeed_verifier.domain.invalidity import RowInvalidity
from geofeed_verifier.domain.results import CheckResult
from geofeed_verifier.domain.services import RowVerifier
from geofeed_verifier.infrastructure.repositories.mmdb_repositories import (
    MaxMindCityRepository,
    MaxMindIspRepository,
)

__version__ = "1.0.0"

__all__ = [
    "CheckResult",
    "EmptyGeofeedError",
    "GeofeedError",
    "GeofeedReport",
    "GeofeedVerificationContext",
    "InvalidGeofeedError",
    "MaxMindCityRepository",
    "MaxMindIspRepository",
    "NotUTF8Error",
    "ProcessGeofeedUseCase",
    "RowInvalidity",
    "RowVerifier",
    "VerificationOptions",
    "process_geofeed",
    "verify_geofeed_content",
]
