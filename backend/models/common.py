"""
AutoTrack - Shared Field Types
Version: 1.1.0

Changelog:
v1.1.0 (2026-10-19): UTC-only date-times; integer types bounded to SQLite INTEGER
v1.0.0 (2026-09-28): ISO 8601 datetime string type
"""

from datetime import datetime
from typing import Annotated

from pydantic import AfterValidator, Field

from errors import SQLITE_INT_MAX


def _check_iso_datetime(value: str) -> str:
    """Accept UTC ISO 8601 date-times (e.g. 2026-01-31T09:00:00Z); keep the original text"""
    if "T" not in value or not value.endswith("Z"):
        raise ValueError("must be an ISO 8601 UTC date-time ending in 'Z'")
    try:
        datetime.fromisoformat(value[:-1] + "+00:00")
    except ValueError:
        raise ValueError("must be an ISO 8601 UTC date-time ending in 'Z'") from None
    return value


# Stored verbatim so a read-back returns exactly what the client sent
IsoDateTime = Annotated[str, AfterValidator(_check_iso_datetime)]

# Reference to a stored row
RowId = Annotated[int, Field(ge=1, le=SQLITE_INT_MAX)]

# Counts and amounts written to INTEGER columns
SqliteInt = Annotated[int, Field(ge=0, le=SQLITE_INT_MAX)]
