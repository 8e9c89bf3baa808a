"""
AutoTrack - Periodic Inspection Models
Version: 1.0.0

Changelog:
v1.0.0 (2026-09-28): Initial periodic inspection models
"""

from pydantic import BaseModel

from .common import IsoDateTime, RowId


class PeriodicInspectionRequest(BaseModel):
    car_id: RowId
    pi_name: str
    pi_date: IsoDateTime
    pi_nextdate: IsoDateTime
