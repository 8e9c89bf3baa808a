"""
AutoTrack - Accident Models
Version: 1.0.0

Changelog:
v1.0.0 (2026-09-28): Initial accident models
"""

from pydantic import BaseModel

from .common import IsoDateTime, RowId


class AccidentRequest(BaseModel):
    """Accident create/update body"""
    car_id: RowId
    accident_date: IsoDateTime
    accident_description: str
