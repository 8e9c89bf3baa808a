"""
AutoTrack - Tuning Models
Version: 1.1.0

Changelog:
v1.1.0 (2026-10-05): Tunings are scoped to a car (car_id required)
v1.0.0 (2026-09-28): Initial tuning models
"""

from pydantic import BaseModel, Field
from typing import Optional

from .common import RowId, SqliteInt


class TuningRequest(BaseModel):
    """Aftermarket part / tuning applied to a car"""
    car_id: RowId
    tuning_name: str
    tuning_price: SqliteInt = Field(..., description="Price in yen")
    tuning_image_url: Optional[str] = None
