"""
AutoTrack - Fuel Efficiency Models
Version: 1.0.0

Changelog:
v1.0.0 (2026-09-28): Initial fuel efficiency models
"""

from pydantic import BaseModel, Field

from .common import IsoDateTime, RowId


class FuelEfficiencyRequest(BaseModel):
    """One refuelling record"""
    car_id: RowId
    fe_date: IsoDateTime
    fe_amount: float = Field(..., gt=0, description="Fuel volume in litres")
    fe_unitprice: float = Field(..., gt=0, description="Price per litre")
    fe_mileage: float = Field(..., gt=0, description="Odometer reading at fill-up")
