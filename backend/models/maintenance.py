"""
AutoTrack - Maintenance Models
Version: 1.1.0

Changelog:
v1.1.0 (2026-10-05): Canonical titles derived from maint_type
v1.0.0 (2026-09-28): Initial maintenance models
"""

from pydantic import BaseModel
from enum import Enum
from typing import Optional

from .common import IsoDateTime, RowId


class MaintType(str, Enum):
    """Maintenance categories and their display titles"""
    OilChange = "Oil Change"
    OilFilterChange = "Oil Filter Change"
    HeadlightChange = "Headlight Change"
    PositionLampChange = "Position Lamp Change"
    FogLampChange = "Fog Lamp Change"
    TurnSignalChange = "Turn Signal Change"
    BrakeLightChange = "Brake Light Change"
    LicensePlateLightChange = "License Plate Light Change"
    BackupLightChange = "Backup Light Change"
    CarWash = "Car Wash"
    WiperBladeChange = "Wiper Blade Change"
    BrakePadChange = "Brake Pad Change"
    BrakeDiscChange = "Brake Disc Change"
    TireChange = "Tire Change"
    BatteryChange = "Battery Change"
    TimingBeltChange = "Timing Belt Change"
    CoolantRefill = "Coolant Refill"
    WasherFluidRefill = "Washer Fluid Refill"
    Other = "Other"


class MaintenanceRequest(BaseModel):
    car_id: RowId
    maint_type: str
    maint_title: Optional[str] = None
    maint_date: IsoDateTime
    maint_description: str


def derive_title(maint_type: str, maint_title: Optional[str]) -> str:
    """
    Title stored for a maintenance record.

    Known categories get their canonical title regardless of what the client
    sent. "Other" and unrecognised types keep the client's title, falling
    back to the type itself when none was given.
    """
    category = MaintType.__members__.get(maint_type)
    if category is not None and category is not MaintType.Other:
        return category.value
    if maint_title:
        return maint_title
    return category.value if category is not None else maint_type


def apply_maintenance_logic(data: MaintenanceRequest) -> MaintenanceRequest:
    return data.model_copy(update={"maint_title": derive_title(data.maint_type, data.maint_title)})
