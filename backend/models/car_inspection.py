"""
AutoTrack - Car Inspection (Shaken) Models
Version: 1.2.0

Changelog:
v1.2.0 (2026-10-12): Kei-car fields are sentinel-typed ('-', '999', 'K', '32', '22')
v1.1.0 (2026-10-05): Accept {"car_inspection": {...}} wrapper; ignore unknown keys
v1.0.0 (2026-09-28): Initial car inspection models

A car inspection row mirrors the data encoded in the QR codes printed on a
Japanese vehicle inspection certificate (shaken-sho). Standard cars and kei
cars carry different, mutually exclusive field groups; see
services/inspection.py for how a payload is reduced to one group.
"""

from pydantic import BaseModel, ConfigDict, Field, model_validator
from typing import Literal, Optional

from .common import RowId


# Column groups, in table order
COMMON_FIELDS = (
    "is_kcar",
    "chassis_number_stamp_location",
    "model_specification_number_category_classification_number",
    "expiration_date",
    "first_registration_year_month",
    "model",
    "axle_weight_ff",
    "axle_weight_rr",
    "noise_regulation",
    "proximity_exhaust_noise_limit",
    "fuel_type_code",
    "car_registration_number",
    "plate_count_size_preferred_number_identifier",
    "chassis_number",
    "engine_model",
    "document_type",
)

STANDARD_ONLY_FIELDS = (
    "version_info_1",
    "version_info_2",
    "registration_version_info",
    "axle_weight_fr",
    "axle_weight_rf",
    "drive_system",
    "opacimeter_measured_car",
    "nox_pm_measurement_mode",
    "nox_value",
    "pm_value",
    "safety_standard_application_date",
)

# Kei-car QR codes print a fixed value in these positions
KCAR_SENTINELS = {
    "system_id_2": "K",
    "system_id_3": "K",
    "version_number_2": "32",
    "version_number_3": "22",
    "k_axle_weight_fr": "-",
    "k_axle_weight_rf": "-",
    "k_drive_system": "-",
    "k_opacimeter_measured_car": "-",
    "k_nox_pm_measurement_mode": "-",
    "k_nox_value": "-",
    "k_pm_value": "-",
    "preliminary_item": "999",
}

KCAR_ONLY_FIELDS = tuple(KCAR_SENTINELS)

INSPECTION_COLUMNS = ("car_id",) + COMMON_FIELDS + STANDARD_ONLY_FIELDS + KCAR_ONLY_FIELDS


class CarInspectionRequest(BaseModel):
    """Payload extracted from a scanned inspection certificate"""
    model_config = ConfigDict(extra="ignore")

    car_id: RowId
    is_kcar: Literal[0, 1]

    # Common
    chassis_number_stamp_location: Optional[str] = None
    model_specification_number_category_classification_number: Optional[str] = None
    expiration_date: Optional[str] = Field(None, description="YYYY-MM-DD")
    first_registration_year_month: Optional[str] = Field(None, description="YYYY-MM")
    model: Optional[str] = None
    axle_weight_ff: Optional[float] = None
    axle_weight_rr: Optional[float] = None
    noise_regulation: Optional[str] = None
    proximity_exhaust_noise_limit: Optional[float] = Field(None, description="dB")
    fuel_type_code: Optional[str] = None
    car_registration_number: Optional[str] = None
    plate_count_size_preferred_number_identifier: Optional[str] = None
    chassis_number: Optional[str] = None
    engine_model: Optional[str] = None
    document_type: Optional[str] = None

    # Standard car only
    version_info_1: Optional[str] = None
    version_info_2: Optional[str] = None
    registration_version_info: Optional[str] = None
    axle_weight_fr: Optional[float] = None
    axle_weight_rf: Optional[float] = None
    drive_system: Optional[str] = None
    opacimeter_measured_car: Optional[Literal[0, 1]] = None
    nox_pm_measurement_mode: Optional[str] = None
    nox_value: Optional[float] = Field(None, description="g/km")
    pm_value: Optional[float] = Field(None, description="g/km")
    safety_standard_application_date: Optional[str] = None

    # Kei car only
    system_id_2: Optional[Literal["K"]] = None
    system_id_3: Optional[Literal["K"]] = None
    version_number_2: Optional[Literal["32"]] = None
    version_number_3: Optional[Literal["22"]] = None
    k_axle_weight_fr: Optional[Literal["-"]] = None
    k_axle_weight_rf: Optional[Literal["-"]] = None
    k_drive_system: Optional[Literal["-"]] = None
    k_opacimeter_measured_car: Optional[Literal["-"]] = None
    k_nox_pm_measurement_mode: Optional[Literal["-"]] = None
    k_nox_value: Optional[Literal["-"]] = None
    k_pm_value: Optional[Literal["-"]] = None
    preliminary_item: Optional[Literal["999"]] = None

    @model_validator(mode="before")
    @classmethod
    def unwrap(cls, data):
        if isinstance(data, dict) and isinstance(data.get("car_inspection"), dict):
            return data["car_inspection"]
        return data


class CarInspectionUpsert(CarInspectionRequest):
    """PUT body: the car comes from the path"""
    car_id: Optional[RowId] = None
