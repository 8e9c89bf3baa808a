"""
AutoTrack - Car Models
Version: 1.1.0

Changelog:
v1.1.0 (2026-10-05): CarCreateRequest accepts nested {car: {...}} and flat bodies
v1.0.0 (2026-09-28): Initial car models
"""

from pydantic import BaseModel, Field, model_validator
from typing import Optional

from .common import SqliteInt


class CarFields(BaseModel):
    """Car columns supplied by the client"""
    car_name: str
    carmodelnum: str
    car_color: str
    car_mileage: SqliteInt = Field(..., description="Odometer reading in km")
    car_isflooding: bool
    car_issmoked: bool
    car_image_url: Optional[str] = None

    def to_params(self) -> tuple:
        return (
            self.car_name,
            self.carmodelnum,
            self.car_color,
            self.car_mileage,
            1 if self.car_isflooding else 0,
            1 if self.car_issmoked else 0,
            self.car_image_url or None,
        )


class CarCreateRequest(BaseModel):
    """New car plus the Firebase user who owns it"""
    car: CarFields
    firebase_user_id: str = Field(..., min_length=1)

    @model_validator(mode="before")
    @classmethod
    def lift_flat_body(cls, data):
        # Older clients post the car columns at the top level
        if isinstance(data, dict) and "car" not in data:
            fields = {k: v for k, v in data.items() if k != "firebase_user_id"}
            return {"car": fields, "firebase_user_id": data.get("firebase_user_id")}
        return data


class CarImageUpdate(BaseModel):
    car_image_url: Optional[str] = None
