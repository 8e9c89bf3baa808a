"""
AutoTrack - Car API Endpoints
Version: 1.2.1

Changelog:
v1.2.1 (2026-10-19): Unknown child listing named in the 404 message
v1.2.0 (2026-10-12): Cascade delete runs in one transaction and includes CarInspections
v1.1.0 (2026-10-05): Full update (PUT), per-car child listings
v1.0.0 (2026-09-28): Initial car endpoints with ownership link and image URL
"""

from fastapi import APIRouter, Response
import logging

from database import (
    get_db, execute_one, execute_all, execute_insert, execute_update,
    transaction, car_exists,
)
from errors import NotFound, InternalError, parse_int_id
from models import CarFields, CarCreateRequest, CarImageUpdate

router = APIRouter(prefix="/cars", tags=["cars"])
logger = logging.getLogger(__name__)

# Deleted in this order before the Cars row itself
CAR_CHILD_TABLES = [
    "FuelEfficiencies",
    "Maintenances",
    "Tunings",
    "Accidents",
    "PeriodicInspection",
    "CarInspections",
    "user_car",
]

# /cars/{car_id}/<listing> -> (table, primary key)
CAR_CHILD_LISTINGS = {
    "tuning": ("Tunings", "tuning_id"),
    "maintenance": ("Maintenances", "maint_id"),
    "fuel_efficiency": ("FuelEfficiencies", "fe_id"),
    "accidents": ("Accidents", "accident_id"),
    "periodic_inspections": ("PeriodicInspection", "pi_id"),
}


async def _get_car_or_404(db, car_id: int) -> dict:
    car = await execute_one(db, "SELECT * FROM Cars WHERE car_id = ?", (car_id,))
    if not car:
        raise NotFound("Car not found")
    return car


@router.post("", status_code=201)
async def create_car(data: CarCreateRequest):
    """Register a car and link it to its owner"""
    async with get_db() as db:
        async with transaction(db):
            car_id = await execute_insert(db, """
                INSERT INTO Cars (car_name, carmodelnum, car_color, car_mileage,
                                  car_isflooding, car_issmoked, car_image_url)
                VALUES (?, ?, ?, ?, ?, ?, ?)
            """, data.car.to_params())
            if not car_id:
                raise InternalError("Failed to insert car")

            await execute_insert(
                db,
                "INSERT INTO user_car (firebase_user_id, car_id) VALUES (?, ?)",
                (data.firebase_user_id, car_id)
            )
            car = await _get_car_or_404(db, car_id)

    logger.info(f"Created car {car_id} for user {data.firebase_user_id}")
    return car


@router.get("")
async def list_cars():
    async with get_db() as db:
        return await execute_all(db, "SELECT * FROM Cars")


@router.get("/{car_id}")
async def get_car(car_id: str):
    cid = parse_int_id(car_id, "car_id")
    async with get_db() as db:
        return await _get_car_or_404(db, cid)


@router.put("/{car_id}")
async def update_car(car_id: str, data: CarFields):
    """Replace every car column"""
    cid = parse_int_id(car_id, "car_id")
    async with get_db() as db:
        async with transaction(db):
            changed = await execute_update(db, """
                UPDATE Cars SET car_name = ?, carmodelnum = ?, car_color = ?, car_mileage = ?,
                                car_isflooding = ?, car_issmoked = ?, car_image_url = ?,
                                updated_at = CURRENT_TIMESTAMP
                WHERE car_id = ?
            """, data.to_params() + (cid,))
            if changed == 0:
                raise NotFound("Car not found")
            return await _get_car_or_404(db, cid)


@router.delete("/{car_id}", status_code=204)
async def delete_car(car_id: str):
    """Delete a car together with everything recorded against it"""
    cid = parse_int_id(car_id, "car_id")
    async with get_db() as db:
        async with transaction(db):
            if not await car_exists(db, cid):
                raise NotFound("Car not found")
            for table in CAR_CHILD_TABLES:
                await execute_update(db, f"DELETE FROM {table} WHERE car_id = ?", (cid,))
            await execute_update(db, "DELETE FROM Cars WHERE car_id = ?", (cid,))

    logger.info(f"Deleted car {cid} and its records")
    return Response(status_code=204)


@router.put("/{car_id}/image")
async def update_car_image(car_id: str, data: CarImageUpdate):
    cid = parse_int_id(car_id, "car_id")
    return await _set_image_url(cid, data.car_image_url or None)


@router.delete("/{car_id}/image")
async def delete_car_image(car_id: str):
    cid = parse_int_id(car_id, "car_id")
    return await _set_image_url(cid, None)


async def _set_image_url(car_id: int, url):
    async with get_db() as db:
        async with transaction(db):
            changed = await execute_update(
                db,
                "UPDATE Cars SET car_image_url = ?, updated_at = CURRENT_TIMESTAMP WHERE car_id = ?",
                (url, car_id)
            )
            if changed == 0:
                raise NotFound("Car not found")
            return await _get_car_or_404(db, car_id)


@router.get("/{car_id}/{listing}")
async def list_car_children(car_id: str, listing: str):
    """Records of one kind belonging to a car (tuning, maintenance, ...)"""
    if listing not in CAR_CHILD_LISTINGS:
        raise NotFound(f"Unknown listing '{listing}'")
    cid = parse_int_id(car_id, "car_id")
    table, pk = CAR_CHILD_LISTINGS[listing]
    async with get_db() as db:
        await _get_car_or_404(db, cid)
        return await execute_all(
            db, f"SELECT * FROM {table} WHERE car_id = ? ORDER BY {pk}", (cid,)
        )
