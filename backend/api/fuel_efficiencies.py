"""
AutoTrack - Fuel Efficiency API Endpoints
Version: 1.0.0

Changelog:
v1.0.0 (2026-09-28): Initial refuelling log CRUD
"""

from fastapi import APIRouter, Response
import logging

from database import get_db, execute_one, execute_all, execute_insert, execute_update, transaction, require_car
from errors import NotFound, parse_int_id
from models import FuelEfficiencyRequest

router = APIRouter(prefix="/fuel_efficiencies", tags=["fuel-efficiencies"])
logger = logging.getLogger(__name__)


def _params(data: FuelEfficiencyRequest) -> tuple:
    return (data.car_id, data.fe_date, data.fe_amount, data.fe_unitprice, data.fe_mileage)


@router.post("", status_code=201)
async def create_fuel_efficiency(data: FuelEfficiencyRequest):
    """Record a fill-up (volume, unit price, odometer)"""
    async with get_db() as db:
        async with transaction(db):
            await require_car(db, data.car_id)
            fe_id = await execute_insert(db, """
                INSERT INTO FuelEfficiencies (car_id, fe_date, fe_amount, fe_unitprice, fe_mileage)
                VALUES (?, ?, ?, ?, ?)
            """, _params(data))
            return await execute_one(db, "SELECT * FROM FuelEfficiencies WHERE fe_id = ?", (fe_id,))


@router.get("")
async def list_fuel_efficiencies():
    async with get_db() as db:
        return await execute_all(db, "SELECT * FROM FuelEfficiencies")


@router.get("/{fe_id}")
async def get_fuel_efficiency(fe_id: str):
    fid = parse_int_id(fe_id, "fe_id")
    async with get_db() as db:
        row = await execute_one(db, "SELECT * FROM FuelEfficiencies WHERE fe_id = ?", (fid,))
        if not row:
            raise NotFound("Fuel efficiency not found")
        return row


@router.put("/{fe_id}")
async def update_fuel_efficiency(fe_id: str, data: FuelEfficiencyRequest):
    fid = parse_int_id(fe_id, "fe_id")
    async with get_db() as db:
        async with transaction(db):
            changed = await execute_update(db, """
                UPDATE FuelEfficiencies
                SET car_id = ?, fe_date = ?, fe_amount = ?, fe_unitprice = ?, fe_mileage = ?,
                    updated_at = CURRENT_TIMESTAMP
                WHERE fe_id = ?
            """, _params(data) + (fid,))
            if changed == 0:
                raise NotFound("Fuel efficiency not found")
            return await execute_one(db, "SELECT * FROM FuelEfficiencies WHERE fe_id = ?", (fid,))


@router.delete("/{fe_id}", status_code=204)
async def delete_fuel_efficiency(fe_id: str):
    fid = parse_int_id(fe_id, "fe_id")
    async with get_db() as db:
        async with transaction(db):
            changed = await execute_update(db, "DELETE FROM FuelEfficiencies WHERE fe_id = ?", (fid,))
            if changed == 0:
                raise NotFound("Fuel efficiency not found")
    return Response(status_code=204)
