"""
AutoTrack - Periodic Inspection API Endpoints
Version: 1.0.0

Changelog:
v1.0.0 (2026-09-28): Initial periodic inspection CRUD
"""

from fastapi import APIRouter, Response

from database import get_db, execute_one, execute_all, execute_insert, execute_update, transaction, require_car
from errors import NotFound, parse_int_id
from models import PeriodicInspectionRequest

router = APIRouter(prefix="/periodic_inspections", tags=["periodic-inspections"])


@router.post("", status_code=201)
async def create_periodic_inspection(data: PeriodicInspectionRequest):
    async with get_db() as db:
        async with transaction(db):
            await require_car(db, data.car_id)
            pi_id = await execute_insert(db, """
                INSERT INTO PeriodicInspection (car_id, pi_name, pi_date, pi_nextdate)
                VALUES (?, ?, ?, ?)
            """, (data.car_id, data.pi_name, data.pi_date, data.pi_nextdate))
            return await execute_one(db, "SELECT * FROM PeriodicInspection WHERE pi_id = ?", (pi_id,))


@router.get("")
async def list_periodic_inspections():
    async with get_db() as db:
        return await execute_all(db, "SELECT * FROM PeriodicInspection")


@router.get("/{pi_id}")
async def get_periodic_inspection(pi_id: str):
    pid = parse_int_id(pi_id, "pi_id")
    async with get_db() as db:
        row = await execute_one(db, "SELECT * FROM PeriodicInspection WHERE pi_id = ?", (pid,))
        if not row:
            raise NotFound("Periodic inspection not found")
        return row


@router.put("/{pi_id}")
async def update_periodic_inspection(pi_id: str, data: PeriodicInspectionRequest):
    pid = parse_int_id(pi_id, "pi_id")
    async with get_db() as db:
        async with transaction(db):
            changed = await execute_update(db, """
                UPDATE PeriodicInspection
                SET car_id = ?, pi_name = ?, pi_date = ?, pi_nextdate = ?,
                    updated_at = CURRENT_TIMESTAMP
                WHERE pi_id = ?
            """, (data.car_id, data.pi_name, data.pi_date, data.pi_nextdate, pid))
            if changed == 0:
                raise NotFound("Periodic inspection not found")
            return await execute_one(db, "SELECT * FROM PeriodicInspection WHERE pi_id = ?", (pid,))


@router.delete("/{pi_id}", status_code=204)
async def delete_periodic_inspection(pi_id: str):
    pid = parse_int_id(pi_id, "pi_id")
    async with get_db() as db:
        async with transaction(db):
            changed = await execute_update(db, "DELETE FROM PeriodicInspection WHERE pi_id = ?", (pid,))
            if changed == 0:
                raise NotFound("Periodic inspection not found")
    return Response(status_code=204)
