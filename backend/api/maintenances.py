"""
AutoTrack - Maintenance API Endpoints
Version: 1.1.0

Changelog:
v1.1.0 (2026-10-05): maint_title derived from maint_type on create and update
v1.0.0 (2026-09-28): Initial maintenance CRUD
"""

from fastapi import APIRouter, Response
import logging

from database import get_db, execute_one, execute_all, execute_insert, execute_update, transaction, require_car
from errors import NotFound, parse_int_id
from models import MaintenanceRequest
from models.maintenance import apply_maintenance_logic

router = APIRouter(prefix="/maintenances", tags=["maintenances"])
logger = logging.getLogger(__name__)


def _params(data: MaintenanceRequest) -> tuple:
    return (data.car_id, data.maint_type, data.maint_title, data.maint_date, data.maint_description)


@router.post("", status_code=201)
async def create_maintenance(data: MaintenanceRequest):
    data = apply_maintenance_logic(data)
    async with get_db() as db:
        async with transaction(db):
            await require_car(db, data.car_id)
            maint_id = await execute_insert(db, """
                INSERT INTO Maintenances (car_id, maint_type, maint_title, maint_date, maint_description)
                VALUES (?, ?, ?, ?, ?)
            """, _params(data))
            return await execute_one(db, "SELECT * FROM Maintenances WHERE maint_id = ?", (maint_id,))


@router.get("")
async def list_maintenances():
    async with get_db() as db:
        return await execute_all(db, "SELECT * FROM Maintenances")


@router.get("/{maint_id}")
async def get_maintenance(maint_id: str):
    mid = parse_int_id(maint_id, "maint_id")
    async with get_db() as db:
        row = await execute_one(db, "SELECT * FROM Maintenances WHERE maint_id = ?", (mid,))
        if not row:
            raise NotFound("Maintenance not found")
        return row


@router.put("/{maint_id}")
async def update_maintenance(maint_id: str, data: MaintenanceRequest):
    mid = parse_int_id(maint_id, "maint_id")
    data = apply_maintenance_logic(data)
    async with get_db() as db:
        async with transaction(db):
            changed = await execute_update(db, """
                UPDATE Maintenances
                SET car_id = ?, maint_type = ?, maint_title = ?, maint_date = ?, maint_description = ?,
                    updated_at = CURRENT_TIMESTAMP
                WHERE maint_id = ?
            """, _params(data) + (mid,))
            if changed == 0:
                raise NotFound("Maintenance not found")
            return await execute_one(db, "SELECT * FROM Maintenances WHERE maint_id = ?", (mid,))


@router.delete("/{maint_id}", status_code=204)
async def delete_maintenance(maint_id: str):
    mid = parse_int_id(maint_id, "maint_id")
    async with get_db() as db:
        async with transaction(db):
            changed = await execute_update(db, "DELETE FROM Maintenances WHERE maint_id = ?", (mid,))
            if changed == 0:
                raise NotFound("Maintenance not found")
    return Response(status_code=204)
