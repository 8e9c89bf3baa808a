"""
AutoTrack - Tuning API Endpoints
Version: 1.1.0

Changelog:
v1.1.0 (2026-10-05): Car-scoped tunings; full CRUD returning stored rows
v1.0.0 (2026-09-28): Initial tuning registration
"""

from fastapi import APIRouter, Response
import logging

from database import get_db, execute_one, execute_all, execute_insert, execute_update, transaction, require_car
from errors import NotFound, parse_int_id
from models import TuningRequest

router = APIRouter(prefix="/tunings", tags=["tunings"])
logger = logging.getLogger(__name__)


def _params(data: TuningRequest) -> tuple:
    return (data.car_id, data.tuning_name, data.tuning_price, data.tuning_image_url or None)


@router.post("", status_code=201)
async def create_tuning(data: TuningRequest):
    async with get_db() as db:
        async with transaction(db):
            await require_car(db, data.car_id)
            tuning_id = await execute_insert(db, """
                INSERT INTO Tunings (car_id, tuning_name, tuning_price, tuning_image_url)
                VALUES (?, ?, ?, ?)
            """, _params(data))
            return await execute_one(db, "SELECT * FROM Tunings WHERE tuning_id = ?", (tuning_id,))


@router.get("")
async def list_tunings():
    async with get_db() as db:
        return await execute_all(db, "SELECT * FROM Tunings")


@router.get("/{tuning_id}")
async def get_tuning(tuning_id: str):
    tid = parse_int_id(tuning_id, "tuning_id")
    async with get_db() as db:
        row = await execute_one(db, "SELECT * FROM Tunings WHERE tuning_id = ?", (tid,))
        if not row:
            raise NotFound("Tuning not found")
        return row


@router.put("/{tuning_id}")
async def update_tuning(tuning_id: str, data: TuningRequest):
    tid = parse_int_id(tuning_id, "tuning_id")
    async with get_db() as db:
        async with transaction(db):
            changed = await execute_update(db, """
                UPDATE Tunings
                SET car_id = ?, tuning_name = ?, tuning_price = ?, tuning_image_url = ?,
                    updated_at = CURRENT_TIMESTAMP
                WHERE tuning_id = ?
            """, _params(data) + (tid,))
            if changed == 0:
                raise NotFound("Tuning not found")
            return await execute_one(db, "SELECT * FROM Tunings WHERE tuning_id = ?", (tid,))


@router.delete("/{tuning_id}", status_code=204)
async def delete_tuning(tuning_id: str):
    tid = parse_int_id(tuning_id, "tuning_id")
    async with get_db() as db:
        async with transaction(db):
            changed = await execute_update(db, "DELETE FROM Tunings WHERE tuning_id = ?", (tid,))
            if changed == 0:
                raise NotFound("Tuning not found")
    return Response(status_code=204)
