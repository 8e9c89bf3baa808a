"""
AutoTrack - Accident API Endpoints
Version: 1.0.0

Changelog:
v1.0.0 (2026-09-28): Initial accident CRUD
"""

from fastapi import APIRouter, Response
import logging

from database import get_db, execute_one, execute_all, execute_insert, execute_update, transaction, require_car
from errors import NotFound, parse_int_id
from models import AccidentRequest

router = APIRouter(prefix="/accidents", tags=["accidents"])
logger = logging.getLogger(__name__)


@router.post("", status_code=201)
async def create_accident(data: AccidentRequest):
    async with get_db() as db:
        async with transaction(db):
            await require_car(db, data.car_id)
            accident_id = await execute_insert(db, """
                INSERT INTO Accidents (car_id, accident_date, accident_description)
                VALUES (?, ?, ?)
            """, (data.car_id, data.accident_date, data.accident_description))
            return await execute_one(
                db, "SELECT * FROM Accidents WHERE accident_id = ?", (accident_id,)
            )


@router.get("")
async def list_accidents():
    async with get_db() as db:
        return await execute_all(db, "SELECT * FROM Accidents")


@router.get("/{accident_id}")
async def get_accident(accident_id: str):
    aid = parse_int_id(accident_id, "accident_id")
    async with get_db() as db:
        row = await execute_one(db, "SELECT * FROM Accidents WHERE accident_id = ?", (aid,))
        if not row:
            raise NotFound("Accident not found")
        return row


@router.put("/{accident_id}")
async def update_accident(accident_id: str, data: AccidentRequest):
    aid = parse_int_id(accident_id, "accident_id")
    async with get_db() as db:
        async with transaction(db):
            changed = await execute_update(db, """
                UPDATE Accidents
                SET car_id = ?, accident_date = ?, accident_description = ?,
                    updated_at = CURRENT_TIMESTAMP
                WHERE accident_id = ?
            """, (data.car_id, data.accident_date, data.accident_description, aid))
            if changed == 0:
                raise NotFound("Accident not found")
            return await execute_one(db, "SELECT * FROM Accidents WHERE accident_id = ?", (aid,))


@router.delete("/{accident_id}", status_code=204)
async def delete_accident(accident_id: str):
    aid = parse_int_id(accident_id, "accident_id")
    async with get_db() as db:
        async with transaction(db):
            changed = await execute_update(db, "DELETE FROM Accidents WHERE accident_id = ?", (aid,))
            if changed == 0:
                raise NotFound("Accident not found")
    return Response(status_code=204)
