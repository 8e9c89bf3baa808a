"""
AutoTrack - Car Inspection (Shaken) API Endpoints
Version: 1.2.0

Changelog:
v1.2.0 (2026-10-12): PUT upserts by car_id; rows normalized to one vehicle category
v1.1.0 (2026-10-05): List endpoint; delete returns 204
v1.0.0 (2026-09-28): Initial car inspection endpoints
"""

from fastapi import APIRouter, Response
import logging

from database import get_db, execute_one, execute_all, execute_update, transaction, require_car
from errors import Conflict, NotFound, parse_int_id
from models import CarInspectionRequest, CarInspectionUpsert
from models.car_inspection import INSPECTION_COLUMNS
from services.inspection import normalize_inspection, row_params

router = APIRouter(prefix="/car_inspections", tags=["car-inspections"])
logger = logging.getLogger(__name__)

_COLUMN_LIST = ", ".join(INSPECTION_COLUMNS)
_PLACEHOLDERS = ", ".join("?" for _ in INSPECTION_COLUMNS)
_UPSERT_ASSIGNMENTS = ", ".join(f"{c} = excluded.{c}" for c in INSPECTION_COLUMNS if c != "car_id")

INSERT_SQL = f"INSERT INTO CarInspections ({_COLUMN_LIST}) VALUES ({_PLACEHOLDERS})"
UPSERT_SQL = (
    f"{INSERT_SQL} ON CONFLICT(car_id) DO UPDATE SET "
    f"{_UPSERT_ASSIGNMENTS}, updated_at = CURRENT_TIMESTAMP"
)


async def _get_inspection(db, car_id: int) -> dict | None:
    return await execute_one(db, "SELECT * FROM CarInspections WHERE car_id = ?", (car_id,))


@router.post("", status_code=201)
async def create_car_inspection(data: CarInspectionRequest):
    """Store the inspection certificate of a car (one per car)"""
    async with get_db() as db:
        async with transaction(db):
            await require_car(db, data.car_id)
            if await _get_inspection(db, data.car_id):
                raise Conflict(f"Car inspection for car_id {data.car_id} already exists")
            row = normalize_inspection(data, data.car_id)
            await execute_update(db, INSERT_SQL, row_params(row))
            inspection = await _get_inspection(db, data.car_id)

    logger.info(f"Created car inspection for car {data.car_id} (is_kcar={data.is_kcar})")
    return inspection


@router.get("")
async def list_car_inspections():
    async with get_db() as db:
        return await execute_all(db, "SELECT * FROM CarInspections")


@router.get("/{car_id}")
async def get_car_inspection(car_id: str):
    cid = parse_int_id(car_id, "car_id")
    async with get_db() as db:
        inspection = await _get_inspection(db, cid)
        if not inspection:
            raise NotFound(f"Car inspection with car_id {cid} not found")
        return inspection


@router.put("/{car_id}")
async def upsert_car_inspection(car_id: str, data: CarInspectionUpsert):
    """Create or replace the inspection of the car in the path"""
    cid = parse_int_id(car_id, "car_id")
    async with get_db() as db:
        async with transaction(db):
            await require_car(db, cid)
            row = normalize_inspection(data, cid)
            await execute_update(db, UPSERT_SQL, row_params(row))
            return await _get_inspection(db, cid)


@router.delete("/{car_id}", status_code=204)
async def delete_car_inspection(car_id: str):
    cid = parse_int_id(car_id, "car_id")
    async with get_db() as db:
        async with transaction(db):
            changed = await execute_update(db, "DELETE FROM CarInspections WHERE car_id = ?", (cid,))
            if changed == 0:
                raise NotFound(f"Car inspection with car_id {cid} not found")
    return Response(status_code=204)
