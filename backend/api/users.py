"""
AutoTrack - User API Endpoints
Version: 1.0.0

Changelog:
v1.0.0 (2026-09-28): Initial user CRUD and owned-car listing
"""

from fastapi import APIRouter, Response
import logging

from database import get_db, execute_one, execute_all, execute_insert, execute_update, transaction
from errors import Conflict, InvalidIdentifier, NotFound
from models import UserCreate, UserUpdate

router = APIRouter(prefix="/users", tags=["users"])
logger = logging.getLogger(__name__)


def _check_uid(firebase_user_id: str) -> str:
    if not firebase_user_id.strip():
        raise InvalidIdentifier("Invalid firebase_user_id")
    return firebase_user_id


@router.post("", status_code=201)
async def create_user(data: UserCreate):
    """Register the profile for a Firebase account"""
    async with get_db() as db:
        async with transaction(db):
            existing = await execute_one(
                db, "SELECT firebase_user_id FROM Users WHERE firebase_user_id = ?",
                (data.firebase_user_id,)
            )
            if existing:
                raise Conflict(f"User {data.firebase_user_id} already exists")
            await execute_insert(
                db,
                "INSERT INTO Users (firebase_user_id, user_email, user_name) VALUES (?, ?, ?)",
                (data.firebase_user_id, data.user_email, data.user_name)
            )
            user = await execute_one(
                db, "SELECT * FROM Users WHERE firebase_user_id = ?", (data.firebase_user_id,)
            )
    logger.info(f"Created user {data.firebase_user_id}")
    return user


@router.get("")
async def list_users():
    async with get_db() as db:
        return await execute_all(db, "SELECT * FROM Users")


@router.get("/{firebase_user_id}")
async def get_user(firebase_user_id: str):
    _check_uid(firebase_user_id)
    async with get_db() as db:
        user = await execute_one(
            db, "SELECT * FROM Users WHERE firebase_user_id = ?", (firebase_user_id,)
        )
        if not user:
            raise NotFound("User not found")
        return user


@router.get("/{firebase_user_id}/cars")
async def list_user_cars(firebase_user_id: str):
    """Cars owned by the user through user_car"""
    _check_uid(firebase_user_id)
    async with get_db() as db:
        return await execute_all(db, """
            SELECT c.* FROM Cars c
            JOIN user_car uc ON uc.car_id = c.car_id
            WHERE uc.firebase_user_id = ?
            ORDER BY c.car_id
        """, (firebase_user_id,))


@router.put("/{firebase_user_id}")
async def update_user(firebase_user_id: str, data: UserUpdate):
    _check_uid(firebase_user_id)
    async with get_db() as db:
        async with transaction(db):
            changed = await execute_update(db, """
                UPDATE Users SET user_email = ?, user_name = ?, updated_at = CURRENT_TIMESTAMP
                WHERE firebase_user_id = ?
            """, (data.user_email, data.user_name, firebase_user_id))
            if changed == 0:
                raise NotFound("User not found")
            return await execute_one(
                db, "SELECT * FROM Users WHERE firebase_user_id = ?", (firebase_user_id,)
            )


@router.delete("/{firebase_user_id}", status_code=204)
async def delete_user(firebase_user_id: str):
    _check_uid(firebase_user_id)
    async with get_db() as db:
        async with transaction(db):
            changed = await execute_update(
                db, "DELETE FROM Users WHERE firebase_user_id = ?", (firebase_user_id,)
            )
            if changed == 0:
                raise NotFound("User not found")
    return Response(status_code=204)
