"""
AutoTrack - Database Connection Manager
Version: 1.1.0

Changelog:
v1.1.0 (2026-10-05): transaction() scope; helpers no longer commit on their own
v1.0.0 (2026-09-28): Initial database connection manager with async helpers

Provides centralized async SQLite connection management for all endpoints.
Uses aiosqlite with WAL journal mode and foreign key enforcement. Driver
errors are logged here and re-raised as AutoTrack errors so no handler ever
leaks SQL detail to the client.
"""

import os
import logging
import aiosqlite
from contextlib import asynccontextmanager

from config import settings
from errors import Conflict, InternalError, ReferenceNotFound

logger = logging.getLogger(__name__)


def get_db_path() -> str:
    """Resolve database path, create data directory if needed"""
    db_path = settings.SQLITE_DB_PATH
    os.makedirs(os.path.dirname(os.path.abspath(db_path)), exist_ok=True)
    return db_path


@asynccontextmanager
async def get_db():
    """Async context manager yielding an aiosqlite connection with WAL + FK"""
    try:
        db = await aiosqlite.connect(get_db_path())
    except aiosqlite.Error as e:
        logger.error(f"Database connection failed: {e}", exc_info=True)
        raise InternalError() from e
    db.row_factory = aiosqlite.Row
    try:
        await db.execute("PRAGMA journal_mode=WAL")
        await db.execute("PRAGMA foreign_keys=ON")
        yield db
    finally:
        await db.close()


@asynccontextmanager
async def transaction(db):
    """Commit everything executed inside the block, or roll it all back"""
    try:
        yield db
        await db.commit()
    except BaseException:
        await db.rollback()
        raise


async def _execute(db, sql: str, params=()):
    try:
        return await db.execute(sql, params)
    except aiosqlite.IntegrityError as e:
        logger.warning(f"Integrity error: {e}")
        if "FOREIGN KEY" in str(e):
            raise ReferenceNotFound() from e
        raise Conflict() from e
    except aiosqlite.Error as e:
        logger.error(f"Database error: {e}", exc_info=True)
        raise InternalError() from e


async def execute_one(db, sql: str, params=()) -> dict | None:
    """Execute query and return first row as dict, or None"""
    cursor = await _execute(db, sql, params)
    row = await cursor.fetchone()
    return dict(row) if row else None


async def execute_all(db, sql: str, params=()) -> list[dict]:
    """Execute query and return all rows as list of dicts"""
    cursor = await _execute(db, sql, params)
    rows = await cursor.fetchall()
    return [dict(row) for row in rows]


async def execute_insert(db, sql: str, params=()) -> int:
    """Execute INSERT and return lastrowid (commit is left to transaction())"""
    cursor = await _execute(db, sql, params)
    return cursor.lastrowid


async def execute_update(db, sql: str, params=()) -> int:
    """Execute UPDATE/DELETE and return rowcount (commit is left to transaction())"""
    cursor = await _execute(db, sql, params)
    return cursor.rowcount


async def car_exists(db, car_id: int) -> bool:
    row = await execute_one(db, "SELECT car_id FROM Cars WHERE car_id = ?", (car_id,))
    return row is not None


async def require_car(db, car_id: int):
    """Raise ReferenceNotFound unless the car exists"""
    if not await car_exists(db, car_id):
        raise ReferenceNotFound(f"Car with car_id {car_id} does not exist")
