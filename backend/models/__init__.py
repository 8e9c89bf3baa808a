"""
AutoTrack - Database Models
Version: 1.1.0

Changelog:
v1.1.0 (2026-10-05): Tunings.car_id added for databases created before tunings
                      were car-scoped; CarInspections keyed one-to-one on car_id
v1.0.0 (2026-09-28): Initial schema: users, cars, user_car and car child tables
"""

from .user import UserCreate, UserUpdate
from .car import CarFields, CarCreateRequest, CarImageUpdate
from .accident import AccidentRequest
from .fuel_efficiency import FuelEfficiencyRequest
from .maintenance import MaintType, MaintenanceRequest
from .periodic_inspection import PeriodicInspectionRequest
from .tuning import TuningRequest
from .car_inspection import CarInspectionRequest, CarInspectionUpsert

import aiosqlite
import logging

logger = logging.getLogger(__name__)


async def _add_column_if_missing(db, table, column, col_type, default=None):
    """Idempotent ALTER TABLE ADD COLUMN"""
    cursor = await db.execute(f"PRAGMA table_info({table})")
    existing = {row[1] for row in await cursor.fetchall()}
    if column not in existing:
        default_clause = f" DEFAULT {default}" if default is not None else ""
        await db.execute(f"ALTER TABLE {table} ADD COLUMN {column} {col_type}{default_clause}")
        logger.info(f"Added column {table}.{column}")


async def init_db():
    """Initialize SQLite database with the AutoTrack schema"""
    from database import get_db_path
    db_path = get_db_path()
    logger.info(f"Initializing database: {db_path}")

    async with aiosqlite.connect(db_path) as db:
        await db.execute("PRAGMA journal_mode=WAL")
        await db.execute("PRAGMA foreign_keys=ON")

        # ================================================================
        # USERS (Firebase accounts)
        # ================================================================
        await db.execute("""
            CREATE TABLE IF NOT EXISTS Users (
                firebase_user_id TEXT PRIMARY KEY,
                user_email TEXT NOT NULL,
                user_name TEXT NOT NULL,
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
        """)

        # ================================================================
        # CARS
        # ================================================================
        await db.execute("""
            CREATE TABLE IF NOT EXISTS Cars (
                car_id INTEGER PRIMARY KEY AUTOINCREMENT,
                car_name TEXT NOT NULL,
                carmodelnum TEXT NOT NULL,
                car_color TEXT NOT NULL,
                car_mileage INTEGER NOT NULL DEFAULT 0,
                car_isflooding INTEGER NOT NULL DEFAULT 0,
                car_issmoked INTEGER NOT NULL DEFAULT 0,
                car_image_url TEXT,
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
        """)

        # Ownership. A signed-in user can own cars before a Users row exists,
        # so firebase_user_id is not a foreign key
        await db.execute("""
            CREATE TABLE IF NOT EXISTS user_car (
                firebase_user_id TEXT NOT NULL,
                car_id INTEGER NOT NULL REFERENCES Cars(car_id),
                PRIMARY KEY (firebase_user_id, car_id)
            )
        """)

        # ================================================================
        # CAR HISTORY
        # ================================================================
        await db.execute("""
            CREATE TABLE IF NOT EXISTS Accidents (
                accident_id INTEGER PRIMARY KEY AUTOINCREMENT,
                car_id INTEGER NOT NULL REFERENCES Cars(car_id),
                accident_date TEXT NOT NULL,
                accident_description TEXT NOT NULL,
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
        """)

        await db.execute("""
            CREATE TABLE IF NOT EXISTS FuelEfficiencies (
                fe_id INTEGER PRIMARY KEY AUTOINCREMENT,
                car_id INTEGER NOT NULL REFERENCES Cars(car_id),
                fe_date TEXT NOT NULL,
                fe_amount REAL NOT NULL,
                fe_unitprice REAL NOT NULL,
                fe_mileage REAL NOT NULL,
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
        """)

        await db.execute("""
            CREATE TABLE IF NOT EXISTS Maintenances (
                maint_id INTEGER PRIMARY KEY AUTOINCREMENT,
                car_id INTEGER NOT NULL REFERENCES Cars(car_id),
                maint_type TEXT NOT NULL,
                maint_title TEXT NOT NULL,
                maint_date TEXT NOT NULL,
                maint_description TEXT NOT NULL,
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
        """)

        await db.execute("""
            CREATE TABLE IF NOT EXISTS PeriodicInspection (
                pi_id INTEGER PRIMARY KEY AUTOINCREMENT,
                car_id INTEGER NOT NULL REFERENCES Cars(car_id),
                pi_name TEXT NOT NULL,
                pi_date TEXT NOT NULL,
                pi_nextdate TEXT NOT NULL,
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
        """)

        await db.execute("""
            CREATE TABLE IF NOT EXISTS Tunings (
                tuning_id INTEGER PRIMARY KEY AUTOINCREMENT,
                car_id INTEGER REFERENCES Cars(car_id),
                tuning_name TEXT NOT NULL,
                tuning_price INTEGER NOT NULL,
                tuning_image_url TEXT,
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
        """)
        # Tunings predating car scoping have no car_id column
        await _add_column_if_missing(db, "Tunings", "car_id", "INTEGER REFERENCES Cars(car_id)")

        # ================================================================
        # CAR INSPECTIONS (shaken certificate, one per car)
        # ================================================================
        await db.execute("""
            CREATE TABLE IF NOT EXISTS CarInspections (
                car_inspection_id INTEGER PRIMARY KEY AUTOINCREMENT,
                car_id INTEGER NOT NULL UNIQUE REFERENCES Cars(car_id),
                is_kcar INTEGER NOT NULL CHECK (is_kcar IN (0, 1)),

                -- Common
                chassis_number_stamp_location TEXT,
                model_specification_number_category_classification_number TEXT,
                expiration_date TEXT,
                first_registration_year_month TEXT,
                model TEXT,
                axle_weight_ff REAL,
                axle_weight_rr REAL,
                noise_regulation TEXT,
                proximity_exhaust_noise_limit REAL,
                fuel_type_code TEXT,
                car_registration_number TEXT,
                plate_count_size_preferred_number_identifier TEXT,
                chassis_number TEXT,
                engine_model TEXT,
                document_type TEXT,

                -- Standard car only
                version_info_1 TEXT,
                version_info_2 TEXT,
                registration_version_info TEXT,
                axle_weight_fr REAL,
                axle_weight_rf REAL,
                drive_system TEXT,
                opacimeter_measured_car INTEGER,
                nox_pm_measurement_mode TEXT,
                nox_value REAL,
                pm_value REAL,
                safety_standard_application_date TEXT,

                -- Kei car only
                system_id_2 TEXT,
                system_id_3 TEXT,
                version_number_2 TEXT,
                version_number_3 TEXT,
                k_axle_weight_fr TEXT,
                k_axle_weight_rf TEXT,
                k_drive_system TEXT,
                k_opacimeter_measured_car TEXT,
                k_nox_pm_measurement_mode TEXT,
                k_nox_value TEXT,
                k_pm_value TEXT,
                preliminary_item TEXT,

                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
        """)

        # ================================================================
        # INDEXES
        # ================================================================
        await db.execute("CREATE INDEX IF NOT EXISTS idx_user_car_car ON user_car(car_id)")
        await db.execute("CREATE INDEX IF NOT EXISTS idx_accident_car ON Accidents(car_id)")
        await db.execute("CREATE INDEX IF NOT EXISTS idx_fe_car ON FuelEfficiencies(car_id)")
        await db.execute("CREATE INDEX IF NOT EXISTS idx_maint_car ON Maintenances(car_id)")
        await db.execute("CREATE INDEX IF NOT EXISTS idx_pi_car ON PeriodicInspection(car_id)")
        await db.execute("CREATE INDEX IF NOT EXISTS idx_tuning_car ON Tunings(car_id)")

        await db.commit()

    logger.info("Database initialized successfully")


__all__ = [
    'UserCreate', 'UserUpdate',
    'CarFields', 'CarCreateRequest', 'CarImageUpdate',
    'AccidentRequest', 'FuelEfficiencyRequest',
    'MaintType', 'MaintenanceRequest',
    'PeriodicInspectionRequest', 'TuningRequest',
    'CarInspectionRequest', 'CarInspectionUpsert',
    'init_db'
]
