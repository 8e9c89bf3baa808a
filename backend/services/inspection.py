"""
AutoTrack - Car Inspection Normalizer
Version: 1.1.0

Changelog:
v1.1.0 (2026-10-12): Kei-car sentinels filled in when the scanner leaves them empty
v1.0.0 (2026-09-28): Initial normalizer

Reduces a scanned inspection payload to the field group that matches its
vehicle category before it is written:

- is_kcar = 0 (standard car): every kei-only field is NULL
- is_kcar = 1 (kei car): every standard-only field is NULL and every kei-only
  field holds its fixed QR value
"""

import logging

from models.car_inspection import (
    CarInspectionRequest,
    COMMON_FIELDS,
    INSPECTION_COLUMNS,
    KCAR_SENTINELS,
    STANDARD_ONLY_FIELDS,
)

logger = logging.getLogger(__name__)


def normalize_inspection(data: CarInspectionRequest, car_id: int) -> dict:
    """Return a column -> value dict covering every inspection column"""
    payload = data.model_dump()
    row = {"car_id": car_id}
    for name in COMMON_FIELDS:
        row[name] = payload.get(name)

    if data.is_kcar == 1:
        dropped = [f for f in STANDARD_ONLY_FIELDS if payload.get(f) is not None]
        for name in STANDARD_ONLY_FIELDS:
            row[name] = None
        for name, sentinel in KCAR_SENTINELS.items():
            row[name] = sentinel
    else:
        dropped = [f for f in KCAR_SENTINELS if payload.get(f) is not None]
        for name in STANDARD_ONLY_FIELDS:
            row[name] = payload.get(name)
        for name in KCAR_SENTINELS:
            row[name] = None

    if dropped:
        logger.debug(f"Car {car_id}: cleared fields not used for is_kcar={data.is_kcar}: {dropped}")
    return row


def row_params(row: dict) -> tuple:
    """Values in INSPECTION_COLUMNS order for a parameterized statement"""
    return tuple(row[name] for name in INSPECTION_COLUMNS)
