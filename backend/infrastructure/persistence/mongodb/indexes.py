"""MongoDB indexes for the gain plan collections.

Collections:
- gain_profiles / calculation_snapshots: keyed by user id (``_id``)
- body_stats / workout_logs: date-range reads per user
- adaptations: pending lookups and created-date history per user
"""

import logging
from typing import Any, Dict, List, Tuple

from motor.motor_asyncio import AsyncIOMotorDatabase

logger = logging.getLogger(__name__)

IndexSpec = Tuple[str, List[Tuple[str, int]]]

INDEXES: Dict[str, List[IndexSpec]] = {
    "body_stats": [
        ("idx_user_date", [("user_id", 1), ("date", 1), ("created_at", 1)]),
    ],
    "workout_logs": [
        ("idx_user_date", [("user_id", 1), ("date", 1), ("created_at", 1)]),
    ],
    "adaptations": [
        ("idx_user_created", [("user_id", 1), ("created_at", 1)]),
        ("idx_user_pending", [("user_id", 1), ("applied", 1), ("effective_date", 1)]),
    ],
}


async def ensure_indexes(db: AsyncIOMotorDatabase[Dict[str, Any]]) -> int:
    """Create missing indexes. Idempotent.

    Returns:
        Number of index specs submitted
    """
    created = 0
    for collection_name, specs in INDEXES.items():
        collection = db[collection_name]
        for name, keys in specs:
            await collection.create_index(keys, name=name)
            keys_str = ", ".join(f"{k}:{v}" for k, v in keys)
            logger.info(f"Ensured index {collection_name}.{name}: [{keys_str}]")
            created += 1
    return created
