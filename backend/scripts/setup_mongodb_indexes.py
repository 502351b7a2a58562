"""Setup MongoDB indexes for the gain plan collections.

Usage:
    python scripts/setup_mongodb_indexes.py

Environment Variables:
    MONGODB_URI: MongoDB connection string (required)
    MONGODB_DATABASE: Database name (default: gainplan)
"""

import asyncio
import logging
import sys
from pathlib import Path
from typing import Any, Dict

from dotenv import load_dotenv
from motor.motor_asyncio import AsyncIOMotorClient

BASE_DIR = Path(__file__).resolve().parent.parent
# Ensure backend root is on sys.path for the 'infrastructure' import
if str(BASE_DIR) not in sys.path:
    sys.path.insert(0, str(BASE_DIR))

from infrastructure.config import get_mongodb_database, get_mongodb_uri  # noqa: E402
from infrastructure.persistence.mongodb.indexes import ensure_indexes  # noqa: E402

env_path = BASE_DIR / ".env"
if env_path.exists():
    load_dotenv(env_path)

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


async def setup_all_indexes() -> None:
    uri = get_mongodb_uri()
    if not uri:
        logger.error("MONGODB_URI not configured!")
        sys.exit(1)

    database_name = get_mongodb_database()
    logger.info(f"Connecting to MongoDB: {database_name}")
    client: AsyncIOMotorClient[Dict[str, Any]] = AsyncIOMotorClient(uri)
    try:
        await client.admin.command("ping")
        count = await ensure_indexes(client[database_name])
        logger.info(f"{count} indexes ensured")
    finally:
        client.close()


def main() -> None:
    try:
        asyncio.run(setup_all_indexes())
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        sys.exit(130)


if __name__ == "__main__":
    main()
