import logging
import os
from pathlib import Path

from dotenv import load_dotenv
from motor.motor_asyncio import AsyncIOMotorClient
from pymongo import ASCENDING, DESCENDING

logger = logging.getLogger(__name__)

# Load .env from the project root, falling back to the working directory
env_path = Path(__file__).resolve().parent.parent / ".env"
if env_path.exists():
    load_dotenv(dotenv_path=env_path)
else:
    load_dotenv()

MONGO_URI = os.getenv("MONGO_URI")
DATABASE_NAME = os.getenv("DATABASE_NAME", "jobboard")

client = None
db = None


async def ensure_indexes(database):
    """Create the indexes the rules layer relies on (idempotent)."""
    await database.users.create_index("email", unique=True)
    await database.jobs.create_index("employer")
    await database.jobs.create_index([("created_at", DESCENDING)])
    # One application per applicant per job
    await database.applications.create_index(
        [("job", ASCENDING), ("applicant", ASCENDING)],
        unique=True,
    )
    await database.applications.create_index("applicant")


async def connect_to_mongo():
    global client, db

    if not MONGO_URI:
        raise ValueError("MONGO_URI environment variable is not set! Check your .env file.")

    client = AsyncIOMotorClient(MONGO_URI)
    db = client[DATABASE_NAME]
    await client.admin.command("ping")
    await ensure_indexes(db)

    if "mongodb+srv" in MONGO_URI:
        logger.info("Connected to MongoDB Atlas, database %s", DATABASE_NAME)
    else:
        logger.info("Connected to local MongoDB, database %s", DATABASE_NAME)


async def close_mongo_connection():
    global client, db

    if client:
        client.close()
        logger.info("MongoDB connection closed")
    client = None
    db = None


def get_db():
    return db
