# database.py
from motor.motor_asyncio import AsyncIOMotorClient
from dotenv import load_dotenv
import os
import logging

logger = logging.getLogger(__name__)

load_dotenv()
MONGODB_URI = os.getenv("MONGODB_URI", "mongodb://localhost:27017")
MONGODB_DB = os.getenv("MONGODB_DB", "student_records")

client = AsyncIOMotorClient(MONGODB_URI)
db = client[MONGODB_DB]

async def get_db():
    return db

async def init_db(database=None):
    database = db if database is None else database
    logger.info(f"Creating indexes on {database.name}")
    await database.students.create_index("id", unique=True)
    await database.users.create_index("id", unique=True)
