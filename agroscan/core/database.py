import logging
from motor.motor_asyncio import AsyncIOMotorClient
from agroscan.core.config import MONGODB_URL, DATABASE_NAME

logger = logging.getLogger(__name__)


class MongoDB:
    def __init__(self):
        self.client = None
        self.db = None

    async def connect(self):
        self.client = AsyncIOMotorClient(MONGODB_URL)
        self.db = self.client[DATABASE_NAME]
        await self.db["controls"].create_index("function_name", unique=True)
        logger.info(f"Connected to MongoDB database '{DATABASE_NAME}'")

    async def disconnect(self):
        if self.client is not None:
            self.client.close()
            logger.info("MongoDB connection closed")
        self.client = None
        self.db = None

    def get_database(self):
        if self.db is None:
            raise RuntimeError("Database is not connected")
        return self.db


mongodb = MongoDB()
