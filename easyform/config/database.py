"""
Database configuration and connection management for MongoDB
"""
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

from easyform.config.settings import settings

logger = logging.getLogger(__name__)


class DatabaseConfig:
    """MongoDB database configuration"""

    def __init__(self):
        self.MONGO_URI = settings.MONGO_URI
        self.DATABASE_NAME = settings.DATABASE_NAME
        self.CACHE_CLIENT = settings.MONGO_CACHE_CLIENT
        self.client: Optional[AsyncIOMotorClient] = None

    def _new_client(self) -> AsyncIOMotorClient:
        return AsyncIOMotorClient(self.MONGO_URI)

    def _database(self, client: AsyncIOMotorClient) -> AsyncIOMotorDatabase:
        # Database named in the URI wins, DATABASE_NAME otherwise
        return client.get_default_database(default=self.DATABASE_NAME)

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncIOMotorDatabase]:
        """
        Yield a database handle for the duration of one request.

        Without client caching a fresh client is created and always closed on
        exit, including when the body raises. With caching the process-wide
        client is created on first use and left open until close_db().
        """
        if self.CACHE_CLIENT:
            if self.client is None:
                self.client = self._new_client()
                logger.info("✅ MongoDB client created (cached): %s", self.DATABASE_NAME)
            yield self._database(self.client)
            return

        client = self._new_client()
        try:
            yield self._database(client)
        finally:
            client.close()

    async def close_db(self):
        """Close the cached MongoDB client, if any"""
        if self.client is not None:
            self.client.close()
            self.client = None
            logger.info("✅ MongoDB connection closed")


# Global database instance
db_config = DatabaseConfig()


# Collection names
class Collections:
    COMPANIES = "companies"
    FORMS = "forms"
    SUBMISSIONS = "submissions"


async def get_database() -> AsyncIterator[AsyncIOMotorDatabase]:
    """FastAPI dependency: one scoped database handle per request"""
    logger.info("MONGO_URI present: %s", "yes" if settings.mongo_uri_present else "no")
    async with db_config.session() as database:
        yield database
