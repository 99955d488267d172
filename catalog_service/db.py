from loguru import logger
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorCollection
from pymongo import ASCENDING

from catalog_service.core.config import Settings


class Database:
    """Owns the Motor client for the lifetime of the process."""

    def __init__(self, url: str, default_db: str):
        self.url = url
        self.default_db = default_db
        self._client: AsyncIOMotorClient | None = None
        self._db = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        return cls(settings.MONGO_URL, settings.MONGO_DB)

    async def connect(self) -> None:
        if self._client is not None:
            return
        self._client = AsyncIOMotorClient(self.url)
        self._db = self._client.get_default_database(self.default_db)
        # Indexes
        await self.products.create_index([("category", ASCENDING)])
        logger.info("Mongo connected to database {name}", name=self._db.name)

    async def disconnect(self) -> None:
        if self._client is not None:
            self._client.close()
            self._client = None
            self._db = None
            logger.info("Mongo disconnected")

    def _collection(self, name: str) -> AsyncIOMotorCollection:
        if self._db is None:
            raise RuntimeError("Mongo collection is not initialized yet (startup not finished)")
        return self._db.get_collection(name)

    @property
    def categories(self) -> AsyncIOMotorCollection:
        return self._collection("categories")

    @property
    def products(self) -> AsyncIOMotorCollection:
        return self._collection("products")
