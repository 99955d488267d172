from typing import Any, Mapping

from bson import ObjectId
from bson.errors import InvalidId
from loguru import logger
from motor.motor_asyncio import AsyncIOMotorCollection

from catalog_service.core.errors import persistence_guard
from catalog_service.core.metrics import CATALOG_DB_REQUESTS_TOTAL


def to_object_id(value: Any) -> ObjectId | None:
    """Parse an identifier, returning None when it cannot name any document."""
    if isinstance(value, ObjectId):
        return value
    try:
        return ObjectId(value)
    except (InvalidId, TypeError):
        return None


class MongoRepository:
    """CRUD over a single collection; subclasses decide the document shape."""

    collection_name: str = ""

    def __init__(self, collection: AsyncIOMotorCollection, service_name: str = "catalog"):
        self.col = collection
        self.service_name = service_name

    def serialize(self, doc: Mapping[str, Any]) -> dict[str, Any]:
        raise NotImplementedError

    def _count(self, operation: str) -> None:
        CATALOG_DB_REQUESTS_TOTAL.labels(
            service=self.service_name,
            collection=self.collection_name,
            operation=operation,
        ).inc()

    @persistence_guard
    async def create(self, fields: dict[str, Any]) -> dict[str, Any]:
        self._count("insert")
        doc = dict(fields)
        res = await self.col.insert_one(doc)
        doc["_id"] = res.inserted_id
        logger.info(
            "Inserted into {col}: id={id}",
            col=self.collection_name,
            id=str(res.inserted_id),
        )
        return self.serialize(doc)

    @persistence_guard
    async def find(self, query: Mapping[str, Any] | None = None) -> list[dict[str, Any]]:
        self._count("find")
        cursor = self.col.find(dict(query or {}))
        return [self.serialize(d) async for d in cursor]

    @persistence_guard
    async def get(self, id: str) -> dict[str, Any] | None:
        _id = to_object_id(id)
        if _id is None:
            logger.warning("Malformed id={id} for {col}", id=id, col=self.collection_name)
            return None
        self._count("find_one")
        doc = await self.col.find_one({"_id": _id})
        return self.serialize(doc) if doc else None

    @persistence_guard
    async def get_many(self, ids: list[str]) -> dict[str, dict[str, Any]]:
        object_ids = [oid for oid in (to_object_id(i) for i in set(ids)) if oid is not None]
        if not object_ids:
            return {}
        self._count("find")
        cursor = self.col.find({"_id": {"$in": object_ids}})
        return {str(d["_id"]): self.serialize(d) async for d in cursor}

    async def exists(self, id: str) -> bool:
        return await self.get(id) is not None

    @persistence_guard
    async def update(self, id: str, fields: dict[str, Any]) -> bool:
        """Apply ``fields`` with $set; False when no document matched."""
        _id = to_object_id(id)
        if _id is None:
            return False
        if not fields:
            self._count("count")
            return await self.col.count_documents({"_id": _id}, limit=1) > 0
        self._count("update_one")
        res = await self.col.update_one({"_id": _id}, {"$set": dict(fields)})
        return res.matched_count > 0

    @persistence_guard
    async def delete(self, id: str) -> bool:
        _id = to_object_id(id)
        if _id is None:
            return False
        self._count("delete_one")
        res = await self.col.delete_one({"_id": _id})
        return res.deleted_count > 0
