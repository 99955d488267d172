from typing import Any, Mapping

from loguru import logger

from catalog_service.crud.base import MongoRepository


class CategoryRepository(MongoRepository):
    collection_name = "categories"

    def serialize(self, doc: Mapping[str, Any]) -> dict[str, Any]:
        return {
            "id": str(doc["_id"]),
            "name": doc.get("name"),
            "imageUrl": doc.get("imageUrl"),
        }

    async def get_all(self) -> list[dict[str, Any]]:
        categories = await self.find()
        logger.info("Categories retrieved from DB, count={count}", count=len(categories))
        return categories
