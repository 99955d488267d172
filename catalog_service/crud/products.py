from typing import Any, Mapping

from loguru import logger

from catalog_service.crud.base import MongoRepository


class ProductRepository(MongoRepository):
    collection_name = "products"

    def serialize(self, doc: Mapping[str, Any]) -> dict[str, Any]:
        category = doc.get("category")
        return {
            "id": str(doc["_id"]),
            "name": doc.get("name"),
            "price": doc.get("price"),
            "category": str(category) if category is not None else None,
            "imageUrl": doc.get("imageUrl"),
        }

    async def get_all(self, category: str | None = None) -> list[dict[str, Any]]:
        query: dict[str, Any] = {}
        if category:
            query["category"] = category

        products = await self.find(query)
        logger.info(
            "Products retrieved from DB, count={count}, category={category}",
            count=len(products),
            category=category,
        )
        return products
