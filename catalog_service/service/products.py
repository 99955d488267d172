from typing import Any, Iterable, Protocol


class CategoryLookup(Protocol):
    async def get_many(self, ids: list[str]) -> dict[str, dict[str, Any]]: ...


async def populate_category(
    products: list[dict[str, Any]],
    categories: CategoryLookup,
    fields: Iterable[str] | None = None,
) -> list[dict[str, Any]]:
    """Replace each product's category id with the referenced category.

    ``fields`` limits which category fields are kept (``id`` always is).
    A dangling reference resolves to None; nothing is enforced at write time.
    """
    ids = [p["category"] for p in products if p.get("category")]
    found = await categories.get_many(ids) if ids else {}

    keep = None if fields is None else {"id", *fields}
    populated = []
    for product in products:
        category = found.get(product.get("category") or "")
        if category is not None and keep is not None:
            category = {k: v for k, v in category.items() if k in keep}
        populated.append({**product, "category": category})
    return populated
