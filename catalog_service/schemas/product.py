from pydantic import BaseModel

from catalog_service.schemas.category import CategoryName, CategoryRead


class ProductBase(BaseModel):
    name: str | None = None
    # stored exactly as submitted, no numeric coercion
    price: float | str | None = None
    imageUrl: str | None = None


class ProductRead(ProductBase):
    id: str
    category: str | None = None


class ProductWithCategory(ProductBase):
    id: str
    category: CategoryRead | None = None


class ProductDetail(ProductBase):
    id: str
    category: CategoryName | None = None


class ProductUpdate(ProductBase):
    category: str | None = None


class ProductUpdated(BaseModel):
    message: str
    updatedProduct: ProductUpdate
