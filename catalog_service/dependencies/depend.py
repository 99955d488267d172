from fastapi import Depends, Request

from catalog_service.core.config import Settings, get_settings
from catalog_service.core.storage import ImageStorage
from catalog_service.crud.categories import CategoryRepository
from catalog_service.crud.products import ProductRepository
from catalog_service.db import Database


def get_database(request: Request) -> Database:
    return request.app.state.db


def get_storage(request: Request) -> ImageStorage:
    return request.app.state.storage


def get_category_repo(
    db: Database = Depends(get_database),
    settings: Settings = Depends(get_settings),
) -> CategoryRepository:
    return CategoryRepository(db.categories, service_name=settings.SERVICE_NAME)


def get_product_repo(
    db: Database = Depends(get_database),
    settings: Settings = Depends(get_settings),
) -> ProductRepository:
    return ProductRepository(db.products, service_name=settings.SERVICE_NAME)
