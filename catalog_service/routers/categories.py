from fastapi import APIRouter, Depends, File, Form, UploadFile, status
from loguru import logger

from catalog_service.core.config import settings
from catalog_service.core.errors import BadRequestError, CatalogError, NotFoundError
from catalog_service.core.metrics import CATEGORIES_OPERATIONS_TOTAL
from catalog_service.core.storage import ImageStorage
from catalog_service.crud.categories import CategoryRepository
from catalog_service.dependencies.depend import get_category_repo, get_storage
from catalog_service.schemas.category import (
    CategoryCreated,
    CategoryRead,
    CategoryUpdated,
    Message,
)
from catalog_service.service.images import attach_image, read_upload

router = APIRouter(tags=["Categories"])


def _track(operation: str, result: str) -> None:
    CATEGORIES_OPERATIONS_TOTAL.labels(
        service=settings.SERVICE_NAME,
        operation=operation,
        status=result,
    ).inc()


@router.post(
    "/addCategories",
    response_model=CategoryCreated,
    status_code=status.HTTP_201_CREATED,
)
async def add_category(
    name: str | None = Form(None),
    image: UploadFile | None = File(None),
    repo: CategoryRepository = Depends(get_category_repo),
    storage: ImageStorage = Depends(get_storage),
):
    logger.info("Request to CREATE category with name='{name}'", name=name)

    try:
        upload = await read_upload(image)
        if upload is None:
            logger.warning("Category creation rejected: no file uploaded")
            raise BadRequestError("No file uploaded")

        fields = await attach_image({"name": name}, upload, storage)
        category = await repo.create(fields)
    except CatalogError as e:
        _track("create", e.code)
        raise

    _track("create", "success")
    logger.info(
        "Category successfully created: id={id}, name='{name}'",
        id=category["id"],
        name=category["name"],
    )
    return {"message": "Category added successfully", "category": category}


@router.get("/addcategories", response_model=list[CategoryRead])
async def get_all_categories(repo: CategoryRepository = Depends(get_category_repo)):
    logger.info("Request to GET all categories")

    categories = await repo.get_all()
    _track("list", "success")
    return categories


@router.get("/addcategories/{id}", response_model=CategoryRead)
async def get_category(id: str, repo: CategoryRepository = Depends(get_category_repo)):
    logger.info("Request to GET category with id={id}", id=id)

    category = await repo.get(id)
    if category is None:
        logger.warning("Category not found: id={id}", id=id)
        _track("get", "not_found")
        raise NotFoundError("Category not found")

    _track("get", "success")
    return category


@router.put(
    "/updateCategory/{id}",
    response_model=CategoryUpdated,
    response_model_exclude_unset=True,
)
async def update_category(
    id: str,
    name: str | None = Form(None),
    image: UploadFile | None = File(None),
    repo: CategoryRepository = Depends(get_category_repo),
    storage: ImageStorage = Depends(get_storage),
):
    logger.info("Request to UPDATE category with id={id}", id=id)

    try:
        # checked before the upload so a missing target leaves no orphan blob
        if not await repo.exists(id):
            logger.warning("Attempt to update non-existent category with id={id}", id=id)
            raise NotFoundError("Category not found")

        base = {"name": name} if name is not None else {}
        update_data = await attach_image(base, await read_upload(image), storage)

        if not await repo.update(id, update_data):
            logger.warning("Category id={id} vanished before the update was written", id=id)
            raise NotFoundError("Category not found")
    except CatalogError as e:
        _track("update", e.code)
        raise

    _track("update", "success")
    logger.info(
        "Category successfully updated: id={id}, fields={fields}",
        id=id,
        fields=list(update_data),
    )
    return {"message": "Category updated successfully", "updatedCategory": update_data}


@router.delete("/deleteCategory/{id}", response_model=Message)
async def delete_category(id: str, repo: CategoryRepository = Depends(get_category_repo)):
    logger.info("Request to DELETE category with id={id}", id=id)

    if not await repo.delete(id):
        logger.warning("Attempt to delete non-existent category with id={id}", id=id)
        _track("delete", "not_found")
        raise NotFoundError("Category not found")

    _track("delete", "success")
    logger.info("Category with id={id} successfully deleted", id=id)
    return {"message": "Category removed successfully"}
