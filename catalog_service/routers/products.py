from fastapi import APIRouter, Depends, File, Form, Query, UploadFile, status
from loguru import logger

from catalog_service.core.config import settings
from catalog_service.core.errors import BadRequestError, CatalogError, NotFoundError
from catalog_service.core.metrics import PRODUCTS_OPERATIONS_TOTAL
from catalog_service.core.storage import ImageStorage
from catalog_service.crud.categories import CategoryRepository
from catalog_service.crud.products import ProductRepository
from catalog_service.dependencies.depend import (
    get_category_repo,
    get_product_repo,
    get_storage,
)
from catalog_service.schemas.category import Message
from catalog_service.schemas.product import (
    ProductDetail,
    ProductRead,
    ProductUpdated,
    ProductWithCategory,
)
from catalog_service.service.images import attach_image, read_upload
from catalog_service.service.products import populate_category

router = APIRouter(tags=["Products"])


def _track(operation: str, result: str) -> None:
    PRODUCTS_OPERATIONS_TOTAL.labels(
        service=settings.SERVICE_NAME,
        operation=operation,
        status=result,
    ).inc()


@router.post(
    "/addProduct",
    response_model=ProductRead,
    status_code=status.HTTP_201_CREATED,
)
async def add_product(
    name: str | None = Form(None),
    price: str | None = Form(None),
    category: str | None = Form(None),
    image: UploadFile | None = File(None),
    repo: ProductRepository = Depends(get_product_repo),
    storage: ImageStorage = Depends(get_storage),
):
    logger.info(
        "Request to CREATE product with name='{name}', category={category}",
        name=name,
        category=category,
    )

    try:
        upload = await read_upload(image)
        if upload is None:
            logger.warning("Product creation rejected: no file uploaded")
            raise BadRequestError("No file uploaded")

        fields = await attach_image(
            {"name": name, "price": price, "category": category},
            upload,
            storage,
        )
        product = await repo.create(fields)
    except CatalogError as e:
        _track("create", e.code)
        raise

    _track("create", "success")
    logger.info("Product successfully created: id={id}", id=product["id"])
    return product


@router.get("/products", response_model=list[ProductWithCategory])
async def get_all_products(
    category: str | None = Query(None),
    repo: ProductRepository = Depends(get_product_repo),
    categories: CategoryRepository = Depends(get_category_repo),
):
    logger.info("Request to GET all products, category filter={category}", category=category)

    products = await repo.get_all(category=category)
    products = await populate_category(products, categories)
    _track("list", "success")
    logger.info("Successfully retrieved products list, count={count}", count=len(products))
    return products


@router.get("/products/{id}", response_model=ProductDetail)
async def get_product(
    id: str,
    repo: ProductRepository = Depends(get_product_repo),
    categories: CategoryRepository = Depends(get_category_repo),
):
    logger.info("Request to GET product with id={id}", id=id)

    product = await repo.get(id)
    if product is None:
        logger.warning("Product not found: id={id}", id=id)
        _track("get", "not_found")
        raise NotFoundError("Product not found")

    [product] = await populate_category([product], categories, fields=["name"])
    _track("get", "success")
    return product


@router.put(
    "/updateProduct/{id}",
    response_model=ProductUpdated,
    response_model_exclude_unset=True,
)
async def update_product(
    id: str,
    name: str | None = Form(None),
    price: str | None = Form(None),
    category: str | None = Form(None),
    image: UploadFile | None = File(None),
    repo: ProductRepository = Depends(get_product_repo),
    storage: ImageStorage = Depends(get_storage),
):
    logger.info("Request to UPDATE product with id={id}", id=id)

    try:
        if not await repo.exists(id):
            logger.warning("Attempt to update non-existent product with id={id}", id=id)
            raise NotFoundError("Product not found")

        base = {
            key: value
            for key, value in (("name", name), ("price", price), ("category", category))
            if value is not None
        }
        update_data = await attach_image(base, await read_upload(image), storage)

        if not await repo.update(id, update_data):
            logger.warning("Product id={id} vanished before the update was written", id=id)
            raise NotFoundError("Product not found")
    except CatalogError as e:
        _track("update", e.code)
        raise

    _track("update", "success")
    logger.info(
        "Product successfully updated: id={id}, fields={fields}",
        id=id,
        fields=list(update_data),
    )
    return {"message": "Product updated successfully", "updatedProduct": update_data}


@router.delete("/deleteProduct/{id}", response_model=Message)
async def delete_product(id: str, repo: ProductRepository = Depends(get_product_repo)):
    logger.info("Request to DELETE product with id={id}", id=id)

    if not await repo.delete(id):
        logger.warning("Attempt to delete non-existent product with id={id}", id=id)
        _track("delete", "not_found")
        raise NotFoundError("Product not found")

    _track("delete", "success")
    logger.info("Product with id={id} successfully deleted", id=id)
    return {"message": "Product removed successfully"}
