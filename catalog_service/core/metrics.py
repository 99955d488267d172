from prometheus_client import Counter


CATEGORIES_OPERATIONS_TOTAL = Counter(
    "catalog_categories_operations_total",
    "Category endpoint operations",
    ["service", "operation", "status"],
)

PRODUCTS_OPERATIONS_TOTAL = Counter(
    "catalog_products_operations_total",
    "Product endpoint operations",
    ["service", "operation", "status"],
)

IMAGE_UPLOADS_TOTAL = Counter(
    "catalog_image_uploads_total",
    "Image uploads to object storage",
    ["service", "status"],
)

CATALOG_DB_REQUESTS_TOTAL = Counter(
    "catalog_db_requests_total",
    "Total document store requests",
    ["service", "collection", "operation"],
)
