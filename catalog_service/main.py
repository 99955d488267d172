from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from loguru import logger
from prometheus_fastapi_instrumentator import Instrumentator

from catalog_service.core.config import settings
from catalog_service.core.errors import register_error_handlers
from catalog_service.core.logging import setup_logging
from catalog_service.core.storage import ImageStorage
from catalog_service.db import Database
from catalog_service.middleware.logging import LoggingMiddleware
from catalog_service.routers import categories, products


setup_logging()


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    logger.info("Application startup: connecting Mongo and image storage")
    app.state.db = Database.from_settings(settings)
    app.state.storage = ImageStorage.from_settings(settings)
    await app.state.db.connect()
    if not app.state.storage.configured:
        logger.warning("Cloudinary credentials missing; image uploads will fail")
    logger.info("Application startup completed")
    yield
    # Shutdown
    await app.state.db.disconnect()
    logger.info("Application shutdown completed")


app = FastAPI(title="Catalog Service", version="0.1.0", lifespan=lifespan)


app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"], allow_credentials=True,
    allow_methods=["*"], allow_headers=["*"],
)
app.add_middleware(LoggingMiddleware)

register_error_handlers(app)

# Metrics
Instrumentator().instrument(app).expose(app, endpoint="/metrics")


@app.get("/", response_class=PlainTextResponse)
async def root():
    return "Hi"


@app.get("/health")
async def health():
    return {"status": "ok"}


app.include_router(categories.router)
app.include_router(products.router)


if __name__ == "__main__":
    uvicorn.run("catalog_service.main:app", host=settings.HOST, port=settings.PORT)
