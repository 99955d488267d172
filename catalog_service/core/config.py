from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    SERVICE_NAME: str = "catalog"

    HOST: str = "0.0.0.0"
    PORT: int = 5000

    MONGO_URL: str = "mongodb://localhost:27017/catalog_db"
    MONGO_DB: str = "catalog_db"

    # Cloudinary, uploads fail until all three credentials are set
    CLOUDINARY_CLOUD_NAME: str | None = None
    CLOUDINARY_API_KEY: str | None = None
    CLOUDINARY_API_SECRET: str | None = None
    CLOUDINARY_FOLDER: str = "catalog"

    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = True

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


settings = Settings()


@lru_cache
def get_settings() -> Settings:
    # one Settings instance shared by the dependencies, built on first use
    return Settings()
