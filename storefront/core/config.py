from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv
from pydantic_settings import BaseSettings


load_dotenv()

class Settings(BaseSettings):
    # Document Store Connection
    MONGODB_URI: str
    MONGODB_DB_NAME: str

    # Object Storage (S3-compatible) Connection
    SUFY_ENDPOINT: Optional[str] = None
    SUFY_REGION: Optional[str] = None
    SUFY_ACCESS_KEY: Optional[str] = None
    SUFY_SECRET_KEY: Optional[str] = None
    SUFY_BUCKET_NAME: Optional[str] = None
    SUFY_PUBLIC_URL_PREFIX: Optional[str] = None

    #AI Service API Details
    GEMINI_API_KEY: Optional[str] = None
    GEMINI_MODEL: str = "gemini-2.0-flash"

    # Storefront behaviour
    SEED_CAROUSEL_ON_EMPTY: bool = True
    HOME_PRODUCT_LIMIT: int = 8

    class Config:
        env_file = ".env"
        extra = "ignore"


@lru_cache
def get_settings() -> Settings:
    """Builds the settings once per process.

    Raises:
        pydantic.ValidationError: If MONGODB_URI or MONGODB_DB_NAME is missing.
    """
    return Settings()
