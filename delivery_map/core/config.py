"""Application configuration."""

from os import getenv

from pydantic import BaseModel


class Settings(BaseModel):
    """Runtime settings for the application."""

    app_name: str = "Delivery Map API"
    app_env: str = getenv("APP_ENV", "dev")
    debug: bool = getenv("DEBUG", "0") == "1"
    database_url: str = getenv("DATABASE_URL", "sqlite:///./delivery_map.db")
    jwt_secret_key: str = getenv("JWT_SECRET_KEY", "dev-only-change-me-to-a-long-random-secret")
    jwt_algorithm: str = getenv("JWT_ALGORITHM", "HS256")
    jwt_expire_minutes: int = int(getenv("JWT_EXPIRE_MINUTES", "60"))
    public_cache_max_age: int = int(getenv("PUBLIC_CACHE_MAX_AGE", "60"))
    service_name: str = getenv("SERVICE_NAME", "wdm-delivery-map-app")
    log_level: str = getenv("LOG_LEVEL", "INFO")


settings: Settings = Settings()
