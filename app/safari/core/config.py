from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env")

    APP_NAME: str = "SAFARI-QUOTE-BACKOFFICE"
    DATABASE_URL: str = "sqlite+pysqlite:///./safari.db"
    LOG_LEVEL: str = "INFO"
    TABLE_DEFAULT_ITEMS_PER_PAGE: int = 10
    TABLE_MAX_ITEMS_PER_PAGE: int = 100
    LISTING_CACHE_TTL_SECONDS: float = 20.0

settings = Settings()
