from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    PROJECT_NAME: str = "Kitabghor Catalog"
    CATALOG_API_URL: str = "http://localhost:3000/api"
    CATALOG_TIMEOUT_SECONDS: float = 10.0
    COLLATION_LOCALE: str = "bn"  # category and product names are mostly Bengali
    DEFAULT_SHOW_COUNT: int = 20
    SHOW_COUNT_OPTIONS: list[int] = [20, 40, 60, 100]
    SEARCH_MIN_CHARS: int = 2
    SEARCH_LIMIT: int = 8
    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"


settings = Settings()
