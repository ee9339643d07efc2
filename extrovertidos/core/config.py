from pydantic_settings import BaseSettings
from typing import List

class Settings(BaseSettings):
    PROJECT_NAME: str = "Extrovertidos Admin"
    VERSION: str = "1.0.0"
    API_V1_STR: str = "/api/v1"

    # CORS
    ALLOWED_ORIGINS: List[str] = [
        "http://localhost:5173",
        "http://localhost:3000",
        "http://127.0.0.1:5173",
    ]

    # Database Configuration
    DATABASE_URL: str = "sqlite:///./extrovertidos.db"

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_DIR: str = "logs"

    # Cache TTLs in seconds, read once when the cache is built
    CACHE_DEFAULT_TTL: float = 30
    CACHE_TTL_ADMIN_STATS: float = 30
    CACHE_TTL_CATEGORIES: float = 300
    CACHE_TTL_CHART_DATA: float = 60

    # Upper bound for a single backend call
    BACKEND_QUERY_TIMEOUT: float = 10.0

    class Config:
        env_file = ".env"

settings = Settings()
