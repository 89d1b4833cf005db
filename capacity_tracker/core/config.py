from pydantic_settings import BaseSettings
from typing import Optional

class Settings(BaseSettings):
    APP_NAME: str = "Resource Capacity Tracker"
    APP_VERSION: str = "1.0.0"

    # Database
    DATABASE_URL: Optional[str] = None
    DB_HOST: Optional[str] = None  # e.g., "localhost" - PostgreSQL is used when set
    DB_PORT: int = 5432
    DB_USER: str = "capacity"
    DB_PASSWORD: str = "capacity_password"
    DB_NAME: str = "capacity_db"
    DB_ECHO: bool = False
    DB_POOL_SIZE: int = 10
    DB_MAX_OVERFLOW: int = 20
    SQLITE_PATH: str = "./capacity_tracker.db"
    CREATE_TABLES_ON_STARTUP: bool = True

    @property
    def database_url(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        if self.DB_HOST:
            return f"postgresql://{self.DB_USER}:{self.DB_PASSWORD}@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"
        return f"sqlite:///{self.SQLITE_PATH}"

    # Logging
    LOG_LEVEL: str = "INFO"

    # URLs
    FRONTEND_URL: str = "http://localhost:3000"
    CORS_ORIGINS: list[str] = [
        "http://localhost:3000",
        "http://localhost:3001",
        "http://127.0.0.1:3000",
    ]

    class Config:
        env_file = ".env"
        extra = "ignore"  # Allow extra fields in .env file

settings = Settings()
