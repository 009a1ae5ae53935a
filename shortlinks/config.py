from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite+aiosqlite:///./shortlinks.db"
    ADMIN_TOKEN: Optional[str] = None
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"
    CODE_LENGTH: int = 7
    CODE_MAX_ATTEMPTS: int = 5
    CREATE_TABLES: bool = True

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")
