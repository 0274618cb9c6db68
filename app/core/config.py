from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List

class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )

    APP_ENV: str = "local"
    APP_NAME: str = "table-admin"
    LOG_LEVEL: str = "INFO"

    CORS_ORIGINS: str = "http://localhost:3000"

    DATABASE_URL: str

    TABLE_DEFAULT_PER_PAGE: int = 10
    # e.g. "REPEATABLE READ" on PostgreSQL so fetch and count share one snapshot.
    TABLE_READ_ISOLATION_LEVEL: str = ""
    VIEWS_LIMIT: int = 10
    # Demo dashboards keep a fixed number of rows: creating evicts the oldest
    # row and deleting inserts random replacements.
    DEMO_CONSTANT_ROW_COUNT: bool = False
    SEED_ROW_COUNT: int = 100

    @property
    def cors_origins_list(self) -> List[str]:
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]

settings = Settings()
