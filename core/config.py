"""
Application configuration using Pydantic Settings
"""

from pathlib import Path
from typing import List, Optional

from pydantic_settings import BaseSettings
from sqlalchemy.engine import make_url


class Settings(BaseSettings):
    """Application settings with environment variable support"""

    # Database
    # Local embedded store by default; a hosted Postgres URL
    # (postgresql+asyncpg://...) is accepted as well.
    DATABASE_URL: str = "sqlite+aiosqlite:///./admin.db"

    # API
    API_KEY: Optional[str] = None
    API_HOST: str = "0.0.0.0"
    API_PORT: int = 8000

    # Environment
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"

    # Source documents and output locations
    SOURCE_DOCS_PATH: str = "./client_documentation"
    PUBLIC_PATH: str = "./public"
    BACKUP_PATH: str = "./backups"
    REPORT_PATH: str = "./migration-reports"
    LOG_PATH: str = "./migration-logs"
    PRODUCT_WORKBOOKS: List[str] = [
        "Products Catalogue.xlsx",
        "Products Catalogue (1).xlsx",
    ]

    # Query latency classification (milliseconds)
    GOOD_QUERY_MS: float = 100.0
    ACCEPTABLE_QUERY_MS: float = 500.0

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"

    @property
    def source_docs_dir(self) -> Path:
        return Path(self.SOURCE_DOCS_PATH)

    @property
    def public_dir(self) -> Path:
        return Path(self.PUBLIC_PATH)

    @property
    def media_dir(self) -> Path:
        return Path(self.PUBLIC_PATH) / "media"

    @property
    def backup_dir(self) -> Path:
        return Path(self.BACKUP_PATH)

    @property
    def report_dir(self) -> Path:
        return Path(self.REPORT_PATH)

    @property
    def log_dir(self) -> Path:
        return Path(self.LOG_PATH)

    @property
    def product_workbook_paths(self) -> List[Path]:
        return [self.source_docs_dir / name for name in self.PRODUCT_WORKBOOKS]

    @property
    def database_file(self) -> Optional[Path]:
        """Path of the embedded store file, or None for server databases."""
        url = make_url(self.DATABASE_URL)
        if not url.drivername.startswith("sqlite"):
            return None
        if not url.database or url.database == ":memory:":
            return None
        return Path(url.database)


settings = Settings()
