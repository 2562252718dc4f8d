"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - Credentials come from environment variables or .env (never hardcoded)
    - get_settings() is cached (lru_cache) — single instance per process
    - database_url, when set, wins over the DB_* parts

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support (ADR: developer UX)
    - DB_HOST/DB_USER/DB_PASS/DB_NAME/DB_PORT kept as separate vars: same names the
      deployment already exports
    - URL.create escapes credentials (passwords with '@' or '/' are common)
    - static_dir defaults to the public/ folder shipped inside the package, so the
      working directory the server starts from does not matter
"""

from functools import lru_cache
from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import URL

PACKAGE_DIR = Path(__file__).resolve().parent


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env", case_sensitive=False, extra="ignore",
    )

    # Database
    db_host: str = "localhost"
    db_user: str = "root"
    db_pass: str = ""
    db_name: str = "facturacion"
    db_port: int = 3306
    database_url: str | None = None

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_mysql_url(cls, v: str | None) -> str | None:
        """Plain mysql:// URLs need the async driver: mysql+aiomysql://."""
        if isinstance(v, str) and v.startswith("mysql://"):
            return v.replace("mysql://", "mysql+aiomysql://", 1)
        return v or None

    database_pool_size: int = 10
    database_max_overflow: int = 5

    # HTTP
    host: str = "0.0.0.0"
    port: int = 3001
    static_dir: str = str(PACKAGE_DIR / "public")

    # Query
    obra_social_id: str = "2099"
    export_filename_prefix: str = "Facturas_OS_Nueva_Villa"

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"

    @property
    def sqlalchemy_url(self) -> str:
        """Effective async SQLAlchemy URL."""
        if self.database_url:
            return self.database_url
        return URL.create(
            "mysql+aiomysql",
            username=self.db_user,
            password=self.db_pass or None,
            host=self.db_host,
            port=self.db_port,
            database=self.db_name,
        ).render_as_string(hide_password=False)


@lru_cache
def get_settings() -> Settings:
    return Settings()
