from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import field_validator
from pathlib import Path
from typing import Literal
from functools import lru_cache
from sqlalchemy.engine import URL
from ..validators.config_validators import to_uppercase, to_lowercase, split_csv


class Settings(BaseSettings):
    """
    Application settings loaded from environment.
    """

    # Environment
    ENV: Literal["development", "testing", "staging", "production"] = "development"

    # Database configuration (defaults target the SQL Server instance that owns the routines)
    DB_DIALECT: Literal["mssql", "sqlite", "postgresql"] = "mssql"
    DB_DRIVER: str = "aioodbc"
    DB_USERNAME: str | None = None
    DB_PASSWORD: str | None = None
    DB_HOST: str | None = "localhost"
    DB_PORT: int | None = 1433
    DB_NAME: str = "MedShop"
    DB_ODBC_DRIVER: str = "ODBC Driver 18 for SQL Server"

    # Test database configuration
    TEST_DB_NAME: str | None = None
    TESTING: bool = False

    # SQLAlchemy
    SQLALCHEMY_ECHO: bool = False

    # Stored procedure / function backend
    ROUTINES_BACKEND: Literal["auto", "sqlserver", "inprocess"] = "auto"

    # Errors numbered at or above this value are raised by triggers/procedures on purpose
    BUSINESS_ERROR_THRESHOLD: int = 50000

    # HTTP
    API_PREFIX: str = "/api"
    CORS_ALLOW_ORIGINS: str = "*"
    HOST: str = "127.0.0.1"
    PORT: int = 5244

    # Logging
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    LOG_FORMAT: Literal["json", "text"] = "json"
    LOG_TO_STDOUT: bool = True
    LOG_DIR: Path = Path("/var/log/medshop")
    LOG_MAX_BYTES: int = 10_000_000  # 10 MB
    LOG_BACKUP_COUNT: int = 5
    ENABLE_SQL_LOGGING: bool = False
    LOG_USE_QUEUE: bool = False

    # --- Derived settings ---
    @property
    def DATABASE_URL(self) -> str:
        """
        Return the database URL for the current environment.

        When `TESTING=True` and `TEST_DB_NAME` is set the test database name replaces
        `DB_NAME`, so a test run never touches the regular database. SQLite URLs only
        carry the file name (or `:memory:`); server dialects are assembled with
        `URL.create` so credentials are quoted correctly.
        """
        database = self.TEST_DB_NAME if (self.TESTING and self.TEST_DB_NAME) else self.DB_NAME
        drivername = f"{self.DB_DIALECT}+{self.DB_DRIVER}"

        if self.DB_DIALECT == "sqlite":
            return f"{drivername}:///{database}"

        query = {}
        if self.DB_DIALECT == "mssql":
            query = {"driver": self.DB_ODBC_DRIVER, "TrustServerCertificate": "yes"}

        url = URL.create(
            drivername=drivername,
            username=self.DB_USERNAME,
            password=self.DB_PASSWORD,
            host=self.DB_HOST,
            port=self.DB_PORT,
            database=database,
            query=query,
        )
        return url.render_as_string(hide_password=False)

    @property
    def routines_backend(self) -> str:
        """Resolve `auto`: the SQL Server routines only exist on the mssql dialect."""
        if self.ROUTINES_BACKEND != "auto":
            return self.ROUTINES_BACKEND
        return "sqlserver" if self.DB_DIALECT == "mssql" else "inprocess"

    @property
    def cors_origins(self) -> list[str]:
        return split_csv(self.CORS_ALLOW_ORIGINS)

    # --- Validators ---
    @field_validator("LOG_LEVEL", mode="before")
    def normalize_log_level(cls, v: str | None) -> str | None:
        """
        Normalize LOG_LEVEL to uppercase before Literal validation runs,
        so `LOG_LEVEL=debug` in the environment is accepted.
        """
        return to_uppercase(v)

    @field_validator("LOG_FORMAT", mode="before")
    def normalize_log_format(cls, v: str | None) -> str | None:
        """
        Normalize the LOG_FORMAT environment variable value to lowercase.
        """
        return to_lowercase(v)

    @field_validator("API_PREFIX", mode="before")
    def normalize_api_prefix(cls, v: str | None) -> str:
        # "" and "/" both mean "mount at the root"
        v = (v or "").strip().rstrip("/")
        if v and not v.startswith("/"):
            v = f"/{v}"
        return v

    # .env lives next to the package root (src/medshop/.env)
    model_config = SettingsConfigDict(
        env_file=str(Path(__file__).parent.parent / ".env"),
        env_file_encoding="utf-8",
        extra="ignore",
    )


# get_settings() takes no arguments and always returns the same settings from the environment,
# so it is cached.
@lru_cache()
def get_settings() -> Settings:
    return Settings()
