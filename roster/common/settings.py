from __future__ import annotations

from functools import lru_cache
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field, AliasChoices, field_validator, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict

from roster.common.strings.splitters import csv_to_list
from roster.domain.enums import DeletePolicy, LinkPolicy


def _to_bool(v: str | bool | int | None, default: bool = False) -> bool:
    if isinstance(v, bool):
        return v
    if v is None:
        return default
    s = str(v).strip().lower()
    return s in {"1", "true", "yes", "y", "on"}


class APIConfig(BaseModel):
    host: str = "0.0.0.0"
    port: int = 8000
    prefix: str = "/api"

    cors_allow_origins: List[str] = Field(default_factory=lambda: ["http://localhost:5173"])
    cors_allow_methods: List[str] = Field(default_factory=lambda: ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"])
    cors_allow_headers: List[str] = Field(default_factory=lambda: ["*"])
    cors_allow_credentials: bool = False

    @field_validator("cors_allow_origins", "cors_allow_methods", "cors_allow_headers", mode="before")
    @classmethod
    def _split_csv(cls, v):
        return csv_to_list(v)


class DBConfig(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    driver: str = "postgresql+psycopg"
    host: str = "localhost"
    port: int = 5432
    name: str = "roster"
    user: str = "roster"
    password: str = "roster"
    # "public" means: no explicit schema on the metadata
    schema_name: str = Field(default="public", alias="DB_SCHEMA")
    echo: bool = False
    pool_size: int = 10
    max_overflow: int = 20
    pool_pre_ping: bool = True
    pool_recycle: int = 1800

    # Optional single URL (if set, it takes precedence)
    url: Optional[str] = None

    @computed_field  # type: ignore[misc]
    @property
    def effective_url(self) -> str:
        if self.url:
            return self.url
        return f"{self.driver}://{self.user}:{self.password}@{self.host}:{self.port}/{self.name}"


class AssociationConfig(BaseModel):
    link_policy: LinkPolicy = LinkPolicy.update
    delete_policy: DeletePolicy = DeletePolicy.cascade
    # max ids per IN (...) clause for batch lookups
    in_clause_chunk: int = Field(500, ge=1, le=10_000)


class Settings(BaseSettings):
    # -------- App / Env --------
    app_name: str = "roster"
    app_env: str = "development"  # development|test|staging|production
    log_level: str = "INFO"
    tz: str = "UTC"

    # Top-level DATABASE_URL wins over the db.* parts
    database_url_env: Optional[str] = Field(default=None, validation_alias=AliasChoices("DATABASE_URL"))

    # -------- Sub-configs --------
    api: APIConfig = APIConfig()
    db: DBConfig = DBConfig()
    associations: AssociationConfig = AssociationConfig()

    # -------- Alembic / migrations --------
    alembic_script_location: str = "roster/database/alembic"
    alembic_version_table_schema: Optional[str] = None

    # -------- Testcontainers / CI toggles --------
    use_testcontainers: bool = False
    test_db_image: str = "postgres:15-alpine"
    test_db_wait_timeout_sec: int = 30

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("use_testcontainers", mode="before")
    @classmethod
    def _boolify(cls, v):
        return _to_bool(v)

    # ===== Convenience: DB URL & schema =====
    @computed_field  # type: ignore[misc]
    @property
    def database_url(self) -> str:
        return self.database_url_env or self.db.effective_url

    @computed_field  # type: ignore[misc]
    @property
    def db_schema(self) -> Optional[str]:
        s = (self.db.schema_name or "").strip()
        if not s or s.lower() == "public":
            return None
        return s


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Global settings accessor (cached). Use this everywhere you need config:
        from roster.common.settings import get_settings
        cfg = get_settings()
    Nested values come from env with a double underscore, e.g.
    ASSOCIATIONS__LINK_POLICY=reject or DB__HOST=db.
    """
    return Settings()
