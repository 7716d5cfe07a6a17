import json
import logging
import os
from pathlib import Path
from typing import Annotated, Any, Literal

from pydantic import BaseModel, BeforeValidator, Field, ValidationError

from wpmeta.database.state import DEFAULT_GLOBAL_TABLES
from wpmeta.errors import ConfigurationError

logger = logging.getLogger(__name__)


def normalize_value(v: str) -> str:
    if isinstance(v, str):
        return v.strip().lower()
    return v


Normalize = BeforeValidator(normalize_value)

WPMETA_CONFIG_ENV = "WPMETA_CONFIG_PATH"
WPMETA_CONFIG_DEFAULT = "config.json"
WPMETA_DSN_ENV = "WPMETA_DSN"


def resolve_wpmeta_config_path() -> Path:
    override = os.getenv(WPMETA_CONFIG_ENV)
    if override:
        return Path(override).expanduser()
    return Path(WPMETA_CONFIG_DEFAULT).expanduser()


def _load_json_file(path: Path) -> Any | None:
    if not path.exists():
        return None
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        logger.warning("Failed to read wpmeta config %s: %s", path, exc)
        return None


class MetadataStoreConfig(BaseModel):
    provider: Annotated[Literal["inmemory", "sqlite", "mysql"], Normalize] = "inmemory"
    ddl_mode: Annotated[Literal["create", "validate"], Normalize] = "create"
    dsn: str | None = Field(default=None, description="Database connection string (required for sqlite/mysql).")


class TablePrefixConfig(BaseModel):
    base_prefix: str = Field(default="wp_", description="Prefix of the main site's tables.")
    blog_id: int = Field(default=1, ge=1, description="Current blog of a multisite install.")
    global_tables: list[str] = Field(
        default_factory=lambda: list(DEFAULT_GLOBAL_TABLES),
        description="Tables shared by every blog; always use the base prefix.",
    )

    @property
    def prefix(self) -> str:
        if self.blog_id == 1:
            return self.base_prefix
        return f"{self.base_prefix}{self.blog_id}_"


class DatabaseConfig(BaseModel):
    metadata_store: MetadataStoreConfig = Field(default_factory=MetadataStoreConfig)
    tables: TablePrefixConfig = Field(default_factory=TablePrefixConfig)


def load_database_config(path: Path | None = None) -> DatabaseConfig:
    """
    Load the database config.

    Supported:
    - config.json (default) or WPMETA_CONFIG_PATH, under a "database" key or at the top level
    - WPMETA_DSN overrides metadata_store.dsn; a DSN without a provider implies sqlite

    A missing or unreadable file yields the defaults; a readable file with invalid
    settings raises ConfigurationError.
    """
    data = _load_json_file(path or resolve_wpmeta_config_path())
    raw: dict[str, Any] = {}
    if isinstance(data, dict):
        section = data.get("database", data)
        if isinstance(section, dict):
            raw = dict(section)
        else:
            logger.warning("wpmeta config database section must be an object")
    elif data is not None:
        logger.warning("wpmeta config must be an object")

    dsn = os.getenv(WPMETA_DSN_ENV)
    if dsn:
        store = dict(raw.get("metadata_store") or {})
        store["dsn"] = dsn
        store.setdefault("provider", "mysql" if dsn.startswith("mysql") else "sqlite")
        raw["metadata_store"] = store

    try:
        return DatabaseConfig.model_validate(raw)
    except ValidationError as exc:
        fields = ", ".join(".".join(str(part) for part in error["loc"]) for error in exc.errors())
        msg = f"Invalid wpmeta config ({fields}): {exc}"
        raise ConfigurationError(msg) from exc


__all__ = [
    "DatabaseConfig",
    "MetadataStoreConfig",
    "TablePrefixConfig",
    "load_database_config",
    "resolve_wpmeta_config_path",
]
