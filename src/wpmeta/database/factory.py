from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from wpmeta.database.interfaces import Database
from wpmeta.database.sql.store import SQLStore
from wpmeta.database.state import HostState
from wpmeta.errors import ConfigurationError

if TYPE_CHECKING:
    from wpmeta.app.settings import DatabaseConfig

logger = logging.getLogger(__name__)

_INMEMORY_DSN = "sqlite://"


def build_database(config: DatabaseConfig) -> Database:
    store_config = config.metadata_store
    tables = config.tables
    host = HostState(
        prefix=tables.prefix,
        base_prefix=tables.base_prefix,
        global_tables=list(tables.global_tables),
    )

    if store_config.provider == "inmemory":
        dsn = _INMEMORY_DSN
    elif store_config.dsn:
        dsn = store_config.dsn
    else:
        msg = f"metadata_store.dsn is required for provider {store_config.provider!r}"
        raise ConfigurationError(msg)

    logger.debug("Building %s store (blog %s, prefix %s)", store_config.provider, tables.blog_id, tables.prefix)
    return SQLStore(dsn=dsn, ddl_mode=store_config.ddl_mode, host=host)


__all__ = ["build_database"]
