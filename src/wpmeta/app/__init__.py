from wpmeta.app.service import MetaService
from wpmeta.app.settings import (
    DatabaseConfig,
    MetadataStoreConfig,
    TablePrefixConfig,
    load_database_config,
    resolve_wpmeta_config_path,
)

__all__ = [
    "DatabaseConfig",
    "MetaService",
    "MetadataStoreConfig",
    "TablePrefixConfig",
    "load_database_config",
    "resolve_wpmeta_config_path",
]
