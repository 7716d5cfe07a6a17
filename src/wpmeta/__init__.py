from wpmeta.app import DatabaseConfig, MetaService
from wpmeta.database import MetaRegistry, MetaRelation, OwnerKind, resolve_meta_relation
from wpmeta.errors import ConfigurationError, PersistenceError

__all__ = [
    "ConfigurationError",
    "DatabaseConfig",
    "MetaRegistry",
    "MetaRelation",
    "MetaService",
    "OwnerKind",
    "PersistenceError",
    "resolve_meta_relation",
]
