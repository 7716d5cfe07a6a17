"""SQL repository implementations for wpmeta."""

from wpmeta.database.sql.repositories.meta_repo import SQLMetaRepo

__all__ = ["SQLMetaRepo"]
