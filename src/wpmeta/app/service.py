from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any, TypeVar

from pydantic import BaseModel
from sqlalchemy import func
from sqlmodel import select

from wpmeta.app.settings import DatabaseConfig
from wpmeta.database.factory import build_database
from wpmeta.database.interfaces import Database
from wpmeta.database.models import OwnerKind

TConfigModel = TypeVar("TConfigModel", bound=BaseModel)

logger = logging.getLogger(__name__)


class MetaService:
    """Entry point tying configuration, the store and the meta repository together."""

    def __init__(self, *, database_config: DatabaseConfig | dict[str, Any] | None = None) -> None:
        self.database_config = self._validate_config(database_config, DatabaseConfig)
        self.database: Database = build_database(self.database_config)

    @staticmethod
    def _validate_config(
        config: Mapping[str, Any] | BaseModel | None,
        model_type: type[TConfigModel],
    ) -> TConfigModel:
        if isinstance(config, model_type):
            return config
        if config is None:
            return model_type()
        return model_type.model_validate(config)

    def owner_model(self, kind: OwnerKind | str) -> type[Any]:
        return self.database.models.owner(OwnerKind(kind))

    def get_owner(self, kind: OwnerKind | str, owner_id: int) -> Any | None:
        return self.database.get(self.owner_model(kind), owner_id)

    def find_owners(
        self,
        kind: OwnerKind | str,
        meta: str | Mapping[Any, Any] | Sequence[str],
        value: Any = None,
        *,
        operator: str = "=",
    ) -> list[Any]:
        model = self.owner_model(kind)
        statement = self.database.meta_repo.has_meta(select(model), meta, value, operator)
        return self.database.all(statement.order_by(model.id))

    def save_meta(self, owner: Any, key: str | Mapping[str, Any], value: Any = None) -> bool:
        return self.database.meta_repo.save_meta(owner, key, value)

    def create_meta(self, owner: Any, key: str | Mapping[str, Any], value: Any = None) -> Any:
        return self.database.meta_repo.create_meta(owner, key, value)

    def get_meta(self, owner: Any, key: str) -> str | None:
        return self.database.meta_repo.get_meta(owner, key)

    def health(self, *, include_counts: bool = False) -> dict[str, Any]:
        store = self.database_config.metadata_store
        status: dict[str, Any] = {
            "ok": True,
            "db": {"ok": True, "provider": store.provider, "prefix": self.database_config.tables.prefix},
        }
        if include_counts:
            counts: dict[str, int] = {}
            for kind in OwnerKind:
                meta_model = self.database.registry.relation(kind).meta_model
                counts[kind.value] = self.database.all(select(func.count()).select_from(meta_model))[0]
            status["counts"] = counts
        return status

    def close(self) -> None:
        self.database.close()


__all__ = ["MetaService"]
