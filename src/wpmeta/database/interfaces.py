from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from sqlalchemy import Select

from wpmeta.database.connection import HostConnection
from wpmeta.database.relation import MetaRegistry
from wpmeta.database.repositories import MetaRepo


@runtime_checkable
class Database(Protocol):
    """Backend-agnostic database contract."""

    connection: HostConnection
    models: Any
    registry: MetaRegistry
    meta_repo: MetaRepo

    def add(self, entity: Any) -> Any: ...

    def get(self, model: type[Any], ident: Any) -> Any | None: ...

    def all(self, statement: Select[Any]) -> list[Any]: ...

    def close(self) -> None: ...


__all__ = ["Database"]
