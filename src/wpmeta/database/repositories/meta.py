from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from typing import Any, Protocol, TypeVar, runtime_checkable

from sqlalchemy import Select

from wpmeta.database.relation import MetaRelation

TSelect = TypeVar("TSelect", bound=Select[Any])


@runtime_checkable
class MetaRepo(Protocol):
    """Repository contract for owner meta fields."""

    def relation(self, owner: Any) -> MetaRelation: ...

    def meta(self, owner: Any) -> Select[Any]: ...

    def fields(self, owner: Any) -> Select[Any]: ...

    def has_meta(
        self,
        statement: TSelect,
        meta: str | Mapping[Any, Any] | Sequence[str],
        value: Any = None,
        operator: str = "=",
    ) -> TSelect: ...

    def has_meta_in(self, statement: TSelect, key: str, values: Iterable[Any]) -> TSelect: ...

    def has_meta_like(self, statement: TSelect, meta: str | Mapping[Any, Any], value: Any = None) -> TSelect: ...

    def save_meta(self, owner: Any, key: str | Mapping[str, Any], value: Any = None) -> bool: ...

    def save_field(self, owner: Any, key: str | Mapping[str, Any], value: Any = None) -> bool: ...

    def save_one(self, owner: Any, key: str, value: Any) -> bool: ...

    def save_many(self, owner: Any, values: Mapping[str, Any]) -> bool: ...

    def create_meta(self, owner: Any, key: str | Mapping[str, Any], value: Any = None) -> Any: ...

    def create_field(self, owner: Any, key: str | Mapping[str, Any], value: Any = None) -> Any: ...

    def create_one(self, owner: Any, key: str, value: Any) -> Any: ...

    def create_many(self, owner: Any, values: Mapping[str, Any]) -> list[Any]: ...

    def get_meta(self, owner: Any, key: str) -> str | None: ...

    def load_meta(self, owner: Any) -> list[Any]: ...
