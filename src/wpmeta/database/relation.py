from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from sqlalchemy import ColumnElement, Exists
from sqlmodel import select
from sqlmodel.sql.expression import SelectOfScalar

from wpmeta.database.models import OWNER_BASES, OwnerKind
from wpmeta.errors import ConfigurationError


@dataclass(frozen=True)
class MetaRelation:
    """Where an owner type keeps its meta rows."""

    kind: OwnerKind
    meta_model: type[Any]
    foreign_key: str

    @property
    def foreign_column(self) -> Any:
        return getattr(self.meta_model, self.foreign_key)

    def join_condition(self, owner_id: Any) -> ColumnElement[bool]:
        return self.foreign_column == owner_id

    def select(self, owner_id: Any) -> SelectOfScalar[Any]:
        return (
            select(self.meta_model)
            .where(self.join_condition(owner_id))
            .order_by(self.meta_model.meta_id)
        )

    def exists(self, owner_model: type[Any], *criteria: ColumnElement[bool]) -> Exists:
        """Correlated EXISTS over this meta table for rows of `owner_model`."""
        return select(self.foreign_column).where(self.join_condition(owner_model.id), *criteria).exists()


def resolve_owner_kind(owner: Any) -> OwnerKind:
    """Return the owner kind of an entity instance or class.

    Raises:
        ConfigurationError: when `owner` derives from none of Comment, Post, Term or User.
    """
    owner_type = owner if isinstance(owner, type) else type(owner)
    for base, kind in OWNER_BASES:
        if issubclass(owner_type, base):
            return kind

    msg = f"{owner_type.__name__} must extend one of the built-in models: Comment, Post, Term or User."
    raise ConfigurationError(msg)


class MetaRegistry:
    """Maps each owner kind to the meta table model of one store."""

    def __init__(self, meta_models: Mapping[OwnerKind, type[Any]]) -> None:
        missing = [kind.value for kind in OwnerKind if kind not in meta_models]
        if missing:
            msg = f"No meta model configured for: {', '.join(missing)}"
            raise ConfigurationError(msg)
        self._relations = {
            kind: MetaRelation(kind=kind, meta_model=meta_models[kind], foreign_key=kind.foreign_key)
            for kind in OwnerKind
        }

    @classmethod
    def from_models(cls, models: Any) -> MetaRegistry:
        return cls({kind: models.meta(kind) for kind in OwnerKind})

    def resolve(self, owner: Any) -> MetaRelation:
        return self._relations[resolve_owner_kind(owner)]

    def relation(self, kind: OwnerKind) -> MetaRelation:
        return self._relations[kind]


def resolve_meta_relation(owner: Any, registry: MetaRegistry) -> MetaRelation:
    return registry.resolve(owner)


__all__ = ["MetaRegistry", "MetaRelation", "resolve_meta_relation", "resolve_owner_kind"]
