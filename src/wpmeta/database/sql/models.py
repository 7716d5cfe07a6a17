"""SQLModel table builders for prefixed WordPress tables."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from sqlalchemy import MetaData
from sqlalchemy.orm import foreign, relationship
from sqlmodel import Relationship, SQLModel
from sqlmodel.main import RelationshipInfo

from wpmeta.database.models import Meta


def build_table_model(
    core_model: type[SQLModel],
    *,
    tablename: str,
    metadata: MetaData | None = None,
    relationships: dict[str, RelationshipInfo] | None = None,
    name_prefix: str = "",
) -> type[SQLModel]:
    """Build a table model for `core_model` bound to `tablename`.

    Args:
        core_model: Non-table SQLModel declaring the columns.
        tablename: Fully prefixed table name.
        metadata: MetaData the table is registered on.
        relationships: Extra relationship attributes for the table class.
        name_prefix: Distinguishes class names of stores sharing a table (multisite global tables).
    """
    table_attrs: dict[str, Any] = {"__module__": core_model.__module__, "__tablename__": tablename}
    if metadata is not None:
        table_attrs["metadata"] = metadata
    if relationships:
        table_attrs.update(relationships)

    # Class names include the table so several prefixes can coexist in one registry.
    return type(
        f"{core_model.__name__}Table_{name_prefix}{tablename}",
        (core_model,),
        table_attrs,
        table=True,
    )


def meta_relationship(
    owner: Callable[[], type[SQLModel]],
    meta_model: type[Meta],
    foreign_key: str,
) -> RelationshipInfo:
    """One-to-many `owner.meta` relationship.

    The collection is view-only: rows are written through the meta table and
    the collection is refreshed afterwards, never patched in place.
    `owner` is called lazily because the owner class is built after its meta class.
    """

    def _join() -> Any:
        return owner().id == foreign(getattr(meta_model, foreign_key))

    return Relationship(
        sa_relationship=relationship(
            meta_model,
            primaryjoin=_join,
            order_by=meta_model.meta_id,
            viewonly=True,
            lazy="selectin",
        )
    )


__all__ = ["build_table_model", "meta_relationship"]
