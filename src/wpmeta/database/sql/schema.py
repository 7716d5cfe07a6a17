"""SQLAlchemy schema definitions for the WordPress owner and meta tables."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, cast

from sqlalchemy import MetaData
from sqlmodel import SQLModel

from wpmeta.database.connection import HostConnection
from wpmeta.database.models import (
    Comment,
    CommentMeta,
    OwnerKind,
    Post,
    PostMeta,
    Term,
    TermMeta,
    User,
    UserMeta,
)
from wpmeta.database.sql.models import build_table_model, meta_relationship


@dataclass
class WPSQLAModels:
    """Container for the prefixed SQLModel table models."""

    Base: type[Any]
    Comment: type[Any]
    CommentMeta: type[Any]
    Post: type[Any]
    PostMeta: type[Any]
    Term: type[Any]
    TermMeta: type[Any]
    User: type[Any]
    UserMeta: type[Any]

    def owner(self, kind: OwnerKind) -> type[Any]:
        return cast(type[Any], getattr(self, kind.name.title()))

    def meta(self, kind: OwnerKind) -> type[Any]:
        return cast(type[Any], getattr(self, f"{kind.name.title()}Meta"))

    @property
    def table_names(self) -> list[str]:
        return sorted(self.Base.metadata.tables)


_MODEL_CACHE: dict[tuple[str, ...], WPSQLAModels] = {}

_TABLES: tuple[str, ...] = ("comments", "commentmeta", "posts", "postmeta", "terms", "termmeta", "users", "usermeta")


def get_sqlalchemy_models(*, connection: HostConnection) -> WPSQLAModels:
    """Build (and cache) SQLModel ORM models for the connection's table prefixes.

    Args:
        connection: Host connection used to resolve each table's prefix.

    Returns:
        WPSQLAModels containing all owner and meta table models.
    """
    names = {name: connection.table(name) for name in _TABLES}
    cache_key = tuple(names[name] for name in _TABLES)
    cached = _MODEL_CACHE.get(cache_key)
    if cached:
        return cached

    metadata_obj = MetaData()
    name_prefix = connection.prefix()

    def _owner(core: type[SQLModel], meta_model: type[Any], kind: OwnerKind, tablename: str) -> type[Any]:
        owner_model: type[Any] | None = None

        def _resolve() -> type[Any]:
            return cast(type[Any], owner_model)

        owner_model = build_table_model(
            core,
            tablename=tablename,
            metadata=metadata_obj,
            name_prefix=name_prefix,
            relationships={"meta": meta_relationship(_resolve, meta_model, kind.foreign_key)},
        )
        return owner_model

    def _meta(core: type[SQLModel], tablename: str) -> type[Any]:
        return build_table_model(core, tablename=tablename, metadata=metadata_obj, name_prefix=name_prefix)

    comment_meta = _meta(CommentMeta, names["commentmeta"])
    post_meta = _meta(PostMeta, names["postmeta"])
    term_meta = _meta(TermMeta, names["termmeta"])
    user_meta = _meta(UserMeta, names["usermeta"])

    class WPBase(SQLModel):
        __abstract__ = True
        metadata = metadata_obj

    models = WPSQLAModels(
        Base=WPBase,
        Comment=_owner(Comment, comment_meta, OwnerKind.COMMENT, names["comments"]),
        CommentMeta=comment_meta,
        Post=_owner(Post, post_meta, OwnerKind.POST, names["posts"]),
        PostMeta=post_meta,
        Term=_owner(Term, term_meta, OwnerKind.TERM, names["terms"]),
        TermMeta=term_meta,
        User=_owner(User, user_meta, OwnerKind.USER, names["users"]),
        UserMeta=user_meta,
    )
    _MODEL_CACHE[cache_key] = models
    return models


def get_metadata(*, connection: HostConnection) -> MetaData:
    return cast(MetaData, get_sqlalchemy_models(connection=connection).Base.metadata)


__all__ = ["WPSQLAModels", "get_metadata", "get_sqlalchemy_models"]
