from __future__ import annotations

import logging
import operator as op
from collections.abc import Callable, Iterable, Mapping, Sequence
from typing import Any

from sqlalchemy import ColumnElement, Select
from sqlalchemy import inspect as sa_inspect
from sqlalchemy.orm.attributes import set_committed_value
from sqlmodel import Session

from wpmeta.database.relation import MetaRegistry, MetaRelation
from wpmeta.database.repositories.meta import MetaRepo, TSelect
from wpmeta.database.sql.session import SessionManager
from wpmeta.database.values import encode_meta_value

logger = logging.getLogger(__name__)

_OPERATORS: dict[str, Callable[[Any, Any], ColumnElement[bool]]] = {
    "=": op.eq,
    "!=": op.ne,
    "<>": op.ne,
    "<": op.lt,
    "<=": op.le,
    ">": op.gt,
    ">=": op.ge,
    "like": lambda column, value: column.like(value),
    "not like": lambda column, value: column.not_like(value),
}


def _comparator(operator: str) -> Callable[[Any, Any], ColumnElement[bool]]:
    compare = _OPERATORS.get(" ".join(operator.lower().split()))
    if compare is None:
        msg = f"Unsupported meta operator {operator!r}; expected one of {sorted(_OPERATORS)}"
        raise ValueError(msg)
    return compare


def _meta_filters(meta: str | Mapping[Any, Any] | Sequence[str], value: Any) -> list[tuple[str | None, Any]]:
    """Normalize a meta filter into (key, value) pairs; key is None for positional entries."""
    if isinstance(meta, str):
        return [(meta, value)]
    if isinstance(meta, Mapping):
        return [(key if isinstance(key, str) else None, item) for key, item in meta.items()]
    return [(None, item) for item in meta]


def _statement_entity(statement: Select[Any]) -> Any:
    descriptions = statement.column_descriptions
    return descriptions[0]["entity"] if descriptions else None


class SQLMetaRepo(MetaRepo):
    """Meta fields for comments, posts, terms and users.

    Every write is followed by a full reload of the owner's `meta`
    collection, so the in-memory collection always mirrors the table after a
    successful save or create.
    """

    def __init__(self, *, registry: MetaRegistry, sessions: SessionManager) -> None:
        self._registry = registry
        self._sessions = sessions

    def relation(self, owner: Any) -> MetaRelation:
        return self._registry.resolve(owner)

    def meta(self, owner: Any) -> Select[Any]:
        return self.relation(owner).select(owner.id)

    fields = meta

    # Scopes

    def has_meta(
        self,
        statement: TSelect,
        meta: str | Mapping[Any, Any] | Sequence[str],
        value: Any = None,
        operator: str = "=",
    ) -> TSelect:
        """Keep owners having, for every entry in `meta`, at least one matching meta row.

        Entries are checked independently, so different rows may satisfy
        different entries.
        """
        owner_model = _statement_entity(statement)
        relation = self.relation(owner_model)
        compare = _comparator(operator)
        meta_model = relation.meta_model

        for key, entry in _meta_filters(meta, value):
            if key is None:
                criteria = [compare(meta_model.meta_key, entry)]
            elif entry is None:
                criteria = [compare(meta_model.meta_key, key)]
            else:
                criteria = [meta_model.meta_key == key, compare(meta_model.meta_value, encode_meta_value(entry))]
            statement = statement.where(relation.exists(owner_model, *criteria))
        return statement

    def has_meta_in(self, statement: TSelect, key: str, values: Iterable[Any]) -> TSelect:
        """Keep owners with a `key` meta row whose value is one of `values`.

        An empty `values` matches nothing.
        """
        owner_model = _statement_entity(statement)
        relation = self.relation(owner_model)
        meta_model = relation.meta_model
        encoded = [encode_meta_value(item) for item in values]
        return statement.where(
            relation.exists(owner_model, meta_model.meta_key == key, meta_model.meta_value.in_(encoded))
        )

    def has_meta_like(self, statement: TSelect, meta: str | Mapping[Any, Any], value: Any = None) -> TSelect:
        return self.has_meta(statement, meta, value, "like")

    # Writes

    def save_meta(self, owner: Any, key: str | Mapping[str, Any], value: Any = None) -> bool:
        if isinstance(key, Mapping):
            return self.save_many(owner, key)
        return self.save_one(owner, key, value)

    save_field = save_meta

    def save_one(self, owner: Any, key: str, value: Any) -> bool:
        """Update the first `key` row of `owner`, or insert one when there is none."""
        relation = self._writable_relation(owner)
        with self._sessions.session() as session:
            self._upsert(session, relation, owner.id, key, value)
            session.commit()
        self.load_meta(owner)
        return True

    def save_many(self, owner: Any, values: Mapping[str, Any]) -> bool:
        relation = self._writable_relation(owner)
        with self._sessions.session() as session:
            for key, value in values.items():
                self._upsert(session, relation, owner.id, key, value)
            session.commit()
        self.load_meta(owner)
        return True

    def create_meta(self, owner: Any, key: str | Mapping[str, Any], value: Any = None) -> Any:
        if isinstance(key, Mapping):
            return self.create_many(owner, key)
        return self.create_one(owner, key, value)

    create_field = create_meta

    def create_one(self, owner: Any, key: str, value: Any) -> Any:
        """Insert a new `key` row even when one already exists."""
        return self.create_many(owner, {key: value})[0]

    def create_many(self, owner: Any, values: Mapping[str, Any]) -> list[Any]:
        relation = self._writable_relation(owner)
        with self._sessions.session() as session:
            rows = [self._new_row(relation, owner.id, key, value) for key, value in values.items()]
            session.add_all(rows)
            session.commit()
        self.load_meta(owner)
        return rows

    # Cache

    def get_meta(self, owner: Any, key: str) -> str | None:
        """Value of the first cached `key` row, or None.

        Reads only what was last loaded into `owner.meta`; never queries.
        Falsy stored values such as "" or "0" are returned as stored, not collapsed to None.
        """
        self.relation(owner)
        if "meta" in sa_inspect(owner).unloaded:
            return None
        for row in owner.meta:
            if row.meta_key == key:
                return row.meta_value
        return None

    def load_meta(self, owner: Any) -> list[Any]:
        """Replace `owner.meta` with a fresh read of its meta rows."""
        relation = self.relation(owner)
        with self._sessions.session() as session:
            rows = list(session.exec(relation.select(owner.id)).all())
        set_committed_value(owner, "meta", rows)
        logger.debug("Reloaded %d %s meta rows for owner %s", len(rows), relation.kind.value, owner.id)
        return rows

    def _writable_relation(self, owner: Any) -> MetaRelation:
        relation = self.relation(owner)
        if owner.id is None:
            msg = f"{type(owner).__name__} must be saved before meta can be attached to it"
            raise ValueError(msg)
        return relation

    def _upsert(self, session: Session, relation: MetaRelation, owner_id: Any, key: str, value: Any) -> Any:
        meta_model = relation.meta_model
        row = session.exec(relation.select(owner_id).where(meta_model.meta_key == key).limit(1)).first()
        if row is None:
            row = self._new_row(relation, owner_id, key, None)
        row.meta_value = encode_meta_value(value)
        session.add(row)
        return row

    @staticmethod
    def _new_row(relation: MetaRelation, owner_id: Any, key: str, value: Any) -> Any:
        return relation.meta_model(
            meta_key=key,
            meta_value=encode_meta_value(value),
            **{relation.foreign_key: owner_id},
        )


__all__ = ["SQLMetaRepo"]
