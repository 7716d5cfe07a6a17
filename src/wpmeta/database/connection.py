from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Protocol, runtime_checkable

from sqlalchemy import inspect as sa_inspect
from sqlalchemy.orm import Session


@runtime_checkable
class HostDatabase(Protocol):
    """Attributes read from the host database handle (WordPress `wpdb` shape)."""

    insert_id: int | None
    prefix: str
    base_prefix: str
    global_tables: Sequence[str]


class HostConnection:
    """Adapter over the host database handle.

    Only two things are consumed from the host: the most recent auto-generated
    identity, and the table prefix to use for a given table. Multisite installs
    keep some tables (users, usermeta, ...) shared across blogs under the base
    prefix, while every other table lives under the current blog's prefix.
    """

    def __init__(self, db: HostDatabase) -> None:
        self.db = db

    def last_insert_id(self) -> int | None:
        return self.db.insert_id

    def prefix(self, table_name: str | None = None) -> str:
        if not table_name:
            return self.db.prefix
        if table_name in self.db.global_tables:
            return self.db.base_prefix
        return self.db.prefix

    def table(self, name: str) -> str:
        return f"{self.prefix(name)}{name}"

    def record_insert(self, row_id: int | None) -> None:
        if row_id is not None:
            self.db.insert_id = row_id

    def track_inserts(self, session: Session, flush_context: Any) -> None:
        """`after_flush` listener: remember the identity of the last inserted row."""
        ids = []
        for obj in session.new:
            identity = sa_inspect(obj).mapper.primary_key_from_instance(obj)
            if identity and isinstance(identity[0], int):
                ids.append(identity[0])
        if ids:
            self.record_insert(max(ids))


__all__ = ["HostConnection", "HostDatabase"]
