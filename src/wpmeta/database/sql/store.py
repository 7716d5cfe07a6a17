"""SQL database store implementation for wpmeta."""

from __future__ import annotations

import logging
from typing import Any, Literal, TypeVar

from sqlalchemy import Select, event, inspect
from sqlmodel import Session

from wpmeta.database.connection import HostConnection, HostDatabase
from wpmeta.database.interfaces import Database
from wpmeta.database.relation import MetaRegistry
from wpmeta.database.repositories import MetaRepo
from wpmeta.database.sql.repositories.meta_repo import SQLMetaRepo
from wpmeta.database.sql.schema import WPSQLAModels, get_sqlalchemy_models
from wpmeta.database.sql.session import SessionManager
from wpmeta.database.state import HostState
from wpmeta.errors import ConfigurationError

logger = logging.getLogger(__name__)

DDLMode = Literal["create", "validate"]

TEntity = TypeVar("TEntity")


class SQLStore(Database):
    """SQLAlchemy-backed store for WordPress owners and their meta.

    Attributes:
        connection: Host connection adapter (table prefixes, last insert id).
        models: Prefixed owner and meta table models.
        registry: Owner kind to meta table mapping handed to the meta repository.
        meta_repo: Meta fields repository.
    """

    connection: HostConnection
    models: WPSQLAModels
    registry: MetaRegistry
    meta_repo: MetaRepo

    def __init__(
        self,
        *,
        dsn: str,
        ddl_mode: DDLMode = "create",
        host: HostDatabase | None = None,
        engine_kwargs: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the store.

        Args:
            dsn: SQLAlchemy connection string (e.g., "sqlite:///path/to/wp.sqlite").
            ddl_mode: "create" creates missing tables, "validate" only checks them.
            host: Host database handle providing prefixes; defaults to a single-site "wp_" install.
            engine_kwargs: Extra keyword arguments for `create_engine`.
        """
        self.dsn = dsn
        self.ddl_mode = ddl_mode
        self.connection = HostConnection(host or HostState())
        self._sessions = SessionManager(dsn=self.dsn, engine_kwargs=engine_kwargs)
        self.models = get_sqlalchemy_models(connection=self.connection)

        if self.ddl_mode == "create":
            self._create_tables()
        else:
            self._validate_tables()

        event.listen(self._sessions.session_factory, "after_flush", self.connection.track_inserts)

        self.registry = MetaRegistry.from_models(self.models)
        self.meta_repo = SQLMetaRepo(registry=self.registry, sessions=self._sessions)

    @property
    def sessions(self) -> SessionManager:
        return self._sessions

    def _create_tables(self) -> None:
        self.models.Base.metadata.create_all(self._sessions.engine)
        logger.debug("Tables created/verified: %s", ", ".join(self.models.table_names))

    def _validate_tables(self) -> None:
        existing = set(inspect(self._sessions.engine).get_table_names())
        missing = [name for name in self.models.table_names if name not in existing]
        if missing:
            msg = f"Missing tables: {', '.join(missing)}"
            raise ConfigurationError(msg)

    def session(self) -> Session:
        return self._sessions.session()

    def add(self, entity: TEntity) -> TEntity:
        """Persist `entity` and return it with its identity and meta collection loaded."""
        with self._sessions.session() as session:
            session.add(entity)
            session.commit()
            session.refresh(entity)
        if self._is_owner(entity):
            self.meta_repo.load_meta(entity)
        return entity

    def get(self, model: type[TEntity], ident: Any) -> TEntity | None:
        with self._sessions.session() as session:
            return session.get(model, ident)

    def all(self, statement: Select[Any]) -> list[Any]:
        with self._sessions.session() as session:
            return list(session.exec(statement).all())

    def close(self) -> None:
        """Close the database connection and release resources."""
        self._sessions.close()

    def _is_owner(self, entity: Any) -> bool:
        try:
            self.registry.resolve(entity)
        except ConfigurationError:
            return False
        return True


__all__ = ["DDLMode", "SQLStore"]
