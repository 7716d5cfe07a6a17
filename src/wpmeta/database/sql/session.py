from __future__ import annotations

import logging
from typing import Any

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from sqlmodel import Session

logger = logging.getLogger(__name__)

_IN_MEMORY_DSNS = {"sqlite://", "sqlite:///:memory:"}


class SessionManager:
    """Owns the engine and hands out short-lived sessions."""

    def __init__(self, *, dsn: str, engine_kwargs: dict[str, Any] | None = None) -> None:
        kw: dict[str, Any] = dict(engine_kwargs or {})
        if dsn in _IN_MEMORY_DSNS:
            # One shared connection, otherwise every session sees an empty database.
            kw.setdefault("poolclass", StaticPool)
            kw.setdefault("connect_args", {"check_same_thread": False})
        self._engine = create_engine(dsn, **kw)
        self.session_factory = sessionmaker(self._engine, class_=Session, expire_on_commit=False)
        logger.debug("Session manager created for %s", self._engine.url.render_as_string(hide_password=True))

    @property
    def engine(self) -> Engine:
        return self._engine

    def session(self) -> Session:
        return self.session_factory()

    def close(self) -> None:
        self._engine.dispose()


__all__ = ["SessionManager"]
