from __future__ import annotations

from sqlalchemy.exc import SQLAlchemyError

# Storage failures are raised by SQLAlchemy and propagate unchanged.
PersistenceError = SQLAlchemyError


class ConfigurationError(Exception):
    """Raised for programmer or deployment errors: unsupported owner types, missing DSN, missing tables."""


__all__ = ["ConfigurationError", "PersistenceError"]
