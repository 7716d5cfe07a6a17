from wpmeta.database.sql.schema import WPSQLAModels, get_sqlalchemy_models
from wpmeta.database.sql.session import SessionManager
from wpmeta.database.sql.store import SQLStore

__all__ = ["SQLStore", "SessionManager", "WPSQLAModels", "get_sqlalchemy_models"]
