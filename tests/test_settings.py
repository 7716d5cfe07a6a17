import json
from pathlib import Path

import pytest

from wpmeta.app import DatabaseConfig, TablePrefixConfig, load_database_config
from wpmeta.database.factory import build_database
from wpmeta.database.sql.store import SQLStore
from wpmeta.errors import ConfigurationError


def test_defaults_to_inmemory_single_site(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.setenv("WPMETA_CONFIG_PATH", str(tmp_path / "missing.json"))
    monkeypatch.delenv("WPMETA_DSN", raising=False)

    config = load_database_config()

    assert config.metadata_store.provider == "inmemory"
    assert config.tables.prefix == "wp_"


def test_load_config_from_file(monkeypatch, tmp_path: Path) -> None:
    config_path = tmp_path / "wpmeta.json"
    config_path.write_text(
        json.dumps(
            {
                "database": {
                    "metadata_store": {"provider": " SQLite ", "dsn": "sqlite:///wp.db"},
                    "tables": {"base_prefix": "site_", "blog_id": 4},
                }
            }
        ),
        encoding="utf-8",
    )
    monkeypatch.setenv("WPMETA_CONFIG_PATH", str(config_path))
    monkeypatch.delenv("WPMETA_DSN", raising=False)

    config = load_database_config()

    assert config.metadata_store.provider == "sqlite"
    assert config.metadata_store.dsn == "sqlite:///wp.db"
    assert config.tables.prefix == "site_4_"


def test_dsn_env_overrides_file(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.setenv("WPMETA_CONFIG_PATH", str(tmp_path / "missing.json"))
    monkeypatch.setenv("WPMETA_DSN", "mysql+pymysql://wp:wp@localhost/wordpress")

    config = load_database_config()

    assert config.metadata_store.provider == "mysql"
    assert config.metadata_store.dsn == "mysql+pymysql://wp:wp@localhost/wordpress"


def test_unreadable_config_falls_back_to_defaults(monkeypatch, tmp_path: Path) -> None:
    config_path = tmp_path / "broken.json"
    config_path.write_text("{not json", encoding="utf-8")
    monkeypatch.delenv("WPMETA_DSN", raising=False)

    assert load_database_config(config_path) == DatabaseConfig()


def test_invalid_config_raises_naming_the_field(monkeypatch, tmp_path: Path) -> None:
    config_path = tmp_path / "wpmeta.json"
    monkeypatch.delenv("WPMETA_DSN", raising=False)

    config_path.write_text(
        json.dumps({"metadata_store": {"provider": "postgres", "dsn": f"sqlite:///{tmp_path / 'wp.db'}"}}),
        encoding="utf-8",
    )
    with pytest.raises(ConfigurationError, match=r"metadata_store\.provider"):
        load_database_config(config_path)

    config_path.write_text(json.dumps({"database": {"metadata_store": {"ddl_mode": "valdate"}}}), encoding="utf-8")
    with pytest.raises(ConfigurationError, match=r"metadata_store\.ddl_mode"):
        load_database_config(config_path)
    assert not (tmp_path / "wp.db").exists()


def test_main_site_prefix_is_base_prefix() -> None:
    assert TablePrefixConfig(base_prefix="wp_", blog_id=1).prefix == "wp_"
    assert TablePrefixConfig(base_prefix="wp_", blog_id=7).prefix == "wp_7_"


def test_sqlite_provider_requires_dsn() -> None:
    config = DatabaseConfig.model_validate({"metadata_store": {"provider": "sqlite"}})
    with pytest.raises(ConfigurationError, match="dsn is required"):
        build_database(config)


def test_build_database_applies_table_prefixes() -> None:
    config = DatabaseConfig.model_validate({"tables": {"blog_id": 2}})
    store = build_database(config)
    assert store.models.Post.__tablename__ == "wp_2_posts"
    assert store.models.User.__tablename__ == "wp_users"


def test_validate_mode_reports_missing_tables(tmp_path: Path) -> None:
    dsn = f"sqlite:///{tmp_path / 'empty.db'}"
    with pytest.raises(ConfigurationError, match="Missing tables: .*wp_postmeta"):
        SQLStore(dsn=dsn, ddl_mode="validate")


def test_validate_mode_accepts_existing_schema(tmp_path: Path) -> None:
    dsn = f"sqlite:///{tmp_path / 'wp.db'}"
    SQLStore(dsn=dsn).close()
    store = SQLStore(dsn=dsn, ddl_mode="validate")
    assert "wp_usermeta" in store.models.table_names
    store.close()
