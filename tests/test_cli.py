import json
from pathlib import Path

from typer.testing import CliRunner

from wpmeta.cli import app
from wpmeta.database.sql.store import SQLStore
from wpmeta.errors import ConfigurationError

runner = CliRunner()


def _seed(tmp_path: Path) -> tuple[str, int]:
    dsn = f"sqlite:///{tmp_path / 'wp.db'}"
    store = SQLStore(dsn=dsn)
    post = store.add(store.models.Post(post_title="Hello"))
    store.meta_repo.save_meta(post, "color", "red")
    store.close()
    return dsn, post.id


def _invoke(dsn: str, *args: str) -> object:
    result = runner.invoke(app, ["--dsn", dsn, "--config", "missing.json", *args])
    assert result.exit_code == 0, result.output
    return json.loads(result.output)


def test_get_set_and_add(tmp_path: Path) -> None:
    dsn, post_id = _seed(tmp_path)

    assert _invoke(dsn, "get", "post", str(post_id), "color") == {"key": "color", "value": "red"}

    saved = _invoke(dsn, "set", "post", str(post_id), "color", "blue")
    assert saved == {"saved": True, "key": "color", "value": "blue"}

    added = _invoke(dsn, "add", "post", str(post_id), "color", "green")
    assert added["value"] == "green"
    assert _invoke(dsn, "health")["counts"]["post"] == 2


def test_find(tmp_path: Path) -> None:
    dsn, post_id = _seed(tmp_path)

    assert _invoke(dsn, "find", "post", "color", "red") == [post_id]
    assert _invoke(dsn, "find", "post", "color", "r%", "--operator", "like") == [post_id]
    assert _invoke(dsn, "find", "post", "size") == []


def test_unknown_owner_exits_with_error(tmp_path: Path) -> None:
    dsn, _ = _seed(tmp_path)

    result = runner.invoke(app, ["--dsn", dsn, "--config", "missing.json", "get", "post", "404", "color"])

    assert result.exit_code == 1


def test_invalid_config_aborts_instead_of_using_defaults(tmp_path: Path) -> None:
    config_path = tmp_path / "wpmeta.json"
    config_path.write_text(json.dumps({"metadata_store": {"provider": "postgres"}}), encoding="utf-8")

    result = runner.invoke(app, ["--config", str(config_path), "health"])

    assert result.exit_code != 0
    assert isinstance(result.exception, ConfigurationError)
