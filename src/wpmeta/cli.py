from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import typer

from wpmeta.app import MetaService, load_database_config
from wpmeta.database.models import OwnerKind

app = typer.Typer(help="Read, write and query WordPress meta fields.")


def _service(ctx: typer.Context) -> MetaService:
    return ctx.obj


def _owner(ctx: typer.Context, kind: OwnerKind, owner_id: int) -> Any:
    owner = _service(ctx).get_owner(kind, owner_id)
    if owner is None:
        typer.echo(f"{kind.value} {owner_id} not found", err=True)
        raise typer.Exit(code=1)
    return owner


def _print(data: Any) -> None:
    typer.echo(json.dumps(data, ensure_ascii=False, indent=2))


@app.callback()
def main(
    ctx: typer.Context,
    dsn: str | None = typer.Option(None, "--dsn", help="SQLAlchemy connection string."),
    config: Path | None = typer.Option(None, "--config", help="JSON config file."),
) -> None:
    database_config = load_database_config(config)
    if dsn:
        provider = "mysql" if dsn.startswith("mysql") else "sqlite"
        database_config = database_config.model_copy(
            update={"metadata_store": database_config.metadata_store.model_copy(update={"dsn": dsn, "provider": provider})}
        )
    service = MetaService(database_config=database_config)
    ctx.obj = service
    ctx.call_on_close(service.close)


@app.command()
def health(ctx: typer.Context) -> None:
    _print(_service(ctx).health(include_counts=True))


@app.command("get")
def get_meta(ctx: typer.Context, kind: OwnerKind, owner_id: int, key: str) -> None:
    owner = _owner(ctx, kind, owner_id)
    _print({"key": key, "value": _service(ctx).get_meta(owner, key)})


@app.command("set")
def set_meta(ctx: typer.Context, kind: OwnerKind, owner_id: int, key: str, value: str) -> None:
    """Update the first KEY row of the owner, creating it when missing."""
    owner = _owner(ctx, kind, owner_id)
    saved = _service(ctx).save_meta(owner, key, value)
    _print({"saved": saved, "key": key, "value": _service(ctx).get_meta(owner, key)})


@app.command("add")
def add_meta(ctx: typer.Context, kind: OwnerKind, owner_id: int, key: str, value: str) -> None:
    """Add another KEY row to the owner, even when one exists."""
    owner = _owner(ctx, kind, owner_id)
    row = _service(ctx).create_meta(owner, key, value)
    _print({"meta_id": row.meta_id, "key": row.meta_key, "value": row.meta_value})


@app.command("find")
def find_owners(
    ctx: typer.Context,
    kind: OwnerKind,
    key: str,
    value: str | None = typer.Argument(None),
    operator: str = typer.Option("=", "--operator", "-o"),
) -> None:
    owners = _service(ctx).find_owners(kind, key, value, operator=operator)
    _print([owner.id for owner in owners])


if __name__ == "__main__":
    app()
