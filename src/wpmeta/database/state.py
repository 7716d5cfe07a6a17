from __future__ import annotations

from dataclasses import dataclass, field

DEFAULT_GLOBAL_TABLES: tuple[str, ...] = (
    "blogs",
    "blogmeta",
    "registration_log",
    "signups",
    "site",
    "sitecategories",
    "sitemeta",
    "usermeta",
    "users",
)


@dataclass
class HostState:
    prefix: str = "wp_"
    base_prefix: str = "wp_"
    global_tables: list[str] = field(default_factory=lambda: list(DEFAULT_GLOBAL_TABLES))
    insert_id: int | None = None


__all__ = ["DEFAULT_GLOBAL_TABLES", "HostState"]
