from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any

import pendulum
from sqlalchemy import Text
from sqlmodel import DateTime, Field, SQLModel


class OwnerKind(str, Enum):
    COMMENT = "comment"
    POST = "post"
    TERM = "term"
    USER = "user"

    @property
    def foreign_key(self) -> str:
        return f"{self.value}_id"


class TZDateTime(DateTime):
    """DateTime type with timezone support."""

    def __init__(self, timezone: bool = True, **kw: Any) -> None:
        super().__init__(timezone=timezone, **kw)


def _now() -> datetime:
    return pendulum.now("UTC")


class Comment(SQLModel):
    id: int | None = Field(default=None, primary_key=True, sa_column_kwargs={"name": "comment_ID"})
    comment_post_id: int = Field(default=0, index=True, sa_column_kwargs={"name": "comment_post_ID"})
    comment_author: str = Field(default="", sa_type=Text)
    comment_author_email: str = Field(default="", max_length=100)
    comment_date: datetime = Field(default_factory=_now, sa_type=TZDateTime)
    comment_content: str = Field(default="", sa_type=Text)
    comment_approved: str = Field(default="1", max_length=20)
    comment_type: str = Field(default="comment", max_length=20)
    user_id: int = Field(default=0)


class Post(SQLModel):
    id: int | None = Field(default=None, primary_key=True, sa_column_kwargs={"name": "ID"})
    post_author: int = Field(default=0)
    post_date: datetime = Field(default_factory=_now, sa_type=TZDateTime)
    post_content: str = Field(default="", sa_type=Text)
    post_title: str = Field(default="", sa_type=Text)
    post_status: str = Field(default="publish", max_length=20)
    post_name: str = Field(default="", max_length=200, index=True)
    post_type: str = Field(default="post", max_length=20)
    post_parent: int = Field(default=0)


class Term(SQLModel):
    id: int | None = Field(default=None, primary_key=True, sa_column_kwargs={"name": "term_id"})
    name: str = Field(default="", max_length=200)
    slug: str = Field(default="", max_length=200, index=True)
    term_group: int = Field(default=0)


class User(SQLModel):
    id: int | None = Field(default=None, primary_key=True, sa_column_kwargs={"name": "ID"})
    user_login: str = Field(default="", max_length=60, index=True)
    user_email: str = Field(default="", max_length=100)
    user_nicename: str = Field(default="", max_length=50)
    display_name: str = Field(default="", max_length=250)
    user_registered: datetime = Field(default_factory=_now, sa_type=TZDateTime)
    user_status: int = Field(default=0)


class Meta(SQLModel):
    """Columns shared by every meta table."""

    meta_id: int | None = Field(default=None, primary_key=True)
    meta_key: str | None = Field(default=None, max_length=255, index=True)
    meta_value: str | None = Field(default=None, sa_type=Text)


class CommentMeta(Meta):
    comment_id: int = Field(default=0, index=True)


class PostMeta(Meta):
    post_id: int = Field(default=0, index=True)


class TermMeta(Meta):
    term_id: int = Field(default=0, index=True)


class UserMeta(Meta):
    meta_id: int | None = Field(default=None, primary_key=True, sa_column_kwargs={"name": "umeta_id"})
    user_id: int = Field(default=0, index=True)


# Order matters: the first owner base an entity derives from decides its meta table.
OWNER_BASES: tuple[tuple[type[SQLModel], OwnerKind], ...] = (
    (Comment, OwnerKind.COMMENT),
    (Post, OwnerKind.POST),
    (Term, OwnerKind.TERM),
    (User, OwnerKind.USER),
)

META_BASES: dict[OwnerKind, type[Meta]] = {
    OwnerKind.COMMENT: CommentMeta,
    OwnerKind.POST: PostMeta,
    OwnerKind.TERM: TermMeta,
    OwnerKind.USER: UserMeta,
}


__all__ = [
    "META_BASES",
    "OWNER_BASES",
    "Comment",
    "CommentMeta",
    "Meta",
    "OwnerKind",
    "Post",
    "PostMeta",
    "TZDateTime",
    "Term",
    "TermMeta",
    "User",
    "UserMeta",
]
