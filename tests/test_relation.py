import pytest
from sqlmodel import SQLModel

from wpmeta.database import MetaRegistry, OwnerKind, resolve_meta_relation, resolve_owner_kind
from wpmeta.database.models import Post
from wpmeta.database.sql.store import SQLStore
from wpmeta.errors import ConfigurationError


class Page(Post):
    pass


class Attachment(SQLModel):
    id: int | None = None


def _build_store() -> SQLStore:
    return SQLStore(dsn="sqlite://")


@pytest.mark.parametrize(
    ("kind", "meta_table", "foreign_key"),
    [
        (OwnerKind.COMMENT, "wp_commentmeta", "comment_id"),
        (OwnerKind.POST, "wp_postmeta", "post_id"),
        (OwnerKind.TERM, "wp_termmeta", "term_id"),
        (OwnerKind.USER, "wp_usermeta", "user_id"),
    ],
)
def test_resolves_meta_table_and_foreign_key(kind: OwnerKind, meta_table: str, foreign_key: str) -> None:
    store = _build_store()
    owner = store.models.owner(kind)()

    relation = resolve_meta_relation(owner, store.registry)

    assert relation.kind is kind
    assert relation.meta_model is store.models.meta(kind)
    assert relation.meta_model.__tablename__ == meta_table
    assert relation.foreign_key == foreign_key


def test_resolves_owner_classes_as_well_as_instances() -> None:
    store = _build_store()
    assert store.registry.resolve(store.models.Term).foreign_key == "term_id"
    assert resolve_owner_kind(store.models.User) is OwnerKind.USER


def test_subclass_of_owner_matches_its_base() -> None:
    store = _build_store()
    relation = store.registry.resolve(Page(post_title="About"))
    assert relation.kind is OwnerKind.POST
    assert relation.meta_model is store.models.PostMeta


@pytest.mark.parametrize("owner", [Attachment(), object(), "post", None])
def test_unsupported_owner_raises_configuration_error(owner: object) -> None:
    store = _build_store()
    with pytest.raises(ConfigurationError, match="Comment, Post, Term or User"):
        store.registry.resolve(owner)


def test_error_names_the_offending_type() -> None:
    with pytest.raises(ConfigurationError, match="^Attachment must extend"):
        resolve_owner_kind(Attachment())


def test_registry_requires_every_owner_kind() -> None:
    store = _build_store()
    with pytest.raises(ConfigurationError, match="term, user"):
        MetaRegistry({OwnerKind.COMMENT: store.models.CommentMeta, OwnerKind.POST: store.models.PostMeta})


def test_foreign_key_is_lowercased_owner_name() -> None:
    assert [kind.foreign_key for kind in OwnerKind] == ["comment_id", "post_id", "term_id", "user_id"]
