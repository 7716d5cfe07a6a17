from wpmeta.database import HostConnection, HostState
from wpmeta.database.sql.store import SQLStore


def test_prefix_without_table_name_is_current_blog_prefix() -> None:
    connection = HostConnection(HostState(prefix="wp_3_", base_prefix="wp_"))
    assert connection.prefix() == "wp_3_"
    assert connection.prefix("") == "wp_3_"


def test_global_tables_use_base_prefix() -> None:
    connection = HostConnection(HostState(prefix="wp_3_", base_prefix="wp_"))
    assert connection.prefix("users") == "wp_"
    assert connection.prefix("usermeta") == "wp_"
    assert connection.prefix("posts") == "wp_3_"
    assert connection.table("postmeta") == "wp_3_postmeta"
    assert connection.table("usermeta") == "wp_usermeta"


def test_custom_global_tables() -> None:
    connection = HostConnection(HostState(prefix="b2_", base_prefix="b_", global_tables=["terms"]))
    assert connection.prefix("terms") == "b_"
    assert connection.prefix("users") == "b2_"


def test_multisite_store_uses_shared_user_tables() -> None:
    store = SQLStore(dsn="sqlite://", host=HostState(prefix="wp_2_", base_prefix="wp_"))
    assert store.models.Post.__tablename__ == "wp_2_posts"
    assert store.models.PostMeta.__tablename__ == "wp_2_postmeta"
    assert store.models.User.__tablename__ == "wp_users"
    assert store.models.UserMeta.__tablename__ == "wp_usermeta"


def test_last_insert_id_tracks_flushed_rows() -> None:
    store = SQLStore(dsn="sqlite://")
    assert store.connection.last_insert_id() is None

    post = store.add(store.models.Post(post_title="Hello"))
    assert store.connection.last_insert_id() == post.id

    row = store.meta_repo.create_one(post, "views", 1)
    assert store.connection.last_insert_id() == row.meta_id
