from wpmeta.database.connection import HostConnection, HostDatabase
from wpmeta.database.models import OwnerKind
from wpmeta.database.relation import MetaRegistry, MetaRelation, resolve_meta_relation, resolve_owner_kind
from wpmeta.database.state import HostState

__all__ = [
    "HostConnection",
    "HostDatabase",
    "HostState",
    "MetaRegistry",
    "MetaRelation",
    "OwnerKind",
    "resolve_meta_relation",
    "resolve_owner_kind",
]
