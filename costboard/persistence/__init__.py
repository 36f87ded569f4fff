from .identity import CallableIdentity, IdentityProvider, StaticIdentity
from .projects_db import ProjectStore, SqliteProjectStore

__all__ = [
    "CallableIdentity",
    "IdentityProvider",
    "ProjectStore",
    "SqliteProjectStore",
    "StaticIdentity",
]
