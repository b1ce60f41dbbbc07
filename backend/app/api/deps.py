"""Shared API dependencies — single import point for all routers.

Re-exports the database session, the access policy and the file storage so
that router modules can import everything they need from one place::

    from app.api.deps import AccessLevel, get_db, require_access
"""

from app.auth.dependencies import (
    AccessLevel,
    get_current_admin,
    get_current_user,
    get_optional_user,
    get_token_claims,
    require_access,
)
from app.database import get_db
from app.uploads import FileStorage, get_file_storage

__all__ = [
    "AccessLevel",
    "FileStorage",
    "get_current_admin",
    "get_current_user",
    "get_db",
    "get_file_storage",
    "get_optional_user",
    "get_token_claims",
    "require_access",
]
