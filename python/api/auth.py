"""
Authentication Module

Provides header-based authentication for the ledger API. Users and their
roles come from a YAML access list.
"""

import logging
from pathlib import Path

import yaml
from fastapi import Depends, HTTPException, Header, status
from pydantic import BaseModel

from .config import settings

logger = logging.getLogger(__name__)

# Ledger permissions
PERMISSION_VIEW = "view"
PERMISSION_LEDGER_EDIT = "ledger_edit"
ALL_PERMISSIONS = "*"

ROLE_OWNER = "owner"
ROLE_ACCOUNTANT = "accountant"
ROLE_VIEWER = "viewer"

ROLE_PERMISSIONS = {
    ROLE_OWNER: [ALL_PERMISSIONS],
    ROLE_ACCOUNTANT: [PERMISSION_VIEW, PERMISSION_LEDGER_EDIT],
    ROLE_VIEWER: [PERMISSION_VIEW],
}

DEV_USER_ID = "dev"

DEFAULT_ACL = {
    "users": [{"user_id": DEV_USER_ID, "name": "Developer", "role": ROLE_OWNER}],
    "permissions": ROLE_PERMISSIONS,
}


class User(BaseModel):
    """Authenticated ledger user."""

    user_id: str
    name: str
    role: str
    permissions: list[str]

    def can(self, permission: str) -> bool:
        return ALL_PERMISSIONS in self.permissions or permission in self.permissions


DEV_USER = User(user_id=DEV_USER_ID, name="Developer", role=ROLE_OWNER, permissions=[ALL_PERMISSIONS])


class AuthConfig:
    """Access list loaded from ledger_acl.yaml.

    Users are indexed by id on load. A role the file does not list falls back
    to the built-in ROLE_PERMISSIONS, and an unknown role gets view access.
    """

    def __init__(self, config_path: Path | str | None = None):
        self.config_path = Path(config_path) if config_path is not None else settings.acl_path
        self.users: dict[str, User] = {}
        self._load_config()

    def _load_config(self) -> None:
        if self.config_path.exists():
            with open(self.config_path) as f:
                config = yaml.safe_load(f) or {}
        else:
            logger.warning(f"ACL file {self.config_path} not found, using development defaults")
            config = DEFAULT_ACL

        role_permissions = {**ROLE_PERMISSIONS, **(config.get("permissions") or {})}

        for entry in config.get("users") or []:
            user_id = str(entry.get("user_id"))
            role = entry.get("role", ROLE_VIEWER)
            self.users[user_id] = User(
                user_id=user_id,
                name=entry.get("name", "Unknown"),
                role=role,
                permissions=role_permissions.get(role, [PERMISSION_VIEW]),
            )

        logger.info(f"Loaded {len(self.users)} ledger users from {self.config_path}")

    def get_user(self, user_id: str) -> User | None:
        """Look up the user named by an X-User-ID header value."""
        return self.users.get(str(user_id))

    def has_permission(self, user: User, permission: str) -> bool:
        return user.can(permission)


# Global auth config instance
auth_config = AuthConfig()


async def get_current_user(
    x_user_id: str | None = Header(None, alias="X-User-ID"),
) -> User:
    """Resolve the X-User-ID header to a ledger user.

    Raises:
        HTTPException: 401 without the header, 403 for an unknown user
    """
    if not x_user_id:
        # Development mode: anonymous requests act as the owner
        if settings.is_development:
            return DEV_USER
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing X-User-ID header",
        )

    user = auth_config.get_user(x_user_id)
    if user is None:
        logger.warning(f"Rejected unknown user {x_user_id!r}")
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="User not authorized",
        )

    return user


def require_permission(permission: str):
    """Dependency factory that admits users holding a ledger permission."""

    async def check_permission(user: User = Depends(get_current_user)) -> User:
        if not auth_config.has_permission(user, permission):
            logger.warning(f"User {user.user_id} lacks {permission!r}")
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Permission '{permission}' required",
            )
        return user

    return check_permission


require_view = require_permission(PERMISSION_VIEW)
require_ledger_edit = require_permission(PERMISSION_LEDGER_EDIT)
