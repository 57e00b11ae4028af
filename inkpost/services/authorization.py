"""Ownership rule for mutating user content."""

from inkpost.core.config import get_settings
from inkpost.schemas.auth import CurrentUser


class ForbiddenError(Exception):
    """The requester may not mutate this resource."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


def can_mutate(owner_id: int, identity: CurrentUser, admin_role: str | None = None) -> bool:
    """True if identity owns the resource or holds the privileged role."""
    if admin_role is None:
        admin_role = get_settings().ADMIN_ROLE
    return owner_id == identity.id or identity.role == admin_role
