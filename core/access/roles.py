"""Workspace role lattice: admin > leader > member."""

from typing import Optional, Union

from models.user import UserRole

ROLE_RANK = {
    UserRole.member: 1,
    UserRole.leader: 2,
    UserRole.admin: 3,
}


def coerce_role(role: Union[UserRole, str]) -> UserRole:
    if isinstance(role, UserRole):
        return role
    return UserRole(role)


def meets_or_exceeds(role: Optional[Union[UserRole, str]], required: Union[UserRole, str]) -> bool:
    """Return True when ``role`` sits at or above ``required`` in the lattice.

    A missing role (no membership) never satisfies anything.
    """
    if role is None:
        return False
    return ROLE_RANK[coerce_role(role)] >= ROLE_RANK[coerce_role(required)]


def is_plain_member(role: Optional[Union[UserRole, str]]) -> bool:
    return role is not None and coerce_role(role) == UserRole.member
