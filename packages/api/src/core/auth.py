# This project was developed with assistance from AI tools.
"""Pure auth utility functions with no FastAPI or HTTP dependencies.

Role groupings and primary-role resolution live here so that services and
scripts can reason about roles without importing the request layer.
"""

from collections.abc import Iterable

from db.enums import UserRole

# Office staff who may read any application and its audit trail
STAFF_ROLES = (
    UserRole.ADMIN,
    UserRole.TRUSTEE,
    UserRole.SUPERINTENDENT,
    UserRole.ACCOUNTS,
)

# Highest authority first; a token carrying several roles acts as the first match
ROLE_PRECEDENCE = (
    UserRole.ADMIN,
    UserRole.TRUSTEE,
    UserRole.SUPERINTENDENT,
    UserRole.ACCOUNTS,
    UserRole.PARENT,
    UserRole.STUDENT,
    UserRole.APPLICANT,
)


def known_roles(raw_roles: Iterable[str]) -> list[UserRole]:
    """Filter identity-provider roles down to the ones this portal defines."""
    values = {role.value for role in UserRole}
    return [UserRole(r) for r in raw_roles if r in values]


def resolve_primary_role(roles: Iterable[UserRole]) -> UserRole | None:
    """Pick the most privileged role, or None when ``roles`` is empty."""
    held = set(roles)
    for role in ROLE_PRECEDENCE:
        if role in held:
            return role
    return None


def is_staff(role: UserRole) -> bool:
    return role in STAFF_ROLES
