# This project was developed with assistance from AI tools.
"""Caller identity as seen by routes and services."""

from db.enums import UserRole
from pydantic import BaseModel, ConfigDict, Field


class UserContext(BaseModel):
    """The authenticated caller, acting under a single portal role.

    Services copy ``user_id``, ``name`` and ``role`` into audit entries, so a
    trail survives later renames or role changes of the account.
    """

    model_config = ConfigDict(frozen=True)

    user_id: str
    role: UserRole
    email: str = ""
    name: str


class TokenPayload(BaseModel):
    """Claims read from a Keycloak access token."""

    sub: str
    email: str = ""
    preferred_username: str = ""
    name: str = ""
    realm_access: dict = Field(default_factory=dict)

    @property
    def realm_roles(self) -> list[str]:
        return list(self.realm_access.get("roles", []))

    @property
    def display_name(self) -> str:
        return self.name or self.preferred_username or self.sub
