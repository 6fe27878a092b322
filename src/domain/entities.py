from datetime import UTC, datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

# --- Enums / Literals ---
RoleType = Literal["owner", "admin", "support", "viewer"]
DenialReason = Literal["ANONYMOUS", "MISSING_CAPABILITY"]


def _utcnow() -> datetime:
    return datetime.now(UTC)


# --- Identity ---

class Actor(BaseModel):
    """Identity performing a request. Resolved at the boundary, frozen for the request."""

    model_config = ConfigDict(frozen=True)

    id: str
    roles: tuple[RoleType, ...] = ()


class AuthorizationDecision(BaseModel):
    model_config = ConfigDict(frozen=True)

    allowed: bool
    reason: DenialReason | None = None


# --- Accounts ---

class User(BaseModel):
    id: int
    email: str
    display_name: str
    roles: list[RoleType] = Field(default_factory=list)
    locked: bool = False
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)


class UserView(BaseModel):
    """Public projection of a user record returned by mutations."""

    model_config = ConfigDict(frozen=True)

    id: int
    email: str
    display_name: str
    roles: tuple[RoleType, ...]
    locked: bool
    updated_at: datetime

    @classmethod
    def from_user(cls, user: User) -> "UserView":
        return cls(
            id=user.id,
            email=user.email,
            display_name=user.display_name,
            roles=tuple(user.roles),
            locked=user.locked,
            updated_at=user.updated_at,
        )
