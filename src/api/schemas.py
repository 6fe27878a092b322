from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from src.domain.entities import RoleType


# --- Mutation Arguments ---
class UserIdArgs(BaseModel):
    model_config = ConfigDict(extra="forbid")

    user_id: int = Field(gt=0)


class SetUserRolesArgs(UserIdArgs):
    roles: list[RoleType]


class RolesUpdateRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    roles: list[RoleType]


# --- Mutation Response ---
class MutationResponse(BaseModel):
    """External response shape: exactly one of payload or error is set."""

    payload: dict[str, Any] | None = None
    error: str | None = None

    @model_validator(mode="after")
    def _exactly_one(self) -> "MutationResponse":
        if (self.payload is None) == (self.error is None):
            raise ValueError("exactly one of payload and error must be set")
        return self
