from pydantic import BaseModel, Field

from src.domain.entities import RoleType


class ProjectRules(BaseModel):
    slug: str
    rules_version: str


class RbacRules(BaseModel):
    # role -> capabilities ("*" and "scope:*" wildcards allowed)
    roles: dict[RoleType, list[str]]
    public_permissions: list[str] = Field(default_factory=list)


class CapabilityRules(BaseModel):
    """Capability required by each mutation, keyed by operation name."""

    lock_user: str = "users:lock"
    unlock_user: str = "users:lock"
    set_user_roles: str = "users:manage_roles"


class OpsRules(BaseModel):
    required_env: list[str] = Field(default_factory=list)
    system_actor_role: RoleType = "owner"


class Rules(BaseModel):
    project: ProjectRules
    rbac: RbacRules
    capabilities: CapabilityRules = Field(default_factory=CapabilityRules)
    ops: OpsRules = Field(default_factory=OpsRules)
