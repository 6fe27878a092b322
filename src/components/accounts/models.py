"""
Accounts component - Data models.

Input models for each mutation and the outcomes reported by the user repository.
"""

from __future__ import annotations

from dataclasses import dataclass

from src.domain.entities import Actor, RoleType, User

# --- Input Models ---


@dataclass(frozen=True)
class LockUserInput:
    """Input for locking a user account."""

    actor: Actor | None
    user_id: int


@dataclass(frozen=True)
class UnlockUserInput:
    """Input for unlocking a user account."""

    actor: Actor | None
    user_id: int


@dataclass(frozen=True)
class SetUserRolesInput:
    """Input for replacing the roles of a user account."""

    actor: Actor | None
    user_id: int
    roles: tuple[RoleType, ...]


# --- Repository Outcomes ---


@dataclass(frozen=True)
class RecordUpdated:
    """Exactly one record was updated; carries the post-update state."""

    record: User


@dataclass(frozen=True)
class PersistenceInvariantViolation:
    """The update target did not resolve to exactly one record."""

    operation: str
    record_id: int
    affected_rows: int

    def describe(self) -> str:
        return (
            f"{self.operation} on record {self.record_id} affected "
            f"{self.affected_rows} rows, expected exactly 1"
        )


@dataclass(frozen=True)
class StoreFailure:
    """The store rejected or could not complete the update."""

    operation: str
    record_id: int
    detail: str

    def describe(self) -> str:
        return f"{self.operation} on record {self.record_id} failed: {self.detail}"


UpdateOutcome = RecordUpdated | PersistenceInvariantViolation | StoreFailure
