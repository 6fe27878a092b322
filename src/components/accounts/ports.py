"""
Accounts component - Port interfaces.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, Protocol

from src.domain.entities import Actor, RoleType, User

from .models import UpdateOutcome


class UserRepoPort(Protocol):
    """Persistence operations for user accounts. No business logic."""

    def get_by_id(self, user_id: int) -> User | None:
        """Fetch a user by id."""
        ...

    def save(self, user: User) -> User:
        """Insert or replace a user."""
        ...

    def set_locked(self, user_id: int, locked: bool) -> UpdateOutcome:
        """Set the locked flag atomically and return the updated record."""
        ...

    def set_roles(self, user_id: int, roles: Sequence[RoleType]) -> UpdateOutcome:
        """Replace the user's roles atomically and return the updated record."""
        ...


class PolicyPort(Protocol):
    def is_authorized(self, actor: Actor | None, capability: str) -> bool: ...


class ObserverPort(Protocol):
    """Sink for failure records. Must never raise back into the caller."""

    def record_failure(
        self, message: str, error: str, context: Mapping[str, Any]
    ) -> None: ...
