"""In-memory user repository adapter.

Implements UserRepoPort without touching the database, for tests and for
running the API with ACCOUNTS_STORE_BACKEND=memory.
"""

from collections.abc import Callable, Iterable, Sequence
from datetime import UTC, datetime

from src.components.accounts.models import (
    PersistenceInvariantViolation,
    RecordUpdated,
    UpdateOutcome,
)
from src.domain.entities import RoleType, User

FIXED_TIME = datetime(2025, 1, 1, tzinfo=UTC)


def synthesize_user(user_id: int, now: datetime = FIXED_TIME) -> User:
    """Deterministic stand-in record for an id the repo has never seen."""
    return User(
        id=user_id,
        email=f"user{user_id}@example.com",
        display_name=f"User {user_id}",
        roles=["viewer"],
        locked=False,
        created_at=now,
        updated_at=now,
    )


class InMemoryUserRepo:
    """Dict-backed user storage - single process only.

    With ``synthesize_missing`` (the default) any positive id resolves to a
    deterministic record, created on first use. Without it, unknown ids
    behave like a missing row in the database.
    """

    def __init__(
        self,
        users: Iterable[User] = (),
        *,
        synthesize_missing: bool = True,
        clock: Callable[[], datetime] = lambda: FIXED_TIME,
    ) -> None:
        self._users: dict[int, User] = {u.id: u.model_copy(deep=True) for u in users}
        self._synthesize_missing = synthesize_missing
        self._clock = clock

    def get_by_id(self, user_id: int) -> User | None:
        user = self._resolve(user_id)
        return user.model_copy(deep=True) if user else None

    def save(self, user: User) -> User:
        self._users[user.id] = user.model_copy(deep=True)
        return user

    def set_locked(self, user_id: int, locked: bool) -> UpdateOutcome:
        user = self._resolve(user_id)
        if user is None:
            return PersistenceInvariantViolation(
                operation="set_locked", record_id=user_id, affected_rows=0
            )
        updated = user.model_copy(update={"locked": locked, "updated_at": self._clock()})
        self._users[user_id] = updated
        return RecordUpdated(record=updated.model_copy(deep=True))

    def set_roles(self, user_id: int, roles: Sequence[RoleType]) -> UpdateOutcome:
        user = self._resolve(user_id)
        if user is None:
            return PersistenceInvariantViolation(
                operation="set_roles", record_id=user_id, affected_rows=0
            )
        updated = user.model_copy(
            update={"roles": list(dict.fromkeys(roles)), "updated_at": self._clock()}
        )
        self._users[user_id] = updated
        return RecordUpdated(record=updated.model_copy(deep=True))

    def clear(self) -> None:
        """Clear all users - useful for testing."""
        self._users.clear()

    def _resolve(self, user_id: int) -> User | None:
        if user_id in self._users:
            return self._users[user_id]
        if self._synthesize_missing and user_id > 0:
            user = synthesize_user(user_id)
            self._users[user_id] = user
            return user
        return None
