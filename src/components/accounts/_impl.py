"""
AccountService - Authorized mutations on user accounts.

Each operation checks the policy, makes exactly one repository call and
collapses every repository failure into INTERNAL_ERROR after recording it.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import Any

from src.domain.entities import Actor, RoleType, UserView
from src.domain.result import ErrorKind, Result, failure, success
from src.rules.models import CapabilityRules

from .models import RecordUpdated, UpdateOutcome
from .ports import ObserverPort, PolicyPort, UserRepoPort

logger = logging.getLogger(__name__)


class AccountService:
    def __init__(
        self,
        repo: UserRepoPort,
        policy: PolicyPort,
        observer: ObserverPort,
        capabilities: CapabilityRules | None = None,
    ) -> None:
        self.repo = repo
        self.policy = policy
        self.observer = observer
        self.capabilities = capabilities or CapabilityRules()

    def lock_user(self, actor: Actor | None, user_id: int) -> Result[UserView]:
        return self._mutate(
            "lock_user",
            actor,
            self.capabilities.lock_user,
            {"user_id": user_id},
            lambda: self.repo.set_locked(user_id, True),
        )

    def unlock_user(self, actor: Actor | None, user_id: int) -> Result[UserView]:
        return self._mutate(
            "unlock_user",
            actor,
            self.capabilities.unlock_user,
            {"user_id": user_id},
            lambda: self.repo.set_locked(user_id, False),
        )

    def set_user_roles(
        self, actor: Actor | None, user_id: int, roles: tuple[RoleType, ...]
    ) -> Result[UserView]:
        return self._mutate(
            "set_user_roles",
            actor,
            self.capabilities.set_user_roles,
            {"user_id": user_id, "roles": list(roles)},
            lambda: self.repo.set_roles(user_id, roles),
        )

    def _mutate(
        self,
        operation: str,
        actor: Actor | None,
        capability: str,
        arguments: Mapping[str, Any],
        call: Callable[[], UpdateOutcome],
    ) -> Result[UserView]:
        if not self.policy.is_authorized(actor, capability):
            logger.info(
                "Denied %s for actor %s (requires %s)",
                operation,
                actor.id if actor is not None else "anonymous",
                capability,
            )
            return failure(ErrorKind.NOT_AUTHORIZED)

        try:
            outcome = call()
        except Exception as e:
            self._record(operation, actor, arguments, f"{type(e).__name__}: {e}")
            return failure(ErrorKind.INTERNAL_ERROR)

        if isinstance(outcome, RecordUpdated):
            return success(UserView.from_user(outcome.record))

        self._record(operation, actor, arguments, outcome.describe())
        return failure(ErrorKind.INTERNAL_ERROR)

    def _record(
        self,
        operation: str,
        actor: Actor | None,
        arguments: Mapping[str, Any],
        error: str,
    ) -> None:
        context = {
            "operation": operation,
            "actor_id": actor.id if actor is not None else None,
            "arguments": dict(arguments),
        }
        try:
            self.observer.record_failure(f"{operation} failed", error, context)
        except Exception:
            logger.exception("Observer raised while recording %s failure", operation)
