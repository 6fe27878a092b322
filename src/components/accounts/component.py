"""
Accounts component - Authorized account mutations.

Entry points take a typed input and an AccountService built by the
composition root, and return the result envelope unchanged.
"""

from __future__ import annotations

from src.domain.entities import UserView
from src.domain.result import Result

from ._impl import AccountService
from .models import LockUserInput, SetUserRolesInput, UnlockUserInput


def run_lock_user(inp: LockUserInput, service: AccountService) -> Result[UserView]:
    """Lock a user account (requires the lock capability)."""
    return service.lock_user(inp.actor, inp.user_id)


def run_unlock_user(inp: UnlockUserInput, service: AccountService) -> Result[UserView]:
    """Unlock a user account (requires the lock capability)."""
    return service.unlock_user(inp.actor, inp.user_id)


def run_set_user_roles(inp: SetUserRolesInput, service: AccountService) -> Result[UserView]:
    """Replace a user's roles (requires the role management capability)."""
    return service.set_user_roles(inp.actor, inp.user_id, inp.roles)
