"""
Accounts component - Authorized mutations on user accounts.

Invariants:
- Denied requests never reach the repository
- Exactly one repository call per authorized request, never retried
- Repository failures surface only as INTERNAL_ERROR
"""

from ._impl import AccountService
from .component import (
    run_lock_user,
    run_set_user_roles,
    run_unlock_user,
)
from .models import (
    LockUserInput,
    PersistenceInvariantViolation,
    RecordUpdated,
    SetUserRolesInput,
    StoreFailure,
    UnlockUserInput,
    UpdateOutcome,
)
from .ports import ObserverPort, PolicyPort, UserRepoPort

__all__ = [
    # Entry points
    "run_lock_user",
    "run_unlock_user",
    "run_set_user_roles",
    # Input models
    "LockUserInput",
    "UnlockUserInput",
    "SetUserRolesInput",
    # Repository outcomes
    "RecordUpdated",
    "PersistenceInvariantViolation",
    "StoreFailure",
    "UpdateOutcome",
    # Ports
    "UserRepoPort",
    "PolicyPort",
    "ObserverPort",
    # Service
    "AccountService",
]
