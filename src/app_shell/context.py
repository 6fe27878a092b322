from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from src.adapters.memory.repos import InMemoryUserRepo
from src.adapters.observability import LoggingObserver
from src.adapters.sqlite.migrator import SQLiteMigrator
from src.adapters.sqlite.repos import SQLiteUserRepo
from src.app_shell.config import Settings, StoreBackend
from src.components.accounts import AccountService, ObserverPort, UserRepoPort
from src.domain.policy import PolicyEngine
from src.rules.models import Rules

logger = logging.getLogger(__name__)


def build_user_repo(
    backend: StoreBackend, db_path: str, migrations_dir: Path | None = None
) -> UserRepoPort:
    """Pick the user repository adapter once, at process start."""
    if backend == "memory":
        logger.info("Using in-memory user repository")
        return InMemoryUserRepo()

    Path(db_path).parent.mkdir(parents=True, exist_ok=True)
    if migrations_dir is not None:
        SQLiteMigrator(db_path, migrations_dir).run_migrations()
    logger.info("Using SQLite user repository at %s", db_path)
    return SQLiteUserRepo(db_path)


@dataclass
class ServiceContext:
    user_repo: UserRepoPort
    policy: PolicyEngine
    observer: ObserverPort
    account_service: AccountService
    rules: Rules

    @classmethod
    def create(
        cls,
        settings: Settings,
        rules: Rules,
        *,
        user_repo: UserRepoPort | None = None,
        observer: ObserverPort | None = None,
    ) -> ServiceContext:
        if user_repo is None:
            user_repo = build_user_repo(
                settings.store_backend, settings.db_path, settings.migrations_dir
            )
        observer = observer or LoggingObserver()
        policy = PolicyEngine(rules)
        account_service = AccountService(
            repo=user_repo,
            policy=policy,
            observer=observer,
            capabilities=rules.capabilities,
        )
        return cls(
            user_repo=user_repo,
            policy=policy,
            observer=observer,
            account_service=account_service,
            rules=rules,
        )
