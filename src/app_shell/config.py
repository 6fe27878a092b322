import logging
import os
from pathlib import Path
from typing import Literal, cast

from src.rules.models import Rules

logger = logging.getLogger(__name__)

StoreBackend = Literal["sqlite", "memory"]
STORE_BACKENDS: tuple[StoreBackend, ...] = ("sqlite", "memory")


class ConfigurationError(RuntimeError):
    """Raised when configuration values are invalid or missing."""


class Settings:
    """Process-wide settings read from ACCOUNTS_* environment variables."""

    def __init__(self) -> None:
        self.base_dir = Path(os.getcwd())
        self.data_dir = Path(os.environ.get("ACCOUNTS_DATA_DIR", "./data"))
        self.db_path = str(self.data_dir / "accounts.db")
        self.migrations_dir = Path(
            os.environ.get("ACCOUNTS_MIGRATIONS_DIR", str(self.base_dir / "migrations"))
        )
        self.rules_path = Path(
            os.environ.get("ACCOUNTS_RULES_PATH", str(self.base_dir / "rules.yaml"))
        )
        self.store_backend = parse_store_backend(
            os.environ.get("ACCOUNTS_STORE_BACKEND", "sqlite")
        )
        self.log_level = os.environ.get("ACCOUNTS_LOG_LEVEL", "INFO").upper()


def parse_store_backend(value: str) -> StoreBackend:
    backend = value.strip().lower()
    if backend not in STORE_BACKENDS:
        raise ConfigurationError(
            f"ACCOUNTS_STORE_BACKEND must be one of {', '.join(STORE_BACKENDS)}, got {value!r}"
        )
    return cast(StoreBackend, backend)


def validate_ops_rules(rules: Rules) -> None:
    """
    Validate operational requirements before startup.
    """
    missing = [name for name in rules.ops.required_env if not os.environ.get(name, "").strip()]
    if missing:
        raise ConfigurationError(
            f"Missing required environment variables: {', '.join(sorted(missing))}"
        )

    if rules.ops.system_actor_role not in rules.rbac.roles:
        raise ConfigurationError(
            f"ops.system_actor_role {rules.ops.system_actor_role!r} is not a known role"
        )

    logger.info("Configuration validated")


def configure_logging(level: str | int = logging.INFO, *, force: bool = False) -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        force=force,
    )
