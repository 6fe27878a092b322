from pathlib import Path

import pytest

from src.adapters.memory.repos import InMemoryUserRepo
from src.adapters.sqlite.repos import SQLiteUserRepo
from src.app_shell.config import (
    ConfigurationError,
    Settings,
    parse_store_backend,
    validate_ops_rules,
)
from src.app_shell.context import ServiceContext, build_user_repo
from src.rules.models import OpsRules, RbacRules

PROJECT_ROOT = Path(__file__).resolve().parents[2]


def test_settings_defaults(monkeypatch):
    for name in ("ACCOUNTS_DATA_DIR", "ACCOUNTS_STORE_BACKEND", "ACCOUNTS_RULES_PATH"):
        monkeypatch.delenv(name, raising=False)

    settings = Settings()

    assert settings.store_backend == "sqlite"
    assert settings.db_path.endswith("accounts.db")
    assert settings.rules_path.name == "rules.yaml"


def test_settings_reads_environment(monkeypatch, tmp_path):
    monkeypatch.setenv("ACCOUNTS_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("ACCOUNTS_STORE_BACKEND", " Memory ")

    settings = Settings()

    assert settings.store_backend == "memory"
    assert settings.db_path == str(tmp_path / "accounts.db")


def test_invalid_backend_rejected():
    with pytest.raises(ConfigurationError):
        parse_store_backend("postgres")


def test_validate_ops_rules_missing_env(rules, monkeypatch):
    monkeypatch.delenv("ACCOUNTS_TEST_REQUIRED", raising=False)
    strict = rules.model_copy(update={"ops": OpsRules(required_env=["ACCOUNTS_TEST_REQUIRED"])})

    with pytest.raises(ConfigurationError, match="ACCOUNTS_TEST_REQUIRED"):
        validate_ops_rules(strict)

    monkeypatch.setenv("ACCOUNTS_TEST_REQUIRED", "yes")
    validate_ops_rules(strict)


def test_validate_ops_rules_unconfigured_system_role(rules):
    bad = rules.model_copy(
        update={
            "rbac": RbacRules(roles={"owner": ["*"]}),
            "ops": OpsRules(system_actor_role="support"),
        }
    )

    with pytest.raises(ConfigurationError):
        validate_ops_rules(bad)


def test_build_user_repo_memory(tmp_path):
    repo = build_user_repo("memory", str(tmp_path / "unused.db"))

    assert isinstance(repo, InMemoryUserRepo)
    assert not (tmp_path / "unused.db").exists()


def test_build_user_repo_sqlite_runs_migrations(tmp_path):
    db_path = str(tmp_path / "nested" / "accounts.db")

    repo = build_user_repo("sqlite", db_path, PROJECT_ROOT / "migrations")

    assert isinstance(repo, SQLiteUserRepo)
    assert repo.get_by_id(1) is None


def test_context_selects_adapter_from_settings(rules, monkeypatch, tmp_path):
    monkeypatch.setenv("ACCOUNTS_STORE_BACKEND", "memory")
    monkeypatch.setenv("ACCOUNTS_DATA_DIR", str(tmp_path))

    ctx = ServiceContext.create(Settings(), rules)

    assert isinstance(ctx.user_repo, InMemoryUserRepo)
    assert ctx.account_service.repo is ctx.user_repo
    assert ctx.account_service.policy is ctx.policy
