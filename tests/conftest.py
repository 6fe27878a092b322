from pathlib import Path

import pytest

from src.adapters.memory.repos import InMemoryUserRepo
from src.adapters.observability import RecordingObserver
from src.adapters.sqlite.migrator import SQLiteMigrator
from src.adapters.sqlite.repos import SQLiteUserRepo
from src.components.accounts import AccountService
from src.domain.entities import Actor, User
from src.domain.policy import PolicyEngine
from src.rules.loader import load_rules

PROJECT_ROOT = Path(__file__).resolve().parent.parent


@pytest.fixture
def rules():
    return load_rules(PROJECT_ROOT / "rules.yaml")


@pytest.fixture
def policy(rules):
    return PolicyEngine(rules)


@pytest.fixture
def admin_actor():
    return Actor(id="admin-1", roles=("admin",))


@pytest.fixture
def viewer_actor():
    return Actor(id="viewer-1", roles=("viewer",))


@pytest.fixture
def alice():
    return User(id=1, email="alice@example.com", display_name="Alice", roles=["viewer"])


@pytest.fixture
def observer():
    return RecordingObserver()


@pytest.fixture
def memory_repo(alice):
    return InMemoryUserRepo([alice], synthesize_missing=False)


@pytest.fixture
def service(memory_repo, policy, observer, rules):
    return AccountService(
        repo=memory_repo, policy=policy, observer=observer, capabilities=rules.capabilities
    )


@pytest.fixture
def db_path(tmp_path):
    path = str(tmp_path / "accounts.db")
    SQLiteMigrator(path, PROJECT_ROOT / "migrations").run_migrations()
    return path


@pytest.fixture
def sqlite_repo(db_path, alice):
    repo = SQLiteUserRepo(db_path)
    repo.save(alice)
    return repo
