import sqlite3

from src.adapters.sqlite.repos import SQLiteUserRepo
from src.components.accounts import PersistenceInvariantViolation, RecordUpdated, StoreFailure
from src.domain.entities import User


def test_save_and_get_user(sqlite_repo, alice):
    fetched = sqlite_repo.get_by_id(1)

    assert fetched is not None
    assert fetched.email == "alice@example.com"
    assert fetched.display_name == "Alice"
    assert fetched.roles == ["viewer"]
    assert fetched.locked is False
    assert fetched.created_at == alice.created_at


def test_get_missing_user(sqlite_repo):
    assert sqlite_repo.get_by_id(999) is None


def test_set_locked_returns_post_update_record(sqlite_repo, alice):
    outcome = sqlite_repo.set_locked(1, True)

    assert isinstance(outcome, RecordUpdated)
    assert outcome.record.locked is True
    assert outcome.record.updated_at >= alice.updated_at
    assert sqlite_repo.get_by_id(1).locked is True


def test_set_locked_zero_rows(sqlite_repo):
    outcome = sqlite_repo.set_locked(999, True)

    assert outcome == PersistenceInvariantViolation(
        operation="set_locked", record_id=999, affected_rows=0
    )


def test_set_roles_replaces_assignments(sqlite_repo):
    outcome = sqlite_repo.set_roles(1, ["support", "admin", "support"])

    assert isinstance(outcome, RecordUpdated)
    assert outcome.record.roles == ["support", "admin"]
    assert sqlite_repo.get_by_id(1).roles == ["support", "admin"]


def test_set_roles_missing_user_leaves_no_assignments(sqlite_repo, db_path):
    outcome = sqlite_repo.set_roles(42, ["admin"])

    assert isinstance(outcome, PersistenceInvariantViolation)
    conn = sqlite3.connect(db_path)
    count = conn.execute(
        "SELECT COUNT(*) FROM role_assignments WHERE user_id = 42"
    ).fetchone()[0]
    conn.close()
    assert count == 0


def test_multi_row_update_rolls_back(tmp_path):
    # A schema without a unique id lets the update match more than one row
    db_path = str(tmp_path / "broken.db")
    conn = sqlite3.connect(db_path)
    conn.executescript(
        """
        CREATE TABLE users (
            id INTEGER, email TEXT, display_name TEXT, locked INTEGER,
            created_at TEXT, updated_at TEXT
        );
        CREATE TABLE role_assignments (user_id INTEGER, role TEXT);
        INSERT INTO users VALUES (1, 'a@x', 'A', 0, '2025-01-01T00:00:00', '2025-01-01T00:00:00');
        INSERT INTO users VALUES (1, 'b@x', 'B', 0, '2025-01-01T00:00:00', '2025-01-01T00:00:00');
        """
    )
    conn.commit()
    conn.close()

    outcome = SQLiteUserRepo(db_path).set_locked(1, True)

    assert outcome == PersistenceInvariantViolation(
        operation="set_locked", record_id=1, affected_rows=2
    )
    conn = sqlite3.connect(db_path)
    locked = [r[0] for r in conn.execute("SELECT locked FROM users")]
    conn.close()
    assert locked == [0, 0]


def test_driver_error_becomes_store_failure(tmp_path):
    # No migrations applied: the users table does not exist
    repo = SQLiteUserRepo(str(tmp_path / "empty.db"))

    outcome = repo.set_locked(1, True)

    assert isinstance(outcome, StoreFailure)
    assert outcome.operation == "set_locked"
    assert "no such table" in outcome.detail


def test_update_existing_user(sqlite_repo):
    user = User(id=2, email="bob@example.com", display_name="Old")
    sqlite_repo.save(user)

    user.display_name = "New"
    user.roles = ["admin"]
    sqlite_repo.save(user)

    fetched = sqlite_repo.get_by_id(2)
    assert fetched.display_name == "New"
    assert fetched.roles == ["admin"]
