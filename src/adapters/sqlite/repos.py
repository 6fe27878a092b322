import sqlite3
from collections.abc import Sequence
from datetime import UTC, datetime
from typing import Any

from src.components.accounts.models import (
    PersistenceInvariantViolation,
    RecordUpdated,
    StoreFailure,
    UpdateOutcome,
)
from src.domain.entities import RoleType, User


# Helper to convert sqlite rows to dicts
def dict_factory(cursor: sqlite3.Cursor, row: Any) -> dict[str, Any]:
    return {col[0]: row[idx] for idx, col in enumerate(cursor.description)}


class SQLiteUserRepo:
    """SQLite implementation of UserRepoPort.

    Every mutation runs in its own transaction: update, check the affected row
    count, re-read the row and commit. Anything but exactly one affected row is
    rolled back and reported as a PersistenceInvariantViolation.
    """

    def __init__(self, db_path: str):
        self.db_path = db_path

    def _get_conn(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = dict_factory
        conn.execute("PRAGMA foreign_keys = ON;")
        return conn

    def save(self, user: User) -> User:
        conn = self._get_conn()
        try:
            conn.execute(
                """
                INSERT INTO users (
                    id, email, display_name, locked, created_at, updated_at
                ) VALUES (?, ?, ?, ?, ?, ?)
                ON CONFLICT(id) DO UPDATE SET
                    email=excluded.email,
                    display_name=excluded.display_name,
                    locked=excluded.locked,
                    updated_at=excluded.updated_at
            """,
                (
                    user.id,
                    user.email,
                    user.display_name,
                    int(user.locked),
                    user.created_at.isoformat(),
                    user.updated_at.isoformat(),
                ),
            )
            self._replace_roles(conn, user.id, user.roles)
            conn.commit()
            return user
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    def get_by_id(self, user_id: int) -> User | None:
        conn = self._get_conn()
        try:
            return self._fetch(conn, user_id)
        finally:
            conn.close()

    def set_locked(self, user_id: int, locked: bool) -> UpdateOutcome:
        conn = self._get_conn()
        try:
            cursor = conn.execute(
                "UPDATE users SET locked = ?, updated_at = ? WHERE id = ?",
                (int(locked), datetime.now(UTC).isoformat(), user_id),
            )
            return self._finish(conn, "set_locked", user_id, cursor.rowcount)
        except sqlite3.Error as e:
            conn.rollback()
            return StoreFailure(operation="set_locked", record_id=user_id, detail=str(e))
        finally:
            conn.close()

    def set_roles(self, user_id: int, roles: Sequence[RoleType]) -> UpdateOutcome:
        conn = self._get_conn()
        try:
            cursor = conn.execute(
                "UPDATE users SET updated_at = ? WHERE id = ?",
                (datetime.now(UTC).isoformat(), user_id),
            )
            if cursor.rowcount == 1:
                self._replace_roles(conn, user_id, roles)
            return self._finish(conn, "set_roles", user_id, cursor.rowcount)
        except sqlite3.Error as e:
            conn.rollback()
            return StoreFailure(operation="set_roles", record_id=user_id, detail=str(e))
        finally:
            conn.close()

    def _finish(
        self, conn: sqlite3.Connection, operation: str, user_id: int, affected: int
    ) -> UpdateOutcome:
        if affected != 1:
            conn.rollback()
            return PersistenceInvariantViolation(
                operation=operation, record_id=user_id, affected_rows=affected
            )

        user = self._fetch(conn, user_id)
        if user is None:
            conn.rollback()
            return PersistenceInvariantViolation(
                operation=operation, record_id=user_id, affected_rows=0
            )

        conn.commit()
        return RecordUpdated(record=user)

    def _replace_roles(
        self, conn: sqlite3.Connection, user_id: int, roles: Sequence[RoleType]
    ) -> None:
        conn.execute("DELETE FROM role_assignments WHERE user_id = ?", (user_id,))
        conn.executemany(
            "INSERT INTO role_assignments (user_id, role) VALUES (?, ?)",
            [(user_id, role) for role in dict.fromkeys(roles)],
        )

    def _fetch(self, conn: sqlite3.Connection, user_id: int) -> User | None:
        row = conn.execute("SELECT * FROM users WHERE id = ?", (user_id,)).fetchone()
        if not row:
            return None

        role_rows = conn.execute(
            "SELECT role FROM role_assignments WHERE user_id = ? ORDER BY rowid",
            (user_id,),
        ).fetchall()

        return User(
            id=row["id"],
            email=row["email"],
            display_name=row["display_name"],
            roles=[r["role"] for r in role_rows],
            locked=bool(row["locked"]),
            created_at=datetime.fromisoformat(row["created_at"]),
            updated_at=datetime.fromisoformat(row["updated_at"]),
        )
