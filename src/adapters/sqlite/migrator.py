import logging
import sqlite3
from pathlib import Path

logger = logging.getLogger(__name__)


class SQLiteMigrator:
    """Applies ``*.sql`` files from a directory in filename order, once each."""

    def __init__(self, db_path: str, migrations_dir: str | Path):
        self.db_path = db_path
        self.migrations_dir = Path(migrations_dir)

    def _get_connection(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path)
        conn.execute("PRAGMA foreign_keys = ON;")
        return conn

    def _ensure_migration_table(self, conn: sqlite3.Connection) -> None:
        conn.execute("""
            CREATE TABLE IF NOT EXISTS _migrations (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                filename TEXT UNIQUE NOT NULL,
                applied_at DATETIME DEFAULT CURRENT_TIMESTAMP
            );
        """)

    def pending(self) -> list[str]:
        conn = self._get_connection()
        try:
            self._ensure_migration_table(conn)
            applied = {row[0] for row in conn.execute("SELECT filename FROM _migrations")}
        finally:
            conn.close()
        return [name for name in self._migration_files() if name not in applied]

    def run_migrations(self) -> list[str]:
        """Apply all pending migrations. Returns the filenames applied."""
        to_apply = self.pending()
        conn = self._get_connection()
        try:
            for filename in to_apply:
                logger.info("Applying migration: %s", filename)
                self._apply_migration(conn, filename)
        finally:
            conn.close()

        logger.info("Migrations up to date (%d applied)", len(to_apply))
        return to_apply

    def _migration_files(self) -> list[str]:
        if not self.migrations_dir.is_dir():
            raise FileNotFoundError(f"Migrations directory not found: {self.migrations_dir}")
        return sorted(p.name for p in self.migrations_dir.glob("*.sql"))

    def _read_up_script(self, filename: str) -> str:
        content = (self.migrations_dir / filename).read_text()
        # Only the part before "-- Down" is applied
        return content.split("-- Down")[0]

    def _apply_migration(self, conn: sqlite3.Connection, filename: str) -> None:
        script = self._read_up_script(filename)
        try:
            conn.executescript(script)
            conn.execute("INSERT INTO _migrations (filename) VALUES (?)", (filename,))
            conn.commit()
        except sqlite3.Error as e:
            conn.rollback()
            raise RuntimeError(f"Migration {filename} failed: {e}") from e
