import logging
import secrets
import sqlite3
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path

logger = logging.getLogger(__name__)

SQLITE_URL_PREFIX = "sqlite:///"

SCHEMA = """
    CREATE TABLE IF NOT EXISTS admins (
        id TEXT PRIMARY KEY,
        email TEXT UNIQUE NOT NULL,
        name TEXT NOT NULL,
        password_hash TEXT NOT NULL,
        created_by TEXT,
        created_at TEXT NOT NULL,
        FOREIGN KEY (created_by) REFERENCES admins(id)
    );

    CREATE TABLE IF NOT EXISTS questions (
        id TEXT PRIMARY KEY,
        title TEXT NOT NULL,
        description TEXT NOT NULL,
        difficulty TEXT NOT NULL DEFAULT 'MEDIUM'
            CHECK (difficulty IN ('EASY', 'MEDIUM', 'HARD')),
        language TEXT NOT NULL DEFAULT 'C'
            CHECK (language IN ('C', 'CPP')),
        boilerplate_code TEXT,
        created_by_id TEXT NOT NULL,
        created_at TEXT NOT NULL,
        updated_at TEXT NOT NULL,
        FOREIGN KEY (created_by_id) REFERENCES admins(id)
    );

    CREATE INDEX IF NOT EXISTS idx_questions_created_at ON questions(created_at);

    CREATE TABLE IF NOT EXISTS test_cases (
        id TEXT PRIMARY KEY,
        question_id TEXT NOT NULL,
        input TEXT NOT NULL DEFAULT '',
        output TEXT NOT NULL,
        is_public INTEGER NOT NULL DEFAULT 0,
        "order" INTEGER NOT NULL DEFAULT 0,
        FOREIGN KEY (question_id) REFERENCES questions(id) ON DELETE CASCADE
    );

    CREATE INDEX IF NOT EXISTS idx_test_cases_question_id ON test_cases(question_id);
"""


def generate_id() -> str:
    """Generate a random primary key for admins, questions and test cases."""
    return secrets.token_hex(12)


def utcnow() -> str:
    """Current UTC time as an ISO-8601 string that sorts chronologically."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _casefold(value):
    return value.casefold() if value is not None else None


class Database:
    """SQLite store shared by every service.

    Created once per process, initialized at startup and handed to the
    services explicitly. Each `connection()` block is one unit of work:
    committed when the block exits normally, rolled back on any exception.
    """

    def __init__(self, path: str | Path):
        self.path = Path(path)

    @classmethod
    def from_url(cls, url: str) -> "Database":
        if not url.startswith(SQLITE_URL_PREFIX):
            raise ValueError(f"Unsupported database URL: {url}")
        return cls(url[len(SQLITE_URL_PREFIX):])

    def init(self) -> None:
        """Create tables if they don't exist."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self.connection() as conn:
            conn.executescript(SCHEMA)
        logger.info("Database ready at %s", self.path)

    def dispose(self) -> None:
        # Connections are closed per unit of work; nothing is held open.
        logger.info("Database at %s disposed", self.path)

    @contextmanager
    def connection(self):
        conn = sqlite3.connect(self.path)
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA foreign_keys = ON")
        conn.create_function("casefold", 1, _casefold, deterministic=True)
        try:
            yield conn
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()
