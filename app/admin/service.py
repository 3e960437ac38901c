"""Admin accounts and dashboard statistics."""

import logging
import sqlite3

from app.auth.utils import hash_password, verify_password
from app.db import Database, generate_id, utcnow
from app.errors import Conflict, Unauthorized
from app.models import Admin, Difficulty, Session
from app.schemas import RegisterRequest

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid email or password"
RECENT_QUESTIONS_LIMIT = 5


def admin_from_row(row: sqlite3.Row) -> Admin:
    return Admin(
        id=row["id"],
        email=row["email"],
        name=row["name"],
        password_hash=row["password_hash"],
        created_by=row["created_by"],
        created_at=row["created_at"],
    )


class AdminService:
    def __init__(self, db: Database):
        self.db = db

    def get_by_email(self, email: str) -> Admin | None:
        with self.db.connection() as conn:
            row = conn.execute("SELECT * FROM admins WHERE email = ?", (email,)).fetchone()
        return admin_from_row(row) if row else None

    def authenticate_credentials(self, email: str, password: str) -> Admin:
        """Return the admin owning these credentials.

        Unknown email and wrong password fail identically so callers cannot
        probe which emails are registered.
        """
        admin = self.get_by_email(email)
        if not admin or not verify_password(password, admin.password_hash):
            raise Unauthorized(INVALID_CREDENTIALS)
        return admin

    def create_admin(self, name: str, email: str, password: str, created_by: str | None = None) -> Admin:
        admin = Admin(
            id=generate_id(),
            email=email,
            name=name,
            password_hash=hash_password(password),
            created_by=created_by,
            created_at=utcnow(),
        )
        with self.db.connection() as conn:
            conn.execute(
                "INSERT INTO admins (id, email, name, password_hash, created_by, created_at) "
                "VALUES (?, ?, ?, ?, ?, ?)",
                (
                    admin.id,
                    admin.email,
                    admin.name,
                    admin.password_hash,
                    admin.created_by,
                    admin.created_at,
                ),
            )
        return admin

    def register(self, session: Session | None, payload: RegisterRequest) -> dict:
        if session is None:
            raise Unauthorized("Unauthorized, you must be signed in as an admin")

        # Check and insert are separate statements; two concurrent registrations
        # of the same email can both pass the check.
        if self.get_by_email(payload.email):
            raise Conflict("An admin with this email already exists")

        admin = self.create_admin(
            payload.name, payload.email, payload.password, created_by=session.admin_id
        )
        logger.info(f"Admin {admin.id} registered by {session.admin_id}")
        return {
            "id": admin.id,
            "name": admin.name,
            "email": admin.email,
            "createdAt": admin.created_at,
        }

    def list_admins(self) -> dict:
        with self.db.connection() as conn:
            rows = conn.execute(
                "SELECT * FROM admins ORDER BY created_at ASC, rowid ASC"
            ).fetchall()
        return {"admins": [admin_from_row(row).to_public_dict() for row in rows]}

    def get_dashboard_stats(self) -> dict:
        with self.db.connection() as conn:
            total_questions = conn.execute("SELECT COUNT(*) FROM questions").fetchone()[0]
            total_test_cases = conn.execute("SELECT COUNT(*) FROM test_cases").fetchone()[0]
            total_admins = conn.execute("SELECT COUNT(*) FROM admins").fetchone()[0]

            by_difficulty = conn.execute(
                "SELECT difficulty, COUNT(*) AS count FROM questions GROUP BY difficulty"
            ).fetchall()

            recent = conn.execute(
                """SELECT id, title, difficulty, language, created_at
                FROM questions
                ORDER BY created_at DESC, rowid DESC
                LIMIT ?""",
                (RECENT_QUESTIONS_LIMIT,),
            ).fetchall()

        difficulty_counts = {d.value: 0 for d in Difficulty}
        for row in by_difficulty:
            difficulty_counts[row["difficulty"]] = row["count"]

        return {
            "totalQuestions": total_questions,
            "totalTestCases": total_test_cases,
            "totalAdmins": total_admins,
            "questionsByDifficulty": difficulty_counts,
            "recentQuestions": [
                {
                    "id": row["id"],
                    "title": row["title"],
                    "difficulty": row["difficulty"],
                    "language": row["language"],
                    "createdAt": row["created_at"],
                }
                for row in recent
            ],
        }
