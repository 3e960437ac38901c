"""Questions and their test cases.

A question owns its test cases: deleting the question deletes them, and an
update that carries `testCases` swaps the whole set in one transaction so no
reader ever sees a question without test cases.
"""

import logging
import math
import sqlite3

from app.db import Database, generate_id, utcnow
from app.errors import NotFound
from app.models import Question, TestCase
from app.schemas import ListQuestionsQuery, QuestionCreate, QuestionUpdate, TestCaseIn

logger = logging.getLogger(__name__)

QUESTION_NOT_FOUND = "Question not found"

# Columns a partial update may touch
UPDATABLE_FIELDS = ("title", "description", "difficulty", "language", "boilerplate_code")


def _test_case_from_row(row: sqlite3.Row) -> TestCase:
    return TestCase(
        id=row["id"],
        question_id=row["question_id"],
        input=row["input"],
        output=row["output"],
        is_public=bool(row["is_public"]),
        order=row["order"],
    )


def _question_from_row(row: sqlite3.Row, test_cases: list[TestCase]) -> Question:
    return Question(
        id=row["id"],
        title=row["title"],
        description=row["description"],
        difficulty=row["difficulty"],
        language=row["language"],
        boilerplate_code=row["boilerplate_code"],
        created_by_id=row["created_by_id"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
        test_cases=test_cases,
    )


def _insert_test_cases(conn: sqlite3.Connection, question_id: str, test_cases: list[TestCaseIn]) -> None:
    """Insert test cases; a missing `order` falls back to the list position."""
    conn.executemany(
        'INSERT INTO test_cases (id, question_id, input, output, is_public, "order") '
        "VALUES (?, ?, ?, ?, ?, ?)",
        [
            (
                generate_id(),
                question_id,
                tc.input,
                tc.output,
                int(tc.is_public),
                tc.order if tc.order is not None else index,
            )
            for index, tc in enumerate(test_cases)
        ],
    )


def _fetch_question(conn: sqlite3.Connection, question_id: str) -> Question | None:
    row = conn.execute("SELECT * FROM questions WHERE id = ?", (question_id,)).fetchone()
    if not row:
        return None
    tc_rows = conn.execute(
        'SELECT * FROM test_cases WHERE question_id = ? ORDER BY "order" ASC, rowid ASC',
        (question_id,),
    ).fetchall()
    return _question_from_row(row, [_test_case_from_row(r) for r in tc_rows])


class QuestionService:
    def __init__(self, db: Database):
        self.db = db

    def list_questions(self, query: ListQuestionsQuery) -> dict:
        clauses = []
        params: list = []
        if query.difficulty:
            clauses.append("q.difficulty = ?")
            params.append(query.difficulty.value)
        if query.language:
            clauses.append("q.language = ?")
            params.append(query.language.value)
        if query.search:
            clauses.append(
                "(instr(casefold(q.title), ?) > 0 OR instr(casefold(q.description), ?) > 0)"
            )
            needle = query.search.casefold()
            params.extend([needle, needle])
        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""
        offset = (query.page - 1) * query.limit

        with self.db.connection() as conn:
            total = conn.execute(f"SELECT COUNT(*) FROM questions q {where}", params).fetchone()[0]
            rows = conn.execute(
                f"""SELECT q.id, q.title, q.difficulty, q.language, q.created_at, q.updated_at,
                    (SELECT COUNT(*) FROM test_cases t WHERE t.question_id = q.id) AS test_case_count
                FROM questions q
                {where}
                ORDER BY q.created_at DESC, q.rowid DESC
                LIMIT ? OFFSET ?""",
                [*params, query.limit, offset],
            ).fetchall()

        return {
            "questions": [
                {
                    "id": row["id"],
                    "title": row["title"],
                    "difficulty": row["difficulty"],
                    "language": row["language"],
                    "createdAt": row["created_at"],
                    "updatedAt": row["updated_at"],
                    "testCaseCount": row["test_case_count"],
                }
                for row in rows
            ],
            "pagination": {
                "total": total,
                "page": query.page,
                "limit": query.limit,
                "totalPages": math.ceil(total / query.limit),
            },
        }

    def create_question(self, admin_id: str, payload: QuestionCreate) -> Question:
        question_id = generate_id()
        now = utcnow()
        with self.db.connection() as conn:
            conn.execute(
                """INSERT INTO questions
                   (id, title, description, difficulty, language, boilerplate_code,
                    created_by_id, created_at, updated_at)
                   VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)""",
                (
                    question_id,
                    payload.title,
                    payload.description,
                    payload.difficulty.value,
                    payload.language.value,
                    payload.boilerplate_code,
                    admin_id,
                    now,
                    now,
                ),
            )
            _insert_test_cases(conn, question_id, payload.test_cases)
            question = _fetch_question(conn, question_id)

        logger.info(
            f"Question {question_id} created by {admin_id} with {len(payload.test_cases)} test cases"
        )
        return question

    def get_question(self, question_id: str) -> Question:
        with self.db.connection() as conn:
            question = _fetch_question(conn, question_id)
        if not question:
            raise NotFound(QUESTION_NOT_FOUND)
        return question

    def update_question(self, question_id: str, payload: QuestionUpdate) -> Question:
        changes = {k: v for k, v in payload.field_changes().items() if k in UPDATABLE_FIELDS}
        changes["updated_at"] = utcnow()
        assignments = ", ".join(f"{column} = ?" for column in changes)

        # One unit of work: any failure below rolls back the field changes and
        # the test case deletion together. The UPDATE is also the existence check.
        with self.db.connection() as conn:
            cursor = conn.execute(
                f"UPDATE questions SET {assignments} WHERE id = ?",
                [*changes.values(), question_id],
            )
            if cursor.rowcount == 0:
                raise NotFound(QUESTION_NOT_FOUND)

            if payload.test_cases is not None:
                conn.execute("DELETE FROM test_cases WHERE question_id = ?", (question_id,))
                _insert_test_cases(conn, question_id, payload.test_cases)

            question = _fetch_question(conn, question_id)

        if payload.test_cases is not None:
            logger.info(f"Question {question_id} updated, {len(payload.test_cases)} test cases replaced")
        else:
            logger.info(f"Question {question_id} updated: {', '.join(sorted(changes))}")
        return question

    def delete_question(self, question_id: str) -> dict:
        with self.db.connection() as conn:
            cursor = conn.execute("DELETE FROM questions WHERE id = ?", (question_id,))
            if cursor.rowcount == 0:
                raise NotFound(QUESTION_NOT_FOUND)

        logger.info(f"Question {question_id} deleted")
        return {"success": True}
