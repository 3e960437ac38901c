"""
Seed the database with a default admin and sample questions.

Usage:
    python -m app.seed [--database-url sqlite:///./data/soliton.db]

Environment:
    SEED_ADMIN_EMAIL, SEED_ADMIN_PASSWORD, SEED_ADMIN_NAME - default admin
    (admin@soliton.com / admin123 / Admin)

Safe to run repeatedly: the admin's name and password are refreshed, and
sample questions are only inserted when their fixed ids are missing.
"""

from __future__ import annotations

import argparse
import logging
import sys

from app.auth.utils import hash_password
from app.config import settings
from app.db import Database, generate_id, utcnow

logger = logging.getLogger(__name__)

C_MAIN = "#include <stdio.h>\n\nint main() {\n    // Write your code here\n    return 0;\n}"

SAMPLE_QUESTIONS = [
    {
        "id": "seed-q1-hello-world",
        "title": "Hello World",
        "description": (
            "## Hello World\n\nWrite a C program that prints `Hello, World!` to standard output."
        ),
        "difficulty": "EASY",
        "boilerplate_code": C_MAIN,
        "test_cases": [
            ("seed-tc1-hello-public", "", "Hello, World!\n", True, 1),
            ("seed-tc2-hello-private", "", "Hello, World!\n", False, 2),
        ],
    },
    {
        "id": "seed-q2-sum-two",
        "title": "Sum of Two Numbers",
        "description": (
            "## Sum of Two Numbers\n\nRead two integers from standard input and print their sum.\n\n"
            "### Input\nTwo space-separated integers `a` and `b` (`-10^9 <= a, b <= 10^9`).\n\n"
            "### Output\nA single integer, the sum of `a` and `b`."
        ),
        "difficulty": "EASY",
        "boilerplate_code": (
            "#include <stdio.h>\n\nint main() {\n    int a, b;\n"
            "    // Read input and print the sum\n    return 0;\n}"
        ),
        "test_cases": [
            ("seed-tc3-sum-pub1", "3 5\n", "8\n", True, 1),
            ("seed-tc4-sum-pub2", "-1 1\n", "0\n", True, 2),
            ("seed-tc5-sum-priv1", "0 0\n", "0\n", False, 3),
            ("seed-tc6-sum-priv2", "1000000000 1000000000\n", "2000000000\n", False, 4),
        ],
    },
    {
        "id": "seed-q3-reverse-array",
        "title": "Reverse an Array",
        "description": (
            "## Reverse an Array\n\nGiven an array of `n` integers, print them in reverse order.\n\n"
            "### Input\n- First line: integer `n` (1 <= n <= 10^5)\n"
            "- Second line: `n` space-separated integers\n\n"
            "### Output\nThe `n` integers in reverse order, space-separated."
        ),
        "difficulty": "MEDIUM",
        "boilerplate_code": (
            '#include <stdio.h>\n\nint main() {\n    int n;\n    scanf("%d", &n);\n'
            "    int arr[n];\n    for (int i = 0; i < n; i++) {\n"
            '        scanf("%d", &arr[i]);\n    }\n'
            "    // Reverse and print the array\n    return 0;\n}"
        ),
        "test_cases": [
            ("seed-tc7-rev-pub1", "5\n1 2 3 4 5\n", "5 4 3 2 1\n", True, 1),
            ("seed-tc8-rev-pub2", "1\n42\n", "42\n", True, 2),
            ("seed-tc9-rev-priv1", "3\n-1 0 1\n", "1 0 -1\n", False, 3),
            ("seed-tc10-rev-priv2", "6\n10 20 30 40 50 60\n", "60 50 40 30 20 10\n", False, 4),
        ],
    },
]


def seed_admin(db: Database, email: str, password: str, name: str) -> str:
    """Create the default admin, or refresh its name and password. Returns its id."""
    password_hash = hash_password(password)
    with db.connection() as conn:
        row = conn.execute("SELECT id FROM admins WHERE email = ?", (email,)).fetchone()
        if row:
            conn.execute(
                "UPDATE admins SET name = ?, password_hash = ? WHERE id = ?",
                (name, password_hash, row["id"]),
            )
            return row["id"]

        admin_id = generate_id()
        conn.execute(
            "INSERT INTO admins (id, email, name, password_hash, created_by, created_at) "
            "VALUES (?, ?, ?, ?, NULL, ?)",
            (admin_id, email, name, password_hash, utcnow()),
        )
        return admin_id


def seed_questions(db: Database, admin_id: str) -> int:
    """Insert missing sample questions. Returns how many were created."""
    created = 0
    with db.connection() as conn:
        for sample in SAMPLE_QUESTIONS:
            exists = conn.execute(
                "SELECT 1 FROM questions WHERE id = ?", (sample["id"],)
            ).fetchone()
            if exists:
                continue

            now = utcnow()
            conn.execute(
                """INSERT INTO questions
                   (id, title, description, difficulty, language, boilerplate_code,
                    created_by_id, created_at, updated_at)
                   VALUES (?, ?, ?, ?, 'C', ?, ?, ?, ?)""",
                (
                    sample["id"],
                    sample["title"],
                    sample["description"],
                    sample["difficulty"],
                    sample["boilerplate_code"],
                    admin_id,
                    now,
                    now,
                ),
            )
            conn.executemany(
                'INSERT INTO test_cases (id, question_id, input, output, is_public, "order") '
                "VALUES (?, ?, ?, ?, ?, ?)",
                [
                    (tc_id, sample["id"], tc_input, tc_output, int(is_public), order)
                    for tc_id, tc_input, tc_output, is_public, order in sample["test_cases"]
                ],
            )
            created += 1
    return created


def seed(db: Database) -> tuple[str, int]:
    db.init()
    admin_id = seed_admin(
        db,
        settings.seed_admin_email,
        settings.seed_admin_password,
        settings.seed_admin_name,
    )
    created = seed_questions(db, admin_id)
    logger.info(f"Seeded admin {settings.seed_admin_email} (id: {admin_id}), {created} new questions")
    return admin_id, created


def main() -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[1])
    parser.add_argument(
        "--database-url",
        default=settings.database_url,
        help="SQLite URL to seed (default: DATABASE_URL setting)",
    )
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    try:
        seed(Database.from_url(args.database_url))
    except Exception as e:
        logger.error(f"Seed failed: {e}")
        return 1

    print(f"Admin login: {settings.seed_admin_email} / {settings.seed_admin_password}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
