from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional


class Difficulty(str, Enum):
    EASY = "EASY"
    MEDIUM = "MEDIUM"
    HARD = "HARD"


class Language(str, Enum):
    C = "C"
    CPP = "CPP"


@dataclass
class Admin:
    id: str
    email: str
    name: str
    password_hash: str
    created_by: Optional[str]
    created_at: str

    def to_public_dict(self) -> dict:
        """Admin fields safe to send to a client (no password hash)."""
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "createdAt": self.created_at,
            "createdBy": self.created_by,
        }


@dataclass
class TestCase:
    __test__ = False  # not a pytest class

    id: str
    question_id: str
    input: str
    output: str
    is_public: bool
    order: int

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "questionId": self.question_id,
            "input": self.input,
            "output": self.output,
            "isPublic": self.is_public,
            "order": self.order,
        }


@dataclass
class Question:
    id: str
    title: str
    description: str
    difficulty: str
    language: str
    boilerplate_code: Optional[str]
    created_by_id: str
    created_at: str
    updated_at: str
    test_cases: list[TestCase] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "difficulty": self.difficulty,
            "language": self.language,
            "boilerplateCode": self.boilerplate_code,
            "createdById": self.created_by_id,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
            "testCases": [tc.to_dict() for tc in self.test_cases],
        }


@dataclass
class Session:
    """Authenticated admin, decoded from a signed token. Never persisted."""

    admin_id: str
    email: str
    name: str
    expires_at: datetime

    def to_dict(self) -> dict:
        return {
            "admin": {"id": self.admin_id, "email": self.email, "name": self.name},
            "expiresAt": self.expires_at.isoformat(),
        }
