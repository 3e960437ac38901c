"""Request-scoped access to the store and services.

The `Database` is created by `create_app` and kept on `app.state`; nothing
here reaches for a module-level connection.
"""

from typing import Annotated

from fastapi import Depends, Request

from app.admin.service import AdminService
from app.db import Database
from app.questions.service import QuestionService


def get_db(request: Request) -> Database:
    return request.app.state.db


def get_admin_service(db: Database = Depends(get_db)) -> AdminService:
    return AdminService(db)


def get_question_service(db: Database = Depends(get_db)) -> QuestionService:
    return QuestionService(db)


AdminServiceDep = Annotated[AdminService, Depends(get_admin_service)]
QuestionServiceDep = Annotated[QuestionService, Depends(get_question_service)]
