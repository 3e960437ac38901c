from typing import Any

from fastapi import APIRouter, Body, Request

from app.auth.router import SessionDep
from app.deps import QuestionServiceDep
from app.schemas import ListQuestionsQuery, QuestionCreate, QuestionUpdate, parse

router = APIRouter(prefix="/questions", tags=["questions"])


@router.get("")
def list_questions(request: Request, session: SessionDep, questions: QuestionServiceDep):
    # Empty query values count as absent
    params = {key: value for key, value in request.query_params.items() if value}
    query = parse(ListQuestionsQuery, params, "Invalid query parameters")
    return questions.list_questions(query)


@router.post("", status_code=201)
def create_question(session: SessionDep, questions: QuestionServiceDep, payload: Any = Body(None)):
    data = parse(QuestionCreate, payload)
    return questions.create_question(session.admin_id, data).to_dict()


@router.get("/{question_id}")
def get_question(question_id: str, session: SessionDep, questions: QuestionServiceDep):
    return questions.get_question(question_id).to_dict()


@router.put("/{question_id}")
def update_question(
    question_id: str,
    session: SessionDep,
    questions: QuestionServiceDep,
    payload: Any = Body(None),
):
    data = parse(QuestionUpdate, payload)
    return questions.update_question(question_id, data).to_dict()


@router.delete("/{question_id}")
def delete_question(question_id: str, session: SessionDep, questions: QuestionServiceDep):
    return questions.delete_question(question_id)
