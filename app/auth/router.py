import logging
from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends, Request, Response

from app.auth.utils import create_token, decode_token
from app.config import settings
from app.deps import AdminServiceDep
from app.errors import Unauthorized
from app.models import Session
from app.schemas import LoginRequest, RegisterRequest, parse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


def _request_token(request: Request) -> str | None:
    header = request.headers.get("authorization")
    if header:
        scheme, _, credentials = header.partition(" ")
        if scheme.lower() == "bearer" and credentials.strip():
            return credentials.strip()
    return request.cookies.get(settings.cookie_name)


def authenticate(request: Request) -> Session | None:
    """Session carried by the request's signed token, if valid and unexpired."""
    token = _request_token(request)
    if not token:
        return None
    return decode_token(token)


def require_session(request: Request) -> Session:
    session = authenticate(request)
    if session is None:
        raise Unauthorized()
    return session


SessionDep = Annotated[Session, Depends(require_session)]


@router.post("/login")
def login(response: Response, admins: AdminServiceDep, payload: Any = Body(None)):
    credentials = parse(LoginRequest, payload)
    try:
        admin = admins.authenticate_credentials(credentials.email, credentials.password)
    except Unauthorized:
        logger.info("Failed login attempt")
        raise

    token, session = create_token(admin)
    response.set_cookie(
        settings.cookie_name,
        token,
        httponly=True,
        samesite="lax",
        max_age=settings.jwt_expire_minutes * 60,
    )
    logger.info(f"Admin {admin.id} logged in")
    return {"token": token, **session.to_dict()}


@router.post("/logout")
def logout(response: Response):
    # Tokens are stateless: this only drops the cookie, the token itself stays
    # valid until it expires.
    response.delete_cookie(settings.cookie_name)
    return {"success": True}


@router.get("/session")
def current_session(session: SessionDep):
    return session.to_dict()


@router.post("/register", status_code=201)
def register(
    request: Request,
    admins: AdminServiceDep,
    payload: Any = Body(None),
):
    session = authenticate(request)
    if session is None:
        raise Unauthorized("Unauthorized, you must be signed in as an admin")
    return admins.register(session, parse(RegisterRequest, payload))
