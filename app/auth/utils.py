from datetime import datetime, timedelta, timezone

import bcrypt
from jose import JWTError, jwt

from app.config import settings
from app.models import Admin, Session

# bcrypt only looks at the first 72 bytes and newer releases refuse longer input
BCRYPT_MAX_BYTES = 72


def _password_bytes(password: str) -> bytes:
    return password.encode()[:BCRYPT_MAX_BYTES]


def hash_password(password: str) -> str:
    salt = bcrypt.gensalt(rounds=settings.bcrypt_rounds)
    return bcrypt.hashpw(_password_bytes(password), salt).decode()


def verify_password(password: str, hashed: str) -> bool:
    try:
        return bcrypt.checkpw(_password_bytes(password), hashed.encode())
    except ValueError:
        # Malformed stored hash
        return False


def create_token(admin: Admin, expires_delta: timedelta | None = None) -> tuple[str, Session]:
    now = datetime.now(timezone.utc)
    expire = now + (expires_delta or timedelta(minutes=settings.jwt_expire_minutes))
    payload = {
        "sub": admin.id,
        "email": admin.email,
        "name": admin.name,
        "iat": now,
        "exp": expire,
    }
    token = jwt.encode(payload, settings.secret_key, algorithm=settings.jwt_algorithm)
    session = Session(
        admin_id=admin.id,
        email=admin.email,
        name=admin.name,
        expires_at=expire.replace(microsecond=0),
    )
    return token, session


def decode_token(token: str) -> Session | None:
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[settings.jwt_algorithm])
        return Session(
            admin_id=payload["sub"],
            email=payload["email"],
            name=payload["name"],
            expires_at=datetime.fromtimestamp(payload["exp"], timezone.utc),
        )
    except (JWTError, KeyError, TypeError, ValueError):
        return None
