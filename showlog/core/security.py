# showlog/core/security.py
import secrets
from datetime import datetime, timedelta, timezone

from jose import jwt

from showlog.core.config import settings

ALGORITHM = "HS256"


def create_access_token(subject: str, expires_minutes: int | None = None) -> str:
    minutes = expires_minutes or settings.ACCESS_TOKEN_EXPIRE_MINUTES
    expire = datetime.now(timezone.utc) + timedelta(minutes=minutes)
    return jwt.encode(
        {"sub": subject, "exp": expire}, settings.JWT_SECRET, algorithm=ALGORITHM
    )


def authenticate_admin(username: str, password: str) -> bool:
    """Constant-time check against the configured admin credentials."""
    user_ok = secrets.compare_digest(
        username.encode("utf-8"), settings.ADMIN_USERNAME.encode("utf-8")
    )
    password_ok = secrets.compare_digest(
        password.encode("utf-8"), settings.ADMIN_PASSWORD.encode("utf-8")
    )
    return user_ok and password_ok
