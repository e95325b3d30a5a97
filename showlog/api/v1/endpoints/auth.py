# showlog/api/v1/endpoints/auth.py
import logging

from fastapi import APIRouter, HTTPException, Request, status

from showlog.core.limiter import limiter
from showlog.core.security import authenticate_admin, create_access_token
from showlog.schemas.token import LoginRequest, Token

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Auth"])


@router.post("/login", response_model=Token)
@limiter.limit("10/minute")
def login(request: Request, credentials: LoginRequest):
    """
    Exchange the admin credentials for a bearer token.
    """
    if not authenticate_admin(credentials.username, credentials.password):
        logger.warning(f"Failed login attempt for '{credentials.username}'")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials"
        )
    return Token(token=create_access_token(credentials.username))
