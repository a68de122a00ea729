"""Signup, signin and signout. The session token travels in an httpOnly cookie."""

from fastapi import APIRouter, Response, status

from acquisitions.api.deps import AppSettings, DbSession
from acquisitions.core.config import Settings
from acquisitions.schemas.auth import AuthResponse, MessageResponse, SigninRequest, SignupRequest
from acquisitions.services import accounts

router = APIRouter()


def _set_auth_cookie(response: Response, token: str, settings: Settings) -> None:
    response.set_cookie(
        key=settings.AUTH_COOKIE_NAME,
        value=token,
        httponly=True,
        samesite=settings.AUTH_COOKIE_SAMESITE,
        secure=settings.cookie_secure,
        max_age=settings.JWT_EXPIRE_MINUTES * 60,
        path="/",
    )


def _clear_auth_cookie(response: Response, settings: Settings) -> None:
    response.delete_cookie(
        key=settings.AUTH_COOKIE_NAME,
        path="/",
        httponly=True,
        samesite=settings.AUTH_COOKIE_SAMESITE,
        secure=settings.cookie_secure,
    )


@router.post("/signup", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def signup(
    body: SignupRequest,
    response: Response,
    db: DbSession,
    settings: AppSettings,
) -> AuthResponse:
    """Register a user and start a session. 409 if the email is already registered."""
    result = accounts.signup(db, settings, body)
    _set_auth_cookie(response, result.token, settings)
    return AuthResponse(message="User registered", user=result.user)


@router.post("/signin", response_model=AuthResponse)
def signin(
    body: SigninRequest,
    response: Response,
    db: DbSession,
    settings: AppSettings,
) -> AuthResponse:
    """
    Authenticate with email and password.
    404 for an unknown email, 401 for a wrong password.
    """
    result = accounts.signin(db, settings, body)
    _set_auth_cookie(response, result.token, settings)
    return AuthResponse(message="User signed in", user=result.user)


@router.post("/signout", response_model=MessageResponse)
def signout(response: Response, settings: AppSettings) -> MessageResponse:
    """
    Clear the session cookie. Tokens are stateless: a copied token stays valid
    until it expires.
    """
    _clear_auth_cookie(response, settings)
    return MessageResponse(message="User signed out successfully")
