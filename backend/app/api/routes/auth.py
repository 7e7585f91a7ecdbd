# app/api/routes/auth.py
import logging

from fastapi import APIRouter, Depends, Request, Response

from app.api.deps import extract_session_token, get_auth_store, get_settings, require_user
from app.core.config import Settings
from app.core.exceptions import InvalidCredentials
from app.models.user import Session, User
from app.schemas.auth import AuthResponse, LoginRequest, MeResponse, RegisterRequest
from app.services.auth_service import AuthStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


def set_session_cookie(response: Response, session: Session, settings: Settings) -> None:
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=session.token,
        max_age=settings.session_max_age,
        path="/",
        httponly=True,
        secure=settings.is_production,
        samesite="lax",
    )


@router.post("/register", response_model=AuthResponse)
async def register(
    body: RegisterRequest,
    response: Response,
    store: AuthStore = Depends(get_auth_store),
    settings: Settings = Depends(get_settings),
):
    user = await store.create_user(body.email, body.password, body.name)
    session = await store.create_session(user.id)
    set_session_cookie(response, session, settings)
    return AuthResponse(user=user, token=session.token)


@router.post("/login", response_model=AuthResponse)
async def login(
    body: LoginRequest,
    response: Response,
    store: AuthStore = Depends(get_auth_store),
    settings: Settings = Depends(get_settings),
):
    user = await store.authenticate(body.email, body.password)
    if user is None:
        raise InvalidCredentials()

    session = await store.create_session(user.id)
    set_session_cookie(response, session, settings)
    return AuthResponse(user=user, token=session.token)


@router.post("/logout")
async def logout(
    request: Request,
    response: Response,
    store: AuthStore = Depends(get_auth_store),
    settings: Settings = Depends(get_settings),
):
    token = extract_session_token(settings.SESSION_COOKIE_NAME, request.cookies, request.headers)
    if token:
        await store.invalidate_session(token)
    response.delete_cookie(settings.SESSION_COOKIE_NAME, path="/")
    return {"success": True}


@router.get("/me", response_model=MeResponse)
async def me(user: User = Depends(require_user)):
    return MeResponse(user=user)
