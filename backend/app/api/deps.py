"""
Request dependencies and the authorization gate.

Routes declare what identity they need by depending on ``require_user`` or
``require_admin``; the gate resolves the ``session-token`` cookie and fails
with 401 or 403 before the route body runs.
"""

from typing import Mapping, Optional

from fastapi import Depends, Request
from starlette.requests import cookie_parser

from app.core.config import Settings
from app.core.database import InMemoryDatabase
from app.core.exceptions import AuthenticationRequired, AuthorizationDenied
from app.models.user import Role, User
from app.services.auth_service import AuthStore
from app.services.enrichment import EnrichmentService
from app.services.lead_service import LeadService
from app.services.market_data import MarketDataProvider


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_auth_store(request: Request) -> AuthStore:
    return request.app.state.auth_store


def get_db(request: Request) -> InMemoryDatabase:
    return request.app.state.db


def get_lead_service(request: Request) -> LeadService:
    return request.app.state.lead_service


def get_enrichment_service(request: Request) -> EnrichmentService:
    return request.app.state.enrichment_service


def get_market_data(request: Request) -> MarketDataProvider:
    return request.app.state.market_data


def token_from_cookie_header(cookie_header: Optional[str], cookie_name: str) -> Optional[str]:
    """Pull the session token out of a raw ``Cookie:`` header value."""
    if not cookie_header:
        return None
    return cookie_parser(cookie_header).get(cookie_name) or None


def extract_session_token(
    cookie_name: str,
    cookies: Optional[Mapping[str, str]] = None,
    headers: Optional[Mapping[str, str]] = None,
) -> Optional[str]:
    """
    Session token from a parsed cookie jar, else from the raw header.

    Both paths go through Starlette's cookie parser, so the same wire input
    always yields the same token.
    """
    if cookies:
        token = cookies.get(cookie_name)
        if token:
            return token
    if headers is not None:
        return token_from_cookie_header(headers.get("cookie"), cookie_name)
    return None


async def get_current_user(
    request: Request,
    store: AuthStore = Depends(get_auth_store),
    settings: Settings = Depends(get_settings),
) -> Optional[User]:
    token = extract_session_token(settings.SESSION_COOKIE_NAME, request.cookies, request.headers)
    if not token:
        return None
    return await store.validate_session(token)


class RoleGate:
    """Dependency that requires a signed-in user, optionally with a given role."""

    def __init__(self, role: Optional[Role] = None):
        self.role = role

    async def __call__(self, user: Optional[User] = Depends(get_current_user)) -> User:
        if user is None:
            raise AuthenticationRequired()
        if self.role is not None and user.role != self.role:
            raise AuthorizationDenied()
        return user


require_user = RoleGate()
require_admin = RoleGate(role=Role.ADMIN)
