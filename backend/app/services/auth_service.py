"""
Credential and session store.

Owns the email -> user, id -> user and token -> session maps. Every
password check and every session lookup in the API goes through here.
"""

import asyncio
import logging
from datetime import datetime, timedelta
from typing import Callable, Dict, List, Optional

from app.core import security
from app.core.exceptions import DuplicateUserError, ValidationError
from app.models.base import utcnow
from app.models.user import Role, Session, User, UserRecord

logger = logging.getLogger(__name__)

DEMO_USERS = (
    ("admin@saasquatch.com", "admin123", "Admin User", Role.ADMIN),
    ("user@saasquatch.com", "user123", "Demo User", Role.USER),
)


class AuthStore:
    """In-memory users and sessions with serialised mutation."""

    def __init__(
        self,
        session_ttl: timedelta = timedelta(hours=24),
        bcrypt_rounds: int = security.DEFAULT_ROUNDS,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.session_ttl = session_ttl
        self.bcrypt_rounds = bcrypt_rounds
        self.clock = clock
        self._users_by_email: Dict[str, UserRecord] = {}
        self._users_by_id: Dict[str, UserRecord] = {}
        self._sessions: Dict[str, Session] = {}
        self._lock = asyncio.Lock()

    async def create_user(self, email: str, password: str, name: str, role: Role = Role.USER) -> User:
        key = email.strip().lower()
        if not key:
            raise ValidationError("Email is required")
        if key in self._users_by_email:
            raise DuplicateUserError()

        hashed = await asyncio.to_thread(security.get_password_hash, password, self.bcrypt_rounds)

        async with self._lock:
            # Re-check: another registration may have landed while we were hashing
            if key in self._users_by_email:
                raise DuplicateUserError()
            record = UserRecord(
                email=key,
                hashed_password=hashed,
                name=name,
                role=Role(role),
                created_at=self.clock(),
            )
            self._users_by_email[key] = record
            self._users_by_id[record.id] = record

        logger.info("Created %s user %s", record.role.value, record.email)
        return record.redacted()

    async def authenticate(self, email: str, password: str) -> Optional[User]:
        key = email.strip().lower()
        record = self._users_by_email.get(key)
        if record is None:
            await asyncio.to_thread(security.verify_dummy_password, password, self.bcrypt_rounds)
            logger.warning("Failed login for %s", key)
            return None

        if not await asyncio.to_thread(security.verify_password, password, record.hashed_password):
            logger.warning("Failed login for %s", key)
            return None

        async with self._lock:
            record.last_login = self.clock()
        logger.info("User %s logged in", record.email)
        return record.redacted()

    async def create_session(self, user_id: str) -> Session:
        now = self.clock()
        session = Session(
            user_id=user_id,
            token=security.generate_session_token(),
            expires_at=now + self.session_ttl,
            created_at=now,
        )
        async with self._lock:
            self._sessions[session.token] = session
        logger.debug("Issued session %s for %s", session.id, user_id)
        return session

    async def validate_session(self, token: str) -> Optional[User]:
        if not token:
            return None

        async with self._lock:
            session = self._sessions.get(token)
            if session is None:
                return None
            if session.is_expired(self.clock()):
                del self._sessions[token]
                logger.info("Session %s expired", session.id)
                return None
            record = self._users_by_id.get(session.user_id)

        return record.redacted() if record else None

    async def invalidate_session(self, token: str) -> None:
        async with self._lock:
            session = self._sessions.pop(token, None)
        if session is not None:
            logger.debug("Session %s invalidated", session.id)

    def get_user_by_id(self, user_id: str) -> Optional[User]:
        record = self._users_by_id.get(user_id)
        return record.redacted() if record else None

    def get_all_users(self) -> List[User]:
        return [record.redacted() for record in self._users_by_email.values()]

    async def seed_demo_users(self) -> None:
        for email, password, name, role in DEMO_USERS:
            try:
                await self.create_user(email, password, name, role)
            except DuplicateUserError:
                continue
