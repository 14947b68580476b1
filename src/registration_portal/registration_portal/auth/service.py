from __future__ import annotations

import hmac
import logging
import secrets
from dataclasses import dataclass
from typing import Optional

from werkzeug.security import check_password_hash

from ..core.exceptions import AuthenticationError, InternalError, ValidationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AdminCredentials:
    """Configured admin account. A password hash wins over a plaintext password."""

    email: Optional[str]
    password_hash: Optional[str] = None
    password: Optional[str] = None

    @property
    def configured(self) -> bool:
        return bool(self.email) and bool(self.password_hash or self.password)


@dataclass(frozen=True)
class SessionAdmin:
    """What we store into Flask session after login."""

    email: str
    token: str


class AuthService:
    """Use case: authenticate the event admin (login)."""

    def __init__(self, credentials: AdminCredentials):
        self._credentials = credentials

    def _password_matches(self, password: str) -> bool:
        if self._credentials.password_hash:
            try:
                return check_password_hash(self._credentials.password_hash, password)
            except (ValueError, TypeError):
                # e.g. placeholder hashes like 'CHANGE_ME' or corrupted values
                logger.warning("ADMIN_PASSWORD_HASH is not a valid werkzeug hash")
                return False
        return hmac.compare_digest(
            (self._credentials.password or "").encode("utf-8"),
            password.encode("utf-8"),
        )

    def authenticate(self, email: Optional[str], password: Optional[str]) -> SessionAdmin:
        # JSON bodies can carry numbers or lists here.
        if not isinstance(email, str) or not isinstance(password, str):
            raise ValidationError("Email and password are required.")
        email = email.strip()
        if not email or not password:
            raise ValidationError("Email and password are required.")

        if not self._credentials.configured:
            raise InternalError("Admin credentials not configured.")

        if email != self._credentials.email or not self._password_matches(password):
            logger.warning("Rejected admin login for %s", email)
            raise AuthenticationError("Invalid email or password.")

        logger.info("Admin %s logged in", email)
        return SessionAdmin(email=email, token=secrets.token_urlsafe(32))
