"""
XYFORA Backend — Token Service
===============================

What:  Signs and verifies stateless identity tokens (JWT via PyJWT).
How:   A token carries the user id in `sub` plus `iat`/`exp`; it expires
       `jwt_expires_days` (default 7) after issuance. Nothing is persisted,
       so verification is a pure function of the token, the secret and the
       current time.

Contract:
    sign(user_id)  -> token
    verify(token)  -> user_id, or raises TokenExpiredError / InvalidTokenError
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import jwt

from xyfora.config import settings
from xyfora.exceptions import InvalidTokenError, TokenExpiredError

logger = logging.getLogger(__name__)


class TokenService:
    def __init__(
        self,
        secret: Optional[str] = None,
        algorithm: Optional[str] = None,
        expires_in: Optional[timedelta] = None,
    ) -> None:
        self._secret = secret
        self._algorithm = algorithm
        self._expires_in = expires_in

    @property
    def secret(self) -> str:
        return self._secret or settings.jwt_secret

    @property
    def algorithm(self) -> str:
        return self._algorithm or settings.jwt_algorithm

    @property
    def expires_in(self) -> timedelta:
        return self._expires_in or timedelta(days=settings.jwt_expires_days)

    def sign(self, user_id: str, now: Optional[datetime] = None) -> str:
        """Issue a token bound to `user_id`."""
        issued_at = now or datetime.now(timezone.utc)
        payload: Dict[str, Any] = {
            "sub": user_id,
            "iat": issued_at,
            "exp": issued_at + self.expires_in,
        }
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def verify(self, token: str) -> str:
        """
        Return the user id embedded in a valid token.

        Raises:
            TokenExpiredError: signature is fine but `exp` has passed
            InvalidTokenError: malformed, wrong signature, or missing claims
        """
        try:
            payload = jwt.decode(
                token,
                self.secret,
                algorithms=[self.algorithm],
                options={"require": ["sub", "exp"]},
            )
        except jwt.ExpiredSignatureError:
            raise TokenExpiredError()
        except jwt.InvalidTokenError as e:
            raise InvalidTokenError(context={"reason": type(e).__name__})

        user_id = payload.get("sub")
        if not isinstance(user_id, str) or not user_id:
            raise InvalidTokenError(context={"reason": "empty subject"})
        return user_id


token_service = TokenService()
