"""
XYFORA Backend — Access Guard
==============================

What:  Identity extraction, resource-id validation, and the ownership rule.
Who:   Used by the FastAPI dependencies in routes/dependencies.py and by
       ProductService before any mutation.

Mutating request (PUT/DELETE /products/{id}) decision order:
    1. extract_identity        → absent      → 401
    2. sanitize + validate id  → bad shape   → 400   (no store access)
    3. store lookup            → missing     → 404
    4. authorize_mutation      → not owner   → 403
    5. mutate                  → 200 / 204

Steps 1, 2 and 4 live here and are pure; step 3 belongs to the record store.
Every method answers with a value (None / bool / str) and never raises, so
callers decide which error a negative answer maps to.
"""

import logging
import re
from typing import Optional

from xyfora.exceptions import AuthenticationError
from xyfora.services.token_service import TokenService, token_service

logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "

# Fixed-length hex token used by the record store (see models/ids.py)
RESOURCE_ID_PATTERN = re.compile(r"[0-9a-fA-F]{24}")

# Straight and typographic quotes left over from copy-pasted ids
_QUOTE_CHARS = str.maketrans("", "", "\"'“”‘’")


class AccessGuard:
    def __init__(self, tokens: Optional[TokenService] = None) -> None:
        self._tokens = tokens or token_service

    def extract_identity(self, authorization: Optional[str]) -> Optional[str]:
        """
        Return the user id carried by an `Authorization: Bearer <token>`
        header value, or None when the header is missing, uses another
        scheme, or holds a token that fails verification.
        """
        if not authorization or not authorization.startswith(BEARER_PREFIX):
            return None

        # Verbatim remainder: padding around the token is not tolerated
        token = authorization[len(BEARER_PREFIX):]
        if not token:
            return None

        try:
            return self._tokens.verify(token)
        except AuthenticationError as e:
            logger.debug("Rejected bearer token: %s", e.message)
            return None

    @staticmethod
    def sanitize_resource_id(raw: str) -> str:
        return raw.strip().translate(_QUOTE_CHARS).strip()

    @staticmethod
    def is_valid_resource_id(resource_id: str) -> bool:
        return RESOURCE_ID_PATTERN.fullmatch(resource_id) is not None

    @staticmethod
    def authorize_mutation(user_id: str, resource_owner_id: str) -> bool:
        """Only the owner may mutate. Exact, case-sensitive comparison."""
        return user_id == resource_owner_id


access_guard = AccessGuard()
