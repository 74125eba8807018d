"""JWT identity provider."""

import logging
from typing import Optional

from jose import JWTError, jwt

from ...application.interfaces import IIdentityProvider

logger = logging.getLogger(__name__)


class JWTIdentityProvider(IIdentityProvider):
    """Reads the user id from the ``sub`` claim of a signed bearer token."""

    def __init__(self, secret: str, algorithm: str = "HS256", audience: Optional[str] = None):
        self.secret = secret
        self.algorithm = algorithm
        self.audience = audience

    def resolve_user(self, token: Optional[str]) -> Optional[str]:
        if not token:
            return None

        options = {"verify_aud": self.audience is not None}
        try:
            payload = jwt.decode(
                token,
                self.secret,
                algorithms=[self.algorithm],
                audience=self.audience,
                options=options,
            )
        except JWTError as e:
            logger.info(f"Rejected bearer token: {e}")
            return None

        user_id = payload.get("sub")
        return str(user_id) if user_id else None

    def issue_token(self, user_id: str, **claims) -> str:
        """Sign a token for ``user_id``; used by scripts and tests."""
        payload = {"sub": user_id, **claims}
        if self.audience is not None:
            payload.setdefault("aud", self.audience)
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)
