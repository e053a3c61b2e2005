"""
JWT bearer token verification.

Tokens are minted by the external identity service. Ordering only
checks the signature and expiry and reads the ``userId`` and ``role``
claims.
"""
import logging
from typing import Optional

import jwt

from core.application.interfaces import ITokenVerifier
from core.domain.exceptions import AuthError
from core.domain.value_objects import Identity, is_row_id


logger = logging.getLogger(__name__)


class JWTTokenVerifier(ITokenVerifier):
    """Verify HMAC-signed JWTs and turn their claims into an Identity."""

    def __init__(self, secret: Optional[str], algorithm: str = "HS256") -> None:
        """
        Initialize verifier.
        
        Args:
            secret: Shared signing secret (None rejects every token)
            algorithm: Expected JWT algorithm
        """
        self._secret = secret
        self._algorithm = algorithm

    def verify(self, token: Optional[str]) -> Identity:
        """
        Decode and validate a bearer token.
        
        Args:
            token: Raw token from the Authorization header
        
        Returns:
            Identity of the caller
        
        Raises:
            AuthError: If the token is missing, invalid or expired
        """
        if not token:
            raise AuthError("Authentication token required.")
        if not self._secret:
            logger.error("JWT_SECRET is not configured; rejecting token")
            raise AuthError("Invalid or expired token.")

        try:
            claims = jwt.decode(token, self._secret, algorithms=[self._algorithm])
        except jwt.PyJWTError as e:
            logger.warning(f"JWT verification error: {e}")
            raise AuthError("Invalid or expired token.")

        user_id = claims.get("userId")
        if isinstance(user_id, bool) or user_id is None:
            raise AuthError("Token is missing the userId claim.")
        try:
            user_id = int(user_id)
        except (TypeError, ValueError):
            raise AuthError("Token carries an invalid userId claim.")
        if not is_row_id(user_id):
            raise AuthError("Token carries an invalid userId claim.")

        return Identity(user_id=user_id, role=str(claims.get("role") or "user"))
