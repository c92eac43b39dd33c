"""
JWT service issuing and checking the mock server's bearer tokens.
"""

import uuid
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional, Set

import jwt

from core.exceptions import AuthenticationError, ConfigurationError

class JWTService:
    """
    HS256 tokens with a unique id per token and an in-memory revocation list.
    """

    REQUIRED_CLAIMS = ('jti', 'sub', 'username', 'role')

    def __init__(self, secret_key: str, token_expiry_hours: int = 24):
        if not secret_key:
            raise ConfigurationError("JWT secret is not configured")
        self.secret_key = secret_key
        self.algorithm = 'HS256'
        self.token_expiry_hours = token_expiry_hours
        self._revoked_tokens: Set[str] = set()
        self._max_revoked = 1000

    def generate_token(self, user_id: str, username: str, role: str) -> Dict[str, Any]:
        now = datetime.now(timezone.utc)
        token_id = str(uuid.uuid4())

        payload = {
            'jti': token_id,
            'sub': str(user_id),
            'username': username,
            'role': role,
            'iat': int(now.timestamp()),
            'exp': int((now + timedelta(hours=self.token_expiry_hours)).timestamp())
        }

        token = jwt.encode(payload, self.secret_key, algorithm=self.algorithm)

        return {
            'token': token,
            'token_id': token_id,
            'expires_in': self.token_expiry_hours * 3600,
            'expires_at': payload['exp']
        }

    def validate_token(self, token: str) -> Dict[str, Any]:
        """
        Decode and check a token; raises AuthenticationError on any problem.
        """
        try:
            payload = jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except jwt.ExpiredSignatureError:
            raise AuthenticationError("Token has expired")
        except jwt.InvalidTokenError:
            raise AuthenticationError("Invalid token")

        for claim in self.REQUIRED_CLAIMS:
            if claim not in payload:
                raise AuthenticationError(f"Token missing required field: {claim}")

        if self.is_token_revoked(payload['jti']):
            raise AuthenticationError("Token has been revoked")

        return payload

    def revoke_token(self, token_id: str) -> None:
        if len(self._revoked_tokens) >= self._max_revoked:
            for old_token in list(self._revoked_tokens)[:100]:
                self._revoked_tokens.discard(old_token)
        self._revoked_tokens.add(token_id)

    def is_token_revoked(self, token_id: str) -> bool:
        return token_id in self._revoked_tokens

    def get_token_payload_unsafe(self, token: str) -> Optional[Dict[str, Any]]:
        """Payload without signature checks, used only to find the jti on logout."""
        try:
            return jwt.decode(token, options={"verify_signature": False})
        except jwt.InvalidTokenError:
            return None
