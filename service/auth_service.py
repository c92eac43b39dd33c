"""
Authentication service for the admin client.

Wraps the auth endpoints and keeps the persisted session in step with them.
"""

from typing import Any, Dict, Optional, Tuple

from config.constants import Messages
from core.exceptions import ApiError, AuthenticationError, ValidationError
from core.logging_config import LoggerMixin
from core.normalization import unwrap_envelope
from core.session import AuthSession
from service.query_cache import QueryCache

class AuthService(LoggerMixin):
    """
    Service layer for login/logout and the signed-in admin's profile.
    """

    def __init__(self, api: Any, session: AuthSession, cache: Optional[QueryCache] = None):
        self.api = api
        self.session = session
        self.cache = cache if cache is not None else QueryCache()

    @staticmethod
    def _parse_login(body: Any) -> Tuple[Optional[str], Optional[str], Dict[str, Any]]:
        """
        Pull (access token, refresh token, user) out of a login response.

        The API answers {data: {accessToken, refreshToken, user}}; the mock
        server answers {token, user}.
        """
        if not isinstance(body, dict):
            return None, None, {}
        data = body.get("data") if isinstance(body.get("data"), dict) else body
        access = data.get("accessToken") or data.get("token") or body.get("token")
        refresh = data.get("refreshToken")
        user = data.get("user") or body.get("user") or {}
        return access, refresh, user if isinstance(user, dict) else {}

    def login(self, email: str, password: str) -> Dict[str, Any]:
        """
        Authenticate and persist the session. Returns the user record.
        """
        email = (email or "").strip()
        if not email or not password:
            raise ValidationError(Messages.REQUIRED_FIELD)

        try:
            body = self.api.login(email, password)
        except ApiError as e:
            if e.status_code in (400, 401, 403):
                raise AuthenticationError(Messages.INVALID_CREDENTIALS)
            raise

        access_token, refresh_token, user = self._parse_login(body)
        if not access_token:
            raise AuthenticationError(Messages.INVALID_CREDENTIALS)

        self.session.store_tokens(access_token, refresh_token)
        if not user:
            user = {"email": email, "username": email}
        self.session.login(user)
        return user

    def logout(self) -> None:
        self.session.logout()
        self.cache.clear()

    def me(self) -> Dict[str, Any]:
        return unwrap_envelope(self.api.me()) or {}

    def update_profile(self, data: Dict[str, Any]) -> Dict[str, Any]:
        user = unwrap_envelope(self.api.update_me(data))
        if isinstance(user, dict) and user:
            merged = dict(self.session.user or {})
            merged.update(user)
            self.session.login(merged)
            return merged
        return self.session.user or {}

    def change_password(self, current_password: str, new_password: str,
                        confirm_password: str) -> None:
        if not current_password or not new_password:
            raise ValidationError(Messages.REQUIRED_FIELD)
        if new_password != confirm_password:
            raise ValidationError(Messages.PASSWORD_MISMATCH, field="confirmPassword")
        self.api.change_password(current_password, new_password)
        self.logger.info("Password changed")
