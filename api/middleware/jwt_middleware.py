"""
JWT middleware guarding the mock server's user endpoints.
"""

from functools import wraps
from typing import Any, Dict, Optional

from flask import current_app, g, jsonify, request

from core.exceptions import AuthenticationError
from core.jwt_service import JWTService

class JWTMiddleware:
    """
    Bearer-token checks backed by the app's JWTService.
    """

    @staticmethod
    def init_app(app, jwt_service: JWTService) -> None:
        """Attach the token service used by require_auth."""
        app.config['JWT_SERVICE'] = jwt_service

    @staticmethod
    def require_auth(f):
        """Decorator to require a valid bearer token."""
        @wraps(f)
        def decorated_function(*args, **kwargs):
            token = JWTMiddleware._extract_token(request)
            if not token:
                return jsonify({
                    'error': 'Authentication required',
                    'message': 'Please provide Authorization header with Bearer token'
                }), 401

            try:
                payload = JWTMiddleware.get_jwt_service().validate_token(token)
            except AuthenticationError as e:
                return jsonify({
                    'error': 'Authentication failed',
                    'message': str(e)
                }), 401

            g.current_user = {
                'id': payload['sub'],
                'username': payload['username'],
                'role': payload['role'],
                'jti': payload['jti']
            }
            return f(*args, **kwargs)

        return decorated_function

    @staticmethod
    def _extract_token(request) -> Optional[str]:
        """Extract JWT token from Authorization header."""
        auth_header = request.headers.get('Authorization')

        if not auth_header:
            return None

        parts = auth_header.split(' ')
        if len(parts) != 2 or parts[0].lower() != 'bearer':
            return None

        return parts[1]

    @staticmethod
    def get_jwt_service() -> JWTService:
        return current_app.config['JWT_SERVICE']

    @staticmethod
    def get_current_user() -> Optional[Dict[str, Any]]:
        """Get current authenticated user from Flask g object."""
        return getattr(g, 'current_user', None)
