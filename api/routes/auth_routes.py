"""
Authentication routes for the mock server: demo login and logout.
"""

from flask import Blueprint, current_app, jsonify, request

from api.middleware.jwt_middleware import JWTMiddleware
from core.logging_config import get_logger
from data.storage import MockStorage

auth_bp = Blueprint('auth', __name__)
logger = get_logger(__name__)

def get_storage() -> MockStorage:
    return current_app.config['MOCK_STORAGE']

@auth_bp.route('/login', methods=['POST'])
def login():
    """
    Check demo credentials and return the user with a signed token.

    Request body:
    {
        "username": "string",   (or "email")
        "password": "string"
    }
    """
    data = request.get_json(silent=True) or {}
    login_name = str(data.get('username') or data.get('email') or '').strip()
    password = str(data.get('password') or '')

    user = get_storage().verify_credentials(login_name, password) if login_name else None
    if not user:
        logger.info("Login rejected", username=login_name)
        return jsonify({'message': 'Invalid credentials'}), 401

    token_data = JWTMiddleware.get_jwt_service().generate_token(
        user['id'], user['username'], user.get('role', 'user')
    )
    logger.info("Login successful", username=user['username'])

    return jsonify({
        'user': user,
        'token': token_data['token'],
        'expires_in': token_data['expires_in'],
        'message': 'Login successful'
    }), 200

@auth_bp.route('/logout', methods=['POST'])
@JWTMiddleware.require_auth
def logout():
    current_user = JWTMiddleware.get_current_user()
    JWTMiddleware.get_jwt_service().revoke_token(current_user['jti'])
    return jsonify({'message': 'Logged out successfully'}), 200
