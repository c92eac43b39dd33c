from typing import Any, Dict

from flask import Blueprint, current_app, jsonify, request

from api.middleware.jwt_middleware import JWTMiddleware
from core.exceptions import ValidationError
from core.logging_config import get_logger
from data.storage import MockStorage

user_bp = Blueprint('users', __name__)
logger = get_logger(__name__)

def get_storage() -> MockStorage:
    return current_app.config['MOCK_STORAGE']

def _normalize_user_payload(data: Dict[str, Any]) -> Dict[str, Any]:
    """Accept the client's field names: fullname for username, 0/1 for role."""
    user_data = dict(data)
    if user_data.get('fullname') and not user_data.get('username'):
        user_data['username'] = user_data.pop('fullname')
    role = user_data.get('role')
    if isinstance(role, int) and not isinstance(role, bool):
        user_data['role'] = 'user' if role == 0 else 'admin'
    return user_data

@user_bp.route('', methods=['GET'])
@JWTMiddleware.require_auth
def list_users():
    """Every user except administrators."""
    return jsonify(get_storage().get_non_admin_users()), 200

@user_bp.route('/<user_id>', methods=['GET'])
@JWTMiddleware.require_auth
def get_user(user_id: str):
    user = get_storage().get_user(user_id)
    if not user:
        return jsonify({'message': 'User not found'}), 404
    return jsonify(user), 200

@user_bp.route('', methods=['POST'])
@JWTMiddleware.require_auth
def create_user():
    """
    Create a user.

    Request body:
    {
        "username" | "fullname": "string",
        "email": "string",
        "phone": "string" | null,
        "role": "user" | "admin" | 0 | 1,
        "status": "string"
    }
    """
    user_data = _normalize_user_payload(request.get_json(silent=True) or {})
    logger.info("Creating user", username=user_data.get('username'))
    try:
        user = get_storage().create_user(user_data)
    except ValidationError as e:
        return jsonify({'error': str(e), 'message': 'Error creating user'}), 400
    return jsonify(user), 201

@user_bp.route('/<user_id>', methods=['PUT'])
@JWTMiddleware.require_auth
def update_user(user_id: str):
    """Partial update; edits from the admin UI always demote the role to user."""
    user_data = _normalize_user_payload(request.get_json(silent=True) or {})
    user_data['role'] = 'user'
    try:
        user = get_storage().update_user(user_id, user_data)
    except ValidationError as e:
        return jsonify({'error': str(e), 'message': 'Error updating user'}), 400
    if not user:
        return jsonify({'message': 'User not found'}), 404
    return jsonify(user), 200

@user_bp.route('/<user_id>', methods=['DELETE'])
@JWTMiddleware.require_auth
def delete_user(user_id: str):
    if not get_storage().delete_user(user_id):
        return jsonify({'message': 'User not found'}), 404
    return '', 204
