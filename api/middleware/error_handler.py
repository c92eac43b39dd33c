from typing import Tuple

from flask import jsonify
from werkzeug.exceptions import HTTPException

from core.exceptions import (
    ShopAdminError,
    AuthenticationError,
    NotFoundError,
    ValidationError,
    StorageError,
    ConfigurationError
)
from core.logging_config import get_logger

logger = get_logger(__name__)

# Most specific first; ShopAdminError catches the rest of the hierarchy.
ERROR_RESPONSES = (
    (ValidationError, 400, 'Validation error'),
    (AuthenticationError, 401, 'Authentication failed'),
    (NotFoundError, 404, 'Not found'),
    (StorageError, 500, 'Storage error'),
    (ConfigurationError, 500, 'Configuration error'),
    (ShopAdminError, 500, 'Shop Admin error'),
)

def error_response(error: str, message: str, status: int) -> Tuple[object, int]:
    """Body shape shared by every failure: the client reads `message` first."""
    return jsonify({'error': error, 'message': message}), status

class ErrorHandler:
    """
    Maps the domain exception hierarchy and HTTP errors of the mock API to
    `{error, message}` JSON bodies.
    """

    @staticmethod
    def init_app(app) -> None:
        for exc_type, status, label in ERROR_RESPONSES:
            app.register_error_handler(exc_type, ErrorHandler._domain_handler(status, label))

        @app.errorhandler(HTTPException)
        def handle_http_error(e):
            return error_response(e.name, e.description, e.code)

        @app.errorhandler(Exception)
        def handle_unexpected(e):
            logger.error("Unhandled error", error=str(e), error_type=type(e).__name__)
            return error_response('Internal server error', 'An unexpected error occurred', 500)

    @staticmethod
    def _domain_handler(status: int, label: str):
        def handle(e):
            if status >= 500:
                logger.error("Mock API failure", error=str(e), error_type=type(e).__name__)
            return error_response(label, str(e), status)
        return handle
