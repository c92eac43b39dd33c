#!/usr/bin/env python3
import logging
from typing import Optional

from flask import Flask
from flask_cors import CORS

from config.app_config import AppConfig, get_config
from core.exceptions import ConfigurationError
from core.jwt_service import JWTService
from core.logging_config import setup_structured_logging
from data.storage import MockStorage

from .routes.auth_routes import auth_bp
from .routes.user_routes import user_bp
from .routes.catalog_routes import catalog_bp
from .middleware.jwt_middleware import JWTMiddleware
from .middleware.error_handler import ErrorHandler


def create_app(config: Optional[AppConfig] = None, storage: Optional[MockStorage] = None) -> Flask:
    """
    Creates and configures the mock API standing in for the shop backend.
    """
    config = config or get_config()
    if not config.security.jwt_secret:
        raise ConfigurationError('JWT_SECRET environment variable is required')

    app = Flask(__name__)
    app.config['SECRET_KEY'] = config.security.jwt_secret
    app.config['MOCK_STORAGE'] = storage or MockStorage(
        config.mock_storage.path,
        bcrypt_rounds=config.security.bcrypt_rounds
    )

    CORS(app)

    JWTMiddleware.init_app(app, JWTService(
        config.security.jwt_secret,
        token_expiry_hours=config.security.token_expiry_hours
    ))
    ErrorHandler.init_app(app)

    app.register_blueprint(auth_bp, url_prefix='/api/auth')
    app.register_blueprint(user_bp, url_prefix='/api/users')
    app.register_blueprint(catalog_bp, url_prefix='/api')

    @app.route("/api/health")
    def health_check():
        return {"status": "healthy", "message": "Shop Admin mock API is running"}

    return app


def main() -> None:
    config = get_config()
    setup_structured_logging(config.monitoring.log_level)
    app = create_app(config)

    host = config.server.host
    port = config.server.port

    print(f"🚀 Starting Shop Admin mock API on http://{host}:{port}")
    print(f"📊 Health Check: http://{host}:{port}/api/health")

    from waitress import serve

    # Suppress Waitress queue warnings
    logging.getLogger('waitress.queue').setLevel(logging.ERROR)

    serve(app, host=host, port=port, threads=config.server.threads)


if __name__ == "__main__":
    main()
