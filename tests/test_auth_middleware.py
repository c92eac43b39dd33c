import os
import sys

from flask import Flask, jsonify

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from api.middleware.error_handler import ErrorHandler
from api.middleware.jwt_middleware import JWTMiddleware
from core.exceptions import NotFoundError, StorageError, ValidationError
from core.jwt_service import JWTService


def create_app():
    app = Flask(__name__)
    service = JWTService("k" * 32)
    JWTMiddleware.init_app(app, service)
    ErrorHandler.init_app(app)

    @app.route("/protected")
    @JWTMiddleware.require_auth
    def protected():
        return jsonify(JWTMiddleware.get_current_user())

    @app.route("/invalid")
    def invalid():
        raise ValidationError("bad payload")

    @app.route("/missing")
    def missing():
        raise NotFoundError("users", "9")

    @app.route("/broken")
    def broken():
        raise StorageError("disk full")

    return app, service


def test_missing_token():
    app, _ = create_app()
    response = app.test_client().get("/protected")
    assert response.status_code == 401


def test_malformed_header():
    app, service = create_app()
    token = service.generate_token("1", "admin", "admin")["token"]
    response = app.test_client().get("/protected", headers={"Authorization": f"Token {token}"})
    assert response.status_code == 401


def test_valid_token_sets_current_user():
    app, service = create_app()
    token = service.generate_token("1", "admin", "admin")["token"]
    response = app.test_client().get("/protected", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 200
    assert response.get_json()["username"] == "admin"
    assert response.get_json()["id"] == "1"


def test_error_handler_maps_exceptions():
    app, _ = create_app()
    client = app.test_client()

    assert client.get("/invalid").status_code == 400
    assert client.get("/invalid").get_json()["message"] == "bad payload"
    assert client.get("/missing").status_code == 404
    assert client.get("/broken").status_code == 500
    assert client.post("/invalid").status_code == 405
