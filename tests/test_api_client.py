import os
import sys
from unittest.mock import Mock

import pytest
import requests

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from core.api_client import ApiClient, RestApi
from core.exceptions import ApiError, NetworkError


def _response(status_code=200, body=None):
    response = Mock()
    response.status_code = status_code
    response.ok = 200 <= status_code < 300
    response.content = b"x" if body is not None else b""
    response.json.return_value = body
    response.url = "https://api.test/x"
    return response


@pytest.fixture
def http():
    session = Mock(spec=requests.Session)
    session.headers = {}
    return session


def test_bearer_token_attached_and_envelope_stripped(http):
    http.request.return_value = _response(body={"data": {"items": [], "meta": {}}})
    client = ApiClient("https://api.test/", token_provider=lambda: "tok", session=http)

    body = client.get("/users", params={"keyword": None, "page": 1, "limit": 10})

    assert body == {"items": [], "meta": {}}
    args, kwargs = http.request.call_args
    assert args == ("GET", "https://api.test/users")
    assert kwargs["headers"]["Authorization"] == "Bearer tok"
    assert kwargs["params"] == {"page": 1, "limit": 10}


def test_no_token_sends_no_authorization(http):
    http.request.return_value = _response(body=[])
    client = ApiClient("https://api.test", token_provider=lambda: None, session=http)

    client.get("/tools")

    assert "Authorization" not in http.request.call_args.kwargs["headers"]


def test_login_response_keeps_envelope(http):
    login_body = {"data": {"accessToken": "a", "refreshToken": "r", "user": {}}}
    http.request.return_value = _response(body=login_body)
    api = RestApi(ApiClient("https://api.test", session=http))

    assert api.auth.login("admin@x", "pw") == login_body
    assert http.request.call_args.kwargs["json"] == {"email": "admin@x", "password": "pw"}


def test_error_status_raises_api_error_with_payload(http):
    http.request.return_value = _response(409, {"message": "Cannot delete: in use"})
    api = RestApi(ApiClient("https://api.test", session=http))

    with pytest.raises(ApiError) as exc_info:
        api.tools.delete("t1")

    assert exc_info.value.status_code == 409
    assert exc_info.value.response_data["message"] == "Cannot delete: in use"
    assert http.request.call_args.args == ("DELETE", "https://api.test/tools/t1")


def test_transport_failure_raises_network_error(http):
    http.request.side_effect = requests.ConnectionError("refused")
    client = ApiClient("https://api.test", session=http)

    with pytest.raises(NetworkError):
        client.get("/vps")


def test_endpoint_map(http):
    http.request.return_value = _response(body={"ok": True})
    api = RestApi(ApiClient("https://api.test", session=http))

    api.proxies.active("p1")
    assert http.request.call_args.args == ("PUT", "https://api.test/proxy/p1/active")

    api.users.update_balance("u1", 5000, -1, "refund")
    assert http.request.call_args.args == ("POST", "https://api.test/users/u1/balance")
    assert http.request.call_args.kwargs["json"] == {"amount": 5000, "operation": -1, "reason": "refund"}

    api.orders.setup_proxy("o1", "1.1.1.1:80", "2025-01-01")
    assert http.request.call_args.args == ("PUT", "https://api.test/orders/o1/setup-proxy")
    assert http.request.call_args.kwargs["json"] == {"proxies": "1.1.1.1:80", "expiredAt": "2025-01-01"}

    api.dashboard.revenue_summary(2024)
    assert http.request.call_args.args == ("GET", "https://api.test/dashboards/summary-revenue")
    assert http.request.call_args.kwargs["params"] == {"year": 2024}
