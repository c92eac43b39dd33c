"""
HTTP client for the external shop REST API.

Each request gets the bearer token from the session, and each successful
response has one `{data: ...}` envelope stripped (login responses excepted,
their envelope carries the tokens).
"""

import os
from typing import Any, BinaryIO, Callable, Dict, List, Optional, Tuple

import requests

from core.exceptions import ApiError, NetworkError
from core.logging_config import LoggerMixin
from core.normalization import unwrap_envelope

TokenProvider = Callable[[], Optional[str]]
UploadFile = Tuple[str, BinaryIO]

class ApiClient(LoggerMixin):
    """Thin wrapper around requests.Session with the auth/unwrap steps."""

    def __init__(self, base_url: str, token_provider: Optional[TokenProvider] = None,
                 timeout: Optional[float] = None, session: Optional[requests.Session] = None):
        self.base_url = base_url.rstrip("/")
        self.token_provider = token_provider
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({"Content-Type": "application/json"})

    def _auth_headers(self) -> Dict[str, str]:
        token = self.token_provider() if self.token_provider else None
        return {"Authorization": f"Bearer {token}"} if token else {}

    def request(self, method: str, path: str, params: Optional[Dict[str, Any]] = None,
                json: Any = None, files: Optional[Dict[str, Any]] = None) -> Any:
        url = f"{self.base_url}{path}"
        headers = self._auth_headers()
        if files:
            # let requests build the multipart boundary
            headers["Content-Type"] = None
        if params:
            params = {k: v for k, v in params.items() if v not in (None, "")}

        try:
            response = self.session.request(
                method, url, params=params, json=json, files=files,
                headers=headers, timeout=self.timeout
            )
        except requests.RequestException as e:
            self.logger.error("API request failed", method=method, path=path, error=str(e))
            raise NetworkError(str(e)) from e

        body = self._parse_body(response)
        if not response.ok:
            self.logger.error("API error", method=method, path=path, status_code=response.status_code)
            raise ApiError(response.status_code, body if isinstance(body, dict) else None)

        if path.startswith("/auth/login"):
            return body
        return unwrap_envelope(body)

    @staticmethod
    def _parse_body(response: requests.Response) -> Any:
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            if response.ok:
                raise NetworkError(f"Invalid JSON in response from {response.url}")
            return None

    def get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        return self.request("GET", path, params=params)

    def post(self, path: str, json: Any = None, files: Optional[Dict[str, Any]] = None) -> Any:
        return self.request("POST", path, json=json, files=files)

    def put(self, path: str, json: Any = None) -> Any:
        return self.request("PUT", path, json=json)

    def delete(self, path: str, json: Any = None) -> Any:
        return self.request("DELETE", path, json=json)

def list_params(keyword: Optional[str] = None, page: Optional[int] = None,
                limit: Optional[int] = None) -> Dict[str, Any]:
    return {"keyword": keyword, "page": page, "limit": limit}

class AuthApi:
    def __init__(self, client: ApiClient):
        self.client = client

    def login(self, email: str, password: str) -> Any:
        return self.client.post("/auth/login", {"email": email, "password": password})

    def register(self, data: Dict[str, Any]) -> Any:
        return self.client.post("/auth/register", data)

    def me(self) -> Any:
        return self.client.get("/auth/me")

    def update_me(self, data: Dict[str, Any]) -> Any:
        return self.client.put("/auth/me", data)

    def change_password(self, old_password: str, new_password: str) -> Any:
        return self.client.put("/auth/change-password",
                               {"oldPassword": old_password, "newPassword": new_password})

    def forgot_password(self, email: str) -> Any:
        return self.client.post("/auth/forgot-password", {"email": email})

    def refresh_token(self, refresh_token: str) -> Any:
        return self.client.post("/auth/refresh-tokens", {"refreshToken": refresh_token})

class ResourceApi:
    """CRUD endpoints shared by every catalog resource."""

    path = ""

    def __init__(self, client: ApiClient):
        self.client = client

    def list(self, keyword: Optional[str] = None, page: Optional[int] = None,
             limit: Optional[int] = None) -> Any:
        return self.client.get(self.path, params=list_params(keyword, page, limit))

    def detail(self, entity_id: str) -> Any:
        return self.client.get(f"{self.path}/{entity_id}")

    def create(self, data: Dict[str, Any]) -> Any:
        return self.client.post(self.path, data)

    def update(self, entity_id: str, data: Dict[str, Any]) -> Any:
        return self.client.put(f"{self.path}/{entity_id}", data)

    def delete(self, entity_id: str) -> Any:
        return self.client.delete(f"{self.path}/{entity_id}")

class ToggleableApi(ResourceApi):
    """Resources whose status flips through /active and /pause."""

    def active(self, entity_id: str) -> Any:
        return self.client.put(f"{self.path}/{entity_id}/active")

    def pause(self, entity_id: str) -> Any:
        return self.client.put(f"{self.path}/{entity_id}/pause")

class UserApi(ResourceApi):
    path = "/users"

    def lock(self, user_id: str) -> Any:
        return self.client.put(f"/users/{user_id}/lock")

    def unlock(self, user_id: str) -> Any:
        return self.client.put(f"/users/{user_id}/unlock")

    def update_balance(self, user_id: str, amount: float, operation: int, reason: str) -> Any:
        return self.client.post(f"/users/{user_id}/balance",
                                {"amount": amount, "operation": operation, "reason": reason})

    def reset_password(self, user_id: str, password: str) -> Any:
        return self.client.post(f"/users/{user_id}/reset-password", {"password": password})

class ToolApi(ToggleableApi):
    path = "/tools"

    def list_admin(self) -> Any:
        return self.client.get("/tools/admin")

class VpsApi(ToggleableApi):
    path = "/vps"

class ProxyApi(ToggleableApi):
    path = "/proxy"

class TransactionApi:
    def __init__(self, client: ApiClient):
        self.client = client

    def list(self, keyword: Optional[str] = None, page: Optional[int] = None,
             limit: Optional[int] = None) -> Any:
        return self.client.get("/transactions", params=list_params(keyword, page, limit))

    def detail(self, transaction_id: str) -> Any:
        return self.client.get(f"/transactions/{transaction_id}")

class DashboardApi:
    def __init__(self, client: ApiClient):
        self.client = client

    def summary(self) -> Any:
        return self.client.get("/dashboards/summary")

    def user_summary(self, year: int) -> Any:
        return self.client.get("/dashboards/summary-user", params={"year": year})

    def revenue_summary(self, year: int) -> Any:
        return self.client.get("/dashboards/summary-revenue", params={"year": year})

class OrderApi:
    def __init__(self, client: ApiClient):
        self.client = client

    def list(self, keyword: Optional[str] = None, page: Optional[int] = None,
             limit: Optional[int] = None) -> Any:
        return self.client.get("/orders", params=list_params(keyword, page, limit))

    def setup_vps(self, order_id: str, ip: str, username: str, password: str) -> Any:
        return self.client.put(f"/orders/{order_id}/setup-vps",
                               {"ip": ip, "username": username, "password": password})

    def setup_proxy(self, order_id: str, proxies: str, expired_at: str) -> Any:
        return self.client.put(f"/orders/{order_id}/setup-proxy",
                               {"proxies": proxies, "expiredAt": expired_at})

    def change_tool_api_key(self, order_id: str, api_key: str) -> Any:
        return self.client.put(f"/orders/{order_id}/update-api-key", {"apiKey": api_key})

class FileApi:
    def __init__(self, client: ApiClient):
        self.client = client

    def upload_single(self, upload: UploadFile) -> Any:
        return self.client.post("/files/upload/single", files={"file": upload})

    def upload_multiple(self, uploads: List[UploadFile]) -> Any:
        return self.client.post("/files/upload/multiple",
                                files=[("files", upload) for upload in uploads])

    def get_file(self, filename: str) -> Any:
        return self.client.get(f"/files/static/tool/{os.path.basename(filename)}")

    def delete(self, file_id: str) -> Any:
        return self.client.delete(f"/files/{file_id}")

    def delete_multiple(self, file_ids: List[str]) -> Any:
        return self.client.delete("/files/delete-multiple", {"fileIds": list(file_ids)})

class RestApi:
    """All endpoint groups sharing one configured client."""

    def __init__(self, client: ApiClient):
        self.client = client
        self.auth = AuthApi(client)
        self.users = UserApi(client)
        self.tools = ToolApi(client)
        self.vps = VpsApi(client)
        self.proxies = ProxyApi(client)
        self.transactions = TransactionApi(client)
        self.dashboard = DashboardApi(client)
        self.orders = OrderApi(client)
        self.files = FileApi(client)
