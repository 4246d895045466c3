"""
HTTP client for the Tripboard API.
"""
import logging
from typing import Any, Optional
import httpx
from app.core.config import settings

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Raised when the API answers with an error envelope."""

    def __init__(self, status_code: int, message: str, details: Any = None):
        super().__init__(f"{status_code}: {message}")
        self.status_code = status_code
        self.message = message
        self.details = details


class ApiClient:
    """
    Thin wrapper over an httpx client that handles the bearer token pair and
    the {success, message, data} envelope.

    An expired access token is refreshed once with the stored refresh token
    before the failing request is retried.
    """

    def __init__(self, http: Optional[httpx.Client] = None, base_url: str = "http://localhost:8000",
                 prefix: str = settings.API_PREFIX, timeout: float = 10.0):
        self.http = http or httpx.Client(base_url=base_url, timeout=timeout)
        self.prefix = prefix.rstrip("/")
        self.access_token: Optional[str] = None
        self.refresh_token: Optional[str] = None

    def set_tokens(self, access_token: Optional[str], refresh_token: Optional[str] = None) -> None:
        self.access_token = access_token
        if refresh_token is not None:
            self.refresh_token = refresh_token

    def clear_tokens(self) -> None:
        self.access_token = None
        self.refresh_token = None

    def _send(self, method: str, path: str, json: Any = None) -> httpx.Response:
        headers = {}
        if self.access_token:
            headers["Authorization"] = f"Bearer {self.access_token}"
        return self.http.request(method, f"{self.prefix}{path}", json=json, headers=headers)

    def _refresh_access_token(self) -> bool:
        response = self.http.post(
            f"{self.prefix}/auth/refresh-token",
            json={"refresh_token": self.refresh_token}
        )
        if response.status_code != 200:
            logger.info("Refresh token rejected; clearing stored tokens")
            self.clear_tokens()
            return False
        self.access_token = response.json()["data"]["access_token"]
        return True

    def request(self, method: str, path: str, json: Any = None) -> Any:
        """Send a request and return the envelope's data, raising ApiError on failure."""
        response = self._send(method, path, json)

        if response.status_code == 401 and self.refresh_token and not path.startswith("/auth/"):
            if self._refresh_access_token():
                response = self._send(method, path, json)

        try:
            body = response.json()
        except ValueError:
            raise ApiError(response.status_code, response.text or "Invalid response")

        if response.status_code >= 400 or not body.get("success", False):
            raise ApiError(response.status_code, body.get("message", "Request failed"), body.get("error"))

        return body.get("data")

    def get(self, path: str) -> Any:
        return self.request("GET", path)

    def post(self, path: str, json: Any = None) -> Any:
        return self.request("POST", path, json)

    def put(self, path: str, json: Any = None) -> Any:
        return self.request("PUT", path, json)

    def delete(self, path: str) -> Any:
        return self.request("DELETE", path)

    def close(self) -> None:
        self.http.close()
