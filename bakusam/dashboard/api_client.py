import httpx
import logging

logger = logging.getLogger(__name__)

class ApiError(Exception):
    """An HTTP request to the REST API failed.

    ``status`` is the response status code, or 0 when no response arrived.
    """

    def __init__(self, status: int, message: str):
        super().__init__(f"{status}: {message}")
        self.status = status
        self.message = message

class ApiClient:
    def __init__(self, base_url: str, token: str = None, timeout: float = 10.0, transport=None):
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.client = httpx.AsyncClient(base_url=self.base_url, timeout=timeout, transport=transport)

    def set_token(self, token: str = None):
        self.token = token

    def _headers(self) -> dict:
        headers = {"Accept": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    async def request(self, method: str, path: str, json=None):
        try:
            response = await self.client.request(method, path, json=json, headers=self._headers())
        except httpx.HTTPError as e:
            logger.error(f"{method} {path} failed: {str(e)}")
            raise ApiError(0, str(e)) from e

        if response.status_code >= 400:
            try:
                data = response.json()
                message = (data.get("error") if isinstance(data, dict) else None) or response.reason_phrase
            except ValueError:
                message = response.text or response.reason_phrase
            logger.warning(f"{method} {path} returned {response.status_code}: {message}")
            raise ApiError(response.status_code, message)

        logger.debug(f"{method} {path} -> {response.status_code}")
        if not response.content:
            return None
        return response.json()

    async def get(self, path: str):
        return await self.request("GET", path)

    async def post(self, path: str, data: dict):
        return await self.request("POST", path, json=data)

    async def patch(self, path: str, data: dict):
        return await self.request("PATCH", path, json=data)

    async def delete(self, path: str):
        return await self.request("DELETE", path)

    async def aclose(self):
        await self.client.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.aclose()
