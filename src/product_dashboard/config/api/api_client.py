# product_dashboard/config/api/api_client.py
from __future__ import annotations

from typing import Any, Optional

import httpx

from product_dashboard.auth.credential_provider import CredentialProvider, bearer_header
from product_dashboard.config.api.config import ApiSettings


class ApiRequestError(Exception):
    """Cualquier fallo de un request: red, status no-2xx o JSON ilegible."""

    def __init__(self, method: str, url: str, cause: Exception):
        self.method = method
        self.url = url
        self.cause = cause
        self.status_code: Optional[int] = None
        if isinstance(cause, httpx.HTTPStatusError):
            self.status_code = cause.response.status_code
        super().__init__(f"{method} {url} -> {cause}")


class ApiClient:
    """
    Cliente HTTP asíncrono contra el backend de productos.

    - Base URL desde ApiSettings (SERVER_URL + PRODUCT_API_PATH)
    - Header Authorization armado en cada request con el proveedor inyectado
    - Sin timeout ni reintentos: un request resuelve o falla una sola vez
    """

    def __init__(
        self,
        credentials: CredentialProvider,
        settings: Optional[ApiSettings] = None,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.credentials = credentials
        self.settings = settings or ApiSettings()
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    @property
    def base_url(self) -> str:
        return self.settings.base_url

    # -------------------------
    # Ciclo de vida
    # -------------------------
    def _ensure_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=None,
                transport=self._transport,
            )
        return self._client

    async def aclose(self) -> None:
        """Cierra el pool de conexiones (si existe)."""
        if self._client is not None:
            try:
                await self._client.aclose()
            finally:
                self._client = None

    # -------------------------
    # Requests
    # -------------------------
    async def _request(self, method: str, path: str, *, json: Any = None) -> httpx.Response:
        headers = {"Authorization": bearer_header(self.credentials)}
        try:
            # InvalidURL (p. ej. SERVER_URL mal escrito) no hereda de HTTPError
            client = self._ensure_client()
            response = await client.request(method, path, json=json, headers=headers)
            response.raise_for_status()
        except (httpx.HTTPError, httpx.InvalidURL) as ex:
            raise ApiRequestError(method, f"{self.base_url}{path}", ex) from ex
        return response

    @staticmethod
    def _decode(method: str, url: str, response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError as ex:
            raise ApiRequestError(method, url, ex) from ex

    async def get_json(self, path: str) -> Any:
        response = await self._request("GET", path)
        return self._decode("GET", f"{self.base_url}{path}", response)

    async def post_json(self, path: str, body: Any) -> Any:
        response = await self._request("POST", path, json=body)
        return self._decode("POST", f"{self.base_url}{path}", response)

    async def put_json(self, path: str, body: Any) -> None:
        await self._request("PUT", path, json=body)

    async def delete(self, path: str) -> None:
        await self._request("DELETE", path)
