# product_dashboard/auth/credential_provider.py
"""
Proveedores de credenciales para el cliente HTTP.

El cliente no lee almacenamiento global: recibe un proveedor y le pide el token
en cada request. Así en pruebas basta con un StaticCredentialProvider.
"""
from __future__ import annotations

from typing import Any, Optional, Protocol

from product_dashboard.config.api.config import STORAGE_KEY


class CredentialProvider(Protocol):
    def get_token(self) -> Optional[str]:
        ...


def bearer_header(provider: CredentialProvider) -> str:
    """Valor de `Authorization`. Sin token se envía igual y el backend lo rechaza."""
    token = provider.get_token()
    return f"Bearer {token}" if token else "Bearer"


class StaticCredentialProvider:
    def __init__(self, token: Optional[str] = None):
        self._token = token

    def get_token(self) -> Optional[str]:
        return self._token

    def set_token(self, token: Optional[str]) -> None:
        self._token = token


class SessionStore(Protocol):
    def get(self, key: str) -> Any:
        ...


class SessionCredentialProvider:
    """
    Lee el token de la sesión de UNA página (`page.session` en Flet) bajo una
    clave fija. Cada sesión web tiene su propio proveedor; no hay estado global.
    """

    def __init__(self, session: SessionStore, key: str = STORAGE_KEY):
        self.session = session
        self.key = key

    def get_token(self) -> Optional[str]:
        value = self.session.get(self.key)
        return str(value) if value not in (None, "") else None
