# product_dashboard/config/api/config.py
"""
Configuración del backend de productos.

Valores leídos de variables de entorno (con `.env` opcional en la raíz del proyecto).
Todo tiene default para poder levantar la UI contra un backend local.
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

load_dotenv()


def _env_int(key: str, default: int) -> int:
    raw = os.getenv(key)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        return default


SERVER_URL: str = os.getenv("SERVER_URL", "http://localhost:8080").rstrip("/")
PRODUCT_API_PATH: str = os.getenv("PRODUCT_API_PATH", "/api/product")
APP_NAME: str = os.getenv("APP_NAME", "Minimal UI")

# Clave fija del token en el almacén de sesión
STORAGE_KEY: str = os.getenv("STORAGE_KEY", "jwt_access_token")
# Token opcional para sembrar la sesión al arrancar (sin pantalla de login)
ACCESS_TOKEN: Optional[str] = os.getenv("ACCESS_TOKEN") or None

NOTIFICATION_AUTO_HIDE_MS: int = _env_int("NOTIFICATION_AUTO_HIDE_MS", 6000)


@dataclass(frozen=True)
class ApiSettings:
    """Ajustes inyectables del cliente HTTP."""
    server_url: str = SERVER_URL
    product_api_path: str = PRODUCT_API_PATH

    @property
    def base_url(self) -> str:
        path = "/" + self.product_api_path.strip("/") if self.product_api_path.strip("/") else ""
        return f"{self.server_url.rstrip('/')}{path}"
