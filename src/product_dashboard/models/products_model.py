from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional

from product_dashboard.config.api.api_client import ApiClient, ApiRequestError
from product_dashboard.core.enums.e_productos import E_API_ERROR, E_PRODUCTO


ITEMS_PATH = "/items"


# ========================= MODELO =========================
class ProductsModel:
    """
    CRUD de productos contra el API REST (`<base>/items`).

    Igual que el resto de modelos de la app, nunca lanza hacia la UI:
    cada operación devuelve un dict de estado

        {"status": "success", "message": ..., "data": ...}
        {"status": "error",   "message": ..., "error": E_API_ERROR.<tipo>.value}

    El listado viaja envuelto (`{"data": [...]}`); el alta devuelve el registro
    creado directamente en el body.
    """

    def __init__(self, client: ApiClient):
        self.client = client

    def _item_path(self, item_id: Any) -> str:
        return f"{ITEMS_PATH}/{item_id}"

    @staticmethod
    def _error(ex: Exception, kind: E_API_ERROR) -> Dict[str, Any]:
        return {"status": "error", "message": str(ex), "error": kind.value}

    # ----------------- Consultas -----------------
    async def listar(self) -> Dict[str, Any]:
        try:
            payload = await self.client.get_json(ITEMS_PATH)
        except ApiRequestError as ex:
            return self._error(ex, E_API_ERROR.LOAD_FAILURE)

        rows = payload.get("data") if isinstance(payload, dict) else None
        if not isinstance(rows, list):
            return {
                "status": "error",
                "message": "Respuesta sin lista 'data'.",
                "error": E_API_ERROR.LOAD_FAILURE.value,
            }
        return {"status": "success", "message": "Productos obtenidos.", "data": rows}

    # ----------------- CRUD -----------------
    async def crear_producto(self, draft: Mapping[str, Any]) -> Dict[str, Any]:
        try:
            created = await self.client.post_json(ITEMS_PATH, dict(draft))
        except ApiRequestError as ex:
            return self._error(ex, E_API_ERROR.MUTATION_FAILURE)
        return {"status": "success", "message": "Producto agregado.", "data": created}

    async def actualizar_producto(self, record: Mapping[str, Any]) -> Dict[str, Any]:
        item_id = record.get(E_PRODUCTO.ID.value)
        if item_id in (None, ""):
            return {
                "status": "error",
                "message": "Registro sin id.",
                "error": E_API_ERROR.MUTATION_FAILURE.value,
            }
        try:
            await self.client.put_json(self._item_path(item_id), dict(record))
        except ApiRequestError as ex:
            return self._error(ex, E_API_ERROR.MUTATION_FAILURE)
        return {"status": "success", "message": "Producto actualizado.", "data": dict(record)}

    async def eliminar_producto(self, item_id: Optional[Any]) -> Dict[str, Any]:
        if item_id in (None, ""):
            return {
                "status": "error",
                "message": "Registro sin id.",
                "error": E_API_ERROR.MUTATION_FAILURE.value,
            }
        try:
            await self.client.delete(self._item_path(item_id))
        except ApiRequestError as ex:
            return self._error(ex, E_API_ERROR.MUTATION_FAILURE)
        return {"status": "success", "message": "Producto eliminado."}

    @staticmethod
    def rows_of(res: Dict[str, Any]) -> List[Dict[str, Any]]:
        return list(res.get("data") or [])
