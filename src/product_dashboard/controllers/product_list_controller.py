# product_dashboard/controllers/product_list_controller.py
from __future__ import annotations

from typing import Any, Callable, Dict, List, Optional, Set

from product_dashboard.core.enums.e_productos import (
    E_PRODUCT_MSG, E_SEVERITY, E_VIEW_STATE
)
from product_dashboard.core.state.edit_state import Notification
from product_dashboard.models.products_model import ProductsModel


class ProductListController:
    """
    Dueño de la colección de productos y de la notificación activa.

    - load(): trae la colección completa; reemplaza o marca error
    - notify_and_reload(): tras cualquier alta/edición/baja se descarta la lista
      local y se recarga entera (nada de parches optimistas)
    - La notificación final depende de la recarga: si falla, se avisa el error
    - Listeners para que la vista se repinte en cada cambio de estado
    """

    def __init__(self, model: ProductsModel):
        self.model = model

        self.products: List[Dict[str, Any]] = []
        self.loading: bool = True
        self.error: Optional[str] = None
        self.notification: Optional[Notification] = None

        self._listeners: Set[Callable[[], None]] = set()

    # =========================================================
    # Logging util
    # =========================================================
    def _log(self, *args):
        print("[ProductListController]", *args)

    # =========================================================
    # Listeners
    # =========================================================
    def add_listener(self, cb: Callable[[], None]) -> None:
        if callable(cb):
            self._listeners.add(cb)

    def remove_listener(self, cb: Callable[[], None]) -> None:
        self._listeners.discard(cb)

    def _notify(self) -> None:
        for cb in list(self._listeners):
            try:
                cb()
            except Exception as ex:
                self._log("× listener falló:", repr(ex))

    # =========================================================
    # Estado derivado
    # =========================================================
    def view_state(self) -> E_VIEW_STATE:
        """Loading tiene prioridad sobre error; la tabla solo se pinta en READY."""
        if self.loading:
            return E_VIEW_STATE.LOADING
        if self.error:
            return E_VIEW_STATE.ERROR
        return E_VIEW_STATE.READY

    # =========================================================
    # Carga
    # =========================================================
    async def load(self) -> bool:
        self.loading = True
        self._notify()
        try:
            res = await self.model.listar()
            if res.get("status") == "success":
                self.products = self.model.rows_of(res)
                self.error = None
                self._log("✔ load():", len(self.products), "productos")
                return True

            self._log("× Failed to fetch products:", res.get("message"))
            self.error = E_PRODUCT_MSG.FETCH_FAILED.value
            return False
        finally:
            self.loading = False
            self._notify()

    # =========================================================
    # Notificación + recarga
    # =========================================================
    async def notify_and_reload(self, message: str, severity: str = E_SEVERITY.SUCCESS.value) -> bool:
        self.notification = Notification(message=message, severity=severity)
        self.products = []
        ok = await self.load()
        if not ok:
            self.notification = Notification(
                message=E_PRODUCT_MSG.FETCH_FAILED.value,
                severity=E_SEVERITY.ERROR.value,
            )
            self._notify()
        return ok

    def dismiss_notification(self) -> None:
        if self.notification is None:
            return
        self.notification = None
        self._notify()

    # =========================================================
    # Callbacks para el editor de filas
    # =========================================================
    async def on_edit(self, product: Dict[str, Any]) -> bool:
        return await self.notify_and_reload(E_PRODUCT_MSG.EDITED.value, E_SEVERITY.SUCCESS.value)

    async def on_add(self, product: Dict[str, Any]) -> bool:
        return await self.notify_and_reload(E_PRODUCT_MSG.ADDED.value, E_SEVERITY.SUCCESS.value)

    async def on_delete(self, product: Dict[str, Any]) -> bool:
        return await self.notify_and_reload(E_PRODUCT_MSG.DELETED.value, E_SEVERITY.SUCCESS.value)
