# product_dashboard/controllers/product_row_editor.py
from __future__ import annotations

from typing import Any, Awaitable, Callable, Dict, Mapping, Optional, Sequence, Set, Tuple

from product_dashboard.core.enums.e_productos import E_PRODUCTO, draft_defaults
from product_dashboard.core.state.edit_state import (
    VIEWING, EditState, Editing, editing_index
)
from product_dashboard.helpers.format.field_parser import FieldParser
from product_dashboard.models.products_model import ProductsModel

MutationCallback = Callable[[Dict[str, Any]], Awaitable[Any]]


class ProductRowEditor:
    """
    Edición en línea + alta de productos.

    Estados por fila: Viewing | Editing(row_index, buffer). Solo una fila puede
    estar en edición; empezar a editar otra descarta el buffer anterior sin
    guardarlo. El borrador de alta vive mientras el panel esté abierto.

    Cada mutación exitosa avisa al controlador de la lista (on_edit / on_add /
    on_delete), que recarga todo desde el backend. Un fallo deja la UI como
    estaba y solo queda en el log.

    Una segunda llamada a la misma acción mientras la primera sigue en vuelo
    se ignora (no sale ningún request).
    """

    def __init__(
        self,
        model: ProductsModel,
        *,
        on_edit: MutationCallback,
        on_add: MutationCallback,
        on_delete: MutationCallback,
    ):
        self.model = model
        self.on_edit = on_edit
        self.on_add = on_add
        self.on_delete = on_delete

        # Edición/nuevo
        self.edit_state: EditState = VIEWING
        self.is_adding: bool = False
        self.draft: Dict[str, Any] = draft_defaults()

        # Acciones en vuelo: ("save", idx) | ("add",) | ("delete", id)
        self._in_flight: Set[Tuple[Any, ...]] = set()

        self._listeners: Set[Callable[[], None]] = set()

    # =========================================================
    # Logging util
    # =========================================================
    def _log(self, *args):
        print("[ProductRowEditor]", *args)

    # =========================================================
    # Listeners (cambios de acciones en vuelo)
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

    def _claim(self, key: Tuple[Any, ...]) -> bool:
        """Marca la acción como en vuelo. False si ya lo estaba."""
        if key in self._in_flight:
            return False
        self._in_flight.add(key)
        self._notify()
        return True

    def _release(self, key: Tuple[Any, ...]) -> None:
        self._in_flight.discard(key)
        self._notify()

    # =========================================================
    # Consultas de estado
    # =========================================================
    @property
    def editing_row_index(self) -> Optional[int]:
        return editing_index(self.edit_state)

    def is_editing(self, row_index: int) -> bool:
        return self.editing_row_index == row_index

    def display_value(self, record: Mapping[str, Any], row_index: int, field: str) -> Any:
        """Lo que se muestra en la celda: override del buffer o el valor original."""
        state = self.edit_state
        if isinstance(state, Editing) and state.row_index == row_index and field in state.buffer:
            return state.buffer[field]
        return record.get(field)

    def is_busy(self, *key) -> bool:
        return tuple(key) in self._in_flight

    # =========================================================
    # Edición de existentes
    # =========================================================
    def begin_edit(self, row_index: int) -> None:
        prev = self.editing_row_index
        if prev is not None and prev != row_index:
            self._log("→ begin_edit(): se descarta el buffer de la fila", prev)
        self.edit_state = Editing(row_index)

    def cancel_edit(self) -> None:
        self.edit_state = VIEWING

    def set_field(self, field: str, value: Any) -> bool:
        """Escribe en el buffer de la fila activa. False si no hay fila o el valor no es válido."""
        state = self.edit_state
        try:
            coerced = FieldParser.coerce(field, value)
        except ValueError:
            self._log("× set_field(): valor inválido", dict(field=field, value=value))
            return False
        if not isinstance(state, Editing):
            return False
        self.edit_state = state.with_value(field, coerced)
        return True

    async def save(self, record: Mapping[str, Any]) -> bool:
        state = self.edit_state
        if not isinstance(state, Editing):
            self._log("× save(): no hay fila en edición")
            return False

        key = ("save", state.row_index)
        updated = state.merged_with(record)
        if not self._claim(key):
            self._log("→ save(): ya hay un guardado en curso para la fila", state.row_index)
            return False
        try:
            res = await self.model.actualizar_producto(updated)
        finally:
            self._release(key)

        if res.get("status") != "success":
            self._log("× Failed to update product:", res.get("message"))
            return False

        self._log("✔ actualizar_producto():", updated.get(E_PRODUCTO.ID.value))
        # Si el buffer cambió durante el PUT, lo nuevo no se envió: sigue en edición
        if self.edit_state is state:
            self.edit_state = VIEWING
        else:
            self._log("→ save(): hubo cambios durante el guardado; la fila sigue en edición")
        await self.on_edit(updated)
        return True

    # =========================================================
    # Fila NUEVA (panel de alta)
    # =========================================================
    def toggle_add_panel(self) -> bool:
        self.is_adding = not self.is_adding
        if not self.is_adding:
            self.draft = draft_defaults()
        return self.is_adding

    def set_draft_field(self, field: str, value: Any) -> bool:
        try:
            self.draft[field] = FieldParser.coerce(field, value)
        except ValueError:
            self._log("× set_draft_field(): valor inválido", dict(field=field, value=value))
            return False
        return True

    async def submit_draft(self) -> bool:
        key = ("add",)
        payload = dict(self.draft)
        if not self._claim(key):
            self._log("→ submit_draft(): ya hay un alta en curso")
            return False
        try:
            res = await self.model.crear_producto(payload)
        finally:
            self._release(key)

        if res.get("status") != "success":
            self._log("× Failed to add product:", res.get("message"))
            return False

        self._log("✔ crear_producto():", res.get("data"))
        self.draft = draft_defaults()
        self.is_adding = False
        created = res.get("data")
        await self.on_add(created if isinstance(created, dict) else payload)
        return True

    # =========================================================
    # Eliminar
    # =========================================================
    async def remove(self, record: Mapping[str, Any]) -> bool:
        rid = record.get(E_PRODUCTO.ID.value)
        key = ("delete", rid)
        if not self._claim(key):
            self._log("→ remove(): ya hay una baja en curso para", rid)
            return False
        try:
            res = await self.model.eliminar_producto(rid)
        finally:
            self._release(key)

        if res.get("status") != "success":
            self._log("× Failed to delete product:", res.get("message"))
            return False

        self._log("✔ eliminar_producto():", rid)
        await self.on_delete(dict(record))
        return True

    # =========================================================
    # Sincronización tras recarga
    # =========================================================
    def sync(self, products: Sequence[Mapping[str, Any]]) -> None:
        idx = self.editing_row_index
        if idx is not None and idx >= len(products):
            self._log("→ sync(): la fila", idx, "ya no existe; se sale de edición")
            self.edit_state = VIEWING
