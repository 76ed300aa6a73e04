from __future__ import annotations
import flet as ft
from typing import Callable, Optional, List


class BotonFactory:
    """
    Fábrica de botones reutilizables para la página de productos.

    - Botón de header (pill): "Add Product" / "Cancel" del panel de alta
    - Acciones de fila: Edit, Save, Cancel, Delete
    - Botón de envío del formulario de alta: Add

    Las acciones de fila se devuelven SIN contenedores envolventes para que el
    click no se bloquee dentro del DataCell.
    """

    # ===== Estilos por defecto =====
    _PILL_BG = ft.Colors.PRIMARY
    _PILL_FG = ft.Colors.ON_PRIMARY
    _PILL_PAD = 10
    _PILL_RADIUS = 12
    _PILL_TEXT_SIZE = 11

    _ROW_TEXT_SIZE = 12
    _ROW_EDIT = (ft.Icons.EDIT, ft.Colors.ORANGE_700)
    _ROW_SAVE = (ft.Icons.SAVE, ft.Colors.BLUE_600)
    _ROW_CANCEL = (ft.Icons.CLOSE, ft.Colors.GREY_600)
    _ROW_DELETE = (ft.Icons.DELETE_OUTLINE, ft.Colors.PURPLE_600)

    # ==============================
    # Helpers internos
    # ==============================
    def _pill_button(
        self,
        text: str,
        on_tap: Callable[[], None],
        *,
        icon_name: Optional[str] = None,
        tooltip: Optional[str] = None,
        bgcolor: Optional[str] = None,
    ) -> ft.GestureDetector:
        content: List[ft.Control] = []
        if icon_name:
            content.append(ft.Icon(name=icon_name, size=18, color=self._PILL_FG))
        content.append(ft.Text(text, size=self._PILL_TEXT_SIZE, weight="bold", color=self._PILL_FG))

        return ft.GestureDetector(
            on_tap=lambda _: on_tap(),
            mouse_cursor=ft.MouseCursor.CLICK,
            content=ft.Container(
                padding=self._PILL_PAD,
                border_radius=self._PILL_RADIUS,
                bgcolor=bgcolor or self._PILL_BG,
                tooltip=tooltip,
                content=ft.Row(content, alignment=ft.MainAxisAlignment.CENTER, spacing=6),
            ),
        )

    def _row_action(
        self,
        text: str,
        style: tuple,
        on_click: Callable[[ft.ControlEvent], None],
        *,
        disabled: bool = False,
    ) -> ft.ElevatedButton:
        icon, color = style
        return ft.ElevatedButton(
            text=text,
            icon=icon,
            bgcolor=color,
            color=ft.Colors.WHITE,
            on_click=on_click,
            disabled=disabled,
            style=ft.ButtonStyle(
                padding=ft.padding.symmetric(horizontal=10, vertical=4),
                text_style=ft.TextStyle(size=self._ROW_TEXT_SIZE),
            ),
        )

    # ==============================
    # Acciones de fila
    # ==============================
    def crear_boton_editar(self, on_click, *, disabled: bool = False) -> ft.ElevatedButton:
        return self._row_action("Edit", self._ROW_EDIT, on_click, disabled=disabled)

    def crear_boton_guardar(self, on_click, *, disabled: bool = False) -> ft.ElevatedButton:
        return self._row_action("Save", self._ROW_SAVE, on_click, disabled=disabled)

    def crear_boton_cancelar(self, on_click, *, disabled: bool = False) -> ft.ElevatedButton:
        return self._row_action("Cancel", self._ROW_CANCEL, on_click, disabled=disabled)

    def crear_boton_borrar(self, on_click, *, disabled: bool = False) -> ft.ElevatedButton:
        return self._row_action("Delete", self._ROW_DELETE, on_click, disabled=disabled)

    # ==============================
    # Header / formulario
    # ==============================
    def crear_boton_toggle_alta(self, on_tap: Callable[[], None], *, abierto: bool) -> ft.GestureDetector:
        if abierto:
            return self._pill_button("Cancel", on_tap, icon_name=ft.Icons.CLOSE, tooltip="Cerrar alta")
        return self._pill_button("Add Product", on_tap, icon_name=ft.Icons.ADD, tooltip="Agregar producto")

    def crear_boton_enviar_alta(self, on_click, *, disabled: bool = False) -> ft.ElevatedButton:
        return ft.ElevatedButton(
            text="Add",
            bgcolor=ft.Colors.GREEN_600,
            color=ft.Colors.WHITE,
            on_click=on_click,
            disabled=disabled,
        )


# ==============================
#  Helpers de módulo (singleton)
# ==============================
_factory = BotonFactory()

def boton_editar(on_click, disabled: bool = False):
    return _factory.crear_boton_editar(on_click, disabled=disabled)

def boton_guardar(on_click, disabled: bool = False):
    return _factory.crear_boton_guardar(on_click, disabled=disabled)

def boton_cancelar(on_click, disabled: bool = False):
    return _factory.crear_boton_cancelar(on_click, disabled=disabled)

def boton_borrar(on_click, disabled: bool = False):
    return _factory.crear_boton_borrar(on_click, disabled=disabled)

def boton_toggle_alta(on_tap: Callable[[], None], abierto: bool):
    return _factory.crear_boton_toggle_alta(on_tap, abierto=abierto)

def boton_enviar_alta(on_click, disabled: bool = False):
    return _factory.crear_boton_enviar_alta(on_click, disabled=disabled)
