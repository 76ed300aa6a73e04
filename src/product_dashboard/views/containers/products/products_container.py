from __future__ import annotations
import flet as ft
from typing import Any, Dict, List, Optional

from product_dashboard.config.api.config import NOTIFICATION_AUTO_HIDE_MS
from product_dashboard.controllers.product_list_controller import ProductListController
from product_dashboard.controllers.product_row_editor import ProductRowEditor
from product_dashboard.core.enums.e_productos import E_PRODUCTO, E_SEVERITY, E_VIEW_STATE, NUMERIC_FIELDS
from product_dashboard.core.state.edit_state import Notification
from product_dashboard.helpers.format.field_parser import FieldParser
from product_dashboard.ui.builders.table_builder import ColumnSpec, TableBuilder
from product_dashboard.ui.factory.boton_factory import (
    boton_borrar, boton_cancelar, boton_editar, boton_enviar_alta, boton_guardar, boton_toggle_alta
)


def draft_label(field: str) -> str:
    """'nama_item' -> 'NAMA ITEM' (solo el primer guion bajo)."""
    return field.replace("_", " ", 1).upper()


class ProductsContainer(ft.Container):
    """
    Lista de productos con edición en línea y panel de alta.

    - Spinner mientras carga; texto de error si la carga falla (sin tabla)
    - Una sola fila editable a la vez (Edit -> Save/Cancel)
    - Panel "Add Product" con el borrador del nuevo registro
    - SnackBar con el resultado de cada alta/edición/baja
    """

    # =========================================================
    # Init
    # =========================================================
    def __init__(self, controller: ProductListController, editor: ProductRowEditor, *, title: str = ""):
        super().__init__(expand=True)

        self.controller = controller
        self.editor = editor
        self._title = title

        # ---- UI knobs ----
        self.UI = dict(
            pad_page=16,
            tf_height=36,
            tf_text_size=12,
            draft_field_width=160,
            w_nama=200,
            w_kategori=140,
            w_harga=110,
            w_qty=90,
            w_satuan=100,
        )

        # Estado
        self._mounted = False
        self._shown_notification: Optional[Notification] = None

        # ---------- Layout base / contenedores ----------
        self.toolbar = ft.Row(spacing=8, alignment=ft.MainAxisAlignment.START)
        self.draft_panel = ft.Container(visible=False, padding=ft.padding.only(bottom=8))
        self.body = ft.Container(expand=True, alignment=ft.alignment.top_left)

        self._build_table()

        self.content = ft.Container(
            expand=True,
            padding=self.UI["pad_page"],
            content=ft.Column(
                expand=True,
                spacing=8,
                scroll=ft.ScrollMode.AUTO,
                controls=[
                    ft.Text(self._title, size=22, weight="bold"),
                    ft.Container(
                        border=ft.border.all(1, ft.Colors.OUTLINE_VARIANT),
                        border_radius=8,
                        padding=16,
                        content=ft.Column(
                            spacing=8,
                            controls=[self.toolbar, self.draft_panel, self.body],
                        ),
                    ),
                ],
            ),
        )

        self._render()

    # ---------------------------
    # Ciclo de vida
    # ---------------------------
    def did_mount(self):
        self._mounted = True
        self._subscribe()
        self.page.run_task(self.controller.load)

    def will_unmount(self):
        self._mounted = False
        self._unsubscribe()

    def _subscribe(self):
        """Se suscribe a lista y editor: cada cambio repinta."""
        self.controller.add_listener(self._on_controller_changed)
        self.editor.add_listener(self._render)

    def _unsubscribe(self):
        self.controller.remove_listener(self._on_controller_changed)
        self.editor.remove_listener(self._render)

    def _safe_update(self):
        p = self.page if self._mounted else None
        if p:
            try:
                p.update()
            except AssertionError:
                pass

    # =========================================================
    # Logging util
    # =========================================================
    def _log(self, *args):
        print("[ProductsContainer]", *args)

    # =========================================================
    # Render
    # =========================================================
    def _on_controller_changed(self):
        # Durante la recarga la lista está vacía a propósito; solo se
        # reconcilia la fila en edición contra una lista ya cargada
        if self.controller.view_state() is E_VIEW_STATE.READY:
            self.editor.sync(self.controller.products)
        self._render()

    def _render(self):
        self._render_toolbar()
        self._render_draft_panel()

        state = self.controller.view_state()
        if state is E_VIEW_STATE.LOADING:
            self.body.content = ft.Row([ft.ProgressRing()], alignment=ft.MainAxisAlignment.START)
        elif state is E_VIEW_STATE.ERROR:
            self.body.content = ft.Text(self.controller.error or "", color=ft.Colors.ERROR)
        else:
            self.table_builder.set_rows(self.controller.products)
            self.body.content = self.table

        self._render_notification()
        self._safe_update()

    def _render_toolbar(self):
        self.toolbar.controls = [boton_toggle_alta(self._on_toggle_add, abierto=self.editor.is_adding)]

    def _render_draft_panel(self):
        self.draft_panel.visible = self.editor.is_adding
        if not self.editor.is_adding:
            self.draft_panel.content = None
            return

        fields: List[ft.Control] = []
        for field, value in self.editor.draft.items():
            is_num = field in NUMERIC_FIELDS
            tf = ft.TextField(
                label=draft_label(field),
                value=FieldParser.to_display(value),
                width=self.UI["draft_field_width"],
                height=self.UI["tf_height"],
                text_size=self.UI["tf_text_size"],
                keyboard_type=ft.KeyboardType.NUMBER if is_num else ft.KeyboardType.TEXT,
                on_change=lambda e, f=field: self._on_draft_change(f, e.control),
            )
            fields.append(tf)

        fields.append(boton_enviar_alta(lambda e: self.page.run_task(self._on_submit_draft)))
        self.draft_panel.content = ft.Row(fields, wrap=True, spacing=8, run_spacing=8)

    def _render_notification(self):
        n = self.controller.notification
        if n is None:
            self._shown_notification = None
            return
        # Se espera a que termine la recarga: el aviso final depende de ella
        if n is self._shown_notification or not self._mounted or self.controller.loading:
            return
        self._shown_notification = n
        is_error = n.severity == E_SEVERITY.ERROR.value
        snack = ft.SnackBar(
            ft.Text(n.message, color=ft.Colors.WHITE),
            bgcolor=ft.Colors.RED_600 if is_error else ft.Colors.GREEN_700,
            duration=NOTIFICATION_AUTO_HIDE_MS,
            show_close_icon=True,
            on_dismiss=lambda e, shown=n: self._on_snack_dismissed(shown),
        )
        self.page.open(snack)

    def _on_snack_dismissed(self, shown: Notification):
        # Un SnackBar viejo no debe borrar un aviso más nuevo
        if self.controller.notification is shown:
            self.controller.dismiss_notification()

    # =========================================================
    # Formatters por columna
    # =========================================================
    def _fmt_field(self, field: str, row: Dict[str, Any], index: int) -> ft.Control:
        if not self.editor.is_editing(index):
            return ft.Text(FieldParser.to_display(row.get(field)), size=12)

        tf = ft.TextField(
            value=FieldParser.to_display(self.editor.display_value(row, index, field)),
            height=self.UI["tf_height"],
            text_size=self.UI["tf_text_size"],
            keyboard_type=ft.KeyboardType.NUMBER if field in NUMERIC_FIELDS else ft.KeyboardType.TEXT,
            content_padding=ft.padding.symmetric(horizontal=8, vertical=4),
        )

        def _on_change(e: ft.ControlEvent, f=field):
            ok = self.editor.set_field(f, e.control.value)
            e.control.border_color = None if ok else ft.Colors.RED
            e.control.update()

        tf.on_change = _on_change
        return tf

    # =========================================================
    # Actions builder (botones por fila)
    # =========================================================
    def _actions_builder(self, row: Dict[str, Any], index: int) -> ft.Control:
        rid = row.get(E_PRODUCTO.ID.value)
        if self.editor.is_editing(index):
            first: List[ft.Control] = [
                boton_guardar(
                    lambda e, r=row: self.page.run_task(self._on_save_row, r),
                    disabled=self.editor.is_busy("save", index),
                ),
                boton_cancelar(lambda e: self._on_cancel_edit()),
            ]
        else:
            first = [boton_editar(lambda e, i=index: self._on_edit_row(i))]

        return ft.Row(
            first + [
                boton_borrar(
                    lambda e, r=row: self.page.run_task(self._on_delete_row, r),
                    disabled=self.editor.is_busy("delete", rid),
                ),
            ],
            spacing=6,
            alignment=ft.MainAxisAlignment.START,
        )

    # =========================================================
    # Callbacks de acciones
    # =========================================================
    def _on_edit_row(self, index: int):
        self.editor.begin_edit(index)
        self._render()

    def _on_cancel_edit(self):
        self.editor.cancel_edit()
        self._render()

    async def _on_save_row(self, row: Dict[str, Any]):
        self._log("→ save", row.get(E_PRODUCTO.ID.value))
        await self.editor.save(row)
        self._render()

    async def _on_delete_row(self, row: Dict[str, Any]):
        self._log("→ delete", row.get(E_PRODUCTO.ID.value))
        await self.editor.remove(row)
        self._render()

    def _on_toggle_add(self):
        self.editor.toggle_add_panel()
        self._render()

    def _on_draft_change(self, field: str, tf: ft.TextField):
        ok = self.editor.set_draft_field(field, tf.value)
        tf.border_color = None if ok else ft.Colors.RED
        tf.update()

    async def _on_submit_draft(self):
        await self.editor.submit_draft()
        self._render()

    # =========================================================
    # Tabla
    # =========================================================
    def _build_table(self) -> None:
        P = E_PRODUCTO

        def col(field: E_PRODUCTO, title: str, width_key: str) -> ColumnSpec:
            return ColumnSpec(
                key=field.value,
                title=title,
                width=self.UI[width_key],
                formatter=lambda value, row, index, f=field.value: self._fmt_field(f, row, index),
            )

        self.table_builder = TableBuilder(
            [
                col(P.NAMA, "Nama Item", "w_nama"),
                col(P.KATEGORI, "Kategori", "w_kategori"),
                col(P.HARGA, "Harga", "w_harga"),
                col(P.QTY, "Qty", "w_qty"),
                col(P.SATUAN, "Satuan", "w_satuan"),
            ],
            row_actions=self._actions_builder,
        )
        self.table = self.table_builder.build()
