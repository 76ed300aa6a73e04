# product_dashboard/ui/builders/table_builder.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence

import flet as ft

CellFormatter = Callable[[Any, Mapping[str, Any], int], ft.Control]
RowActions = Callable[[Mapping[str, Any], int], ft.Control]

_ALIGNMENTS = {
    "center": ft.alignment.center,
    "end": ft.alignment.center_right,
    "right": ft.alignment.center_right,
}


@dataclass(frozen=True)
class ColumnSpec:
    """Una columna: clave del registro, título y cómo pintar la celda."""
    key: str
    title: str
    width: Optional[int] = None
    align: str = "start"
    numeric: bool = False
    formatter: Optional[CellFormatter] = None

    @property
    def alignment(self) -> ft.alignment.Alignment:
        return _ALIGNMENTS.get(self.align, ft.alignment.center_left)


class TableBuilder:
    """
    DataTable de solo presentación.

    Las filas se pintan en el orden recibido (sin orden, filtros ni paginado);
    cada set_rows() reemplaza todo. Columna "No" 1-based y columna de acciones
    opcionales.
    """

    def __init__(
        self,
        columns: Sequence[ColumnSpec],
        *,
        row_actions: Optional[RowActions] = None,
        number_title: Optional[str] = "No",
        actions_title: str = "Actions",
        text_size: int = 12,
        column_spacing: int = 24,
        heading_row_height: int = 44,
        data_row_height: int = 48,
    ) -> None:
        self.columns: List[ColumnSpec] = list(columns)
        self.row_actions = row_actions
        self.number_title = number_title
        self.actions_title = actions_title
        self.text_size = text_size

        self._rows: List[Mapping[str, Any]] = []
        self.table = ft.DataTable(
            columns=[],
            rows=[],
            column_spacing=column_spacing,
            heading_row_height=heading_row_height,
            data_row_min_height=data_row_height,
            show_checkbox_column=False,
        )

    # =========================================================
    # Encabezados
    # =========================================================
    def build(self) -> ft.DataTable:
        self.table.columns = self._headers()
        self.table.rows = self._data_rows()
        return self.table

    def _label(self, title: str, width: Optional[int] = None,
               alignment: ft.alignment.Alignment = ft.alignment.center_left) -> ft.Control:
        return ft.Container(
            ft.Text(title, size=self.text_size, weight="bold"),
            width=width,
            alignment=alignment,
        )

    def _headers(self) -> List[ft.DataColumn]:
        headers = [
            ft.DataColumn(label=self._label(c.title, c.width, c.alignment), numeric=c.numeric)
            for c in self.columns
        ]
        if self.number_title:
            headers.insert(0, ft.DataColumn(label=self._label(self.number_title)))
        if self.row_actions:
            headers.append(ft.DataColumn(label=self._label(self.actions_title)))
        return headers

    # =========================================================
    # Filas
    # =========================================================
    def _render_cell(self, spec: ColumnSpec, record: Mapping[str, Any], index: int) -> ft.DataCell:
        value = record.get(spec.key)
        if spec.formatter is not None:
            inner = spec.formatter(value, record, index)
        else:
            inner = ft.Text("" if value is None else str(value), size=self.text_size)
        return ft.DataCell(ft.Container(inner, width=spec.width, alignment=spec.alignment))

    def _data_row(self, record: Mapping[str, Any], index: int) -> ft.DataRow:
        cells = [self._render_cell(spec, record, index) for spec in self.columns]
        if self.number_title:
            cells.insert(0, ft.DataCell(ft.Text(str(index + 1), size=self.text_size)))
        if self.row_actions:
            cells.append(ft.DataCell(self.row_actions(record, index)))
        return ft.DataRow(cells=cells)

    def _data_rows(self) -> List[ft.DataRow]:
        return [self._data_row(r, i) for i, r in enumerate(self._rows)]

    def set_rows(self, rows: Optional[Sequence[Mapping[str, Any]]]) -> None:
        self._rows = list(rows or [])
        self.refresh()

    def refresh(self) -> None:
        self.table.rows = self._data_rows()
        self._update_if_mounted()

    @property
    def rows(self) -> List[Dict[str, Any]]:
        return [dict(r) for r in self._rows]

    def _update_if_mounted(self) -> None:
        # update() sin Page lanza AssertionError
        if getattr(self.table, "page", None) is None:
            return
        try:
            self.table.update()
        except AssertionError:
            pass
