"""Tests for the Flet products view, built without a running page."""

import flet as ft

from product_dashboard.auth.credential_provider import StaticCredentialProvider, bearer_header
from product_dashboard.ui.builders.table_builder import ColumnSpec, TableBuilder
from product_dashboard.views.containers.products.products_container import ProductsContainer, draft_label
from product_dashboard.views.window_main_view import WindowMain, page_title, window_main

from conftest import FakePage, FakeSession, run


def _header_titles(table: ft.DataTable):
    return [col.label.content.value for col in table.columns]


def _cell_control(row: ft.DataRow, col: int) -> ft.Control:
    content = row.cells[col].content
    return content.content if isinstance(content, ft.Container) else content


class TestLabels:
    def test_draft_label_replaces_first_underscore(self):
        assert draft_label("nama_item") == "NAMA ITEM"
        assert draft_label("harga_item") == "HARGA ITEM"

    def test_page_title(self):
        assert page_title("Minimal UI") == "Product List | Dashboard - Minimal UI"


class TestTableBuilder:
    def test_numbered_rows_and_actions(self):
        builder = TableBuilder(
            [ColumnSpec(key="nama_item", title="Nama Item")],
            row_actions=lambda row, i: ft.Text(f"act-{i}"),
        )
        table = builder.build()
        builder.set_rows([{"nama_item": "Pen"}, {"nama_item": "Paper"}])

        assert _header_titles(table) == ["No", "Nama Item", "Actions"]
        assert [r.cells[0].content.value for r in table.rows] == ["1", "2"]
        assert _cell_control(table.rows[1], 1).value == "Paper"
        assert table.rows[0].cells[2].content.value == "act-0"
        assert builder.rows == [{"nama_item": "Pen"}, {"nama_item": "Paper"}]

    def test_missing_value_renders_empty(self):
        builder = TableBuilder([ColumnSpec(key="qty_item", title="Qty", numeric=True)], number_title=None)
        table = builder.build()
        builder.set_rows([{}])

        assert _header_titles(table) == ["Qty"]
        assert table.columns[0].numeric is True
        assert _cell_control(table.rows[0], 0).value == ""

    def test_alignment_lookup(self):
        assert ColumnSpec(key="k", title="K", align="right").alignment == ft.alignment.center_right
        assert ColumnSpec(key="k", title="K").alignment == ft.alignment.center_left


class TestProductsContainer:
    def test_spinner_while_loading(self, controller, editor):
        view = ProductsContainer(controller, editor)
        assert isinstance(view.body.content.controls[0], ft.ProgressRing)

    def test_table_after_load(self, controller, editor):
        view = ProductsContainer(controller, editor)
        run(controller.load())
        view._on_controller_changed()

        assert view.body.content is view.table
        assert _header_titles(view.table) == ["No", "Nama Item", "Kategori", "Harga", "Qty", "Satuan", "Actions"]
        assert len(view.table.rows) == 2
        assert _cell_control(view.table.rows[0], 1).value == "Pen"
        assert _cell_control(view.table.rows[1], 3).value == "45000"

    def test_error_text_instead_of_table(self, controller, editor, backend):
        backend.fail.add("GET")
        view = ProductsContainer(controller, editor)
        run(controller.load())
        view._on_controller_changed()

        assert isinstance(view.body.content, ft.Text)
        assert view.body.content.value == "Failed to fetch products."

    def test_editing_row_shows_inputs(self, controller, editor):
        view = ProductsContainer(controller, editor)
        run(controller.load())
        editor.begin_edit(1)
        editor.set_field("qty_item", "7")
        view._render()

        assert isinstance(_cell_control(view.table.rows[0], 1), ft.Text)
        qty = _cell_control(view.table.rows[1], 4)
        assert isinstance(qty, ft.TextField)
        assert qty.value == "7"

    def test_draft_panel_follows_editor(self, controller, editor):
        view = ProductsContainer(controller, editor)
        assert view.draft_panel.visible is False

        view._on_toggle_add()

        assert view.draft_panel.visible is True
        labels = [c.label for c in view.draft_panel.content.controls if isinstance(c, ft.TextField)]
        assert labels == ["NAMA ITEM", "KATEGORI ITEM", "HARGA ITEM", "QTY ITEM", "SATUAN ITEM"]


def _row_buttons(view: ProductsContainer, index: int):
    return {b.text: b for b in view.table.rows[index].cells[-1].content.controls}


class TestRepaintOnChanges:
    def test_edit_survives_reload_after_another_row_is_deleted(self, controller, editor):
        view = ProductsContainer(controller, editor)
        view._subscribe()

        async def scenario():
            await controller.load()
            editor.begin_edit(0)
            editor.set_field("nama_item", "Pencil")
            return await editor.remove(controller.products[1])

        assert run(scenario()) is True

        assert editor.is_editing(0)
        assert editor.edit_state.buffer["nama_item"] == "Pencil"
        assert len(view.table.rows) == 1
        name = _cell_control(view.table.rows[0], 1)
        assert isinstance(name, ft.TextField)
        assert name.value == "Pencil"

    def test_edit_survives_reload_after_add(self, controller, editor):
        view = ProductsContainer(controller, editor)
        view._subscribe()

        async def scenario():
            await controller.load()
            editor.begin_edit(1)
            editor.set_field("qty_item", "9")
            editor.toggle_add_panel()
            editor.set_draft_field("nama_item", "Ink")
            return await editor.submit_draft()

        assert run(scenario()) is True
        assert editor.is_editing(1)
        assert editor.edit_state.buffer["qty_item"] == 9

    def test_edit_ends_when_its_row_is_gone_after_reload(self, controller, editor):
        view = ProductsContainer(controller, editor)
        view._subscribe()

        async def scenario():
            await controller.load()
            editor.begin_edit(1)
            await editor.remove(controller.products[1])

        run(scenario())
        assert editor.editing_row_index is None

    def test_row_buttons_disabled_while_request_in_flight(self, controller, editor, backend):
        view = ProductsContainer(controller, editor)
        view._subscribe()
        seen = {}

        def capture(request):
            if request.method == "PUT":
                buttons = _row_buttons(view, 0)
                seen["save"] = buttons["Save"].disabled
                seen["delete"] = buttons["Delete"].disabled
            if request.method == "DELETE":
                seen["delete_while_deleting"] = _row_buttons(view, 1)["Delete"].disabled

        backend.on_request = capture

        async def scenario():
            await controller.load()
            editor.begin_edit(0)
            editor.set_field("harga_item", "2500")
            await editor.save(controller.products[0])
            await editor.remove(controller.products[1])

        run(scenario())

        assert seen == {"save": True, "delete": False, "delete_while_deleting": True}
        # released once the requests finished
        assert editor.is_busy("save", 0) is False
        assert _row_buttons(view, 0)["Delete"].disabled is False

    def test_unsubscribe_stops_repaints(self, controller, editor):
        view = ProductsContainer(controller, editor)
        view._subscribe()
        view._unsubscribe()

        run(controller.load())
        assert isinstance(view.body.content.controls[0], ft.ProgressRing)


class TestWindowMain:
    def setup_method(self):
        WindowMain.reset_instance()

    def teardown_method(self):
        WindowMain.reset_instance()

    def test_build_products_view(self):
        client = WindowMain.client_for(StaticCredentialProvider("t"))
        view = WindowMain().build_products_view(client)

        assert isinstance(view, ProductsContainer)
        assert view.controller.loading is True
        assert view.controller.model.client is client

    def test_each_page_gets_its_own_client_and_token(self):
        page_a = FakePage(FakeSession({"jwt_access_token": "token-a"}))
        page_b = FakePage(FakeSession({"jwt_access_token": "token-b"}))

        view_a = window_main(page_a)
        view_b = window_main(page_b)

        client_a = view_a.controller.model.client
        client_b = view_b.controller.model.client
        assert client_a is not client_b
        assert bearer_header(client_a.credentials) == "Bearer token-a"
        assert bearer_header(client_b.credentials) == "Bearer token-b"
        assert page_a.title == "Product List | Dashboard - Minimal UI"
        assert page_a.controls == [view_a]

    def test_disconnect_closes_only_that_page_client(self):
        page_a, page_b = FakePage(), FakePage()
        view_a = window_main(page_a)
        view_b = window_main(page_b)
        client_a = view_a.controller.model.client
        client_b = view_b.controller.model.client

        async def scenario():
            client_a._ensure_client()
            open_b = client_b._ensure_client()
            await page_a.on_disconnect(None)
            return open_b

        open_b = run(scenario())

        assert client_a._client is None
        assert client_b._client is open_b
        assert not open_b.is_closed
