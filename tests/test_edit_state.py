"""Tests for the Viewing | Editing edit-state variant."""

import pytest

from product_dashboard.core.state.edit_state import VIEWING, Editing, Viewing, editing_index

from conftest import PEN


class TestEditing:
    def test_new_editing_has_empty_buffer(self):
        state = Editing(0)
        assert dict(state.buffer) == {}
        assert editing_index(state) == 0

    def test_viewing_has_no_index(self):
        assert editing_index(VIEWING) is None
        assert isinstance(VIEWING, Viewing)

    def test_with_value_returns_new_state(self):
        state = Editing(3)
        updated = state.with_value("harga_item", 2500)

        assert dict(state.buffer) == {}
        assert dict(updated.buffer) == {"harga_item": 2500}
        assert updated.row_index == 3

    def test_buffer_is_read_only(self):
        state = Editing(0).with_value("nama_item", "Pencil")
        with pytest.raises(TypeError):
            state.buffer["nama_item"] = "x"

    def test_merged_with_buffer_wins_per_field(self):
        state = Editing(0).with_value("harga_item", 2500).with_value("satuan_item", "box")
        merged = state.merged_with(PEN)

        assert merged == {**PEN, "harga_item": 2500, "satuan_item": "box"}
        # original record untouched
        assert PEN["harga_item"] == 2000
