from __future__ import annotations
from enum import Enum


class E_PRODUCTO(Enum):
    """Campos del registro de producto (nombres tal cual viajan en el API)."""
    ID = "id"
    NAMA = "nama_item"
    QTY = "qty_item"
    KATEGORI = "kategori_item"
    HARGA = "harga_item"
    SATUAN = "satuan_item"


# Campos editables (sin el id)
EDITABLE_FIELDS = (
    E_PRODUCTO.NAMA.value,
    E_PRODUCTO.QTY.value,
    E_PRODUCTO.KATEGORI.value,
    E_PRODUCTO.HARGA.value,
    E_PRODUCTO.SATUAN.value,
)

NUMERIC_FIELDS = frozenset({E_PRODUCTO.QTY.value, E_PRODUCTO.HARGA.value})


def draft_defaults() -> dict:
    """Borrador vacío; el orden de llaves es el orden del formulario de alta."""
    return {
        E_PRODUCTO.NAMA.value: "",
        E_PRODUCTO.KATEGORI.value: "",
        E_PRODUCTO.HARGA.value: 0,
        E_PRODUCTO.QTY.value: 0,
        E_PRODUCTO.SATUAN.value: "",
    }


class E_SEVERITY(Enum):
    SUCCESS = "success"
    ERROR = "error"


class E_PRODUCT_MSG(Enum):
    EDITED = "Successfully edited product!"
    ADDED = "Successfully added product!"
    DELETED = "Successfully deleted product!"
    FETCH_FAILED = "Failed to fetch products."


class E_API_ERROR(Enum):
    """Taxonomía de fallos: todo error de red/auth/validación cae en una de dos."""
    LOAD_FAILURE = "load_failure"
    MUTATION_FAILURE = "mutation_failure"


class E_VIEW_STATE(Enum):
    LOADING = "loading"
    ERROR = "error"
    READY = "ready"
