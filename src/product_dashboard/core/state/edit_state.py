from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Union


# ============== Estado de edición por fila ==============
@dataclass(frozen=True)
class Viewing:
    """Ninguna fila en edición."""


@dataclass(frozen=True)
class Editing:
    """Exactamente una fila en edición con su buffer de cambios (solo lectura)."""
    row_index: int
    buffer: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))

    def with_value(self, field_name: str, value: Any) -> "Editing":
        nuevo = dict(self.buffer)
        nuevo[field_name] = value
        return Editing(self.row_index, MappingProxyType(nuevo))

    def merged_with(self, record: Mapping[str, Any]) -> Dict[str, Any]:
        """Registro + buffer (gana el buffer campo por campo)."""
        merged = dict(record)
        merged.update(self.buffer)
        return merged


EditState = Union[Viewing, Editing]

VIEWING = Viewing()


def editing_index(state: EditState) -> Optional[int]:
    return state.row_index if isinstance(state, Editing) else None


# ============== Notificación (Snackbar) ==============
@dataclass(frozen=True)
class Notification:
    message: str
    severity: str
