# product_dashboard/helpers/format/field_parser.py

from typing import Any, Union

from product_dashboard.core.enums.e_productos import EDITABLE_FIELDS, NUMERIC_FIELDS

Number = Union[int, float]


class FieldParser:
    """
    Normaliza lo que el usuario escribe en los inputs antes de guardarlo en un buffer.
    - Campos numéricos (qty/harga): int si es entero, float si trae decimales.
    - Resto: texto tal cual.
    """

    @staticmethod
    def to_number(value: Any) -> Number:
        """Convierte a número. Vacío -> 0. Lanza ValueError si no es numérico."""
        if isinstance(value, bool):
            raise ValueError(f"Valor numérico inválido: {value!r}")
        if isinstance(value, int):
            return value
        if isinstance(value, float):
            if value != value or value in (float("inf"), float("-inf")):
                raise ValueError(f"Valor numérico inválido: {value!r}")
            return int(value) if value.is_integer() else value

        txt = ("" if value is None else str(value)).strip().replace(",", ".")
        if not txt:
            return 0
        # int()/float() aceptan "1_000"; en un input eso es un error de tipeo
        if "_" in txt:
            raise ValueError(f"Valor numérico inválido: {value!r}")
        try:
            return int(txt)
        except ValueError:
            pass
        return FieldParser.to_number(float(txt))

    @staticmethod
    def coerce(field: str, value: Any) -> Any:
        """Valor listo para el buffer. KeyError si el campo no es editable."""
        if field not in EDITABLE_FIELDS:
            raise KeyError(field)
        if field in NUMERIC_FIELDS:
            return FieldParser.to_number(value)
        return "" if value is None else str(value)

    @staticmethod
    def to_display(value: Any) -> str:
        return "" if value is None else str(value)
