# product_dashboard/helpers/class_singleton.py
from __future__ import annotations
from typing import Any, Dict


def class_singleton(cls):
    """
    Decorador de clase: la primera instancia se reutiliza en cada llamada.
    Expone `cls.reset_instance()` para descartarla (útil en pruebas).
    """
    instances: Dict[type, Any] = {}

    class _Wrapper(cls):
        def __new__(klass, *args, **kwargs):
            if cls not in instances:
                obj = super().__new__(klass)
                instances[cls] = obj
                obj._singleton_initialized = False
            return instances[cls]

        def __init__(self, *args, **kwargs):
            if getattr(self, "_singleton_initialized", False):
                return
            super().__init__(*args, **kwargs)
            self._singleton_initialized = True

        @classmethod
        def reset_instance(klass) -> None:
            instances.pop(cls, None)

    _Wrapper.__name__ = cls.__name__
    _Wrapper.__qualname__ = cls.__qualname__
    _Wrapper.__doc__ = cls.__doc__
    _Wrapper.__module__ = cls.__module__
    return _Wrapper
