# main.py
import flet as ft
from product_dashboard.views.window_main_view import window_main


# -------------------------------------------------
# 🚀 Punto de entrada
# -------------------------------------------------
def _entrypoint(page: ft.Page):
    """Lanza la ventana principal sobre la Page que entrega Flet."""
    return window_main(page)


def iniciar_aplicacion():
    """Punto de entrada principal."""
    print("🚀 Lanzando aplicación...")
    ft.app(target=_entrypoint)


# -------------------------------------------------
# 🧩 Ejecución directa
# -------------------------------------------------
if __name__ == "__main__":
    iniciar_aplicacion()
