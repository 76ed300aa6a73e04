from __future__ import annotations
import flet as ft
from typing import Any, Optional

from product_dashboard.auth.credential_provider import CredentialProvider, SessionCredentialProvider
from product_dashboard.config.api.api_client import ApiClient
from product_dashboard.config.api.config import ACCESS_TOKEN, APP_NAME, STORAGE_KEY, ApiSettings
from product_dashboard.controllers.product_list_controller import ProductListController
from product_dashboard.controllers.product_row_editor import ProductRowEditor
from product_dashboard.helpers.class_singleton import class_singleton
from product_dashboard.models.products_model import ProductsModel
from product_dashboard.views.containers.products.products_container import ProductsContainer


def page_title(app_name: str = APP_NAME) -> str:
    return f"Product List | Dashboard - {app_name}"


@class_singleton
class WindowMain:
    """
    Arma la página de productos: sesión -> cliente HTTP -> modelo -> controladores -> vista.

    El singleton no guarda nada por página: en modo web cada sesión recibe su
    propio ApiClient y lee su token de su propio `page.session`.
    """

    def build_products_view(self, client: ApiClient) -> ProductsContainer:
        model = ProductsModel(client)
        controller = ProductListController(model)
        editor = ProductRowEditor(
            model,
            on_edit=controller.on_edit,
            on_add=controller.on_add,
            on_delete=controller.on_delete,
        )
        return ProductsContainer(controller, editor, title=page_title())

    @staticmethod
    def client_for(credentials: CredentialProvider, settings: Optional[ApiSettings] = None) -> ApiClient:
        return ApiClient(credentials, settings)

    # ================================ Entry =================================
    def __call__(self, flet_page: ft.Page) -> Any:
        print("🚀 [BOOT] Inicializando WindowMain...")
        flet_page.title = page_title()
        flet_page.padding = 0

        # Token inicial (sin pantalla de login) sembrado en la sesión de esta página
        if ACCESS_TOKEN and not flet_page.session.get(STORAGE_KEY):
            flet_page.session.set(STORAGE_KEY, ACCESS_TOKEN)

        client = self.client_for(SessionCredentialProvider(flet_page.session))
        view = self.build_products_view(client)

        async def _on_disconnect(_e):
            await client.aclose()

        flet_page.on_disconnect = _on_disconnect
        flet_page.add(view)
        return view


def window_main(page: ft.Page):
    return WindowMain()(page)
