"""pytest configuration and fixtures for product_dashboard tests."""

import asyncio
import json

import httpx
import pytest

from product_dashboard.auth.credential_provider import StaticCredentialProvider
from product_dashboard.config.api.api_client import ApiClient
from product_dashboard.config.api.config import ApiSettings
from product_dashboard.controllers.product_list_controller import ProductListController
from product_dashboard.controllers.product_row_editor import ProductRowEditor
from product_dashboard.models.products_model import ProductsModel

ITEMS_PATH = "/api/product/items"

PEN = {
    "id": "1",
    "nama_item": "Pen",
    "qty_item": 10,
    "kategori_item": "Office",
    "harga_item": 2000,
    "satuan_item": "pcs",
}

PAPER = {
    "id": "2",
    "nama_item": "Paper",
    "qty_item": 500,
    "kategori_item": "Office",
    "harga_item": 45000,
    "satuan_item": "rim",
}


class FakeBackend:
    """In-memory stand-in for the product REST API."""

    def __init__(self, items=None):
        self.items = [dict(i) for i in (items or [])]
        self.requests = []
        self.fail = set()
        self.next_id = 100
        # Called with the request while it is in flight
        self.on_request = None

    def calls(self, method=None):
        return [r for r in self.requests if method is None or r["method"] == method]

    async def handler(self, request: httpx.Request) -> httpx.Response:
        # Yield so overlapping calls can interleave
        await asyncio.sleep(0)

        body = json.loads(request.content) if request.content else None
        self.requests.append({
            "method": request.method,
            "path": request.url.path,
            "body": body,
            "auth": request.headers.get("Authorization"),
        })
        if self.on_request is not None:
            self.on_request(request)
        if request.method in self.fail:
            return httpx.Response(500, json={"message": "boom"})

        path = request.url.path
        if path == ITEMS_PATH:
            if request.method == "GET":
                return httpx.Response(200, json={"data": self.items})
            if request.method == "POST":
                created = dict(body, id=str(self.next_id))
                self.next_id += 1
                self.items.append(created)
                return httpx.Response(201, json=created)

        if path.startswith(ITEMS_PATH + "/"):
            item_id = path.rsplit("/", 1)[-1]
            idx = next((i for i, it in enumerate(self.items) if it["id"] == item_id), None)
            if idx is None:
                return httpx.Response(404, json={"message": "not found"})
            if request.method == "PUT":
                self.items[idx] = dict(body)
                return httpx.Response(200, json={"message": "updated"})
            if request.method == "DELETE":
                del self.items[idx]
                return httpx.Response(200, json={"message": "deleted"})

        return httpx.Response(405)


def run(coro):
    return asyncio.run(coro)


@pytest.fixture
def backend():
    return FakeBackend([PEN, PAPER])


@pytest.fixture
def credentials():
    return StaticCredentialProvider("test-token")


@pytest.fixture
def api_client(backend, credentials):
    return ApiClient(
        credentials,
        ApiSettings(server_url="http://backend.test", product_api_path="/api/product"),
        transport=httpx.MockTransport(backend.handler),
    )


@pytest.fixture
def model(api_client):
    return ProductsModel(api_client)


@pytest.fixture
def controller(model):
    return ProductListController(model)


@pytest.fixture
def editor(model, controller):
    return ProductRowEditor(
        model,
        on_edit=controller.on_edit,
        on_add=controller.on_add,
        on_delete=controller.on_delete,
    )


class FakeSession:
    """Same get/set/remove surface as Flet's page.session."""

    def __init__(self, values=None):
        self.values = dict(values or {})

    def get(self, key):
        return self.values.get(key)

    def set(self, key, value):
        self.values[key] = value

    def remove(self, key):
        del self.values[key]


class FakePage:
    """Just enough of ft.Page for WindowMain: title, session, add(), on_disconnect."""

    def __init__(self, session=None):
        self.title = None
        self.padding = None
        self.session = session or FakeSession()
        self.on_disconnect = None
        self.controls = []

    def add(self, *controls):
        self.controls.extend(controls)
