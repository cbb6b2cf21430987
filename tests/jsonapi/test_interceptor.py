"""Response interceptor: result classification, formatting and route integration."""

import time
from dataclasses import dataclass

import pytest
from fastapi import APIRouter, FastAPI, Request, Response
from httpx import ASGITransport, AsyncClient
from pydantic import BaseModel

from todoapi.jsonapi.formatter import serialize
from todoapi.jsonapi.interceptor import (
    Empty,
    PlainList,
    PlainObject,
    PlainObjectWithId,
    Primitive,
    ResponseInterceptor,
    SelfDescribing,
    SelfDescribingList,
    classify_result,
    intercept_endpoint,
    jsonapi_route,
    resolve_resource_type,
)


class Note:
    def __init__(self, id, text):
        self.id = id
        self.text = text

    def to_jsonapi(self):
        return {"type": "notes", "id": str(self.id), "attributes": {"text": self.text}}


@dataclass
class Point:
    x: int
    y: int


class Item(BaseModel):
    id: int
    name: str


def make_request(method: str = "GET", path: str = "/api/v1/todos") -> Request:
    return Request(
        {
            "type": "http",
            "method": method,
            "scheme": "http",
            "server": ("test", 80),
            "path": path,
            "root_path": "",
            "query_string": b"",
            "headers": [],
        }
    )


def intercept(result, resource_type="todos", method="GET"):
    interceptor = ResponseInterceptor(resource_type)
    return serialize(interceptor.intercept(result, make_request(method), time.perf_counter()))


# ---------------------------------------------------------------------------
# Classification
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    "value, shape",
    [
        (None, Empty),
        (Note(1, "a"), SelfDescribing),
        ([Note(1, "a"), Note(2, "b")], SelfDescribingList),
        ([], PlainList),
        ([{"id": 1}], PlainList),
        ((1, 2), PlainList),
        ({"id": 5, "content": "x"}, PlainObjectWithId),
        ({"id": None, "content": "x"}, PlainObject),
        ({"status": "ok"}, PlainObject),
        ("Login successful", Primitive),
        (42, Primitive),
        (False, Primitive),
    ],
)
def test_classify_result(value, shape):
    assert isinstance(classify_result(value), shape)


def test_classify_result_converts_models_and_dataclasses():
    assert classify_result(Item(id=3, name="n")) == PlainObjectWithId({"id": 3, "name": "n"})
    assert classify_result(Point(1, 2)) == PlainObject({"x": 1, "y": 2})


# ---------------------------------------------------------------------------
# Formatting
# ---------------------------------------------------------------------------


def test_none_gives_null_data_and_no_attributes():
    document = intercept(None)

    assert document["data"] is None
    assert "attributes" not in str(document)
    assert document["jsonapi"] == {"version": "1.1"}


def test_plain_object_with_id_is_split_into_id_and_attributes():
    document = intercept({"id": 5, "content": "x", "isDone": True})

    assert document["data"] == {
        "type": "todos",
        "id": "5",
        "attributes": {"content": "x", "isDone": True},
    }


def test_meta_and_links_describe_the_request():
    document = intercept({"id": 5}, method="PUT")

    assert document["meta"]["method"] == "PUT"
    assert document["meta"]["duration"].endswith("ms")
    assert document["meta"]["timestamp"].endswith("Z")
    assert document["links"] == {"self": "http://test/api/v1/todos"}


def test_self_describing_value_uses_its_own_type():
    document = intercept(Note(9, "hi"))

    assert document["data"] == {"type": "notes", "id": "9", "attributes": {"text": "hi"}}


def test_self_describing_list_gives_a_resource_per_element():
    document = intercept([Note(1, "a"), Note(2, "b")])

    assert [resource["id"] for resource in document["data"]] == ["1", "2"]
    assert {resource["type"] for resource in document["data"]} == {"notes"}


def test_empty_list_gives_empty_data_array():
    assert intercept([])["data"] == []


def test_list_of_mappings_with_ids_gives_list_of_declared_type():
    document = intercept([{"id": 1, "content": "a"}, {"id": 2, "content": "b"}])

    assert document["data"] == [
        {"type": "todos", "id": "1", "attributes": {"content": "a"}},
        {"type": "todos", "id": "2", "attributes": {"content": "b"}},
    ]


def test_list_without_ids_is_wrapped_in_a_synthetic_resource():
    document = intercept(["a", "b"])

    assert document["data"] == {"type": "todos", "id": "1", "attributes": {"items": ["a", "b"]}}


def test_plain_object_without_id_becomes_synthetic_resource():
    document = intercept({"status": "ok"}, resource_type="system")

    assert document["data"] == {"type": "system", "id": "1", "attributes": {"status": "ok"}}


def test_primitive_becomes_message_attribute():
    document = intercept("Login successful", resource_type="auth")

    assert document["data"] == {
        "type": "auth",
        "id": "1",
        "attributes": {"message": "Login successful"},
    }


@pytest.mark.parametrize(
    "declared, path, expected",
    [
        ("todos", "/anything", "todos"),
        (None, "/api/v1/todos/5", "todos"),
        (None, "/api/v1", "resources"),
        (None, "/health", "health"),
    ],
)
def test_resolve_resource_type(declared, path, expected):
    assert resolve_resource_type(declared, path, "/api/v1") == expected


# ---------------------------------------------------------------------------
# Route integration
# ---------------------------------------------------------------------------


def build_app() -> FastAPI:
    router = APIRouter(route_class=jsonapi_route("widgets"))

    @router.get("/{id}")
    async def get_widget(id: int) -> dict:
        return {"id": id, "name": "gear"}

    @router.post("", status_code=201)
    async def create_widget(response: Response) -> str:
        response.headers.append("set-cookie", "a=1; Path=/")
        response.headers.append("set-cookie", "b=2; Path=/")
        return "created"

    @router.get("")
    def list_widgets(request: Request) -> list:
        return [{"id": 1, "name": request.method}]

    @router.delete("/{id}")
    async def delete_widget(id: int) -> None:
        return None

    api = APIRouter()
    api.include_router(router, prefix="/widgets")
    app = FastAPI()
    app.include_router(api, prefix="/api/v1")
    return app


@pytest.fixture
async def widget_client():
    transport = ASGITransport(app=build_app())
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


async def test_route_wraps_async_endpoint_once(widget_client):
    response = await widget_client.get("/api/v1/widgets/3")

    assert response.status_code == 200
    body = response.json()
    assert body["data"] == {"type": "widgets", "id": "3", "attributes": {"name": "gear"}}
    assert body["links"]["self"] == "http://test/api/v1/widgets/3"


async def test_route_keeps_status_code_and_sub_response_headers(widget_client):
    response = await widget_client.post("/api/v1/widgets")

    assert response.status_code == 201
    assert response.headers.get_list("set-cookie") == ["a=1; Path=/", "b=2; Path=/"]
    assert response.json()["data"]["attributes"] == {"message": "created"}


async def test_route_runs_sync_endpoint_with_its_own_request(widget_client):
    response = await widget_client.get("/api/v1/widgets")

    assert response.json()["data"] == [
        {"type": "widgets", "id": "1", "attributes": {"name": "GET"}}
    ]


async def test_route_none_result_gives_null_data(widget_client):
    response = await widget_client.delete("/api/v1/widgets/3")

    assert response.status_code == 200
    assert response.json()["data"] is None


def test_intercept_endpoint_is_idempotent():
    async def endpoint() -> str:
        return "x"

    interceptor = ResponseInterceptor("things")
    wrapped = intercept_endpoint(endpoint, interceptor)

    assert intercept_endpoint(wrapped, interceptor) is wrapped
    assert wrapped.__name__ == "endpoint"
