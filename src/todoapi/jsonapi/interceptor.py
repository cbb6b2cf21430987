"""Success-path JSON:API envelope for every route.

Handlers return whatever is natural for them (``None``, a presenter with a
``to_jsonapi()`` method, a list, a dict, a string). ``classify_result`` sorts
the value into one of a closed set of shapes, and ``ResponseInterceptor``
formats each shape into a JSON:API document with request meta and a self
link.

Routers opt in through their route class::

    router = APIRouter(route_class=jsonapi_route("todos"))

which declares the resource type used for values that do not describe
themselves.
"""

from __future__ import annotations

import dataclasses
import inspect
import time
from collections.abc import Callable, Coroutine, Mapping
from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

from fastapi import Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.routing import APIRoute
from pydantic import BaseModel
from starlette.concurrency import run_in_threadpool
from starlette.exceptions import HTTPException as StarletteHTTPException

from todoapi.exceptions import HttpError, InternalServerError
from todoapi.jsonapi.formatter import (
    format_data_response,
    format_list_response,
    format_resource,
    serialize,
    utc_timestamp,
)
from todoapi.jsonapi.normalizer import classify_exception
from todoapi.schemas.jsonapi import JSONAPIResource, JSONAPIResponse

DEFAULT_RESOURCE_TYPE = "resources"
SYNTHETIC_ID = "1"


@runtime_checkable
class JSONAPISerializable(Protocol):
    """A value that can describe itself as ``{type, id, attributes, relationships?}``."""

    def to_jsonapi(self) -> Mapping[str, Any]: ...


# ---------------------------------------------------------------------------
# Result shapes
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Empty:
    """No content: ``None`` returned by the handler."""


@dataclass(frozen=True)
class SelfDescribing:
    value: JSONAPISerializable


@dataclass(frozen=True)
class SelfDescribingList:
    values: list[JSONAPISerializable]


@dataclass(frozen=True)
class PlainList:
    items: list[Any]


@dataclass(frozen=True)
class PlainObjectWithId:
    value: Mapping[str, Any]


@dataclass(frozen=True)
class PlainObject:
    value: Mapping[str, Any]


@dataclass(frozen=True)
class Primitive:
    value: Any


HandlerResult = (
    Empty
    | SelfDescribing
    | SelfDescribingList
    | PlainList
    | PlainObjectWithId
    | PlainObject
    | Primitive
)


def _is_self_describing(value: Any) -> bool:
    return callable(getattr(value, "to_jsonapi", None))


def _as_plain(value: Any) -> Any:
    """Turn Pydantic models and dataclass instances into plain dicts."""
    if isinstance(value, BaseModel):
        return value.model_dump()
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return dataclasses.asdict(value)
    return value


def _has_id(value: Any) -> bool:
    return isinstance(value, Mapping) and value.get("id") is not None


def classify_result(result: Any) -> HandlerResult:
    """Sort a handler's return value into exactly one result shape.

    Self-description wins over every structural rule, so presenters that are
    also dataclasses or models still format themselves.
    """
    if result is None:
        return Empty()
    if _is_self_describing(result):
        return SelfDescribing(result)
    if isinstance(result, (list, tuple)):
        if result and _is_self_describing(result[0]):
            return SelfDescribingList(list(result))
        return PlainList([_as_plain(item) for item in result])
    result = _as_plain(result)
    if isinstance(result, Mapping):
        if _has_id(result):
            return PlainObjectWithId(result)
        return PlainObject(result)
    return Primitive(result)


# ---------------------------------------------------------------------------
# Interceptor
# ---------------------------------------------------------------------------


def resolve_resource_type(declared: str | None, path: str, api_prefix: str = "") -> str:
    """Return the declared type, else the first path segment after the API prefix."""
    if declared:
        return declared
    if api_prefix and path.startswith(api_prefix):
        path = path[len(api_prefix):]
    segments = [segment for segment in path.split("/") if segment]
    return segments[0] if segments else DEFAULT_RESOURCE_TYPE


def _self_described_resource(value: JSONAPISerializable) -> JSONAPIResource:
    described = value.to_jsonapi()
    return format_resource(
        described["type"],
        described["id"],
        described.get("attributes", {}),
        described.get("relationships"),
    )


class ResponseInterceptor:
    """Formats handler results for one resource type.

    Args:
        resource_type: Type used for results that do not describe themselves.
            When ``None`` it is derived from the request path.
        api_prefix: Path prefix skipped when deriving the type from the path.
    """

    def __init__(self, resource_type: str | None = None, api_prefix: str = "") -> None:
        self.resource_type = resource_type
        self.api_prefix = api_prefix

    def intercept(self, result: Any, request: Request, started_at: float) -> JSONAPIResponse:
        """Build the success document for ``result``.

        Args:
            result: The raw value returned by the handler.
            request: The request being answered (method and URL).
            started_at: ``time.perf_counter()`` reading taken before the handler ran.
        """
        duration_ms = int((time.perf_counter() - started_at) * 1000)
        meta = {
            "duration": f"{duration_ms}ms",
            "method": request.method,
            "timestamp": utc_timestamp(),
        }
        links = {"self": str(request.url)}
        resource_type = resolve_resource_type(
            self.resource_type, request.url.path, self.api_prefix
        )
        return self.format(classify_result(result), resource_type, meta, links)

    def format(
        self,
        shape: HandlerResult,
        resource_type: str,
        meta: dict[str, Any],
        links: dict[str, Any],
    ) -> JSONAPIResponse:
        match shape:
            case Empty():
                return format_data_response(None, meta=meta, links=links)
            case SelfDescribing(value):
                return format_data_response(
                    _self_described_resource(value), meta=meta, links=links
                )
            case SelfDescribingList(values):
                return format_data_response(
                    [_self_described_resource(v) for v in values], meta=meta, links=links
                )
            case PlainList(items):
                if not items:
                    return format_data_response([], meta=meta, links=links)
                if _has_id(items[0]):
                    return format_list_response(resource_type, items, meta=meta, links=links)
                resource = format_resource(resource_type, SYNTHETIC_ID, {"items": items})
                return format_data_response(resource, meta=meta, links=links)
            case PlainObjectWithId(value):
                attributes = {k: v for k, v in value.items() if k != "id"}
                resource = format_resource(resource_type, value["id"], attributes)
                return format_data_response(resource, meta=meta, links=links)
            case PlainObject(value):
                resource = format_resource(resource_type, SYNTHETIC_ID, value)
                return format_data_response(resource, meta=meta, links=links)
            case Primitive(value):
                resource = format_resource(resource_type, SYNTHETIC_ID, {"message": value})
                return format_data_response(resource, meta=meta, links=links)
        raise TypeError(f"Unhandled result shape: {shape!r}")


# ---------------------------------------------------------------------------
# Route integration
# ---------------------------------------------------------------------------

_INTERCEPTED = "__jsonapi_intercepted__"


def intercept_endpoint(
    endpoint: Callable[..., Any], interceptor: ResponseInterceptor
) -> Callable[..., Any]:
    """Wrap an endpoint so its return value leaves as a serialized JSON:API document.

    The wrapper exposes the endpoint's own signature to FastAPI, plus a
    ``Request`` parameter when the endpoint does not already take one, so
    dependency injection is unchanged. Wrapping is idempotent, which matters
    because ``include_router`` rebuilds routes from their endpoints.
    """
    if getattr(endpoint, _INTERCEPTED, False):
        return endpoint

    signature = inspect.signature(endpoint, eval_str=True)
    parameters = list(signature.parameters.values())
    request_param = next(
        (p.name for p in parameters if p.annotation is Request), None
    )
    injected = request_param is None
    if injected:
        request_param = "jsonapi_request"
        parameters.append(
            inspect.Parameter(
                request_param, inspect.Parameter.KEYWORD_ONLY, annotation=Request
            )
        )
    is_coroutine = inspect.iscoroutinefunction(endpoint)

    async def wrapper(*args: Any, **kwargs: Any) -> dict[str, Any]:
        request: Request = kwargs.pop(request_param) if injected else kwargs[request_param]
        started_at = time.perf_counter()
        if is_coroutine:
            result = await endpoint(*args, **kwargs)
        else:
            result = await run_in_threadpool(endpoint, *args, **kwargs)
        return serialize(interceptor.intercept(result, request, started_at))

    for attr in ("__module__", "__name__", "__qualname__", "__doc__"):
        setattr(wrapper, attr, getattr(endpoint, attr, None))
    wrapper.__signature__ = signature.replace(
        parameters=parameters, return_annotation=dict[str, Any]
    )
    setattr(wrapper, _INTERCEPTED, True)
    return wrapper


class JSONAPIRoute(APIRoute):
    """API route whose endpoint result is passed through ``ResponseInterceptor``.

    The response model is disabled because the interceptor already produces
    the final, JSON-ready document.
    """

    resource_type: str | None = None
    api_prefix: str = ""

    def __init__(self, path: str, endpoint: Callable[..., Any], **kwargs: Any) -> None:
        kwargs["response_model"] = None
        interceptor = ResponseInterceptor(self.resource_type, self.api_prefix)
        super().__init__(path, intercept_endpoint(endpoint, interceptor), **kwargs)

    def get_route_handler(self) -> Callable[[Request], Coroutine[Any, Any, Response]]:
        handler = super().get_route_handler()

        async def classified_handler(request: Request) -> Response:
            try:
                return await handler(request)
            except (HttpError, StarletteHTTPException, RequestValidationError):
                raise
            except Exception as exc:
                # Answered by the HttpError handler, inside CORS and the exception middleware.
                raise InternalServerError(classify_exception(exc).message) from exc

        return classified_handler


def jsonapi_route(resource_type: str | None = None, api_prefix: str = "") -> type[JSONAPIRoute]:
    """Create a route class bound to ``resource_type``."""
    name = f"JSONAPIRoute_{resource_type or 'inferred'}"
    return type(name, (JSONAPIRoute,), {"resource_type": resource_type, "api_prefix": api_prefix})
