"""Stateless construction of JSON:API resource objects and documents.

Every function here is pure and total: arguments left as ``None`` are simply
not emitted, and no validation beyond the Pydantic models is performed.
Passing a missing type or an ``attributes`` mapping that contains ``id`` is
a caller error, not something this module guards against.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from datetime import datetime, timezone
from typing import Any

from todoapi.schemas.jsonapi import (
    JSONAPI_VERSION,
    JSONAPIError,
    JSONAPIErrorSource,
    JSONAPIObject,
    JSONAPIRelationship,
    JSONAPIResource,
    JSONAPIResponse,
)

ResourceData = JSONAPIResource | list[JSONAPIResource] | None


def _present(**members: Any) -> dict[str, Any]:
    """Keep only the keyword arguments that were actually supplied."""
    return {key: value for key, value in members.items() if value is not None}


def format_resource(
    type: str,
    id: str | int,
    attributes: Mapping[str, Any],
    relationships: Mapping[str, JSONAPIRelationship | Mapping[str, Any]] | None = None,
    links: Mapping[str, Any] | None = None,
    meta: Mapping[str, Any] | None = None,
) -> JSONAPIResource:
    """Build a resource object.

    Args:
        type: Resource type, e.g. ``"todos"``.
        id: Resource id; converted with ``str()``.
        attributes: Attribute members, excluding ``id``.
        relationships: Optional relationship objects keyed by name.
        links: Optional resource-level links.
        meta: Optional resource-level meta.

    Returns:
        A ``JSONAPIResource`` with only the supplied optional members set.
    """
    return JSONAPIResource(
        type=type,
        id=str(id),
        attributes=dict(attributes),
        **_present(relationships=relationships, links=links, meta=meta),
    )


def format_data_response(
    data: ResourceData,
    included: Sequence[JSONAPIResource] | None = None,
    meta: Mapping[str, Any] | None = None,
    links: Mapping[str, Any] | None = None,
) -> JSONAPIResponse:
    """Wrap one resource, a list of resources, or ``None`` in a success document.

    ``included`` is only attached when it is non-empty.
    """
    return JSONAPIResponse(
        data=data,
        jsonapi=JSONAPIObject(version=JSONAPI_VERSION),
        **_present(included=list(included) if included else None, meta=meta, links=links),
    )


def format_error_response(
    errors: Sequence[JSONAPIError],
    meta: Mapping[str, Any] | None = None,
    links: Mapping[str, Any] | None = None,
) -> JSONAPIResponse:
    """Wrap a non-empty list of error objects in an error document."""
    return JSONAPIResponse(
        errors=list(errors),
        jsonapi=JSONAPIObject(version=JSONAPI_VERSION),
        **_present(meta=meta, links=links),
    )


def create_error(
    status: str | int | None = None,
    title: str | None = None,
    detail: str | None = None,
    source: JSONAPIErrorSource | Mapping[str, str] | None = None,
    code: str | int | None = None,
    id: str | None = None,
    links: Mapping[str, Any] | None = None,
    meta: Mapping[str, Any] | None = None,
) -> JSONAPIError:
    """Build a single error object; ``status`` and ``code`` are stringified."""
    return JSONAPIError(
        **_present(
            id=id,
            links=links,
            status=None if status is None else str(status),
            code=None if code is None else str(code),
            title=title,
            detail=detail,
            source=source,
            meta=meta,
        )
    )


def extract_attributes(item: Mapping[str, Any]) -> dict[str, Any]:
    """Return every member of ``item`` except ``id`` and keys starting with ``@``."""
    return {
        key: value
        for key, value in item.items()
        if key != "id" and not str(key).startswith("@")
    }


def _list_item_id(item: Mapping[str, Any], position: int) -> Any:
    item_id = item.get("id")
    return position if item_id is None else item_id


def format_list_response(
    type: str,
    items: Iterable[Mapping[str, Any]],
    meta: Mapping[str, Any] | None = None,
    links: Mapping[str, Any] | None = None,
) -> JSONAPIResponse:
    """Format plain mappings as a resource collection.

    An item without an ``id`` takes its 1-based position in the list as id.
    """
    data = [
        format_resource(type, _list_item_id(item, position), extract_attributes(item))
        for position, item in enumerate(items, start=1)
    ]
    return format_data_response(data, meta=meta, links=links)


def serialize(document: JSONAPIResponse) -> dict[str, Any]:
    """Render a document as a JSON-ready dict containing only the members that were set."""
    return document.model_dump(mode="json", exclude_unset=True)


def utc_timestamp() -> str:
    """Current UTC time as ISO-8601 with millisecond precision, e.g. ``2024-05-19T10:00:00.000Z``."""
    return (
        datetime.now(timezone.utc)
        .isoformat(timespec="milliseconds")
        .replace("+00:00", "Z")
    )
