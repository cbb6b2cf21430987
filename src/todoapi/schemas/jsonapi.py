"""JSON:API document models using Pydantic v2.

Models mirror the JSON:API v1.1 top-level document, resource objects,
relationships and error objects. Optional members default to ``None`` but
are serialized with ``exclude_unset`` so that only the members a caller
actually supplied appear on the wire; a member explicitly set to ``None``
(``data: null``) is kept.

Reference: https://jsonapi.org/format/1.1/
"""

from typing import Any

from pydantic import BaseModel

JSONAPI_VERSION = "1.1"


class JSONAPIResourceIdentifier(BaseModel):
    """A ``{type, id}`` pair identifying a resource, with optional meta."""

    type: str
    id: str
    meta: dict[str, Any] | None = None


class JSONAPIRelationship(BaseModel):
    """A relationship object pointing at one resource, many, or none."""

    data: JSONAPIResourceIdentifier | list[JSONAPIResourceIdentifier] | None
    links: dict[str, Any] | None = None
    meta: dict[str, Any] | None = None


class JSONAPIResource(JSONAPIResourceIdentifier):
    """A single JSON:API resource object with type, id, and attributes."""

    attributes: dict[str, Any]
    relationships: dict[str, JSONAPIRelationship] | None = None
    links: dict[str, Any] | None = None


class JSONAPIErrorSource(BaseModel):
    """Where an error originated: a JSON pointer, query parameter or header."""

    pointer: str | None = None
    parameter: str | None = None
    header: str | None = None


class JSONAPIError(BaseModel):
    """A single JSON:API error object."""

    id: str | None = None
    links: dict[str, Any] | None = None
    status: str | None = None
    code: str | None = None
    title: str | None = None
    detail: str | None = None
    source: JSONAPIErrorSource | None = None
    meta: dict[str, Any] | None = None


class JSONAPIObject(BaseModel):
    """The ``jsonapi`` member describing the implemented version."""

    version: str = JSONAPI_VERSION
    meta: dict[str, Any] | None = None


class JSONAPIResponse(BaseModel):
    """Top-level JSON:API document carrying either ``data`` or ``errors``."""

    data: JSONAPIResource | list[JSONAPIResource] | None = None
    errors: list[JSONAPIError] | None = None
    meta: dict[str, Any] | None = None
    links: dict[str, Any] | None = None
    jsonapi: JSONAPIObject
    included: list[JSONAPIResource] | None = None
