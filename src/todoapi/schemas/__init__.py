"""Pydantic schemas for API request bodies and JSON:API response documents."""

from todoapi.schemas.jsonapi import (
    JSONAPI_VERSION,
    JSONAPIError,
    JSONAPIErrorSource,
    JSONAPIObject,
    JSONAPIRelationship,
    JSONAPIResource,
    JSONAPIResourceIdentifier,
    JSONAPIResponse,
)

__all__ = [
    "JSONAPI_VERSION",
    "JSONAPIError",
    "JSONAPIErrorSource",
    "JSONAPIObject",
    "JSONAPIRelationship",
    "JSONAPIResource",
    "JSONAPIResourceIdentifier",
    "JSONAPIResponse",
]
