"""Metadata records contributed by annotations.

Annotations never build document fragments directly. They record these
models in a MetadataStore, and the explorer turns the merged records into
OpenAPI objects. Scalar fields use None for "not contributed" so that a
later fragment only overrides what it actually sets.
"""

from enum import Enum
from http import HTTPStatus
from typing import Any

from pydantic import BaseModel, ConfigDict

from .schema import Schema, string
from .security import SecurityScheme


class HttpMethod(str, Enum):
    GET = "GET"
    PUT = "PUT"
    POST = "POST"
    DELETE = "DELETE"
    OPTIONS = "OPTIONS"
    HEAD = "HEAD"
    PATCH = "PATCH"
    TRACE = "TRACE"


class ParamLocation(str, Enum):
    PATH = "path"
    QUERY = "query"
    HEADER = "header"
    COOKIE = "cookie"


class Param(BaseModel):
    """A single operation parameter."""

    model_config = ConfigDict(extra="forbid")

    name: str
    location: ParamLocation
    required: bool = False
    schema_: Schema = string()
    description: str | None = None
    deprecated: bool | None = None
    example: Any = None

    def to_openapi(self) -> dict:
        result: dict[str, Any] = {
            "name": self.name,
            "in": self.location.value,
            # Path parameters are always required.
            "required": self.required or self.location is ParamLocation.PATH,
            "schema": self.schema_.to_openapi(),
        }
        if self.description is not None:
            result["description"] = self.description
        if self.deprecated is not None:
            result["deprecated"] = self.deprecated
        if self.example is not None:
            result["example"] = self.example
        return result


class RequestBody(BaseModel):
    schema_: Schema
    description: str | None = None
    required: bool = True
    content_type: str = "application/json"

    def to_openapi(self) -> dict:
        result: dict[str, Any] = {}
        if self.description is not None:
            result["description"] = self.description
        result["required"] = self.required
        result["content"] = {self.content_type: {"schema": self.schema_.to_openapi()}}
        return result


class Response(BaseModel):
    description: str | None = None
    schema_: Schema | None = None
    content_type: str | None = None

    def to_openapi(self, status_code: str) -> dict:
        result: dict[str, Any] = {"description": self.description or _reason_phrase(status_code)}
        if self.schema_ is not None:
            content_type = self.content_type or "application/json"
            result["content"] = {content_type: {"schema": self.schema_.to_openapi()}}
        return result


class OperationMeta(BaseModel):
    """Operation metadata recorded against a group class or an endpoint function."""

    summary: str | None = None
    description: str | None = None
    operation_id: str | None = None
    deprecated: bool | None = None
    tags: list[str] = []
    parameters: list[Param] = []
    request_body: RequestBody | None = None
    responses: dict[str, Response] = {}
    security: list[dict[str, list[str]]] = []
    security_schemes: dict[str, SecurityScheme] = {}

    def schemas(self):
        """Yield every schema used by this operation."""
        for param in self.parameters:
            yield param.schema_
        if self.request_body is not None:
            yield self.request_body.schema_
        for response in self.responses.values():
            if response.schema_ is not None:
                yield response.schema_


class ModelMeta(BaseModel):
    """Model metadata recorded against a model class.

    `properties` keeps first-declaration order; `required` is an ordered set.
    """

    title: str | None = None
    description: str | None = None
    example: Any = None
    properties: dict[str, Schema] = {}
    required: list[str] = []

    def to_openapi(self) -> dict:
        result: dict[str, Any] = {"type": "object"}
        for key in ("title", "description", "example"):
            value = getattr(self, key)
            if value is not None:
                result[key] = value
        result["properties"] = {name: prop.to_openapi() for name, prop in self.properties.items()}
        if self.required:
            result["required"] = list(self.required)
        return result

    def references(self):
        for prop in self.properties.values():
            yield from prop.references()


def _reason_phrase(status_code: str) -> str:
    try:
        return HTTPStatus(int(status_code)).phrase
    except ValueError:
        return "Response"
