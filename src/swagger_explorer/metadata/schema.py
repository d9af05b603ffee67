"""Schema variants used by parameters, bodies, responses and model properties.

A schema is one of four explicit variants instead of being inferred from
Python types:

- PrimitiveSchema: string / number / integer / boolean
- ArraySchema: array of another schema
- RefSchema: reference to a named model
- ObjectSchema: inline object with its own properties
"""

from typing import Annotated, Any, Iterator, Literal, Union

from pydantic import BaseModel, Field

REF_PREFIX = "#/components/schemas/"


class PrimitiveSchema(BaseModel):
    """A scalar value."""

    variant: Literal["primitive"] = "primitive"
    type: Literal["string", "number", "integer", "boolean"]
    format: str | None = None
    description: str | None = None
    enum: list[Any] | None = None
    default: Any = None
    example: Any = None

    def to_openapi(self) -> dict:
        result: dict[str, Any] = {"type": self.type}
        for key in ("format", "description", "enum", "default", "example"):
            value = getattr(self, key)
            if value is not None:
                result[key] = value
        return result

    def references(self) -> Iterator[str]:
        return iter(())


class ArraySchema(BaseModel):
    """An array whose items follow another schema."""

    variant: Literal["array"] = "array"
    items: "Schema"
    description: str | None = None

    def to_openapi(self) -> dict:
        result: dict[str, Any] = {"type": "array", "items": self.items.to_openapi()}
        if self.description is not None:
            result["description"] = self.description
        return result

    def references(self) -> Iterator[str]:
        yield from self.items.references()


class RefSchema(BaseModel):
    """A `$ref` to a named model under components.schemas."""

    variant: Literal["ref"] = "ref"
    name: str
    # Not emitted: siblings of $ref are ignored by OpenAPI 3.0 tooling.
    description: str | None = None

    def to_openapi(self) -> dict:
        return {"$ref": f"{REF_PREFIX}{self.name}"}

    def references(self) -> Iterator[str]:
        yield self.name


class ObjectSchema(BaseModel):
    """An inline object schema."""

    variant: Literal["object"] = "object"
    properties: dict[str, "Schema"] = {}
    required: list[str] = []
    description: str | None = None

    def to_openapi(self) -> dict:
        result: dict[str, Any] = {"type": "object"}
        if self.description is not None:
            result["description"] = self.description
        if self.properties:
            result["properties"] = {name: prop.to_openapi() for name, prop in self.properties.items()}
        if self.required:
            result["required"] = list(self.required)
        return result

    def references(self) -> Iterator[str]:
        for prop in self.properties.values():
            yield from prop.references()


Schema = Annotated[
    Union[PrimitiveSchema, ArraySchema, RefSchema, ObjectSchema],
    Field(discriminator="variant"),
]

ArraySchema.model_rebuild()
ObjectSchema.model_rebuild()


def string(**kwargs) -> PrimitiveSchema:
    return PrimitiveSchema(type="string", **kwargs)


def integer(**kwargs) -> PrimitiveSchema:
    return PrimitiveSchema(type="integer", **kwargs)


def number(**kwargs) -> PrimitiveSchema:
    return PrimitiveSchema(type="number", **kwargs)


def boolean(**kwargs) -> PrimitiveSchema:
    return PrimitiveSchema(type="boolean", **kwargs)


def date_time(**kwargs) -> PrimitiveSchema:
    return PrimitiveSchema(type="string", format="date-time", **kwargs)


def array_of(items, **kwargs) -> ArraySchema:
    """Array of `items`; a model class or name is turned into a reference."""
    if not isinstance(items, BaseModel):
        items = ref(items)
    return ArraySchema(items=items, **kwargs)


def ref(model) -> RefSchema:
    """Reference a model by class or by name."""
    name = model if isinstance(model, str) else model.__name__
    return RefSchema(name=name)


def obj(required: list[str] | None = None, description: str | None = None, **properties) -> ObjectSchema:
    return ObjectSchema(properties=properties, required=required or [], description=description)


def with_description(schema, description: str | None):
    """Return a copy of `schema` carrying `description` (unchanged when None)."""
    if description is None:
        return schema
    return schema.model_copy(update={"description": description})
