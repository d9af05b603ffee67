"""Annotation surface: decorators that record metadata fragments.

Every decorator records exactly one fragment through
`SwaggerRegistry.annotate`, which merges it into the record already held
for the same target. Python applies stacked decorators bottom-up, and
that is the order in which list fields (tags, parameters, security)
accumulate.

    api = SwaggerAnnotations(registry)

    @api.model(description="A user")
    class User:
        id = api.field(string(), required=True)
        email = api.field(string(format="email"))

    @controller("users")
    @api.tags("Users")
    class UserController:
        @get(":id")
        @api.response(200, schema=ref(User))
        @api.param("id", description="User id")
        def find(self, id): ...
"""

from typing import Any, Iterable

from .base import ModelMeta, OperationMeta, Param, ParamLocation, RequestBody, Response
from .schema import string, with_description
from .security import (
    ApiKeyScheme,
    BasicAuthScheme,
    BearerAuthScheme,
    CustomScheme,
    OAuth2Scheme,
    OAuthFlows,
    SecurityScheme,
)
from .store import SwaggerRegistry


class ApiProperty:
    """Class-body declaration of one model property.

    Python calls `__set_name__` when the owning class is created, which
    is where the property is recorded and the owner registered as a model.
    """

    def __init__(self, annotations: "SwaggerAnnotations", schema, description=None, required=False):
        self.annotations = annotations
        self.schema = with_description(schema, description)
        self.required = required
        self.name: str | None = None

    def __set_name__(self, owner, name):
        self.name = name
        self.annotations.add_property(owner, name, self.schema, required=self.required)


class SwaggerAnnotations:
    """Decorator factories bound to one registry."""

    def __init__(self, registry: SwaggerRegistry):
        self.registry = registry

    def _record(self, fragment):
        def decorator(target):
            self.registry.annotate(target, fragment)
            return target

        return decorator

    # -- operations ---------------------------------------------------------

    def operation(
        self,
        summary: str | None = None,
        description: str | None = None,
        operation_id: str | None = None,
        deprecated: bool | None = None,
    ):
        return self._record(
            OperationMeta(
                summary=summary,
                description=description,
                operation_id=operation_id,
                deprecated=deprecated,
            )
        )

    def tags(self, *tags: str):
        """Tags on a group class apply to all of its endpoints, before their own."""
        return self._record(OperationMeta(tags=list(tags)))

    def parameter(self, name: str, location: ParamLocation | str, schema=None, description=None, required=False, **extra):
        param = Param(
            name=name,
            location=ParamLocation(location),
            required=required,
            schema_=schema or string(),
            description=description,
            **extra,
        )
        return self._record(OperationMeta(parameters=[param]))

    def param(self, name: str, schema=None, description: str | None = None, **extra):
        # Path parameters are always required.
        extra.pop("required", None)
        return self.parameter(name, ParamLocation.PATH, schema, description, required=True, **extra)

    def query(self, name: str, schema=None, description: str | None = None, required: bool = False, **extra):
        return self.parameter(name, ParamLocation.QUERY, schema, description, required, **extra)

    def header(self, name: str, schema=None, description: str | None = None, required: bool = False, **extra):
        return self.parameter(name, ParamLocation.HEADER, schema, description, required, **extra)

    def cookie(self, name: str, schema=None, description: str | None = None, required: bool = False, **extra):
        return self.parameter(name, ParamLocation.COOKIE, schema, description, required, **extra)

    def body(self, schema, description: str | None = None, required: bool = True, content_type: str = "application/json"):
        request_body = RequestBody(
            schema_=schema,
            description=description,
            required=required,
            content_type=content_type,
        )
        return self._record(OperationMeta(request_body=request_body))

    def response(self, status_code: int | str, description: str | None = None, schema=None, content_type: str | None = None):
        response = Response(description=description, schema_=schema, content_type=content_type)
        return self._record(OperationMeta(responses={str(status_code): response}))

    # -- security -----------------------------------------------------------

    def security(self, name: str, scopes: Iterable[str] = ()):
        """Require an already described scheme."""
        return self._record(OperationMeta(security=[{name: list(scopes)}]))

    def security_scheme(self, name: str, scheme: SecurityScheme | dict[str, Any], scopes: Iterable[str] = ()):
        """Describe a scheme and require it on the target in one step."""
        if isinstance(scheme, dict):
            scheme = CustomScheme(definition=scheme)
        return self._record(
            OperationMeta(
                security_schemes={name: scheme},
                security=[{name: list(scopes)}],
            )
        )

    def basic_auth(self, name: str = "basicAuth", description: str | None = None):
        return self.security_scheme(name, BasicAuthScheme(description=description))

    def bearer_auth(self, name: str = "bearerAuth", bearer_format: str | None = "JWT", description: str | None = None):
        return self.security_scheme(name, BearerAuthScheme(bearer_format=bearer_format, description=description))

    def oauth2(self, flows: OAuthFlows | dict[str, Any], name: str = "oauth2", scopes: Iterable[str] = (), description: str | None = None):
        if isinstance(flows, dict):
            flows = OAuthFlows.model_validate(flows)
        return self.security_scheme(name, OAuth2Scheme(flows=flows, description=description), scopes)

    def api_key(self, key_name: str, location: str = "header", name: str = "apiKey", description: str | None = None):
        return self.security_scheme(name, ApiKeyScheme(name=key_name, location=location, description=description))

    # -- models -------------------------------------------------------------

    def model(self, title: str | None = None, description: str | None = None, example: Any = None):
        """Register a class as a named model and record its model-level metadata."""

        def decorator(cls):
            self.registry.register_model(cls)
            self.registry.annotate(cls, ModelMeta(title=title, description=description, example=example))
            return cls

        return decorator

    def field(self, schema, description: str | None = None, required: bool = False) -> ApiProperty:
        return ApiProperty(self, schema, description, required)

    def add_property(self, model, name: str, schema, description: str | None = None, required: bool = False):
        """Explicit form of `field` for classes that cannot carry descriptors."""
        fragment = ModelMeta(
            properties={name: with_description(schema, description)},
            required=[name] if required else [],
        )
        self.registry.register_model(model)
        return self.registry.annotate(model, fragment)
