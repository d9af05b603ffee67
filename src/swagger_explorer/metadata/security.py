"""Security scheme descriptors registered under components.securitySchemes."""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class _SchemeModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_openapi(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)


class BasicAuthScheme(_SchemeModel):
    type: Literal["http"] = "http"
    scheme: Literal["basic"] = "basic"
    description: str | None = None


class BearerAuthScheme(_SchemeModel):
    type: Literal["http"] = "http"
    scheme: Literal["bearer"] = "bearer"
    bearer_format: str | None = "JWT"
    description: str | None = None


class ApiKeyScheme(_SchemeModel):
    type: Literal["apiKey"] = "apiKey"
    name: str
    # "in" is a keyword, so the field is renamed and aliased.
    location: Literal["header", "query", "cookie"] = "header"
    description: str | None = None

    def to_openapi(self) -> dict:
        result = super().to_openapi()
        result["in"] = result.pop("location")
        return result


class OAuthFlow(_SchemeModel):
    authorization_url: str | None = None
    token_url: str | None = None
    refresh_url: str | None = None
    scopes: dict[str, str] = {}


class OAuthFlows(_SchemeModel):
    implicit: OAuthFlow | None = None
    password: OAuthFlow | None = None
    client_credentials: OAuthFlow | None = None
    authorization_code: OAuthFlow | None = None


class OAuth2Scheme(_SchemeModel):
    type: Literal["oauth2"] = "oauth2"
    flows: OAuthFlows
    description: str | None = None


class CustomScheme(_SchemeModel):
    """Any scheme definition given verbatim, e.g. openIdConnect."""

    definition: dict[str, Any]

    def to_openapi(self) -> dict:
        return dict(self.definition)


SecurityScheme = BasicAuthScheme | BearerAuthScheme | ApiKeyScheme | OAuth2Scheme | CustomScheme
