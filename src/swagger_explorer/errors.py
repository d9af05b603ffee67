"""Exceptions raised while configuring, exploring and assembling documents."""


class SwaggerError(Exception):
    """Base class for all swagger-explorer errors."""


class ConfigurationError(SwaggerError):
    """The swagger configuration is missing or was used before setup."""


class DocumentValidationError(SwaggerError):
    """An assembled document lacks a structurally required field."""

    def __init__(self, missing_field: str):
        self.missing_field = missing_field
        super().__init__(f"Invalid OpenAPI document structure: missing '{missing_field}'")


class UnresolvedReferenceError(SwaggerError):
    """A schema reference names a model that was never registered."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Schema reference '{name}' does not match any registered model")


class RegistryFrozenError(SwaggerError):
    """An annotation was applied after the registry was frozen."""
