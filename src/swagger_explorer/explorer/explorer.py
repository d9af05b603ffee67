"""Document explorer: turns endpoint groups plus registry metadata into
OpenAPI `paths` and `components` maps.

Each explore pass starts from empty accumulators and only reads the
registry, so exploring twice without new annotations yields identical
output. The returned document shares no objects with the registry.
"""

import copy
import logging
from enum import Enum
from typing import Any, Iterable

from pydantic import BaseModel

from swagger_explorer.errors import UnresolvedReferenceError
from swagger_explorer.metadata.base import OperationMeta, Param, ParamLocation
from swagger_explorer.metadata.merge import merge_operation
from swagger_explorer.metadata.schema import string
from swagger_explorer.metadata.store import SwaggerRegistry
from swagger_explorer.routing import Endpoint, group_base_path, iter_endpoints

from .paths import join_path, path_variables

logger = logging.getLogger(__name__)

DEFAULT_RESPONSES = {"200": {"description": "Success"}}


class UnresolvedReferencePolicy(str, Enum):
    """What to do with a `$ref` naming a model the registry does not know."""

    IGNORE = "ignore"
    WARN = "warn"
    ERROR = "error"


class ExploredDocument(BaseModel):
    paths: dict[str, dict[str, Any]] = {}
    schemas: dict[str, dict[str, Any]] = {}
    security_schemes: dict[str, dict[str, Any]] = {}
    unresolved: list[str] = []


class SwaggerExplorer:
    """Walks endpoint groups and resolves the models they reference."""

    def __init__(
        self,
        registry: SwaggerRegistry,
        unresolved_policy: UnresolvedReferencePolicy | str = UnresolvedReferencePolicy.WARN,
    ):
        self.registry = registry
        self.unresolved_policy = UnresolvedReferencePolicy(unresolved_policy)
        self._reset()

    def _reset(self) -> None:
        self._paths: dict[str, dict[str, Any]] = {}
        self._schemas: dict[str, dict[str, Any]] = {}
        self._security_schemes: dict[str, dict[str, Any]] = {}
        self._unresolved: set[str] = set()

    def explore(self, groups: Iterable[type]) -> ExploredDocument:
        with self.registry.lock:
            self._reset()
            self._collect_registered_models()
            for group in groups:
                self._explore_group(group)

            return ExploredDocument(
                paths=copy.deepcopy(self._paths),
                schemas=copy.deepcopy(dict(sorted(self._schemas.items()))),
                security_schemes=copy.deepcopy(dict(sorted(self._security_schemes.items()))),
                unresolved=sorted(self._unresolved),
            )

    def _collect_registered_models(self) -> None:
        """Seed schemas with every registered model that declares properties.

        Models without properties are not fully declared yet and are only
        materialized when something references them.
        """
        for name, _ in self.registry.models.all():
            meta = self.registry.model_meta(name)
            if meta.properties:
                self._resolve(name)

    def _explore_group(self, group) -> None:
        base_path = group_base_path(group)
        group_meta = self.registry.store.get(group) or OperationMeta()

        for endpoint in iter_endpoints(group):
            endpoint_meta = self.registry.store.get(endpoint.handler) or OperationMeta()
            meta = merge_operation(group_meta, endpoint_meta)
            full_path = join_path(base_path, endpoint.route.path)
            self._add_operation(group, endpoint, full_path, meta)

    def _add_operation(self, group, endpoint: Endpoint, full_path: str, meta: OperationMeta) -> None:
        path_item = self._paths.setdefault(full_path, {})
        method = endpoint.route.method.value.lower()
        if method in path_item:
            logger.warning(
                "%s %s declared again by %s.%s; the later declaration wins",
                endpoint.route.method.value,
                full_path,
                group.__name__,
                endpoint.name,
            )

        for schema in meta.schemas():
            for name in schema.references():
                self._resolve(name)

        path_item[method] = self._build_operation(meta, full_path)
        self._security_schemes.update(
            {name: scheme.to_openapi() for name, scheme in meta.security_schemes.items()}
        )
        logger.debug("Explored %s %s", endpoint.route.method.value, full_path)

    def _build_operation(self, meta: OperationMeta, full_path: str) -> dict[str, Any]:
        operation: dict[str, Any] = {}
        if meta.tags:
            operation["tags"] = list(meta.tags)
        for attr, key in (("summary", "summary"), ("description", "description"), ("operation_id", "operationId"), ("deprecated", "deprecated")):
            value = getattr(meta, attr)
            if value is not None:
                operation[key] = value

        parameters = self._derive_path_parameters(full_path, meta.parameters) + list(meta.parameters)
        if parameters:
            operation["parameters"] = [param.to_openapi() for param in parameters]
        if meta.request_body is not None:
            operation["requestBody"] = meta.request_body.to_openapi()

        if meta.responses:
            operation["responses"] = {
                status: response.to_openapi(status) for status, response in meta.responses.items()
            }
        else:
            operation["responses"] = {status: dict(body) for status, body in DEFAULT_RESPONSES.items()}

        if meta.security:
            operation["security"] = [
                {name: list(scopes) for name, scopes in requirement.items()} for requirement in meta.security
            ]
        return operation

    def _derive_path_parameters(self, full_path: str, declared: list[Param]) -> list[Param]:
        """Path parameters for template variables with no explicit declaration."""
        explicit = {param.name for param in declared if param.location is ParamLocation.PATH}
        return [
            Param(name=name, location=ParamLocation.PATH, required=True, schema_=string())
            for name in dict.fromkeys(path_variables(full_path))
            if name not in explicit
        ]

    def _resolve(self, name: str) -> None:
        """Materialize model `name` and, recursively, the models it references.

        Resolve-if-absent: a model already in the schema map is left alone,
        which also stops mutually referencing models from looping.
        """
        if name in self._schemas or name in self._unresolved:
            return

        meta = self.registry.model_meta(name)
        if meta is None:
            self._report_unresolved(name)
            return

        self._schemas[name] = meta.to_openapi()
        logger.debug("Materialized model %s", name)
        for reference in meta.references():
            self._resolve(reference)

    def _report_unresolved(self, name: str) -> None:
        if self.unresolved_policy is UnresolvedReferencePolicy.ERROR:
            raise UnresolvedReferenceError(name)
        self._unresolved.add(name)
        if self.unresolved_policy is UnresolvedReferencePolicy.WARN:
            logger.warning("Schema reference %r left unresolved: no such model is registered", name)
