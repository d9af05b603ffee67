"""Combine explored paths and components with a caller-supplied base document."""

import copy
import logging
from typing import Any, Mapping

from swagger_explorer.errors import DocumentValidationError
from swagger_explorer.explorer.explorer import ExploredDocument

logger = logging.getLogger(__name__)

DEFAULT_OPENAPI_VERSION = "3.0.0"


def assemble(base_document: Mapping[str, Any], explored: ExploredDocument) -> dict[str, Any]:
    """Merge `explored` into a copy of `base_document` and validate the result.

    Explored operations win over base operations for the same path and
    method; every other field of the base document is kept as is.
    """
    document = copy.deepcopy(dict(base_document))
    document.setdefault("openapi", DEFAULT_OPENAPI_VERSION)

    # A base document without paths is left without them and fails validation.
    paths = document.get("paths")
    if isinstance(paths, dict):
        for path, path_item in explored.paths.items():
            # An empty path item in YAML loads as None.
            paths[path] = {**(paths.get(path) or {}), **copy.deepcopy(path_item)}

    components = document.get("components") or {}
    document["components"] = components
    components["schemas"] = {**(components.get("schemas") or {}), **copy.deepcopy(explored.schemas)}
    if explored.security_schemes:
        components["securitySchemes"] = {
            **(components.get("securitySchemes") or {}),
            **copy.deepcopy(explored.security_schemes),
        }

    validate_document(document)
    logger.info(
        "Assembled document with %d paths and %d schemas",
        len(document["paths"]),
        len(components["schemas"]),
    )
    return document


def validate_document(document: Mapping[str, Any]) -> None:
    """Raise DocumentValidationError unless paths, info.title and info.version exist."""
    if not isinstance(document.get("paths"), Mapping):
        raise DocumentValidationError("paths")
    info = document.get("info")
    if not isinstance(info, Mapping):
        raise DocumentValidationError("info")
    for field in ("title", "version"):
        if info.get(field) in (None, ""):
            raise DocumentValidationError(f"info.{field}")
