"""FastAPI routes serving the document as JSON and as a Swagger UI page.

FastAPI registers its own /docs page by default; create the app with
`docs_url=None` (or pick another `path`) so the two do not collide.
"""

import logging
from typing import Any, Iterable, Mapping

from fastapi import FastAPI
from fastapi.responses import HTMLResponse, JSONResponse

from swagger_explorer.config import SwaggerConfig
from swagger_explorer.metadata.store import SwaggerRegistry
from swagger_explorer.service import SwaggerService

logger = logging.getLogger(__name__)


def register_routes(app: FastAPI, service: SwaggerService) -> None:
    """Serve an already generated document from `app`."""
    config = service.config
    service.get_document()

    @app.get(config.json_url, include_in_schema=False)
    async def swagger_json() -> JSONResponse:
        return JSONResponse(service.get_document())

    @app.get(config.docs_url, include_in_schema=False)
    async def swagger_ui() -> HTMLResponse:
        return HTMLResponse(service.render_ui())

    logger.info("Serving API docs at %s and %s", config.docs_url, config.json_url)


def setup_swagger(
    app: FastAPI,
    config: SwaggerConfig | Mapping[str, Any],
    groups: Iterable[type] = (),
    registry: SwaggerRegistry | None = None,
) -> SwaggerService:
    """Configure, generate and serve the document in one call.

    Any configuration or validation error propagates before a route is
    registered.
    """
    service = SwaggerService(registry)
    service.set_config(config)
    service.generate_document(groups)
    register_routes(app, service)
    return service
