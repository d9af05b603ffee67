"""Swagger service: owns the configuration and the assembled document."""

import copy
import html
import json
import logging
from typing import Any, Iterable, Mapping

from pydantic import ValidationError

from swagger_explorer.config import SwaggerConfig
from swagger_explorer.document.assembler import assemble, validate_document
from swagger_explorer.errors import ConfigurationError
from swagger_explorer.explorer.explorer import ExploredDocument, SwaggerExplorer
from swagger_explorer.metadata.store import SwaggerRegistry

logger = logging.getLogger(__name__)

SWAGGER_UI_VERSION = "5.18.2"

SWAGGER_UI_HTML = """<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="utf-8">
    <meta name="viewport" content="width=device-width, initial-scale=1">
    <title>{title}</title>
    <link rel="stylesheet"
          href="https://cdn.jsdelivr.net/npm/swagger-ui-dist@{version}/swagger-ui.css">
    <style>
        body {{ margin: 0; background: #fafafa; }}
    </style>
</head>
<body>
    <div id="swagger-ui"></div>
    <script src="https://cdn.jsdelivr.net/npm/swagger-ui-dist@{version}/swagger-ui-bundle.js"></script>
    <script src="https://cdn.jsdelivr.net/npm/swagger-ui-dist@{version}/swagger-ui-standalone-preset.js"></script>
    <script>
        window.onload = () => {{
            window.ui = SwaggerUIBundle({{
                url: '{spec_url}',
                dom_id: '#swagger-ui',
                deepLinking: true,
                presets: [
                    SwaggerUIBundle.presets.apis,
                    SwaggerUIStandalonePreset,
                ],
                layout: 'StandaloneLayout',
            }});
        }};
    </script>
</body>
</html>"""


class SwaggerService:
    """Configures, generates and renders one API document."""

    def __init__(self, registry: SwaggerRegistry | None = None):
        self.registry = registry or SwaggerRegistry()
        self._config: SwaggerConfig | None = None
        self._document: dict[str, Any] | None = None
        self._groups: list[type] = []
        self.explored: ExploredDocument | None = None

    def set_config(self, config: SwaggerConfig | Mapping[str, Any]) -> SwaggerConfig:
        """Validate and store the configuration.

        Raises ConfigurationError when the document is missing, and
        DocumentValidationError when it lacks info.title, info.version
        or paths.
        """
        if not isinstance(config, SwaggerConfig):
            try:
                config = SwaggerConfig.model_validate(config)
            except ValidationError as e:
                raise ConfigurationError(f"Invalid swagger configuration: {e}") from e
        validate_document(config.document)
        self._config = config
        return config

    @property
    def config(self) -> SwaggerConfig:
        if self._config is None:
            raise ConfigurationError("Swagger is not configured; call set_config() first")
        return self._config

    def generate_document(self, groups: Iterable[type] = ()) -> dict[str, Any]:
        """Explore `groups`, assemble the document and keep it for serving."""
        config = self.config
        self._groups = list(groups)
        explorer = SwaggerExplorer(self.registry, config.unresolved_references)
        self.explored = explorer.explore(self._groups)
        self._document = assemble(config.document, self.explored)
        logger.info("Generated API document for %d endpoint groups", len(self._groups))
        return self.get_document()

    def refresh(self) -> dict[str, Any]:
        """Re-explore the groups of the last generate_document() call."""
        return self.generate_document(self._groups)

    def get_document(self) -> dict[str, Any]:
        """A copy of the assembled document, owned by the caller."""
        if self._document is None:
            raise ConfigurationError("Swagger document requested before it was generated")
        return copy.deepcopy(self._document)

    def render_json(self) -> str:
        return json.dumps(self.get_document(), indent=2, ensure_ascii=False)

    def render_ui(self) -> str:
        config = self.config
        return SWAGGER_UI_HTML.format(
            title=html.escape(config.title),
            version=SWAGGER_UI_VERSION,
            spec_url=html.escape(config.json_url, quote=True),
        )
