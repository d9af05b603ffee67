"""Configuration for serving the assembled document."""

from pathlib import Path
from typing import Any

from pydantic import BaseModel, field_validator

from swagger_explorer.document.loader import load_document
from swagger_explorer.explorer.explorer import UnresolvedReferencePolicy
from swagger_explorer.explorer.paths import normalize_path

DEFAULT_DOCS_PATH = "docs"


class SwaggerConfig(BaseModel):
    """Where the docs are served and the base document they start from.

    `document` must already contain info.title, info.version and paths
    (possibly empty); explored paths and schemas are merged into it.
    """

    path: str | None = DEFAULT_DOCS_PATH
    document: dict[str, Any]
    unresolved_references: UnresolvedReferencePolicy = UnresolvedReferencePolicy.WARN
    ui_title: str | None = None

    @field_validator("path")
    @classmethod
    def _default_empty_path(cls, value: str | None) -> str:
        return value or DEFAULT_DOCS_PATH

    @property
    def docs_url(self) -> str:
        return normalize_path(self.path)

    @property
    def json_url(self) -> str:
        return normalize_path(f"{self.path}/swagger.json")

    @property
    def title(self) -> str:
        return self.ui_title or self.document.get("info", {}).get("title", "API")

    @classmethod
    def from_file(cls, file_path: Path, **overrides) -> "SwaggerConfig":
        """Build a config whose base document is read from a YAML or JSON file."""
        return cls(document=load_document(Path(file_path)), **overrides)
