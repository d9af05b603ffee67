"""Read base documents from YAML/JSON files and write assembled ones."""

import json
from pathlib import Path
from typing import Any

import yaml

from swagger_explorer.errors import ConfigurationError

FORMATS = ("json", "yaml")


def detect_format(file_path: Path) -> str:
    """Pick the output format from a file suffix; anything unknown is JSON."""
    if file_path.suffix.lower() in (".yaml", ".yml"):
        return "yaml"
    return "json"


def load_document(file_path: Path) -> dict[str, Any]:
    """Load an OpenAPI document from a YAML or JSON file.

    YAML is a superset of JSON, so both go through yaml.safe_load.
    """
    text = file_path.read_text(encoding="utf-8")
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Cannot parse {file_path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError(f"{file_path} does not contain an OpenAPI document object")
    return data


def dump_document(document: dict[str, Any], fmt: str = "json") -> str:
    if fmt == "yaml":
        return yaml.safe_dump(document, sort_keys=False, allow_unicode=True)
    return json.dumps(document, indent=2, ensure_ascii=False)
