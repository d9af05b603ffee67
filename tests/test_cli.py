import json
from pathlib import Path
from unittest.mock import patch

import pytest
import yaml
from click.testing import CliRunner

from swagger_explorer.cli import main

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture
def fixtures_on_path(monkeypatch):
    monkeypatch.syspath_prepend(str(FIXTURES))


class TestCliExport:
    def test_export_json(self, tmp_path, fixtures_on_path):
        output = tmp_path / "out" / "openapi.json"
        result = CliRunner().invoke(main, ["export", "sample_app:service", "-o", str(output)])

        assert result.exit_code == 0, result.output
        data = json.loads(output.read_text(encoding="utf-8"))
        assert "/users/:id" in data["paths"]
        assert data["paths"]["/users/:id"]["get"]["tags"] == ["Users"]
        assert data["components"]["schemas"]["User"]["required"] == ["id"]

    def test_export_yaml_by_suffix(self, tmp_path, fixtures_on_path):
        output = tmp_path / "openapi.yaml"
        result = CliRunner().invoke(main, ["export", "sample_app:service", "-o", str(output)])

        assert result.exit_code == 0, result.output
        assert yaml.safe_load(output.read_text(encoding="utf-8"))["info"]["title"] == "Sample"

    def test_export_from_factory(self, tmp_path, fixtures_on_path):
        output = tmp_path / "openapi.txt"
        result = CliRunner().invoke(main, ["export", "sample_app:build_service", "-o", str(output), "--format", "json"])

        assert result.exit_code == 0, result.output
        assert json.loads(output.read_text(encoding="utf-8"))["openapi"] == "3.0.0"

    def test_export_unconfigured_service_fails(self, tmp_path, fixtures_on_path):
        result = CliRunner().invoke(main, ["export", "sample_app:unconfigured", "-o", str(tmp_path / "x.json")])

        assert result.exit_code != 0
        assert "before it was generated" in result.output

    def test_bad_target(self, tmp_path):
        result = CliRunner().invoke(main, ["export", "no_colon", "-o", str(tmp_path / "x.json")])

        assert result.exit_code != 0
        assert "module:attribute" in result.output

    def test_missing_module(self, tmp_path):
        result = CliRunner().invoke(main, ["export", "does_not_exist_mod:svc", "-o", str(tmp_path / "x.json")])

        assert result.exit_code != 0
        assert "cannot import" in result.output


class TestCliValidate:
    def test_valid_document(self):
        result = CliRunner().invoke(main, ["validate", str(FIXTURES / "base.yaml")])

        assert result.exit_code == 0
        assert "is valid" in result.output

    def test_invalid_document(self, tmp_path):
        f = tmp_path / "doc.yaml"
        f.write_text("info:\n  title: T\npaths: {}\n")
        result = CliRunner().invoke(main, ["validate", str(f)])

        assert result.exit_code != 0
        assert "info.version" in result.output


class TestCliServe:
    @patch("uvicorn.run")
    def test_serve_builds_app(self, mock_run, fixtures_on_path):
        result = CliRunner().invoke(main, ["serve", "sample_app:service", "--port", "9000"])

        assert result.exit_code == 0, result.output
        mock_run.assert_called_once()
        app = mock_run.call_args.args[0]
        paths = {route.path for route in app.routes}
        assert {"/docs", "/docs/swagger.json"} <= paths
        assert mock_run.call_args.kwargs == {"host": "127.0.0.1", "port": 9000}
