import json

import pytest

from swagger_explorer.errors import ConfigurationError, DocumentValidationError
from swagger_explorer.metadata.annotations import SwaggerAnnotations
from swagger_explorer.metadata.schema import ref, string
from swagger_explorer.metadata.store import SwaggerRegistry
from swagger_explorer.routing import controller, get
from swagger_explorer.service import SwaggerService


def _config(**overrides) -> dict:
    config = {
        "path": "/api-docs",
        "document": {
            "openapi": "3.0.0",
            "info": {"title": "Test API", "version": "1.0.0"},
            "paths": {},
        },
    }
    config.update(overrides)
    return config


def _declare(registry: SwaggerRegistry):
    api = SwaggerAnnotations(registry)

    class User:
        id = api.field(string())

    @controller("users")
    class UserController:
        @get(":id")
        @api.response(200, schema=ref(User))
        def find(self, id):
            pass

    return api, UserController


class TestSetConfig:
    def test_accepts_mapping(self):
        service = SwaggerService()
        config = service.set_config(_config())
        assert service.config is config
        assert config.docs_url == "/api-docs"

    def test_missing_document_is_configuration_error(self):
        with pytest.raises(ConfigurationError):
            SwaggerService().set_config({"path": "docs"})

    def test_incomplete_document_fails_validation(self):
        with pytest.raises(DocumentValidationError):
            SwaggerService().set_config(_config(document={"info": {"title": "t", "version": "1"}}))

    def test_config_before_setup_fails(self):
        with pytest.raises(ConfigurationError):
            SwaggerService().config


class TestGenerateDocument:
    def test_generate_merges_explored_paths_and_schemas(self):
        registry = SwaggerRegistry()
        _, UserController = _declare(registry)
        service = SwaggerService(registry)
        service.set_config(_config())

        document = service.generate_document([UserController])

        assert "/users/:id" in document["paths"]
        assert "User" in document["components"]["schemas"]
        assert service.explored.unresolved == []

    def test_get_document_before_generation_fails(self):
        service = SwaggerService()
        service.set_config(_config())
        with pytest.raises(ConfigurationError, match="before it was generated"):
            service.get_document()

    def test_get_document_returns_independent_copy(self):
        service = SwaggerService()
        service.set_config(_config())
        service.generate_document([])

        document = service.get_document()
        document["paths"]["/hacked"] = {}

        assert "/hacked" not in service.get_document()["paths"]

    def test_refresh_picks_up_late_annotations(self):
        registry = SwaggerRegistry()
        api, UserController = _declare(registry)
        service = SwaggerService(registry)
        service.set_config(_config())
        service.generate_document([UserController])

        api.operation(summary="Find a user")(UserController.find)
        document = service.refresh()

        assert document["paths"]["/users/:id"]["get"]["summary"] == "Find a user"

    def test_unresolved_policy_from_config(self):
        registry = SwaggerRegistry()
        api = SwaggerAnnotations(registry)

        @controller("x")
        class Group:
            @get()
            @api.response(200, schema=ref("Missing"))
            def index(self):
                pass

        service = SwaggerService(registry)
        service.set_config(_config(unresolved_references="ignore"))
        service.generate_document([Group])
        assert service.explored.unresolved == ["Missing"]


class TestRendering:
    def _service(self) -> SwaggerService:
        service = SwaggerService()
        service.set_config(_config(ui_title="<Docs>"))
        service.generate_document([])
        return service

    def test_render_json(self):
        data = json.loads(self._service().render_json())
        assert data["info"]["title"] == "Test API"

    def test_render_ui_points_at_json(self):
        page = self._service().render_ui()
        assert "url: '/api-docs/swagger.json'" in page
        assert "swagger-ui-bundle.js" in page
        assert "<title>&lt;Docs&gt;</title>" in page
