from swagger_explorer.metadata.base import ModelMeta, OperationMeta, Param, ParamLocation, RequestBody, Response
from swagger_explorer.metadata.merge import merge_model, merge_operation, merge_records
from swagger_explorer.metadata.schema import integer, ref, string


def _query(name: str) -> Param:
    return Param(name=name, location=ParamLocation.QUERY)


class TestMergeOperation:
    def test_scalars_last_write_wins(self):
        merged = merge_operation(OperationMeta(summary="old"), OperationMeta(summary="new"))
        assert merged.summary == "new"

    def test_unset_scalar_does_not_override(self):
        merged = merge_operation(OperationMeta(summary="kept", deprecated=True), OperationMeta(description="d"))
        assert merged.summary == "kept"
        assert merged.deprecated is True
        assert merged.description == "d"

    def test_request_body_replaced_wholesale(self):
        first = OperationMeta(request_body=RequestBody(schema_=ref("A"), description="first"))
        second = OperationMeta(request_body=RequestBody(schema_=ref("B")))
        merged = merge_operation(first, second)
        assert merged.request_body.schema_.name == "B"
        assert merged.request_body.description is None

    def test_lists_concatenate_in_order(self):
        merged = merge_operation(
            OperationMeta(tags=["Admin"], parameters=[_query("a")], security=[{"x": []}]),
            OperationMeta(tags=["Users"], parameters=[_query("b")], security=[{"x": ["read"]}]),
        )
        assert merged.tags == ["Admin", "Users"]
        assert [p.name for p in merged.parameters] == ["a", "b"]
        assert merged.security == [{"x": []}, {"x": ["read"]}]

    def test_responses_shallow_merge_per_status(self):
        first = OperationMeta(responses={"200": Response(description="OK"), "404": Response()})
        second = OperationMeta(responses={"200": Response(schema_=ref("User"))})
        merged = merge_operation(first, second)
        assert merged.responses["200"].description == "OK"
        assert merged.responses["200"].schema_.name == "User"
        assert list(merged.responses) == ["200", "404"]

    def test_inputs_not_mutated(self):
        base = OperationMeta(tags=["a"])
        merge_operation(base, OperationMeta(tags=["b"]))
        assert base.tags == ["a"]

    def test_order_insensitive_for_disjoint_fragments(self):
        a = OperationMeta(summary="s", responses={"200": Response(description="OK")})
        b = OperationMeta(description="d", responses={"404": Response(description="Missing")})
        c = OperationMeta(operation_id="op", responses={"200": Response(schema_=ref("User"))})

        sequential = merge_operation(merge_operation(merge_operation(OperationMeta(), a), b), c)
        regrouped = merge_operation(merge_operation(OperationMeta(), b), merge_operation(a, c))

        assert sequential.summary == regrouped.summary
        assert sequential.description == regrouped.description
        assert sequential.operation_id == regrouped.operation_id
        assert set(sequential.responses) == set(regrouped.responses)
        for status in sequential.responses:
            assert sequential.responses[status] == regrouped.responses[status]


class TestMergeModel:
    def test_properties_keep_first_declaration_order(self):
        first = ModelMeta(properties={"id": string(), "email": string()})
        second = ModelMeta(properties={"id": integer()})
        merged = merge_model(first, second)
        assert list(merged.properties) == ["id", "email"]
        assert merged.properties["id"].type == "integer"

    def test_same_variant_shallow_merges(self):
        first = ModelMeta(properties={"id": string(description="Identifier")})
        second = ModelMeta(properties={"id": string(format="uuid")})
        merged = merge_model(first, second)
        assert merged.properties["id"].description == "Identifier"
        assert merged.properties["id"].format == "uuid"

    def test_model_level_metadata_overwrites(self):
        merged = merge_model(ModelMeta(title="Old", description="kept"), ModelMeta(title="New"))
        assert merged.title == "New"
        assert merged.description == "kept"

    def test_required_is_ordered_set(self):
        merged = merge_model(ModelMeta(required=["id"]), ModelMeta(required=["email", "id"]))
        assert merged.required == ["id", "email"]


class TestMergeRecords:
    def test_none_base_returns_fragment(self):
        fragment = OperationMeta(summary="s")
        assert merge_records(None, fragment) is fragment

    def test_dispatches_on_record_type(self):
        merged = merge_records(ModelMeta(title="a"), ModelMeta(description="b"))
        assert isinstance(merged, ModelMeta)
        assert (merged.title, merged.description) == ("a", "b")
