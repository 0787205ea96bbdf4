import pytest

from swagger_explorer.errors import RouteTranslationError
from swagger_explorer.schema.descriptors import ClassDescriptor, RouteDescriptor, RouteKind
from swagger_explorer.translator.route import (
    convert_path,
    convert_verb,
    derive_parameters,
    derive_return_type,
    translate_route,
)


def _route(**overrides) -> RouteDescriptor:
    defaults = dict(
        method="Widget.find",
        verb="get",
        path="/widgets",
        accepts=[],
        returns=[],
    )
    defaults.update(overrides)
    return RouteDescriptor(**defaults)


def _class(**overrides) -> ClassDescriptor:
    defaults = dict(name="Widget", http_path="widgets")
    defaults.update(overrides)
    return ClassDescriptor(**defaults)


SHARED_CTOR = {"accepts": [{"arg": "id", "type": "any", "required": True, "http": {"source": "path"}}]}


class TestConvertVerb:
    def test_verb_table(self):
        assert convert_verb("all") == "POST"
        assert convert_verb("del") == "DELETE"
        assert convert_verb("get") == "GET"
        assert convert_verb("PUT") == "PUT"

    def test_aliases_are_case_insensitive(self):
        assert convert_verb("ALL") == "POST"
        assert convert_verb("Del") == "DELETE"


class TestConvertPath:
    def test_placeholders(self):
        assert convert_path("/widgets/:id/parts/:partId") == "/widgets/{id}/parts/{partId}"

    def test_path_without_markers_is_unchanged(self):
        assert convert_path("/widgets/count") == "/widgets/count"


class TestRouteKind:
    def test_prototype_method_is_instance(self):
        assert _route(method="Widget.prototype.updateAttributes").kind is RouteKind.INSTANCE

    def test_class_method_is_static(self):
        assert _route().kind is RouteKind.STATIC

    def test_explicit_kind_wins(self):
        assert _route(kind="instance").kind is RouteKind.INSTANCE

    def test_method_without_owner_is_rejected(self):
        with pytest.raises(ValueError):
            _route(method="find")


class TestDeriveParameters:
    def test_get_defaults_to_query(self):
        params = derive_parameters(_route(accepts=[{"arg": "filter", "type": "object"}]), _class())
        assert params[0].location == "query"
        assert params[0].allow_multiple is False

    def test_other_verbs_default_to_form(self):
        params = derive_parameters(_route(verb="post", accepts=[{"arg": "name", "type": "string"}]), _class())
        assert params[0].location == "form"

    def test_path_placeholder_wins_over_verb_default(self):
        route = _route(method="Widget.findById", path="/widgets/:id", accepts=[{"arg": "id", "type": "any"}])
        assert derive_parameters(route, _class())[0].location == "path"

    def test_placeholder_match_is_exact(self):
        route = _route(path="/widgets/:idx", accepts=[{"arg": "id", "type": "string"}])
        assert derive_parameters(route, _class())[0].location == "query"

    def test_explicit_source_wins_over_path(self):
        route = _route(path="/widgets/:id", accepts=[{"arg": "id", "type": "string", "http": {"source": "query"}}])
        assert derive_parameters(route, _class())[0].location == "query"

    def test_string_binding_is_a_source(self):
        route = _route(accepts=[{"arg": "token", "type": "string", "http": "header"}])
        assert derive_parameters(route, _class())[0].location == "header"

    def test_derived_and_request_arguments_are_hidden(self):
        route = _route(verb="post", accepts=[
            {"arg": "ctx", "type": "object", "http": lambda ctx: ctx},
            {"arg": "req", "type": "object", "http": {"source": "req"}},
            {"arg": "data", "type": "object", "http": {"source": "body"}},
        ])
        params = derive_parameters(route, _class())
        assert [p.name for p in params] == ["data"]
        assert params[0].location == "body"

    def test_data_object_becomes_owner_model(self):
        route = _route(method="Widget.create", verb="post", accepts=[{"arg": "data", "type": "object"}])
        assert derive_parameters(route, _class())[0].type == "Widget"

    def test_shared_ctor_applies_to_instance_routes(self):
        route = _route(
            method="Widget.prototype.updateAttributes",
            verb="put",
            path="/widgets/:id",
            accepts=[{"arg": "data", "type": "object", "http": {"source": "body"}}],
        )
        params = derive_parameters(route, _class(shared_ctor=SHARED_CTOR))
        assert [p.name for p in params] == ["data", "id"]
        assert params[1].location == "path"
        assert params[1].required is True

    def test_shared_ctor_skipped_for_static_routes(self):
        params = derive_parameters(_route(accepts=[]), _class(shared_ctor=SHARED_CTOR))
        assert params == []

    def test_fields_are_translated_and_typed(self):
        route = _route(accepts=[
            {"arg": "limit", "type": "number", "min": 0, "max": 100, "default": 10, "doc": "Page size"},
            {"name": "since", "type": "date"},
        ])
        limit, since = derive_parameters(route, _class())
        assert limit.name == "limit"
        assert limit.type == "number"
        assert limit.format == "double"
        assert limit.minimum == 0
        assert limit.maximum == 100
        assert limit.default_value == 10
        assert limit.description == "Page size"
        assert limit.required is False
        assert since.type == "string"
        assert since.format == "date"

    def test_array_parameter_has_items(self):
        route = _route(accepts=[{"arg": "ids", "type": ["number"]}])
        param = derive_parameters(route, _class())[0]
        assert param.type == "array"
        assert param.items == {"type": "number"}

    def test_source_route_is_not_mutated(self):
        route = _route(accepts=[{"arg": "filter", "type": "object", "min": 1}])
        derive_parameters(route, _class())
        assert route.accepts[0].min == 1
        assert route.accepts[0].type == "object"

    def test_parameter_without_name_raises(self):
        route = _route(accepts=[{"type": "string"}])
        with pytest.raises(RouteTranslationError):
            derive_parameters(route, _class())


class TestDeriveReturnType:
    def test_data_object_becomes_class(self):
        route = _route(returns=[{"arg": "data", "type": "object"}])
        assert derive_return_type(route, _class())["type"] == "Widget"

    def test_data_array_becomes_class_array(self):
        route = _route(returns=[{"arg": "data", "type": "array"}])
        assert derive_return_type(route, _class())["type"] == ["Widget"]

    def test_data_dict_class_becomes_class(self):
        route = _route(returns=[{"arg": "data", "type": dict}])
        assert derive_return_type(route, _class())["type"] == "Widget"

    def test_data_empty_array_marker_becomes_class_array(self):
        route = _route(returns=[{"arg": "data", "type": []}])
        assert derive_return_type(route, _class())["type"] == ["Widget"]

    def test_data_typed_array_is_kept(self):
        route = _route(returns=[{"arg": "data", "type": list[str]}])
        assert derive_return_type(route, _class())["type"] == list[str]

    def test_other_args_are_kept(self):
        route = _route(returns=[{"arg": "count", "type": "number"}])
        assert derive_return_type(route, _class()) == {"arg": "count", "type": "number"}

    def test_no_returns(self):
        assert derive_return_type(_route(), _class()) == {}

    def test_multiple_returns_collapse(self):
        route = _route(returns=[{"arg": "a", "type": "string"}, {"arg": "b", "type": "string"}])
        assert derive_return_type(route, _class()) == {"model": "object"}

    def test_keys_are_translated(self):
        route = _route(returns=[{"arg": "count", "type": "number", "doc": "How many"}])
        assert derive_return_type(route, _class())["description"] == "How many"


class TestTranslateRoute:
    def test_operation_shape(self):
        route = _route(
            method="Widget.findById",
            path="/widgets/:id",
            description="Find a widget by id.",
            accepts=[{"arg": "id", "type": "any", "required": True}],
            returns=[{"arg": "data", "type": "object", "root": True}],
        )
        entry = translate_route(route, _class())
        assert entry.path == "/widgets/{id}"
        assert len(entry.operations) == 1
        op = entry.operations[0]
        assert op.method == "GET"
        assert op.nickname == "Widget_findById"
        assert op.type == "Widget"
        assert op.summary == "Find a widget by id."
        assert op.notes == ""
        assert op.response_messages == []
        assert op.parameters[0].location == "path"

    def test_void_without_returns(self):
        op = translate_route(_route(method="Widget.deleteById", verb="del"), _class()).operations[0]
        assert op.method == "DELETE"
        assert op.type == "void"

    def test_array_result_has_items(self):
        route = _route(returns=[{"arg": "data", "type": "array"}])
        op = translate_route(route, _class()).operations[0]
        assert op.type == "array"
        assert op.items == {"type": "Widget"}

    def test_untyped_array_result_is_not_void(self):
        route = _route(returns=[{"arg": "items", "type": []}])
        op = translate_route(route, _class()).operations[0]
        assert op.type == "array"
        assert op.items == {"type": "any"}

    def test_data_dict_result_is_owner_model(self):
        route = _route(returns=[{"arg": "data", "type": dict, "root": True}])
        assert translate_route(route, _class()).operations[0].type == "Widget"

    def test_multiple_returns_are_object(self):
        route = _route(returns=[{"arg": "a", "type": "string"}, {"arg": "b", "type": "number"}])
        assert translate_route(route, _class()).operations[0].type == "object"

    def test_number_result_has_format(self):
        route = _route(returns=[{"arg": "count", "type": "number"}])
        op = translate_route(route, _class()).operations[0]
        assert op.type == "number"
        assert op.format == "double"

    def test_prototype_nickname(self):
        route = _route(method="Widget.prototype.updateAttributes", verb="put", path="/widgets/:id")
        assert translate_route(route, _class()).operations[0].nickname == "Widget_prototype_updateAttributes"

    def test_document_uses_swagger_names(self):
        route = _route(accepts=[{"arg": "filter", "type": "object", "default": "{}"}])
        doc = translate_route(route, _class()).to_document()
        op = doc["operations"][0]
        assert op["responseMessages"] == []
        param = op["parameters"][0]
        assert param["paramType"] == "query"
        assert param["defaultValue"] == "{}"
        assert param["allowMultiple"] is False
        assert "minimum" not in param

    def test_type_error_names_the_route(self):
        route = _route(accepts=[{"arg": "weird", "type": 42}])
        with pytest.raises(RouteTranslationError) as exc_info:
            translate_route(route, _class())
        assert exc_info.value.identifier == "Widget.find"
