from pathlib import Path

import pytest

from oas_functions.errors import UnresolvedReferenceError
from oas_functions.generator.functions import (
    build_functions_context,
    join_header_directives,
    parse_headers,
)
from oas_functions.parser.base import ParsedDocument
from oas_functions.parser.document import load_document

FIXTURES = Path(__file__).parent / "fixtures"


class TestParseHeaders:
    def test_empty_directive(self):
        assert parse_headers(None) == {}
        assert parse_headers("") == {}

    def test_multiple_headers(self):
        assert parse_headers("a=1&b=2") == {"a": "1", "b": "2"}

    def test_value_with_equals(self):
        assert parse_headers("Authorization=Basic abc==") == {"Authorization": "Basic abc=="}

    def test_piece_without_value(self):
        assert parse_headers("x-flag") == {"x-flag": ""}

    def test_join_directives(self):
        assert join_header_directives(("a=1", "b=2")) == "a=1&b=2"
        assert join_header_directives(()) is None
        assert join_header_directives(None) is None


class TestBuildFunctionsContext:
    @classmethod
    def setup_class(cls):
        document = load_document(FIXTURES / "blog.yaml")
        cls.ctx = build_functions_context(document, headers="x-api-key=secret", base_url="https://api.example.com")
        cls.routes = {r.function_name: r for r in cls.ctx.api_routes}

    def test_route_count(self):
        assert len(self.ctx.api_routes) == 6

    def test_function_names(self):
        assert set(self.routes) == {
            "getBlogList",
            "getBlogGet",
            "postBlogCreate",
            "deleteBlogDelete",
            "getTagList",
            "getCommentsByBlog",
        }

    def test_import_list(self):
        assert self.ctx.import_list == ["Api", "MainBlog", "ErrorDto", "Author", "CreateBlogDto", "Tag", "Comment"]

    def test_base_url_and_headers(self):
        assert self.ctx.base_url == "https://api.example.com"
        assert self.ctx.header_map == {"x-api-key": "secret"}

    def test_list_route_params(self):
        route = self.routes["getBlogList"]
        assert [p.name for p in route.all_params] == ["tagIds", "limit", "status"]
        assert [p.ts_type for p in route.all_params] == ["number[]", "number", '"draft" | "published"']
        assert route.query_variable_name == "query"
        assert route.should_allow_relaxed_types is True
        assert route.should_wrap_return_result_in_json is False

    def test_relaxed_success_type(self):
        route = self.routes["getBlogGet"]
        assert route.should_allow_relaxed_types is True
        assert route.success_response_is_void is False
        assert route.path_params[0].description == "id of the blog"

    def test_strict_create_route(self):
        route = self.routes["postBlogCreate"]
        assert route.should_allow_relaxed_types is False
        assert route.should_wrap_return_result_in_json is False
        assert route.body_param.ts_type == "CreateBlogDto"
        assert route.is_query is False

    def test_void_delete_route(self):
        route = self.routes["deleteBlogDelete"]
        assert route.success_and_error_response_is_void is True
        assert route.should_wrap_return_result_in_json is True

    def test_record_route(self):
        route = self.routes["getTagList"]
        assert route.should_wrap_return_result_in_json is True
        assert route.should_allow_relaxed_types is True

    def test_grouped_array_route(self):
        route = self.routes["getCommentsByBlog"]
        assert route.success_type == "Comment[]"
        assert route.should_allow_relaxed_types is True
        assert [(p.name, p.ts_type) for p in route.all_params] == [("id", "number"), ("page", "number")]

    def test_context_is_json_serialisable(self):
        data = self.ctx.model_dump(mode="json")
        assert data["api_routes"][0]["all_params"][0]["param_type"] == "query"


class TestBuildFunctionsContextErrors:
    def test_unresolved_reference_aborts_run(self):
        document = ParsedDocument.model_validate({
            "components": [{
                "componentName": "schemas",
                "typeName": "A",
                "$ref": "#/components/schemas/A",
                "rawTypeData": {"properties": {"b": {"$ref": "#/components/schemas/B"}}},
            }],
        })
        with pytest.raises(UnresolvedReferenceError):
            build_functions_context(document)

    def test_empty_document(self):
        ctx = build_functions_context(ParsedDocument())
        assert ctx.api_routes == []
        assert ctx.import_list == ["Api"]
        assert ctx.header_map == {}
