"""Data models for the output of the upstream OpenAPI document parser.

The parser hands over schema components, type-name events and route
descriptors as loosely-typed records. They are decoded into these models
once, so that the registry and the route classifier never probe optional
keys themselves.
"""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class _SourceModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


def _only_true(value: Any) -> bool:
    """Anything other than a literal ``True`` counts as not required."""
    return value is True


class FieldSchema(_SourceModel):
    """A schema node: a component body, one of its fields, or array items."""

    type: str | None = None
    description: str | None = None
    enum: list[Any] | None = None
    ref: str | None = Field(default=None, alias="$ref")
    items: "FieldSchema | None" = None
    properties: dict[str, "FieldSchema"] | None = None

    @property
    def has_enum(self) -> bool:
        return bool(self.enum)

    @property
    def items_ref(self) -> str | None:
        if self.type == "array" and self.items is not None:
            return self.items.ref
        return None


class SchemaComponentSource(_SourceModel):
    """A schema component as discovered by the parser."""

    component_name: str = Field(alias="componentName")  # schemas / responses / ...
    type_name: str = Field(alias="typeName")
    ref: str | None = Field(default=None, alias="$ref")
    raw_type_data: FieldSchema | None = Field(default=None, alias="rawTypeData")


class TypeNameEvent(_SourceModel):
    """One raw-name -> generated-name assignment made by the parser."""

    type_name: str = Field(alias="typeName")
    raw_type_name: str | None = Field(default=None, alias="rawTypeName")
    schema_type: Literal["type-name", "enum-key"] | None = Field(default=None, alias="schemaType")


class RouteParamSource(_SourceModel):
    name: str
    description: str | None = None
    required: bool = False
    type: str
    format: str | None = None
    enum: list[Any] | None = None
    schema_: FieldSchema | None = Field(default=None, alias="schema")

    required_is_true = field_validator("required", mode="before")(_only_true)

    @model_validator(mode="before")
    @classmethod
    def _type_from_schema(cls, data: Any) -> Any:
        if isinstance(data, dict) and not data.get("type"):
            schema = data.get("schema")
            if isinstance(schema, dict) and schema.get("type"):
                data = {**data, "type": schema["type"]}
        return data

    @model_validator(mode="after")
    def _check_array_items(self) -> "RouteParamSource":
        if self.type == "array" and self.item_type is None:
            raise ValueError(f"array parameter '{self.name}' has no item type")
        return self

    @property
    def is_enum(self) -> bool:
        return bool(self.enum)

    @property
    def item_type(self) -> str | None:
        if self.schema_ is None or self.schema_.items is None:
            return None
        return self.schema_.items.type


class QueryParamSource(RouteParamSource):
    location: Literal["query"] = Field(default="query", alias="in")


class PathParamSource(RouteParamSource):
    location: Literal["path"] = Field(default="path", alias="in")


class BodySource(_SourceModel):
    """Request body info. A body without ``type`` means the route takes none."""

    type: str | None = None
    param_name: str = Field(default="data", alias="paramName")
    required: bool = False
    format: str | None = None
    schema_: FieldSchema | None = Field(default=None, alias="schema")

    required_is_true = field_validator("required", mode="before")(_only_true)

    @model_validator(mode="after")
    def _check_array_items(self) -> "BodySource":
        if self.type == "array" and self.item_type is None:
            raise ValueError(f"array body '{self.param_name}' has no item type")
        return self

    @property
    def item_type(self) -> str | None:
        if self.schema_ is None or self.schema_.items is None:
            return None
        return self.schema_.items.type

    @property
    def properties(self) -> dict[str, FieldSchema]:
        if self.schema_ is None or not self.schema_.properties:
            return {}
        return self.schema_.properties


class RequestInfo(_SourceModel):
    method: str | None = None


class RawRoute(_SourceModel):
    route: str
    method: str | None = None
    summary: str | None = None
    description: str | None = None


class ResponseInfo(_SourceModel):
    type: str = "any"
    error_type: str = Field(default="any", alias="errorType")


class RouteParams(_SourceModel):
    query: list[QueryParamSource] = []
    path: list[PathParamSource] = []

    @field_validator("query", "path", mode="before")
    @classmethod
    def _null_as_empty(cls, value: Any) -> Any:
        return [] if value is None else value


class RouteName(_SourceModel):
    usage: str


class SpecificArg(_SourceModel):
    name: str | None = None
    type: str | None = None


class SpecificArgs(_SourceModel):
    query: SpecificArg | None = None


class RouteDescriptor(_SourceModel):
    """A single API route as described by the parser."""

    request: RequestInfo = RequestInfo()
    raw: RawRoute
    response: ResponseInfo = ResponseInfo()
    route_params: RouteParams = Field(default_factory=RouteParams, alias="routeParams")
    request_body: BodySource | None = Field(default=None, alias="requestBodyInfo")
    namespace: str = ""
    route_name: RouteName = Field(alias="routeName")
    specific_args: SpecificArgs | None = Field(default=None, alias="specificArgs")

    @property
    def method(self) -> str | None:
        return self.request.method or self.raw.method

    @property
    def path(self) -> str:
        return self.raw.route


class ParsedDocument(_SourceModel):
    """Everything the parser discovered in one OpenAPI document."""

    components: list[SchemaComponentSource] = []
    type_names: list[TypeNameEvent] = Field(default_factory=list, alias="typeNames")
    routes: list[RouteDescriptor] = []

    @field_validator("components", "type_names", "routes", mode="before")
    @classmethod
    def _null_as_empty(cls, value: Any) -> Any:
        return [] if value is None else value
