"""Output models handed to the functions template renderer."""

from enum import Enum

from pydantic import BaseModel


class ParamKind(str, Enum):
    QUERY = "query"
    PATH = "path"
    BODY = "body"


class Param(BaseModel):
    """A single typed function argument."""

    name: str
    description: str | None = None
    required: bool
    ts_type: str
    format: str | None = None
    param_type: ParamKind


class ApiRoute(BaseModel):
    """One classified route, ready to be rendered as a function."""

    type: str  # GET / POST / ...
    route: str
    success_type: str
    error_type: str
    description: str | None = None
    namespace: str
    api_function: str
    function_name: str
    query_variable_name: str | None = None
    query_variables_content: str | None = None
    query_params: list[Param]
    path_params: list[Param]
    body_param: Param | None = None
    all_params: list[Param]  # required first, then optional
    is_query: bool
    should_wrap_return_result_in_json: bool
    should_allow_relaxed_types: bool
    success_response_is_void: bool
    success_and_error_response_is_void: bool


class FunctionsContext(BaseModel):
    """Everything the functions template needs for one generation run."""

    api_routes: list[ApiRoute]
    import_list: list[str]
    base_url: str = ""
    header_map: dict[str, str] = {}
