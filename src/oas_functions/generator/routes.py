"""Route parameter classifier.

Turns each parsed route into an ApiRoute: typed and ordered parameters,
a generated function name and the flags the functions template uses to
decide how to wrap results and whether relaxed types must be allowed.
"""

import json
import logging

from oas_functions.errors import DuplicateFunctionNameError
from oas_functions.generator.models import ApiRoute, Param, ParamKind
from oas_functions.parser.base import BodySource, RouteDescriptor, RouteParamSource
from oas_functions.registry.components import SchemaRegistry
from oas_functions.typenames import (
    ANY_TYPE,
    API_ARTIFACT,
    MAP_WRAPPERS,
    RESERVED_TYPES,
    VOID_TYPE,
    base_type_name,
    capitalize_first,
    map_primitive,
    sanitize_type,
    split_generic_type,
)

logger = logging.getLogger(__name__)

BODY_DESCRIPTION = "Request body"


def partition_by_required(params: list[Param]) -> list[Param]:
    """Required params first, then optional ones; relative order is kept."""
    required = [p for p in params if p.required]
    optional = [p for p in params if not p.required]
    return required + optional


def build_function_name(method: str | None, namespace: str, route_name: str) -> str:
    """``get`` + ``blog`` + ``list`` -> ``getBlogList``."""
    return f"{method or ''}{capitalize_first(namespace)}{capitalize_first(route_name)}"


def enum_literal_type(values: list, value_type: str | None) -> str:
    """Render enum values as a literal union.

    String enums are quoted (``"a" | "b"``), anything else is joined as-is
    (``0 | 10 | 20``).
    """
    if value_type != "string":
        return " | ".join(_literal(v) for v in values)
    return " | ".join(json.dumps(_literal(v), ensure_ascii=False) for v in values)


def _literal(value) -> str:
    if isinstance(value, str):
        return value
    return json.dumps(value)


def response_is_void(success_type: str) -> bool:
    return success_type == VOID_TYPE


def should_wrap_result_in_json(success_type: str) -> bool:
    if success_type in (ANY_TYPE, VOID_TYPE):
        return True
    return any(wrapper in success_type for wrapper in MAP_WRAPPERS)


class RouteClassifier:
    """Classifies routes against a classified SchemaRegistry.

    One instance covers one generation run: the import list and the set of
    used function names accumulate across routes.
    """

    def __init__(self, registry: SchemaRegistry):
        registry.require_classified()
        self.registry = registry
        self._generated_types = registry.generated_type_names()
        self._imports: dict[str, None] = {API_ARTIFACT: None}
        self._routes: dict[str, ApiRoute] = {}
        self._has_enum_variables = False

    @property
    def api_routes(self) -> list[ApiRoute]:
        return list(self._routes.values())

    @property
    def import_list(self) -> list[str]:
        return list(self._imports)

    def classify(self, route: RouteDescriptor) -> ApiRoute:
        self._has_enum_variables = False

        method = route.method
        function_name = build_function_name(method, route.namespace, route.route_name.usage)
        if function_name in self._routes:
            raise DuplicateFunctionNameError(function_name, method, route.path)

        success_type = route.response.type
        error_type = route.response.error_type
        self.add_to_imports(success_type)
        self.add_to_imports(error_type)

        query_params = self._parse_params(route.route_params.query, ParamKind.QUERY)
        path_params = self._parse_params(route.route_params.path, ParamKind.PATH)
        body_param = self._parse_body(route.request_body)

        all_params = query_params + path_params
        if body_param is not None:
            all_params.append(body_param)
        all_params = partition_by_required(all_params)

        logger.info("parsing route: %s %s", (method or "").upper(), route.path)

        wrap_in_json = should_wrap_result_in_json(success_type)
        success_is_void = response_is_void(success_type)
        query_arg = route.specific_args.query if route.specific_args else None

        api_route = ApiRoute(
            type=(method or "").upper(),
            route=route.path,
            success_type=sanitize_type(success_type),
            error_type=sanitize_type(error_type),
            description=route.raw.summary,
            namespace=route.namespace,
            api_function=route.route_name.usage,
            function_name=function_name,
            query_variable_name=query_arg.name if query_arg else None,
            query_variables_content=query_arg.type if query_arg else None,
            query_params=query_params,
            path_params=path_params,
            body_param=body_param,
            all_params=all_params,
            is_query=(method or "").lower() == "get",
            should_wrap_return_result_in_json=wrap_in_json,
            should_allow_relaxed_types=self._should_allow_relaxed_types(success_type, all_params, wrap_in_json),
            success_response_is_void=success_is_void,
            success_and_error_response_is_void=success_is_void and error_type == VOID_TYPE,
        )
        self._routes[function_name] = api_route
        return api_route

    def add_to_imports(self, type_str: str) -> None:
        """Import every real generated type mentioned in ``type_str``."""
        for piece in split_generic_type(sanitize_type(type_str)):
            name = base_type_name(piece)
            if name in RESERVED_TYPES or name not in self._generated_types:
                continue
            self._imports[name] = None

    def _should_allow_relaxed_types(self, success_type: str, params: list[Param], wrap_in_json: bool) -> bool:
        if wrap_in_json or success_type.startswith(MAP_WRAPPERS):
            return True
        if self._has_enum_variables:
            return True
        for param in params:
            if self.registry.is_relaxed_type_name(base_type_name(param.ts_type)):
                return True
        return self.registry.is_relaxed_type_name(base_type_name(success_type))

    def _parse_params(self, sources: list[RouteParamSource], kind: ParamKind) -> list[Param]:
        params = []
        for source in sources:
            if source.is_enum:
                self._has_enum_variables = True
                ts_type = enum_literal_type(source.enum, source.type)
            else:
                ts_type = self._type_mapping(source.type, source.item_type)
            params.append(Param(
                name=source.name,
                description=source.description,
                required=source.required,
                ts_type=ts_type,
                format=source.format,
                param_type=kind,
            ))
            self.add_to_imports(ts_type)
        return params

    def _parse_body(self, body: BodySource | None) -> Param | None:
        if body is None or not body.type:
            return None
        ts_type = self._type_mapping(body.type, body.item_type)
        param = Param(
            name=body.param_name,
            description=BODY_DESCRIPTION,
            required=body.required,
            ts_type=ts_type,
            format=body.format,
            param_type=ParamKind.BODY,
        )
        self.add_to_imports(ts_type)

        for key, prop in body.properties.items():
            if prop.has_enum:
                self._has_enum_variables = True
            if prop.ref:
                component = self.registry.get_by_ref(prop.ref)
                if component is None:
                    logger.debug("body property '%s' references unregistered '%s'", key, prop.ref)
                    continue
                if component.generated_type_name:
                    self.add_to_imports(component.generated_type_name)
                if component.is_relaxed_type:
                    self._has_enum_variables = True
        return param

    @staticmethod
    def _type_mapping(type_name: str, item_type: str | None) -> str:
        if type_name == "array":
            return f"{map_primitive(item_type)}[]"
        return map_primitive(type_name)
