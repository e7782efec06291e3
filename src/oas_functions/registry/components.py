"""Schema registry and relaxed-type resolver.

Holds every schema component discovered in the document, keyed by its
reference id, plus the raw-name <-> generated-name mapping that the parser
fills in while it names types. ``classify()`` then marks each component
that needs relaxed typing: a component is relaxed when one of its fields
is an enum, or when a field (or array items) references a relaxed
component.
"""

import logging

from pydantic import BaseModel

from oas_functions.errors import RegistryError, UnresolvedReferenceError
from oas_functions.parser.base import FieldSchema, ParsedDocument, SchemaComponentSource

logger = logging.getLogger(__name__)

SCHEMA_COMPONENT_KIND = "schemas"


class SchemaComponent(BaseModel):
    """A registered schema component and its classification state."""

    ref: str
    raw_type_name: str
    generated_type_name: str | None = None
    source: SchemaComponentSource
    is_relaxed_type: bool = False
    is_untyped: bool = False

    @property
    def properties(self) -> dict[str, FieldSchema]:
        data = self.source.raw_type_data
        if data is None or not data.properties:
            return {}
        return data.properties


def synthesize_ref(component_name: str, raw_type_name: str) -> str:
    return f"#/customref/{component_name}/{raw_type_name}"


class SchemaRegistry:
    """Owns all schema components and their naming maps."""

    def __init__(self):
        self._components: dict[str, SchemaComponent] = {}
        self._raw_to_type: dict[str, str] = {}
        self._type_to_raw: dict[str, str] = {}
        self._raw_name_to_ref: dict[str, str] = {}
        self._ref_to_raw_name: dict[str, str] = {}
        self._generated_types: dict[str, None] = {}
        self.classified = False

    @classmethod
    def from_document(cls, document: ParsedDocument) -> "SchemaRegistry":
        """Populate a registry from everything the parser discovered.

        Only ``schemas`` components are registered; other component kinds
        (responses, requestBodies, ...) never become generated types.
        """
        registry = cls()
        for component in document.components:
            if component.component_name == SCHEMA_COMPONENT_KIND:
                registry.register_component(component)
        for event in document.type_names:
            registry.register_type_name(event.type_name, event.raw_type_name, event.schema_type)
        return registry

    def register_component(self, source: SchemaComponentSource) -> SchemaComponent:
        ref = source.ref
        raw_type_name = source.type_name
        if not ref:
            ref = synthesize_ref(source.component_name, raw_type_name)
            logger.warning("$ref missing for component '%s'. setting ref to '%s'", raw_type_name, ref)

        component = SchemaComponent(
            ref=ref,
            raw_type_name=raw_type_name,
            generated_type_name=self._raw_to_type.get(raw_type_name),
            source=source,
        )
        if ref in self._components:
            logger.debug("component '%s' registered again, replacing previous entry", ref)
            previous_raw = self._ref_to_raw_name.get(ref)
            if previous_raw != raw_type_name and self._raw_name_to_ref.get(previous_raw) == ref:
                del self._raw_name_to_ref[previous_raw]
        self._components[ref] = component
        self._raw_name_to_ref[raw_type_name] = ref
        self._ref_to_raw_name[ref] = raw_type_name
        self.classified = False
        return component

    def register_type_name(self, type_name: str, raw_type_name: str | None = None, schema_type: str | None = None) -> None:
        """Record a name assigned by the parser.

        Only ``type-name`` events count as generated output types; enum keys
        are mapped but never imported.
        """
        raw = raw_type_name or type_name
        self._raw_to_type[raw] = type_name
        self._type_to_raw[type_name] = raw
        if schema_type == "type-name":
            self._generated_types[type_name] = None

    @property
    def components(self) -> list[SchemaComponent]:
        return list(self._components.values())

    def generated_type_names(self) -> set[str]:
        return set(self._generated_types)

    def get_by_ref(self, ref: str) -> SchemaComponent | None:
        return self._components.get(ref)

    def get_by_type_name(self, type_name: str) -> SchemaComponent | None:
        raw = self._type_to_raw.get(type_name)
        if raw is None:
            return None
        ref = self._raw_name_to_ref.get(raw)
        if ref is None:
            return None
        return self._components.get(ref)

    def is_relaxed_type_name(self, type_name: str) -> bool:
        component = self.get_by_type_name(type_name)
        return component is not None and component.is_relaxed_type

    def require_classified(self) -> None:
        if not self.classified:
            raise RegistryError("Schema registry must be classified before routes are processed")

    def classify(self) -> None:
        """Mark relaxed components.

        Every component is the root of its own depth-first walk with a fresh
        visited set, so a node reached from several roots is expanded once
        per root. Flags only ever go from False to True.
        """
        for component in self._components.values():
            self._classify_component(component, set())
        self.classified = True

    def _classify_component(self, component: SchemaComponent, visited: set[str]) -> None:
        if component.ref in visited:
            return
        visited.add(component.ref)

        # names may have been assigned after the component was registered
        component.generated_type_name = self._raw_to_type.get(component.raw_type_name)

        for key, field in component.properties.items():
            if field.has_enum:
                self._mark_relaxed(component, key, "is an enum")

            if field.ref:
                target = self._resolve(field.ref, component, key)
                self._classify_component(target, visited)
                if target.is_relaxed_type:
                    self._mark_relaxed(component, key, f"references relaxed type '{target.ref}'")

            items_ref = field.items_ref
            if items_ref:
                target = self._resolve(items_ref, component, key)
                self._classify_component(target, visited)
                if target.is_relaxed_type:
                    self._mark_relaxed(component, key, f"is an array of relaxed type '{target.ref}'")

    def _resolve(self, ref: str, component: SchemaComponent, field: str) -> SchemaComponent:
        target = self._components.get(ref)
        if target is None:
            raise UnresolvedReferenceError(ref, component.ref, field)
        return target

    def _mark_relaxed(self, component: SchemaComponent, field: str, reason: str) -> None:
        if not component.is_relaxed_type:
            logger.debug("'%s' property of '%s' %s. marked as a relaxed type", field, component.ref, reason)
        component.is_relaxed_type = True
