"""Exceptions raised while building the function generation model."""


class OasFunctionsError(Exception):
    """Base exception for all generation errors."""


class DocumentError(OasFunctionsError):
    """Raised when a parsed document cannot be read or decoded."""

    def __init__(self, message: str, source: str | None = None) -> None:
        self.source = source
        full_message = message if not source else f"[{source}] {message}"
        super().__init__(full_message)


class RegistryError(OasFunctionsError):
    """Raised when the schema registry is used inconsistently."""


class UnresolvedReferenceError(RegistryError):
    """Raised when a field's ``$ref`` points at an unregistered component."""

    def __init__(self, ref: str, referenced_from: str, field: str | None = None) -> None:
        self.ref = ref
        self.referenced_from = referenced_from
        self.field = field
        location = referenced_from if not field else f"{referenced_from}.{field}"
        super().__init__(f"Unresolved reference '{ref}' (from {location})")


class DuplicateFunctionNameError(OasFunctionsError):
    """Raised when two routes would generate the same function."""

    def __init__(self, function_name: str, method: str | None, path: str) -> None:
        self.function_name = function_name
        self.method = method
        self.path = path
        super().__init__(
            f"Function '{function_name}' is already generated; "
            f"route {(method or '').upper()} {path} conflicts with it"
        )
