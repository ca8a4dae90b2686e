"""Error taxonomy shared by the loaders, shaping helpers, and views."""

from __future__ import annotations


class ExplorerError(Exception):
    """Base class for failures that should abort a single view, not the page."""


class LoadError(ExplorerError, RuntimeError):
    """A resource could not be fetched, parsed, or validated."""

    def __init__(self, resource_id: str, reason: str) -> None:
        super().__init__(f"Failed to load '{resource_id}': {reason}")
        self.resource_id = resource_id
        self.reason = reason


class EmptyInputError(ExplorerError, ValueError):
    """An operation that needs at least one record received none."""


class InvalidParameterError(ExplorerError, ValueError):
    """A caller-supplied parameter is out of range or inconsistent."""


class UnknownCategoryError(ExplorerError, ValueError):
    """A categorical value is missing from the declared category order."""

    def __init__(self, field: str, value: object, category_order) -> None:
        super().__init__(
            f"Value {value!r} in field '{field}' is not one of {list(category_order)}"
        )
        self.field = field
        self.value = value
