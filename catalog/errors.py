"""Errors raised by the catalog services.

Every error is recoverable and carries a human-readable ``message``. The HTTP
layer maps each kind to a status code in ``catalog.routes``.
"""


class CatalogError(Exception):
    default_message = "Catalog error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    @property
    def kind(self) -> str:
        return type(self).__name__


class NotFound(CatalogError):
    default_message = "Not found"


class DuplicateName(CatalogError):
    default_message = "Name already exists"


class ReferenceNotFound(CatalogError):
    """A foreign entity named by the request does not exist."""

    default_message = "Referenced entity not found"


class ParentNotFound(ReferenceNotFound):
    default_message = "Parent category not found"


class CategoryNotFound(ReferenceNotFound):
    default_message = "Category not found"


class SelfParent(CatalogError):
    default_message = "Category cannot be its own parent"


class CircularReference(CatalogError):
    default_message = "Cannot move category under its own descendant"


class InternalError(CatalogError):
    default_message = "Internal storage error"
