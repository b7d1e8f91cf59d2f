"""Error taxonomy shared by the catalog operations.

Operations catch persistence and transport failures at their own boundary
and re-raise them as one of these types. The HTTP layer maps each type to a
status code (see catalog.api.errors).
"""


class CatalogError(Exception):
    """Base class for catalog operation failures."""

    pass


class ValidationError(CatalogError):
    """Missing or malformed caller input."""

    pass


class NotFoundError(CatalogError):
    """No product matches the resolved identifier."""

    pass


class DuplicateSlugError(CatalogError):
    """A product with the same slug already exists."""

    pass


class UploadConfigError(CatalogError):
    """Media host credentials are missing."""

    pass


class UnexpectedError(CatalogError):
    """Any other persistence or network failure."""

    pass
