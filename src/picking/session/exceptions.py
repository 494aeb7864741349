"""Picking-specific domain errors.

Both specialise Protean's exceptions so the API layer maps them like any
other domain error (ObjectNotFoundError -> 404, ValidationError -> 400).
"""

from protean.exceptions import ObjectNotFoundError, ValidationError


class UnknownProductError(ObjectNotFoundError):
    """An action referenced a product that is not part of the session's batch."""


class StalePickItemError(ValidationError):
    """An item action was based on an outdated item version."""
