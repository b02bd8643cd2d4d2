"""Errors raised by the recommendation and route planning engine."""


class ValidationError(ValueError):
    """Malformed or insufficient input, such as a route with fewer than two stops."""
