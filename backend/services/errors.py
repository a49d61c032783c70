class ValidationFailed(ValueError):
    """A required request field is missing; raised before any side effect."""
