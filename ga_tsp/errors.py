class InvalidParameter(ValueError):
    """Raised when solver inputs are rejected before any computation starts."""


class DegenerateFitness(RuntimeError):
    """Raised when selection is asked to sample from a non-positive fitness total."""
