"""Errors raised by ocean_scales."""


class OceanScalesError(ValueError):
    """Base class for input validation failures."""


class ShapeMismatchError(OceanScalesError):
    """Input shapes cannot be reconciled to a common field shape."""


class NonUniqueReferencePressureError(OceanScalesError):
    """A reference pressure array holds more than one distinct value."""


class ArityError(OceanScalesError, TypeError):
    """A required input was not supplied."""
