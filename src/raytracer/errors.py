"""
Exception types raised by the raytracer core.
"""


class RaytracerError(Exception):
    """Base class for all raytracer errors."""


class PreconditionError(RaytracerError, ValueError):
    """
    A caller broke an operation's contract.

    Fatal to a single pixel evaluation; the Renderer recovers from it so a
    bad scene does not abort the whole image.
    """


class DegenerateEquationError(PreconditionError):
    """Quadratic with both a and b equal to zero: there is nothing to solve."""


class GeometryError(RaytracerError, ArithmeticError):
    """Internal numeric failure, e.g. a NaN distance during selection."""
