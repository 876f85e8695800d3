"""
Ray-geometry intersection calculations for the raytracer.

This module contains the quadratic solver and the scene primitives: the
infinite Plane, the Sphere and the checkered Floor built on a plane at
z = 0. Every intersection routine returns forward hits only (ray
parameter k >= 0), as a list so that "no hit" is simply empty.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Union

from raytracer.errors import DegenerateEquationError, PreconditionError
from raytracer.geometry import Color, ColoredPoint, Point, Ray, are_close


def solve_quadratic(a, b, c):
    """
    Solve a*t^2 + b*t + c = 0 over the reals.

    Args:
        a, b, c: Equation coefficients.

    Returns:
        list: [], [root] for a linear equation, or
            [(-b + sqrt(disc)) / 2a, (-b - sqrt(disc)) / 2a] in that order.

    Raises:
        DegenerateEquationError: if a and b are both zero.
    """
    if a == 0.0:
        if b == 0.0:
            raise DegenerateEquationError(f"No equation to solve: a=0, b=0, c={c}")
        return [-c / b]

    discriminant = b**2 - 4.0 * a * c
    if discriminant < 0.0:
        return []

    sqrt_disc = math.sqrt(discriminant)
    return [(-b + sqrt_disc) / (2.0 * a), (-b - sqrt_disc) / (2.0 * a)]


@dataclass(frozen=True)
class Plane:
    """Plane a*x + b*y + c*z + d = 0."""
    a: float
    b: float
    c: float
    d: float

    def intersect(self, ray: Ray) -> List[Point]:
        start, direction = ray.start, ray.direction
        denom = self.a * direction.x + self.b * direction.y + self.c * direction.z

        # Parallel (or degenerate) ray
        if are_close(denom, 0.0):
            return []

        k = -(self.a * start.x + self.b * start.y + self.c * start.z + self.d) / denom
        if k < 0.0:
            return []
        return [ray.point_at(k)]


@dataclass(frozen=True)
class Sphere:
    """
    Sphere primitive.

    Attributes:
        center: Center point.
        radius: Positive radius.
        color: Surface color.
        is_mirror: Whether primary rays bounce off this sphere.
    """
    center: Point
    radius: float
    color: Color
    is_mirror: bool = False

    def __post_init__(self):
        if not self.radius > 0.0:
            raise ValueError(f"Sphere radius must be positive, got {self.radius}")

    def intersect(self, ray: Ray) -> List[Point]:
        """
        Forward intersections of the ray with the sphere surface.

        Solves |p + k*d|^2 = r^2 with p the ray start relative to the center.
        A zero direction has no intersections.
        """
        p = ray.start - self.center
        d = ray.direction

        a = d.length_squared()
        if a == 0.0:
            return []
        b = 2.0 * p.dot(d)
        c = p.length_squared() - self.radius**2

        roots = solve_quadratic(a, b, c)
        # Tangent ray: the double root is a single touching point
        if len(roots) == 2 and roots[0] == roots[1]:
            roots = roots[:1]

        return [ray.point_at(k) for k in roots if k >= 0.0]

    def colored_intersections(self, ray: Ray) -> List[ColoredPoint]:
        return [ColoredPoint(point, self.color) for point in self.intersect(ray)]


@dataclass(frozen=True)
class Floor:
    """
    Checkered ground plane at z = 0.

    Attributes:
        step: Checker square size (scene units, positive).
        first_color: Color where the two checker indices share parity.
        second_color: Color elsewhere.
    """
    step: float
    first_color: Color
    second_color: Color

    def __post_init__(self):
        if not self.step > 0.0:
            raise ValueError(f"Floor step must be positive, got {self.step}")

    @property
    def plane(self) -> Plane:
        return Plane(0.0, 0.0, 1.0, 0.0)

    def color_at(self, point: Point) -> Color:
        """
        Checker color at a point on the floor.

        Checker indices are the absolute values of the floored,
        step-scaled coordinates.

        Raises:
            PreconditionError: if the point is not on the floor plane.
        """
        if not are_close(point.z, 0.0):
            raise PreconditionError(f"Point {point} is not on the floor (z = 0)")

        cx = abs(math.floor(point.x / self.step))
        cy = abs(math.floor(point.y / self.step))
        if cx % 2 == cy % 2:
            return self.first_color
        return self.second_color

    def intersect(self, ray: Ray) -> List[Point]:
        return self.plane.intersect(ray)

    def colored_intersections(self, ray: Ray) -> List[ColoredPoint]:
        return [ColoredPoint(point, self.color_at(point)) for point in self.intersect(ray)]


# Closed set of primitives a scene is built from
Intersectable = Union[Floor, Sphere]
