"""
Geometry primitives shared by every stage of the pipeline.

Point, Color, Ray and ColoredPoint are immutable value types. The module
also hosts the tolerance comparisons and nearest-point selection used by
intersection, bouncing and lighting.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, Optional, Sequence, TypeVar, Union

import numpy as np

from raytracer import constants
from raytracer.errors import GeometryError


@dataclass(frozen=True)
class Point:
    """3D vector / position in scene units."""
    x: float
    y: float
    z: float

    def __add__(self, other: Point) -> Point:
        return Point(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Point) -> Point:
        return Point(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, scalar: float) -> Point:
        return Point(self.x * scalar, self.y * scalar, self.z * scalar)

    __rmul__ = __mul__

    def dot(self, other: Point) -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def length_squared(self) -> float:
        return self.dot(self)

    def as_array(self) -> np.ndarray:
        return np.array([self.x, self.y, self.z])

    @classmethod
    def from_array(cls, values) -> Point:
        x, y, z = (float(v) for v in values)
        return cls(x, y, z)


@dataclass(frozen=True)
class Color:
    """
    8-bit RGB color.

    Attributes:
        r, g, b: Channel values in 0..255.
    """
    r: int
    g: int
    b: int

    def __post_init__(self):
        """Validate channel range."""
        for name in ("r", "g", "b"):
            value = getattr(self, name)
            if not 0 <= value <= 255:
                raise ValueError(f"Color channel {name} must be in 0..255, got {value}")

    def __mul__(self, brightness: float) -> Color:
        return intensify(self, brightness)

    def as_tuple(self) -> tuple[int, int, int]:
        return (self.r, self.g, self.b)

    @classmethod
    def from_tuple(cls, rgb) -> Color:
        r, g, b = rgb
        return cls(int(r), int(g), int(b))


@dataclass(frozen=True)
class Ray:
    """
    Half-line starting at `start` and extending along `direction`.

    The direction is not normalized and may be the zero vector; a zero
    direction never intersects anything.
    """
    start: Point
    direction: Point

    @classmethod
    def between(cls, start: Point, end: Point) -> Ray:
        """Ray from start through end (direction = end - start)."""
        return cls(start, end - start)

    def point_at(self, k: float) -> Point:
        return self.start + self.direction * k

    def is_degenerate(self) -> bool:
        return self.direction.length_squared() == 0.0

    def perpendicular_foot(self, point: Point) -> Optional[Point]:
        """
        Orthogonal projection of `point` onto the ray.

        Returns:
            The projected point, or None when the direction is the zero
            vector or the projection falls behind the ray's start.
        """
        length_sq = self.direction.length_squared()
        if length_sq == 0.0:
            return None
        k = (point - self.start).dot(self.direction) / length_sq
        if k < 0.0:
            return None
        return self.point_at(k)


@dataclass(frozen=True)
class ColoredPoint:
    """Intersection point tagged with the color of the surface it lies on."""
    point: Point
    color: Color


def are_close(a: float, b: float) -> bool:
    return abs(a - b) < constants.EPSILON


def are_close_points(p: Point, q: Point) -> bool:
    """Coordinate-wise tolerance check (not a distance check)."""
    return are_close(p.x, q.x) and are_close(p.y, q.y) and are_close(p.z, q.z)


def distance(p: Point, q: Point) -> float:
    return math.sqrt((p - q).length_squared())


def intensify(color: Color, brightness: float) -> Color:
    """
    Scale every channel by `brightness`, saturating at 255.

    Fractional results are truncated toward zero.
    """
    def scale(channel):
        return int(min(255.0, channel * brightness))

    return Color(scale(color.r), scale(color.g), scale(color.b))


Located = TypeVar("Located", Point, ColoredPoint)


def position_of(candidate: Union[Point, ColoredPoint]) -> Point:
    return candidate.point if isinstance(candidate, ColoredPoint) else candidate


def closest(reference: Point, candidates: Iterable[Located]) -> Optional[Located]:
    """
    Nearest candidate to `reference`.

    Args:
        reference: Point distances are measured from.
        candidates: Points or ColoredPoints, in any order.

    Returns:
        The nearest candidate, or None if there are none. Ties keep the
        first candidate in input order.

    Raises:
        GeometryError: if a distance evaluates to NaN.
    """
    ranked: Sequence = [(distance(reference, position_of(c)), c) for c in candidates]
    for dist, candidate in ranked:
        if math.isnan(dist):
            raise GeometryError(f"NaN distance from {reference} to {candidate}")
    if not ranked:
        return None
    # sorted() is stable, so equal distances keep input order
    return sorted(ranked, key=lambda pair: pair[0])[0][1]
