"""
Data structures and interfaces for the per-pixel rendering pipeline.
"""
from __future__ import annotations

import functools
import itertools
from dataclasses import dataclass
from typing import List, Optional, Sequence

from raytracer import constants
from raytracer.geometry import ColoredPoint, Point, Ray, are_close_points, closest
from raytracer.intersections import Floor, Intersectable, Sphere


@dataclass(frozen=True)
class BounceResult:
    """
    Outcome of tracing a primary ray through the mirror bounces.

    Attributes:
        hits: Colored intersections of the final ray with the scene.
        ray: The final ray; hits are ranked by distance to its start.
    """
    hits: List[ColoredPoint]
    ray: Ray


class HitSelector:
    """
    Responsible for collecting and ranking the surfaces a ray touches.
    """

    def __init__(self, floor: Floor, spheres: Sequence[Sphere]):
        """
        Args:
            floor: Scene floor.
            spheres: Scene spheres, in scene order.
        """
        self.floor = floor
        self.spheres = tuple(spheres)

    @property
    def surfaces(self) -> List[Intersectable]:
        return [self.floor, *self.spheres]

    def intersections(self, ray: Ray, exclude: Optional[Point] = None) -> List[ColoredPoint]:
        """
        Colored forward intersections of every surface, floor first.

        Args:
            ray: Ray to test.
            exclude: Points within tolerance of this one are dropped.
        """
        hits = []
        for surface in self.surfaces:
            hits.extend(surface.colored_intersections(ray))
        if exclude is not None:
            hits = [hit for hit in hits if not are_close_points(hit.point, exclude)]
        return hits


class MirrorBounce:
    """
    Redirects primary rays off mirror spheres.

    The ray is folded over `iterations` passes of the sphere list. Each
    sphere the current ray strikes either truncates it at the hit point
    (opaque sphere) or reflects it about the sphere's center-to-hit axis
    (mirror sphere).
    """

    def __init__(self, selector: HitSelector, iterations: Optional[int] = None):
        self.selector = selector
        self.iterations = iterations if iterations is not None else constants.MIRROR_ITERATIONS

    def trace(self, ray: Ray) -> BounceResult:
        floor_hit = closest(ray.start, self.selector.floor.intersect(ray))
        any_sphere_hit = any(sphere.intersect(ray) for sphere in self.selector.spheres)

        # Only spheres can deflect the ray; a floor-only view needs no bounce
        if floor_hit is not None and not any_sphere_hit:
            floor_color = self.selector.floor.color_at(floor_hit)
            return BounceResult([ColoredPoint(floor_hit, floor_color)], ray)

        passes = itertools.chain.from_iterable(
            itertools.repeat(self.selector.spheres, self.iterations))
        final_ray = functools.reduce(self.deflect, passes, ray)

        return BounceResult(self.selector.intersections(final_ray, exclude=final_ray.start), final_ray)

    @staticmethod
    def deflect(ray: Ray, sphere: Sphere) -> Ray:
        """
        One fold step: the ray after meeting `sphere`.

        Hits at the ray's own start are ignored, otherwise a ray leaving a
        mirror surface would immediately re-hit it.
        """
        candidates = [p for p in sphere.intersect(ray) if not are_close_points(p, ray.start)]
        hit = closest(ray.start, candidates)
        if hit is None:
            return ray

        if not sphere.is_mirror:
            return Ray.between(ray.start, hit)

        # Reflect the ray's start across the center->hit axis
        axis = Ray.between(sphere.center, hit)
        foot = axis.perpendicular_foot(ray.start)
        if foot is None:
            return ray
        reflected = foot * 2.0 - ray.start
        return Ray.between(hit, reflected)
