"""
Hard-shadow lighting for the raytracer.

This module decides whether a surface point sees the single point light
and turns the (possibly penalised) light distance into a brightness
factor applied to the surface color.
"""
from raytracer import constants
from raytracer.errors import PreconditionError
from raytracer.geometry import Ray, distance, intensify


class ShadowModel:
    """
    Handles occlusion tests and light attenuation.
    """

    def __init__(self, selector, light_source, shadow_coefficient=None, light_power=None):
        """
        Initialize lighting parameters.

        Args:
            selector: HitSelector over the scene surfaces
            light_source: Point light position
            shadow_coefficient: Distance multiplier for occluded points
            light_power: Numerator of the inverse-linear falloff
        """
        self.selector = selector
        self.light_source = light_source
        self.shadow_coefficient = shadow_coefficient or constants.SHADOW_COEFFICIENT
        self.light_power = light_power or constants.LIGHT_POWER

    def is_occluded(self, point):
        """
        Whether any surface lies on the ray from `point` toward the light.

        Shadow rays never bounce. Hits at `point` itself are the surface the
        point belongs to and do not count.
        """
        shadow_ray = Ray.between(point, self.light_source)
        return bool(self.selector.intersections(shadow_ray, exclude=point))

    def get_shadow_factor(self, point):
        """Light distance multiplier: shadow_coefficient in shadow, else 1.0."""
        return self.shadow_coefficient if self.is_occluded(point) else 1.0

    def get_brightness(self, point):
        """
        Brightness at a surface point, light_power / effective distance.

        Raises:
            PreconditionError: if the point coincides with the light source.
        """
        distance_to_light = distance(point, self.light_source) * self.get_shadow_factor(point)
        if distance_to_light == 0.0:
            raise PreconditionError(f"Light source {self.light_source} coincides with a surface point")
        return self.light_power / distance_to_light

    def illuminate(self, hit):
        """Lit color of a ColoredPoint."""
        return intensify(hit.color, self.get_brightness(hit.point))
