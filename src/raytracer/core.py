import functools
import logging
from dataclasses import dataclass
from typing import Tuple

import numpy as np

from raytracer import constants
from raytracer.errors import PreconditionError
from raytracer.geometry import Color, Point, Ray, closest
from raytracer.intersections import Floor, Sphere
from raytracer.rendering import HitSelector, MirrorBounce
from raytracer.shadows import ShadowModel

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Scene:
    """
    Immutable description of everything a pixel can see.

    Coordinate System:
    - Floor: the plane z = 0, z grows upward.
    - Screen: the plane x = 0; pixel (y, z) is the screen point (0, y, z).
    - Eye: the single view point primary rays start from.
    """
    floor: Floor
    light_source: Point
    sky_color: Color
    spheres: Tuple[Sphere, ...]
    eye: Point

    def __post_init__(self):
        object.__setattr__(self, "spheres", tuple(self.spheres))

    @functools.cached_property
    def selector(self):
        return HitSelector(self.floor, self.spheres)

    @functools.cached_property
    def shadow_model(self):
        return ShadowModel(self.selector, self.light_source)

    @functools.cached_property
    def bounce(self):
        return MirrorBounce(self.selector)

    def primary_ray(self, y, z):
        return Ray.between(self.eye, Point(0.0, float(y), float(z)))

    def color_at(self, y, z):
        """
        Color seen through the screen point (0, y, z).
        """
        # 1. Primary ray, bounced off mirrors
        result = self.bounce.trace(self.primary_ray(y, z))

        # 2. Nearest surface to where the final ray starts
        hit = closest(result.ray.start, result.hits)
        if hit is None:
            return self.sky_color

        # 3. Light / shadow
        return self.shadow_model.illuminate(hit)


def default_scene(light=None, eye=None, mirrors=True):
    """
    Build the demo scene from constants.

    Args:
        light: (x, y, z) light position override
        eye: (x, y, z) eye position override
        mirrors: If False, every sphere is rendered as an opaque sphere
    """
    light = light if light is not None else constants.DEFAULT_LIGHT
    eye = eye if eye is not None else constants.DEFAULT_EYE

    spheres = [
        Sphere(Point(*center), radius, Color(*color), is_mirror and mirrors)
        for center, radius, color, is_mirror in constants.DEFAULT_SPHERES
    ]
    return Scene(
        floor=Floor(constants.DEFAULT_FLOOR_STEP, Color(*constants.WHITE), Color(*constants.BLACK)),
        light_source=Point(*(float(v) for v in light)),
        sky_color=Color(*constants.SKY_BLUE),
        spheres=tuple(spheres),
        eye=Point(*(float(v) for v in eye)),
    )


class Renderer:
    def __init__(self, scene=None):
        """
        Initialize the renderer for an immutable scene.

        Screen mapping:
        - Column c maps to screen y = c - width // 2.
        - Row r maps to screen z = height // 2 - r (image rows grow downward).
        """
        self.scene = scene if scene is not None else default_scene()

    @staticmethod
    def pixel_to_screen(row, col, width, height):
        return col - width // 2, height // 2 - row

    @functools.lru_cache(maxsize=32)
    def _render_cached(self, width, height):
        """
        Internal cached render call using hashable arguments.
        """
        logger.debug(f"Rendering {width}x{height} image")
        pixels = np.zeros((height, width, 3), dtype=np.uint8)
        failures = 0
        last_error = None

        for row in range(height):
            for col in range(width):
                y, z = self.pixel_to_screen(row, col, width, height)
                try:
                    color = self.scene.color_at(y, z)
                except PreconditionError as e:
                    # Keep rendering; a broken pixel falls back to sky
                    failures += 1
                    last_error = e
                    color = self.scene.sky_color
                pixels[row, col] = color.as_tuple()

        if failures:
            logger.warning(f"{failures} of {width * height} pixels failed and were painted with the sky color "
                           f"(last error: {last_error})")
        logger.debug(f"Render of {width}x{height} complete")
        return pixels

    def render(self, width=constants.DEFAULT_WIDTH, height=constants.DEFAULT_HEIGHT):
        """
        Render the scene into an (height, width, 3) uint8 RGB array.

        Results are cached per size; the returned array is a copy so callers
        may modify it freely.
        """
        return self._render_cached(width, height).copy()
