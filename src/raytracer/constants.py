"""
Model constants and default configuration for the raytracer.
"""

# Tolerance (scene units)
EPSILON = 0.001

# Lighting
SHADOW_COEFFICIENT = 3.0
LIGHT_POWER = 1000.0

# Mirror bounce passes over the sphere list
MIRROR_ITERATIONS = 3

# Colors (r, g, b)
WHITE = (255, 255, 255)
BLACK = (0, 0, 0)
SKY_BLUE = (120, 170, 230)
GREEN = (0, 150, 0)
RED = (170, 30, 30)
SILVER = (200, 200, 210)

# Default scene
DEFAULT_FLOOR_STEP = 32.0
DEFAULT_LIGHT = (-200.0, 10.0, 400.0)
DEFAULT_EYE = (200.0, 0.0, 60.0)

# (center, radius, color, is_mirror)
DEFAULT_SPHERES = [
    ((-120.0, -60.0, 50.0), 50.0, SILVER, True),
    ((-60.0, 70.0, 25.0), 25.0, GREEN, False),
    ((-250.0, 160.0, 40.0), 40.0, RED, False),
]

# Image
DEFAULT_WIDTH = 256
DEFAULT_HEIGHT = 256
DEFAULT_OUTPUT = "raytracer.png"
