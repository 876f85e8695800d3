import argparse
import logging
import os
import sys
import time

import PIL.Image

from raytracer import constants
from raytracer.core import Renderer, default_scene

logger = logging.getLogger(__name__)


def save_image(pixels, path):
    """Write an (H, W, 3) uint8 array; the format follows the file suffix."""
    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    PIL.Image.fromarray(pixels).save(path)
    logger.debug(f"Saved {pixels.shape[1]}x{pixels.shape[0]} image to {path}")


def generate_samples(width, height, output_dir="output"):
    """Render the preset sample scenes."""
    print(f"\n--- Generating Samples ({width}x{height}) ---")

    samples = [
        ("Mirrors", default_scene(), "sample_mirrors.png"),
        ("Opaque Spheres", default_scene(mirrors=False), "sample_opaque.png"),
        ("Low Sun", default_scene(light=(-600.0, -300.0, 120.0)), "sample_low_light.png"),
    ]

    for name, scene, filename in samples:
        print(f"Rendering {name}...")
        t0 = time.time()
        img = Renderer(scene).render(width=width, height=height)
        print(f"  Complete in {time.time() - t0:.2f}s")
        save_image(img, os.path.join(output_dir, filename))


def run_verification(scene=None):
    """
    Spot-check reference pixels: one above the horizon, one aimed at each
    sphere center and one on the floor straight below the eye's view.

    Returns:
        bool: True when every check passed
    """
    print("\n--- Scene Verification ---")
    scene = scene if scene is not None else default_scene()
    eye = scene.eye
    ok = True

    # Far above the horizon
    sky = scene.color_at(0, round(eye.z) + 10_000)
    if sky == scene.sky_color:
        print("Verified sky pixel shows the sky color")
    else:
        print(f"Error: sky pixel is {sky}, expected {scene.sky_color}")
        ok = False

    for i, sphere in enumerate(scene.spheres):
        if eye.x <= sphere.center.x:
            continue
        # Screen point (x = 0) on the line from the eye to the sphere center
        aim = eye + (sphere.center - eye) * (eye.x / (eye.x - sphere.center.x))
        color = scene.color_at(aim.y, aim.z)
        if sphere.is_mirror:
            # Head-on, a mirror sends the ray straight back toward the eye
            print(f"Mirror sphere {i} at {sphere.center} reflects {color.as_tuple()}")
        elif color == scene.sky_color:
            print(f"Error: sphere {i} at {sphere.center} is not visible")
            ok = False
        else:
            print(f"Verified sphere {i} renders as {color.as_tuple()}")

    floor_color = scene.color_at(0, round(eye.z) - 1_000)
    if floor_color == scene.sky_color:
        print("Error: floor below the eye is not visible")
        ok = False
    else:
        print(f"Verified floor below the eye renders as {floor_color.as_tuple()}")

    return ok


def parse_point(values):
    return tuple(float(v) for v in values) if values is not None else None


def main():
    parser = argparse.ArgumentParser(description="Checkerboard and mirror spheres raytracer")
    parser.add_argument("--ui", action="store_true", help="Launch the interactive Gradio UI")
    parser.add_argument("--samples", action="store_true", help="Render the preset sample scenes into output/")
    parser.add_argument("--verify", action="store_true", help="Spot-check reference pixels of the scene")
    parser.add_argument("--output", default=constants.DEFAULT_OUTPUT, help="Image file to write")
    parser.add_argument("--width", type=int, default=constants.DEFAULT_WIDTH, help="Image width in pixels")
    parser.add_argument("--height", type=int, default=constants.DEFAULT_HEIGHT, help="Image height in pixels")
    parser.add_argument("--light", type=float, nargs=3, metavar=("X", "Y", "Z"), help="Light source position")
    parser.add_argument("--eye", type=float, nargs=3, metavar=("X", "Y", "Z"), help="Eye position")
    parser.add_argument("--no-mirrors", action="store_true", help="Render mirror spheres as opaque spheres")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    args = parser.parse_args()
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    scene = default_scene(light=parse_point(args.light), eye=parse_point(args.eye),
                          mirrors=not args.no_mirrors)

    if args.ui:
        from raytracer.ui import create_ui
        print("Launching UI...")
        demo = create_ui()
        demo.launch()
    elif args.samples:
        generate_samples(args.width, args.height)
    elif args.verify:
        if not run_verification(scene):
            sys.exit(1)
    else:
        print(f"Rendering {args.width}x{args.height}...")
        t0 = time.time()
        img = Renderer(scene).render(width=args.width, height=args.height)
        save_image(img, args.output)
        print(f"Render complete in {time.time() - t0:.2f}s: {args.output}")


def run_ui():
    """Entry point for raytracer-ui command."""
    sys.argv = [sys.argv[0], "--ui"]
    main()


def run_verify():
    """Entry point for raytracer-verify command."""
    sys.argv = [sys.argv[0], "--verify"]
    main()


def run_samples():
    """Entry point for raytracer-samples command."""
    sys.argv = [sys.argv[0], "--samples"]
    main()


if __name__ == "__main__":
    main()
