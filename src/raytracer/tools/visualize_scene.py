import os

import numpy as np
import matplotlib.pyplot as plt

from raytracer.core import Renderer, default_scene
from raytracer.geometry import Point


def shadow_samples(scene, num_samples=24):
    """
    Floor points along the eye's line of sight (y = eye.y) with their
    occlusion state.

    Returns:
        list of (x, occluded) pairs
    """
    far_x = min((s.center.x - s.radius for s in scene.spheres), default=scene.eye.x - 350.0) - 50.0
    xs = np.linspace(scene.eye.x, far_x, num_samples)
    return [(float(x), scene.shadow_model.is_occluded(Point(float(x), scene.eye.y, 0.0))) for x in xs]


def create_visualization(scene=None, width=96, height=96):
    scene = scene if scene is not None else default_scene()

    fig = plt.figure(figsize=(14, 6))
    ax1 = fig.add_subplot(1, 2, 1)  # Side view
    ax2 = fig.add_subplot(1, 2, 2)  # Render

    # View 1: Side view (x/z plane, projected along y)
    ax1.set_title("Side View (x/z)")
    ax1.set_aspect('equal')
    ax1.axhline(0.0, color='black', linewidth=1, label='Floor')
    ax1.axvline(0.0, color='grey', linestyle=':', linewidth=1, label='Screen')

    for sphere in scene.spheres:
        rgb = np.array([sphere.color.r, sphere.color.g, sphere.color.b]) / 255.0
        circle = plt.Circle((sphere.center.x, sphere.center.z), sphere.radius,
                            facecolor=rgb, edgecolor='cyan' if sphere.is_mirror else 'black',
                            linewidth=3 if sphere.is_mirror else 1, alpha=0.8)
        ax1.add_patch(circle)

    # Shadow rays: red where a sphere blocks the light
    light = scene.light_source
    for x, occluded in shadow_samples(scene):
        ax1.plot([x, light.x], [0.0, light.z], color='red' if occluded else 'gold',
                 alpha=0.4, linewidth=0.8)

    ax1.plot(scene.eye.x, scene.eye.z, 'bo', markersize=6, zorder=10, label='Eye')
    ax1.plot(light.x, light.z, 'y*', markersize=14, zorder=10, label='Light')
    ax1.autoscale_view()
    ax1.legend(loc='upper right')

    # View 2: Render
    ax2.set_title("Render")
    ax2.axis('off')
    ax2.imshow(Renderer(scene).render(width=width, height=height))

    return fig


def main():
    os.makedirs("output", exist_ok=True)
    fig = create_visualization()
    print("Saving scene overview to output/scene_overview.png...")
    fig.savefig("output/scene_overview.png")
    print("Done.")


if __name__ == "__main__":
    main()
