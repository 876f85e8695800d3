import pytest
from raytracer.errors import DegenerateEquationError, PreconditionError
from raytracer.geometry import Color, Point, Ray, are_close_points
from raytracer.intersections import Floor, Plane, Sphere, solve_quadratic

BLACK = Color(0, 0, 0)
WHITE = Color(255, 255, 255)


def test_quadratic_equation():
    assert solve_quadratic(0.0, 2.0, 4.0) == [-2.0]
    assert solve_quadratic(1.0, 2.0, 1.0) == [-1.0, -1.0]
    assert solve_quadratic(8.0, 2.0, 1.0) == []


def test_quadratic_root_order():
    """The +sqrt(disc) root comes first."""
    assert solve_quadratic(1.0, 0.0, -4.0) == [2.0, -2.0]
    assert solve_quadratic(1.0, -3.0, 2.0) == [2.0, 1.0]


@pytest.mark.parametrize("c", [0.0, 1.0, -7.5])
def test_quadratic_without_equation(c):
    with pytest.raises(DegenerateEquationError):
        solve_quadratic(0.0, 0.0, c)


def test_ray_plane_intersection():
    ray = Ray(Point(-1.0, -1.0, -1.0), Point(1.0, 1.0, 1.0))
    plane = Plane(0.0, 0.0, 1.0, 0.0)
    points = plane.intersect(ray)
    assert len(points) == 1
    assert points[0] == Point(0.0, 0.0, 0.0)


def test_ray_plane_no_intersection():
    """The plane is behind the ray's start."""
    ray = Ray(Point(1.0, 1.0, 1.0), Point(1.0, 1.0, 1.0))
    plane = Plane(0.0, 0.0, 1.0, 0.0)
    assert plane.intersect(ray) == []


def test_ray_plane_parallel():
    ray = Ray(Point(0.0, 0.0, 5.0), Point(1.0, 2.0, 0.0))
    assert Plane(0.0, 0.0, 1.0, 0.0).intersect(ray) == []


def test_ray_sphere_intersection():
    ray = Ray(Point(0.0, 0.0, 0.0), Point(1.0, 0.0, 0.0))
    sphere = Sphere(center=Point(0.0, 0.0, 0.0), radius=1.0, color=BLACK)
    points = sphere.intersect(ray)
    assert len(points) == 1
    assert are_close_points(points[0], Point(1.0, 0.0, 0.0))


def test_ray_sphere_two_intersections():
    ray = Ray(Point(-5.0, 0.0, 0.0), Point(1.0, 0.0, 0.0))
    sphere = Sphere(center=Point(0.0, 0.0, 0.0), radius=1.0, color=BLACK)
    points = sphere.intersect(ray)
    # +sqrt root first: the far side
    assert points == [Point(1.0, 0.0, 0.0), Point(-1.0, 0.0, 0.0)]


def test_ray_sphere_tangent():
    ray = Ray(Point(-5.0, 1.0, 0.0), Point(1.0, 0.0, 0.0))
    sphere = Sphere(center=Point(0.0, 0.0, 0.0), radius=1.0, color=BLACK)
    points = sphere.intersect(ray)
    assert len(points) == 1
    assert are_close_points(points[0], Point(0.0, 1.0, 0.0))


def test_ray_sphere_no_intersection():
    ray = Ray(Point(0.0, 0.0, 0.0), Point(1.0, 0.0, 0.0))
    sphere = Sphere(center=Point(10.0, 10.0, 10.0), radius=1.0, color=WHITE)
    assert sphere.intersect(ray) == []


def test_ray_sphere_behind():
    ray = Ray(Point(5.0, 0.0, 0.0), Point(1.0, 0.0, 0.0))
    sphere = Sphere(center=Point(0.0, 0.0, 0.0), radius=1.0, color=WHITE)
    assert sphere.intersect(ray) == []


def test_degenerate_ray_has_no_intersections():
    ray = Ray(Point(0.0, 0.0, 0.0), Point(0.0, 0.0, 0.0))
    sphere = Sphere(center=Point(0.0, 0.0, 0.0), radius=1.0, color=WHITE)
    assert sphere.intersect(ray) == []
    assert Plane(0.0, 0.0, 1.0, 0.0).intersect(ray) == []


def test_sphere_colored_intersections():
    color = Color(1, 2, 3)
    sphere = Sphere(center=Point(0.0, 0.0, 0.0), radius=1.0, color=color)
    hits = sphere.colored_intersections(Ray(Point(0.0, 0.0, 0.0), Point(0.0, 0.0, 1.0)))
    assert [hit.color for hit in hits] == [color]


def test_sphere_radius_validation():
    with pytest.raises(ValueError):
        Sphere(center=Point(0.0, 0.0, 0.0), radius=0.0, color=WHITE)


def test_floor_color_at():
    floor = Floor(5.0, BLACK, WHITE)
    assert floor.color_at(Point(0.1, 0.1, 0.0)) == BLACK
    assert floor.color_at(Point(5.1, 0.1, 0.0)) == WHITE

    assert floor.color_at(Point(5.1, -0.1, 0.0)) == BLACK
    assert floor.color_at(Point(-5.1, -0.1, 0.0)) == WHITE


def test_floor_alternates_across_origin():
    floor = Floor(5.0, BLACK, WHITE)
    assert floor.color_at(Point(0.1, 0.1, 0.0)) == BLACK
    assert floor.color_at(Point(-0.1, 0.1, 0.0)) == WHITE
    assert floor.color_at(Point(-0.1, -0.1, 0.0)) == BLACK
    assert floor.color_at(Point(-5.1, 0.1, 0.0)) == BLACK


def test_floor_colors_are_always_configured_colors():
    floor = Floor(3.0, BLACK, WHITE)
    for x in range(-20, 21):
        for y in range(-20, 21):
            assert floor.color_at(Point(x * 0.7, y * 1.3, 0.0)) in (BLACK, WHITE)


def test_floor_color_off_plane():
    floor = Floor(5.0, BLACK, WHITE)
    with pytest.raises(PreconditionError):
        floor.color_at(Point(0.1, 0.1, 1.0))
    # Within tolerance of the plane
    assert floor.color_at(Point(0.1, 0.1, 0.0005)) == BLACK


def test_floor_colored_intersections():
    floor = Floor(5.0, BLACK, WHITE)
    ray = Ray.between(Point(6.0, 1.0, 10.0), Point(6.0, 1.0, 0.0))
    hits = floor.colored_intersections(ray)
    assert len(hits) == 1
    assert hits[0].point == Point(6.0, 1.0, 0.0)
    assert hits[0].color == WHITE


def test_floor_step_validation():
    with pytest.raises(ValueError):
        Floor(0.0, BLACK, WHITE)


if __name__ == "__main__":
    pytest.main([__file__])
