"""Tests for the flattened scene arrays and the compiled tracer kernels."""

import numpy as np
import pytest

from weekend.core.ray import Ray
from weekend.core.vector import Colour, Point3, Vector3
from weekend.geometry.sphere import Sphere
from weekend.geometry.world import HittableList
from weekend.materials.dielectric import Dielectric
from weekend.materials.lambertian import Lambertian
from weekend.materials.material import Material
from weekend.materials.metal import Metal
from weekend.renderer.cpu_geometry import hit_world, ray_sphere_intersect
from weekend.renderer.cpu_kernels import T_MIN, camera_ray, trace_ray, trace_rows
from weekend.renderer.raytracer import ray_color
from weekend.renderer.scene_data import (
    DIELECTRIC,
    LAMBERTIAN,
    METAL,
    camera_frame,
    flatten_world,
)
from weekend.scenes import build_cover, build_test, close_up_camera, cover_camera


class Unknown(Material):
    def scatter(self, ray_in, rec, rng=None):
        return None


def vec(x, y, z):
    return np.array([x, y, z], dtype=np.float64)


def trace(world, origin, direction, depth):
    """Run the compiled tracer for one ray; returns the colour as a tuple."""
    scene = flatten_world(world)
    color = np.empty(3)
    trace_ray(vec(*origin), vec(*direction), depth, *scene,
              np.empty(3), np.empty(3), np.empty(3), color)
    return tuple(color)


class TestFlattenWorld:
    def test_test_scene(self):
        scene = flatten_world(build_test())
        assert scene.centers.shape == (5, 3)
        assert scene.radii.tolist() == [100.0, 0.5, 0.5, -0.45, 0.5]
        assert scene.centers[0].tolist() == [0.0, -100.5, -1.0]
        # The hollow glass shell shares its material row with the outer sphere
        assert scene.material_ids[2] == scene.material_ids[3]
        assert len(scene.material_types) == 4
        types = [scene.material_types[m] for m in scene.material_ids]
        assert types == [LAMBERTIAN, LAMBERTIAN, DIELECTRIC, DIELECTRIC, METAL]

    def test_material_parameters(self):
        world = HittableList([
            Sphere(Point3(0, 0, 0), 1, Metal(Colour(0.1, 0.2, 0.3), 0.4)),
            Sphere(Point3(1, 0, 0), 1, Dielectric(1.7)),
        ])
        scene = flatten_world(world)
        metal, glass = scene.material_ids
        assert scene.albedos[metal].tolist() == [0.1, 0.2, 0.3]
        assert scene.fuzz[metal] == 0.4
        assert scene.albedos[glass].tolist() == [1.0, 1.0, 1.0]
        assert scene.refraction_indices[glass] == 1.7

    def test_cover_scene_keeps_sweep_order(self):
        world = build_cover()
        scene = flatten_world(world)
        assert len(scene.radii) == len(world)
        for i, sphere in enumerate(world):
            assert tuple(scene.centers[i]) == tuple(sphere.center)

    def test_nested_lists_flatten_in_order(self):
        gray = Lambertian(Colour(0.5, 0.5, 0.5))
        inner = HittableList([Sphere(Point3(1, 0, 0), 1, gray), Sphere(Point3(2, 0, 0), 1, gray)])
        world = HittableList([Sphere(Point3(0, 0, 0), 1, gray), inner])
        scene = flatten_world(world)
        assert scene.centers[:, 0].tolist() == [0.0, 1.0, 2.0]
        assert scene.material_ids.tolist() == [0, 0, 0]

    def test_empty_world(self):
        scene = flatten_world(HittableList())
        assert scene.centers.shape == (0, 3)
        assert scene.albedos.shape == (0, 3)

    def test_unknown_material_is_not_flattened(self):
        world = HittableList([Sphere(Point3(0, 0, -1), 0.5, Unknown())])
        assert flatten_world(world) is None

    def test_camera_frame(self):
        camera = cover_camera(16 / 9)
        frame = camera_frame(camera)
        assert frame.shape == (6, 3)
        assert tuple(frame[0]) == tuple(camera.origin)
        assert tuple(frame[1]) == tuple(camera.lower_left_corner)
        assert tuple(frame[5]) == tuple(camera.v)


class TestGeometryKernels:
    def test_sphere_roots(self):
        center = vec(0, 0, -1)
        t = ray_sphere_intersect(vec(0, 0, 0), vec(0, 0, -1), center, 0.5, T_MIN, np.inf)
        assert t == pytest.approx(0.5)
        # From inside, the near root is behind the origin
        t = ray_sphere_intersect(vec(0, 0, -1), vec(0, 0, -1), center, 0.5, T_MIN, np.inf)
        assert t == pytest.approx(0.5)
        assert ray_sphere_intersect(vec(0, 0, 0), vec(0, 1, 0), center, 0.5, T_MIN, np.inf) == -1.0

    def test_hit_world_picks_closest(self):
        centers = np.array([[0, 0, -5], [0, 0, -2], [0, 0, -8]], dtype=np.float64)
        radii = np.array([0.5, 0.5, 0.5])
        index, t = hit_world(vec(0, 0, 0), vec(0, 0, -1), centers, radii, T_MIN, np.inf)
        assert index == 1
        assert t == pytest.approx(1.5)

    def test_hit_world_miss(self):
        index, _ = hit_world(vec(0, 0, 0), vec(0, 0, -1), np.zeros((0, 3)), np.zeros(0),
                             T_MIN, np.inf)
        assert index == -1


class TestTraceRay:
    def test_depth_zero_is_black(self, single_sphere_world):
        assert trace(single_sphere_world, (0, 0, 0), (0, 1, 0), 0) == (0.0, 0.0, 0.0)

    def test_miss_returns_sky(self):
        up = trace(HittableList(), (0, 0, 0), (0, 3, 0), 5)
        down = trace(HittableList(), (0, 0, 0), (0, -1, 0), 5)
        assert up == pytest.approx((0.5, 0.7, 1.0))
        assert down == pytest.approx((1.0, 1.0, 1.0))

    def test_last_bounce_contributes_nothing(self, single_sphere_world):
        assert trace(single_sphere_world, (0, 0, 0), (0, 0, -1), 1) == (0.0, 0.0, 0.0)

    def test_mirror_matches_object_tracer(self):
        world = HittableList([Sphere(Point3(0, -2, 0), 1.0, Metal(Colour(0.5, 0.5, 0.5)))])
        compiled = trace(world, (0, 0, 0), (0, -1, 0), 2)
        expected = ray_color(Ray(Point3(0, 0, 0), Vector3(0, -1, 0)), world, 2)
        assert compiled == pytest.approx((0.25, 0.35, 0.5))
        assert compiled == pytest.approx(tuple(expected))

    def test_tangent_metal_reflection_is_absorbed(self):
        # Grazes the top of the sphere, so the reflection runs along the surface
        world = HittableList([Sphere(Point3(0, -1, 0), 1.0, Metal(Colour(1, 1, 1)))])
        assert trace(world, (-5, 0, 0), (1, 0, 0), 5) == (0.0, 0.0, 0.0)

    def test_glass_never_darkens_a_path(self):
        world = HittableList([Sphere(Point3(0, 0, -2), 0.5, Dielectric(1.5))])
        for _ in range(20):
            color = trace(world, (0, 0, 0), (0.05, 0.05, -1), 10)
            # Every bounce keeps full strength; the path ends in the sky
            assert min(color) >= 0.5
            assert max(color) <= 1.0


class TestTraceRows:
    def test_camera_ray_matches_camera(self):
        camera = close_up_camera(2.0)
        origin, direction = np.empty(3), np.empty(3)
        camera_ray(0.25, 0.75, camera_frame(camera), camera.lens_radius, origin, direction)
        expected = camera.get_ray(0.25, 0.75)
        assert tuple(origin) == pytest.approx(tuple(expected.origin))
        assert tuple(direction) == pytest.approx(tuple(expected.direction))

    def test_writes_only_requested_rows(self):
        camera = close_up_camera(0.75)
        pixels = np.zeros((4, 3, 3), dtype=np.uint8)
        scene = flatten_world(HittableList())
        trace_rows(np.array([1, 3], dtype=np.int64), pixels, 1, 1,
                   camera_frame(camera), camera.lens_radius, *scene)
        assert pixels[[1, 3]].all()
        assert not pixels[[0, 2]].any()

    def test_defocus_camera_renders(self):
        camera = cover_camera(2.0)
        pixels = np.zeros((2, 4, 3), dtype=np.uint8)
        scene = flatten_world(build_test())
        trace_rows(np.arange(2, dtype=np.int64), pixels, 2, 3,
                   camera_frame(camera), camera.lens_radius, *scene)
        assert pixels.any()

    def test_kernels_release_the_gil(self):
        for kernel in (trace_rows, trace_ray, hit_world):
            assert kernel.targetoptions.get("nogil") is True
