"""Unit tests for Lambertian, Metal and Dielectric scattering."""

import math

import pytest

from conftest import ExplodingRandom, FixedRandom
from weekend.core.ray import Ray
from weekend.core.utils import reflect
from weekend.core.vector import Colour, Point3, Vector3
from weekend.geometry.hittable import HitRecord
from weekend.materials import lambertian as lambertian_module
from weekend.materials.dielectric import Dielectric, schlick
from weekend.materials.lambertian import Lambertian
from weekend.materials.material import Material, Scattered
from weekend.materials.metal import Metal

UP = Vector3(0, 1, 0)


def make_record(material, normal=UP, front_face=True):
    return HitRecord(p=Point3(0, 0, 0), normal=normal, t=1.0,
                     front_face=front_face, material=material)


class TestMaterialBase:
    def test_scatter_must_be_overridden(self):
        with pytest.raises(NotImplementedError):
            Material().scatter(Ray(Point3(0, 1, 0), -UP), make_record(None))


class TestLambertian:
    def test_attenuation_is_albedo(self, rng):
        albedo = Colour(0.2, 0.4, 0.6)
        material = Lambertian(albedo)
        ray_in = Ray(Point3(0, 1, 0), Vector3(0, -1, 0))
        for _ in range(50):
            result = material.scatter(ray_in, make_record(material), rng)
            assert isinstance(result, Scattered)
            a = result.attenuation
            assert a.x <= albedo.x and a.y <= albedo.y and a.z <= albedo.z

    def test_scatters_into_normal_hemisphere(self, rng):
        material = Lambertian(Colour(0.5, 0.5, 0.5))
        ray_in = Ray(Point3(0, 1, 0), Vector3(0, -1, 0))
        for _ in range(200):
            result = material.scatter(ray_in, make_record(material), rng)
            assert result.scattered.origin == Point3(0, 0, 0)
            assert result.scattered.direction.dot(UP) >= 0.0
            assert not result.scattered.direction.near_zero()

    def test_degenerate_direction_falls_back_to_normal(self, monkeypatch):
        monkeypatch.setattr(lambertian_module, "random_unit_vector", lambda rng: -UP)
        material = Lambertian(Colour(0.5, 0.5, 0.5))
        result = material.scatter(Ray(Point3(0, 1, 0), -UP), make_record(material))
        assert result.scattered.direction == UP


class TestMetal:
    def test_perfect_reflection(self):
        albedo = Colour(0.8, 0.6, 0.2)
        material = Metal(albedo)
        ray_in = Ray(Point3(-1, 1, 0), Vector3(1, -1, 0))
        result = material.scatter(ray_in, make_record(material), ExplodingRandom())
        s = 1.0 / math.sqrt(2.0)
        d = result.scattered.direction
        assert d.x == pytest.approx(s)
        assert d.y == pytest.approx(s)
        assert d.z == pytest.approx(0.0)
        assert result.attenuation is albedo

    def test_tangent_reflection_is_absorbed(self):
        """A reflection exactly along the surface (dot == 0) is not scattered."""
        material = Metal(Colour(1, 1, 1))
        ray_in = Ray(Point3(-1, 0, 0), Vector3(1, 0, 0))
        assert material.scatter(ray_in, make_record(material)) is None

    def test_reflection_into_surface_is_absorbed(self):
        material = Metal(Colour(1, 1, 1))
        # Arriving from below a normal that faces up reflects downwards
        ray_in = Ray(Point3(-1, -1, 0), Vector3(1, 1, 0))
        assert material.scatter(ray_in, make_record(material)) is None

    def test_fuzz_is_clamped(self):
        assert Metal(Colour(1, 1, 1), 2.0).fuzz == 1.0
        assert Metal(Colour(1, 1, 1), -0.5).fuzz == 0.0
        assert Metal(Colour(1, 1, 1), 0.3).fuzz == 0.3

    def test_fuzzy_reflection_stays_within_fuzz_ball(self, rng):
        fuzz = 0.3
        material = Metal(Colour(1, 1, 1), fuzz)
        ray_in = Ray(Point3(0, 1, 0), Vector3(0, -1, 0))
        directions = set()
        for _ in range(100):
            result = material.scatter(ray_in, make_record(material), rng)
            if result is None:
                continue
            d = result.scattered.direction
            assert (d - UP).length() < fuzz
            directions.add(d)
        assert len(directions) > 1


class TestDielectric:
    def test_schlick_values(self):
        assert schlick(1.0, 1.5) == pytest.approx(0.04)
        assert schlick(0.0, 1.5) == pytest.approx(1.0)

    def test_attenuation_is_white(self, rng):
        material = Dielectric(1.5)
        ray_in = Ray(Point3(0, 1, 0), Vector3(0.3, -1, 0))
        for _ in range(20):
            result = material.scatter(ray_in, make_record(material), rng)
            assert result.attenuation == Colour(1, 1, 1)

    def test_normal_incidence_refracts_when_draw_beats_reflectance(self):
        material = Dielectric(1.5)
        ray_in = Ray(Point3(0, 1, 0), Vector3(0, -1, 0))
        result = material.scatter(ray_in, make_record(material), FixedRandom(0.5))
        d = result.scattered.direction
        assert d.y == pytest.approx(-1.0)
        assert d.x == pytest.approx(0.0)

    def test_normal_incidence_reflects_when_draw_below_reflectance(self):
        material = Dielectric(1.5)
        ray_in = Ray(Point3(0, 1, 0), Vector3(0, -1, 0))
        # Schlick reflectance at normal incidence is 0.04
        result = material.scatter(ray_in, make_record(material), FixedRandom(0.01))
        assert result.scattered.direction.y == pytest.approx(1.0)

    def test_total_internal_reflection(self):
        material = Dielectric(1.5)
        # Inside the glass: back face, ratio 1.5, sin(theta) 0.8
        ray_in = Ray(Point3(-0.8, 0.6, 0), Vector3(0.8, -0.6, 0))
        rec = make_record(material, front_face=False)
        result = material.scatter(ray_in, rec, ExplodingRandom())
        expected = reflect(Vector3(0.8, -0.6, 0), UP)
        d = result.scattered.direction
        assert d.x == pytest.approx(expected.x)
        assert d.y == pytest.approx(expected.y)

    def test_refraction_bends_towards_normal(self):
        material = Dielectric(1.5)
        s = 1.0 / math.sqrt(2.0)
        ray_in = Ray(Point3(-s, s, 0), Vector3(s, -s, 0))
        result = material.scatter(ray_in, make_record(material), FixedRandom(0.99))
        d = result.scattered.direction
        assert d.length() == pytest.approx(1.0)
        assert d.x == pytest.approx(s / 1.5)
        assert d.y < 0
