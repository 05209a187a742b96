"""Shared fixtures for the raytracer tests."""

import random

import pytest

from weekend.core.vector import Colour, Point3
from weekend.geometry.sphere import Sphere
from weekend.geometry.world import HittableList
from weekend.materials.lambertian import Lambertian


class FixedRandom:
    """Random source that always draws the same value.

    Lets tests pin the outcome of a probabilistic branch.
    """

    def __init__(self, value):
        self.value = value

    def random(self):
        return self.value

    def uniform(self, a, b):
        return a + (b - a) * self.value


class ExplodingRandom:
    """Random source that fails the test if anything draws from it."""

    def random(self):
        raise AssertionError("unexpected random draw")

    def uniform(self, a, b):
        raise AssertionError("unexpected random draw")


@pytest.fixture
def rng():
    """Seeded random source so sampling tests are repeatable."""
    return random.Random(1234)


@pytest.fixture
def gray():
    return Lambertian(Colour(0.5, 0.5, 0.5))


@pytest.fixture
def single_sphere_world(gray):
    """One gray sphere of radius 0.5 centred at (0, 0, -1)."""
    return HittableList([Sphere(Point3(0, 0, -1), 0.5, gray)])
