# core/utils.py
import math
import random
from weekend.core.vector import Vector3


def random_vector(rng=random) -> Vector3:
    """
    Returns a vector whose components are uniform in [0, 1).
    """
    return Vector3(rng.random(), rng.random(), rng.random())


def random_vector_range(lo: float, hi: float, rng=random) -> Vector3:
    """
    Returns a vector whose components are uniform in [lo, hi).
    """
    return Vector3(rng.uniform(lo, hi),
                   rng.uniform(lo, hi),
                   rng.uniform(lo, hi))


def random_in_unit_sphere(rng=random) -> Vector3:
    """
    Returns a random point inside a unit sphere.
    """
    while True:
        p = Vector3(rng.uniform(-1, 1),
                    rng.uniform(-1, 1),
                    rng.uniform(-1, 1))
        if p.length_squared() < 1.0:
            return p


def random_unit_vector(rng=random) -> Vector3:
    """
    Returns a random unit vector (uniformly distributed over the sphere).
    """
    while True:
        p = random_in_unit_sphere(rng)
        # The origin itself cannot be normalized.
        if not p.near_zero():
            return p.unit_vector()


def random_in_unit_disk(rng=random) -> Vector3:
    """Generate random point in unit disk for DOF."""
    while True:
        p = Vector3(
            rng.uniform(-1, 1),
            rng.uniform(-1, 1),
            0
        )
        if p.length_squared() < 1:
            return p


def reflect(v: Vector3, n: Vector3) -> Vector3:
    """
    Reflects vector v about the normal n.
    """
    return v - n * 2 * v.dot(n)


def refract(uv: Vector3, n: Vector3, etai_over_etat: float) -> Vector3:
    """
    Refracts the unit direction uv through a surface with unit normal n.

    n must face the side uv arrives from. The result is split into the parts
    perpendicular and parallel to n (Snell's law in vector form).
    """
    cos_theta = min((-uv).dot(n), 1.0)
    r_out_perp = (uv + n * cos_theta) * etai_over_etat
    r_out_parallel = n * -math.sqrt(abs(1.0 - r_out_perp.length_squared()))
    return r_out_perp + r_out_parallel
