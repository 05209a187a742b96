# materials/metal.py
import random
from typing import Optional
from weekend.core.ray import Ray
from weekend.core.vector import Colour
from weekend.core.utils import reflect, random_in_unit_sphere
from weekend.geometry.hittable import HitRecord
from weekend.materials.material import Material, Scattered

class Metal(Material):
    """
    Metal material with reflective properties.

    fuzz blurs the reflection and is clamped into [0, 1].
    """
    def __init__(self, albedo: Colour, fuzz: float = 0.0):
        self.albedo = albedo
        self.fuzz = max(0.0, min(fuzz, 1.0))

    def scatter(self, ray_in: Ray, rec: HitRecord, rng=random) -> Optional[Scattered]:
        direction = reflect(ray_in.direction.unit_vector(), rec.normal)
        if self.fuzz > 0:
            direction = direction + random_in_unit_sphere(rng) * self.fuzz

        if direction.dot(rec.normal) > 0:
            return Scattered(Ray(rec.p, direction), self.albedo)

        return None  # Absorb the ray if it does not scatter forward

    def __repr__(self) -> str:
        return f"Metal({self.albedo!r}, fuzz={self.fuzz})"
