# materials/dielectric.py
import math
import random

from numba import njit

from weekend.core.ray import Ray
from weekend.core.vector import Colour
from weekend.core.utils import reflect, refract
from weekend.geometry.hittable import HitRecord
from weekend.materials.material import Material, Scattered

class Dielectric(Material):
    def __init__(self, refraction_index: float):
        self.refraction_index = refraction_index

    def scatter(self, ray_in: Ray, rec: HitRecord, rng=random) -> Scattered:
        attenuation = Colour(1.0, 1.0, 1.0)  # Glass doesn't absorb light

        # Determine if we're entering or exiting the material
        refraction_ratio = 1.0 / self.refraction_index if rec.front_face else self.refraction_index

        unit_direction = ray_in.direction.unit_vector()

        # Calculate cosine using the angle between incoming ray and normal
        cos_theta = min((-unit_direction).dot(rec.normal), 1.0)
        sin_theta = math.sqrt(1.0 - cos_theta * cos_theta)

        # Total internal reflection, or a Fresnel reflection picked at random
        cannot_refract = refraction_ratio * sin_theta > 1.0
        if cannot_refract or schlick(cos_theta, refraction_ratio) > rng.random():
            direction = reflect(unit_direction, rec.normal)
        else:
            direction = refract(unit_direction, rec.normal, refraction_ratio)

        return Scattered(Ray(rec.p, direction), attenuation)

    def __repr__(self) -> str:
        return f"Dielectric({self.refraction_index})"

@njit(nogil=True)
def schlick(cos_theta: float, ref_idx: float) -> float:
    """Schlick's approximation of the Fresnel reflectance."""
    r0 = (1.0 - ref_idx) / (1.0 + ref_idx)
    r0 = r0 * r0
    return r0 + (1.0 - r0) * math.pow((1.0 - cos_theta), 5)
