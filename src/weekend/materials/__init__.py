# materials/__init__.py
from weekend.materials.material import Material, Scattered
from weekend.materials.lambertian import Lambertian
from weekend.materials.metal import Metal
from weekend.materials.dielectric import Dielectric, schlick

__all__ = ["Material", "Scattered", "Lambertian", "Metal", "Dielectric", "schlick"]
