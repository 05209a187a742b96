"""
Multi-threaded Monte-Carlo ray tracer for scenes made of spheres.

Subpackages:
    core: vectors, rays and random sampling helpers
    geometry: hittable surfaces, spheres and the scene list
    materials: Lambertian, metal and dielectric scattering
    camera: thin-lens camera with depth of field
    renderer: pixel buffer, tone mapping and the parallel renderer
"""
from weekend.camera.camera import Camera
from weekend.core.ray import Ray
from weekend.core.vector import Colour, Point3, Vector3
from weekend.geometry.sphere import Sphere
from weekend.geometry.world import HittableList
from weekend.materials.dielectric import Dielectric
from weekend.materials.lambertian import Lambertian
from weekend.materials.metal import Metal
from weekend.renderer.canvas import Canvas
from weekend.renderer.raytracer import Renderer, render
from weekend.settings import RenderSettings

__version__ = "0.1.0"

__all__ = [
    "Camera", "Ray", "Colour", "Point3", "Vector3", "Sphere", "HittableList",
    "Dielectric", "Lambertian", "Metal", "Canvas", "Renderer", "render",
    "RenderSettings",
]
