# camera/camera.py
import math
import random
from weekend.core.vector import Point3, Vector3
from weekend.core.ray import Ray
from weekend.core.utils import random_in_unit_disk

class Camera:
    """
    Thin-lens camera aimed from look_from towards look_at.

    Everything is derived once in the constructor; get_ray() only reads it,
    so one camera can be shared by every render thread. vfov is the vertical
    field of view in degrees. Objects at focus_dist are always sharp; the
    aperture sets how quickly everything else blurs.
    """
    def __init__(self, look_from: Point3, look_at: Point3, vup: Vector3,
                 vfov: float, aspect_ratio: float, aperture: float = 0.0, focus_dist: float = 1.0):
        theta = math.radians(vfov)
        h = math.tan(theta / 2)
        viewport_height = 2.0 * h
        viewport_width = aspect_ratio * viewport_height

        # Orthonormal basis: w points back at the viewer
        self.w = (look_from - look_at).unit_vector()
        self.u = vup.cross(self.w).unit_vector()
        self.v = self.w.cross(self.u)

        self.origin = look_from
        # Scale by focus distance
        self.horizontal = self.u * (focus_dist * viewport_width)
        self.vertical = self.v * (focus_dist * viewport_height)
        self.lower_left_corner = (self.origin -
                                  self.horizontal * 0.5 -
                                  self.vertical * 0.5 -
                                  self.w * focus_dist)
        self.lens_radius = aperture / 2.0

    def get_ray(self, s: float, t: float, rng=random) -> Ray:
        """Generates a ray with depth of field effect."""
        if self.lens_radius <= 0:
            direction = (self.lower_left_corner +
                         self.horizontal * s +
                         self.vertical * t -
                         self.origin)
            return Ray(self.origin, direction)

        # Generate random point on lens
        rd = random_in_unit_disk(rng) * self.lens_radius
        offset = self.u * rd.x + self.v * rd.y

        ray_origin = self.origin + offset
        ray_direction = (self.lower_left_corner +
                         self.horizontal * s +
                         self.vertical * t -
                         ray_origin)

        return Ray(ray_origin, ray_direction)
