# renderer/cpu_geometry.py
import math

from numba import njit

from weekend.renderer.cpu_utils import dot


@njit(nogil=True)
def ray_sphere_intersect(ray_origin, ray_dir, sphere_center, sphere_radius, t_min, t_max):
    """Nearest root in [t_min, t_max], or -1.0 on a miss. t_min must be positive."""
    ocx = ray_origin[0] - sphere_center[0]
    ocy = ray_origin[1] - sphere_center[1]
    ocz = ray_origin[2] - sphere_center[2]

    a = dot(ray_dir, ray_dir)
    half_b = ocx * ray_dir[0] + ocy * ray_dir[1] + ocz * ray_dir[2]
    c = ocx * ocx + ocy * ocy + ocz * ocz - sphere_radius * sphere_radius
    discriminant = half_b * half_b - a * c

    if discriminant < 0:
        return -1.0

    sqrtd = math.sqrt(discriminant)
    root = (-half_b - sqrtd) / a
    if root < t_min or root > t_max:
        root = (-half_b + sqrtd) / a
        if root < t_min or root > t_max:
            return -1.0

    return root


@njit(nogil=True)
def hit_world(ray_origin, ray_dir, centers, radii, t_min, t_max):
    """
    Linear sweep over every sphere, shrinking t_max to the closest hit so far.

    Returns (sphere index, t); the index is -1 when nothing was hit.
    """
    hit_index = -1
    closest_so_far = t_max
    for i in range(radii.shape[0]):
        t = ray_sphere_intersect(ray_origin, ray_dir, centers[i], radii[i], t_min, closest_so_far)
        if t >= 0.0:
            hit_index = i
            closest_so_far = t
    return hit_index, closest_so_far
