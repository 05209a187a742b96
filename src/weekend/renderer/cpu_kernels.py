# renderer/cpu_kernels.py
"""
The compiled tracer: the same light transport as ray_color(), run over the
flattened scene arrays from scene_data.

Every kernel is compiled with nogil=True, so render workers tracing their own
rows run truly in parallel. Antialiasing, lens and scatter samples come from
numba's generator, which keeps an independent stream per thread.
"""
import math

import numpy as np
from numba import njit

from weekend.materials.dielectric import schlick
from weekend.materials.presets import ColorPresets
from weekend.renderer.cpu_geometry import hit_world
from weekend.renderer.cpu_utils import (
    dot,
    near_zero,
    normalize_inplace,
    random_in_unit_disk,
    random_in_unit_sphere,
    random_unit_vector,
    reflect_inplace,
    refract_inplace,
)
from weekend.renderer.scene_data import DIELECTRIC, LAMBERTIAN, METAL
from weekend.renderer.tone_mapping import gamma_encode_row

# Lower bound on hit distance; keeps bounced rays from re-hitting their origin
T_MIN = 0.0001

SKY_BLUE = tuple(ColorPresets.SKY_BLUE)


@njit(nogil=True)
def camera_ray(s, t, frame, lens_radius, out_origin, out_dir):
    """Primary ray through viewport point (s, t); frame is camera_frame()."""
    dx = 0.0
    dy = 0.0
    if lens_radius > 0.0:
        dx, dy = random_in_unit_disk()
        dx *= lens_radius
        dy *= lens_radius
    for i in range(3):
        offset = frame[4, i] * dx + frame[5, i] * dy
        out_origin[i] = frame[0, i] + offset
        out_dir[i] = (frame[1, i] + s * frame[2, i] + t * frame[3, i]
                      - frame[0, i] - offset)


@njit(nogil=True)
def scatter_ray(material_type, fuzz, refraction_index, front_face, direction, normal, scratch):
    """
    Overwrite direction (the incoming direction) with the scattered one.

    Returns False when the ray is absorbed.
    """
    if material_type == LAMBERTIAN:
        random_unit_vector(scratch)
        for i in range(3):
            direction[i] = normal[i] + scratch[i]
        if near_zero(direction):
            direction[:] = normal
        return True

    if material_type == METAL:
        normalize_inplace(direction)
        reflect_inplace(direction, normal, direction)
        if fuzz > 0.0:
            random_in_unit_sphere(scratch)
            for i in range(3):
                direction[i] += fuzz * scratch[i]
        return dot(direction, normal) > 0.0

    if material_type == DIELECTRIC:
        ratio = 1.0 / refraction_index if front_face else refraction_index
        normalize_inplace(direction)
        cos_theta = min(-dot(direction, normal), 1.0)
        sin_theta = math.sqrt(1.0 - cos_theta * cos_theta)
        if ratio * sin_theta > 1.0 or schlick(cos_theta, ratio) > np.random.random():
            reflect_inplace(direction, normal, direction)
        else:
            refract_inplace(direction, normal, ratio, direction)
        return True

    return False


@njit(nogil=True)
def trace_ray(origin, direction, max_depth,
              centers, radii, material_ids, material_types, albedos, fuzz, refraction_indices,
              hit_point, normal, scratch, out_color):
    """
    Colour arriving along the ray after at most max_depth bounces, written to
    out_color. origin and direction are overwritten as the path bounces.
    """
    for i in range(3):
        out_color[i] = 1.0

    for _ in range(max_depth):
        hit_index, t = hit_world(origin, direction, centers, radii, T_MIN, np.inf)
        if hit_index < 0:
            sky = 0.5 * (direction[1] / math.sqrt(dot(direction, direction)) + 1.0)
            for i in range(3):
                out_color[i] *= (1.0 - sky) + sky * SKY_BLUE[i]
            return

        radius = radii[hit_index]
        for i in range(3):
            hit_point[i] = origin[i] + t * direction[i]
            normal[i] = (hit_point[i] - centers[hit_index, i]) / radius
        front_face = dot(direction, normal) < 0.0
        if not front_face:
            for i in range(3):
                normal[i] = -normal[i]

        m = material_ids[hit_index]
        if not scatter_ray(material_types[m], fuzz[m], refraction_indices[m],
                           front_face, direction, normal, scratch):
            break
        for i in range(3):
            origin[i] = hit_point[i]
            out_color[i] *= albedos[m, i]

    # Absorbed, or out of bounces
    for i in range(3):
        out_color[i] = 0.0


@njit(nogil=True)
def trace_rows(rows, pixels, samples_per_pixel, max_depth, frame, lens_radius,
               centers, radii, material_ids, material_types, albedos, fuzz, refraction_indices):
    """
    Sample every pixel of the given canvas rows and write them into pixels,
    the (height, width, 3) uint8 canvas array. rows count from the top.
    """
    height = pixels.shape[0]
    width = pixels.shape[1]
    u_scale = 1.0 / max(width - 1, 1)
    v_scale = 1.0 / max(height - 1, 1)

    linear_row = np.zeros((width, 3), dtype=np.float64)
    origin = np.empty(3, dtype=np.float64)
    direction = np.empty(3, dtype=np.float64)
    hit_point = np.empty(3, dtype=np.float64)
    normal = np.empty(3, dtype=np.float64)
    scratch = np.empty(3, dtype=np.float64)
    color = np.empty(3, dtype=np.float64)

    for row in rows:
        j = height - 1 - row
        for x in range(width):
            r = 0.0
            g = 0.0
            b = 0.0
            for _ in range(samples_per_pixel):
                s = (x + np.random.random()) * u_scale
                t = (j + np.random.random()) * v_scale
                camera_ray(s, t, frame, lens_radius, origin, direction)
                trace_ray(origin, direction, max_depth,
                          centers, radii, material_ids, material_types, albedos, fuzz,
                          refraction_indices, hit_point, normal, scratch, color)
                r += color[0]
                g += color[1]
                b += color[2]
            linear_row[x, 0] = r
            linear_row[x, 1] = g
            linear_row[x, 2] = b
        gamma_encode_row(linear_row, samples_per_pixel, pixels[row])
