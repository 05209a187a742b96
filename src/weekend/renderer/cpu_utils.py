# renderer/cpu_utils.py
"""Vector helpers for the compiled tracer. Vectors are length-3 float64 arrays."""
import math

import numpy as np
from numba import njit

NEAR_ZERO = 1e-8


@njit(nogil=True)
def dot(v1, v2):
    return v1[0] * v2[0] + v1[1] * v2[1] + v1[2] * v2[2]


@njit(nogil=True)
def normalize_inplace(v):
    """Scale v to unit length in place; v must not be zero-length."""
    length = math.sqrt(dot(v, v))
    v[0] /= length
    v[1] /= length
    v[2] /= length


@njit(nogil=True)
def near_zero(v):
    return abs(v[0]) < NEAR_ZERO and abs(v[1]) < NEAR_ZERO and abs(v[2]) < NEAR_ZERO


@njit(nogil=True)
def reflect_inplace(v, n, out):
    """out = v - 2 * dot(v, n) * n. out may be v."""
    d = 2.0 * dot(v, n)
    for i in range(3):
        out[i] = v[i] - d * n[i]


@njit(nogil=True)
def refract_inplace(uv, n, etai_over_etat, out):
    """Refract the unit direction uv through unit normal n. out may be uv."""
    cos_theta = min(-dot(uv, n), 1.0)
    for i in range(3):
        out[i] = etai_over_etat * (uv[i] + cos_theta * n[i])
    parallel = -math.sqrt(abs(1.0 - dot(out, out)))
    for i in range(3):
        out[i] += parallel * n[i]


@njit(nogil=True)
def random_in_unit_sphere(out):
    while True:
        x = np.random.uniform(-1.0, 1.0)
        y = np.random.uniform(-1.0, 1.0)
        z = np.random.uniform(-1.0, 1.0)
        if x * x + y * y + z * z < 1.0:
            out[0] = x
            out[1] = y
            out[2] = z
            return


@njit(nogil=True)
def random_unit_vector(out):
    random_in_unit_sphere(out)
    while near_zero(out):
        random_in_unit_sphere(out)
    normalize_inplace(out)


@njit(nogil=True)
def random_in_unit_disk():
    while True:
        x = np.random.uniform(-1.0, 1.0)
        y = np.random.uniform(-1.0, 1.0)
        if x * x + y * y < 1.0:
            return x, y
