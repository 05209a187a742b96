# renderer/scene_data.py
"""
Flattens the object scene into the plain numpy arrays the compiled tracer
reads.

Spheres keep their sweep order. Materials are shared by reference, so each
distinct material object becomes one row of the material table and every
sphere using it points at that row. Glass stores a white albedo, so the
tracer can always multiply by the albedo of whatever it scattered off.
"""
import logging
from typing import List, NamedTuple, Optional

import numpy as np

from weekend.camera.camera import Camera
from weekend.geometry.hittable import Hittable
from weekend.geometry.sphere import Sphere
from weekend.geometry.world import HittableList
from weekend.materials.dielectric import Dielectric
from weekend.materials.lambertian import Lambertian
from weekend.materials.metal import Metal
from weekend.materials.presets import ColorPresets

logger = logging.getLogger(__name__)

# Material type codes
LAMBERTIAN = 0
METAL = 1
DIELECTRIC = 2


class SceneArrays(NamedTuple):
    centers: np.ndarray             # (n, 3) float64
    radii: np.ndarray               # (n,) float64, negative for hollow shells
    material_ids: np.ndarray        # (n,) int64 row in the material table
    material_types: np.ndarray      # (m,) int64 type code
    albedos: np.ndarray             # (m, 3) float64
    fuzz: np.ndarray                # (m,) float64
    refraction_indices: np.ndarray  # (m,) float64


def _collect_spheres(world: Hittable, out: List[Sphere]) -> bool:
    # Exact types only: a subclass may override hit()
    if type(world) is Sphere:
        out.append(world)
        return True
    if type(world) is HittableList:
        return all(_collect_spheres(obj, out) for obj in world)
    return False


def _material_row(material):
    kind = type(material)
    if kind is Lambertian:
        return LAMBERTIAN, material.albedo, 0.0, 1.0
    if kind is Metal:
        return METAL, material.albedo, material.fuzz, 1.0
    if kind is Dielectric:
        return DIELECTRIC, ColorPresets.WHITE, 0.0, material.refraction_index
    return None


def flatten_world(world: Hittable) -> Optional[SceneArrays]:
    """
    Arrays for every sphere in world, or None if the world holds a surface or
    material the compiled tracer does not know.
    """
    spheres: List[Sphere] = []
    if not _collect_spheres(world, spheres):
        return None

    material_index = {}
    rows = []
    material_ids = np.zeros(len(spheres), dtype=np.int64)
    for i, sphere in enumerate(spheres):
        key = id(sphere.material)
        if key not in material_index:
            row = _material_row(sphere.material)
            if row is None:
                return None
            material_index[key] = len(rows)
            rows.append(row)
        material_ids[i] = material_index[key]

    centers = np.array([tuple(s.center) for s in spheres], dtype=np.float64).reshape(-1, 3)
    radii = np.array([s.radius for s in spheres], dtype=np.float64)

    scene = SceneArrays(
        centers=centers,
        radii=radii,
        material_ids=material_ids,
        material_types=np.array([r[0] for r in rows], dtype=np.int64),
        albedos=np.array([tuple(r[1]) for r in rows], dtype=np.float64).reshape(-1, 3),
        fuzz=np.array([r[2] for r in rows], dtype=np.float64),
        refraction_indices=np.array([r[3] for r in rows], dtype=np.float64),
    )
    logger.debug("Flattened %d spheres sharing %d materials", len(spheres), len(rows))
    return scene


def camera_frame(camera: Camera) -> np.ndarray:
    """
    The camera as a (6, 3) array: origin, lower-left corner, horizontal,
    vertical, then the lens basis vectors u and v.
    """
    return np.array([
        tuple(camera.origin),
        tuple(camera.lower_left_corner),
        tuple(camera.horizontal),
        tuple(camera.vertical),
        tuple(camera.u),
        tuple(camera.v),
    ], dtype=np.float64)
