# scenes.py
"""
Scene builders and the cameras that frame them.

The cover scene is generated from a seeded random source, so a given seed
always produces exactly the same ordered list of spheres.
"""
import logging
import random
from typing import Callable, Dict, NamedTuple

from weekend.camera.camera import Camera
from weekend.core.utils import random_vector, random_vector_range
from weekend.core.vector import Point3, Vector3
from weekend.geometry.sphere import Sphere
from weekend.geometry.world import HittableList
from weekend.materials.dielectric import Dielectric
from weekend.materials.lambertian import Lambertian
from weekend.materials.metal import Metal
from weekend.materials.presets import ColorPresets, DielectricPresets, MetalPresets

logger = logging.getLogger(__name__)

COVER_SEED = 52

# Small spheres keep clear of this point, where the large feature spheres sit.
FEATURE_CLEARANCE_POINT = Point3(4, 0.2, 0)
FEATURE_CLEARANCE = 0.9


def build_test() -> HittableList:
    """Five fixed spheres: quick to render, handy for checking materials."""
    world = HittableList()

    material_ground = ColorPresets.matte(ColorPresets.OLIVE)
    material_center = ColorPresets.matte(ColorPresets.NAVY)
    material_left = DielectricPresets.glass()
    material_right = MetalPresets.gold()

    world.add(Sphere(Point3(0, -100.5, -1), 100, material_ground))
    world.add(Sphere(Point3(0, 0, -1), 0.5, material_center))
    world.add(Sphere(Point3(-1, 0, -1), 0.5, material_left))
    # Same glass, inverted: makes the left sphere a hollow bubble
    world.add(Sphere(Point3(-1, 0, -1), -0.45, material_left))
    world.add(Sphere(Point3(1, 0, -1), 0.5, material_right))

    logger.debug("Built test scene with %d spheres", len(world))
    return world


def build_cover(seed: int = COVER_SEED) -> HittableList:
    """
    The book cover: a field of small random spheres around three large ones.

    Every cell of a 22x22 grid draws its material choice and jitter whether or
    not the sphere is kept, so the sequence of random draws, and therefore the
    layout, depends only on the seed.
    """
    rng = random.Random(seed)
    world = HittableList()

    world.add(Sphere(Point3(0, -1000, 0), 1000, Lambertian(ColorPresets.GRAY)))

    for a in range(-11, 11):
        for b in range(-11, 11):
            choose_mat = rng.random()
            center = Point3(a + 0.9 * rng.random(), 0.4, b + 0.9 * rng.random())

            if (center - FEATURE_CLEARANCE_POINT).length() <= FEATURE_CLEARANCE:
                continue

            if choose_mat < 0.8:
                # diffuse
                albedo = random_vector(rng) * random_vector(rng)
                material = Lambertian(albedo)
            elif choose_mat < 0.95:
                # metal
                albedo = random_vector_range(0.5, 1.0, rng)
                fuzz = rng.uniform(0.0, 0.5)
                material = Metal(albedo, fuzz)
            else:
                # glass
                material = Dielectric(1.5)
            world.add(Sphere(center, 0.2, material))

    world.add(Sphere(Point3(0, 1, 0), 1.0, DielectricPresets.glass()))
    world.add(Sphere(Point3(-4, 1, 0), 1.0, Lambertian(ColorPresets.BROWN)))
    world.add(Sphere(Point3(4, 1, 0), 1.0, MetalPresets.polished_bronze()))

    logger.info("Built cover scene with %d spheres (seed %d)", len(world), seed)
    return world


def cover_camera(aspect_ratio: float) -> Camera:
    return Camera(
        look_from=Point3(13, 2, 3),
        look_at=Point3(0, 0, 0),
        vup=Vector3(0, 1, 0),
        vfov=20,
        aspect_ratio=aspect_ratio,
        aperture=0.1,
        focus_dist=10.0,
    )


def close_up_camera(aspect_ratio: float) -> Camera:
    return Camera(
        look_from=Point3(0, 0, 0),
        look_at=Point3(0, 0, -1),
        vup=Vector3(0, 1, 0),
        vfov=90,
        aspect_ratio=aspect_ratio,
        aperture=0.0,
        focus_dist=1.0,
    )


class SceneSetup(NamedTuple):
    build: Callable[..., HittableList]
    camera: Callable[[float], Camera]
    seeded: bool


SCENES: Dict[str, SceneSetup] = {
    "cover": SceneSetup(build_cover, cover_camera, seeded=True),
    "test": SceneSetup(build_test, close_up_camera, seeded=False),
}


def load_scene(name: str, aspect_ratio: float, seed: int = COVER_SEED):
    """Returns (world, camera) for a registered scene name."""
    try:
        setup = SCENES[name]
    except KeyError:
        raise ValueError(f"Unknown scene {name!r}; choose from {sorted(SCENES)}") from None
    world = setup.build(seed) if setup.seeded else setup.build()
    return world, setup.camera(aspect_ratio)
