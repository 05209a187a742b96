# materials/presets.py
from weekend.core.vector import Colour
from weekend.materials.metal import Metal
from weekend.materials.lambertian import Lambertian
from weekend.materials.dielectric import Dielectric

class MetalPresets:
    """Predefined metal materials."""

    @staticmethod
    def polished_bronze() -> Metal:
        return Metal(Colour(0.7, 0.6, 0.5))

    @staticmethod
    def gold() -> Metal:
        return Metal(Colour(0.8, 0.6, 0.2))

class DielectricPresets:
    """Predefined dielectric materials."""

    @staticmethod
    def glass() -> Dielectric:
        return Dielectric(1.5)

class ColorPresets:
    """Common colour presets for materials."""

    WHITE = Colour(1.0, 1.0, 1.0)
    BLACK = Colour(0.0, 0.0, 0.0)
    SKY_BLUE = Colour(0.5, 0.7, 1.0)

    GRAY = Colour(0.5, 0.5, 0.5)
    OLIVE = Colour(0.8, 0.8, 0.0)
    NAVY = Colour(0.1, 0.2, 0.5)
    BROWN = Colour(0.4, 0.2, 0.1)

    @staticmethod
    def matte(color: Colour) -> Lambertian:
        """Create a matte material with the given color."""
        return Lambertian(color)
