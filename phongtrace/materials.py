"""
Surface materials for the Blinn-Phong shading model.

A material carries:
- albedo: (diffuse, specular) reflection coefficients
- diffuse_color: RGB base color in [0, 1]
- specular_exponent: tightness of the specular highlight
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict

from .vec3 import Albedo, Color


@dataclass(frozen=True)
class Material:
    """Reflectance parameters attached to a primitive.

    Attributes:
        albedo: Weights of the diffuse and specular terms
        diffuse_color: Base color multiplied into the diffuse term
        specular_exponent: Blinn-Phong exponent (0 = flat highlight)
    """
    albedo: Albedo = field(default_factory=Albedo)
    diffuse_color: Color = field(default_factory=Color)
    specular_exponent: float = 1.0

    def __post_init__(self):
        if not isinstance(self.albedo, Albedo):
            object.__setattr__(self, 'albedo', Albedo(*self.albedo))
        if self.specular_exponent < 0:
            raise ValueError(
                f"specular_exponent must be >= 0, got {self.specular_exponent}"
            )


# Named materials from the reference scene
PALETTE: Dict[str, Material] = {
    'red': Material(Albedo(0.6, 0.3), Color(1, 0, 0), 60),
    'green': Material(Albedo(0.6, 0.3), Color(0, 0.5, 0), 60),
    'blue': Material(Albedo(0.9, 0.1), Color(0, 0, 1), 10),
    'gray': Material(Albedo(0.9, 0.1), Color(0.5, 0.5, 0.5), 10),
}
