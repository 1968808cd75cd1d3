"""
Cores RGB normalizadas e paletas usadas pelo editor
"""
from typing import Dict, List, NamedTuple, Tuple


class ColorRGB(NamedTuple):
    """Cor com componentes normalizados em [0.0, 1.0]"""
    red: float
    green: float
    blue: float

    @staticmethod
    def from_rgb255(r: int, g: int, b: int) -> "ColorRGB":
        return ColorRGB(r / 255.0, g / 255.0, b / 255.0)

    def to_rgb255(self) -> Tuple[int, int, int]:
        return (int(round(self.red * 255)),
                int(round(self.green * 255)),
                int(round(self.blue * 255)))


# Teclas 1-6
PRESET_FILL_COLORS: Dict[int, Tuple[str, ColorRGB]] = {
    1: ("Vermelho", ColorRGB(1.0, 0.0, 0.0)),
    2: ("Verde", ColorRGB(0.0, 1.0, 0.0)),
    3: ("Azul", ColorRGB(0.0, 0.0, 1.0)),
    4: ("Amarelo", ColorRGB(1.0, 1.0, 0.0)),
    5: ("Magenta", ColorRGB(1.0, 0.0, 1.0)),
    6: ("Ciano", ColorRGB(0.0, 1.0, 1.0)),
}

# Grade 4x4 do painel lateral
COLOR_PALETTE: List[ColorRGB] = [
    ColorRGB.from_rgb255(0, 0, 0),
    ColorRGB.from_rgb255(128, 128, 128),
    ColorRGB.from_rgb255(192, 192, 192),
    ColorRGB.from_rgb255(255, 255, 255),
    ColorRGB.from_rgb255(128, 0, 0),
    ColorRGB.from_rgb255(255, 0, 0),
    ColorRGB.from_rgb255(255, 128, 0),
    ColorRGB.from_rgb255(255, 255, 0),
    ColorRGB.from_rgb255(0, 128, 0),
    ColorRGB.from_rgb255(0, 255, 0),
    ColorRGB.from_rgb255(0, 128, 128),
    ColorRGB.from_rgb255(0, 255, 255),
    ColorRGB.from_rgb255(0, 0, 128),
    ColorRGB.from_rgb255(10, 132, 255),
    ColorRGB.from_rgb255(128, 0, 128),
    ColorRGB.from_rgb255(255, 0, 255),
]
