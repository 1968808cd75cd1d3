"""
Configuração da aplicação

Valores padrão para a janela, o editor 2D e a extrusão 3D. Pode ser carregada
de um arquivo YAML; chaves ausentes mantêm o padrão.

Exemplo YAML:
    window_size: [1400, 800]
    fill_color: [0.04, 0.52, 1.0]
    line_thickness: 2
    extrusion_depth: 100.0
    log_level: DEBUG
"""
import logging
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Tuple, Union

import yaml

from scanfill.palette import ColorRGB

logger = logging.getLogger(__name__)

_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def _check_color(name: str, value) -> ColorRGB:
    if len(value) != 3:
        raise ValueError(f"{name} must have 3 components, got {value!r}")
    color = ColorRGB(*(float(c) for c in value))
    if not all(0.0 <= c <= 1.0 for c in color):
        raise ValueError(f"{name} components must be in [0.0, 1.0], got {value!r}")
    return color


@dataclass(frozen=True)
class AppConfig:
    window_size: Tuple[int, int] = (1400, 800)  # (largura, altura)
    fill_color: ColorRGB = ColorRGB.from_rgb255(10, 132, 255)
    line_color: ColorRGB = ColorRGB(0.0, 0.0, 0.0)
    line_thickness: int = 2
    min_line_thickness: int = 1
    max_line_thickness: int = 20
    extrusion_depth: float = 100.0
    extrusion_scale: float = 1.0
    cap_triangulation_height: int = 2000  # linhas varridas para as tampas
    log_level: str = "INFO"

    def __post_init__(self):
        if len(self.window_size) != 2 or min(self.window_size) <= 0:
            raise ValueError(f"window_size must be two positive ints, got {self.window_size!r}")
        # frozen: normalizar via object.__setattr__
        object.__setattr__(self, "window_size", tuple(int(v) for v in self.window_size))
        object.__setattr__(self, "fill_color", _check_color("fill_color", self.fill_color))
        object.__setattr__(self, "line_color", _check_color("line_color", self.line_color))

        if not 1 <= self.min_line_thickness <= self.max_line_thickness:
            raise ValueError(
                f"Invalid line thickness range: [{self.min_line_thickness}, "
                f"{self.max_line_thickness}]"
            )
        if not self.min_line_thickness <= self.line_thickness <= self.max_line_thickness:
            raise ValueError(
                f"line_thickness must be in [{self.min_line_thickness}, "
                f"{self.max_line_thickness}], got {self.line_thickness}"
            )
        if self.extrusion_depth <= 0:
            raise ValueError(f"extrusion_depth must be > 0, got {self.extrusion_depth}")
        if self.extrusion_scale <= 0:
            raise ValueError(f"extrusion_scale must be > 0, got {self.extrusion_scale}")
        if self.cap_triangulation_height <= 0:
            raise ValueError(
                f"cap_triangulation_height must be > 0, got {self.cap_triangulation_height}"
            )

        level = str(self.log_level).upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"Invalid log_level: {self.log_level}. Must be one of {_LOG_LEVELS}")
        object.__setattr__(self, "log_level", level)

    @classmethod
    def from_yaml(cls, yaml_path: Union[str, Path]) -> "AppConfig":
        """Carrega a configuração de um arquivo YAML"""
        with open(yaml_path) as f:
            try:
                data = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ValueError(f"Invalid YAML in {yaml_path}: {e}") from e

        if not isinstance(data, dict):
            raise ValueError(f"Config root must be a mapping, got {type(data).__name__}")

        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"Unknown config keys: {sorted(unknown)}")

        for key in ("window_size", "fill_color", "line_color"):
            if key in data:
                if not isinstance(data[key], (list, tuple)):
                    raise ValueError(f"{key} must be a list, got {data[key]!r}")
                data[key] = tuple(data[key])

        logger.info("Configuração carregada de %s", yaml_path)
        return cls(**data)
