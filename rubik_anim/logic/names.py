# rubik_anim/logic/names.py
from __future__ import annotations

from typing import Tuple

from rubik_anim.core.position import CubePosition

RUBIK_NAME: str = "Rubik"

EntityPath = Tuple[str, str]

# Tabla fija: índice de posición -> nombre
_POSITION_NAMES: Tuple[str, ...] = tuple(
    CubePosition.from_index(i).name for i in range(27)
)


def rubik_name() -> str:
    """Nombre estable del cubo completo."""
    return RUBIK_NAME


def cube_position_name(pos: CubePosition) -> str:
    """Nombre estable de una posición (ej: "UFR", "CORE").

    No depende del orden interno de los bloques, por lo que sirve para
    direccionar un bloque desde herramientas externas.
    """
    return _POSITION_NAMES[int(pos)]


def entity_path(pos: CubePosition) -> EntityPath:
    """Ruta (cubo, bloque) del bloque cuya posición de origen es `pos`."""
    return (rubik_name(), cube_position_name(pos))
