# rubik_anim/core/position.py
from __future__ import annotations

import enum
from typing import Dict, List, Optional, Tuple

Vec3i = Tuple[int, int, int]


class CubePosition(enum.IntEnum):
    """Una de las 27 celdas del cubo 3x3x3.

    Codificación: ``x + 3 * (2 - z) + 9 * (2 - y)`` con x, y, z en {0, 1, 2}.
    - x crece hacia la derecha (R)
    - y crece hacia arriba (U)
    - z crece hacia el frente (F)

    El nombre simbólico de cada miembro son las capas externas que toca
    (ej: ``UFL`` es la esquina arriba-frente-izquierda). El centro es ``CORE``.
    """

    # y = 2 (U)
    UFL = 0
    UF = 1
    UFR = 2
    UL = 3
    U = 4
    UR = 5
    UBL = 6
    UB = 7
    UBR = 8
    # y = 1
    FL = 9
    F = 10
    FR = 11
    L = 12
    CORE = 13
    R = 14
    BL = 15
    B = 16
    BR = 17
    # y = 0 (D)
    DFL = 18
    DF = 19
    DFR = 20
    DL = 21
    D = 22
    DR = 23
    DBL = 24
    DB = 25
    DBR = 26

    @classmethod
    def from_coords(cls, x: int, y: int, z: int) -> "CubePosition":
        """Codifica una coordenada de grilla como posición.

        Args:
            x: Columna 0..2 (izquierda a derecha).
            y: Altura 0..2 (abajo hacia arriba).
            z: Profundidad 0..2 (atrás hacia el frente).

        Returns:
            La posición correspondiente.

        Raises:
            ValueError: Si alguna coordenada está fuera de 0..2.
        """
        if not all(0 <= v <= 2 for v in (x, y, z)):
            raise ValueError(f"Coordenada fuera del cubo: {(x, y, z)}")
        return cls(x + 3 * (2 - z) + 9 * (2 - y))

    @classmethod
    def try_from_index(cls, index: int) -> Optional["CubePosition"]:
        """Decodifica un entero; retorna None si no está en 0..26."""
        if 0 <= index < 27:
            return cls(index)
        return None

    @classmethod
    def from_index(cls, index: int) -> "CubePosition":
        """Como `try_from_index`, pero lanza ValueError si no es válido."""
        pos = cls.try_from_index(index)
        if pos is None:
            raise ValueError(f"Posición inválida: {index}")
        return pos

    @property
    def coords(self) -> Vec3i:
        """Coordenada de grilla (x, y, z), inversa de `from_coords`."""
        v = int(self)
        x = v % 3
        z = 2 - (v // 3) % 3
        y = 2 - v // 9
        return (x, y, z)

    @property
    def centered(self) -> Vec3i:
        """Coordenada relativa al centro del cubo, en {-1, 0, 1}³."""
        x, y, z = self.coords
        return (x - 1, y - 1, z - 1)

    @classmethod
    def from_centered(cls, v: Vec3i) -> "CubePosition":
        x, y, z = v
        return cls.from_coords(x + 1, y + 1, z + 1)


class Layer(enum.Enum):
    """Capa externa del cubo, identificada por su cara."""

    F = "F"
    B = "B"
    L = "L"
    R = "R"
    U = "U"
    D = "D"

    @property
    def axis_index(self) -> int:
        """Índice del eje normal a la capa (0 = x, 1 = y, 2 = z)."""
        return _LAYER_AXIS[self][0]

    @property
    def side(self) -> int:
        """Coordenada de grilla (0 o 2) de la rebanada sobre ese eje."""
        return _LAYER_AXIS[self][1]

    @property
    def normal(self) -> Vec3i:
        """Normal exterior de la cara, en enteros."""
        n = [0, 0, 0]
        n[self.axis_index] = 1 if self.side == 2 else -1
        return (n[0], n[1], n[2])

    def contains(self, position: CubePosition) -> bool:
        """Indica si una posición pertenece a la rebanada externa de esta capa."""
        return position.coords[self.axis_index] == self.side

    def positions(self) -> List[CubePosition]:
        """Las 9 posiciones de la capa, en orden de codificación."""
        return [p for p in CubePosition if self.contains(p)]


_LAYER_AXIS: Dict[Layer, Tuple[int, int]] = {
    Layer.F: (2, 2),
    Layer.B: (2, 0),
    Layer.L: (0, 0),
    Layer.R: (0, 2),
    Layer.U: (1, 2),
    Layer.D: (1, 0),
}
