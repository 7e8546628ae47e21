# rubik_anim/core/transform.py
from __future__ import annotations

import enum
import math
from typing import Dict, Tuple

from rubik_anim.core.permutation import CubePermutation
from rubik_anim.core.position import CubePosition, Layer

Vec3f = Tuple[float, float, float]


class LayerTransform(enum.Enum):
    """Giro de un cuarto de vuelta de una capa externa.

    Notación:
        - "R" gira la capa derecha en sentido horario, mirando la cara desde afuera.
        - "RI" es el inverso (antihorario), en la notación usual "R'".
    """

    F = "F"
    FI = "FI"
    B = "B"
    BI = "BI"
    L = "L"
    LI = "LI"
    R = "R"
    RI = "RI"
    U = "U"
    UI = "UI"
    D = "D"
    DI = "DI"

    @classmethod
    def for_layer(cls, layer: Layer, inverse: bool = False) -> "LayerTransform":
        """Transformación de una capa, horaria o inversa."""
        return cls(layer.value + ("I" if inverse else ""))

    @property
    def layer(self) -> Layer:
        return Layer(self.value[0])

    @property
    def is_inverse(self) -> bool:
        return self.value.endswith("I")

    @property
    def inverse(self) -> "LayerTransform":
        """Transformación que deshace esta."""
        return LayerTransform.for_layer(self.layer, inverse=not self.is_inverse)

    @property
    def rotation(self) -> CubePermutation:
        """Delta de orientación que reciben todos los bloques de la capa."""
        rot = _CLOCKWISE_ROTATION[self.layer]
        return rot.inverse() if self.is_inverse else rot

    @property
    def axis(self) -> Vec3f:
        """Eje geométrico del giro (eje positivo x, y o z)."""
        a = [0.0, 0.0, 0.0]
        a[self.layer.axis_index] = 1.0
        return (a[0], a[1], a[2])

    @property
    def angle(self) -> float:
        """Ángulo con signo (radianes) del giro sobre `axis`."""
        m = self.rotation.matrix
        i = self.layer.axis_index
        j = (i + 1) % 3
        k = (i + 2) % 3
        # +90° lleva el eje j al eje k
        return math.pi / 2 if m[k][j] == 1 else -math.pi / 2

    def apply_on_position(self, position: CubePosition) -> CubePosition:
        """Posición que ocupa, tras el giro, el bloque que estaba en `position`.

        Es una biyección total sobre las 27 posiciones: las que no pertenecen a
        la capa quedan fijas.
        """
        if not self.layer.contains(position):
            return position
        return CubePosition.from_centered(self.rotation.apply(position.centered))

    def execute(self, rubik: "Rubik") -> None:
        rubik.execute(self)


_CLOCKWISE_ROTATION: Dict[Layer, CubePermutation] = {
    Layer.R: CubePermutation.X_3,
    Layer.L: CubePermutation.X_1,
    Layer.U: CubePermutation.Y_3,
    Layer.D: CubePermutation.Y_1,
    Layer.F: CubePermutation.Z_3,
    Layer.B: CubePermutation.Z_1,
}


class Rubik:
    """Estado agregado del cubo: qué bloque ocupa cada posición y con qué orientación.

    Cada bloque se identifica por su posición de origen (`home`), la que ocupa
    en el cubo resuelto.
    """

    def __init__(self) -> None:
        """Inicializa el cubo en estado resuelto."""
        self._slots: Dict[CubePosition, Tuple[CubePosition, CubePermutation]] = {
            p: (p, CubePermutation.UNIT) for p in CubePosition
        }

    def execute(self, transform: LayerTransform) -> None:
        """Aplica una transformación de capa a todo el cubo.

        Los bloques de la capa cambian de posición según `apply_on_position` y
        componen su orientación con `transform.rotation`; el resto no cambia.
        """
        delta = transform.rotation
        new: Dict[CubePosition, Tuple[CubePosition, CubePermutation]] = {}
        for pos, (home, perm) in self._slots.items():
            if transform.layer.contains(pos):
                new[transform.apply_on_position(pos)] = (home, perm.compose(delta))
            else:
                new[pos] = (home, perm)
        self._slots = new

    def block_at(self, position: CubePosition) -> Tuple[CubePosition, CubePermutation]:
        """Retorna (home, orientación) del bloque que está en `position`."""
        return self._slots[position]

    def placement(self) -> Dict[CubePosition, Tuple[CubePosition, CubePermutation]]:
        """Mapa home -> (posición actual, orientación)."""
        return {home: (pos, perm) for pos, (home, perm) in self._slots.items()}

    def is_solved(self) -> bool:
        """Indica si el cubo está resuelto.

        Todos los bloques deben estar en su lugar. Esquinas y aristas además con
        orientación `UNIT`; los centros de cara pueden estar girados sobre su
        propio eje, lo que no cambia sus colores visibles.
        """
        for pos, (home, perm) in self._slots.items():
            if home != pos:
                return False
            if pos not in _CENTERS and perm != CubePermutation.UNIT:
                return False
        return True


_CENTERS = frozenset(
    CubePosition.from_centered(layer.normal) for layer in Layer
) | {CubePosition.CORE}
