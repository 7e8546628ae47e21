# rubik_anim/core/permutation.py
from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Dict, Tuple

from rubik_anim.core.errors import InvariantViolation
from rubik_anim.core.position import Vec3i

Matrix3i = Tuple[Vec3i, Vec3i, Vec3i]


def _matmul(a: Matrix3i, b: Matrix3i) -> Matrix3i:
    rows = []
    for i in range(3):
        rows.append(tuple(sum(a[i][k] * b[k][j] for k in range(3)) for j in range(3)))
    return (rows[0], rows[1], rows[2])  # type: ignore[return-value]


@dataclass(frozen=True)
class CubePermutation:
    """Orientación acumulada de un bloque: una de las 24 rotaciones propias del cubo.

    Representación:
        - `matrix` es una matriz 3x3 de permutación con signo (det = +1).
        - Rota vectores columna: ``v' = matrix @ v`` (regla de la mano derecha).

    Composición:
        - ``a.compose(b)`` significa "primero a, luego b" (matriz ``b @ a``).
        - Es asociativa pero no conmutativa; `UNIT` es la identidad.
    """

    matrix: Matrix3i

    UNIT: ClassVar["CubePermutation"]
    X_2: ClassVar["CubePermutation"]
    Y_2: ClassVar["CubePermutation"]
    Z_2: ClassVar["CubePermutation"]
    C1: ClassVar["CubePermutation"]
    C2: ClassVar["CubePermutation"]
    I: ClassVar["CubePermutation"]
    X_1: ClassVar["CubePermutation"]
    X_3: ClassVar["CubePermutation"]
    Y_1: ClassVar["CubePermutation"]
    Y_3: ClassVar["CubePermutation"]
    Z_1: ClassVar["CubePermutation"]
    Z_3: ClassVar["CubePermutation"]
    ALL: ClassVar[Tuple["CubePermutation", ...]]

    def compose(self, other: "CubePermutation") -> "CubePermutation":
        """Aplica `self` y luego `other`."""
        return CubePermutation(_matmul(other.matrix, self.matrix))

    def inverse(self) -> "CubePermutation":
        """Rotación inversa (la transpuesta, por ser ortogonal)."""
        m = self.matrix
        return CubePermutation(
            (
                (m[0][0], m[1][0], m[2][0]),
                (m[0][1], m[1][1], m[2][1]),
                (m[0][2], m[1][2], m[2][2]),
            )
        )

    def apply(self, v: Vec3i) -> Vec3i:
        """Rota un vector entero."""
        m = self.matrix
        return (
            m[0][0] * v[0] + m[0][1] * v[1] + m[0][2] * v[2],
            m[1][0] * v[0] + m[1][1] * v[1] + m[1][2] * v[2],
            m[2][0] * v[0] + m[2][1] * v[1] + m[2][2] * v[2],
        )

    def factor_3(self) -> Tuple["CubePermutation", "CubePermutation", "CubePermutation"]:
        """Factoriza la rotación como ``v ∘ c ∘ i``.

        - v en {UNIT, X_2, Y_2, Z_2} (orden 2, subgrupo de Klein)
        - c en {UNIT, C1, C2} (orden 3, sobre la diagonal (1,1,1))
        - i en {UNIT, I} (intercambio de dos diagonales)

        La factorización es única y existe para los 24 elementos.

        Returns:
            Tupla (v, c, i). Se cumple ``self == i.compose(c).compose(v)``.

        Raises:
            InvariantViolation: Si la matriz no es una rotación del cubo.
        """
        try:
            return _FACTOR_TABLE[self]
        except KeyError:
            raise InvariantViolation(f"No es una rotación del cubo: {self.matrix}") from None

    def __repr__(self) -> str:
        name = _NAMES.get(self)
        if name is not None:
            return f"CubePermutation.{name}"
        return f"CubePermutation({self.matrix})"


CubePermutation.UNIT = CubePermutation(((1, 0, 0), (0, 1, 0), (0, 0, 1)))
CubePermutation.X_2 = CubePermutation(((1, 0, 0), (0, -1, 0), (0, 0, -1)))
CubePermutation.Y_2 = CubePermutation(((-1, 0, 0), (0, 1, 0), (0, 0, -1)))
CubePermutation.Z_2 = CubePermutation(((-1, 0, 0), (0, -1, 0), (0, 0, 1)))
# +120° sobre (1,1,1): x -> y -> z -> x
CubePermutation.C1 = CubePermutation(((0, 0, 1), (1, 0, 0), (0, 1, 0)))
CubePermutation.C2 = CubePermutation.C1.inverse()
# 180° sobre (1,1,0): x <-> y, z -> -z
CubePermutation.I = CubePermutation(((0, 1, 0), (1, 0, 0), (0, 0, -1)))
# Cuartos de vuelta (+90° regla de la mano derecha, y su inverso)
CubePermutation.X_1 = CubePermutation(((1, 0, 0), (0, 0, -1), (0, 1, 0)))
CubePermutation.X_3 = CubePermutation.X_1.inverse()
CubePermutation.Y_1 = CubePermutation(((0, 0, 1), (0, 1, 0), (-1, 0, 0)))
CubePermutation.Y_3 = CubePermutation.Y_1.inverse()
CubePermutation.Z_1 = CubePermutation(((0, -1, 0), (1, 0, 0), (0, 0, 1)))
CubePermutation.Z_3 = CubePermutation.Z_1.inverse()

V_FACTORS: Tuple[CubePermutation, ...] = (
    CubePermutation.UNIT,
    CubePermutation.X_2,
    CubePermutation.Y_2,
    CubePermutation.Z_2,
)
C_FACTORS: Tuple[CubePermutation, ...] = (
    CubePermutation.UNIT,
    CubePermutation.C1,
    CubePermutation.C2,
)
I_FACTORS: Tuple[CubePermutation, ...] = (CubePermutation.UNIT, CubePermutation.I)


def _build_factor_table() -> Dict[CubePermutation, Tuple[CubePermutation, CubePermutation, CubePermutation]]:
    table: Dict[CubePermutation, Tuple[CubePermutation, CubePermutation, CubePermutation]] = {}
    for v in V_FACTORS:
        for c in C_FACTORS:
            for i in I_FACTORS:
                table[i.compose(c).compose(v)] = (v, c, i)
    if len(table) != 24:
        raise InvariantViolation(f"Factorización incompleta: {len(table)} elementos")
    return table


_FACTOR_TABLE = _build_factor_table()

CubePermutation.ALL = tuple(_FACTOR_TABLE)

_NAMES: Dict[CubePermutation, str] = {}
for _name in ("X_1", "X_3", "Y_1", "Y_3", "Z_1", "Z_3", "I", "C2", "C1", "Z_2", "Y_2", "X_2", "UNIT"):
    _NAMES[getattr(CubePermutation, _name)] = _name

