# rubik_anim/logic/visual.py
from __future__ import annotations

import math
from typing import Dict

from rubik_anim.core.errors import InvariantViolation
from rubik_anim.core.permutation import CubePermutation
from rubik_anim.core.quaternion import (
    Quat,
    quat_from_axis_angle,
    quat_from_rotation_x,
    quat_from_rotation_y,
    quat_from_rotation_z,
    quat_identity,
    quat_multiply,
)

_DIAGONAL = (1.0, 1.0, 1.0)

_V_QUATS: Dict[CubePermutation, Quat] = {
    CubePermutation.UNIT: quat_identity(),
    CubePermutation.X_2: quat_from_rotation_x(math.pi),
    CubePermutation.Y_2: quat_from_rotation_y(math.pi),
    CubePermutation.Z_2: quat_from_rotation_z(math.pi),
}

_C_QUATS: Dict[CubePermutation, Quat] = {
    CubePermutation.UNIT: quat_identity(),
    CubePermutation.C1: quat_from_axis_angle(_DIAGONAL, math.pi / 3 * 2.0),
    CubePermutation.C2: quat_from_axis_angle(_DIAGONAL, -math.pi / 3 * 2.0),
}

_I_QUATS: Dict[CubePermutation, Quat] = {
    CubePermutation.UNIT: quat_identity(),
    CubePermutation.I: quat_multiply(
        quat_from_rotation_y(math.pi), quat_from_rotation_z(math.pi / 2)
    ),
}


def _lookup(table: Dict[CubePermutation, Quat], factor: CubePermutation) -> Quat:
    try:
        return table[factor]
    except KeyError:
        raise InvariantViolation(f"Factor de orientación inesperado: {factor!r}") from None


def perm_to_quat(perm: CubePermutation) -> Quat:
    """Convierte una orientación abstracta en la rotación visual del bloque.

    La orientación se factoriza en tres sub-rotaciones (`factor_3`): una de
    orden 2 sobre un eje, una de orden 3 sobre la diagonal principal y un
    intercambio de diagonales. Cada factor se traduce con una tabla fija y el
    resultado es su composición ``q(v) * q(c) * q(i)``.

    Args:
        perm: Orientación acumulada del bloque.

    Returns:
        Cuaternión unitario ``[w, x, y, z]`` que rota igual que `perm`.

    Raises:
        InvariantViolation: Si algún factor no está en las tablas.
    """
    rot_0, rot_1, rot_2 = perm.factor_3()
    q0 = _lookup(_V_QUATS, rot_0)
    q1 = _lookup(_C_QUATS, rot_1)
    q2 = _lookup(_I_QUATS, rot_2)
    return quat_multiply(quat_multiply(q0, q1), q2)
