# rubik_anim/core/quaternion.py
"""Quaternion helpers on numpy arrays ``[w, x, y, z]``."""

from __future__ import annotations

import math
from typing import Sequence

import numpy as np

Quat = np.ndarray


def quat_identity() -> Quat:
    return np.array([1.0, 0.0, 0.0, 0.0], dtype=np.float64)


def quat_from_axis_angle(axis: Sequence[float], angle: float) -> Quat:
    """Rotación de `angle` radianes sobre `axis` (se normaliza)."""
    a = np.asarray(axis, dtype=np.float64)
    norm = np.linalg.norm(a)
    if norm < 1e-12:
        raise ValueError("El eje de rotación no puede ser nulo")
    a = a / norm
    half = angle / 2.0
    s = math.sin(half)
    return np.array([math.cos(half), a[0] * s, a[1] * s, a[2] * s], dtype=np.float64)


def quat_from_rotation_x(angle: float) -> Quat:
    return quat_from_axis_angle((1.0, 0.0, 0.0), angle)


def quat_from_rotation_y(angle: float) -> Quat:
    return quat_from_axis_angle((0.0, 1.0, 0.0), angle)


def quat_from_rotation_z(angle: float) -> Quat:
    return quat_from_axis_angle((0.0, 0.0, 1.0), angle)


def quat_multiply(q1: Quat, q2: Quat) -> Quat:
    """Producto de Hamilton ``q1 * q2`` (aplica q2 y luego q1)."""
    w1, x1, y1, z1 = q1
    w2, x2, y2, z2 = q2
    return np.array(
        [
            w1 * w2 - x1 * x2 - y1 * y2 - z1 * z2,
            w1 * x2 + x1 * w2 + y1 * z2 - z1 * y2,
            w1 * y2 - x1 * z2 + y1 * w2 + z1 * x2,
            w1 * z2 + x1 * y2 - y1 * x2 + z1 * w2,
        ],
        dtype=np.float64,
    )


def quat_normalize(q: Quat) -> Quat:
    norm = np.linalg.norm(q)
    if norm < 1e-12:
        return quat_identity()
    return q / norm


def quat_turn(q0: Quat, axis: Sequence[float], angle: float, t: float) -> Quat:
    """Rota `q0` una fracción `t` de `angle` radianes sobre `axis` (eje global).

    Con ``|angle| <= pi`` es la interpolación por el camino más corto entre
    `q0` y la rotación final ``quat_from_axis_angle(axis, angle) * q0``.

    Args:
        q0: Rotación inicial.
        axis: Eje de giro en coordenadas del mundo.
        angle: Ángulo total con signo.
        t: Parámetro; se satura a [0, 1].

    Returns:
        Cuaternión unitario interpolado.
    """
    t = min(max(t, 0.0), 1.0)
    return quat_normalize(quat_multiply(quat_from_axis_angle(axis, angle * t), q0))


def quat_rotate(q: Quat, v: Sequence[float]) -> np.ndarray:
    """Rota un vector 3D con el cuaternión unitario `q`."""
    qv = np.array([0.0, v[0], v[1], v[2]], dtype=np.float64)
    conj = q * np.array([1.0, -1.0, -1.0, -1.0])
    return quat_multiply(quat_multiply(q, qv), conj)[1:]


def quat_to_gl_matrix(q: Quat) -> np.ndarray:
    """Matriz 4x4 de rotación en orden column-major (para `glMultMatrixf`)."""
    w, x, y, z = q
    m = np.array(
        [
            [1 - 2 * (y * y + z * z), 2 * (x * y - w * z), 2 * (x * z + w * y), 0.0],
            [2 * (x * y + w * z), 1 - 2 * (x * x + z * z), 2 * (y * z - w * x), 0.0],
            [2 * (x * z - w * y), 2 * (y * z + w * x), 1 - 2 * (x * x + y * y), 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ],
        dtype=np.float32,
    )
    return m.T.copy()
