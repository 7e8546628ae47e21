# rubik_anim/core/__init__.py
"""Modelo algebraico del cubo 3x3x3: posiciones, orientaciones y giros de capa."""

from rubik_anim.core.errors import InvariantViolation
from rubik_anim.core.permutation import CubePermutation
from rubik_anim.core.position import CubePosition, Layer
from rubik_anim.core.transform import LayerTransform, Rubik

__all__ = [
    "CubePermutation",
    "CubePosition",
    "InvariantViolation",
    "Layer",
    "LayerTransform",
    "Rubik",
]
