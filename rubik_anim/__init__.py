# rubik_anim/__init__.py
"""Simulador visual de un cubo Rubik 3x3x3 con giros de capa animados."""

from rubik_anim.config import AnimationConfig
from rubik_anim.logic.scene import RubikScene

__all__ = ["AnimationConfig", "RubikScene"]
