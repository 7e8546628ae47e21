# rubik_anim/logic/animation.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, List

from rubik_anim.core.quaternion import Quat, quat_turn
from rubik_anim.core.transform import Vec3f

if TYPE_CHECKING:
    from rubik_anim.logic.scene import RubikScene

logger = logging.getLogger(__name__)


@dataclass
class RotateAnimation:
    """Animación de rotación de un bloque durante un único giro.

    Attributes:
        axis: Eje geométrico del giro que la originó; la rotación visual gira
            sobre este eje.
        angle: Ángulo con signo (radianes) del giro sobre `axis`.
        s: Progreso normalizado; la animación termina cuando ``s >= 1``.
        duration: Duración total en segundos.
        from_rot: Rotación visual al inicio.
        to_rot: Rotación visual final.
    """

    axis: Vec3f
    angle: float
    duration: float
    from_rot: Quat
    to_rot: Quat
    s: float = 0.0

    def __post_init__(self) -> None:
        if self.duration <= 0:
            raise ValueError(f"La duración debe ser positiva: {self.duration}")

    @property
    def finished(self) -> bool:
        return self.s >= 1.0

    def rotation_at(self, s: float) -> Quat:
        """Rotación visual con progreso `s` (``from_rot`` girado ``angle * s``)."""
        return quat_turn(self.from_rot, self.axis, self.angle, s)


def rotate_animation_system(scene: "RubikScene", dt: float) -> List[str]:
    """Avanza todas las animaciones activas un tick.

    Por cada bloque con animación: ``s += dt / duration`` y su rotación visual
    pasa a ser `from_rot` girada ``angle * s`` sobre `axis` (camino más corto
    hacia `to_rot`, los giros son de 90°). Al llegar a ``s >= 1`` la rotación
    se fija exactamente en `to_rot` y la animación se quita del bloque.

    Args:
        scene: Escena con los bloques y las animaciones activas.
        dt: Tiempo transcurrido desde el tick anterior, en segundos.

    Returns:
        Etiquetas de los bloques cuya animación terminó en este tick.

    Raises:
        ValueError: Si `dt` es negativo.
    """
    if dt < 0:
        raise ValueError(f"dt no puede ser negativo: {dt}")

    finished: List[str] = []
    for label, animation in scene.animations.items():
        block = scene.blocks[label]
        animation.s += dt / animation.duration
        if animation.finished:
            block.rotation = animation.to_rot.copy()
            finished.append(label)
        else:
            block.rotation = animation.rotation_at(animation.s)

    for label in finished:
        del scene.animations[label]
    if finished:
        logger.debug("Animaciones terminadas: %s", ", ".join(finished))
    return finished
