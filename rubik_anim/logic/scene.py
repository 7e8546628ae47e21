# rubik_anim/logic/scene.py
from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass, field
from typing import Deque, Dict, Iterable, List, Optional

from rubik_anim.config import AnimationConfig
from rubik_anim.core.errors import InvariantViolation
from rubik_anim.core.permutation import CubePermutation
from rubik_anim.core.position import CubePosition
from rubik_anim.core.quaternion import Quat, quat_identity
from rubik_anim.core.transform import LayerTransform, Rubik
from rubik_anim.logic.animation import RotateAnimation, rotate_animation_system
from rubik_anim.logic.dispatch import handle_key_events, handle_permutation_input
from rubik_anim.logic.moves import KeyPress, layer_for_key
from rubik_anim.logic.names import EntityPath, cube_position_name, rubik_name

logger = logging.getLogger(__name__)


@dataclass
class RubikBlock:
    """Uno de los 27 bloques del cubo.

    Attributes:
        label: Nombre estable (el de su posición de origen).
        home: Posición que ocupa en el cubo resuelto.
        position: Posición lógica actual.
        perm: Orientación lógica acumulada.
        rotation: Rotación visual actual (puede ir atrasada respecto a `perm`
            mientras hay una animación).
    """

    label: str
    home: CubePosition
    position: CubePosition
    perm: CubePermutation = CubePermutation.UNIT
    rotation: Quat = field(default_factory=quat_identity)


class RubikScene:
    """Estado completo del simulador: cubo agregado, 27 bloques y animaciones.

    Es el punto de entrada del host (ventana Qt o tests):
    - `handle_trigger(transform, inverse)` para un giro discreto.
    - `step(dt)` para avanzar las animaciones un tick.
    - `frame(events, dt)` combina ambos respetando el orden: primero los
      disparos del frame, luego el avance de las animaciones.
    """

    def __init__(self, config: Optional[AnimationConfig] = None) -> None:
        """Crea el cubo resuelto con sus 27 bloques.

        Args:
            config: Parámetros de animación; por defecto `AnimationConfig()`.
        """
        self.config: AnimationConfig = config or AnimationConfig()
        self.rubik: Rubik = Rubik()
        self.blocks: Dict[str, RubikBlock] = {}
        for pos in CubePosition:
            label = cube_position_name(pos)
            self.blocks[label] = RubikBlock(label=label, home=pos, position=pos)

        self.animations: Dict[str, RotateAnimation] = {}
        self._pending: Deque[LayerTransform] = deque()

    # --------------------------
    # Consultas
    # --------------------------
    def is_animating(self, label: str) -> bool:
        return label in self.animations

    def animating_count(self) -> int:
        """Cantidad de bloques con una animación en curso."""
        return len(self.animations)

    def is_idle(self) -> bool:
        """True si no hay animaciones activas ni giros pendientes."""
        return not self.animations and not self._pending

    def block_by_path(self, path: EntityPath) -> RubikBlock:
        """Resuelve una ruta ``(cubo, bloque)`` al bloque correspondiente.

        Raises:
            KeyError: Si la ruta no nombra a este cubo o a ninguno de sus bloques.
        """
        root, label = path
        if root != rubik_name():
            raise KeyError(f"Cubo desconocido: {root}")
        return self.blocks[label]

    def block_at(self, position: CubePosition) -> RubikBlock:
        """Bloque que ocupa lógicamente `position`."""
        home, _ = self.rubik.block_at(position)
        return self.blocks[cube_position_name(home)]

    def is_solved(self) -> bool:
        return self.rubik.is_solved()

    def check_consistency(self) -> None:
        """Verifica que el estado por bloque coincida con el estado agregado.

        Raises:
            InvariantViolation: Si las posiciones no forman una permutación de las
                27, o si algún bloque difiere del estado agregado.
        """
        positions = {b.position for b in self.blocks.values()}
        if len(positions) != 27:
            raise InvariantViolation("Dos bloques ocupan la misma posición")

        placement = self.rubik.placement()
        for block in self.blocks.values():
            pos, perm = placement[block.home]
            if block.position != pos or block.perm != perm:
                raise InvariantViolation(
                    f"Bloque {block.label}: {block.position.name}/{block.perm!r} "
                    f"vs agregado {pos.name}/{perm!r}"
                )

    # --------------------------
    # Entradas del host
    # --------------------------
    def handle_trigger(
        self, transform: LayerTransform, inverse: bool = False
    ) -> Optional[LayerTransform]:
        """Dispara un giro de capa (ver `handle_permutation_input`)."""
        return handle_permutation_input(self, transform, inverse)

    def enqueue(self, transforms: Iterable[LayerTransform]) -> None:
        """Agrega giros a la cola; se aplican de a uno cuando su capa está libre."""
        transforms = list(transforms)
        self._pending.extend(transforms)
        logger.debug("Encolados %d giros (%d pendientes)", len(transforms), len(self._pending))

    def step(self, dt: float) -> List[str]:
        """Avanza todas las animaciones `dt` segundos."""
        return rotate_animation_system(self, dt)

    def frame(self, events: Iterable[KeyPress], dt: float) -> Optional[LayerTransform]:
        """Ejecuta un frame completo: disparos primero, animaciones después.

        Solo se aplica un giro por frame: la primera tecla de movimiento del
        frame o, si no hay ninguna, el siguiente giro de la cola (si su capa ya
        terminó de animarse).

        Args:
            events: Teclas recibidas desde el frame anterior.
            dt: Tiempo transcurrido en segundos.

        Returns:
            La transformación aplicada en este frame, o None.
        """
        events = list(events)
        had_move_key = any(layer_for_key(e.key) is not None for e in events)
        applied = handle_key_events(self, events)

        if not had_move_key and self._pending:
            applied = handle_permutation_input(self, self._pending[0])
            if applied is not None:
                self._pending.popleft()

        self.step(dt)
        return applied

