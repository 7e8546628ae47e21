# rubik_anim/logic/dispatch.py
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Iterable, List, Optional

from rubik_anim.core.errors import InvariantViolation
from rubik_anim.core.position import CubePosition
from rubik_anim.core.transform import LayerTransform
from rubik_anim.logic.animation import RotateAnimation
from rubik_anim.logic.moves import KeyPress, layer_for_key
from rubik_anim.logic.visual import perm_to_quat

if TYPE_CHECKING:
    from rubik_anim.logic.scene import RubikBlock, RubikScene

logger = logging.getLogger(__name__)


def _remap(transform: LayerTransform, position: CubePosition) -> CubePosition:
    try:
        return transform.apply_on_position(position)
    except ValueError as exc:
        raise InvariantViolation(
            f"{transform.name} sacó a {position.name} fuera del cubo"
        ) from exc


def _layer_members(scene: "RubikScene", transform: LayerTransform) -> List["RubikBlock"]:
    return [b for b in scene.blocks.values() if transform.layer.contains(b.position)]


def handle_permutation_input(
    scene: Optional["RubikScene"],
    transform: LayerTransform,
    inverse: bool = False,
) -> Optional[LayerTransform]:
    """Aplica un giro de capa al estado del cubo y lanza sus animaciones.

    Flujo:
        1. Si algún bloque de la capa sigue animándose, el giro se descarta
           completo (no se toca nada), así un bloque nunca tiene dos animaciones
           y el estado agregado no se separa del estado por bloque.
        2. Con `inverse`, se aplica el giro inverso al instante: sin animación,
           con la rotación visual fijada a la nueva orientación.
        3. Si no, cada bloque de la capa recibe su nueva orientación
           (``perm.compose(delta)``) y posición de inmediato, y una animación
           desde la rotación visual vieja hasta la nueva.
        4. Por último se ejecuta el giro una vez sobre el estado agregado.

    Args:
        scene: Escena del cubo; si es None (aún no inicializada) no hace nada.
        transform: Giro de capa disparado.
        inverse: True si el modificador estaba presionado.

    Returns:
        La transformación realmente aplicada, o None si no se aplicó.

    Raises:
        InvariantViolation: Si una posición remapeada no es válida.
    """
    if scene is None:
        return None

    members = _layer_members(scene, transform)
    busy = [b.label for b in members if scene.is_animating(b.label)]
    if busy:
        logger.info("Giro %s descartado: bloques en animación (%s)", transform.name, ", ".join(busy))
        return None

    if inverse:
        transform = transform.inverse
        delta = transform.rotation
        for block in members:
            block.perm = block.perm.compose(delta)
            block.position = _remap(transform, block.position)
            block.rotation = perm_to_quat(block.perm)
        scene.rubik.execute(transform)
        logger.debug("Giro %s aplicado sin animación", transform.name)
        return transform

    delta = transform.rotation
    for block in members:
        perm_now = block.perm
        perm_next = perm_now.compose(delta)
        scene.animations[block.label] = RotateAnimation(
            axis=transform.axis,
            angle=transform.angle,
            duration=scene.config.duration,
            from_rot=perm_to_quat(perm_now),
            to_rot=perm_to_quat(perm_next),
        )
        block.perm = perm_next
        block.position = _remap(transform, block.position)
    scene.rubik.execute(transform)

    logger.debug("Giro %s: %d bloques animados", transform.name, len(members))
    return transform


def handle_key_events(
    scene: Optional["RubikScene"],
    events: Iterable[KeyPress],
) -> Optional[LayerTransform]:
    """Procesa las teclas de un frame: solo la primera tecla de movimiento.

    Las teclas que no son de movimiento se ignoran. Tras la primera tecla
    reconocida se deja de leer; el resto de eventos del frame se descarta.

    Returns:
        La transformación aplicada, o None si no hubo giro.
    """
    if scene is None:
        return None

    for event in events:
        layer = layer_for_key(event.key)
        if layer is None:
            continue
        return handle_permutation_input(
            scene, LayerTransform.for_layer(layer), inverse=event.inverse
        )
    return None
