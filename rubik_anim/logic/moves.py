# rubik_anim/logic/moves.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Set

from rubik_anim.core.position import Layer
from rubik_anim.core.transform import LayerTransform

VALID_FACES: Set[str] = {layer.value for layer in Layer}
VALID_SUFFIX: Set[str] = {"", "'", "2"}

# Tecla -> capa. Solo estas teclas disparan giros; el resto se ignora.
KEY_TO_LAYER: Dict[str, Layer] = {layer.value: layer for layer in Layer}


@dataclass(frozen=True)
class KeyPress:
    """Tecla presionada en un frame.

    Attributes:
        key: Texto de la tecla (ej: "R").
        inverse: True si el modificador (Ctrl) estaba presionado al disparar.
    """

    key: str
    inverse: bool = False


def layer_for_key(key: str) -> Optional[Layer]:
    """Capa asociada a una tecla, o None si la tecla no es de movimiento."""
    return KEY_TO_LAYER.get(key.strip().upper())


def key_press_for_code(code: int, inverse: bool = False) -> Optional[KeyPress]:
    """Traduce un código de tecla (ASCII, como `Qt.Key_R`) a un disparo.

    Returns:
        El `KeyPress` si la tecla es de movimiento (R L U D F B), o None.
    """
    if not 0 <= code < 0x80:
        return None
    key = chr(code)
    if layer_for_key(key) is None:
        return None
    return KeyPress(key=key.upper(), inverse=inverse)


def normalize_token(tok: str) -> str:
    """Normaliza un token de movimiento a un formato estándar.

    Reglas principales:
    - Elimina espacios y convierte comilla tipográfica (’ o ‘) a comilla simple (').
    - Acepta notación de una cara con sufijo opcional:
        - ""  (ej: "R")
        - "'" (ej: "R'")
        - "2" (ej: "R2")
    - Corrige el caso típico "D2'" -> "D2" (ya que el inverso de un 180° es el mismo).

    Args:
        tok: Token de movimiento (por ejemplo: "R", "U'", "F2", "D2'").

    Returns:
        Token normalizado (por ejemplo: "D2'" -> "D2").

    Raises:
        ValueError: Si la cara no es válida o si el sufijo no es válido.
    """
    tok = tok.strip().replace("’", "'").replace("‘", "'")
    if not tok:
        return ""

    base = tok[0].upper()
    suf = tok[1:]

    if base not in VALID_FACES:
        raise ValueError(f"Movimiento inválido: {tok}")

    if suf == "2'":
        suf = "2"

    if suf not in VALID_SUFFIX:
        raise ValueError(f"Sufijo inválido en: {tok}")

    return base + suf


def parse_move(tok: str) -> List[LayerTransform]:
    """Traduce un token a las transformaciones de capa que lo componen.

    Ejemplos:
        - "R"  -> [R]
        - "R'" -> [RI]
        - "R2" -> [R, R]

    Raises:
        ValueError: Si `tok` no es un token válido.
    """
    m = normalize_token(tok)
    if not m:
        return []

    layer = Layer(m[0])
    suf = m[1:]
    if suf == "2":
        return [LayerTransform.for_layer(layer)] * 2
    return [LayerTransform.for_layer(layer, inverse=(suf == "'"))]


def parse_sequence(text: str) -> List[LayerTransform]:
    """Convierte una secuencia escrita como texto en transformaciones de capa.

    La entrada debe separar movimientos por espacios. Por ejemplo:
        "R U R' U'" -> [R, U, RI, UI]

    Raises:
        ValueError: Si algún token es inválido.
    """
    out: List[LayerTransform] = []
    for t in text.strip().split():
        out.extend(parse_move(t))
    return out


def move_notation(transform: LayerTransform) -> str:
    """Notación usual de una transformación: RI -> "R'"."""
    return transform.layer.value + ("'" if transform.is_inverse else "")
