# rubik_anim/core/errors.py
from __future__ import annotations


class InvariantViolation(RuntimeError):
    """Error irrecuperable: se rompió un invariante del modelo del cubo.

    Se lanza, por ejemplo, al decodificar una posición fuera de rango donde
    debería existir una, o si el estado agregado y el estado por bloque
    dejan de coincidir. Nunca se captura dentro del núcleo.
    """
