# rubik_anim/config.py
from __future__ import annotations

from dataclasses import dataclass

DEFAULT_DURATION: float = 0.25  # segundos por giro
DEFAULT_TICK_INTERVAL_MS: int = 16  # ~60fps


@dataclass(frozen=True)
class AnimationConfig:
    """Parámetros de animación del simulador.

    Attributes:
        duration: Duración (segundos) de la animación de cada giro de capa.
        tick_interval_ms: Intervalo del timer de frames, en milisegundos.
    """

    duration: float = DEFAULT_DURATION
    tick_interval_ms: int = DEFAULT_TICK_INTERVAL_MS

    def __post_init__(self) -> None:
        if self.duration <= 0:
            raise ValueError(f"La duración debe ser positiva: {self.duration}")
        if self.tick_interval_ms <= 0:
            raise ValueError(f"El intervalo debe ser positivo: {self.tick_interval_ms}")
