# main.py
from __future__ import annotations

import argparse
import logging
import sys
from typing import List, NoReturn, Optional

from PySide6.QtWidgets import QApplication

from rubik_anim.app.main_window import MainWindow
from rubik_anim.config import DEFAULT_DURATION, DEFAULT_TICK_INTERVAL_MS, AnimationConfig


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Simulador 3D de cubo Rubik 3x3x3")
    parser.add_argument(
        "--duration",
        type=float,
        default=DEFAULT_DURATION,
        help="duración de cada giro animado, en segundos",
    )
    parser.add_argument(
        "--tick-ms",
        type=int,
        default=DEFAULT_TICK_INTERVAL_MS,
        help="intervalo entre frames, en milisegundos",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
    )
    return parser


def main(argv: Optional[List[str]] = None) -> NoReturn:
    """Punto de entrada de la aplicación.

    Lee los argumentos, configura logging, construye la ventana principal
    (`MainWindow`) y ejecuta el loop de eventos de Qt.

    Returns:
        No retorna (finaliza el proceso con `sys.exit`).
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        config = AnimationConfig(duration=args.duration, tick_interval_ms=args.tick_ms)
    except ValueError as exc:
        parser.error(str(exc))

    app = QApplication(sys.argv[:1])
    w = MainWindow(config)
    w.show()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
