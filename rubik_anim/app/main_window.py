# rubik_anim/app/main_window.py
from __future__ import annotations

from typing import Dict, Optional

from PySide6.QtWidgets import (
    QCheckBox,
    QGridLayout,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QMainWindow,
    QMessageBox,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from rubik_anim.config import AnimationConfig
from rubik_anim.core.position import Layer
from rubik_anim.logic.scene import RubikScene
from rubik_anim.render.cube_gl_widget import CubeGLWidget


class MainWindow(QMainWindow):
    """Ventana principal del simulador 3D del cubo Rubik.

    Esta clase coordina:
    - El estado del cubo y sus animaciones (`RubikScene`)
    - La visualización y el loop de frames (`CubeGLWidget`)
    - Un panel con botones por capa, modificador "inverso", secuencias y
      la cantidad de bloques animándose
    """

    def __init__(self, config: Optional[AnimationConfig] = None) -> None:
        """Inicializa la ventana principal, crea la UI y conecta señales.

        Args:
            config: Parámetros de animación; por defecto `AnimationConfig()`.
        """
        super().__init__()
        self.setWindowTitle("Rubik 3D - PySide6")

        # --- Escena + render ---
        self.scene: RubikScene = RubikScene(config)
        self.gl_widget: CubeGLWidget = CubeGLWidget(self.scene, parent=self)

        # --- UI ---
        root = QWidget()
        root_layout = QHBoxLayout(root)
        root_layout.addWidget(self.gl_widget, 1)

        panel = QWidget()
        panel_layout = QVBoxLayout(panel)
        panel.setFixedWidth(260)

        self.lbl_state = QLabel("")
        panel_layout.addWidget(self.lbl_state)

        # Botones por capa (mismo camino que el teclado)
        panel_layout.addWidget(QLabel("Girar capa (teclas R L U D F B)"))
        grid = QGridLayout()
        self.layer_buttons: Dict[Layer, QPushButton] = {}
        for i, layer in enumerate(Layer):
            btn = QPushButton(layer.value)
            btn.clicked.connect(lambda _=False, l=layer: self.on_layer_clicked(l))
            grid.addWidget(btn, i // 3, i % 3)
            self.layer_buttons[layer] = btn
        panel_layout.addLayout(grid)

        self.chk_inverse = QCheckBox("Inverso sin animación (Ctrl)")
        panel_layout.addWidget(self.chk_inverse)

        # Aplicar secuencia
        panel_layout.addWidget(QLabel("Aplicar secuencia (ej: R U R' U')"))
        self.txt_seq = QLineEdit()
        self.txt_seq.setPlaceholderText("Ej: R U R' U'")
        panel_layout.addWidget(self.txt_seq)
        self.btn_apply = QPushButton("Aplicar")
        panel_layout.addWidget(self.btn_apply)

        self.lbl_last = QLabel("Último giro: -")
        panel_layout.addWidget(self.lbl_last)
        self.lbl_anim = QLabel("")
        panel_layout.addWidget(self.lbl_anim)
        panel_layout.addStretch(1)

        root_layout.addWidget(panel)
        self.setCentralWidget(root)

        # --- Conexiones ---
        self.btn_apply.clicked.connect(self.on_apply_sequence)
        self.txt_seq.returnPressed.connect(self.on_apply_sequence)
        self.gl_widget.move_applied.connect(self.on_move_applied)
        self.gl_widget.animating_changed.connect(self._refresh_anim_label)

        self._refresh_state_label()
        self._refresh_anim_label(self.scene.animating_count())
        self.gl_widget.setFocus()

    # -------------------
    # Helpers UI
    # -------------------
    def _refresh_state_label(self) -> None:
        """Actualiza el label de estado del cubo."""
        self.lbl_state.setText(
            "Estado: resuelto ✅" if self.scene.is_solved() else "Estado: mezclado 🔄"
        )

    def _refresh_anim_label(self, count: int) -> None:
        """Muestra cuántos bloques se están animando."""
        self.lbl_anim.setText(f"Bloques animándose: {count}")

    # -------------------
    # Eventos
    # -------------------
    def on_layer_clicked(self, layer: Layer) -> None:
        """Dispara el giro de una capa desde el panel.

        Args:
            layer: Capa a girar.
        """
        self.gl_widget.trigger(layer.value, inverse=self.chk_inverse.isChecked())
        self.gl_widget.setFocus()

    def on_move_applied(self, move: str) -> None:
        """Callback cuando el GL widget aplica un giro al estado del cubo.

        Args:
            move: Giro aplicado (notación estándar, ej: "R'").
        """
        self.lbl_last.setText(f"Último giro: {move}")
        self.statusBar().showMessage(f"Move: {move}", 1200)
        self._refresh_state_label()

    def on_apply_sequence(self) -> None:
        """Encola una secuencia ingresada por el usuario (ej: 'R U R' U'')."""
        seq = self.txt_seq.text().strip()
        if not seq:
            return

        try:
            self.gl_widget.play_sequence(seq)
        except ValueError as exc:
            QMessageBox.warning(self, "Secuencia inválida", str(exc))
            return

        self.txt_seq.clear()
        self.gl_widget.setFocus()
