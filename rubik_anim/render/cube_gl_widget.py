# rubik_anim/render/cube_gl_widget.py
from __future__ import annotations

from typing import Dict, List, Optional, Tuple

from PySide6.QtCore import QElapsedTimer, QTimer, Qt, Signal
from PySide6.QtGui import QKeyEvent
from PySide6.QtOpenGLWidgets import QOpenGLWidget

from OpenGL.GL import (
    glBegin,
    glClear,
    glClearColor,
    glColor3f,
    glEnable,
    glEnd,
    glLoadIdentity,
    glMatrixMode,
    glMultMatrixf,
    glPopMatrix,
    glPushMatrix,
    glRotatef,
    glTranslatef,
    glVertex3f,
    glViewport,
    GL_COLOR_BUFFER_BIT,
    GL_DEPTH_BUFFER_BIT,
    GL_DEPTH_TEST,
    GL_MODELVIEW,
    GL_PROJECTION,
    GL_QUADS,
)
from OpenGL.GLU import gluPerspective

from rubik_anim.config import AnimationConfig
from rubik_anim.core.position import Layer, Vec3i
from rubik_anim.core.quaternion import quat_to_gl_matrix
from rubik_anim.logic.moves import KeyPress, key_press_for_code, move_notation, parse_sequence
from rubik_anim.logic.scene import RubikBlock, RubikScene

Vec3f = Tuple[float, float, float]

COLORS_SOLVED: Dict[Layer, str] = {
    Layer.U: "W",
    Layer.D: "Y",
    Layer.L: "O",
    Layer.R: "R",
    Layer.F: "G",
    Layer.B: "B",
}


class CubeGLWidget(QOpenGLWidget):
    """Widget OpenGL que dibuja los 27 bloques y conduce el loop de frames.

    Características:
    - Render OpenGL clásico (sin shaders).
    - Cada bloque es un cubo de plástico con stickers en sus caras exteriores
      (según su posición de origen), rotado por su cuaternión visual alrededor
      del centro del cubo.
    - Teclado: R L U D F B giran la capa; con Ctrl, el giro inverso.
    - Un QTimer entrega un frame por tick a `RubikScene.frame`.
    - Señales: `move_applied` tras cada giro y `animating_changed` cuando cambia
      la cantidad de bloques animándose.
    """

    move_applied = Signal(str)
    animating_changed = Signal(int)

    def __init__(
        self,
        scene: RubikScene,
        config: Optional[AnimationConfig] = None,
        parent=None,
    ) -> None:
        """Crea el widget OpenGL y arranca el timer de frames.

        Args:
            scene: Estado del cubo a dibujar y animar.
            config: Parámetros (intervalo del timer); por defecto los de la escena.
            parent: Widget padre (Qt), opcional.
        """
        super().__init__(parent)
        self.scene: RubikScene = scene
        self.config: AnimationConfig = config or scene.config

        # Cámara fija (mirando al origen desde una diagonal)
        self.yaw: float = -45.0
        self.pitch: float = 35.0
        self.distance: float = 8.0

        # Geometría de bloques
        self.block_size: float = 0.96
        self.sticker_margin: float = 0.08
        self.sticker_offset: float = 0.005

        # Teclas recibidas desde el último frame
        self._key_queue: List[KeyPress] = []
        self._animating_count: int = 0

        self._clock: QElapsedTimer = QElapsedTimer()
        self._frame_timer: QTimer = QTimer(self)
        self._frame_timer.setInterval(self.config.tick_interval_ms)
        self._frame_timer.timeout.connect(self._on_frame_tick)

        self.setFocusPolicy(Qt.StrongFocus)
        self._clock.start()
        self._frame_timer.start()

    # --------------------------
    # OpenGL lifecycle
    # --------------------------
    def initializeGL(self) -> None:
        """Inicializa parámetros OpenGL (clear color y depth test)."""
        glClearColor(0.10, 0.10, 0.12, 1.0)
        glEnable(GL_DEPTH_TEST)

    def resizeGL(self, w: int, h: int) -> None:
        """Ajusta viewport y proyección cuando cambia el tamaño del widget.

        Args:
            w: Ancho lógico del widget (Qt).
            h: Alto lógico del widget (Qt).
        """
        if h == 0:
            h = 1

        dpr = self.devicePixelRatioF()
        fb_w = int(w * dpr)
        fb_h = int(h * dpr)

        glViewport(0, 0, fb_w, fb_h)

        glMatrixMode(GL_PROJECTION)
        glLoadIdentity()
        aspect = fb_w / float(fb_h)
        gluPerspective(45.0, aspect, 0.1, 100.0)

        glMatrixMode(GL_MODELVIEW)
        glLoadIdentity()

    def paintGL(self) -> None:
        """Dibuja el frame actual: cada bloque con su rotación visual."""
        glClear(GL_COLOR_BUFFER_BIT | GL_DEPTH_BUFFER_BIT)

        self._apply_camera()

        for block in self.scene.blocks.values():
            self._draw_block(block)

    def _apply_camera(self) -> None:
        """Aplica la transformación de cámara fija."""
        glMatrixMode(GL_MODELVIEW)
        glLoadIdentity()
        glTranslatef(0.0, 0.0, -self.distance)
        glRotatef(self.pitch, 1.0, 0.0, 0.0)
        glRotatef(self.yaw, 0.0, 1.0, 0.0)

    # --------------------------
    # Interacción
    # --------------------------
    def keyPressEvent(self, event: QKeyEvent) -> None:
        """Encola las teclas de movimiento para el próximo frame (con el estado de Ctrl).

        Las demás teclas siguen hacia el widget padre.

        Args:
            event: Evento de teclado de Qt.
        """
        if event.isAutoRepeat():
            event.ignore()
            return

        ctrl = bool(event.modifiers() & Qt.ControlModifier)
        press = key_press_for_code(int(event.key()), inverse=ctrl)
        if press is not None:
            self._key_queue.append(press)
            event.accept()
            return

        super().keyPressEvent(event)

    def trigger(self, key: str, inverse: bool = False) -> None:
        """Encola un disparo (tecla o botón del panel) para el próximo frame."""
        self._key_queue.append(KeyPress(key=key, inverse=inverse))

    def play_sequence(self, seq: str) -> None:
        """Encola una secuencia tipo "R U R' U'"; se anima giro a giro.

        Raises:
            ValueError: Si algún token es inválido.
        """
        self.scene.enqueue(parse_sequence(seq))

    # --------------------------
    # Frames
    # --------------------------
    def _on_frame_tick(self) -> None:
        """Tick del timer: un frame de la escena (disparos y luego animación)."""
        dt = self._clock.restart() / 1000.0

        events, self._key_queue = self._key_queue, []
        applied = self.scene.frame(events, dt)
        if applied is not None:
            self.move_applied.emit(move_notation(applied))

        count = self.scene.animating_count()
        if count != self._animating_count:
            self._animating_count = count
            self.animating_changed.emit(count)

        self.update()

    # --------------------------
    # Render helpers
    # --------------------------
    def _draw_block(self, block: RubikBlock) -> None:
        """Dibuja un bloque en su posición de origen, rotado alrededor del centro."""
        glPushMatrix()
        glMultMatrixf(quat_to_gl_matrix(block.rotation))
        cx, cy, cz = block.home.centered
        glTranslatef(float(cx), float(cy), float(cz))

        half = self.block_size / 2.0

        glBegin(GL_QUADS)
        for layer in Layer:
            n = layer.normal
            glColor3f(0.05, 0.05, 0.06)
            for v in self._face_quad(n, half, 0.0, 0.0):
                glVertex3f(*v)

            if layer.contains(block.home):
                glColor3f(*self._color_rgb(COLORS_SOLVED[layer]))
                for v in self._face_quad(n, half, self.sticker_margin, self.sticker_offset):
                    glVertex3f(*v)
        glEnd()

        glPopMatrix()

    def _face_quad(self, n: Vec3i, half: float, margin: float, offset: float) -> List[Vec3f]:
        """Retorna los 4 vértices de una cara de un bloque centrado en el origen.

        Args:
            n: Normal exterior de la cara (entera, unitaria).
            half: Mitad del lado del bloque.
            margin: Margen interno (reduce el quad, para stickers).
            offset: Separación del quad hacia afuera de la cara.

        Returns:
            Lista de 4 vértices (x, y, z) en orden para dibujar con GL_QUADS.
        """
        axis = [abs(c) for c in n].index(1)
        u_axis = (axis + 1) % 3
        v_axis = (axis + 2) % 3
        d = half - margin

        quad: List[Vec3f] = []
        for su, sv in ((-1, -1), (1, -1), (1, 1), (-1, 1)):
            p = [0.0, 0.0, 0.0]
            p[axis] = n[axis] * (half + offset)
            p[u_axis] = su * d
            p[v_axis] = sv * d
            quad.append((p[0], p[1], p[2]))
        return quad

    # --------------------------
    # Color map
    # --------------------------
    def _color_rgb(self, c: str) -> Vec3f:
        """Convierte el símbolo de color a RGB.

        Args:
            c: Letra de color (por ejemplo: "W", "Y", "O", "R", "G", "B").

        Returns:
            Tupla (r, g, b) en rango [0, 1]. Si no existe el color, retorna gris.
        """
        palette: Dict[str, Vec3f] = {
            "W": (1.0, 1.0, 1.0),
            "Y": (1.0, 1.0, 0.0),
            "O": (1.0, 0.5, 0.0),
            "R": (1.0, 0.0, 0.0),
            "G": (0.0, 0.85, 0.0),
            "B": (0.0, 0.35, 1.0),
        }
        return palette.get(c, (0.8, 0.8, 0.8))
