"""
Main window - live canvas preview with brush controls.
"""
from typing import List, Optional
from PyQt5.QtWidgets import (
    QMainWindow, QApplication, QWidget, QVBoxLayout, QHBoxLayout,
    QStackedLayout, QLabel, QPushButton, QSlider,
)
from PyQt5.QtCore import Qt, pyqtSignal
from PyQt5.QtGui import QImage, QPixmap
import numpy as np

from ..config import BrushConfig


class CanvasWindow(QMainWindow):
    """
    Window showing the composited camera + drawing image.

    Features:
    - Colour palette and brush size slider
    - Clear and Save buttons (also C / S keys, +/- for size)
    - Hint shown while no hand is tracked
    """

    clear_requested = pyqtSignal()
    save_requested = pyqtSignal()
    brush_size_changed = pyqtSignal(int)
    color_changed = pyqtSignal(str)

    def __init__(self, brush: BrushConfig, parent=None):
        super().__init__(parent)
        self._brush = brush
        self._color_buttons: List[QPushButton] = []

        self._setup_window()
        self._setup_ui()
        self._apply_native_theme()
        self._select_color(brush.default_color, emit=False)

    def _setup_window(self):
        """Configure window title and size."""
        self.setWindowTitle("AirInk")
        self.setObjectName("CanvasWindow")
        screen = QApplication.primaryScreen()
        if screen is not None:
            geo = screen.availableGeometry()
            self.resize(int(geo.width() * 0.7), int(geo.height() * 0.8))

    def _setup_ui(self):
        """Build the UI."""
        central = QWidget()
        central.setObjectName("CentralWidget")
        layout = QVBoxLayout(central)
        layout.setContentsMargins(8, 8, 8, 8)
        layout.setSpacing(6)
        self.setCentralWidget(central)

        # Canvas preview with hint stacked on top
        canvas_container = QWidget()
        stack = QStackedLayout(canvas_container)
        stack.setStackingMode(QStackedLayout.StackAll)

        self.canvas_view = QLabel()
        self.canvas_view.setObjectName("CanvasView")
        self.canvas_view.setAlignment(Qt.AlignCenter)
        self.canvas_view.setMinimumSize(320, 180)
        self.canvas_view.setScaledContents(True)

        self.hint_label = QLabel("Show your hand to the camera. Pinch thumb and index finger to draw.")
        self.hint_label.setObjectName("HintLabel")
        self.hint_label.setAlignment(Qt.AlignCenter)

        stack.addWidget(self.hint_label)
        stack.addWidget(self.canvas_view)
        layout.addWidget(canvas_container, stretch=1)

        # Toolbar
        toolbar = QWidget()
        toolbar.setObjectName("Toolbar")
        tools = QHBoxLayout(toolbar)
        tools.setContentsMargins(5, 5, 5, 5)

        for color in self._brush.colors:
            button = QPushButton()
            button.setObjectName("ColorButton")
            button.setFixedSize(28, 28)
            button.setStyleSheet(f"background-color: {color};")
            button.setProperty("color", color)
            button.clicked.connect(lambda _, c=color: self._select_color(c))
            tools.addWidget(button)
            self._color_buttons.append(button)

        tools.addSpacing(12)
        tools.addWidget(QLabel("Size"))
        self.size_slider = QSlider(Qt.Horizontal)
        self.size_slider.setRange(self._brush.min_size, self._brush.max_size)
        self.size_slider.setValue(self._brush.default_size)
        self.size_slider.setFixedWidth(160)
        self.size_slider.valueChanged.connect(self._handle_size_changed)
        tools.addWidget(self.size_slider)
        self.size_label = QLabel(str(self._brush.default_size))
        self.size_label.setFixedWidth(24)
        tools.addWidget(self.size_label)

        tools.addStretch(1)

        self.clear_button = QPushButton("Clear")
        self.clear_button.clicked.connect(self.clear_requested.emit)
        tools.addWidget(self.clear_button)

        self.save_button = QPushButton("Save")
        self.save_button.clicked.connect(self.save_requested.emit)
        tools.addWidget(self.save_button)

        layout.addWidget(toolbar)

        self.status_label = QLabel("Initializing...")
        self.status_label.setObjectName("StatusLabel")
        layout.addWidget(self.status_label)

    def _apply_native_theme(self):
        """Inherit colors from the system palette."""
        pal = QApplication.palette()
        bg = pal.color(pal.Window).name()
        fg = pal.color(pal.WindowText).name()
        accent = pal.color(pal.Highlight).name()
        if accent.lower() in ["#ffffff", "#000000"]:
            accent = "#667eea"

        self.setStyleSheet(f"""
        #CentralWidget {{
            background-color: {bg};
        }}

        #CanvasView {{
            background-color: #000000;
            border-radius: 8px;
        }}

        #HintLabel {{
            color: #ffffff;
            font-size: 18px;
            background-color: rgba(0, 0, 0, 120);
        }}

        #ColorButton {{
            border-radius: 14px;
            border: 2px solid transparent;
        }}

        #ColorButton[selected="true"] {{
            border: 2px solid {accent};
        }}

        #StatusLabel {{
            color: {fg};
        }}
        """)

    def _select_color(self, color: str, emit: bool = True):
        for button in self._color_buttons:
            button.setProperty("selected", "true" if button.property("color") == color else "false")
            # Force style refresh
            button.style().unpolish(button)
            button.style().polish(button)
        if emit:
            self.color_changed.emit(color)

    def _handle_size_changed(self, value: int):
        self.size_label.setText(str(value))
        self.brush_size_changed.emit(value)

    def set_frame(self, frame: Optional[np.ndarray]):
        """
        Show a composited frame.

        Args:
            frame: BGR numpy array from the worker
        """
        if frame is None:
            self.canvas_view.clear()
            return

        rgb = frame[:, :, ::-1].copy()
        h, w, ch = rgb.shape
        bytes_per_line = ch * w
        qimg = QImage(rgb.data, w, h, bytes_per_line, QImage.Format_RGB888)
        self.canvas_view.setPixmap(QPixmap.fromImage(qimg))

    def show_hint(self):
        self.hint_label.show()

    def hide_hint(self):
        self.hint_label.hide()

    def set_status(self, text: str):
        self.status_label.setText(text)

    def keyPressEvent(self, event):
        """Keyboard shortcuts: C clear, S save, +/- brush size."""
        key = event.key()
        if key == Qt.Key_C:
            self.clear_requested.emit()
        elif key == Qt.Key_S:
            self.save_requested.emit()
        elif key in (Qt.Key_Plus, Qt.Key_Equal):
            self.size_slider.setValue(self.size_slider.value() + 1)
        elif key == Qt.Key_Minus:
            self.size_slider.setValue(self.size_slider.value() - 1)
        else:
            super().keyPressEvent(event)
