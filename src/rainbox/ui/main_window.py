import logging

from PySide6.QtWidgets import (QMainWindow, QLabel, QVBoxLayout, QWidget,
                               QPushButton, QHBoxLayout, QLineEdit, QMessageBox)
from PySide6.QtGui import QImage, QPixmap
from PySide6.QtCore import Qt, Slot

from rainbox.core.canvas import Canvas
from rainbox.core.config import ConfigManager
from rainbox.core.errors import LandscapeParseError
from rainbox.core.landscape import parse_landscape, parse_rain_hours
from rainbox.core.scheduler import QtFrameScheduler
from rainbox.core.world import World
from rainbox.modules.renderer import Renderer
from rainbox.modules.solver import make_solver

logger = logging.getLogger(__name__)

START_LABEL = "Start"
RUNNING_LABEL = "Raining..."


class RainMainWindow(QMainWindow):
    def __init__(self, config_manager=None, scheduler_factory=None):
        super().__init__()
        self.setWindowTitle("RainBox")
        self.resize(900, 600)
        self.setStyleSheet("""
        QMainWindow { background-color: #1e1e1e; }
        QLabel { color: #eee; }
        QLineEdit {
            background-color: #2c2c2c;
            border: 1px solid #444;
            color: #eee;
            padding: 6px;
        }
        QPushButton {
            background-color: #2c2c2c;
            border: 1px solid #444;
            color: #eee;
            padding: 8px;
        }
        QPushButton:disabled { color: #777; }
    """)

        self.config_manager = config_manager or ConfigManager()
        self.render_config = self.config_manager.render_config()
        self.sim_config = self.config_manager.simulation_config()
        self.scheduler_factory = scheduler_factory or (
            lambda: QtFrameScheduler(self.sim_config.frame_interval_ms))
        # The page-level drawing surface. Worlds resize and paint it, the window only shows it.
        self.canvas = Canvas()

        # --- UI SETUP ---
        main_layout = QHBoxLayout()
        main_layout.setContentsMargins(0, 0, 0, 0)
        main_layout.setSpacing(0)

        sidebar = QWidget()
        sidebar.setFixedWidth(260)
        side_layout = QVBoxLayout(sidebar)
        side_layout.setContentsMargins(20, 30, 20, 30)

        self.landscape_edit = QLineEdit(self.config_manager.default_landscape)
        self.landscape_edit.setPlaceholderText("e.g. 1 3 1 0 2")
        self.rain_edit = QLineEdit(str(self.config_manager.default_rain_hours))

        self.start_btn = QPushButton(START_LABEL)
        self.start_btn.clicked.connect(self.simulate_world)

        side_layout.addWidget(QLabel("Landscape (block heights)"))
        side_layout.addWidget(self.landscape_edit)
        side_layout.addWidget(QLabel("Hours of rain"))
        side_layout.addWidget(self.rain_edit)
        side_layout.addSpacing(20)
        side_layout.addWidget(self.start_btn)
        side_layout.addStretch()

        self.display_label = QLabel("Enter a landscape and press Start")
        self.display_label.setAlignment(Qt.AlignCenter)

        main_layout.addWidget(sidebar)
        main_layout.addWidget(self.display_label, 1)

        container = QWidget()
        container.setLayout(main_layout)
        self.setCentralWidget(container)

    @Slot()
    def simulate_world(self):
        try:
            landscape = parse_landscape(self.landscape_edit.text())
        except LandscapeParseError as e:
            logger.warning("%s", e)
            QMessageBox.warning(self, "RainBox", str(e))
            return

        rain_hours = parse_rain_hours(self.rain_edit.text())

        self.start_btn.setText(RUNNING_LABEL)
        self.start_btn.setEnabled(False)

        # Not stored: the pending frame callback keeps the world alive until it finishes
        world = World(
            landscape, rain_hours,
            canvas=self.canvas,
            renderer=Renderer(self.render_config),
            solver=make_solver(self.sim_config.solver_substep_hours),
            scheduler=self.scheduler_factory(),
            on_finished=self.finish_simulation,
            on_frame=self.update_frame,
            config=self.sim_config,
        )
        world.start()

    @Slot()
    def finish_simulation(self):
        self.start_btn.setText(START_LABEL)
        self.start_btn.setEnabled(True)

    def update_frame(self, canvas):
        if canvas.width == 0 or canvas.height == 0:
            self.display_label.clear()
            return
        h, w, ch = canvas.pixels.shape
        qt_img = QImage(canvas.pixels.data.tobytes(), w, h, ch * w, QImage.Format_RGB888).rgbSwapped()
        self.display_label.setPixmap(QPixmap.fromImage(qt_img))
