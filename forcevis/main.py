import logging
import os
import sys

from PyQt6.QtWidgets import QApplication, QMainWindow, QFileDialog, QMessageBox, QVBoxLayout, QWidget, QLabel
from PyQt6.QtGui import QAction, QPalette, QColor
from PyQt6.QtCore import Qt

from .exceptions import ForceVisError
from .graph_engine import GraphEngine
from .graph_loader import load_tgf, save_tgf
from .interaction import ProgramState
from .samples import load_sample, sample_names
from .ui.graph_widget import GraphWidget
from .ui.preferences import PreferencesDialog

logger = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    def __init__(self, graph):
        super().__init__()
        self.setWindowTitle("ForceVis - Force-Directed Graph Editor")
        self.resize(900, 900)

        # State
        self.current_theme = "Dark"
        self.current_sample = sample_names()[0]
        self.engine = GraphEngine()

        # Setup UI
        self.init_ui(graph)
        self.setup_theme(self.current_theme)

    def init_ui(self, graph):
        self.central_widget = QWidget()
        self.setCentralWidget(self.central_widget)

        self.main_layout = QVBoxLayout(self.central_widget)
        self.main_layout.setContentsMargins(0, 0, 0, 0)
        self.main_layout.setSpacing(0)

        # Info Bar
        self.info_label = QLabel()
        self.main_layout.addWidget(self.info_label)

        self.graph_widget = GraphWidget(ProgramState(graph), self.engine)
        self.graph_widget.modeChanged.connect(self.on_mode_changed)
        self.main_layout.addWidget(self.graph_widget)
        self.show_graph_info("Loaded")

        self.create_menu()

    def create_menu(self):
        menu = self.menuBar()
        menu.clear()

        file_menu = menu.addMenu("&File")

        open_action = QAction("Open TGF...", self)
        open_action.setShortcut("Ctrl+O")
        open_action.triggered.connect(self.open_file_dialog)
        file_menu.addAction(open_action)

        save_action = QAction("Save TGF...", self)
        save_action.setShortcut("Ctrl+S")
        save_action.triggered.connect(self.save_file_dialog)
        file_menu.addAction(save_action)

        samples_menu = file_menu.addMenu("Samples")
        for name in sample_names():
            action = QAction(name, self)
            action.triggered.connect(lambda checked=False, n=name: self.open_sample(n))
            samples_menu.addAction(action)

        exit_action = QAction("Exit", self)
        exit_action.triggered.connect(self.close)
        file_menu.addAction(exit_action)

        edit_menu = menu.addMenu("&Edit")
        pref_action = QAction("Preferences...", self)
        pref_action.triggered.connect(self.open_preferences)
        edit_menu.addAction(pref_action)

        view_menu = menu.addMenu("&View")
        reset_action = QAction("Reload sample", self)
        reset_action.triggered.connect(lambda: self.open_sample(None))
        view_menu.addAction(reset_action)

    def show_graph_info(self, prefix):
        graph = self.graph_widget.state.graph
        self.info_label.setText(f"{prefix}: {len(graph.nodes)} nodes, {len(graph.edges)} edges")

    def on_mode_changed(self, mode):
        self.statusBar().showMessage(mode)

    def open_preferences(self):
        dlg = PreferencesDialog(self, self.engine.settings, self.current_theme)
        dlg.settings_applied.connect(self.apply_preferences)
        dlg.exec()

    def apply_preferences(self, settings, theme):
        self.engine = GraphEngine(settings)
        self.graph_widget.set_engine(self.engine)
        logger.info("Physics settings updated: repulsion=%s spring=%s length=%s",
                    settings.repulsion, settings.spring, settings.rest_length)

        if theme != self.current_theme:
            self.setup_theme(theme)
            self.current_theme = theme

    def setup_theme(self, theme_name):
        app = QApplication.instance()
        app.setStyle("Fusion")

        palette = QPalette()
        if theme_name == "Dark":
            palette.setColor(QPalette.ColorRole.Window, QColor(53, 53, 53))
            palette.setColor(QPalette.ColorRole.WindowText, Qt.GlobalColor.white)
            palette.setColor(QPalette.ColorRole.Base, QColor(25, 25, 25))
            palette.setColor(QPalette.ColorRole.Text, Qt.GlobalColor.white)
            palette.setColor(QPalette.ColorRole.Button, QColor(53, 53, 53))
            palette.setColor(QPalette.ColorRole.ButtonText, Qt.GlobalColor.white)
            palette.setColor(QPalette.ColorRole.Highlight, QColor(42, 130, 218))
            palette.setColor(QPalette.ColorRole.HighlightedText, Qt.GlobalColor.black)
            self.graph_widget.bg_color = QColor("#121212")
            self.graph_widget.node_text_color = QColor("#ffffff")
        else:
            palette.setColor(QPalette.ColorRole.Window, QColor(240, 240, 240))
            palette.setColor(QPalette.ColorRole.WindowText, Qt.GlobalColor.black)
            palette.setColor(QPalette.ColorRole.Base, Qt.GlobalColor.white)
            palette.setColor(QPalette.ColorRole.Text, Qt.GlobalColor.black)
            palette.setColor(QPalette.ColorRole.Button, QColor(240, 240, 240))
            palette.setColor(QPalette.ColorRole.ButtonText, Qt.GlobalColor.black)
            palette.setColor(QPalette.ColorRole.Highlight, QColor(76, 163, 224))
            palette.setColor(QPalette.ColorRole.HighlightedText, Qt.GlobalColor.white)
            self.graph_widget.bg_color = QColor("#fafafa")
            self.graph_widget.node_text_color = QColor("#222222")

        app.setPalette(palette)

        # Info Label Style Update
        bg = "#252526" if theme_name == "Dark" else "#e0e0e0"
        fg = "#ccc" if theme_name == "Dark" else "#333"
        bd = "#3e3e3e" if theme_name == "Dark" else "#ccc"
        self.info_label.setStyleSheet(f"padding: 5px; background-color: {bg}; color: {fg}; border-bottom: 1px solid {bd};")
        self.graph_widget.update()

    def open_sample(self, name):
        if name is None:
            name = self.current_sample
        self.current_sample = name
        self.graph_widget.set_state(ProgramState(load_sample(name)))
        self.show_graph_info(f"Sample '{name}'")

    def open_file_dialog(self):
        fname, _ = QFileDialog.getOpenFileName(self, "Open TGF", "", "Trivial Graph Format (*.tgf);;All Files (*)")
        if fname:
            self.load_file(fname)

    def save_file_dialog(self):
        fname, _ = QFileDialog.getSaveFileName(self, "Save TGF", "", "Trivial Graph Format (*.tgf)")
        if fname:
            try:
                save_tgf(self.graph_widget.state.graph, fname)
            except OSError as e:
                QMessageBox.critical(self, "Error", f"Could not save graph:\n{e}")

    def load_file(self, path):
        try:
            graph = load_tgf(path)
        except (ForceVisError, OSError) as e:
            logger.error(f"Failed to load {path}: {e}")
            QMessageBox.critical(self, "Error", f"Could not load graph:\n{e}")
            return
        self.graph_widget.set_state(ProgramState(graph))
        self.show_graph_info(os.path.basename(path))


def create_window(argv):
    """Main window on the default sample, then the TGF file named in argv if any."""
    window = MainWindow(load_sample(sample_names()[0]))
    if len(argv) > 1:
        window.load_file(argv[1])
    return window


def main(argv=None):
    logging.basicConfig(level=logging.INFO)
    argv = sys.argv if argv is None else argv

    app = QApplication.instance() or QApplication(argv)
    window = create_window(argv)
    window.show()
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
