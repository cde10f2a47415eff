from dataclasses import replace

from PyQt6.QtWidgets import QDialog, QVBoxLayout, QHBoxLayout, QLabel, QComboBox, QPushButton, QDoubleSpinBox
from PyQt6.QtCore import pyqtSignal


class PreferencesDialog(QDialog):
    settings_applied = pyqtSignal(object, str) # PhysicsSettings, theme

    def __init__(self, parent=None, settings=None, current_theme="Dark"):
        super().__init__(parent)
        self.settings = settings
        self.setWindowTitle("Preferences")
        self.resize(320, 220)

        self.layout = QVBoxLayout(self)

        # Theme
        theme_layout = QHBoxLayout()
        theme_layout.addWidget(QLabel("Theme"))
        self.theme_combo = QComboBox()
        self.theme_combo.addItems(["Dark", "Light"])
        self.theme_combo.setCurrentIndex(0 if current_theme == "Dark" else 1)
        theme_layout.addWidget(self.theme_combo)
        self.layout.addLayout(theme_layout)

        # Physics
        self.repulsion_spin = self._add_spin("Repulsion", settings.repulsion, 0, 1e8, 10000)
        self.spring_spin = self._add_spin("Spring constant", settings.spring, 0, 1000, 5)
        self.length_spin = self._add_spin("Spring length", settings.rest_length, 1, 500, 5)

        # Buttons
        btn_layout = QHBoxLayout()
        self.btn_save = QPushButton("Save")
        self.btn_save.clicked.connect(self.on_save)
        self.btn_cancel = QPushButton("Cancel")
        self.btn_cancel.clicked.connect(self.close)

        btn_layout.addStretch()
        btn_layout.addWidget(self.btn_cancel)
        btn_layout.addWidget(self.btn_save)
        self.layout.addLayout(btn_layout)

        # Style
        self.setStyleSheet("""
            QDialog { background-color: #2d2d2d; color: white; }
            QLabel { color: white; }
            QComboBox, QDoubleSpinBox { background-color: #3e3e3e; color: white; padding: 5px; border: 1px solid #555; }
            QPushButton { background-color: #0d47a1; color: white; padding: 5px 15px; border: none; }
            QPushButton:hover { background-color: #1565c0; }
        """)

    def _add_spin(self, label, value, low, high, step):
        row = QHBoxLayout()
        row.addWidget(QLabel(label))
        spin = QDoubleSpinBox()
        spin.setRange(low, high)
        spin.setSingleStep(step)
        spin.setValue(value)
        row.addWidget(spin)
        self.layout.addLayout(row)
        return spin

    def on_save(self):
        new_settings = replace(
            self.settings,
            repulsion=self.repulsion_spin.value(),
            spring=self.spring_spin.value(),
            rest_length=self.length_spin.value(),
        )
        self.settings_applied.emit(new_settings, self.theme_combo.currentText())
        self.accept()
