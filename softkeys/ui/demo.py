"""DemoWindow — a form with the keyboard installed, used by the launcher."""

from __future__ import annotations

from PyQt5.QtCore import Qt
from PyQt5.QtWidgets import (
    QCheckBox,
    QDateEdit,
    QFormLayout,
    QLineEdit,
    QPlainTextEdit,
    QPushButton,
    QScrollArea,
    QSpinBox,
    QTextEdit,
    QTimeEdit,
    QVBoxLayout,
    QWidget,
)


class DemoWindow(QWidget):
    """Form with several editable field types and a button adding more at runtime."""

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setWindowTitle("softkeys")
        self.resize(800, 600)

        self.form_host = QWidget()
        self.form = QFormLayout(self.form_host)

        self.name_edit = QLineEdit()
        self.email_edit = QLineEdit()
        self.email_edit.setProperty("inputType", "email")
        self.password_edit = QLineEdit()
        self.password_edit.setEchoMode(QLineEdit.Password)
        self.age_spin = QSpinBox()
        self.date_edit = QDateEdit()
        self.time_edit = QTimeEdit()
        self.notes_edit = QPlainTextEdit()
        self.subscribe_box = QCheckBox("Subscribe")

        self.form.addRow("Name", self.name_edit)
        self.form.addRow("E-mail", self.email_edit)
        self.form.addRow("Password", self.password_edit)
        self.form.addRow("Age", self.age_spin)
        self.form.addRow("Date", self.date_edit)
        self.form.addRow("Time", self.time_edit)
        self.form.addRow("Notes", self.notes_edit)
        self.form.addRow("", self.subscribe_box)

        self.add_button = QPushButton("Add comment field")
        self.add_button.setFocusPolicy(Qt.NoFocus)
        self.add_button.clicked.connect(self.add_comment_field)

        scroll = QScrollArea()
        scroll.setWidgetResizable(True)
        scroll.setWidget(self.form_host)

        layout = QVBoxLayout(self)
        layout.addWidget(scroll)
        layout.addWidget(self.add_button)

        self.added_fields: list = []

    def add_comment_field(self) -> QTextEdit:
        field = QTextEdit()
        field.setFixedHeight(80)
        self.form.addRow(f"Comment {len(self.added_fields) + 1}", field)
        self.added_fields.append(field)
        return field
