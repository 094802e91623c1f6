"""
Full-window overlays: synthesis progress and drag-and-drop hint.
"""
from PySide6.QtWidgets import QFrame, QLabel, QVBoxLayout, QWidget
from PySide6.QtCore import Qt


class ProcessingOverlay(QFrame):
    """Lists the stage labels of the running synthesis, one per line."""

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setObjectName("processingOverlay")
        self.setAttribute(Qt.WA_StyledBackground, True)

        layout = QVBoxLayout(self)
        layout.setAlignment(Qt.AlignCenter)

        self.log_box = QFrame()
        self.log_box.setObjectName("logBox")
        self.log_box.setFixedWidth(450)
        self.log_layout = QVBoxLayout(self.log_box)
        self.log_layout.setAlignment(Qt.AlignTop)

        self.lbl_cursor = QLabel("_")
        self.lbl_cursor.setObjectName("logCursor")
        self.log_layout.addWidget(self.lbl_cursor)

        lbl_title = QLabel("SYNTHESIZING")
        lbl_title.setObjectName("overlayTitle")
        lbl_title.setAlignment(Qt.AlignCenter)

        lbl_subtitle = QLabel("NEURAL GRID TOPOLOGY EXPANSION")
        lbl_subtitle.setObjectName("overlaySubtitle")
        lbl_subtitle.setAlignment(Qt.AlignCenter)

        layout.addWidget(self.log_box, alignment=Qt.AlignHCenter)
        layout.addSpacing(24)
        layout.addWidget(lbl_title)
        layout.addWidget(lbl_subtitle)

        self._lines: list[QLabel] = []
        self.hide()

    @staticmethod
    def format_line(index: int, label: str) -> str:
        # Stage 1 shows as 10%, stage 7 as 70%
        return f"{index + 1}0%   > {label}"

    def append_stage(self, index: int, label: str) -> None:
        line = QLabel(self.format_line(index, label))
        line.setObjectName("logLine")
        # Keep the blinking cursor as the last row
        self.log_layout.insertWidget(self.log_layout.count() - 1, line)
        self._lines.append(line)

    def clear(self) -> None:
        for line in self._lines:
            self.log_layout.removeWidget(line)
            line.deleteLater()
        self._lines.clear()

    def lines(self) -> list[str]:
        return [line.text() for line in self._lines]


class DropOverlay(QLabel):
    """Shown while a file is dragged over the window."""

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__("RELEASE TO UPLOAD", parent)
        self.setObjectName("dropOverlay")
        self.setAlignment(Qt.AlignCenter)
        # Let drag events reach the main window underneath
        self.setAttribute(Qt.WA_TransparentForMouseEvents, True)
        self.hide()
