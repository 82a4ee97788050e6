# ui/widgets/upload_panel.py
from __future__ import annotations

from PySide6.QtWidgets import QWidget, QHBoxLayout, QPushButton, QLabel, QLineEdit, QFileDialog


class UploadPanel(QWidget):
    """File picker + tag field bound to an UploadController."""

    def __init__(self, controller, parent=None):
        super().__init__(parent)
        self.controller = controller

        self.btn_choose = QPushButton("Choose file…")
        self.lbl_file = QLabel("No file selected")
        self.lbl_file.setObjectName("UploadFile")

        self.tag_edit = QLineEdit()
        self.tag_edit.setPlaceholderText("Enter tag for the song")

        self.btn_upload = QPushButton("Upload")

        row = QHBoxLayout(self)
        row.setContentsMargins(0, 0, 0, 0)
        row.addWidget(self.btn_choose)
        row.addWidget(self.lbl_file, 1)
        row.addWidget(self.tag_edit, 1)
        row.addWidget(self.btn_upload)

        self.btn_choose.clicked.connect(self._choose_file)
        self.tag_edit.textEdited.connect(self.controller.set_tag)
        self.tag_edit.returnPressed.connect(self.controller.submit)
        self.btn_upload.clicked.connect(self.controller.submit)

        self.controller.draftChanged.connect(self._on_draft_changed)
        self.controller.busyChanged.connect(self._on_busy)

    def _choose_file(self):
        # the filter is a hint only; nothing checks the type afterwards
        path, _ = QFileDialog.getOpenFileName(
            self, "Select song", "", "MP3 audio (*.mp3);;All files (*)"
        )
        if path:
            self.controller.select_file(path)

    def _on_draft_changed(self, draft):
        self.lbl_file.setText(draft.file.name if draft.file else "No file selected")
        if self.tag_edit.text() != draft.tag:
            self.tag_edit.setText(draft.tag)

    def _on_busy(self, busy: bool):
        self.btn_upload.setEnabled(not busy)
        self.btn_upload.setText("Uploading…" if busy else "Upload")
