# ui/widgets/node_banner.py
from __future__ import annotations

from PySide6.QtCore import Qt
from PySide6.QtWidgets import QFrame, QLabel, QVBoxLayout


class NodeBanner(QFrame):
    """
    Overlay shown when no node identity was given at startup. It covers the
    window but the catalog widgets underneath stay enabled.
    """

    def __init__(self, host, node_url: str):
        super().__init__(host)
        self.host = host
        self.setObjectName("NodeBanner")
        self.setAttribute(Qt.WidgetAttribute.WA_TransparentForMouseEvents, True)

        title = QLabel("Node not connected")
        title.setObjectName("NodeBannerTitle")
        title.setAlignment(Qt.AlignmentFlag.AlignCenter)

        hint = QLabel(f"You need to start a node at {node_url} before you can use this client.")
        hint.setWordWrap(True)
        hint.setAlignment(Qt.AlignmentFlag.AlignCenter)

        layout = QVBoxLayout(self)
        layout.addStretch(1)
        layout.addWidget(title)
        layout.addWidget(hint)
        layout.addStretch(1)

        self.setStyleSheet("""
        QFrame#NodeBanner { background: rgba(2, 6, 23, 0.7); }
        QLabel { color: #e5e7eb; font-size: 13px; }
        QLabel#NodeBannerTitle { color: #ef4444; font-size: 20px; font-weight: 600; }
        """)

    def cover_host(self):
        self.setGeometry(self.host.rect())
        self.raise_()
