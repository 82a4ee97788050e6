from __future__ import annotations

from PySide6.QtCore import Qt, QTimer, QEasingCurve, QPoint, QPropertyAnimation
from PySide6.QtWidgets import QWidget, QFrame, QLabel, QHBoxLayout, QGraphicsOpacityEffect

_KIND_COLORS = {
    "success": ("#052e1a", "#16a34a"),
    "warning": ("#2a1a05", "#f59e0b"),
    "error": ("#2a0a0a", "#ef4444"),
    "info": ("#0b1222", "#38bdf8"),
}


class ToastWidget(QFrame):
    def __init__(self, message: str, kind: str, parent: QWidget):
        super().__init__(parent)
        bg, border = _KIND_COLORS.get((kind or "info").lower(), _KIND_COLORS["info"])

        self.setObjectName("Toast")
        self.setAttribute(Qt.WidgetAttribute.WA_StyledBackground, True)
        self.setStyleSheet(f"""
        QFrame#Toast {{ background: {bg}; border: 1px solid {border}; border-radius: 14px; }}
        QLabel {{ color: #e5e7eb; font-size: 12px; }}
        """)

        self.lbl = QLabel(message)
        self.lbl.setWordWrap(True)
        row = QHBoxLayout(self)
        row.setContentsMargins(12, 10, 12, 10)
        row.addWidget(self.lbl)

        self._opacity = QGraphicsOpacityEffect(self)
        self._opacity.setOpacity(0.0)
        self.setGraphicsEffect(self._opacity)
        self._anim: QPropertyAnimation | None = None

    def fade(self, start: float, end: float, on_done=None):
        self._anim = QPropertyAnimation(self._opacity, b"opacity", self)
        self._anim.setDuration(180)
        self._anim.setStartValue(start)
        self._anim.setEndValue(end)
        self._anim.setEasingCurve(QEasingCurve.Type.OutCubic)
        if on_done:
            self._anim.finished.connect(on_done)
        self._anim.start()


class ToastManager(QWidget):
    """
    Mouse-transparent overlay that stacks toasts top-right, newest first.
    """
    def __init__(self, host: QWidget, max_visible: int = 4):
        super().__init__(host)
        self.host = host
        self.setAttribute(Qt.WidgetAttribute.WA_TransparentForMouseEvents, True)
        self._toasts: list[ToastWidget] = []
        self._max_visible = max_visible
        self._margin = 14
        self._spacing = 10

    def show_toast(self, message: str, notify_type: str = "info", timeout_ms: int = 3000):
        self.setGeometry(self.host.rect())
        self.raise_()
        self.show()

        toast = ToastWidget(message, notify_type, parent=self)
        toast.setFixedWidth(min(420, max(260, self.width() // 2)))
        self._toasts.insert(0, toast)

        while len(self._toasts) > self._max_visible:
            self._remove(self._toasts[-1])

        self._layout()
        toast.show()
        toast.fade(0.0, 1.0)
        QTimer.singleShot(max(500, int(timeout_ms)), lambda: self._dismiss(toast))

    def _dismiss(self, toast: ToastWidget):
        if toast in self._toasts:
            toast.fade(1.0, 0.0, on_done=lambda: self._remove(toast))

    def _remove(self, toast: ToastWidget):
        if toast in self._toasts:
            self._toasts.remove(toast)
        toast.hide()
        toast.deleteLater()
        self._layout()

    def _layout(self):
        x_right = self.width() - self._margin
        y = self._margin
        for t in self._toasts:
            t.adjustSize()
            t.move(QPoint(x_right - t.width(), y))
            y += t.sizeHint().height() + self._spacing
