# ui/actions_delegate.py
from __future__ import annotations
from PySide6.QtCore import Qt, QRect, Signal, QEvent
from PySide6.QtGui import QPainter
from PySide6.QtWidgets import QStyledItemDelegate, QStyleOptionButton, QApplication, QStyle

BTN_W, BTN_H = 70, 24

def _button_rect(rect: QRect) -> QRect:
    return QRect(rect.right() - BTN_W - 8, rect.center().y() - BTN_H // 2, BTN_W, BTN_H)

class PlayButtonDelegate(QStyledItemDelegate):
    playClicked = Signal(object)  # Song

    def __init__(self, column: int, parent=None):
        super().__init__(parent)
        self.column = column

    def paint(self, painter: QPainter, option, index):
        super().paint(painter, option, index)

        opt = QStyleOptionButton()
        opt.rect = _button_rect(option.rect)
        opt.text = "Play"
        opt.state = QStyle.State_Enabled
        QApplication.style().drawControl(QStyle.CE_PushButton, opt, painter)

    def editorEvent(self, event, model, option, index):
        if index.column() != self.column:
            return False
        if event.type() == QEvent.MouseButtonRelease and event.button() == Qt.LeftButton:
            song = index.data(Qt.UserRole)
            if song is None:
                return False
            if _button_rect(option.rect).contains(event.pos()):
                self.playClicked.emit(song)
                return True
        return False
