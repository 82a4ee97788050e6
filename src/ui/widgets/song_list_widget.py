# ui/song_list_widget.py
from __future__ import annotations

from PySide6.QtCore import Signal
from PySide6.QtWidgets import QWidget, QVBoxLayout, QTableView, QLabel, QStackedLayout, QHeaderView

from ui.models.song_table_model import SongTableModel, ACTION_COLUMN
from ui.delegates.actions_delegate import PlayButtonDelegate


class SongListWidget(QWidget):
    """
    Table of songs with an empty-state message. With `playable` set, rows get
    a Play button and double-click plays.
    """
    playSong = Signal(object)  # Song

    def __init__(self, empty_text: str, playable: bool = True, parent=None):
        super().__init__(parent)
        self.playable = playable

        self.table = QTableView()
        self.model = SongTableModel([], with_actions=playable)
        self.table.setModel(self.model)

        self.table.setSelectionBehavior(QTableView.SelectionBehavior.SelectRows)
        self.table.setSelectionMode(QTableView.SelectionMode.SingleSelection)
        self.table.verticalHeader().setVisible(False)
        self.table.verticalHeader().setDefaultSectionSize(28)
        self.table.setShowGrid(False)
        self.table.setAlternatingRowColors(True)
        self.table.horizontalHeader().setSectionResizeMode(0, QHeaderView.ResizeMode.Stretch)
        self.table.setObjectName("SongTable")

        if playable:
            self.actions = PlayButtonDelegate(ACTION_COLUMN, self.table)
            self.actions.playClicked.connect(self.playSong.emit)
            self.table.setItemDelegateForColumn(ACTION_COLUMN, self.actions)
            self.table.setColumnWidth(ACTION_COLUMN, 90)
            self.table.doubleClicked.connect(self._on_double_click)

        self.empty_label = QLabel(empty_text)
        self.empty_label.setObjectName("EmptyLabel")

        self._stack = QStackedLayout()
        self._stack.addWidget(self.empty_label)
        self._stack.addWidget(self.table)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.addLayout(self._stack)

    def set_songs(self, songs: list) -> None:
        self.model.set_songs(songs)
        self._stack.setCurrentWidget(self.table if songs else self.empty_label)

    def set_now_playing(self, song_id: str | None) -> None:
        self.model.set_playing(song_id)
        row = self.model.row_for_song_id(song_id) if song_id else -1
        if row >= 0:
            self.table.selectRow(row)

    def _on_double_click(self, index):
        song = self.model.song_at(index.row())
        if song is not None:
            self.playSong.emit(song)
