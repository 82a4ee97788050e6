# ui/models/song_table_model.py
from __future__ import annotations
from PySide6.QtCore import QAbstractTableModel, Qt, QModelIndex
from PySide6.QtGui import QFont
from core.models import Song

COLUMNS = ["Song", "Tag", ""]
ACTION_COLUMN = 2

class SongTableModel(QAbstractTableModel):
    def __init__(self, songs=(), with_actions: bool = True):
        super().__init__()
        self._songs: list[Song] = list(songs)
        self._with_actions = with_actions
        self._playing_id: str | None = None

    def set_songs(self, songs):
        self.beginResetModel()
        self._songs = list(songs)
        self.endResetModel()

    def set_playing(self, song_id: str | None):
        self._playing_id = song_id
        if self._songs:
            self.dataChanged.emit(self.index(0, 0), self.index(len(self._songs) - 1, 0))

    def rowCount(self, parent=QModelIndex()) -> int:
        return len(self._songs)

    def columnCount(self, parent=QModelIndex()) -> int:
        return len(COLUMNS) if self._with_actions else len(COLUMNS) - 1

    def headerData(self, section, orientation, role=Qt.DisplayRole):
        if role != Qt.DisplayRole or orientation != Qt.Horizontal:
            return None
        return COLUMNS[section]

    def data(self, index: QModelIndex, role=Qt.DisplayRole):
        if not index.isValid():
            return None
        song = self._songs[index.row()]
        col = index.column()

        if role == Qt.DisplayRole:
            if col == 0:
                return song.title
            if col == 1:
                return song.tag.label
            return ""
        if role == Qt.ToolTipRole and col == 0:
            return song.row_label()
        if role == Qt.FontRole and col == 0 and song.id == self._playing_id:
            f = QFont()
            f.setBold(True)
            return f
        if role == Qt.UserRole:
            return song
        return None

    def song_at(self, row: int) -> Song | None:
        if row < 0 or row >= len(self._songs):
            return None
        return self._songs[row]

    def row_for_song_id(self, song_id: str) -> int:
        for i, s in enumerate(self._songs):
            if s.id == song_id:
                return i
        return -1
