# core/playback.py
from __future__ import annotations

import logging

from PySide6.QtCore import QObject, Signal, Slot

from core.models import NowPlaying, Song

logger = logging.getLogger(__name__)


class PlaybackSession(QObject):
    """
    Drives the audio sink. Subscribes to search-result replacements and
    starts the first song of every non-empty list, even over a track the
    user picked by hand. There is no end-of-track advance.
    """
    nowPlayingChanged = Signal(object)  # NowPlaying
    playbackFailed = Signal(str)

    def __init__(self, client, sink, parent=None):
        super().__init__(parent)
        self.client = client
        self.sink = sink

        if hasattr(self.sink, "errorOccurred"):
            self.sink.errorOccurred.connect(self._on_sink_error)

    def attach(self, catalog) -> None:
        catalog.searchResultsReplaced.connect(self._on_results_replaced)

    def play_song(self, song: Song) -> None:
        if self.sink is None:
            logger.warning("No audio output; cannot play %r", song.id)
            self.playbackFailed.emit("No audio output available")
            return
        try:
            url = self.client.stream_url(song)
        except ValueError as e:
            logger.warning("Cannot stream %r: %s", song.id, e)
            self.playbackFailed.emit(str(e))
            return

        meta = NowPlaying(song_id=song.id, title=song.title, tag=song.tag.label, url=url)
        self.sink.play_url(url, meta)
        self.nowPlayingChanged.emit(meta)

    @Slot(object)
    def _on_results_replaced(self, songs: list) -> None:
        if songs:
            self.play_song(songs[0])

    def _on_sink_error(self, message: str) -> None:
        self.playbackFailed.emit(message)
