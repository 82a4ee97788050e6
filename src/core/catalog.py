# core/catalog.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable

from PySide6.QtCore import QObject, Signal

from core.config import DEFAULT_TAG, ResponseOrdering
from core.models import Song

logger = logging.getLogger(__name__)

SEARCH = "search"
ALL_SONGS = "all"


@dataclass
class _QuerySlot:
    issued: int = 0    # sequence number of the newest request sent
    resolved: int = 0  # sequence number of the newest request answered, ok or not


class CatalogQuery(QObject):
    """
    Owns the tag-search text and the two result lists.

    Both lists are only ever replaced wholesale by a successful response.
    Each list has its own request counter; with ResponseOrdering.REQUEST a
    response older than the newest answered request (success or failure) is
    dropped.
    """

    searchResultsReplaced = Signal(object)  # list[Song]
    allSongsReplaced = Signal(object)       # list[Song]
    searchFailed = Signal(str)
    allSongsFailed = Signal(str)
    tagQueryChanged = Signal(str)
    busyChanged = Signal(bool)

    def __init__(
        self,
        client,
        dispatch: Callable,
        default_tag: str = DEFAULT_TAG,
        ordering: ResponseOrdering = ResponseOrdering.REQUEST,
        parent=None,
    ):
        super().__init__(parent)
        self.client = client
        self._dispatch = dispatch
        self.default_tag = default_tag
        self.ordering = ordering

        self._tag_query = ""
        self._search_results: list[Song] = []
        self._all_songs: list[Song] = []

        self._slots = {SEARCH: _QuerySlot(), ALL_SONGS: _QuerySlot()}
        self._in_flight = 0
        self._activated = False

    # ----------------------------
    # State
    # ----------------------------

    @property
    def tag_query(self) -> str:
        return self._tag_query

    @property
    def search_results(self) -> list[Song]:
        return list(self._search_results)

    @property
    def all_songs(self) -> list[Song]:
        return list(self._all_songs)

    @property
    def busy(self) -> bool:
        return self._in_flight > 0

    def set_tag_query(self, text: str) -> None:
        text = text or ""
        if text != self._tag_query:
            self._tag_query = text
            self.tagQueryChanged.emit(text)

    # ----------------------------
    # Operations
    # ----------------------------

    def activate(self) -> None:
        """Initial best-effort load with the default tag. Runs once."""
        if self._activated:
            return
        self._activated = True
        tag = self.default_tag
        self._issue(SEARCH, lambda: self.client.songs_for_tag(tag), self._apply_search, self._initial_failed)

    def search(self, tag_key: str | None = None) -> None:
        tag = self._tag_query if tag_key is None else tag_key
        self._issue(SEARCH, lambda: self.client.songs_for_tag(tag), self._apply_search, self._search_failed)

    def fetch_all_songs(self) -> None:
        self._issue(ALL_SONGS, self.client.list_all_songs, self._apply_all, self._all_failed)

    # ----------------------------
    # Request bookkeeping
    # ----------------------------

    def _issue(self, slot_name: str, job, on_apply, on_fail) -> None:
        slot = self._slots[slot_name]
        slot.issued += 1
        seq = slot.issued
        self._set_in_flight(self._in_flight + 1)

        def ok(result):
            self._set_in_flight(self._in_flight - 1)
            if self._is_stale(slot, seq):
                logger.debug("Dropping stale %s response #%d (resolved #%d)", slot_name, seq, slot.resolved)
                return
            slot.resolved = max(slot.resolved, seq)
            on_apply(result)

        def err(message: str):
            self._set_in_flight(self._in_flight - 1)
            if self._is_stale(slot, seq):
                logger.debug("Ignoring failure of stale %s request #%d: %s", slot_name, seq, message)
                return
            slot.resolved = max(slot.resolved, seq)
            on_fail(message)

        self._dispatch(job, ok, err)

    def _is_stale(self, slot: _QuerySlot, seq: int) -> bool:
        if self.ordering is ResponseOrdering.ARRIVAL:
            return False
        return seq < slot.resolved

    def _set_in_flight(self, n: int) -> None:
        was_busy = self.busy
        self._in_flight = max(0, n)
        if self.busy != was_busy:
            self.busyChanged.emit(self.busy)

    # ----------------------------
    # Outcomes
    # ----------------------------

    def _apply_search(self, songs) -> None:
        self._search_results = list(songs or [])
        logger.info("Search results replaced (%d song(s))", len(self._search_results))
        self.searchResultsReplaced.emit(self.search_results)

    def _apply_all(self, songs) -> None:
        self._all_songs = list(songs or [])
        logger.info("Catalog listing replaced (%d song(s))", len(self._all_songs))
        self.allSongsReplaced.emit(self.all_songs)

    def _initial_failed(self, message: str) -> None:
        logger.warning("Initial load for tag %r failed: %s", self.default_tag, message)

    def _search_failed(self, message: str) -> None:
        logger.warning("Search failed: %s", message)
        self.searchFailed.emit(message)

    def _all_failed(self, message: str) -> None:
        logger.warning("Fetching all songs failed: %s", message)
        self.allSongsFailed.emit(message)
