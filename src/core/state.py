from __future__ import annotations
from dataclasses import dataclass
from PySide6.QtCore import QObject, Signal, Slot

from core.catalog import CatalogQuery
from core.catalog_client import CatalogClient
from core.config import ClientConfig
from core.playback import PlaybackSession
from core.upload import UploadController

@dataclass(frozen=True)
class Notify:
    message: str
    notify_type: str = "info"   # info/success/warning/error

class AppState(QObject):
    notification = Signal(object)   # emits Notify
    status_changed = Signal(str)    # transient status-bar text

    def __init__(self, config: ClientConfig):
        super().__init__()
        self.config = config
        self.identity = config.identity
        self.client: CatalogClient | None = None
        self.catalog: CatalogQuery | None = None
        self.playback: PlaybackSession | None = None
        self.upload: UploadController | None = None
        self.player = None
        self.dispatch = None
        self.queued_notifications: list[Notify] = []

    @property
    def node_connected(self) -> bool:
        return self.identity.connected

    @Slot(str, str)
    def notify(self, message: str, notify_type: str = "info"):
        self.notification.emit(Notify(message=message, notify_type=notify_type))

    def wire(self, client: CatalogClient, sink, dispatch) -> None:
        """Builds the three components around one transport and one sink."""
        self.client = client
        self.player = sink
        self.dispatch = dispatch
        self.catalog = CatalogQuery(
            client, dispatch,
            default_tag=self.config.default_tag,
            ordering=self.config.ordering,
            parent=self,
        )
        self.playback = PlaybackSession(client, sink, parent=self)
        self.playback.attach(self.catalog)
        self.upload = UploadController(
            client, dispatch, self.notify,
            policy=self.config.upload,
            parent=self,
        )

        self.catalog.searchFailed.connect(lambda msg: self.status_changed.emit(f"Search failed: {msg}"))
        self.catalog.allSongsFailed.connect(lambda msg: self.status_changed.emit(f"Fetching all songs failed: {msg}"))
        self.playback.playbackFailed.connect(lambda msg: self.notify(f"Playback failed: {msg}", "error"))
