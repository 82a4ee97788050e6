from PySide6.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QHBoxLayout, QLabel, QLineEdit, QPushButton, QSplitter
)
from PySide6.QtCore import Qt
from PySide6.QtGui import QShortcut, QKeySequence

from ui.player_bar import PlayerBar
from ui.widgets.song_list_widget import SongListWidget
from ui.widgets.upload_panel import UploadPanel
from ui.widgets.node_banner import NodeBanner
from ui.widgets.toast import ToastManager


def _section(title: str) -> QLabel:
    lbl = QLabel(title)
    lbl.setObjectName("SectionTitle")
    return lbl


class MainWindow(QMainWindow):
    def __init__(self, app_state):
        super().__init__()
        self.setWindowTitle("Song Node")
        self.resize(960, 680)
        self.app_state = app_state
        catalog = app_state.catalog

        self.central_widget = QWidget()
        self.setCentralWidget(self.central_widget)
        self.layout = QVBoxLayout(self.central_widget)

        self.toasts = ToastManager(self)
        self.app_state.notification.connect(self._on_notify)
        self.app_state.status_changed.connect(lambda msg: self.statusBar().showMessage(msg, 5000))

        # --- Node id + search bar ---
        top_bar = QHBoxLayout()
        self.lbl_node = QLabel(f"ID: <b>{app_state.identity.node or ''}</b>")
        self.lbl_node.setObjectName("NodeId")
        top_bar.addWidget(self.lbl_node)

        self.search_box = QLineEdit()
        self.search_box.setPlaceholderText("Enter tag key")
        top_bar.addWidget(self.search_box, stretch=1)

        self.btn_search = QPushButton("Search")
        top_bar.addWidget(self.btn_search)
        self.layout.addLayout(top_bar)

        # --- Results + all songs ---
        splitter = QSplitter(Qt.Orientation.Horizontal)

        results = QWidget()
        results_layout = QVBoxLayout(results)
        results_layout.setContentsMargins(0, 0, 0, 0)
        results_layout.addWidget(_section("Results"))
        self.results = SongListWidget("No songs found for this tag.", playable=True)
        results_layout.addWidget(self.results)
        splitter.addWidget(results)

        catalog_pane = QWidget()
        catalog_layout = QVBoxLayout(catalog_pane)
        catalog_layout.setContentsMargins(0, 0, 0, 0)
        header = QHBoxLayout()
        header.addWidget(_section("All Songs"), 1)
        self.btn_fetch_all = QPushButton("Fetch All Songs")
        header.addWidget(self.btn_fetch_all)
        catalog_layout.addLayout(header)
        self.all_songs = SongListWidget("No songs.", playable=False)
        catalog_layout.addWidget(self.all_songs)
        splitter.addWidget(catalog_pane)

        splitter.setStretchFactor(0, 3)
        splitter.setStretchFactor(1, 2)
        self.layout.addWidget(splitter, 1)

        # --- Upload ---
        self.layout.addWidget(_section("Upload Song"))
        self.upload_panel = UploadPanel(app_state.upload)
        self.layout.addWidget(self.upload_panel)

        # --- Player ---
        self.player_bar = PlayerBar(app_state.player, self)
        self.layout.addWidget(self.player_bar)

        # --- Wiring ---
        self.search_box.textEdited.connect(catalog.set_tag_query)
        self.search_box.returnPressed.connect(self._search)
        self.btn_search.clicked.connect(self._search)
        self.btn_fetch_all.clicked.connect(catalog.fetch_all_songs)

        catalog.searchResultsReplaced.connect(self.results.set_songs)
        catalog.allSongsReplaced.connect(self.all_songs.set_songs)
        catalog.busyChanged.connect(self._on_busy)

        self.results.playSong.connect(app_state.playback.play_song)
        app_state.playback.nowPlayingChanged.connect(lambda np: self.results.set_now_playing(np.song_id))

        QShortcut(QKeySequence("Ctrl+F"), self, activated=self.search_box.setFocus)
        if app_state.player:
            QShortcut(QKeySequence("Ctrl+Space"), self, activated=app_state.player.toggle_play_pause)

        # --- Connectivity banner ---
        self.banner = None
        if not app_state.node_connected:
            self.banner = NodeBanner(self, app_state.config.node_url)
            self.banner.cover_host()

        self._apply_styles()
        self.show_queued_notifications()

    # ------------------ actions ------------------
    def _search(self):
        self.app_state.catalog.search()

    def _on_busy(self, busy: bool):
        if busy:
            self.statusBar().showMessage("Loading…")
        else:
            self.statusBar().clearMessage()

    # ------------------ notifications ------------------
    def _on_notify(self, n):
        if not n.message:
            return
        self.toasts.show_toast(n.message, notify_type=n.notify_type, timeout_ms=3000)

    def show_queued_notifications(self):
        for n in self.app_state.queued_notifications:
            self._on_notify(n)
        self.app_state.queued_notifications.clear()

    def resizeEvent(self, event):
        super().resizeEvent(event)
        if self.banner is not None:
            self.banner.cover_host()

    def _apply_styles(self):
        self.setStyleSheet(self.styleSheet() + """
            QLabel#SectionTitle {
                color: #e5e7eb;
                font-size: 13px;
                font-weight: 600;
                padding: 6px 0 2px 0;
            }
            QLabel#EmptyLabel {
                color: #9ca3af;
                padding: 12px;
            }
            QLabel#NodeId {
                color: #9ca3af;
                padding-right: 8px;
            }
            """)
