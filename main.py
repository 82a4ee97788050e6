import logging
import sys
from pathlib import Path

from PySide6.QtWidgets import QApplication

ROOT = Path(__file__).resolve().parent
SRC_DIR = ROOT / "src"

if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from core.catalog_client import CatalogClient
from core.config import ClientConfig
from core.errors import ConfigError
from core.state import AppState, Notify
from player.player import Player
from ui.main_window import MainWindow
from ui.workers.request_worker import ThreadDispatcher

logger = logging.getLogger("songnode")


def init_app_state(config: ClientConfig) -> AppState:
    app_state = AppState(config)

    try:
        player = Player()
    except Exception as e:
        logger.exception("Audio output unavailable")
        player = None
        app_state.queued_notifications.append(
            Notify(message=f"Failed to initialize audio player: {e}", notify_type="error")
        )

    dispatcher = ThreadDispatcher(app_state)
    app_state.wire(CatalogClient(config), player, dispatcher)

    if not config.identity.connected:
        logger.warning("No node identity (node=%r, process=%r)", config.identity.node, config.identity.process)
    return app_state


def main() -> int:
    try:
        config = ClientConfig.from_env()
    except ConfigError as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        return 2

    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.info("Catalog at %s (%s backend)", config.base_url, config.backend.name)

    qt_app = QApplication(sys.argv)

    app_state = init_app_state(config)
    main_window = MainWindow(app_state)
    main_window.show()
    app_state.catalog.activate()
    qt_app.aboutToQuit.connect(app_state.dispatch.wait_all)

    return qt_app.exec()


if __name__ == "__main__":
    raise SystemExit(main())
