# ui/workers/request_worker.py
from __future__ import annotations

import logging
from typing import Any, Callable

from PySide6.QtCore import QObject, QThread, Signal, Slot

from core.errors import CatalogError

logger = logging.getLogger(__name__)

Job = Callable[[], Any]
OnSuccess = Callable[[Any], None]
OnFailure = Callable[[str], None]

# a running QThread must not be destroyed; workers stay here until they finish,
# even when the dispatcher that started them is gone
_live_workers: set["RequestWorker"] = set()


class RequestWorker(QThread):
    succeeded = Signal(object)   # job result
    failed = Signal(str)         # message

    def __init__(self, job: Job, parent=None):
        super().__init__(parent)
        self.job = job
        self.finished.connect(self._forget)

    def run(self):
        try:
            result = self.job()
        except CatalogError as e:
            self.failed.emit(str(e))
            return
        except Exception as e:
            # nothing may escape run(); report it like any other failure
            logger.exception("Request job crashed")
            self.failed.emit(f"Unexpected error: {e}")
            return
        self.succeeded.emit(result)

    @Slot()
    def _forget(self):
        _live_workers.discard(self)
        self.deleteLater()


class _Delivery(QObject):
    """Lives on the UI thread so worker results are queued back onto it."""

    def __init__(self, on_success: OnSuccess, on_failure: OnFailure, parent=None):
        super().__init__(parent)
        self._on_success = on_success
        self._on_failure = on_failure

    @Slot(object)
    def deliver_ok(self, result):
        self._on_success(result)

    @Slot(str)
    def deliver_err(self, message: str):
        self._on_failure(message)


class ThreadDispatcher(QObject):
    """
    Runs each job on its own RequestWorker. Callbacks always run on the
    thread that owns the dispatcher. No cancellation: a started job always
    reports back.
    """

    def __init__(self, parent=None):
        super().__init__(parent)
        self._running: dict[RequestWorker, _Delivery] = {}

    def __call__(self, job: Job, on_success: OnSuccess, on_failure: OnFailure) -> None:
        worker = RequestWorker(job)
        delivery = _Delivery(on_success, on_failure, self)

        worker.succeeded.connect(delivery.deliver_ok)
        worker.failed.connect(delivery.deliver_err)
        worker.finished.connect(self._on_worker_finished)

        self._running[worker] = delivery
        _live_workers.add(worker)
        worker.start()

    @Slot()
    def _on_worker_finished(self):
        worker = self.sender()
        if worker is None:
            return
        delivery = self._running.pop(worker, None)
        if delivery is not None:
            delivery.deleteLater()

    def pending(self) -> int:
        return len(self._running)

    def wait_all(self):
        """Blocks until every started request has finished. Used on quit."""
        running = [w for w in _live_workers if w.isRunning()]
        if running:
            logger.info("Waiting for %d outstanding request(s)", len(running))
        for worker in running:
            worker.wait()
