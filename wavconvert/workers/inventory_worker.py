"""Worker that rebuilds the inventory off the UI thread."""

from __future__ import annotations

import logging
from pathlib import Path
from threading import Event
from time import monotonic

from PySide6.QtCore import QObject, Signal

from wavconvert.config.settings import ScanConfig
from wavconvert.core.classifier import HeaderRecord
from wavconvert.core.inventory import iter_classified, select_non_conforming
from wavconvert.errors import WavConvertError, format_error_for_user

logger = logging.getLogger(__name__)


class InventoryWorker(QObject):
    """Runs the inventory pipeline in a background thread.

    Usage:
        worker = InventoryWorker(root, config)
        thread = QThread()
        worker.moveToThread(thread)
        thread.started.connect(worker.run)
        worker.finished.connect(thread.quit)
        thread.finished.connect(thread.deleteLater)
        thread.start()

    Files are still classified one after another; a cancel request is
    checked between files.
    """

    started = Signal()
    progress = Signal(int, int, str)    # current, total, file name
    finished = Signal(object)           # list[HeaderRecord]
    error = Signal(str)                 # user-facing message
    cancelled = Signal()

    def __init__(self, root: str | Path, config: ScanConfig | None = None,
                 parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._root = Path(root)
        self._config = config or ScanConfig()
        self._cancel_event = Event()

    def cancel(self) -> None:
        self._cancel_event.set()

    @property
    def _is_cancelled(self) -> bool:
        return self._cancel_event.is_set()

    def run(self) -> None:
        self.started.emit()
        records: list[HeaderRecord] = []
        last_emit = 0.0
        try:
            for position, total, record in iter_classified(self._root, self._config):
                if self._is_cancelled:
                    logger.info("Rescan of %s cancelled at %d/%d", self._root, position, total)
                    self.cancelled.emit()
                    return
                records.append(record)

                # Throttle progress events to avoid flooding the UI event queue.
                now = monotonic()
                if position == 1 or position == total or (now - last_emit) >= 0.05:
                    self.progress.emit(position, total, record.path.name)
                    last_emit = now
        except WavConvertError as e:
            logger.error("Rescan failed: %s", e)
            self.error.emit(format_error_for_user(e))
            return
        self.finished.emit(select_non_conforming(records, self._config))
