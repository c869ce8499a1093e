"""Main window listing files that deviate from the target format."""

from __future__ import annotations

import logging
from pathlib import Path

from PySide6.QtCore import Qt, QThread
from PySide6.QtWidgets import (
    QAbstractItemView, QHeaderView, QLabel, QMainWindow, QTableView, QVBoxLayout, QWidget,
)

from wavconvert.config.settings import ScanConfig
from wavconvert.core.classifier import HeaderRecord
from wavconvert.ui.keybindings import KeybindRegistry, create_bound_action
from wavconvert.ui.models.inventory_table_model import InventoryTableModel
from wavconvert.ui.selection import Command, SelectionState
from wavconvert.workers.inventory_worker import InventoryWorker

logger = logging.getLogger(__name__)

WINDOW_TITLE = " ~ OKAY SYNTHESIZER WAVCONVERT ~ "


class InventoryWindow(QMainWindow):
    """Bordered list of inventory records with a single highlighted row."""

    def __init__(self, records: list[HeaderRecord], root: str | Path,
                 config: ScanConfig | None = None,
                 registry: KeybindRegistry | None = None) -> None:
        super().__init__()
        self._root = Path(root)
        self._config = config or ScanConfig()
        self._registry = registry or KeybindRegistry()
        self._selection = SelectionState(len(records))
        self._model = InventoryTableModel(self)
        self._model.set_records(records)
        self._thread: QThread | None = None
        self._worker: InventoryWorker | None = None

        self.setWindowTitle(WINDOW_TITLE.strip())
        self.resize(900, 600)

        self._setup_layout()
        self._setup_actions()

    @property
    def selection(self) -> SelectionState:
        return self._selection

    @property
    def model(self) -> InventoryTableModel:
        return self._model

    def _setup_layout(self) -> None:
        central = QWidget()
        layout = QVBoxLayout(central)

        title = QLabel(f"<b>{WINDOW_TITLE}</b>")
        title.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(title)

        self._table = QTableView()
        self._table.setModel(self._model)
        # Highlight comes from the model, keys go to the window actions.
        self._table.setFocusPolicy(Qt.FocusPolicy.NoFocus)
        self._table.setSelectionMode(QAbstractItemView.SelectionMode.NoSelection)
        self._table.verticalHeader().setVisible(False)
        header = self._table.horizontalHeader()
        header.setSectionResizeMode(0, QHeaderView.ResizeMode.Stretch)
        header.setSectionResizeMode(1, QHeaderView.ResizeMode.ResizeToContents)
        header.setSectionResizeMode(2, QHeaderView.ResizeMode.ResizeToContents)
        font = header.font()
        font.setBold(True)
        header.setFont(font)
        layout.addWidget(self._table)

        self._footer = QLabel(self._registry.footer_hint())
        self._footer.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(self._footer)

        self.setCentralWidget(central)

    def _setup_actions(self) -> None:
        bindings = (
            ("Quit", "app.exit", lambda: self.dispatch(Command.TERMINATE)),
            ("Next", "list.next", lambda: self.dispatch(Command.MOVE_DOWN)),
            ("Previous", "list.previous", lambda: self.dispatch(Command.MOVE_UP)),
            ("Rescan", "inventory.rescan", self.rescan),
        )
        for text, keybind_id, handler in bindings:
            action = create_bound_action(
                parent=self,
                text=text,
                keybind_id=keybind_id,
                registry=self._registry,
                handler=handler,
            )
            self.addAction(action)

    def dispatch(self, command: Command) -> bool:
        """Feed a navigation command to the selection; close on terminate."""
        running = self._selection.dispatch(command)
        self._model.set_highlighted_row(self._selection.index)
        if self._selection.count:
            self._table.scrollTo(self._model.index(self._selection.index, 0))
        if not running:
            self.close()
        return running

    # -- rescan --

    def rescan(self) -> None:
        if self._thread is not None:
            return
        logger.info("Rescanning %s", self._root)
        self.statusBar().showMessage(f"Scanning {self._root} ...")
        worker = InventoryWorker(self._root, self._config)
        thread = QThread(self)
        worker.moveToThread(thread)
        thread.started.connect(worker.run)
        worker.progress.connect(self._on_progress)
        worker.finished.connect(self._on_rescan_finished)
        worker.error.connect(self._on_rescan_error)
        for signal in (worker.finished, worker.error, worker.cancelled):
            signal.connect(thread.quit)
        thread.finished.connect(self._on_thread_finished)
        self._worker = worker
        self._thread = thread
        thread.start()

    def _on_progress(self, current: int, total: int, name: str) -> None:
        self.statusBar().showMessage(f"Scanning {current}/{total}: {name}")

    def _on_rescan_finished(self, records: list[HeaderRecord]) -> None:
        self._model.set_records(records)
        self._selection.reset(len(records))
        self._model.set_highlighted_row(self._selection.index)
        self.statusBar().showMessage(f"{len(records)} files need conversion", 5000)

    def _on_rescan_error(self, message: str) -> None:
        self.statusBar().showMessage(message)

    def _on_thread_finished(self) -> None:
        if self._thread is not None:
            self._thread.deleteLater()
        if self._worker is not None:
            self._worker.deleteLater()
        self._thread = None
        self._worker = None

    def closeEvent(self, event) -> None:
        if self._worker is not None:
            self._worker.cancel()
        if self._thread is not None:
            self._thread.quit()
            self._thread.wait()
        self._selection.terminate()
        super().closeEvent(event)
