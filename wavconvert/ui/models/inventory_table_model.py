"""QAbstractTableModel for the non-conforming file list."""

from __future__ import annotations

from typing import Any

from PySide6.QtCore import QAbstractTableModel, QModelIndex, Qt
from PySide6.QtGui import QColor

from wavconvert.core.classifier import HeaderRecord

COLUMNS = ["Path", "Sample Rate", "Bit Depth"]
HIGHLIGHT_COLOR = QColor(Qt.GlobalColor.darkGray)


class InventoryTableModel(QAbstractTableModel):
    """Table model for inventory records with one highlighted row."""

    def __init__(self, parent=None) -> None:
        super().__init__(parent)
        self._rows: list[HeaderRecord] = []
        self._highlighted = 0

    def set_records(self, records: list[HeaderRecord]) -> None:
        self.beginResetModel()
        self._rows = list(records)
        self._highlighted = 0
        self.endResetModel()

    def get_record(self, index: int) -> HeaderRecord | None:
        if 0 <= index < len(self._rows):
            return self._rows[index]
        return None

    @property
    def highlighted_row(self) -> int:
        return self._highlighted

    def set_highlighted_row(self, row: int) -> None:
        if row == self._highlighted:
            return
        previous = self._highlighted
        self._highlighted = row
        for changed in (previous, row):
            if 0 <= changed < len(self._rows):
                self.dataChanged.emit(
                    self.index(changed, 0), self.index(changed, len(COLUMNS) - 1),
                )

    # -- QAbstractTableModel overrides --

    def rowCount(self, parent: QModelIndex = QModelIndex()) -> int:
        if parent.isValid():
            return 0
        return len(self._rows)

    def columnCount(self, parent: QModelIndex = QModelIndex()) -> int:
        if parent.isValid():
            return 0
        return len(COLUMNS)

    def headerData(self, section: int, orientation: Qt.Orientation,
                   role: int = Qt.ItemDataRole.DisplayRole) -> Any:
        if orientation != Qt.Orientation.Horizontal or not 0 <= section < len(COLUMNS):
            return None
        if role == Qt.ItemDataRole.DisplayRole:
            return COLUMNS[section]
        return None

    def data(self, index: QModelIndex, role: int = Qt.ItemDataRole.DisplayRole) -> Any:
        if not index.isValid():
            return None

        row = index.row()
        record = self._rows[row]

        if role == Qt.ItemDataRole.BackgroundRole:
            return HIGHLIGHT_COLOR if row == self._highlighted else None
        if role == Qt.ItemDataRole.ToolTipRole and record.reason is not None:
            return record.reason.value
        if role != Qt.ItemDataRole.DisplayRole:
            return None

        col = index.column()
        if col == 0:
            return str(record.path)
        elif col == 1:
            return str(record.sample_rate)
        elif col == 2:
            return str(record.bit_depth)
        return None
