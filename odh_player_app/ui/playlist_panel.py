"""
Playlist panel listing every catalog track.
"""
from PySide6.QtCore import Qt
from PySide6.QtWidgets import QListWidget, QListWidgetItem, QVBoxLayout, QWidget, QLabel

from odh_player_app.core.catalog import TrackCatalog
from odh_player_app.core.models import Track
from odh_player_app.ui.event_bus import BUS


class PlaylistPanel(QWidget):
    """Queue of catalog tracks; clicking one emits ``BUS.trackSelected``."""

    def __init__(self, catalog: TrackCatalog, parent=None):
        super().__init__(parent)
        self.catalog = catalog

        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.addWidget(QLabel("Up Next"))

        self.list = QListWidget()
        for track in catalog:
            item = QListWidgetItem(f"{track.title}  ·  {track.artist}\t{track.duration}")
            item.setData(Qt.UserRole, track.id)
            self.list.addItem(item)
        self.list.itemClicked.connect(self._on_item_clicked)
        layout.addWidget(self.list)

    def _on_item_clicked(self, item: QListWidgetItem):
        BUS.trackSelected.emit(self.catalog.get(item.data(Qt.UserRole)))

    def set_current(self, track: Track):
        """Highlight the current track."""
        row = self.catalog.index_of(track.id)
        self.list.blockSignals(True)
        self.list.setCurrentRow(row)
        self.list.blockSignals(False)
