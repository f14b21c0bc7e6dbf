"""
Main window for the OD&H player.

This module is the composition root: it builds the widgets, the
PlaybackController and the PlayerController that wires them together.
"""
import logging
import typing as t

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QHBoxLayout, QLabel, QPushButton,
    QGraphicsOpacityEffect,
)

from odh_player_app.config import WINDOW_TITLE
from odh_player_app.core.catalog import TrackCatalog
from odh_player_app.core.models import PlaybackSession, Track
from odh_player_app.core.playback import PlaybackController
from odh_player_app.ui.controllers.player_ctrl import PlayerController
from odh_player_app.ui.event_bus import BUS
from odh_player_app.ui.playlist_panel import PlaylistPanel
from odh_player_app.ui.transport_bar import TransportBar
from odh_player_app.ui.volume_control import VolumeControl
from odh_player_app.ui.widgets import artwork_pixmap

logger = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    """Main application window."""

    def __init__(self, catalog: TrackCatalog, initial_track_id: t.Optional[int] = None):
        """Initialize the main window.

        Args:
            catalog: Tracks to play
            initial_track_id: Track to start on, defaults to the first one
        """
        super().__init__()
        self.setWindowTitle(WINDOW_TITLE)
        self.setMinimumSize(420, 640)

        self.player = PlaybackController(catalog, initial_track_id=initial_track_id, parent=self)
        self._shown_track_id = None

        self._init_ui(catalog)

        self.ctrl = PlayerController(self.player, self.transport, self.volume, self.playlist)

        # Set up connections
        self.player.stateChanged.connect(self._render_header)
        BUS.playlistToggled.connect(self._toggle_playlist)
        BUS.playbackRejected.connect(self._on_playback_rejected)
        self._render_header(self.player.state)

    def _init_ui(self, catalog: TrackCatalog):
        """Initialize the user interface."""
        main_widget = QWidget()
        main_layout = QHBoxLayout(main_widget)

        # Player card
        self.card = QWidget()
        card_layout = QVBoxLayout(self.card)
        self.card_effect = QGraphicsOpacityEffect(self.card)
        self.card.setGraphicsEffect(self.card_effect)

        playlist_btn = QPushButton("☰")
        playlist_btn.setFixedWidth(40)
        playlist_btn.clicked.connect(lambda: BUS.playlistToggled.emit())
        card_layout.addWidget(playlist_btn, alignment=Qt.AlignRight)

        self.artwork = QLabel()
        self.artwork.setFixedSize(320, 320)
        self.artwork.setAlignment(Qt.AlignCenter)
        card_layout.addWidget(self.artwork, alignment=Qt.AlignHCenter)

        self.title_label = QLabel()
        self.title_label.setAlignment(Qt.AlignCenter)
        self.artist_label = QLabel()
        self.artist_label.setAlignment(Qt.AlignCenter)
        self.album_label = QLabel()
        self.album_label.setAlignment(Qt.AlignCenter)
        for label in (self.title_label, self.artist_label, self.album_label):
            card_layout.addWidget(label)

        self.transport = TransportBar()
        card_layout.addWidget(self.transport)

        self.volume = VolumeControl()
        card_layout.addWidget(self.volume, alignment=Qt.AlignHCenter)

        main_layout.addWidget(self.card, 1)

        # Playlist (hidden until toggled)
        self.playlist = PlaylistPanel(catalog)
        self.playlist.hide()
        main_layout.addWidget(self.playlist)

        self.setCentralWidget(main_widget)

    def _render_header(self, state: PlaybackSession):
        track = state.current_track
        if track.id != self._shown_track_id:
            self._show_track(track)
            self.statusBar().showMessage(f"Now Playing: {track.title}")
        self.card_effect.setOpacity(0.7 if state.is_transitioning else 1.0)

    def _show_track(self, track: Track):
        self._shown_track_id = track.id
        self.title_label.setText(track.title)
        self.artist_label.setText(track.artist)
        self.album_label.setText(track.album)
        pixmap = artwork_pixmap(track.artwork)
        if pixmap.isNull():
            self.artwork.setText(track.album)
        else:
            self.artwork.setPixmap(pixmap.scaled(self.artwork.size(), Qt.KeepAspectRatio,
                                                 Qt.SmoothTransformation))

    def _toggle_playlist(self):
        self.playlist.setVisible(not self.playlist.isVisible())

    def _on_playback_rejected(self, reason: str):
        self.statusBar().showMessage(f"Playback blocked: {reason}", 4000)

    def closeEvent(self, event):
        """Release the audio resource and any pointer grab before closing."""
        BUS.playlistToggled.disconnect(self._toggle_playlist)
        BUS.playbackRejected.disconnect(self._on_playback_rejected)
        self.volume.teardown()
        self.ctrl.shutdown()
        logger.info("Player window closed")
        super().closeEvent(event)
