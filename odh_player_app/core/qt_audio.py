"""
Qt Multimedia implementation of AudioResource.

Wraps QMediaPlayer + QAudioOutput and converts their millisecond signals to
seconds.
"""
import logging
import math
from pathlib import Path

from PySide6.QtCore import QUrl
from PySide6.QtMultimedia import QAudioOutput, QMediaPlayer

from odh_player_app.config import MEDIA_DIR
from .audio import AudioResource, resolve_locator
from .errors import PlaybackRejected

logger = logging.getLogger(__name__)

# statuses in which QMediaPlayer accepts setPosition
_SEEKABLE = (
    QMediaPlayer.MediaStatus.LoadedMedia,
    QMediaPlayer.MediaStatus.BufferingMedia,
    QMediaPlayer.MediaStatus.BufferedMedia,
    QMediaPlayer.MediaStatus.EndOfMedia,
)


class QtAudioResource(AudioResource):
    """AudioResource backed by QMediaPlayer."""

    def __init__(self, source: str, parent=None, media_dir: Path = MEDIA_DIR):
        """Create the player and load ``source``.

        Args:
            source: Locator of the audio source
            parent: Optional parent QObject
            media_dir: Base directory for relative locators
        """
        super().__init__(source, parent)
        self._url = resolve_locator(source, media_dir)
        self._play_pending = False
        self._duration = math.nan
        self._pending_seek = None

        # Create media player and audio output
        self.player = QMediaPlayer(self)
        self.output = QAudioOutput(self)
        self.player.setAudioOutput(self.output)

        # Convert ms signals to seconds
        self.player.positionChanged.connect(self._on_position_changed)
        self.player.durationChanged.connect(self._on_duration_changed)
        self.player.mediaStatusChanged.connect(self._on_media_status_changed)
        self.player.playbackStateChanged.connect(self._on_playback_state_changed)
        self.player.errorOccurred.connect(self._on_error)

        self.player.setSource(self._url)
        logger.debug("Loaded %s", self._url.toString())

    # transport -------------------------------------------------------
    def play(self) -> None:
        if self._url.isLocalFile() and not Path(self._url.toLocalFile()).exists():
            raise PlaybackRejected(f"Audio source not found: {self._url.toLocalFile()}")
        self._play_pending = True
        self.player.play()

    def pause(self) -> None:
        self._play_pending = False
        self.player.pause()

    @property
    def current_time(self) -> float:
        if self._pending_seek is not None:
            return self._pending_seek
        return self.player.position() / 1000.0

    @current_time.setter
    def current_time(self, seconds: float) -> None:
        if self.player.mediaStatus() not in _SEEKABLE:
            # applied once the media has loaded
            self._pending_seek = seconds
            return
        self._pending_seek = None
        self.player.setPosition(int(seconds * 1000))

    @property
    def volume(self) -> float:
        return self.output.volume()

    @volume.setter
    def volume(self, level: float) -> None:
        self.output.setVolume(level)

    @property
    def duration(self) -> float:
        return self._duration

    def release(self) -> None:
        self.pause()
        self.player.positionChanged.disconnect(self._on_position_changed)
        self.player.durationChanged.disconnect(self._on_duration_changed)
        self.player.mediaStatusChanged.disconnect(self._on_media_status_changed)
        self.player.playbackStateChanged.disconnect(self._on_playback_state_changed)
        self.player.errorOccurred.disconnect(self._on_error)
        self.player.setSource(QUrl())
        self.player.deleteLater()
        self.output.deleteLater()
        logger.debug("Released %s", self._url.toString())

    # QMediaPlayer slots ----------------------------------------------
    def _on_position_changed(self, position_ms):
        self.positionChanged.emit(position_ms / 1000.0)

    def _on_duration_changed(self, duration_ms):
        # QMediaPlayer reports 0 until metadata is loaded
        if duration_ms <= 0:
            return
        self._duration = duration_ms / 1000.0
        self.durationResolved.emit(self._duration)

    def _on_media_status_changed(self, status):
        if status in _SEEKABLE and self._pending_seek is not None:
            seconds, self._pending_seek = self._pending_seek, None
            logger.debug("Applying held seek to %.1fs on %s", seconds, self.source)
            self.player.setPosition(int(seconds * 1000))
        if status == QMediaPlayer.MediaStatus.EndOfMedia:
            self.completed.emit()

    def _on_playback_state_changed(self, state):
        if state == QMediaPlayer.PlaybackState.PlayingState:
            self._play_pending = False

    def _on_error(self, error, error_string):
        logger.error("Media error on %s: %s", self.source, error_string)
        if self._play_pending:
            self._play_pending = False
            self.playRejected.emit(error_string or str(error))


def qt_audio_engine(source: str) -> AudioResource:
    """Default AudioEngine: open ``source`` with Qt Multimedia."""
    return QtAudioResource(source)
