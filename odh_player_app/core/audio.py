"""
AudioResource capability interface.

The controller talks to audio only through this interface so that the Qt
Multimedia backend (see ``qt_audio``) can be swapped for a test double.
Times are in seconds, volume is a 0.0-1.0 level.
"""
import typing as t
from pathlib import Path

from PySide6.QtCore import QObject, QUrl, Signal

from odh_player_app.config import MEDIA_DIR


class AudioResource(QObject):
    """Live handle bound to one track's audio source.

    Signals:
        positionChanged: Playback position in seconds
        durationResolved: Duration in seconds, once metadata is known
        completed: Playback reached the end of the source
        playRejected: A play request failed; carries a reason
    """
    positionChanged = Signal(float)
    durationResolved = Signal(float)
    completed = Signal()
    playRejected = Signal(str)

    def __init__(self, source: str, parent=None):
        super().__init__(parent)
        self.source = source

    def play(self) -> None:
        """Request playback.

        Completion is asynchronous: a failure either raises
        ``PlaybackRejected`` right away or arrives later on ``playRejected``.
        """
        raise NotImplementedError

    def pause(self) -> None:
        raise NotImplementedError

    @property
    def current_time(self) -> float:
        raise NotImplementedError

    @current_time.setter
    def current_time(self, seconds: float) -> None:
        raise NotImplementedError

    @property
    def volume(self) -> float:
        raise NotImplementedError

    @volume.setter
    def volume(self, level: float) -> None:
        raise NotImplementedError

    @property
    def duration(self) -> float:
        """Duration in seconds, NaN while unresolved."""
        raise NotImplementedError

    def release(self) -> None:
        """Pause and free backend objects. The handle is unusable afterwards."""
        self.pause()


def resolve_locator(locator: str, media_dir: Path = MEDIA_DIR) -> QUrl:
    """Turn a catalog locator (audio or artwork) into a QUrl.

    URLs (anything with a scheme) pass through; relative paths are resolved
    against ``media_dir``.

    Args:
        locator: Path or URL from the catalog
        media_dir: Base directory for relative paths

    Returns:
        QUrl for QMediaPlayer.setSource or a pixmap load
    """
    if "://" in locator:
        return QUrl(locator)
    path = Path(locator)
    if not path.is_absolute():
        path = Path(media_dir) / path
    return QUrl.fromLocalFile(str(path))


# An audio engine opens a resource for a source locator (the "load" step).
AudioEngine = t.Callable[[str], AudioResource]
