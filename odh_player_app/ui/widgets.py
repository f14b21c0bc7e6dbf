"""
Drag-driven widgets: the progress bar and the vertical volume slider.

Both widgets only paint and forward pointer events; the mapping from pointer
to value lives in ContinuousInputHandler.
"""
import logging

from PySide6.QtCore import QEvent, QObject, QPointF, QRectF, Qt
from PySide6.QtGui import QColor, QPainter, QPixmap
from PySide6.QtWidgets import QWidget

from odh_player_app.config import MEDIA_DIR
from odh_player_app.core.audio import resolve_locator
from odh_player_app.core.formatting import format_time, progress_percent
from odh_player_app.core.input import (
    Axis, ContinuousInputHandler, HoverTracker, PointerInputSource,
)

logger = logging.getLogger(__name__)

GROOVE_COLOR = QColor(255, 255, 255, 40)
FILL_COLOR = QColor(140, 110, 255)
HOVER_COLOR = QColor(255, 255, 255, 60)


def artwork_pixmap(locator: str, media_dir=MEDIA_DIR) -> QPixmap:
    """Load a track's artwork, resolved like its audio source.

    Returns a null pixmap for an empty locator, a missing file or a remote
    URL (artwork is never fetched over the network).
    """
    if not locator:
        return QPixmap()
    url = resolve_locator(locator, media_dir)
    if not url.isLocalFile():
        logger.debug("Skipping remote artwork %s", url.toString())
        return QPixmap()
    return QPixmap(url.toLocalFile())


class WidgetPointerSource(QObject, PointerInputSource):
    """PointerInputSource that grabs the mouse for one widget.

    While grabbed, every mouse event goes to the widget wherever the pointer
    is; an event filter forwards moves to the handler (in widget
    coordinates) and ends the drag on release.
    """

    def __init__(self, widget: QWidget):
        super().__init__(widget)
        self.widget = widget
        self._handler = None

    def grab(self, handler: ContinuousInputHandler) -> None:
        if self._handler is not None:
            self.release()
        self._handler = handler
        self.widget.installEventFilter(self)
        self.widget.grabMouse()

    def release(self) -> None:
        if self._handler is None:
            return
        self._handler = None
        self.widget.removeEventFilter(self)
        self.widget.releaseMouse()

    def eventFilter(self, obj, event):
        handler = self._handler
        if handler is not None:
            if event.type() == QEvent.MouseMove:
                handler.update_drag(self.widget.mapFromGlobal(event.globalPosition()))
                return True
            if event.type() == QEvent.MouseButtonRelease:
                handler.end_drag()
                return True
        return super().eventFilter(obj, event)


class ProgressBar(QWidget):
    """Horizontal seek bar with hover preview.

    ``handler.valueChanged`` carries seek targets in seconds.
    """

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setMouseTracking(True)
        self.setMinimumHeight(28)

        self.position = 0.0
        self.duration = float("nan")

        self.handler = ContinuousInputHandler(
            axis=Axis.HORIZONTAL,
            minimum=0.0,
            maximum=0.0,
            pointer_source=WidgetPointerSource(self),
            parent=self,
        )
        self.hover = HoverTracker(self.handler, parent=self)
        self.hover.previewChanged.connect(lambda _preview: self.update())

    def set_progress(self, position: float, duration: float):
        """Update the bar from the playback state."""
        self.position = position
        self.duration = duration
        self.handler.set_range(0.0, duration)
        self.update()

    # events ----------------------------------------------------------
    def resizeEvent(self, event):
        self.handler.set_bounds(QRectF(self.rect()))
        super().resizeEvent(event)

    def mousePressEvent(self, event):
        if event.button() == Qt.LeftButton:
            self.hover.leave()
            self.handler.begin_drag(event.position())
            event.accept()
            return
        super().mousePressEvent(event)

    def mouseMoveEvent(self, event):
        if not self.handler.is_dragging:
            self.hover.hover(event.position())
        super().mouseMoveEvent(event)

    def leaveEvent(self, event):
        self.hover.leave()
        super().leaveEvent(event)

    def hideEvent(self, event):
        self.handler.close()
        super().hideEvent(event)

    def paintEvent(self, event):
        painter = QPainter(self)
        painter.setRenderHint(QPainter.Antialiasing)
        groove = QRectF(0, self.height() - 8, self.width(), 6)
        painter.setPen(Qt.NoPen)
        painter.setBrush(GROOVE_COLOR)
        painter.drawRoundedRect(groove, 3, 3)

        preview = self.hover.preview
        if preview.active:
            painter.setBrush(HOVER_COLOR)
            painter.drawRoundedRect(
                QRectF(groove.left(), groove.top(), groove.width() * preview.offset_percent / 100,
                       groove.height()), 3, 3)
            painter.setPen(Qt.white)
            x = self.width() * preview.offset_percent / 100
            painter.drawText(QRectF(x - 30, 0, 60, groove.top() - 2), Qt.AlignCenter,
                             format_time(preview.timestamp))
            painter.setPen(Qt.NoPen)

        painter.setBrush(FILL_COLOR)
        fill = groove.width() * progress_percent(self.position, self.duration) / 100
        painter.drawRoundedRect(QRectF(groove.left(), groove.top(), fill, groove.height()), 3, 3)
        painter.end()


class VolumeSlider(QWidget):
    """Vertical volume slider; top is 100%, bottom is 0%.

    ``handler.valueChanged`` carries whole percent values.
    """

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setFixedSize(24, 120)

        self.volume = 0
        self.muted = False

        self.handler = ContinuousInputHandler(
            axis=Axis.VERTICAL_INVERTED,
            minimum=0,
            maximum=100,
            integral=True,
            pointer_source=WidgetPointerSource(self),
            parent=self,
        )

    def set_level(self, volume: int, muted: bool):
        self.volume = volume
        self.muted = muted
        self.update()

    def resizeEvent(self, event):
        self.handler.set_bounds(QRectF(self.rect()))
        super().resizeEvent(event)

    def mousePressEvent(self, event):
        if event.button() == Qt.LeftButton:
            self.handler.begin_drag(event.position())
            event.accept()
            return
        super().mousePressEvent(event)

    def hideEvent(self, event):
        self.handler.close()
        super().hideEvent(event)

    def paintEvent(self, event):
        painter = QPainter(self)
        painter.setRenderHint(QPainter.Antialiasing)
        painter.setPen(Qt.NoPen)
        track = QRectF(self.width() / 2 - 3, 0, 6, self.height())
        painter.setBrush(GROOVE_COLOR)
        painter.drawRoundedRect(track, 3, 3)

        level = 0 if self.muted else self.volume
        filled = track.height() * level / 100
        painter.setBrush(FILL_COLOR)
        painter.drawRoundedRect(
            QRectF(track.left(), track.bottom() - filled, track.width(), filled), 3, 3)

        knob_y = track.bottom() - filled
        painter.setBrush(Qt.white)
        painter.drawEllipse(QPointF(track.center().x(), max(6.0, min(knob_y, track.bottom() - 6))), 6, 6)
        painter.end()
