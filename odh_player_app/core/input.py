"""
Drag-to-value input handling shared by the volume slider and progress bar.

A ContinuousInputHandler maps a pointer position inside a bounding rectangle
to a value in ``[minimum, maximum]``. The volume slider uses a
vertical-inverted instance (top = loudest), the progress bar a horizontal
one spanning the track duration.
"""
import enum
import logging
import math
import typing as t
from dataclasses import replace

from PySide6.QtCore import QObject, QPointF, QRectF, Signal

from odh_player_app.config import POPOVER_ARM_DELAY_MS
from .models import HoverPreview
from .scheduling import DeferredCall, QtDeferredCall

logger = logging.getLogger(__name__)


class Axis(enum.Enum):
    """Direction a handler reads the pointer along."""
    HORIZONTAL = "horizontal"                # left = minimum
    VERTICAL_INVERTED = "vertical-inverted"  # top = maximum


class PointerInputSource:
    """Global pointer-move / pointer-up delivery for the lifetime of one drag.

    ``grab`` starts forwarding pointer moves to ``handler.update_drag`` and
    the pointer release to ``handler.end_drag``; ``release`` stops it.
    """

    def grab(self, handler: "ContinuousInputHandler") -> None:
        raise NotImplementedError

    def release(self) -> None:
        raise NotImplementedError


class ContinuousInputHandler(QObject):
    """Idle/Dragging state machine turning pointer positions into values.

    Signals:
        valueChanged: New value on drag start and on every drag move
        dragStarted: Entered the Dragging state
        dragFinished: Returned to Idle
    """
    valueChanged = Signal(float)
    dragStarted = Signal()
    dragFinished = Signal()

    def __init__(
        self,
        axis: Axis = Axis.HORIZONTAL,
        minimum: float = 0.0,
        maximum: float = 1.0,
        integral: bool = False,
        bounds: t.Optional[QRectF] = None,
        pointer_source: t.Optional[PointerInputSource] = None,
        parent=None,
    ):
        """Initialize the handler.

        Args:
            axis: Axis to read the pointer along
            minimum: Value at the start of the axis
            maximum: Value at the end of the axis
            integral: Round values to whole numbers (volume percent)
            bounds: Region the pointer is projected onto
            pointer_source: Optional global pointer capture for drags
            parent: Optional parent QObject
        """
        super().__init__(parent)
        self.axis = axis
        self.minimum = minimum
        self.maximum = maximum
        self.integral = integral
        self.bounds = QRectF(bounds) if bounds is not None else QRectF()
        self.pointer_source = pointer_source
        self._dragging = False

    @property
    def is_dragging(self) -> bool:
        return self._dragging

    def set_bounds(self, bounds: QRectF) -> None:
        self.bounds = QRectF(bounds)

    def set_range(self, minimum: float, maximum: float) -> None:
        """Update the value range; a NaN maximum collapses the range to ``minimum``."""
        self.minimum = minimum
        self.maximum = minimum if math.isnan(maximum) else maximum

    # mapping ---------------------------------------------------------
    def fraction_at(self, pos: QPointF) -> float:
        """Project ``pos`` onto the bounds and return the clamped fraction (0-1)."""
        if self.axis is Axis.HORIZONTAL:
            offset, extent = pos.x() - self.bounds.left(), self.bounds.width()
        else:
            offset, extent = pos.y() - self.bounds.top(), self.bounds.height()

        if extent <= 0:
            fraction = 0.0
        else:
            fraction = max(0.0, min(1.0, offset / extent))

        if self.axis is Axis.VERTICAL_INVERTED:
            fraction = 1.0 - fraction
        return fraction

    def value_at(self, pos: QPointF) -> float:
        """Map ``pos`` to a value in ``[minimum, maximum]``."""
        value = self.minimum + self.fraction_at(pos) * (self.maximum - self.minimum)
        if self.integral:
            # half-up, so the middle of a 0-100 slider reads 50 and 50.5 reads 51
            return int(math.floor(value + 0.5))
        return value

    # drag state machine ----------------------------------------------
    def begin_drag(self, pos: QPointF) -> float:
        """Idle -> Dragging; emits and returns the value under ``pos``."""
        if not self._dragging:
            self._dragging = True
            if self.pointer_source is not None:
                try:
                    self.pointer_source.grab(self)
                except Exception:
                    self._dragging = False
                    raise
            self.dragStarted.emit()
        return self._emit_value(pos)

    def update_drag(self, pos: QPointF) -> t.Optional[float]:
        """Emit the value under ``pos``; ignored unless dragging."""
        if not self._dragging:
            return None
        return self._emit_value(pos)

    def end_drag(self) -> None:
        """Dragging -> Idle. Emits no further values."""
        if not self._dragging:
            return
        self._dragging = False
        self._release_pointer()
        self.dragFinished.emit()

    def close(self) -> None:
        """Teardown: drop any drag in progress and release the pointer."""
        if self._dragging:
            self._dragging = False
            self._release_pointer()

    def _release_pointer(self):
        if self.pointer_source is not None:
            self.pointer_source.release()

    def _emit_value(self, pos: QPointF) -> float:
        value = self.value_at(pos)
        self.valueChanged.emit(float(value))
        return value


class HoverTracker(QObject):
    """Hover preview for the progress bar.

    Uses the progress handler's mapping to show which timestamp the pointer
    is over. Read-only: it never touches playback state.

    Signals:
        previewChanged: Emitted with a HoverPreview on every change
    """
    previewChanged = Signal(object)

    def __init__(self, handler: ContinuousInputHandler, parent=None):
        super().__init__(parent)
        self.handler = handler
        self.preview = HoverPreview()

    def hover(self, pos: QPointF) -> HoverPreview:
        """Update the preview for a pointer move over the progress region."""
        if self.handler.is_dragging:
            return self.preview
        self.preview = HoverPreview(
            active=True,
            timestamp=self.handler.value_at(pos),
            offset_percent=self.handler.fraction_at(pos) * 100,
        )
        self.previewChanged.emit(self.preview)
        return self.preview

    def leave(self) -> HoverPreview:
        """Pointer left the progress region."""
        if self.preview.active:
            self.preview = replace(self.preview, active=False)
            self.previewChanged.emit(self.preview)
        return self.preview


class PopoverDismisser(QObject):
    """Closes a popover when the pointer is pressed outside of it.

    Presses are ignored while the paired handler is dragging and during a
    short arming delay after opening, so the opening gesture cannot close
    the popover again.

    Signals:
        openChanged: Emitted with the new open state
    """
    openChanged = Signal(bool)

    def __init__(
        self,
        handler: ContinuousInputHandler,
        arm_delay_ms: int = POPOVER_ARM_DELAY_MS,
        deferred: t.Optional[DeferredCall] = None,
        parent=None,
    ):
        super().__init__(parent)
        self.handler = handler
        self.arm_delay_ms = arm_delay_ms
        self.bounds = QRectF()
        self._deferred = deferred if deferred is not None else QtDeferredCall()
        self._open = False
        self._armed = False

    @property
    def is_open(self) -> bool:
        return self._open

    @property
    def is_armed(self) -> bool:
        return self._armed

    def set_bounds(self, bounds: QRectF) -> None:
        self.bounds = QRectF(bounds)

    def open(self) -> None:
        if self._open:
            return
        self._open = True
        self._armed = False
        self._deferred.start(self.arm_delay_ms, self._arm)
        self.openChanged.emit(True)

    def close(self) -> None:
        if not self._open:
            return
        self._deferred.cancel()
        self._open = False
        self._armed = False
        self.openChanged.emit(False)

    def toggle(self) -> None:
        if self._open:
            self.close()
        else:
            self.open()

    def pointer_pressed(self, pos: QPointF) -> bool:
        """Handle a pointer press anywhere on screen.

        Returns:
            True if the press closed the popover
        """
        if not (self._open and self._armed):
            return False
        if self.bounds.contains(pos) or self.handler.is_dragging:
            return False
        logger.debug("Outside press at (%.0f, %.0f), closing popover", pos.x(), pos.y())
        self.close()
        return True

    def _arm(self):
        self._armed = True
