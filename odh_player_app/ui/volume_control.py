"""
Volume button with a pop-up vertical slider.

Left click opens/closes the slider, right click toggles mute. The popover
closes on any press outside of it unless a volume drag is in progress.
"""
import logging

from PySide6.QtCore import QEvent, QPoint, QRect, QRectF, Qt, Signal
from PySide6.QtWidgets import QApplication, QFrame, QLabel, QPushButton, QVBoxLayout, QWidget

from odh_player_app.core.input import PopoverDismisser
from .widgets import VolumeSlider

logger = logging.getLogger(__name__)


class VolumeControl(QWidget):
    """Mute/volume control.

    Signals:
        volumeChanged: Emitted with a percent value while the slider is dragged
        muteToggled: Emitted when the button is right-clicked
    """
    volumeChanged = Signal(float)
    muteToggled = Signal()

    def __init__(self, parent=None):
        super().__init__(parent)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)

        self.button = QPushButton("🔊")
        self.button.setFixedWidth(40)
        self.button.setContextMenuPolicy(Qt.CustomContextMenu)
        self.button.clicked.connect(self._on_button_clicked)
        self.button.customContextMenuRequested.connect(lambda _pos: self.muteToggled.emit())
        layout.addWidget(self.button)

        # Popover
        self.popover = QFrame(self, Qt.ToolTip)
        pop_layout = QVBoxLayout(self.popover)
        self.slider = VolumeSlider()
        self.percent_label = QLabel("0%")
        self.percent_label.setAlignment(Qt.AlignCenter)
        pop_layout.addWidget(self.slider, alignment=Qt.AlignHCenter)
        pop_layout.addWidget(self.percent_label)
        self.popover.hide()

        self.slider.handler.valueChanged.connect(self.volumeChanged.emit)

        self.dismisser = PopoverDismisser(self.slider.handler, parent=self)
        self.dismisser.openChanged.connect(self._on_open_changed)

    def set_level(self, volume: int, muted: bool):
        """Render the current volume and mute state."""
        level = 0 if muted else volume
        self.slider.set_level(volume, muted)
        self.percent_label.setText(f"{level}%")
        if muted or volume == 0:
            self.button.setText("🔇")
        elif volume < 50:
            self.button.setText("🔉")
        else:
            self.button.setText("🔊")

    def _on_button_clicked(self):
        self.dismisser.toggle()

    def _on_open_changed(self, is_open: bool):
        app = QApplication.instance()
        if is_open:
            self.popover.adjustSize()
            anchor = self.button.mapToGlobal(QPoint(0, 0))
            self.popover.move(anchor.x() + (self.button.width() - self.popover.width()) // 2,
                              anchor.y() - self.popover.height() - 4)
            self.popover.show()
            self._update_dismiss_bounds()
            app.installEventFilter(self)
        else:
            self.slider.handler.close()
            self.popover.hide()
            app.removeEventFilter(self)

    def _update_dismiss_bounds(self):
        # button and popover both count as "inside"
        button_rect = QRectF(QRect(self.button.mapToGlobal(QPoint(0, 0)), self.button.size()))
        popover_rect = QRectF(self.popover.frameGeometry())
        self.dismisser.set_bounds(button_rect.united(popover_rect))

    def eventFilter(self, obj, event):
        if event.type() == QEvent.MouseButtonPress:
            self.dismisser.pointer_pressed(event.globalPosition())
        return super().eventFilter(obj, event)

    def teardown(self):
        """Close the popover and drop any volume drag in progress."""
        self.dismisser.close()
        self.slider.handler.close()
