"""
TransportBar widget for playback controls.

This module defines a widget with shuffle/previous/play/next/repeat buttons
and a progress bar with elapsed and total time labels.
"""
from PySide6.QtCore import Qt, Signal
from PySide6.QtWidgets import QWidget, QHBoxLayout, QVBoxLayout, QPushButton, QLabel

from odh_player_app.core.formatting import format_time
from odh_player_app.core.models import PlaybackSession
from .widgets import ProgressBar


class TransportBar(QWidget):
    """Playback transport controls widget.

    Only reflects state and reports clicks; the PlaybackController decides
    what a click means.

    Signals:
        playToggled: Emitted when the play/pause button is clicked
        previousClicked: Emitted when the previous button is clicked
        nextClicked: Emitted when the next button is clicked
        shuffleClicked: Emitted when the shuffle button is clicked
        repeatClicked: Emitted when the repeat button is clicked
        seek: Emitted with a position in seconds while the bar is dragged
    """
    playToggled = Signal()
    previousClicked = Signal()
    nextClicked = Signal()
    shuffleClicked = Signal()
    repeatClicked = Signal()
    seek = Signal(float)  # seconds

    def __init__(self, parent=None):
        """Initialize the TransportBar widget.

        Args:
            parent: Optional parent widget
        """
        super().__init__(parent)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)

        # Progress bar with time labels
        self.progress = ProgressBar()
        self.progress.handler.valueChanged.connect(self.seek.emit)
        layout.addWidget(self.progress)

        times = QHBoxLayout()
        self.elapsed_label = QLabel("0:00")
        self.total_label = QLabel("0:00")
        times.addWidget(self.elapsed_label)
        times.addStretch(1)
        times.addWidget(self.total_label)
        layout.addLayout(times)

        # Buttons
        buttons = QHBoxLayout()
        buttons.addStretch(1)
        self.shuffle_btn = self._button("⤮", "Shuffle", self.shuffleClicked, checkable=True)
        self.prev_btn = self._button("⏮", "Previous", self.previousClicked)
        self.play_btn = self._button("▶", "Play", self.playToggled)
        self.next_btn = self._button("⏭", "Next", self.nextClicked)
        self.repeat_btn = self._button("⟲", "Repeat", self.repeatClicked, checkable=True)
        for btn in (self.shuffle_btn, self.prev_btn, self.play_btn, self.next_btn, self.repeat_btn):
            buttons.addWidget(btn)
        buttons.addStretch(1)
        layout.addLayout(buttons)

    def _button(self, text, tooltip, signal, checkable=False):
        btn = QPushButton(text)
        btn.setFixedWidth(40)
        btn.setToolTip(tooltip)
        btn.setCheckable(checkable)
        btn.setFocusPolicy(Qt.NoFocus)
        btn.clicked.connect(lambda _checked=False: signal.emit())
        return btn

    def set_state(self, state: PlaybackSession):
        """Render a playback state snapshot.

        Args:
            state: Snapshot from PlaybackController.stateChanged
        """
        self.play_btn.setText("⏸" if state.is_playing else "▶")
        self.play_btn.setToolTip("Pause" if state.is_playing else "Play")

        # checkable buttons follow the controller, not the click
        self.shuffle_btn.setChecked(state.is_shuffled)
        self.repeat_btn.setChecked(state.is_repeated)

        self.progress.set_progress(state.current_position, state.total_duration)
        self.elapsed_label.setText(format_time(state.current_position))
        self.total_label.setText(format_time(state.total_duration))
