"""
Centralized event bus for the OD&H player.

This module provides a singleton SignalBus class that acts as a central
event hub between the presentation widgets and the player controller.
"""
import logging
from PySide6.QtCore import QObject, Signal

logger = logging.getLogger(__name__)


class SignalBus(QObject):
    """Centralized signal hub for the application.

    Provides typed signals for communication between components without
    requiring direct dependencies between them.
    """
    # ===== user-actions =====
    trackSelected = Signal(object)              # Track, from PlaylistPanel
    playlistToggled = Signal()                  # from the header button

    # ===== player feedback =====
    trackChanged = Signal(object)               # Track, after a switch
    playbackRejected = Signal(str)              # reason


# Create a singleton instance for import by other modules
BUS = SignalBus()

# Export only the BUS instance for cleaner imports
__all__ = ["BUS"]
