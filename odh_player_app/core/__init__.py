"""
Core playback logic for the OD&H player.
"""
from .catalog import TrackCatalog, title_from_filename
from .errors import EmptyCatalogError, PlaybackRejected, PlayerError, TrackNotFound
from .input import Axis, ContinuousInputHandler, HoverTracker, PointerInputSource, PopoverDismisser
from .models import HoverPreview, PlaybackSession, Track
from .playback import PlaybackController

__all__ = [
    "Axis",
    "ContinuousInputHandler",
    "EmptyCatalogError",
    "HoverPreview",
    "HoverTracker",
    "PlaybackController",
    "PlaybackRejected",
    "PlaybackSession",
    "PlayerError",
    "PointerInputSource",
    "PopoverDismisser",
    "Track",
    "TrackCatalog",
    "TrackNotFound",
    "title_from_filename",
]
