"""
Exceptions raised by the player core.
"""


class PlayerError(Exception):
    """Base class for player errors."""


class PlaybackRejected(PlayerError):
    """The audio backend declined a play request (autoplay policy, bad source...).

    Recovered by the controller: playback reverts to paused.
    """


class TrackNotFound(PlayerError, LookupError):
    """A lookup referenced a track id that is not in the catalog."""

    def __init__(self, track_id: int):
        super().__init__(f"Track {track_id} is not in the catalog")
        self.track_id = track_id


class EmptyCatalogError(PlayerError, ValueError):
    """A catalog needs at least one track."""
