"""
Data model for the OD&H player.

Track is an immutable pydantic model loaded from the catalog source;
PlaybackSession and HoverPreview are plain dataclasses owned by the
controller and the progress bar respectively.
"""
import math
from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict


class Track(BaseModel):
    """Single catalog entry.

    Attributes:
        id: Unique track identifier
        title: Display title
        artist: Artist name
        album: Album name
        audio_src: Locator of the audio source (path or URL)
        artwork: Locator of the artwork image
        duration: Display duration such as "3:15", independent of the
            duration measured by the audio backend
    """
    id: int
    title: str
    artist: str
    album: str
    audio_src: str
    artwork: str = ""
    duration: str = "0:00"
    model_config = ConfigDict(
        extra='ignore',  # tolerate unknown keys at parse-time
        frozen=True,     # catalog entries never change after load
    )


@dataclass
class PlaybackSession:
    """Mutable playback state, written only by PlaybackController.

    Observers receive copies of this object through the controller's
    ``stateChanged`` signal.
    """
    current_track: Track
    is_playing: bool = False
    current_position: float = 0.0
    total_duration: float = math.nan  # NaN until metadata resolves
    volume: int = 75
    is_muted: bool = False
    is_shuffled: bool = False
    is_repeated: bool = False
    is_transitioning: bool = False

    @property
    def effective_volume(self) -> float:
        """Output level sent to the audio resource (0.0-1.0)."""
        return 0.0 if self.is_muted else self.volume / 100

    @property
    def has_duration(self) -> bool:
        return not math.isnan(self.total_duration)


@dataclass(frozen=True)
class HoverPreview:
    """Hover state of the progress bar."""
    active: bool = False
    timestamp: float = 0.0       # seconds
    offset_percent: float = 0.0  # 0-100, horizontal offset of the tooltip
