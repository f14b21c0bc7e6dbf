"""
Player controller for the OD&H player UI.

This module forwards widget gestures to the PlaybackController and renders
its state snapshots back onto the widgets.
"""
import logging
import typing as t

from odh_player_app.core.models import PlaybackSession, Track
from odh_player_app.core.playback import PlaybackController
from odh_player_app.ui.event_bus import BUS

if t.TYPE_CHECKING:
    from odh_player_app.ui.playlist_panel import PlaylistPanel
    from odh_player_app.ui.transport_bar import TransportBar
    from odh_player_app.ui.volume_control import VolumeControl

logger = logging.getLogger(__name__)


class PlayerController:
    """Glue between the presentation widgets and the PlaybackController.

    Widgets never touch playback state directly: their signals become
    controller operations, and ``stateChanged`` snapshots are rendered back.
    """

    def __init__(
        self,
        player: PlaybackController,
        transport: "TransportBar",
        volume: "VolumeControl",
        playlist: "PlaylistPanel",
    ):
        """Initialize the controller.

        Args:
            player: Playback controller owning the audio resource
            transport: Transport bar widget
            volume: Volume control widget
            playlist: Playlist panel widget
        """
        self.player = player
        self.transport = transport
        self.volume = volume
        self.playlist = playlist

        # Widget gestures -> transport operations
        transport.playToggled.connect(player.toggle_play)
        transport.nextClicked.connect(player.advance_next)
        transport.previousClicked.connect(player.advance_previous)
        transport.shuffleClicked.connect(player.toggle_shuffle)
        transport.repeatClicked.connect(player.toggle_repeat)
        transport.seek.connect(player.seek)
        volume.volumeChanged.connect(player.set_volume)
        volume.muteToggled.connect(player.toggle_mute)

        # Player feedback -> widgets and bus
        player.stateChanged.connect(self.render)
        player.trackChanged.connect(BUS.trackChanged.emit)
        player.playbackRejected.connect(BUS.playbackRejected.emit)

        # Connect to event bus
        BUS.trackSelected.connect(self.select_track)

        self.render(player.state)

    def select_track(self, track: Track) -> None:
        """Switch to a track picked in the playlist.

        Args:
            track: The selected track
        """
        logger.debug("select_track: id=%d", track.id)
        self.player.select_track(track)

    def render(self, state: PlaybackSession) -> None:
        """Push a state snapshot to the widgets.

        Args:
            state: Snapshot from PlaybackController.stateChanged
        """
        self.transport.set_state(state)
        self.volume.set_level(state.volume, state.is_muted)
        self.playlist.set_current(state.current_track)

    def shutdown(self) -> None:
        """Detach from the bus and release the audio resource."""
        BUS.trackSelected.disconnect(self.select_track)
        self.player.close()
