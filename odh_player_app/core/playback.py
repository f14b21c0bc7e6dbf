"""
PlaybackController: transport state machine for the player.

The controller owns exactly one AudioResource bound to the current track
and is the only writer of the PlaybackSession. Every mutating operation
updates the session and then emits ``stateChanged`` with a copy of it.
"""
import logging
import math
import typing as t
from dataclasses import replace

from PySide6.QtCore import QObject, Signal

from odh_player_app.config import DEFAULT_VOLUME, TRANSITION_DELAY_MS
from .audio import AudioEngine, AudioResource
from .catalog import TrackCatalog
from .errors import PlaybackRejected
from .models import PlaybackSession, Track
from .scheduling import DeferredCall, QtDeferredCall

logger = logging.getLogger(__name__)


def _clamp_volume(value: float) -> int:
    if math.isnan(value):
        return 0
    return max(0, min(100, int(math.floor(value + 0.5))))


class PlaybackController(QObject):
    """Transport controller over {Paused, Playing, Transitioning}.

    Signals:
        stateChanged: Emitted with a PlaybackSession snapshot after every change
        trackChanged: Emitted with the new Track once a switch completes
        playbackRejected: Emitted with a reason when a play request fails
    """
    stateChanged = Signal(object)
    trackChanged = Signal(object)
    playbackRejected = Signal(str)

    def __init__(
        self,
        catalog: TrackCatalog,
        engine: t.Optional[AudioEngine] = None,
        deferred: t.Optional[DeferredCall] = None,
        initial_track_id: t.Optional[int] = None,
        volume: float = DEFAULT_VOLUME,
        transition_delay_ms: int = TRANSITION_DELAY_MS,
        parent=None,
    ):
        """Initialize the controller and open the first track.

        Args:
            catalog: Tracks the player can navigate
            engine: Opens an AudioResource for a source locator; defaults to
                the Qt Multimedia backend
            deferred: Scheduler for the track-switch delay
            initial_track_id: Track to start on; defaults to the first one
            volume: Initial volume in percent
            transition_delay_ms: Delay between a switch request and the swap
            parent: Optional parent QObject

        Raises:
            TrackNotFound: If ``initial_track_id`` is not in the catalog
        """
        super().__init__(parent)
        if engine is None:
            from .qt_audio import qt_audio_engine
            engine = qt_audio_engine

        self.catalog = catalog
        self._engine = engine
        self._deferred = deferred if deferred is not None else QtDeferredCall()
        self._transition_delay_ms = transition_delay_ms

        track = catalog.first if initial_track_id is None else catalog.get(initial_track_id)
        self._session = PlaybackSession(current_track=track, volume=_clamp_volume(volume))

        self._resource: t.Optional[AudioResource] = None
        self._subscriptions: t.List[tuple] = []
        self._pending_track: t.Optional[Track] = None
        self._closed = False

        self._bind_resource(track, 0.0)
        logger.info("Player ready on track %d (%s)", track.id, track.title)

    # state -----------------------------------------------------------
    @property
    def state(self) -> PlaybackSession:
        """Copy of the current session."""
        return replace(self._session)

    @property
    def current_track(self) -> Track:
        return self._session.current_track

    @property
    def resource(self) -> t.Optional[AudioResource]:
        return self._resource

    @property
    def is_closed(self) -> bool:
        return self._closed

    def _notify(self):
        self.stateChanged.emit(self.state)

    # transport -------------------------------------------------------
    def toggle_play(self) -> None:
        """Play if paused, pause if playing."""
        if self._closed:
            return
        self._session.is_playing = not self._session.is_playing
        if self._session.is_playing:
            self._start_playback()
        else:
            self._resource.pause()
        self._notify()

    def seek(self, target: float) -> None:
        """Jump to ``target`` seconds, clamped to the known duration."""
        if self._closed:
            return
        upper = self._session.total_duration if self._session.has_duration else 0.0
        position = 0.0 if math.isnan(target) else max(0.0, min(target, upper))
        self._resource.current_time = position
        self._session.current_position = position
        self._notify()

    def set_volume(self, value: float) -> None:
        """Set the volume in percent; a positive volume also unmutes."""
        if self._closed:
            return
        self._session.volume = _clamp_volume(value)
        if self._session.volume > 0 and self._session.is_muted:
            self._session.is_muted = False
        self._resource.volume = self._session.effective_volume
        self._notify()

    def toggle_mute(self) -> None:
        """Mute or unmute without touching the stored volume."""
        if self._closed:
            return
        self._session.is_muted = not self._session.is_muted
        self._resource.volume = self._session.effective_volume
        self._notify()

    def toggle_shuffle(self) -> None:
        if self._closed:
            return
        self._session.is_shuffled = not self._session.is_shuffled
        logger.info("Shuffle %s", "on" if self._session.is_shuffled else "off")
        self._notify()

    def toggle_repeat(self) -> None:
        if self._closed:
            return
        self._session.is_repeated = not self._session.is_repeated
        logger.info("Repeat %s", "on" if self._session.is_repeated else "off")
        self._notify()

    # navigation ------------------------------------------------------
    def advance_next(self) -> None:
        """Switch to the following catalog track, wrapping to the first.

        Order is catalog order; the shuffle and repeat flags do not change it.
        """
        position = self._current_position_in_catalog()
        self.switch_track(self.catalog[self.catalog.next(position)])

    def advance_previous(self) -> None:
        """Switch to the preceding catalog track, wrapping to the last."""
        position = self._current_position_in_catalog()
        self.switch_track(self.catalog[self.catalog.previous(position)])

    def _current_position_in_catalog(self) -> int:
        return self.catalog.index_of(self._session.current_track.id)

    def select_track(self, track: Track) -> None:
        """Switch to a track picked from the playlist.

        Raises:
            TrackNotFound: If the track is not part of the catalog
        """
        self.switch_track(self.catalog.get(track.id))

    def switch_track(self, track: Track) -> None:
        """Start a transition to ``track``.

        The audio resource is swapped after the transition delay; a newer
        request replaces a pending one.
        """
        if self._closed:
            return
        if track.id == self._session.current_track.id:
            if self._pending_track is not None:
                # back to the current track before the swap happened
                self._deferred.cancel()
                self._pending_track = None
                self._session.is_transitioning = False
                self._notify()
            return

        logger.debug("Transition to track %d scheduled", track.id)
        self._pending_track = track
        self._session.is_transitioning = True
        self._deferred.start(self._transition_delay_ms, self._complete_switch)
        self._notify()

    def _complete_switch(self):
        track = self._pending_track
        self._pending_track = None
        if track is None or self._closed:
            return

        # carry-over: the outgoing position is kept, not reset to zero
        position = self._resource.current_time
        self._release_resource()
        self._bind_resource(track, position)

        self._session.current_track = track
        self._session.current_position = position
        if self._session.is_playing:
            self._start_playback()
        self._session.is_transitioning = False

        logger.info("Now playing track %d (%s)", track.id, track.title)
        self.trackChanged.emit(track)
        self._notify()

    # resource lifecycle ----------------------------------------------
    def _bind_resource(self, track: Track, position: float):
        resource = self._engine(track.audio_src)
        resource.volume = self._session.effective_volume
        if position:
            resource.current_time = position
        self._session.total_duration = resource.duration

        self._subscriptions = [
            (resource.positionChanged, self._on_position_changed),
            (resource.durationResolved, self._on_duration_resolved),
            (resource.completed, self._on_completed),
            (resource.playRejected, self._on_play_rejected),
        ]
        for signal, slot in self._subscriptions:
            signal.connect(slot)
        self._resource = resource

    def _release_resource(self):
        resource = self._resource
        if resource is None:
            return
        for signal, slot in self._subscriptions:
            signal.disconnect(slot)
        self._subscriptions = []
        self._resource = None
        resource.release()

    def _start_playback(self) -> bool:
        try:
            self._resource.play()
        except PlaybackRejected as exc:
            self._reject(str(exc))
            return False
        return True

    def _reject(self, reason: str):
        logger.warning("Playback rejected for track %d: %s",
                       self._session.current_track.id, reason)
        self._session.is_playing = False
        self.playbackRejected.emit(reason)

    def close(self) -> None:
        """Cancel any pending switch and release the audio resource."""
        if self._closed:
            return
        self._closed = True
        self._deferred.cancel()
        self._pending_track = None
        self._release_resource()
        self._session.is_playing = False
        self._session.is_transitioning = False
        logger.debug("Player closed")
        self._notify()

    # resource events -------------------------------------------------
    def _on_position_changed(self, seconds: float):
        position = max(0.0, seconds)
        if self._session.has_duration:
            position = min(position, self._session.total_duration)
        self._session.current_position = position
        self._notify()

    def _on_duration_resolved(self, seconds: float):
        self._session.total_duration = seconds
        if self._session.has_duration:
            self._session.current_position = min(self._session.current_position, seconds)
        self._notify()

    def _on_completed(self):
        logger.debug("Track %d completed", self._session.current_track.id)
        self.advance_next()

    def _on_play_rejected(self, reason: str):
        self._reject(reason)
        self._notify()
