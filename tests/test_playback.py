"""
Tests for the PlaybackController transport state machine.
"""
import math
import pytest

from odh_player_app.core.errors import TrackNotFound
from odh_player_app.core.models import Track
from odh_player_app.core.playback import PlaybackController


def test_initial_state(controller, engine, tracks):
    """Controller starts paused on the first track with one bound resource."""
    state = controller.state
    assert state.current_track == tracks[0]
    assert state.is_playing is False
    assert state.volume == 40
    assert state.is_muted is False
    assert state.is_transitioning is False
    assert math.isnan(state.total_duration)

    assert len(engine.created) == 1
    assert engine.last.source == "songs/t1.mp3"
    assert engine.last.volume == pytest.approx(0.4)


def test_initial_track_id(catalog, engine, deferred, tracks):
    ctrl = PlaybackController(catalog, engine=engine, deferred=deferred, initial_track_id=3)
    assert ctrl.current_track == tracks[2]
    assert engine.last.source == "songs/t3.mp3"


def test_unknown_initial_track(catalog, engine, deferred):
    with pytest.raises(TrackNotFound):
        PlaybackController(catalog, engine=engine, deferred=deferred, initial_track_id=99)


def test_state_is_a_copy(controller):
    """Observers cannot write to the session."""
    snapshot = controller.state
    snapshot.volume = 99
    assert controller.state.volume == 40


# ---------------------------------------------------------------- play/pause

def test_toggle_play(controller, engine):
    controller.toggle_play()
    assert controller.state.is_playing is True
    assert engine.last.playing is True

    controller.toggle_play()
    assert controller.state.is_playing is False
    assert engine.last.playing is False


def test_play_rejected_synchronously(controller, engine):
    """A rejected play request reverts to paused and is not raised."""
    reasons = []
    controller.playbackRejected.connect(reasons.append)
    engine.last.reject_play = "autoplay blocked"

    controller.toggle_play()

    assert controller.state.is_playing is False
    assert reasons == ["autoplay blocked"]


def test_play_rejected_asynchronously(controller, engine):
    """Rejection arriving later on the resource signal also reverts to paused."""
    reasons = []
    controller.playbackRejected.connect(reasons.append)
    controller.toggle_play()
    assert controller.state.is_playing is True

    engine.last.playRejected.emit("decoder error")

    assert controller.state.is_playing is False
    assert reasons == ["decoder error"]


def test_rejection_is_logged(controller, engine, caplog):
    engine.last.reject_play = "autoplay blocked"
    with caplog.at_level("WARNING"):
        controller.toggle_play()
    assert "autoplay blocked" in caplog.text


def test_state_changed_emitted_once_per_operation(controller, engine):
    states = []
    controller.stateChanged.connect(states.append)
    engine.last.reject_play = "blocked"

    controller.toggle_play()

    assert len(states) == 1
    assert states[0].is_playing is False


# ---------------------------------------------------------------- seek

@pytest.mark.parametrize("target, expected", [
    (-5.0, 0.0),
    (0.0, 0.0),
    (42.5, 42.5),
    (180.0, 180.0),
    (500.0, 180.0),
])
def test_seek_clamps_to_duration(controller, engine, target, expected):
    engine.last.resolve(180.0)
    controller.seek(target)
    assert controller.state.current_position == expected
    assert engine.last.current_time == expected


def test_seek_with_unknown_duration(controller, engine):
    """Unresolved duration clamps every target to zero."""
    controller.seek(30.0)
    assert controller.state.current_position == 0.0
    assert engine.last.current_time == 0.0


def test_seek_nan(controller, engine):
    engine.last.resolve(100.0)
    controller.seek(float("nan"))
    assert controller.state.current_position == 0.0


# ---------------------------------------------------------------- volume / mute

@pytest.mark.parametrize("value, expected", [
    (-10, 0),
    (0, 0),
    (55, 55),
    (55.4, 55),
    (55.5, 56),
    (100, 100),
    (250, 100),
])
def test_set_volume_clamps(controller, engine, value, expected):
    controller.set_volume(value)
    assert controller.state.volume == expected
    assert engine.last.volume == pytest.approx(expected / 100)


def test_toggle_mute_twice_keeps_volume(controller, engine):
    controller.toggle_mute()
    assert controller.state.is_muted is True
    assert controller.state.volume == 40
    assert engine.last.volume == 0.0

    controller.toggle_mute()
    assert controller.state.is_muted is False
    assert controller.state.volume == 40
    assert engine.last.volume == pytest.approx(0.4)


def test_set_volume_zero_keeps_mute(controller, engine):
    """volume=40, mute, then set 0: still muted, output 0."""
    controller.toggle_mute()
    assert controller.state.effective_volume == 0.0
    assert controller.state.volume == 40

    controller.set_volume(0)

    assert controller.state.is_muted is True
    assert controller.state.volume == 0


def test_set_positive_volume_unmutes(controller, engine):
    controller.toggle_mute()
    controller.set_volume(70)
    assert controller.state.is_muted is False
    assert engine.last.volume == pytest.approx(0.7)


def test_shuffle_and_repeat_flags(controller):
    controller.toggle_shuffle()
    controller.toggle_repeat()
    assert controller.state.is_shuffled is True
    assert controller.state.is_repeated is True
    controller.toggle_shuffle()
    assert controller.state.is_shuffled is False


# ---------------------------------------------------------------- switching

def test_switch_track_transition(controller, engine, deferred, tracks):
    """Switch sets transitioning, swaps the resource after the delay."""
    old = engine.last
    controller.switch_track(tracks[1])

    assert controller.state.is_transitioning is True
    assert controller.current_track == tracks[0]
    assert deferred.delay_ms == 200
    assert len(engine.created) == 1

    deferred.fire()

    assert controller.state.is_transitioning is False
    assert controller.current_track == tracks[1]
    assert old.released is True
    assert engine.last is not old
    assert engine.last.source == "songs/t2.mp3"
    assert controller.resource is engine.last


def test_switch_to_current_track_is_noop(controller, engine, deferred, tracks):
    controller.switch_track(tracks[0])
    assert deferred.start_calls == 0
    assert controller.state.is_transitioning is False
    assert len(engine.created) == 1


def test_switch_back_cancels_pending(controller, engine, deferred, tracks):
    controller.switch_track(tracks[1])
    controller.switch_track(tracks[0])
    assert deferred.is_pending is False
    assert controller.state.is_transitioning is False
    assert controller.current_track == tracks[0]


def test_latest_switch_wins(controller, engine, deferred, tracks):
    controller.switch_track(tracks[1])
    controller.switch_track(tracks[2])
    deferred.fire()
    assert controller.current_track == tracks[2]
    assert len(engine.created) == 2


def test_switch_carries_over_settings(controller, engine, deferred, tracks):
    """Position, volume and mute move to the new resource."""
    old = engine.last
    old.resolve(200.0)
    old.tick(42.0)
    controller.toggle_mute()

    controller.switch_track(tracks[1])
    deferred.fire()

    new = engine.last
    assert new.current_time == 42.0
    assert new.volume == 0.0
    assert controller.state.current_position == 42.0
    assert controller.state.volume == 40
    assert controller.state.is_muted is True


def test_volume_change_during_transition_reaches_new_resource(controller, engine, deferred, tracks):
    controller.switch_track(tracks[1])
    controller.set_volume(90)
    deferred.fire()
    assert engine.last.volume == pytest.approx(0.9)


def test_switch_while_playing_resumes(controller, engine, deferred, tracks):
    controller.toggle_play()
    controller.switch_track(tracks[1])
    deferred.fire()
    assert engine.last.play_calls == 1
    assert engine.last.playing is True
    assert controller.state.is_playing is True


def test_switch_while_paused_stays_paused(controller, engine, deferred, tracks):
    controller.switch_track(tracks[1])
    deferred.fire()
    assert engine.last.play_calls == 0


def test_switch_play_rejected(catalog, engine, deferred, tracks):
    """The new resource refusing to play reverts to paused."""
    engine.rejections["songs/t2.mp3"] = "policy"
    ctrl = PlaybackController(catalog, engine=engine, deferred=deferred)
    ctrl.toggle_play()
    ctrl.switch_track(tracks[1])
    deferred.fire()

    assert ctrl.current_track == tracks[1]
    assert ctrl.state.is_playing is False
    assert ctrl.state.is_transitioning is False


def test_track_changed_signal(controller, deferred, tracks):
    changed = []
    controller.trackChanged.connect(changed.append)
    controller.switch_track(tracks[2])
    assert changed == []
    deferred.fire()
    assert changed == [tracks[2]]


def test_duration_resets_for_new_track(controller, engine, deferred, tracks):
    engine.last.resolve(120.0)
    controller.switch_track(tracks[1])
    deferred.fire()
    assert math.isnan(controller.state.total_duration)


# ---------------------------------------------------------------- navigation

def test_navigation_scenario(catalog, engine, deferred, tracks):
    """[T1,T2,T3] from T2: next->T3, next->T1, previous->T3."""
    ctrl = PlaybackController(catalog, engine=engine, deferred=deferred, initial_track_id=2)

    ctrl.advance_next()
    deferred.fire()
    assert ctrl.current_track == tracks[2]

    ctrl.advance_next()
    deferred.fire()
    assert ctrl.current_track == tracks[0]

    ctrl.advance_previous()
    deferred.fire()
    assert ctrl.current_track == tracks[2]


@pytest.mark.parametrize("start_id", [1, 2, 3])
def test_full_cycle(catalog, engine, deferred, start_id):
    ctrl = PlaybackController(catalog, engine=engine, deferred=deferred, initial_track_id=start_id)
    for _ in range(len(catalog)):
        ctrl.advance_next()
        deferred.fire()
    assert ctrl.current_track.id == start_id


def test_previous_undoes_next(controller, switch_to, tracks):
    switch_to(controller.advance_next)
    switch_to(controller.advance_previous)
    assert controller.current_track == tracks[0]


def test_navigation_ignores_shuffle(controller, switch_to, tracks):
    """Shuffle is intent only; order stays sequential."""
    controller.toggle_shuffle()
    assert switch_to(controller.advance_next) == tracks[1]


def test_navigation_ignores_repeat(controller, engine, deferred, switch_to, tracks):
    """Repeat does not replay the track; completion still moves on."""
    controller.toggle_repeat()
    assert switch_to(controller.advance_previous) == tracks[2]

    engine.last.completed.emit()
    deferred.fire()
    assert controller.current_track == tracks[0]


def test_select_track(controller, switch_to, tracks):
    assert switch_to(controller.select_track, tracks[2]) == tracks[2]


def test_select_foreign_track(controller):
    stranger = Track(id=42, title="X", artist="Y", album="Z", audio_src="x.mp3")
    with pytest.raises(TrackNotFound):
        controller.select_track(stranger)
    assert controller.state.is_transitioning is False


# ---------------------------------------------------------------- resource events

def test_completed_advances_exactly_once(controller, engine, deferred, tracks):
    engine.last.completed.emit()
    assert deferred.start_calls == 1
    deferred.fire()
    assert controller.current_track == tracks[1]


def test_old_resource_is_detached(controller, engine, deferred, tracks):
    """Signals from a replaced resource no longer reach the controller."""
    old = engine.last
    controller.switch_track(tracks[1])
    deferred.fire()

    states = []
    controller.stateChanged.connect(states.append)

    old.completed.emit()
    old.positionChanged.emit(10.0)
    old.playRejected.emit("stale")

    assert deferred.start_calls == 1  # only the switch above
    assert states == []

    engine.last.completed.emit()
    assert deferred.start_calls == 2
    assert len(states) == 1


def test_position_updates(controller, engine):
    engine.last.resolve(60.0)
    engine.last.tick(12.5)
    assert controller.state.current_position == 12.5


def test_position_clamped_to_duration(controller, engine):
    engine.last.resolve(60.0)
    engine.last.tick(75.0)
    assert controller.state.current_position == 60.0


def test_duration_resolution_clamps_carried_position(controller, engine, deferred, tracks):
    engine.last.resolve(300.0)
    engine.last.tick(250.0)
    controller.switch_track(tracks[1])
    deferred.fire()

    engine.last.resolve(200.0)

    assert controller.state.total_duration == 200.0
    assert controller.state.current_position == 200.0


# ---------------------------------------------------------------- teardown

def test_close_releases_resource(controller, engine, deferred, tracks):
    resource = engine.last
    controller.toggle_play()
    controller.switch_track(tracks[1])

    controller.close()

    assert resource.released is True
    assert deferred.is_pending is False
    assert controller.resource is None
    assert controller.state.is_playing is False
    assert controller.state.is_transitioning is False


def test_operations_after_close_are_ignored(controller, engine, tracks):
    controller.close()
    controller.toggle_play()
    controller.set_volume(10)
    controller.seek(5)
    controller.switch_track(tracks[1])
    assert controller.state.is_playing is False
    assert controller.state.volume == 40
    controller.close()  # second close is harmless
