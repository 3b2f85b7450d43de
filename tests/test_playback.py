import asyncio
import logging

import pytest

from asciimorph.config import EngineSettings
from asciimorph.core.playback import DEFAULT_SPEED_MS, MIN_SPEED_MS, AnimationController


class Recorder:
    def __init__(self):
        self.indices = []
        self.contents = []
        self.completed = 0

    def frame(self, index, content):
        self.indices.append(index)
        self.contents.append(content)

    def complete(self):
        self.completed += 1


def manual(frames, **kwargs):
    rec = Recorder()
    ctrl = AnimationController(frames, on_frame_change=rec.frame, on_complete=rec.complete, **kwargs)
    return ctrl, rec


# ============================================================
# Manual tick mode (no event loop)
# ============================================================

def test_starts_at_first_frame(three_frames):
    ctrl, _ = manual(three_frames)
    assert ctrl.current_frame == 0
    assert ctrl.total_frames == 3
    assert ctrl.frame_content == three_frames[0]
    assert ctrl.is_playing
    assert not ctrl.is_scheduled


def test_non_looping_completion(three_frames):
    ctrl, rec = manual(three_frames, loop=False)
    for _ in range(3):
        ctrl.tick()
    assert rec.indices == [1, 2, 0]
    assert rec.contents == [three_frames[1], three_frames[2], three_frames[0]]
    assert rec.completed == 1
    assert not ctrl.is_playing

    ctrl.tick()
    assert rec.indices == [1, 2, 0]
    assert rec.completed == 1


def test_replay_completes_again(three_frames):
    ctrl, rec = manual(three_frames, loop=False)
    for _ in range(3):
        ctrl.tick()
    ctrl.play()
    for _ in range(3):
        ctrl.tick()
    assert rec.completed == 2


def test_looping_wraps_forever(three_frames):
    ctrl, rec = manual(three_frames, loop=True)
    for _ in range(7):
        ctrl.tick()
    assert ctrl.current_frame == 1
    assert ctrl.is_playing
    assert rec.completed == 0
    assert rec.indices[:4] == [1, 2, 0, 1]


def test_go_to_frame_clamps_and_notifies(three_frames):
    ctrl, rec = manual(three_frames, auto_play=False)
    ctrl.go_to_frame(99)
    assert ctrl.current_frame == 2
    ctrl.go_to_frame(-5)
    assert ctrl.current_frame == 0
    ctrl.go_to_frame(1)
    assert rec.indices == [2, 0, 1]
    assert not ctrl.is_playing


def test_pause_stops_ticks(three_frames):
    ctrl, rec = manual(three_frames)
    ctrl.tick()
    ctrl.pause()
    ctrl.tick()
    assert ctrl.current_frame == 1
    assert rec.indices == [1]


def test_reset_is_idempotent(three_frames):
    ctrl, rec = manual(three_frames)
    ctrl.tick()
    ctrl.reset()
    ctrl.reset()
    assert ctrl.current_frame == 0
    assert not ctrl.is_playing
    # reset does not notify
    assert rec.indices == [1]


def test_speed_is_clamped(three_frames):
    ctrl, _ = manual(three_frames, speed_ms=1)
    assert ctrl.speed_ms == MIN_SPEED_MS
    ctrl.set_speed(5)
    assert ctrl.speed_ms == MIN_SPEED_MS
    ctrl.set_speed(250)
    assert ctrl.speed_ms == 250

    fast, _ = manual(three_frames, speed_ms=1, min_speed_ms=1)
    assert fast.speed_ms == 1


def test_settings_feed_speed_and_floor(three_frames):
    settings = EngineSettings(default_speed_ms=500, min_speed_ms=40)
    ctrl, _ = manual(three_frames, settings=settings)
    assert ctrl.speed_ms == 500
    ctrl.set_speed(20)
    assert ctrl.speed_ms == 40

    # explicit arguments win over settings
    ctrl, _ = manual(three_frames, speed_ms=60, min_speed_ms=30, settings=settings)
    assert ctrl.speed_ms == 60
    ctrl.set_speed(20)
    assert ctrl.speed_ms == 30


def test_defaults_match_engine_settings(three_frames):
    ctrl, _ = manual(three_frames)
    assert ctrl.speed_ms == DEFAULT_SPEED_MS == EngineSettings().default_speed_ms
    assert MIN_SPEED_MS == EngineSettings().min_speed_ms


def test_ragged_frames_warn_but_play(caplog):
    frames = ["ab\nc", "ab\ncd", "abc\nabc"]
    with caplog.at_level(logging.WARNING, logger="asciimorph.core.playback"):
        ctrl, _ = manual(frames)
    assert ctrl.frames == tuple(frames)
    assert "[0]" in caplog.text
    assert "differ in size" in caplog.text


def test_uniform_frames_do_not_warn(three_frames, caplog):
    with caplog.at_level(logging.WARNING, logger="asciimorph.core.playback"):
        manual(three_frames)
    assert caplog.text == ""


@pytest.mark.parametrize("frames", [[], [""], "not a list", None, ["ok", 3]])
def test_invalid_frames_show_placeholder(frames, caplog):
    with caplog.at_level(logging.WARNING, logger="asciimorph.core.playback"):
        ctrl, _ = manual(frames)
    assert ctrl.total_frames == 1
    assert "No frames provided" in ctrl.frame_content
    assert "placeholder" in caplog.text


def test_dispose_blocks_play(three_frames, caplog):
    ctrl, rec = manual(three_frames)
    ctrl.dispose()
    assert ctrl.disposed
    assert not ctrl.is_playing
    with caplog.at_level(logging.WARNING, logger="asciimorph.core.playback"):
        ctrl.play()
    assert not ctrl.is_playing
    assert "disposed" in caplog.text
    ctrl.tick()
    assert rec.indices == []


def test_context_manager_disposes(three_frames):
    with AnimationController(three_frames, auto_play=False) as ctrl:
        ctrl.go_to_frame(2)
    assert ctrl.disposed


def test_explicit_event_loop(three_frames):
    loop = asyncio.new_event_loop()
    try:
        done = loop.create_future()
        rec = Recorder()
        ctrl = AnimationController(
            three_frames,
            speed_ms=20,
            loop=False,
            on_frame_change=rec.frame,
            on_complete=lambda: done.set_result(True),
            event_loop=loop,
        )
        assert ctrl.is_scheduled
        loop.run_until_complete(asyncio.wait_for(done, 2))
        assert rec.indices == [1, 2, 0]
        assert not ctrl.is_scheduled
    finally:
        loop.close()


def test_closed_event_loop_falls_back_to_manual(three_frames):
    loop = asyncio.new_event_loop()
    loop.close()
    ctrl = AnimationController(three_frames, event_loop=loop)
    assert ctrl.is_playing
    assert not ctrl.is_scheduled
    ctrl.tick()
    assert ctrl.current_frame == 1


# ============================================================
# Timer driven
# ============================================================

@pytest.mark.asyncio
async def test_timer_plays_to_completion(three_frames):
    done = asyncio.Event()
    rec = Recorder()
    ctrl = AnimationController(
        three_frames, speed_ms=20, loop=False, on_frame_change=rec.frame, on_complete=done.set
    )
    assert ctrl.is_scheduled
    await asyncio.wait_for(done.wait(), 2)
    assert rec.indices == [1, 2, 0]
    assert not ctrl.is_playing
    assert not ctrl.is_scheduled


@pytest.mark.asyncio
async def test_pause_cancels_pending_tick(three_frames):
    rec = Recorder()
    ctrl = AnimationController(three_frames, speed_ms=20, on_frame_change=rec.frame)
    ctrl.pause()
    assert not ctrl.is_scheduled
    await asyncio.sleep(0.1)
    assert rec.indices == []


@pytest.mark.asyncio
async def test_no_ticks_after_dispose(three_frames):
    rec = Recorder()
    ctrl = AnimationController(three_frames, speed_ms=20, on_frame_change=rec.frame)
    await asyncio.sleep(0.07)
    ctrl.dispose()
    seen = list(rec.indices)
    await asyncio.sleep(0.1)
    assert rec.indices == seen
    assert not ctrl.is_scheduled


@pytest.mark.asyncio
async def test_set_speed_rearms_timer(three_frames):
    changed = asyncio.Event()
    ctrl = AnimationController(
        three_frames, speed_ms=10_000, on_frame_change=lambda i, c: changed.set()
    )
    ctrl.set_speed(20)
    await asyncio.wait_for(changed.wait(), 2)
    assert ctrl.current_frame >= 1
    ctrl.dispose()


@pytest.mark.asyncio
async def test_controllers_are_independent(three_frames):
    done = asyncio.Event()
    a = AnimationController(three_frames, speed_ms=20)
    b = AnimationController(three_frames, speed_ms=20, loop=False, on_complete=done.set)
    a.dispose()
    await asyncio.wait_for(done.wait(), 2)
    assert a.current_frame == 0
    assert b.current_frame == 0
    assert not b.is_playing


@pytest.mark.asyncio
async def test_play_after_pause_resumes(three_frames):
    changed = asyncio.Event()
    ctrl = AnimationController(
        three_frames, speed_ms=20, auto_play=False, on_frame_change=lambda i, c: changed.set()
    )
    assert not ctrl.is_scheduled
    ctrl.play()
    ctrl.play()
    assert ctrl.is_scheduled
    await asyncio.wait_for(changed.wait(), 2)
    ctrl.dispose()
