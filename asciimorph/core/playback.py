"""
Playback state machine over a materialized frame sequence.

One asyncio timer handle per controller drives ``tick()`` every ``speed_ms``
while playing. pause(), reset() and dispose() cancel the pending handle, so no
tick fires after teardown. Without an event loop the controller runs in manual
mode: the host calls ``tick()`` itself.

Usage:
    controller = AnimationController(frames, speed_ms=100, loop=False,
                                     on_complete=lambda: print("done"))
    controller.go_to_frame(3)
    controller.set_speed(50)
    controller.dispose()
"""
from __future__ import annotations

import asyncio
import logging
from typing import Callable, Optional, Sequence, Tuple

from ..config import EngineSettings
from .frames import frame_size, placeholder_frame, validate_frame, validate_frames

logger = logging.getLogger(__name__)

MIN_SPEED_MS = 16
DEFAULT_SPEED_MS = 150

FrameChangeCallback = Callable[[int, str], None]
CompleteCallback = Callable[[], None]


class AnimationController:
    def __init__(
        self,
        frames: Sequence[str],
        speed_ms: Optional[int] = None,
        auto_play: bool = True,
        loop: bool = True,
        on_frame_change: Optional[FrameChangeCallback] = None,
        on_complete: Optional[CompleteCallback] = None,
        event_loop: Optional[asyncio.AbstractEventLoop] = None,
        min_speed_ms: Optional[int] = None,
        settings: Optional[EngineSettings] = None,
    ) -> None:
        settings = settings or EngineSettings()
        if speed_ms is None:
            speed_ms = settings.default_speed_ms
        if min_speed_ms is None:
            min_speed_ms = settings.min_speed_ms
        if not validate_frames(frames):
            logger.warning("No valid frames provided, showing placeholder")
            frames = (placeholder_frame("No frames provided"),)
        else:
            _warn_on_shape(frames)
        self._frames: Tuple[str, ...] = tuple(frames)
        self._min_speed_ms = max(1, int(min_speed_ms))
        self._speed_ms = self._clamp_speed(speed_ms)
        self.loop = loop
        self.on_frame_change = on_frame_change
        self.on_complete = on_complete

        self._current = 0
        self._playing = False
        self._disposed = False
        self._event_loop = event_loop
        self._handle: Optional[asyncio.TimerHandle] = None

        if auto_play:
            self.play()

    # ============================================================
    # State
    # ============================================================

    @property
    def current_frame(self) -> int:
        return self._current

    @property
    def total_frames(self) -> int:
        return len(self._frames)

    @property
    def is_playing(self) -> bool:
        return self._playing

    @property
    def frame_content(self) -> str:
        return self._frames[self._current]

    @property
    def frames(self) -> Tuple[str, ...]:
        return self._frames

    @property
    def speed_ms(self) -> int:
        return self._speed_ms

    @property
    def is_scheduled(self) -> bool:
        return self._handle is not None

    @property
    def disposed(self) -> bool:
        return self._disposed

    # ============================================================
    # Controls
    # ============================================================

    def play(self) -> None:
        if self._disposed:
            logger.warning("play() called on a disposed controller")
            return
        self._playing = True
        self._schedule()

    def pause(self) -> None:
        self._playing = False
        self._cancel()

    def reset(self) -> None:
        self._cancel()
        self._current = 0
        self._playing = False

    def go_to_frame(self, index: int) -> None:
        index = max(0, min(int(index), len(self._frames) - 1))
        self._current = index
        self._notify(index)

    def set_speed(self, speed_ms: int) -> None:
        self._speed_ms = self._clamp_speed(speed_ms)
        # re-arm so the next tick uses the new interval
        if self._handle is not None:
            self._cancel()
            self._schedule()

    def tick(self) -> None:
        if not self._playing:
            return
        nxt = (self._current + 1) % len(self._frames)
        self._current = nxt
        self._notify(nxt)
        if nxt == 0 and not self.loop:
            self._playing = False
            self._cancel()
            logger.debug("Playback complete after %d frames", len(self._frames))
            if self.on_complete is not None:
                self.on_complete()

    def dispose(self) -> None:
        self._cancel()
        self._playing = False
        self._disposed = True

    def __enter__(self) -> "AnimationController":
        return self

    def __exit__(self, *exc) -> None:
        self.dispose()

    # ============================================================
    # Scheduling
    # ============================================================

    def _clamp_speed(self, speed_ms) -> int:
        return max(self._min_speed_ms, int(speed_ms))

    def _notify(self, index: int) -> None:
        if self.on_frame_change is not None:
            self.on_frame_change(index, self._frames[index])

    def _resolve_loop(self) -> Optional[asyncio.AbstractEventLoop]:
        try:
            return asyncio.get_running_loop()
        except RuntimeError:
            pass
        if self._event_loop is not None and not self._event_loop.is_closed():
            return self._event_loop
        return None

    def _schedule(self) -> None:
        if self._handle is not None or not self._playing:
            return
        loop = self._resolve_loop()
        if loop is None:
            logger.debug("No event loop available, controller in manual tick mode")
            return
        self._handle = loop.call_later(self._speed_ms / 1000.0, self._on_timer)

    def _cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _on_timer(self) -> None:
        self._handle = None
        try:
            self.tick()
        finally:
            if self._playing:
                self._schedule()


def _warn_on_shape(frames: Sequence[str]) -> None:
    # ragged or mixed-size frames still play
    ragged = [i for i, f in enumerate(frames) if not validate_frame(f).valid]
    if ragged:
        logger.warning("Frames %s have rows of unequal length", ragged)
    sizes = {frame_size(f) for f in frames}
    if len(sizes) > 1:
        logger.warning("Frames differ in size: %s", sorted(sizes))
