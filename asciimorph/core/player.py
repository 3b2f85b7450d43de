from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Callable, Optional, Sequence

from ..config import EngineSettings
from .overlays import DistortionLayer, RippleConfig
from .playback import AnimationController, CompleteCallback, FrameChangeCallback

if TYPE_CHECKING:
    from ..presets import AsciiPreset

logger = logging.getLogger(__name__)


class InteractivePlayer:
    """Playback plus pointer ripple, producing the string a surface should paint.

    ``display`` is recomputed synchronously on every frame change and every
    pointer update; ``on_render`` receives each new display string.
    """

    def __init__(
        self,
        frames: Sequence[str],
        speed_ms: Optional[int] = None,
        ripple: Optional[RippleConfig] = None,
        interactive: bool = True,
        loop: bool = True,
        auto_play: bool = True,
        on_render: Optional[Callable[[str], None]] = None,
        on_frame_change: Optional[FrameChangeCallback] = None,
        on_complete: Optional[CompleteCallback] = None,
        event_loop: Optional[asyncio.AbstractEventLoop] = None,
        settings: Optional[EngineSettings] = None,
    ) -> None:
        self.interactive = interactive
        self.layer = DistortionLayer(ripple)
        self.on_render = on_render
        self._user_frame_change = on_frame_change
        self.controller = AnimationController(
            frames,
            speed_ms=speed_ms,
            auto_play=False,
            loop=loop,
            on_frame_change=self._frame_changed,
            on_complete=on_complete,
            event_loop=event_loop,
            settings=settings,
        )
        self._display = self._compose()
        if auto_play:
            self.controller.play()

    @classmethod
    def from_preset(cls, preset: "AsciiPreset", **kwargs) -> "InteractivePlayer":
        logger.debug("Building player from preset %r (%d frames)", preset.name, len(preset.frames))
        return cls(
            preset.frames,
            speed_ms=preset.config.speed,
            ripple=preset.config.ripple,
            interactive=preset.config.interactive,
            **kwargs,
        )

    @property
    def display(self) -> str:
        return self._display

    def update_pointer(self, x: float, y: float) -> str:
        if self.interactive:
            self.layer.update_pointer(x, y)
            self._refresh()
        return self._display

    def clear_pointer(self) -> str:
        self.layer.clear_pointer()
        self._refresh()
        return self._display

    def dispose(self) -> None:
        self.controller.dispose()

    def _compose(self) -> str:
        frame = self.controller.frame_content
        if not self.interactive:
            return frame
        return self.layer.render(frame)

    def _refresh(self) -> None:
        self._display = self._compose()
        if self.on_render is not None:
            self.on_render(self._display)

    def _frame_changed(self, index: int, content: str) -> None:
        if self._user_frame_change is not None:
            self._user_frame_change(index, content)
        self._refresh()
