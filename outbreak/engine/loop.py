"""Frame-capped game loop."""
from __future__ import annotations

from typing import Callable, Optional, Protocol


class FrameClock(Protocol):
    def tick(self, framerate: int = 0) -> int:
        ...


class FrameLoop:
    """Runs events, update and render once per frame at a capped rate.

    The economy only changes in response to discrete input, so a variable
    step is enough; ``update`` receives the elapsed frame time in seconds.
    """

    def __init__(
        self,
        update: Callable[[float], None],
        render: Callable[[], None],
        process_events: Callable[[], None],
        clock: FrameClock,
        max_fps: int = 60,
        max_frame_time: float = 0.25,
    ) -> None:
        self.update = update
        self.render = render
        self.process_events = process_events
        self.clock = clock
        self.max_fps = max_fps
        self.max_frame_time = max_frame_time
        self.frames = 0
        self._running = False

    @property
    def running(self) -> bool:
        return self._running

    def stop(self) -> None:
        self._running = False

    def run(self, max_frames: Optional[int] = None) -> None:
        self._running = True
        while self._running:
            if max_frames is not None and self.frames >= max_frames:
                self._running = False
                break
            elapsed = self.clock.tick(self.max_fps) / 1000.0
            dt = min(max(elapsed, 0.0), self.max_frame_time)
            self.process_events()
            if not self._running:
                break
            self.update(dt)
            self.render()
            self.frames += 1


__all__ = ["FrameLoop", "FrameClock"]
