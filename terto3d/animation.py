"""Frame-by-frame animations of the interface and of the light overlay."""

from __future__ import annotations

from typing import Generic, Sequence, TypeVar

from .player import LIGHT_ANIM_DELAY, LIGHT_FRAME_COUNT, UI_ANIM_DELAY

FrameT = TypeVar("FrameT")

UI_FRAME_PATHS = tuple(f"./textures/interface/frame{i}.png" for i in range(4))
LIGHT_FRAME_PATHS = tuple(
    f"textures/interface2/light{i + 1}.png" for i in range(LIGHT_FRAME_COUNT)
)


def _frames(frames: Sequence[FrameT]) -> list[FrameT]:
    frame_list = list(frames)
    if not frame_list:
        raise ValueError("an animation needs at least one frame")
    return frame_list


class UiAnimation(Generic[FrameT]):
    """The interface animation, played once each time the player moves."""

    def __init__(self, frames: Sequence[FrameT], delay: int = UI_ANIM_DELAY) -> None:
        self.frames = _frames(frames)
        self.delay = delay
        self.current_frame = 0
        self.is_animating = False
        self._ticks = 0

    @property
    def frame_count(self) -> int:
        return len(self.frames)

    @property
    def frame(self) -> FrameT:
        """The frame to show now."""
        return self.frames[self.current_frame]

    def start(self) -> None:
        """Start playing from the first frame unless already playing."""
        if not self.is_animating:
            self.is_animating = True
            self.current_frame = 0

    def tick(self) -> bool:
        """Advance one update; return True when the shown frame changed."""
        if not self.is_animating:
            return False
        self._ticks += 1
        if self._ticks < self.delay:
            return False
        self._ticks = 0
        self.current_frame += 1
        if self.current_frame >= self.frame_count:
            self.is_animating = False
            self.current_frame = 0
        return True


class LightAnimation(Generic[FrameT]):
    """The light overlay, played through once and held on its last frame."""

    def __init__(
        self, frames: Sequence[FrameT], delay: int = LIGHT_ANIM_DELAY
    ) -> None:
        self.frames = _frames(frames)
        self.delay = delay
        self.current_frame = 0
        self.finished = False
        self._ticks = 0

    @property
    def frame_count(self) -> int:
        return len(self.frames)

    @property
    def frame(self) -> FrameT:
        """The frame to show now."""
        return self.frames[self.current_frame]

    def restart(self) -> None:
        """Go back to the first frame and play again."""
        self.current_frame = 0
        self.finished = False

    def tick(self) -> bool:
        """Advance one update; return True when the shown frame changed."""
        if self.finished:
            return False
        self._ticks += 1
        if self._ticks < self.delay:
            return False
        self._ticks = 0
        self.current_frame += 1
        if self.current_frame >= self.frame_count:
            self.current_frame = self.frame_count - 1
            self.finished = True
        return True