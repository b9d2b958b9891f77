import pytest

from terto3d.animation import (
    LIGHT_FRAME_PATHS,
    UI_FRAME_PATHS,
    LightAnimation,
    UiAnimation,
)
from terto3d.player import LIGHT_ANIM_DELAY, LIGHT_FRAME_COUNT, UI_ANIM_DELAY


def ticks(animation, count):
    return [animation.tick() for _ in range(count)]


def test_ui_idle_does_not_advance():
    ui = UiAnimation(["a", "b", "c", "d"])
    assert ticks(ui, UI_ANIM_DELAY * 3) == [False] * (UI_ANIM_DELAY * 3)
    assert ui.frame == "a"


def test_ui_start_advances_after_delay():
    ui = UiAnimation(["a", "b", "c", "d"])
    ui.start()
    assert ui.is_animating
    assert ticks(ui, UI_ANIM_DELAY - 1) == [False] * (UI_ANIM_DELAY - 1)
    assert ui.tick() is True
    assert ui.frame == "b"


def test_ui_plays_once_then_stops_on_first_frame():
    frames = ["a", "b", "c", "d"]
    ui = UiAnimation(frames)
    ui.start()
    changes = ticks(ui, UI_ANIM_DELAY * len(frames))
    assert changes.count(True) == len(frames)
    assert not ui.is_animating
    assert ui.frame == "a"


def test_ui_start_while_playing_keeps_frame():
    ui = UiAnimation(["a", "b", "c", "d"])
    ui.start()
    ticks(ui, UI_ANIM_DELAY)
    ui.start()
    assert ui.frame == "b"


def test_ui_requires_frames():
    with pytest.raises(ValueError):
        UiAnimation([])


def test_light_advances_after_delay():
    light = LightAnimation(list(range(LIGHT_FRAME_COUNT)))
    assert ticks(light, LIGHT_ANIM_DELAY).count(True) == 1
    assert light.frame == 1


def test_light_holds_last_frame_when_finished():
    light = LightAnimation(list(range(LIGHT_FRAME_COUNT)))
    ticks(light, LIGHT_ANIM_DELAY * LIGHT_FRAME_COUNT)
    assert light.finished
    assert light.frame == LIGHT_FRAME_COUNT - 1
    assert ticks(light, LIGHT_ANIM_DELAY) == [False] * LIGHT_ANIM_DELAY


def test_light_restart_goes_back_to_first_frame():
    light = LightAnimation(["x", "y", "z"], delay=2)
    ticks(light, 6)
    assert light.finished
    light.restart()
    assert not light.finished
    assert light.frame == "x"
    assert ticks(light, 2)[-1] is True
    assert light.frame == "y"


def test_light_requires_frames():
    with pytest.raises(ValueError):
        LightAnimation([])


def test_ui_animation_over_frame_paths():
    ui = UiAnimation(UI_FRAME_PATHS)
    assert ui.frame == "./textures/interface/frame0.png"
    ui.start()
    ticks(ui, UI_ANIM_DELAY)
    assert ui.frame == "./textures/interface/frame1.png"


def test_light_animation_over_frame_paths_ends_on_last():
    light = LightAnimation(LIGHT_FRAME_PATHS)
    assert light.frame == "textures/interface2/light1.png"
    ticks(light, LIGHT_ANIM_DELAY * LIGHT_FRAME_COUNT)
    assert light.finished
    assert light.frame == f"textures/interface2/light{LIGHT_FRAME_COUNT}.png"