import json
import logging

import pygame
import pytest

from outbreak.engine.input import DEFAULT_BINDINGS, InputBindings, InputMapper
from outbreak.engine.logger import DEFAULT_CHANNELS, GameLogger, LoggerConfig, init_logger
from outbreak.engine.loop import FrameLoop
from outbreak.engine.scene import Scene, SceneManager
from outbreak.engine.settings import GameSettings
from outbreak.systems.run import RunController
from outbreak.ui.title_scene import TitleScene


class _FakeClock:
    def __init__(self, step_ms: int) -> None:
        self.step_ms = step_ms
        self.calls = []

    def tick(self, framerate: int = 0) -> int:
        self.calls.append(framerate)
        return self.step_ms


class _RecordingScene(Scene):
    events = []

    def on_enter(self, **kwargs) -> None:
        super().on_enter(**kwargs)
        self.events.append(("enter", dict(kwargs)))

    def on_exit(self) -> None:
        self.events.append(("exit", None))

    def update(self, dt: float) -> None:
        self.events.append(("update", dt))


def test_logger_config_defaults_without_file(tmp_path):
    config = LoggerConfig.from_settings(tmp_path / "missing.json")
    assert config.level == logging.INFO
    assert config.channels == DEFAULT_CHANNELS
    assert config.channels is not DEFAULT_CHANNELS


def test_logger_config_reads_level_and_channels(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({"logLevel": "debug", "logChannels": {"ui": True, "economy": False}}))
    config = LoggerConfig.from_settings(path)
    assert config.level == logging.DEBUG
    assert config.channels["ui"] is True
    assert config.channels["economy"] is False
    assert config.channels["outcome"] is True


def test_logger_config_survives_bad_json(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text("{not json")
    assert LoggerConfig.from_settings(path).channels == DEFAULT_CHANNELS


@pytest.mark.parametrize(
    "data",
    [
        {"logChannels": ["economy"]},
        {"logChannels": "ui"},
        {"logChannels": {"ui": "yes"}},
        {"logLevel": None},
        {"logLevel": "chatty"},
        {"logLevel": True},
    ],
)
def test_logger_config_ignores_bad_values(tmp_path, data):
    path = tmp_path / "settings.json"
    path.write_text(json.dumps(data))
    config = LoggerConfig.from_settings(path)
    assert config.level == logging.INFO
    assert config.channels == DEFAULT_CHANNELS


def test_logger_config_accepts_numeric_level(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({"logLevel": 30}))
    assert LoggerConfig.from_settings(path).level == logging.WARNING


def test_loaders_survive_undecodable_file(tmp_path):
    path = tmp_path / "settings.json"
    path.write_bytes(b"\xff\xfe{\x00")
    assert LoggerConfig.from_settings(path).channels == DEFAULT_CHANNELS
    assert GameSettings.load(path) == GameSettings()
    assert InputBindings.load(path).actions == DEFAULT_BINDINGS


def test_loaders_survive_directory_in_place_of_file(tmp_path):
    path = tmp_path / "settings.json"
    path.mkdir()
    assert LoggerConfig.from_settings(path).level == logging.INFO
    assert GameSettings.load(path) == GameSettings()


@pytest.mark.parametrize(
    "data,field,expected",
    [
        ({"maxFps": "fast"}, "max_fps", 60),
        ({"maxFps": None}, "max_fps", 60),
        ({"maxFps": -5}, "max_fps", 1),
        ({"maxFps": "45"}, "max_fps", 45),
        ({"startingBalance": None}, "starting_balance", 500),
        ({"startingBalance": [1, 2]}, "starting_balance", 500),
        ({"startingBalance": True}, "starting_balance", 500),
        ({"startingBalance": float("inf")}, "starting_balance", 500),
        ({"fullscreen": "no"}, "fullscreen", False),
        ({"resolution": [800]}, "resolution", (1280, 720)),
        ({"resolution": None}, "resolution", (1280, 720)),
    ],
)
def test_settings_fall_back_per_field(data, field, expected):
    settings = GameSettings.from_dict({"maxFps": 30, "startingBalance": 900, **data})
    assert getattr(settings, field) == expected
    if field != "max_fps":
        assert settings.max_fps == 30
    if field != "starting_balance":
        assert settings.starting_balance == 900


def test_bindings_ignore_malformed_overrides(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({"bindings": {"confirm": "K_y", "quit": [5], "advance_day": ["K_n"]}}))
    bindings = InputBindings.load(path)
    assert bindings.actions["confirm"] == DEFAULT_BINDINGS["confirm"]
    assert bindings.actions["quit"] == DEFAULT_BINDINGS["quit"]
    assert bindings.actions["advance_day"] == ["K_n"]

    path.write_text(json.dumps({"bindings": ["K_1"]}))
    assert InputBindings.load(path).actions == DEFAULT_BINDINGS


def test_disabled_channels_stay_quiet(caplog):
    logger = GameLogger(LoggerConfig())
    with caplog.at_level(logging.DEBUG, logger="outbreak"):
        logger.channel("ui").info("hidden")
        logger.channel("economy").info("shown")
        logger.channel("brand_new").info("also hidden")
    assert "shown" in caplog.text
    assert "hidden" not in caplog.text
    logger.set_enabled("brand_new", True)
    assert logger.channel("brand_new").enabled
    assert "brand_new" in set(logger.channels())


def test_init_logger_uses_settings_path(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({"logChannels": {"input": True}}))
    logger = init_logger(path)
    assert logger.channel("input").enabled


def test_settings_defaults_and_overrides(tmp_path):
    assert GameSettings.load(tmp_path / "missing.json") == GameSettings()
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({"resolution": [800, 600], "maxFps": 30, "startingBalance": 900}))
    settings = GameSettings.load(path)
    assert settings.resolution == (800, 600)
    assert settings.max_fps == 30
    assert settings.starting_balance == 900
    assert settings.fullscreen is False


@pytest.mark.parametrize("payload", ["[1, 2, 3]", "{broken", json.dumps({"resolution": "wide"})])
def test_settings_fall_back_on_bad_data(tmp_path, payload):
    path = tmp_path / "settings.json"
    path.write_text(payload)
    assert GameSettings.load(path).resolution == GameSettings().resolution


def test_bindings_load_merges_overrides(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({"logLevel": "INFO", "bindings": {"advance_day": ["K_n"]}}))
    bindings = InputBindings.load(path)
    assert bindings.actions["advance_day"] == ["K_n"]
    assert bindings.actions["buy_1"] == DEFAULT_BINDINGS["buy_1"]

    bindings.actions["confirm"] = ["K_y"]
    bindings.save(path)
    saved = json.loads(path.read_text())
    assert saved["logLevel"] == "INFO"
    assert saved["bindings"]["confirm"] == ["K_y"]


def test_default_bindings_are_not_shared():
    bindings = InputBindings()
    bindings.actions["buy_1"].append("K_F1")
    assert DEFAULT_BINDINGS["buy_1"] == ["K_1"]


def test_input_mapper_resolves_key_names():
    mapper = InputMapper(InputBindings(actions={"confirm": ["K_RETURN", "K_SPACE"], "bogus": ["K_NOPE"]}))
    assert mapper.actions_for(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_SPACE)) == ["confirm"]
    assert mapper.actions_for(pygame.event.Event(pygame.KEYUP, key=pygame.K_SPACE)) == []
    assert mapper.is_action(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_RETURN), "confirm")


def test_scene_manager_swaps_scenes_and_merges_context():
    _RecordingScene.events = []
    manager = SceneManager()
    manager.register("a", _RecordingScene)
    manager.register("b", _RecordingScene)
    manager.set_context(run="shared")
    manager.activate("a", extra=1)
    manager.update(0.5)
    manager.activate("b")

    assert _RecordingScene.events == [
        ("enter", {"run": "shared", "extra": 1}),
        ("update", 0.5),
        ("exit", None),
        ("enter", {"run": "shared"}),
    ]
    assert manager.active_name() == "b"
    assert manager.active().require("run") == "shared"


def test_scene_manager_rejects_unknown_scene():
    manager = SceneManager()
    with pytest.raises(KeyError):
        manager.activate("missing")


def test_scene_require_names_missing_collaborator():
    scene = Scene(SceneManager())
    with pytest.raises(KeyError, match="needs 'run'"):
        scene.require("run")


def test_title_scene_starts_run_on_key():
    manager = SceneManager()
    manager.register("title", TitleScene)
    manager.register("upgrades", _RecordingScene)
    run = RunController(starting_balance=321)
    manager.set_context(run=run, input=InputMapper())
    manager.activate("title")
    manager.handle_event(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_a))
    assert manager.active_name() == "upgrades"
    assert run.running
    assert run.state.balance == 321


def test_frame_loop_caps_frame_time_and_stops():
    clock = _FakeClock(step_ms=500)
    updates = []
    renders = []
    loop = FrameLoop(updates.append, lambda: renders.append(True), lambda: None, clock, max_fps=30)
    loop.run(max_frames=3)
    assert updates == [0.25, 0.25, 0.25]
    assert len(renders) == 3
    assert clock.calls == [30, 30, 30]
    assert not loop.running


def test_frame_loop_stop_from_event_handler_skips_frame():
    clock = _FakeClock(step_ms=16)
    updates = []
    loop = FrameLoop(updates.append, lambda: None, lambda: loop.stop(), clock)
    loop.run()
    assert updates == []
    assert loop.frames == 0


def test_scene_transitions_logged_on_ui_channel(caplog):
    logger = GameLogger(LoggerConfig())
    logger.set_enabled("ui", True)
    manager = SceneManager(log=logger.channel("ui"))
    manager.register("a", _RecordingScene)
    manager.register("b", _RecordingScene)
    with caplog.at_level(logging.DEBUG, logger="outbreak.ui"):
        manager.activate("a")
        manager.activate("b")
    assert "Scene None -> a" in caplog.text
    assert "Scene a -> b" in caplog.text
