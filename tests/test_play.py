import pathlib

import pytest

import main
from src.clock import FixedStepClock
from src.game.tetris import TetrisGame
from src.play import run_frame, simulate

CONFIG_PATH = pathlib.Path(__file__).resolve().parent.parent / "config" / "game.yaml"


class TestFixedStepClock:
    def test_ticks_constant_step(self):
        clock = FixedStepClock(25)
        assert [clock.tick() for _ in range(4)] == [25.0] * 4
        assert clock.elapsed_ms == 100.0

    def test_rejects_negative_step(self):
        with pytest.raises(ValueError):
            FixedStepClock(-1)


def test_run_frame_updates_then_renders():
    calls = []

    class Recorder:
        def draw(self, game, surface):
            calls.append((game.drop_timer, surface))

    game = TetrisGame(renderer=Recorder())
    run_frame(game, FixedStepClock(250), "screen")
    assert calls == [(250.0, "screen")]


def test_simulate_runs_until_game_over(capsys):
    game = simulate({"seed": 3}, frames=0)
    assert game.is_game_over
    assert "game over" in capsys.readouterr().out


def test_simulate_stops_after_frames(capsys):
    game = simulate({"seed": 3}, frames=30, frame_ms=100)
    assert not game.is_game_over
    assert game.current_piece.y >= 2
    assert "Simulated 30 frames" in capsys.readouterr().out


class TestConfig:
    def test_shipped_config_builds_a_game(self):
        config = main.load_config(CONFIG_PATH)
        game = TetrisGame.from_config(config)
        assert (game.board.width, game.board.height) == (10, 20)
        assert game.move_interval_ms == 100
        assert game.drop_interval_ms == 1000
        assert set(config["key_bindings"]) == {
            "move_left", "move_right", "rotate", "soft_drop", "hard_drop", "hold",
        }

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            main.load_config(tmp_path / "missing.yaml")

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert main.load_config(path) == {}

    def test_non_mapping(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- 1\n- 2\n")
        with pytest.raises(ValueError):
            main.load_config(path)


class TestMain:
    def test_simulate_mode(self, capsys):
        main.main(["--mode", "simulate", "--config", str(CONFIG_PATH), "--frames", "10", "--seed", "1"])
        assert "Simulated 10 frames" in capsys.readouterr().out

    def test_missing_config_exits(self, tmp_path, capsys):
        with pytest.raises(SystemExit) as excinfo:
            main.main(["--mode", "simulate", "--config", str(tmp_path / "nope.yaml")])
        assert excinfo.value.code == 1
        assert "Config file not found" in capsys.readouterr().err

    def test_invalid_setting_exits(self, tmp_path, capsys):
        path = tmp_path / "bad.yaml"
        path.write_text("hold_policy: twice\n")
        with pytest.raises(SystemExit) as excinfo:
            main.main(["--mode", "simulate", "--config", str(path)])
        assert excinfo.value.code == 1
        assert "invalid configuration" in capsys.readouterr().err
