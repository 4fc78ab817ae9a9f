import gymnasium as gym
import numpy as np
import pytest

from mini2048.envs.game2048 import Game2048Env


def test_env_basic_step():
    env = Game2048Env()
    obs, info = env.reset(seed=123)
    assert obs.shape == (4, 4)
    assert env.observation_space.contains(obs)
    assert (obs == 0).sum() == 15  # one tile spawned
    assert obs.sum() == 2
    assert info["spawned"] is True
    obs2, reward, terminated, truncated, info2 = env.step(2)  # left
    assert obs2.shape == (4, 4)
    assert reward == 0.0
    assert terminated is False
    assert truncated is False
    assert "moved" in info2


def test_reset_with_same_seed_is_reproducible():
    env = Game2048Env()
    first, _ = env.reset(seed=9)
    for action in (0, 2, 1, 3):
        env.step(action)
    again, _ = env.reset(seed=9)
    np.testing.assert_array_equal(first, again)


def test_step_spawns_only_after_a_move():
    env = Game2048Env()
    env.reset(seed=0)
    env.engine.load([2, 2] + [0] * 14)
    obs, _, _, _, info = env.step(2)
    assert info["moved"] and info["spawned"]
    assert obs.sum() == 6
    assert obs[0, 0] == 4

    env.engine.load([2, 4, 2, 4, 4, 2, 4, 2] * 2)
    before = env.engine.grid()
    obs, _, _, _, info = env.step(0)
    assert not info["moved"] and not info["spawned"]
    assert info["empty_cells"] == 0
    np.testing.assert_array_equal(obs, before)


def test_invalid_action_raises():
    env = Game2048Env()
    env.reset(seed=1)
    with pytest.raises(gym.error.InvalidAction):
        env.step(4)


def test_render_modes(capsys):
    env = Game2048Env(render_mode="ansi")
    env.reset(seed=2)
    env.engine.load([2048, 0, 0, 0] + [0] * 12)
    text = env.render()
    lines = text.splitlines()
    assert len(lines) == 9
    assert "2048" in lines[1]
    assert lines[3] == "|      |      |      |      |"

    human = Game2048Env(render_mode="human")
    human.reset(seed=2)
    assert human.render() is None
    assert "+------+" in capsys.readouterr().out


def test_observations_stay_in_space_at_largest_tile():
    env = Game2048Env()
    env.reset(seed=4)
    env.engine.load([2 ** 17] + [0] * 15)
    obs, _, _, _, _ = env.step(3)
    assert env.observation_space.contains(obs)
