# Copyright 2026 DeepMind Technologies Limited
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#      http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Reinforcement Learning (RL) environment for two-player games.

The environment plays the opponent's moves itself, so that from the learning
agent's point of view the game is a single-agent MDP whose dynamics are only
known through samples. Interactions occur through `reset` and `step`:

  env = Environment(player="x")
  env.reset()
  while not env.is_terminal():
    transition = env.step(some_legal_action)
    # transition.state, .action, .reward, .next_state

`step` returns a `Transition` covering the agent's move followed by the
opponent's reply (if the game is not over after the agent's move).

`MDPEnvironment` does the same for any known transition model, by sampling
its outcomes.
"""

import abc
import collections

from absl import logging
import numpy as np

from tabular_mdp import errors
from tabular_mdp.algorithms import random_agent
from tabular_mdp.games import tic_tac_toe


Transition = collections.namedtuple(
    "Transition", ["state", "action", "reward", "next_state"])


class SimulationEnvironment(metaclass=abc.ABCMeta):
  """Abstract base class for environments sampled by model-free learners."""

  @abc.abstractmethod
  def current_state(self):
    """Returns the state the agent has to act in."""

  @abc.abstractmethod
  def is_terminal(self):
    """Returns True once the current episode is over."""

  @abc.abstractmethod
  def reset(self):
    """Starts a new episode and returns its first state."""

  @abc.abstractmethod
  def step(self, action):
    """Plays `action` and returns a `Transition`.

    Raises:
      IllegalActionError: if `action` is not legal in the current state. The
        environment is left unchanged.
    """


class MDPEnvironment(SimulationEnvironment):
  """Samples episodes from a known `mdp.TransitionModel`."""

  def __init__(self, transition_model, initial_state, rng=None, seed=None):
    self._model = transition_model
    self._initial_state = initial_state
    self._rng = rng if rng is not None else np.random.RandomState(seed)
    self._state = initial_state

  def current_state(self):
    return self._state

  def is_terminal(self):
    return self._state.is_terminal()

  def reset(self):
    self._state = self._initial_state
    return self._state

  def step(self, action):
    state = self._state
    if action not in state.legal_actions():
      raise errors.IllegalActionError(
          f"step() called on illegal action {action!r} in state {state!r}")
    outcomes = self._model.transitions(state, action)
    probabilities = np.array([outcome.probability for outcome in outcomes])
    outcome = outcomes[self._rng.choice(
        len(outcomes), p=probabilities / probabilities.sum())]
    self._state = outcome.next_state
    return Transition(state, action, outcome.reward, outcome.next_state)


class Environment(SimulationEnvironment):
  """A game in which every move but the agent's is made by an opponent agent."""

  def __init__(self,
               game=None,
               player="x",
               opponent=None,
               rewards=None,
               rng=None,
               seed=None):
    """Constructor.

    Args:
      game: game instance with a `new_initial_state()` method. Defaults to
        tic-tac-toe.
      player: the learning agent's player id.
      opponent: an `rl_agent.AbstractAgent` moving for the other player.
        Defaults to a `RandomAgent` drawing from `rng`.
      rewards: a `tic_tac_toe.RewardScheme`, or any object with a
        `reward(state, player)` method.
      rng: a `np.random.RandomState`, created from `seed` if not given.
      seed: seed used when `rng` is None.
    """
    self._game = game or tic_tac_toe.TicTacToeGame()
    self._player = player
    self._rng = rng if rng is not None else np.random.RandomState(seed)
    self._opponent = opponent or random_agent.RandomAgent(rng=self._rng)
    self._rewards = rewards or tic_tac_toe.RewardScheme()
    self._state = None
    logging.info("Environment for player %s against %s", player,
                 getattr(self._opponent, "name", type(self._opponent).__name__))
    self.reset()

  @property
  def player(self):
    return self._player

  @property
  def rewards(self):
    return self._rewards

  def current_state(self):
    return self._state

  def is_terminal(self):
    return self._state.is_terminal()

  def _play_opponent(self, state):
    """Lets the opponent move until it is the agent's turn or the game ends."""
    while not state.is_terminal() and state.current_player() != self._player:
      state = state.child(self._opponent.step(state).action)
    return state

  def reset(self):
    self._state = self._play_opponent(self._game.new_initial_state())
    return self._state

  def step(self, action):
    state = self._state
    if action not in state.legal_actions():
      raise errors.IllegalActionError(
          f"step() called on illegal action {action!r} in state {state!r}")
    next_state = self._play_opponent(state.child(action))
    self._state = next_state
    return Transition(
        state=state,
        action=action,
        reward=self._rewards.reward(next_state, self._player),
        next_state=next_state)
