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

"""Tabular Q-learning against a simulation environment."""

from absl import logging
import numpy as np

from tabular_mdp import errors
from tabular_mdp import policy as policy_lib
from tabular_mdp import rl_tools
from tabular_mdp import value_tables
from tabular_mdp.algorithms import bellman


class QLearner(object):
  """Tabular Q-learning.

  Every (state, legal action) pair of `states` starts with a Q-value of 0.
  Behaviour is epsilon-greedy. Both the greedy behaviour and the final
  policy extraction break ties with `tie_breaking_policy`, which defaults to
  letting the last of several equally valued actions win.

  See tabular_mdp/examples/tic_tac_toe_solvers.py for an usage example.
  """

  def __init__(self,
               env,
               states,
               step_size=0.1,
               discount_factor=0.9,
               epsilon_schedule=0.1,
               num_episodes=40000,
               tie_breaking_policy=policy_lib.TieBreakingPolicy.LAST_ACTION,
               rng=None,
               seed=None,
               log_every=10000):
    """Initialize the Q-Learning agent.

    Args:
      env: a `rl_environment.SimulationEnvironment`.
      states: every state of the MDP; Q-entries are created for the legal
        actions of the non-terminal ones.
      step_size: the learning rate alpha, in (0, 1].
      discount_factor: the discount gamma, in [0, 1].
      epsilon_schedule: a float or a `rl_tools.ValueSchedule`, the probability
        of taking a uniformly random action. Schedules step once per update.
      num_episodes: number of episodes `solve` trains for.
      tie_breaking_policy: a `policy.TieBreakingPolicy`.
      rng: a `np.random.RandomState`, created from `seed` if not given.
      seed: seed used when `rng` is None.
      log_every: log progress every that many episodes.
    """
    if not 0 < step_size <= 1:
      raise errors.ConfigurationError(
          f"Step size must lie in (0, 1], got {step_size}")
    bellman.check_discount(discount_factor)
    if num_episodes < 0:
      raise errors.ConfigurationError(
          f"Number of episodes must be non-negative, got {num_episodes}")
    self._epsilon_schedule = rl_tools.as_schedule(epsilon_schedule)
    self._epsilon = self._check_epsilon(self._epsilon_schedule.value)
    # A linear schedule stays between its initial and final values.
    if isinstance(self._epsilon_schedule, rl_tools.LinearSchedule):
      self._check_epsilon(self._epsilon_schedule.final_value)
    self._env = env
    self._step_size = step_size
    self._discount_factor = discount_factor
    self._num_episodes = num_episodes
    self._tie_breaking_policy = tie_breaking_policy
    self._rng = rng if rng is not None else np.random.RandomState(seed)
    self._log_every = log_every
    self._q_values = value_tables.QTable(states)
    self._episodes_played = 0
    self._episodes_aborted = 0
    self._last_loss_value = None

  @staticmethod
  def _check_epsilon(epsilon):
    if not 0 <= epsilon <= 1:
      raise errors.ConfigurationError(
          f"Epsilon must lie in [0, 1], got {epsilon}")
    return epsilon

  @property
  def q_table(self):
    return self._q_values

  @property
  def episodes_played(self):
    return self._episodes_played

  @property
  def episodes_aborted(self):
    return self._episodes_aborted

  @property
  def loss(self):
    return self._last_loss_value

  def greedy_action(self, state):
    """Returns argmax_a Q(state, a) under the configured tie-breaking."""
    action, _ = policy_lib.argmax(self._q_values.actions(state),
                                  self._q_values.values(state),
                                  self._tie_breaking_policy)
    return action

  def _epsilon_greedy(self, state, epsilon):
    """Returns a valid epsilon-greedy action for `state`.

    Args:
      state: a non-terminal state.
      epsilon: float, prob of taking an exploratory action.

    Returns:
      The chosen action.
    """
    if self._rng.random_sample() < epsilon:
      legal_actions = self._q_values.actions(state)
      return legal_actions[self._rng.randint(len(legal_actions))]
    return self.greedy_action(state)

  def _update(self, transition):
    """Applies the temporal-difference update for one sampled transition."""
    target = transition.reward
    # Q values are zero for terminal states.
    if not transition.next_state.is_terminal():
      target += self._discount_factor * self._q_values.max_value(
          transition.next_state)
    key = (transition.state, transition.action)
    prev_q_value = self._q_values[key]
    self._last_loss_value = target - prev_q_value
    self._q_values[key] = ((1 - self._step_size) * prev_q_value +
                           self._step_size * target)
    # Decay epsilon, if necessary.
    self._epsilon = self._check_epsilon(self._epsilon_schedule.step())

  def run_episode(self):
    """Plays and learns from one episode.

    Returns:
      True if the episode ran to its end, False if it was aborted because the
      environment rejected an action.
    """
    self._env.reset()
    self._episodes_played += 1
    while not self._env.is_terminal():
      state = self._env.current_state()
      action = self._epsilon_greedy(state, self._epsilon)
      try:
        transition = self._env.step(action)
      except errors.IllegalActionError as e:
        logging.warning("Aborting episode %d: %s", self._episodes_played, e)
        self._episodes_aborted += 1
        return False
      self._update(transition)
    return True

  def train(self, num_episodes=None):
    """Runs `num_episodes` episodes (by default the configured number)."""
    if num_episodes is None:
      num_episodes = self._num_episodes
    for _ in range(num_episodes):
      self.run_episode()
      if self._log_every and self._episodes_played % self._log_every == 0:
        logging.info("Q-learning episode %d, epsilon %s, last TD error %s",
                     self._episodes_played, self._epsilon,
                     self._last_loss_value)

  def extract_policy(self):
    """Returns the greedy policy of the current Q-values.

    States never visited keep all-zero Q-values; the tie-breaking policy then
    decides which of their actions is chosen.
    """
    return policy_lib.Policy(
        {state: self.greedy_action(state) for state in self._q_values.states()})

  def solve(self):
    """Trains for the configured number of episodes and returns the policy."""
    self.train()
    logging.info("Q-learning done: %d episodes, %d aborted",
                 self._episodes_played, self._episodes_aborted)
    self._q_values.freeze()
    return self.extract_policy()


def q_learning(env, states, step_size=0.1, discount_factor=0.9, epsilon=0.1,
               num_episodes=40000, rng=None, seed=None):
  """Solves an MDP by tabular Q-learning in `env`.

  Returns:
    A `policy.Policy` over every non-terminal state of `states`.
  """
  return QLearner(
      env, states, step_size=step_size, discount_factor=discount_factor,
      epsilon_schedule=epsilon, num_episodes=num_episodes, rng=rng,
      seed=seed).solve()
