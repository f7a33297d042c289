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

"""Value iteration algorithm for solving an MDP."""

from absl import logging

from tabular_mdp import errors
from tabular_mdp import policy as policy_lib
from tabular_mdp import value_tables
from tabular_mdp.algorithms import bellman


class ValueIterationSolver(object):
  """Runs a fixed number of Bellman-optimality sweeps, then extracts a policy.

  No convergence test is made between sweeps: `num_sweeps` must be large
  enough for the values to approach their fixed point.
  """

  def __init__(self,
               transition_model,
               states,
               discount=0.9,
               num_sweeps=50,
               tie_breaking_policy=policy_lib.TieBreakingPolicy.FIRST_ACTION):
    bellman.check_discount(discount)
    if num_sweeps < 0:
      raise errors.ConfigurationError(
          f"Number of sweeps must be non-negative, got {num_sweeps}")
    self._discount = discount
    self._num_sweeps = num_sweeps
    self._tie_breaking_policy = tie_breaking_policy
    self._value_function = value_tables.ValueFunction(states)
    self._table = bellman.TransitionTable(transition_model,
                                          self._value_function)
    self._last_delta = None

  @property
  def value_function(self):
    return self._value_function

  @property
  def last_delta(self):
    """Largest value change in the final sweep, None before `solve()`."""
    return self._last_delta

  def iterate(self):
    """Performs the configured number of sweeps over the value function."""
    for sweep in range(self._num_sweeps):
      self._last_delta = self._value_function.replace(
          bellman.optimality_sweep(self._table, self._discount))
      logging.debug("Value iteration sweep %d: delta %g", sweep + 1,
                    self._last_delta)

  def extract_policy(self):
    return bellman.greedy_policy(self._table, self._discount,
                                 self._tie_breaking_policy)

  def solve(self):
    """Runs value iteration and returns the greedy policy."""
    self.iterate()
    logging.info("Value iteration: %d sweeps over %d states, last delta %s",
                 self._num_sweeps, len(self._value_function), self._last_delta)
    self._value_function.freeze()
    return self.extract_policy()


def value_iteration(transition_model, states, discount=0.9, num_sweeps=50):
  """Solves an MDP by value iteration.

  Arguments:
    transition_model: a `mdp.TransitionModel`.
    states: every state of the MDP, terminal ones included.
    discount: discount factor, in [0, 1].
    num_sweeps: how many synchronous sweeps to perform.

  Returns:
    A `policy.Policy` over every decision state.
  """
  return ValueIterationSolver(
      transition_model, states, discount=discount,
      num_sweeps=num_sweeps).solve()
