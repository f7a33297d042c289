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

"""Policy iteration for finite MDPs.

Two notions of convergence are involved. Policy evaluation repeats
Bellman-expectation sweeps under a fixed policy until the largest change in
value is at most `threshold`. Policy iteration as a whole alternates
evaluation and greedy improvement until improvement no longer changes the
action of any state.
"""

import enum

from absl import logging
import numpy as np

from tabular_mdp import errors
from tabular_mdp import policy as policy_lib
from tabular_mdp import value_tables
from tabular_mdp.algorithms import bellman


class Phase(enum.Enum):
  """Where a `PolicyIterationSolver` is in its evaluate/improve cycle."""
  EVALUATING = 0
  IMPROVING = 1
  CONVERGED = 2


class PolicyEvaluator(object):
  """Computes the value function of a fixed policy."""

  def __init__(self, table, discount, threshold):
    """Initializes the evaluator.

    Args:
      table: a `bellman.TransitionTable`; its value function is updated in
        place.
      discount: discount factor, in [0, 1). A discount of 1 is rejected since
        the sweeps would not be guaranteed to terminate.
      threshold: positive float, evaluation stops once no value changes by
        more than this in a sweep.
    """
    bellman.check_discount(discount, allow_one=False)
    if threshold <= 0:
      raise errors.ConfigurationError(
          f"Convergence threshold must be positive, got {threshold}")
    self._table = table
    self._discount = discount
    self._threshold = threshold
    self._last_num_sweeps = 0

  @property
  def last_num_sweeps(self):
    return self._last_num_sweeps

  def evaluate(self, policy):
    """Sweeps until the values of `policy` have converged.

    Args:
      policy: a `policy.Policy` defined on every decision state.

    Returns:
      The updated `value_tables.ValueFunction`.
    """
    value_function = self._table.value_function
    self._last_num_sweeps = 0
    delta = self._threshold + 1
    while delta > self._threshold:
      delta = value_function.replace(
          bellman.expectation_sweep(self._table, policy, self._discount))
      self._last_num_sweeps += 1
      logging.debug("Evaluation sweep %d: delta %g", self._last_num_sweeps,
                    delta)
    return value_function


class PolicyImprover(object):
  """Derives a greedy policy from a value function by one-step lookahead."""

  def __init__(self,
               table,
               discount,
               tie_breaking_policy=policy_lib.TieBreakingPolicy.FIRST_ACTION):
    bellman.check_discount(discount)
    self._table = table
    self._discount = discount
    self._tie_breaking_policy = tie_breaking_policy

  def improve(self, policy):
    """Returns `(new_policy, changed)`.

    The lookahead reads the current values of the table's value function,
    the same object `PolicyEvaluator.evaluate` updates in place, with the
    table's transition model and the discount given at construction.

    Args:
      policy: the `policy.Policy` the greedy policy is compared against.

    Returns:
      The greedy `policy.Policy`, and True iff its action differs from
      `policy`'s action for at least one state.
    """
    new_policy = bellman.greedy_policy(self._table, self._discount,
                                       self._tie_breaking_policy)
    changed = bool(new_policy.changed_states(policy))
    return new_policy, changed


class PolicyIterationSolver(object):
  """Alternates policy evaluation and improvement until the policy is stable.

  Usage:
    solver = PolicyIterationSolver(model, states, seed=0)
    policy = solver.solve()
    value = solver.value_function[state]
  """

  def __init__(self,
               transition_model,
               states,
               discount=0.9,
               threshold=0.1,
               tie_breaking_policy=policy_lib.TieBreakingPolicy.FIRST_ACTION,
               initial_policy=None,
               rng=None,
               seed=None):
    """Initializes the solver.

    Args:
      transition_model: a `mdp.TransitionModel`.
      states: every state of the MDP, terminal ones included.
      discount: discount factor, in [0, 1).
      threshold: convergence threshold of policy evaluation.
      tie_breaking_policy: how improvement picks among equally good actions.
      initial_policy: optional starting `policy.Policy`. Defaults to a random
        legal action per state drawn from `rng`.
      rng: a `np.random.RandomState`. Created from `seed` if not given.
      seed: seed for the random state, used only if `rng` is None.
    """
    self._rng = rng if rng is not None else np.random.RandomState(seed)
    self._value_function = value_tables.ValueFunction(states)
    self._table = bellman.TransitionTable(transition_model,
                                          self._value_function)
    self._evaluator = PolicyEvaluator(self._table, discount, threshold)
    self._improver = PolicyImprover(self._table, discount, tie_breaking_policy)
    if initial_policy is None:
      initial_policy = policy_lib.random_policy(self._value_function.states,
                                                self._rng)
    self._policy = initial_policy
    self._phase = Phase.EVALUATING
    self._num_iterations = 0

  @property
  def value_function(self):
    return self._value_function

  @property
  def policy(self):
    return self._policy

  @property
  def phase(self):
    return self._phase

  @property
  def num_iterations(self):
    """Number of improvement steps taken so far."""
    return self._num_iterations

  def step(self):
    """Runs the current phase and moves to the next one."""
    if self._phase == Phase.EVALUATING:
      self._evaluator.evaluate(self._policy)
      self._phase = Phase.IMPROVING
    elif self._phase == Phase.IMPROVING:
      new_policy, changed = self._improver.improve(self._policy)
      self._num_iterations += 1
      logging.info(
          "Policy iteration %d: %d evaluation sweeps, %d states changed",
          self._num_iterations, self._evaluator.last_num_sweeps,
          len(new_policy.changed_states(self._policy)))
      self._policy = new_policy
      self._phase = Phase.EVALUATING if changed else Phase.CONVERGED
    return self._phase

  def solve(self):
    """Runs policy iteration to convergence and returns the stable policy."""
    while self._phase != Phase.CONVERGED:
      self.step()
    self._value_function.freeze()
    return self._policy


def policy_iteration(transition_model, states, discount=0.9, threshold=0.1,
                     rng=None, seed=None):
  """Solves an MDP by policy iteration.

  Arguments:
    transition_model: a `mdp.TransitionModel`.
    states: every state of the MDP, terminal ones included.
    discount: discount factor, in [0, 1).
    threshold: convergence threshold of each policy evaluation.
    rng: optional `np.random.RandomState` for the initial policy.
    seed: seed used when `rng` is None.

  Returns:
    A `policy.Policy` over every decision state.
  """
  return PolicyIterationSolver(
      transition_model, states, discount=discount, threshold=threshold,
      rng=rng, seed=seed).solve()
