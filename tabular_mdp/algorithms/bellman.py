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

"""Bellman backups shared by policy iteration and value iteration.

The transition model is queried once per (state, action) pair and the
outcomes are stored as numpy arrays indexed by the value function's state
ordering. Every backup then reads successor values from a snapshot array, so
a sweep never sees values written earlier in the same sweep.
"""

import numpy as np

from tabular_mdp import errors
from tabular_mdp import policy as policy_lib


def check_discount(discount, allow_one=True):
  """Raises a ConfigurationError for a discount outside [0, 1] (or [0, 1))."""
  upper_ok = discount <= 1.0 if allow_one else discount < 1.0
  if not 0.0 <= discount or not upper_ok:
    bound = "1]" if allow_one else "1)"
    raise errors.ConfigurationError(
        f"Discount must lie in [0, {bound}, got {discount}")


class TransitionTable(object):
  """Pre-computed outcomes of every legal action of every non-terminal state."""

  def __init__(self, transition_model, value_function):
    """Queries `transition_model` for the whole domain of `value_function`.

    Args:
      transition_model: a `mdp.TransitionModel`.
      value_function: a `value_tables.ValueFunction` whose states define the
        domain. Every successor state must belong to it.

    Raises:
      MissingEntryError: if an outcome leads outside the state space.
    """
    self._value_function = value_function
    # state index -> list of (action, probabilities, rewards, next indices)
    self._entries = {}
    for index, state in enumerate(value_function.states):
      if state.is_terminal():
        continue
      entries = []
      for action in state.legal_actions():
        outcomes = transition_model.transitions(state, action)
        entries.append((
            action,
            np.array([o.probability for o in outcomes], dtype=float),
            np.array([o.reward for o in outcomes], dtype=float),
            np.array([value_function.state_index(o.next_state)
                      for o in outcomes], dtype=int),
        ))
      if entries:
        self._entries[index] = entries

  @property
  def value_function(self):
    return self._value_function

  def decision_indices(self):
    """Returns the indices of non-terminal states with legal actions."""
    return list(self._entries)

  def _entry(self, index, action):
    for entry in self._entries[index]:
      if entry[0] == action:
        return entry
    raise errors.MissingEntryError(
        (self._value_function.states[index], action))

  def q_value(self, index, action, values, discount):
    """Returns sum_o p(o) * (r(o) + discount * values[next(o)])."""
    _, probabilities, rewards, next_indices = self._entry(index, action)
    return float(np.dot(probabilities,
                        rewards + discount * values[next_indices]))

  def q_values(self, index, values, discount):
    """Returns the legal actions of state `index` and their action values."""
    actions, q_values = [], []
    for action, probabilities, rewards, next_indices in self._entries[index]:
      actions.append(action)
      q_values.append(float(np.dot(
          probabilities, rewards + discount * values[next_indices])))
    return actions, q_values


def expectation_sweep(table, policy, discount):
  """One synchronous Bellman-expectation sweep under a fixed policy.

  Args:
    table: a `TransitionTable`.
    policy: a `policy.Policy` covering every decision state of `table`.
    discount: the discount factor.

  Returns:
    The new value array, computed entirely from the pre-sweep values.
  """
  value_function = table.value_function
  old_values = value_function.snapshot()
  new_values = np.zeros_like(old_values)
  for index in table.decision_indices():
    state = value_function.states[index]
    new_values[index] = table.q_value(index, policy[state], old_values,
                                      discount)
  return new_values


def optimality_sweep(table, discount):
  """One synchronous Bellman-optimality sweep (max over actions)."""
  old_values = table.value_function.snapshot()
  new_values = np.zeros_like(old_values)
  for index in table.decision_indices():
    _, q_values = table.q_values(index, old_values, discount)
    new_values[index] = max(q_values)
  return new_values


def greedy_policy(
    table,
    discount,
    tie_breaking_policy=policy_lib.TieBreakingPolicy.FIRST_ACTION):
  """One-step lookahead from the current values to a greedy `Policy`."""
  value_function = table.value_function
  values = value_function.snapshot()
  state_to_action = {}
  for index in table.decision_indices():
    actions, q_values = table.q_values(index, values, discount)
    action, _ = policy_lib.argmax(actions, q_values, tie_breaking_policy)
    state_to_action[value_function.states[index]] = action
  return policy_lib.Policy(state_to_action)
