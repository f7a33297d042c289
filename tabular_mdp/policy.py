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

"""Representation of a deterministic policy for a tabular MDP.

A `Policy` is the artifact every solver in `tabular_mdp.algorithms` returns:
an immutable mapping from each non-terminal state to the action to play.
Computing it is the solvers' job, and using it to play is the job of
`rl_agent.PolicyAgent`.
"""

import collections.abc
import enum
import types

from tabular_mdp import errors


class TieBreakingPolicy(enum.Enum):
  """Strategies for choosing among equally valued actions."""
  FIRST_ACTION = 0  # Keep the first best action; update only on strict `>`.
  LAST_ACTION = 1  # Let a later action with an equal value win (`>=`).


def argmax(actions, values, tie_breaking_policy=TieBreakingPolicy.FIRST_ACTION):
  """Returns the `(action, value)` pair with the highest value.

  Args:
    actions: an ordered, non-empty sequence of actions.
    values: the values of `actions`, in the same order.
    tie_breaking_policy: a `TieBreakingPolicy`, deciding which of several
      equally valued actions is returned.

  Returns:
    The best action and its value.
  """
  assert len(actions) == len(values)
  best_action, best_value = None, float("-inf")
  last_wins = tie_breaking_policy == TieBreakingPolicy.LAST_ACTION
  for action, value in zip(actions, values):
    if value > best_value or (last_wins and value == best_value):
      best_action, best_value = action, value
  if best_action is None:
    raise ValueError("argmax() requires at least one action")
  return best_action, best_value


class Policy(collections.abc.Mapping):
  """An immutable mapping from non-terminal states to actions."""

  def __init__(self, state_to_action, validate=True):
    """Initializes the policy.

    Args:
      state_to_action: a mapping from states to the action to play there.
      validate: whether to check that no terminal state is mapped and that
        every action is legal in its state.

    Raises:
      IllegalActionError: if `validate` is set and the mapping contains a
        terminal state or an illegal action.
    """
    table = dict(state_to_action)
    if validate:
      for state, action in table.items():
        if state.is_terminal():
          raise errors.IllegalActionError(
              f"Terminal state {state!r} cannot appear in a policy")
        if action not in state.legal_actions():
          raise errors.IllegalActionError(
              f"Action {action!r} is not legal in state {state!r}")
    self._table = types.MappingProxyType(table)

  def __getitem__(self, state):
    try:
      return self._table[state]
    except KeyError:
      raise errors.MissingEntryError(state) from None

  def __iter__(self):
    return iter(self._table)

  def __len__(self):
    return len(self._table)

  def __repr__(self):
    return f"Policy({len(self)} states)"

  def action(self, state):
    """Returns the action to play in `state`."""
    return self[state]

  def changed_states(self, other):
    """Returns the states on which `other` chooses a different action."""
    return [state for state, action in self._table.items()
            if other.get(state) != action]


def random_policy(states, rng):
  """Returns a policy choosing a uniformly random legal action per state.

  Args:
    states: an iterable of states; terminal states and states without legal
      actions are skipped.
    rng: a `np.random.RandomState`, the only source of randomness.
  """
  table = {}
  for state in states:
    if state.is_terminal():
      continue
    legal_actions = state.legal_actions()
    if legal_actions:
      table[state] = legal_actions[rng.randint(len(legal_actions))]
  return Policy(table)
