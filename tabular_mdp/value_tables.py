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

"""Exact tabular storage for state values and action values.

Both tables are fully populated with zeros when they are created, and any
lookup on a key outside that initial domain raises `MissingEntryError`.
Values are kept in numpy arrays indexed through a fixed state ordering, so a
sweep can build a whole new array from a snapshot of the old one and swap it
in at once.
"""

import numpy as np

from tabular_mdp import errors


class ValueFunction(object):
  """A mapping from every state of a state space to a float.

  Terminal states are pinned at 0.0.
  """

  def __init__(self, states):
    self._states = list(states)
    self._state_index = {}
    for state in self._states:
      if state in self._state_index:
        raise ValueError(f"Duplicate state {state!r}")
      self._state_index[state] = len(self._state_index)
    self._terminal_mask = np.array(
        [state.is_terminal() for state in self._states], dtype=bool)
    self._values = np.zeros(len(self._states))
    self._frozen = False

  @property
  def states(self):
    return self._states

  @property
  def terminal_mask(self):
    return self._terminal_mask

  @property
  def frozen(self):
    return self._frozen

  def state_index(self, state):
    """Returns the position of `state` in the value array."""
    try:
      return self._state_index[state]
    except KeyError:
      raise errors.MissingEntryError(state) from None

  def snapshot(self):
    """Returns a read-only view of the current values."""
    view = self._values.view()
    view.setflags(write=False)
    return view

  def replace(self, new_values):
    """Replaces every value at once, e.g. at the end of a sweep.

    Args:
      new_values: an array with one entry per state, in `states` order.
        Entries of terminal states are reset to 0.0.

    Returns:
      The maximum absolute change over all states.
    """
    if self._frozen:
      raise RuntimeError("Cannot update a frozen value function")
    new_values = np.array(new_values, dtype=float)
    assert new_values.shape == self._values.shape
    new_values[self._terminal_mask] = 0.0
    delta = np.max(np.abs(new_values - self._values), initial=0.0)
    self._values = new_values
    return float(delta)

  def freeze(self):
    self._values.setflags(write=False)
    self._frozen = True

  def __getitem__(self, state):
    return float(self._values[self.state_index(state)])

  def __contains__(self, state):
    return state in self._state_index

  def __len__(self):
    return len(self._states)

  def items(self):
    return [(state, float(value))
            for state, value in zip(self._states, self._values)]

  def as_dict(self):
    return dict(self.items())


class QTable(object):
  """A mapping from (state, legal action) to a float.

  Only non-terminal states with at least one legal action get entries.
  """

  def __init__(self, states):
    self._actions = {}
    self._q_values = {}
    for state in states:
      if state.is_terminal():
        continue
      legal_actions = tuple(state.legal_actions())
      if not legal_actions:
        continue
      self._actions[state] = legal_actions
      self._q_values[state] = np.zeros(len(legal_actions))
    self._frozen = False

  @property
  def frozen(self):
    return self._frozen

  def states(self):
    return list(self._q_values)

  def actions(self, state):
    """Returns the ordered legal actions of `state`."""
    try:
      return self._actions[state]
    except KeyError:
      raise errors.MissingEntryError(state) from None

  def values(self, state):
    """Returns a read-only view of the Q-values of `state`'s actions."""
    try:
      view = self._q_values[state].view()
    except KeyError:
      raise errors.MissingEntryError(state) from None
    view.setflags(write=False)
    return view

  def _index(self, state, action):
    try:
      return self.actions(state).index(action)
    except ValueError:
      raise errors.MissingEntryError((state, action)) from None

  def __getitem__(self, key):
    state, action = key
    index = self._index(state, action)
    return float(self._q_values[state][index])

  def __setitem__(self, key, value):
    if self._frozen:
      raise RuntimeError("Cannot update a frozen Q-table")
    state, action = key
    index = self._index(state, action)
    self._q_values[state][index] = value

  def __contains__(self, key):
    state, action = key
    return action in self._actions.get(state, ())

  def __len__(self):
    return sum(len(actions) for actions in self._actions.values())

  def max_value(self, state):
    """Returns max_a Q(state, a)."""
    return float(np.max(self.values(state)))

  def freeze(self):
    for q_values in self._q_values.values():
      q_values.setflags(write=False)
    self._frozen = True
