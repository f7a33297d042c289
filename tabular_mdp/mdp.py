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

"""Transition models consumed by the tabular solvers.

A transition model answers a single question: given a state and an action
legal in it, which outcomes can follow, with which probability and reward.
States are opaque to the solvers apart from three requirements: they are
hashable by content, and they expose `is_terminal()` and `legal_actions()`
(an ordered sequence, empty iff the state is terminal).

`TabularMDP` is an explicit model built from a table of outcomes. It is
mostly useful for small synthetic problems, e.g. in tests.
"""

import abc
import collections

import numpy as np

from tabular_mdp import errors

# Tolerance used when checking that outcome probabilities sum to one.
_PROBABILITY_ATOL = 1e-9

TransitionOutcome = collections.namedtuple(
    "TransitionOutcome", ["probability", "reward", "next_state"])


class TransitionModel(metaclass=abc.ABCMeta):
  """Abstract base class for MDP transition models."""

  @abc.abstractmethod
  def transitions(self, state, action):
    """Returns the possible outcomes of playing `action` in `state`.

    Args:
      state: a non-terminal state.
      action: an action from `state.legal_actions()`.

    Returns:
      A list of `TransitionOutcome`, whose probabilities sum to 1.
    """


def check_outcomes(outcomes, state=None, action=None):
  """Raises a ConfigurationError unless `outcomes` form a distribution."""
  if not outcomes:
    raise errors.ConfigurationError(
        f"No outcomes for action {action!r} in state {state!r}")
  probabilities = np.array([outcome.probability for outcome in outcomes])
  if np.any(probabilities < 0) or not np.isclose(
      probabilities.sum(), 1.0, atol=_PROBABILITY_ATOL):
    raise errors.ConfigurationError(
        f"Outcome probabilities for action {action!r} in state {state!r} "
        f"sum to {probabilities.sum()}, expected 1")


class SimpleState(collections.namedtuple("SimpleState", ["name", "actions"])):
  """A named state with a fixed, ordered tuple of legal actions.

  A state without actions is terminal.
  """
  __slots__ = ()

  def __new__(cls, name, actions=()):
    return super(SimpleState, cls).__new__(cls, name, tuple(actions))

  def legal_actions(self):
    return list(self.actions)

  def is_terminal(self):
    return not self.actions

  def __str__(self):
    return str(self.name)


class TabularMDP(TransitionModel):
  """A transition model backed by an explicit outcome table."""

  def __init__(self, table):
    """Builds the model and validates it.

    Args:
      table: a mapping from `(state, action)` to a list of
        `(probability, reward, next_state)` triples. Every legal action of
        every non-terminal state that appears in the table, as a source or as
        a target, must have an entry.

    Raises:
      ConfigurationError: if an outcome set is not a probability
        distribution, if an entry is given for an illegal action, or if a
        legal action of a reachable non-terminal state has no entry.
    """
    self._table = {}
    self._states = collections.OrderedDict()
    for (state, action), outcomes in table.items():
      if action not in state.legal_actions():
        raise errors.ConfigurationError(
            f"Action {action!r} is not legal in state {state!r}")
      outcomes = [TransitionOutcome(*outcome) for outcome in outcomes]
      check_outcomes(outcomes, state, action)
      self._table[(state, action)] = outcomes
      self._states.setdefault(state, None)
      for outcome in outcomes:
        self._states.setdefault(outcome.next_state, None)

    for state in self._states:
      for action in state.legal_actions():
        if (state, action) not in self._table:
          raise errors.ConfigurationError(
              f"Missing transitions for action {action!r} in state {state!r}")

  def states(self):
    """Returns every state of the model, in order of first appearance."""
    return list(self._states)

  def transitions(self, state, action):
    try:
      return list(self._table[(state, action)])
    except KeyError:
      raise errors.MissingEntryError((state, action)) from None
