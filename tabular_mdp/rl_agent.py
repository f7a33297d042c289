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

"""Agents that pick moves in a game.

How a policy is computed (the solvers in `tabular_mdp.algorithms`) is kept
apart from how it is used to play: a `PolicyAgent` simply looks up the move
for the current state in an already computed `Policy`.
"""

import abc
import collections

StepOutput = collections.namedtuple("step_output", ["action", "probs"])


class AbstractAgent(metaclass=abc.ABCMeta):
  """Abstract base class for agents."""

  @abc.abstractmethod
  def step(self, state, is_evaluation=False):
    """Returns the chosen action and action probabilities at `state`.

    Arguments:
      state: a non-terminal game state.
      is_evaluation: bool indicating whether the step is an evaluation
        routine, as opposed to a normal training step.

    Returns:
      A `StepOutput`, whose `probs` is a dict from legal actions to their
      probability of being chosen.
    """


class PolicyAgent(AbstractAgent):
  """Plays the action a fixed `Policy` prescribes."""

  def __init__(self, policy, name="policy_agent"):
    self._policy = policy
    self.name = name

  @property
  def policy(self):
    return self._policy

  def step(self, state, is_evaluation=False):
    del is_evaluation  # Deterministic either way.
    action = self._policy[state]
    return StepOutput(action=action, probs={action: 1.0})
