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

"""Agent following a uniform distribution over legal actions."""

import numpy as np

from tabular_mdp import rl_agent


class RandomAgent(rl_agent.AbstractAgent):
  """Random agent class."""

  def __init__(self, rng=None, seed=None, name="random_agent"):
    self._rng = rng if rng is not None else np.random.RandomState(seed)
    self.name = name

  def step(self, state, is_evaluation=False):
    legal_actions = state.legal_actions()
    assert legal_actions, "RandomAgent cannot act in a terminal state"
    action = legal_actions[self._rng.randint(len(legal_actions))]
    probs = {a: 1.0 / len(legal_actions) for a in legal_actions}
    return rl_agent.StepOutput(action=action, probs=probs)
