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


"""Tests for tabular_mdp.algorithms.random_agent."""

from absl.testing import absltest

from tabular_mdp.algorithms import random_agent
from tabular_mdp.games import tic_tac_toe


class RandomAgentTest(absltest.TestCase):

  def test_step(self):
    agent = random_agent.RandomAgent(seed=0)
    state = tic_tac_toe.TicTacToeState("xo.x.o...", "x")
    legal_actions = [2, 4, 6, 7, 8]

    agent_output = agent.step(state)

    self.assertIn(agent_output.action, legal_actions)
    self.assertAlmostEqual(sum(agent_output.probs.values()), 1.0)
    self.assertCountEqual(agent_output.probs, legal_actions)
    for prob in agent_output.probs.values():
      self.assertAlmostEqual(prob, 0.2)

  def test_seeded_agents_agree(self):
    state = tic_tac_toe.TicTacToeState()
    first = random_agent.RandomAgent(seed=5)
    second = random_agent.RandomAgent(seed=5)
    self.assertEqual([first.step(state).action for _ in range(20)],
                     [second.step(state).action for _ in range(20)])

  def test_terminal_state(self):
    agent = random_agent.RandomAgent(seed=0)
    with self.assertRaises(AssertionError):
      agent.step(tic_tac_toe.TicTacToeState("xxxoo....", "o"))


if __name__ == "__main__":
  absltest.main()
