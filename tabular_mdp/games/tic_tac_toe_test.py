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

"""Tests for tabular_mdp.games.tic_tac_toe."""

from absl.testing import absltest
from absl.testing import parameterized
import numpy as np

from tabular_mdp import errors
from tabular_mdp.games import tic_tac_toe


class TicTacToeStateTest(parameterized.TestCase):

  def test_can_create_game_and_state(self):
    game = tic_tac_toe.TicTacToeGame()
    state = game.new_initial_state()
    self.assertEqual(str(state), "...\n...\n...")
    self.assertEqual(state.current_player(), "x")
    self.assertEqual(state.legal_actions(), list(range(9)))
    self.assertFalse(state.is_terminal())

  def test_equality_is_structural(self):
    state = tic_tac_toe.TicTacToeState().child(4).child(0)
    same = tic_tac_toe.TicTacToeState("o...x....", "x")
    self.assertEqual(state, same)
    self.assertEqual(hash(state), hash(same))
    self.assertEqual({state: 1}[same], 1)
    self.assertNotEqual(state, tic_tac_toe.TicTacToeState("o...x....", "o"))

  def test_child_does_not_mutate(self):
    state = tic_tac_toe.TicTacToeState()
    child = state.child(3)
    self.assertEqual(state.board, ".........")
    self.assertEqual(child.board, "...x.....")
    self.assertEqual(child.player, "o")

  @parameterized.parameters(
      ("xxx.oo...", "x"),
      ("oxxo..o..", "o"),
      ("o.xox.x..", "x"),
      ("xo.xo....", None),
  )
  def test_winner(self, board, winner):
    state = tic_tac_toe.TicTacToeState(board, "o")
    self.assertEqual(state.winner(), winner)
    self.assertEqual(state.is_terminal(), winner is not None)

  def test_full_board_is_a_draw(self):
    state = tic_tac_toe.TicTacToeState("xoxxoooxx", "o")
    self.assertTrue(state.is_terminal())
    self.assertIsNone(state.winner())
    self.assertIsNone(state.current_player())
    self.assertEqual(state.legal_actions(), [])

  def test_illegal_child(self):
    state = tic_tac_toe.TicTacToeState().child(4)
    with self.assertRaises(errors.IllegalActionError):
      state.child(4)
    with self.assertRaises(errors.IllegalActionError):
      tic_tac_toe.TicTacToeState("xxx.oo...", "o").child(3)

  def test_invalid_board(self):
    with self.assertRaises(ValueError):
      tic_tac_toe.TicTacToeState("xx", "o")
    with self.assertRaises(ValueError):
      tic_tac_toe.TicTacToeState("........z", "x")

  def test_random_game(self):
    rng = np.random.RandomState(7)
    state = tic_tac_toe.TicTacToeGame().new_initial_state()
    while not state.is_terminal():
      legal_actions = state.legal_actions()
      state = state.child(legal_actions[rng.randint(len(legal_actions))])
    self.assertEqual(state.legal_actions(), [])


class TicTacToeMDPTest(absltest.TestCase):

  def test_winning_move_has_single_outcome(self):
    model = tic_tac_toe.TicTacToeMDP("x")
    state = tic_tac_toe.TicTacToeState("xoxoxoox.", "x")
    self.assertEqual(state.legal_actions(), [8])
    outcomes = model.transitions(state, 8)
    self.assertLen(outcomes, 1)
    self.assertEqual(outcomes[0].probability, 1.0)
    self.assertEqual(outcomes[0].reward, 1.0)
    self.assertTrue(outcomes[0].next_state.is_terminal())

  def test_opponent_replies_uniformly(self):
    model = tic_tac_toe.TicTacToeMDP("x")
    outcomes = model.transitions(tic_tac_toe.TicTacToeState(), 4)
    self.assertLen(outcomes, 8)
    self.assertAlmostEqual(sum(o.probability for o in outcomes), 1.0)
    for outcome in outcomes:
      self.assertAlmostEqual(outcome.probability, 1 / 8)
      self.assertEqual(outcome.reward, 0.0)
      self.assertEqual(outcome.next_state.current_player(), "x")

  def test_rewards(self):
    rewards = tic_tac_toe.RewardScheme(win=10, lose=-5, draw=2, living=-0.5)
    model = tic_tac_toe.TicTacToeMDP("x", rewards)
    # After x plays 1, o can win on the middle row by playing 5.
    state = tic_tac_toe.TicTacToeState("x..oo.x..", "x")
    outcomes = {o.next_state.board: o.reward
                for o in model.transitions(state, 1)}
    self.assertLen(outcomes, 4)
    self.assertEqual(outcomes["xx.ooox.."], -5)
    self.assertEqual(outcomes["xxooo.x.."], -0.5)
    self.assertEqual(
        model.transitions(tic_tac_toe.TicTacToeState("xoxoxoox.", "x"),
                          8)[0].reward, 10)

  def test_rewards_from_o_point_of_view(self):
    model = tic_tac_toe.TicTacToeMDP("o")
    state = tic_tac_toe.TicTacToeState("xx.oo.x..", "o")
    outcomes = model.transitions(state, 5)
    self.assertLen(outcomes, 1)
    self.assertEqual(outcomes[0].reward, 1.0)
    self.assertEqual(outcomes[0].next_state.winner(), "o")

  def test_reward_scheme_defaults(self):
    rewards = tic_tac_toe.RewardScheme()
    self.assertEqual(rewards, (1.0, -1.0, 0.0, 0.0))
    draw = tic_tac_toe.TicTacToeState("xoxxoooxx", "o")
    self.assertEqual(rewards.reward(draw, "x"), 0.0)


if __name__ == "__main__":
  absltest.main()
