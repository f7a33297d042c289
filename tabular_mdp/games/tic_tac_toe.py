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

"""Tic tac toe (noughts and crosses), seen as an MDP for one of its players.

States are immutable values: the 9 cells of the board packed into a string
("." for empty, "x" or "o") plus the player to move. Two states built
independently from the same position compare and hash equal, so they can be
used directly as keys of value functions, Q-tables and policies.

`TicTacToeMDP` turns the two-player game into a single-agent MDP: after each
move of the agent, the opponent answers uniformly at random among its legal
moves, and the agent is rewarded according to a configurable `RewardScheme`.
"""

import collections

from tabular_mdp import errors
from tabular_mdp import mdp

_NUM_ROWS = 3
_NUM_COLS = 3
_NUM_CELLS = _NUM_ROWS * _NUM_COLS
_EMPTY = "."
_PLAYERS = ("x", "o")
_LINES = (
    (0, 1, 2), (3, 4, 5), (6, 7, 8),  # rows
    (0, 3, 6), (1, 4, 7), (2, 5, 8),  # columns
    (0, 4, 8), (2, 4, 6),  # diagonals
)


def opponent(player):
  """Returns the other player's marker."""
  return _PLAYERS[1 - _PLAYERS.index(player)]


class TicTacToeState(collections.namedtuple("TicTacToeState",
                                            ["board", "player"])):
  """A tic-tac-toe position and the player to move."""
  __slots__ = ()

  def __new__(cls, board=_EMPTY * _NUM_CELLS, player=_PLAYERS[0]):
    if len(board) != _NUM_CELLS or set(board) - {_EMPTY, *_PLAYERS}:
      raise ValueError(f"Invalid board {board!r}")
    if player not in _PLAYERS:
      raise ValueError(f"Invalid player {player!r}")
    return super(TicTacToeState, cls).__new__(cls, board, player)

  def winner(self):
    """Returns "x" or "o" if that player has a line, and None otherwise."""
    for a, b, c in _LINES:
      if self.board[a] != _EMPTY and self.board[a] == self.board[b] == (
          self.board[c]):
        return self.board[a]
    return None

  def is_terminal(self):
    return self.winner() is not None or _EMPTY not in self.board

  def current_player(self):
    """Returns the player to move, or None if the game is over."""
    return None if self.is_terminal() else self.player

  def legal_actions(self):
    """Returns the empty cells, in ascending order. Empty if terminal."""
    if self.is_terminal():
      return []
    return [cell for cell in range(_NUM_CELLS) if self.board[cell] == _EMPTY]

  def child(self, action):
    """Returns the state after the player to move marks cell `action`."""
    if action not in self.legal_actions():
      raise errors.IllegalActionError(
          f"Action {action!r} is not legal in state {self!r}")
    board = self.board[:action] + self.player + self.board[action + 1:]
    return TicTacToeState(board, opponent(self.player))

  def action_to_string(self, action):
    row, col = _coord(action)
    return "{}({},{})".format(self.player, row, col)

  def __str__(self):
    return "\n".join(
        self.board[row * _NUM_COLS:(row + 1) * _NUM_COLS]
        for row in range(_NUM_ROWS))


class TicTacToeGame(object):
  """Factory for the initial tic-tac-toe state."""

  def num_distinct_actions(self):
    return _NUM_CELLS

  def new_initial_state(self):
    """Returns the empty board, with "x" to move."""
    return TicTacToeState()


class RewardScheme(
    collections.namedtuple("RewardScheme", ["win", "lose", "draw", "living"])):
  """Rewards received by the agent when reaching a state."""
  __slots__ = ()

  def __new__(cls, win=1.0, lose=-1.0, draw=0.0, living=0.0):
    return super(RewardScheme, cls).__new__(cls, win, lose, draw, living)

  def reward(self, state, player):
    """Returns `player`'s reward for reaching `state`."""
    if not state.is_terminal():
      return self.living
    winner = state.winner()
    if winner is None:
      return self.draw
    return self.win if winner == player else self.lose


class TicTacToeMDP(mdp.TransitionModel):
  """Tic-tac-toe from `player`'s point of view, against a random opponent."""

  def __init__(self, player="x", rewards=None):
    if player not in _PLAYERS:
      raise ValueError(f"Invalid player {player!r}")
    self._player = player
    self._rewards = rewards or RewardScheme()

  @property
  def player(self):
    return self._player

  @property
  def rewards(self):
    return self._rewards

  def transitions(self, state, action):
    assert state.current_player() == self._player, (
        f"Not {self._player}'s turn in {state!r}")
    after_move = state.child(action)
    if after_move.is_terminal():
      return [mdp.TransitionOutcome(
          1.0, self._rewards.reward(after_move, self._player), after_move)]
    replies = after_move.legal_actions()
    probability = 1.0 / len(replies)
    outcomes = []
    for reply in replies:
      next_state = after_move.child(reply)
      outcomes.append(mdp.TransitionOutcome(
          probability, self._rewards.reward(next_state, self._player),
          next_state))
    return outcomes


def _coord(move):
  """Returns (row, col) from an action id."""
  return (move // _NUM_COLS, move % _NUM_COLS)
