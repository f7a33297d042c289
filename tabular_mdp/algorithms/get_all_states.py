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

"""Enumerates the state space of a sequential game."""


def _get_subgame_states(state, all_states, visited, player, depth_limit, depth,
                        include_terminals):
  """Walks the subgame below `state`, collecting states into `all_states`."""
  if state in visited:
    return

  if state.is_terminal():
    if include_terminals:
      all_states[state] = None
    return

  # States cut off by the depth limit stay unvisited, so that a shorter path
  # to them can still collect and expand them.
  if depth > depth_limit >= 0:
    return

  if player is None or state.current_player() == player:
    all_states[state] = None
  visited.add(state)
  for action in state.legal_actions():
    _get_subgame_states(state.child(action), all_states, visited, player,
                        depth_limit, depth + 1, include_terminals)


def get_all_states(game, player=None, depth_limit=-1, include_terminals=True):
  """Gets all states reachable from the initial state of `game`.

  For small games only! Useful for methods that solve games explicitly, e.g.
  value iteration. Positions reached through different move orders are
  visited once.

  Arguments:
    game: an object with a `new_initial_state()` method, whose states are
      hashable and expose `is_terminal()`, `current_player()`,
      `legal_actions()` and `child(action)`.
    player: if set, only keep the non-terminal states where this player is
      to move. States of the other player are still walked through.
    depth_limit: How deeply to analyze the game tree. Negative means no limit, 0
      means root-only, etc.
    include_terminals: If True, include terminal states.

  Returns:
    A list of states, in order of first discovery.
  """
  all_states = dict()
  _get_subgame_states(
      state=game.new_initial_state(),
      all_states=all_states,
      visited=set(),
      player=player,
      depth_limit=depth_limit,
      depth=0,
      include_terminals=include_terminals)

  if not all_states:
    raise ValueError("get_all_states returned 0 states!")

  return list(all_states)
