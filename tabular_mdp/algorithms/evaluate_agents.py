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

"""Play an agent against the opponent of an environment."""

import collections

import numpy as np

Results = collections.namedtuple("Results", ["wins", "draws", "losses"])


def play_episode(env, agent):
  """Plays one episode of `agent` in `env`, returns the terminal state."""
  env.reset()
  while not env.is_terminal():
    env.step(agent.step(env.current_state(), is_evaluation=True).action)
  return env.current_state()


def play_episodes(env, agent, num_episodes):
  """Evaluates `agent` against `env`'s opponent for `num_episodes`.

  Arguments:
    env: an `rl_environment.Environment`; its terminal states must provide
      `winner()`.
    agent: an `rl_agent.AbstractAgent` playing `env.player`.
    num_episodes: number of games to play.

  Returns:
    A `Results` of win, draw and loss rates.
  """
  assert num_episodes > 0
  outcomes = np.zeros(3)
  for _ in range(num_episodes):
    winner = play_episode(env, agent).winner()
    if winner is None:
      outcomes[1] += 1
    elif winner == env.player:
      outcomes[0] += 1
    else:
      outcomes[2] += 1
  return Results(*(outcomes / num_episodes).tolist())
