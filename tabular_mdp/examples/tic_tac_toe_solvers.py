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

"""Solves Tic Tac Toe against a random opponent with a tabular solver.

The policy is computed offline by policy iteration, value iteration or
Q-learning, then played against a fresh random opponent, and the win, draw
and loss rates are logged.
"""

from absl import app
from absl import flags
from absl import logging
import numpy as np

from tabular_mdp import rl_agent
from tabular_mdp import rl_environment
from tabular_mdp.algorithms import evaluate_agents
from tabular_mdp.algorithms import get_all_states
from tabular_mdp.algorithms import policy_iteration
from tabular_mdp.algorithms import tabular_qlearner
from tabular_mdp.algorithms import value_iteration
from tabular_mdp.games import tic_tac_toe

FLAGS = flags.FLAGS

flags.DEFINE_enum("solver", "value_iteration",
                  ["policy_iteration", "value_iteration", "q_learning"],
                  "Which solver computes the policy.")
flags.DEFINE_enum("player", "x", ["x", "o"], "Player the agent plays as.")
flags.DEFINE_float("discount", 0.9, "Discount factor.")
flags.DEFINE_float("threshold", 0.1,
                   "Convergence threshold of policy evaluation.")
flags.DEFINE_integer("num_sweeps", 50, "Number of value iteration sweeps.")
flags.DEFINE_integer("num_episodes", 40000, "Number of Q-learning episodes.")
flags.DEFINE_float("step_size", 0.1, "Q-learning rate.")
flags.DEFINE_float("epsilon", 0.1, "Q-learning exploration rate.")
flags.DEFINE_float("win_reward", 1.0, "Reward for winning.")
flags.DEFINE_float("lose_reward", -1.0, "Reward for losing.")
flags.DEFINE_float("draw_reward", 0.0, "Reward for a draw.")
flags.DEFINE_float("living_reward", 0.0, "Reward for a non-final move.")
flags.DEFINE_integer("eval_episodes", 1000, "Number of evaluation games.")
flags.DEFINE_integer("seed", 0, "Seed of the random number generators.")


def compute_policy(solver, player, rewards, rng, discount=0.9, threshold=0.1,
                   num_sweeps=50, num_episodes=40000, step_size=0.1,
                   epsilon=0.1):
  """Returns the policy computed by `solver` for `player`.

  Arguments:
    solver: "policy_iteration", "value_iteration" or "q_learning".
    player: the agent's player, "x" or "o".
    rewards: a `tic_tac_toe.RewardScheme`.
    rng: the `np.random.RandomState` every random draw comes from, including
      the opponent's moves during Q-learning.
    discount: discount factor of every solver.
    threshold: convergence threshold of policy evaluation.
    num_sweeps: number of value iteration sweeps.
    num_episodes: number of Q-learning episodes.
    step_size: Q-learning rate.
    epsilon: Q-learning exploration rate.
  """
  game = tic_tac_toe.TicTacToeGame()
  states = get_all_states.get_all_states(game, player=player)
  logging.info("%d states where %s is to move or the game is over",
               len(states), player)
  model = tic_tac_toe.TicTacToeMDP(player, rewards)
  if solver == "policy_iteration":
    return policy_iteration.policy_iteration(
        model, states, discount=discount, threshold=threshold, rng=rng)
  elif solver == "value_iteration":
    return value_iteration.value_iteration(
        model, states, discount=discount, num_sweeps=num_sweeps)
  elif solver == "q_learning":
    env = rl_environment.Environment(
        game, player=player, rewards=rewards, rng=rng)
    return tabular_qlearner.q_learning(
        env, states, step_size=step_size, discount_factor=discount,
        epsilon=epsilon, num_episodes=num_episodes, rng=rng)
  raise ValueError(f"Unknown solver {solver}")


def main(argv):
  del argv
  rng = np.random.RandomState(FLAGS.seed)
  rewards = tic_tac_toe.RewardScheme(
      win=FLAGS.win_reward, lose=FLAGS.lose_reward, draw=FLAGS.draw_reward,
      living=FLAGS.living_reward)
  policy = compute_policy(
      FLAGS.solver, FLAGS.player, rewards, rng, discount=FLAGS.discount,
      threshold=FLAGS.threshold, num_sweeps=FLAGS.num_sweeps,
      num_episodes=FLAGS.num_episodes, step_size=FLAGS.step_size,
      epsilon=FLAGS.epsilon)
  logging.info("Computed %r with %s", policy, FLAGS.solver)

  env = rl_environment.Environment(
      player=FLAGS.player, rewards=rewards, rng=rng)
  results = evaluate_agents.play_episodes(
      env, rl_agent.PolicyAgent(policy), FLAGS.eval_episodes)
  logging.info("Against a random opponent: %.1f%% wins, %.1f%% draws, "
               "%.1f%% losses", 100 * results.wins, 100 * results.draws,
               100 * results.losses)


if __name__ == "__main__":
  app.run(main)
