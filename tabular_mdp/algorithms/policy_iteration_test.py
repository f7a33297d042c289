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

"""Tests for tabular_mdp.algorithms.policy_iteration."""

from absl.testing import absltest
from absl.testing import parameterized
import numpy as np

from tabular_mdp import errors
from tabular_mdp import mdp
from tabular_mdp import policy
from tabular_mdp import value_tables
from tabular_mdp.algorithms import bellman
from tabular_mdp.algorithms import get_all_states
from tabular_mdp.algorithms import policy_iteration
from tabular_mdp.algorithms import value_iteration
from tabular_mdp.games import tic_tac_toe

# Resting forever is worth 1 / (1 - 0.9) = 10, working ends the episode half
# of the time and is only worth 1 / 0.55.
_HOME = mdp.SimpleState("home", ["work", "rest"])
_END = mdp.SimpleState("end")
_WORK_OR_REST = mdp.TabularMDP({
    (_HOME, "work"): [(0.5, 2.0, _HOME), (0.5, 0.0, _END)],
    (_HOME, "rest"): [(1.0, 1.0, _HOME)],
})

# Both actions of `_TIE` are worth exactly the same.
_TIE = mdp.SimpleState("tie", ["a", "b"])
_TIED = mdp.TabularMDP({
    (_TIE, "a"): [(1.0, 1.0, _END)],
    (_TIE, "b"): [(1.0, 1.0, _END)],
})


def _table(model, states):
  return bellman.TransitionTable(model, value_tables.ValueFunction(states))


class PolicyEvaluatorTest(parameterized.TestCase):

  def test_single_action_to_a_win(self):
    model = tic_tac_toe.TicTacToeMDP(
        "x", tic_tac_toe.RewardScheme(win=1.0, lose=-1.0, draw=0.0,
                                      living=0.0))
    state = tic_tac_toe.TicTacToeState("xoxoxoox.", "x")
    won = state.child(8)
    table = _table(model, [state, won])
    fixed_policy = policy.Policy({state: 8})

    one_sweep = bellman.expectation_sweep(table, fixed_policy, 0.9)
    self.assertEqual(one_sweep[table.value_function.state_index(state)], 1.0)

    evaluator = policy_iteration.PolicyEvaluator(table, 0.9, 0.1)
    values = evaluator.evaluate(fixed_policy)
    self.assertEqual(values[state], 1.0)
    self.assertEqual(values[won], 0.0)
    self.assertEqual(evaluator.last_num_sweeps, 2)

  def test_evaluates_fixed_policy_not_best(self):
    table = _table(_WORK_OR_REST, _WORK_OR_REST.states())
    evaluator = policy_iteration.PolicyEvaluator(table, 0.9, 1e-9)
    values = evaluator.evaluate(policy.Policy({_HOME: "work"}))
    self.assertAlmostEqual(values[_HOME], 1 / 0.55, places=6)
    values = evaluator.evaluate(policy.Policy({_HOME: "rest"}))
    self.assertAlmostEqual(values[_HOME], 10.0, places=6)

  @parameterized.parameters(1.0, 1.2, -0.5)
  def test_rejects_discounts_that_may_not_converge(self, discount):
    table = _table(_WORK_OR_REST, _WORK_OR_REST.states())
    with self.assertRaises(errors.ConfigurationError):
      policy_iteration.PolicyEvaluator(table, discount, 0.1)

  def test_rejects_non_positive_threshold(self):
    table = _table(_WORK_OR_REST, _WORK_OR_REST.states())
    with self.assertRaises(errors.ConfigurationError):
      policy_iteration.PolicyEvaluator(table, 0.9, 0.0)


class PolicyImproverTest(absltest.TestCase):

  def test_switches_to_better_action(self):
    table = _table(_WORK_OR_REST, _WORK_OR_REST.states())
    evaluator = policy_iteration.PolicyEvaluator(table, 0.9, 1e-9)
    improver = policy_iteration.PolicyImprover(table, 0.9)
    working = policy.Policy({_HOME: "work"})
    evaluator.evaluate(working)
    new_policy, changed = improver.improve(working)
    self.assertTrue(changed)
    self.assertEqual(new_policy[_HOME], "rest")

  def test_reads_the_live_value_function(self):
    table = _table(_WORK_OR_REST, _WORK_OR_REST.states())
    improver = policy_iteration.PolicyImprover(table, 0.9)
    working = policy.Policy({_HOME: "work"})
    # Both actions are worth 1 under all-zero values.
    self.assertEqual(improver.improve(working), (working, False))
    table.value_function.replace([10.0, 0.0])
    new_policy, changed = improver.improve(working)
    self.assertEqual(new_policy[_HOME], "rest")
    self.assertTrue(changed)

  def test_idempotent_on_greedy_values(self):
    table = _table(_WORK_OR_REST, _WORK_OR_REST.states())
    evaluator = policy_iteration.PolicyEvaluator(table, 0.9, 1e-9)
    improver = policy_iteration.PolicyImprover(table, 0.9)
    current, changed = policy.Policy({_HOME: "work"}), True
    while changed:
      evaluator.evaluate(current)
      current, changed = improver.improve(current)
    first, first_changed = improver.improve(current)
    second, second_changed = improver.improve(first)
    self.assertFalse(first_changed)
    self.assertFalse(second_changed)
    self.assertEqual(dict(first), dict(second))

  def test_first_of_equal_actions_is_kept(self):
    table = _table(_TIED, _TIED.states())
    improver = policy_iteration.PolicyImprover(table, 0.9)
    new_policy, changed = improver.improve(policy.Policy({_TIE: "b"}))
    self.assertEqual(new_policy[_TIE], "a")
    self.assertTrue(changed)
    new_policy, changed = improver.improve(new_policy)
    self.assertEqual(new_policy[_TIE], "a")
    self.assertFalse(changed)


class PolicyIterationSolverTest(parameterized.TestCase):

  def test_state_machine(self):
    solver = policy_iteration.PolicyIterationSolver(
        _WORK_OR_REST, _WORK_OR_REST.states(), threshold=1e-6,
        initial_policy=policy.Policy({_HOME: "work"}))
    self.assertEqual(solver.phase, policy_iteration.Phase.EVALUATING)
    self.assertEqual(solver.step(), policy_iteration.Phase.IMPROVING)
    self.assertEqual(solver.step(), policy_iteration.Phase.EVALUATING)
    self.assertEqual(solver.step(), policy_iteration.Phase.IMPROVING)
    self.assertEqual(solver.step(), policy_iteration.Phase.CONVERGED)
    self.assertEqual(solver.num_iterations, 2)

  def test_solves_simple_mdp(self):
    solver = policy_iteration.PolicyIterationSolver(
        _WORK_OR_REST, _WORK_OR_REST.states(), threshold=1e-6, seed=3)
    result = solver.solve()
    self.assertEqual(dict(result), {_HOME: "rest"})
    self.assertEqual(solver.phase, policy_iteration.Phase.CONVERGED)
    self.assertAlmostEqual(solver.value_function[_HOME], 10.0, places=3)
    self.assertEqual(solver.value_function[_END], 0.0)
    self.assertTrue(solver.value_function.frozen)

  @parameterized.parameters(
      (policy.TieBreakingPolicy.FIRST_ACTION, "a"),
      (policy.TieBreakingPolicy.LAST_ACTION, "b"),
  )
  def test_tie_breaking(self, tie_breaking_policy, expected_action):
    for initial_action in ("a", "b"):
      solver = policy_iteration.PolicyIterationSolver(
          _TIED, _TIED.states(), tie_breaking_policy=tie_breaking_policy,
          initial_policy=policy.Policy({_TIE: initial_action}))
      self.assertEqual(solver.solve()[_TIE], expected_action)

  def test_random_initial_policy_is_seeded(self):
    game = tic_tac_toe.TicTacToeGame()
    states = get_all_states.get_all_states(game, player="x")
    model = tic_tac_toe.TicTacToeMDP("x")
    first = policy_iteration.PolicyIterationSolver(model, states, seed=11)
    second = policy_iteration.PolicyIterationSolver(
        model, states, rng=np.random.RandomState(11))
    self.assertEqual(dict(first.policy), dict(second.policy))
    self.assertLen(first.policy, 2423)

  def test_rejects_discount_of_one(self):
    with self.assertRaises(errors.ConfigurationError):
      policy_iteration.PolicyIterationSolver(
          _WORK_OR_REST, _WORK_OR_REST.states(), discount=1.0)

  def test_tic_tac_toe_matches_value_iteration(self):
    game = tic_tac_toe.TicTacToeGame()
    states = get_all_states.get_all_states(game, player="x")
    model = tic_tac_toe.TicTacToeMDP("x")

    pi_solver = policy_iteration.PolicyIterationSolver(
        model, states, discount=0.9, threshold=1e-10, seed=0)
    pi_policy = pi_solver.solve()
    vi_solver = value_iteration.ValueIterationSolver(
        model, states, discount=0.9, num_sweeps=50)
    vi_policy = vi_solver.solve()

    self.assertEqual(pi_solver.phase, policy_iteration.Phase.CONVERGED)
    self.assertCountEqual(list(pi_policy), list(vi_policy))
    for state in states:
      self.assertAlmostEqual(pi_solver.value_function[state],
                             vi_solver.value_function[state], places=6)
      if state.is_terminal():
        self.assertEqual(pi_solver.value_function[state], 0.0)
        self.assertNotIn(state, pi_policy)

    # Both policies realise the same action value everywhere.
    table = bellman.TransitionTable(model, vi_solver.value_function)
    values = vi_solver.value_function.snapshot()
    for state in pi_policy:
      index = vi_solver.value_function.state_index(state)
      self.assertAlmostEqual(
          table.q_value(index, pi_policy[state], values, 0.9),
          table.q_value(index, vi_policy[state], values, 0.9), places=6)

    # Moving first against a random opponent wins most games.
    empty = game.new_initial_state()
    self.assertGreater(pi_solver.value_function[empty], 0.5)


if __name__ == "__main__":
  absltest.main()
