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

"""Schedules for hyper-parameters that change over training, e.g. epsilon."""

import abc
import numbers


class ValueSchedule(metaclass=abc.ABCMeta):
  """Abstract base class for values that may change at every training step."""

  @abc.abstractmethod
  def step(self):
    """Advances the schedule by one training step.

    Returns:
      the value after the step.
    """

  @property
  @abc.abstractmethod
  def value(self):
    """Return the current value."""


class ConstantSchedule(ValueSchedule):
  """A schedule that keeps the value constant."""

  def __init__(self, value):
    self._value = value

  def step(self):
    return self._value

  @property
  def value(self):
    return self._value


class LinearSchedule(ValueSchedule):
  """Moves linearly from `init_val` to `final_val` over `num_steps` steps.

  Once the number of steps is reached, the value stays at `final_val`.
  """

  def __init__(self, init_val, final_val, num_steps):
    assert isinstance(num_steps, int) and num_steps > 0
    self._value = init_val
    self._final_value = final_val
    self._num_steps = num_steps
    self._steps_taken = 0
    self._increment = (final_val - init_val) / num_steps

  def step(self):
    self._steps_taken += 1
    if self._steps_taken < self._num_steps:
      self._value += self._increment
    else:
      self._value = self._final_value
    return self._value

  @property
  def value(self):
    return self._value

  @property
  def final_value(self):
    """The value reached once `num_steps` steps have been taken."""
    return self._final_value


def as_schedule(value_or_schedule):
  """Wraps a plain number into a `ConstantSchedule`."""
  if isinstance(value_or_schedule, ValueSchedule):
    return value_or_schedule
  if isinstance(value_or_schedule, numbers.Real):
    return ConstantSchedule(value_or_schedule)
  raise TypeError(f"Expected a number or a ValueSchedule, got "
                  f"{type(value_or_schedule).__name__}")
