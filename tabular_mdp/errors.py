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

"""Errors raised by the tabular MDP solvers and their collaborators."""


class MissingEntryError(KeyError):
  """A lookup on a state or (state, action) that was never populated.

  Value functions, Q-tables and policies are fully initialised before any
  training starts, so hitting this is always a setup defect.
  """


class IllegalActionError(ValueError):
  """An action was submitted that is not legal in the given state."""


class ConfigurationError(ValueError):
  """A solver was configured with parameters it cannot run with."""
