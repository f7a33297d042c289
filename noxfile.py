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

"""An integration test installing and testing the tabular_mdp package."""

import nox


@nox.session(python="3")
def tests(session):
  """Run the tests via nox."""
  session.install("-r", "requirements.txt")
  session.install("-e", ".[test]")
  session.run("python3", "-m", "pytest", "tabular_mdp", *session.posargs)
