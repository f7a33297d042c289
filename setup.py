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

# Lint as: python3
"""The setup script for setuptools.

See https://setuptools.readthedocs.io/en/latest/setuptools.html
"""

import os

import setuptools


def _get_requirements(requirements_file):  # pylint: disable=g-doc-args
  """Returns a list of dependencies for setup() from requirements.txt.

  Currently a requirements.txt is being used to specify dependencies. In order
  to avoid specifying it in two places, we're going to use that file as the
  source of truth.
  """
  with open(requirements_file) as f:
    return [req for req in (_parse_line(line) for line in f) if req]


def _parse_line(s):
  """Parses a line of a requirements.txt file."""
  requirement, *_ = s.split("#")
  return requirement.strip()


_ROOT = os.path.dirname(os.path.abspath(__file__))

setuptools.setup(
    name="tabular_mdp",
    version="0.1.0",
    license="Apache 2.0",
    description=("Policy iteration, value iteration and tabular Q-learning "
                 "for small MDPs such as tic-tac-toe"),
    long_description=open(os.path.join(_ROOT, "README.md")).read(),
    long_description_content_type="text/markdown",
    install_requires=_get_requirements(
        os.path.join(_ROOT, "requirements.txt")),
    extras_require={"test": ["pytest", "nox"]},
    python_requires=">=3.8",
    zip_safe=False,
    packages=setuptools.find_packages(include=["tabular_mdp", "tabular_mdp.*"])
)
