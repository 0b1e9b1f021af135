# Copyright 2023 Google LLC
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
# ==============================================================================
"""Error classes for gcloud model types."""


class GcloudModelError(Exception):
  pass


class InvalidArgumentError(GcloudModelError):
  pass


class DuplicateOptionError(InvalidArgumentError):

  def __init__(self, option_type: object):
    super().__init__(f'Duplicate option {option_type}')
    self._option_type = option_type

  @property
  def option_type(self) -> object:
    return self._option_type


class InvalidWireFormatError(GcloudModelError):
  pass


class UnexpectedResultTypeError(GcloudModelError):
  """Raised when a query result batch does not match the query result type."""

  def __init__(self, expected: object, actual: object):
    super().__init__(f'Unexpected result type {actual} vs {expected}')
    self._expected = expected
    self._actual = actual

  @property
  def expected(self) -> object:
    return self._expected

  @property
  def actual(self) -> object:
    return self._actual
