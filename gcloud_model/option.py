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
"""Typed request options.

An Option pairs an OptionType member with a value. Service modules declare
their option families by subclassing OptionType (the member values are the
request parameter names) and Option (factory classmethods per kind). Request
builders collect options and turn them into request parameters with
option_map or to_request_params.
"""
from __future__ import annotations

import enum
from typing import Any, Dict, Iterable, Optional

from gcloud_model import gcloud_model_errors


class OptionType(enum.Enum):
  """Base class of option kinds; member values are request parameter names."""


class Option:
  """Immutable (option_type, value) pair.

  Options from different families compare equal when their option_type and
  value are equal.
  """

  __slots__ = ('_option_type', '_value')

  def __init__(self, option_type: Any, value: Optional[Any] = None):
    """Constructor.

    Args:
      option_type: Kind of the option.
      value: Value of the option, may be None.

    Raises:
      gcloud_model_errors.InvalidArgumentError: option_type is None.
    """
    if option_type is None:
      raise gcloud_model_errors.InvalidArgumentError(
          'Option type cannot be None.'
      )
    object.__setattr__(self, '_option_type', option_type)
    object.__setattr__(self, '_value', value)

  def __setattr__(self, name: str, value: Any) -> None:
    raise AttributeError(f'{type(self).__name__} is immutable.')

  @property
  def option_type(self) -> Any:
    return self._option_type

  @property
  def value(self) -> Optional[Any]:
    return self._value

  def __eq__(self, other: Any) -> bool:
    if isinstance(other, Option):
      return (
          self._option_type == other._option_type
          and self._value == other._value
      )
    return False

  def __hash__(self) -> int:
    return hash((self._option_type, self._value))

  def __repr__(self) -> str:
    return (
        f'{type(self).__name__}(option_type={self._option_type!r},'
        f' value={self._value!r})'
    )


def option_map(options: Iterable[Option]) -> Dict[Any, Optional[Any]]:
  """Returns mapping of option type to value.

  Args:
    options: Options to map.

  Raises:
    gcloud_model_errors.DuplicateOptionError: Option type defined twice.
  """
  result = {}
  for option in options:
    if option.option_type in result:
      raise gcloud_model_errors.DuplicateOptionError(option.option_type)
    result[option.option_type] = option.value
  return result


def _parameter_name(option_type: Any) -> str:
  if isinstance(option_type, enum.Enum):
    return str(option_type.value)
  return str(option_type)


def to_request_params(options: Iterable[Option]) -> Dict[str, Any]:
  """Returns request parameters defined by options; None values are omitted."""
  return {
      _parameter_name(option_type): value
      for option_type, value in option_map(options).items()
      if value is not None
  }
