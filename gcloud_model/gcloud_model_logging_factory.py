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
"""Pluggable logging interface used by gcloud model objects.

Objects that live across several conversions (e.g. query result batches) take
an optional AbstractLoggingInterfaceFactory so callers can route the library's
logs into their own structured logging backend. PythonLoggerFactory is the
default and writes to the standard python logging module.
"""
from __future__ import annotations

import abc
import logging
from typing import Any, Dict, Mapping, Optional, Union


StructuredLogElement = Union[Exception, Mapping[str, Any], None]
DEFAULT_GCLOUD_MODEL_PYTHON_LOGGER_NAME = 'gcloud-model'


class AbstractLoggingInterface(metaclass=abc.ABCMeta):
  """Logging interface for gcloud model objects."""

  @abc.abstractmethod
  def log(self, level: int, msg: str, *args: StructuredLogElement) -> None:
    """Logs message at a python logging level.

    Args:
      level: Python logging level, e.g. logging.INFO.
      msg: Message to log.
      *args: Optional mappings or exceptions to log as structured elements.

    Returns:
      None
    """

  def debug(self, msg: str, *args: StructuredLogElement) -> None:
    self.log(logging.DEBUG, msg, *args)

  def info(self, msg: str, *args: StructuredLogElement) -> None:
    self.log(logging.INFO, msg, *args)

  def warning(self, msg: str, *args: StructuredLogElement) -> None:
    self.log(logging.WARNING, msg, *args)

  def error(self, msg: str, *args: StructuredLogElement) -> None:
    self.log(logging.ERROR, msg, *args)


class AbstractLoggingInterfaceFactory(metaclass=abc.ABCMeta):

  @abc.abstractmethod
  def create_logger(
      self, signature: Optional[Mapping[str, Any]] = None
  ) -> AbstractLoggingInterface:
    """Creates an instance of the logger.

    Args:
      signature: Optional key/values included as structure in every log.
    """


class _PythonLogger(AbstractLoggingInterface):
  """Writes logs to a python logging.Logger."""

  def __init__(
      self,
      pylogger: logging.Logger,
      signature: Optional[Mapping[str, Any]] = None,
  ):
    self._logger = pylogger
    self._signature = dict(signature) if signature else {}

  def _format(self, msg: str, *args: StructuredLogElement) -> str:
    """Appends structured elements to msg as sorted 'key: value' pairs."""
    structure: Dict[str, Any] = {}
    exception = None
    for element in args:
      if isinstance(element, Exception):
        exception = element
      elif element:
        structure.update(element)
    structure.update(self._signature)
    parts = [f'{key}: {structure[key]}' for key in sorted(structure)]
    if exception is not None:
      parts.append(f'EXCEPTION: {exception}')
    if not parts:
      return msg
    return '; '.join([msg] + parts)

  def log(self, level: int, msg: str, *args: StructuredLogElement) -> None:
    if self._logger.isEnabledFor(level):
      self._logger.log(level, self._format(msg, *args))


class PythonLoggerFactory(AbstractLoggingInterfaceFactory):
  """Factory that builds loggers backed by python logging."""

  def __init__(
      self,
      name: Optional[str] = DEFAULT_GCLOUD_MODEL_PYTHON_LOGGER_NAME,
  ):
    self._name = name

  def create_logger(
      self, signature: Optional[Mapping[str, Any]] = None
  ) -> AbstractLoggingInterface:
    return _PythonLogger(logging.getLogger(self._name), signature)
