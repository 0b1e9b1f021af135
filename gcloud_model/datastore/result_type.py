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
"""Expected type of the values returned by a Datastore query.

  ENTITY: A full entity represented by entity.Entity.
  PROJECTION_ENTITY: A projection entity, represented by
    entity.ProjectionEntity.
  KEY: An entity's key.Key.
  UNKNOWN: Result type not known in advance (e.g. GQL queries); each result is
    converted by inspecting its content.

The result types are module constants created at import time. The mapping from
wire result type to result type is built once, at import, and is read only.
"""
from __future__ import annotations

import dataclasses
import logging
import types
from typing import Any, Callable, Mapping, Optional, Union

from gcloud_model.datastore import datastore_wire
from gcloud_model.datastore import entity
from gcloud_model.datastore import key


@dataclasses.dataclass(frozen=True, eq=False)
class ResultType:
  """Type of query result and its conversion from a wire entity.

  Attributes:
    name: Name of the result type.
    result_class: Class of the values produced by convert.
    wire_code: Wire result type; None for UNKNOWN.
  """

  name: str
  result_class: type
  wire_code: Optional[datastore_wire.WireResultType]
  _converter: Callable[[datastore_wire.EntityPb], Any] = dataclasses.field(
      repr=False
  )

  def convert(self, entity_pb: datastore_wire.EntityPb) -> Any:
    """Returns value of result_class converted from wire entity."""
    return self._converter(entity_pb)

  def is_assignable_from(self, other: ResultType) -> bool:
    """Returns True if values of other result type are of this result type."""
    return issubclass(other.result_class, self.result_class)

  def __eq__(self, other: Any) -> bool:
    if isinstance(other, ResultType):
      return self.result_class == other.result_class
    return False

  def __hash__(self) -> int:
    return hash(self.result_class)

  def __str__(self) -> str:
    return self.name


def _convert_unknown(entity_pb: datastore_wire.EntityPb) -> Any:
  """Converts result of a query whose result type is not known.

  Args:
    entity_pb: Wire entity.

  Returns:
    None if entity has neither properties nor key, the key if the entity has
    only a key, otherwise a ProjectionEntity.
  """
  if not entity_pb.properties:
    if entity_pb.key is None:
      return None
    return key.Key.from_wire(entity_pb.key)
  return entity.ProjectionEntity.from_wire(entity_pb)


UNKNOWN = ResultType('UNKNOWN', object, None, _convert_unknown)

ENTITY = ResultType(
    'ENTITY',
    entity.Entity,
    datastore_wire.WireResultType.FULL,
    entity.Entity.from_wire,
)

KEY = ResultType(
    'KEY',
    key.Key,
    datastore_wire.WireResultType.KEY_ONLY,
    lambda entity_pb: key.Key.from_wire(entity_pb.key),
)

PROJECTION_ENTITY = ResultType(
    'PROJECTION_ENTITY',
    entity.ProjectionEntity,
    datastore_wire.WireResultType.PROJECTION,
    entity.ProjectionEntity.from_wire,
)

_WIRE_CODE_TO_RESULT_TYPE: Mapping[
    datastore_wire.WireResultType, ResultType
] = types.MappingProxyType(
    {result.wire_code: result for result in (ENTITY, KEY, PROJECTION_ENTITY)}
)


def from_wire(
    code: Union[datastore_wire.WireResultType, str, None]
) -> ResultType:
  """Returns result type for a wire result type.

  Args:
    code: Wire result type, its name, or None.

  Returns:
    Registered result type; UNKNOWN if code is None, unspecified or not
    recognized. Never raises.
  """
  if isinstance(code, str):
    try:
      code = datastore_wire.WireResultType(code)
    except ValueError:
      logging.debug('Unrecognized entity result type: %s', code)
      return UNKNOWN
  if not isinstance(code, datastore_wire.WireResultType):
    return UNKNOWN
  return _WIRE_CODE_TO_RESULT_TYPE.get(code, UNKNOWN)
