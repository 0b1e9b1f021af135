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
"""Cloud Datastore entities and property values.

The class layout/hierarchy is as follows:
BaseEntity: an optional key and a set of named property values.
   |--> FullEntity: a complete entity, key may be missing or incomplete
     |--> Entity: a complete entity with a complete key
   |--> ProjectionEntity: result of a projection query, key may be missing

Property values are stored as received on the wire (JSON Value objects) so
meaning and excludeFromIndexes survive a from_wire/to_wire round trip. Python
values are returned by the accessors:

  Wire value        Python value
  nullValue         None
  booleanValue      bool
  integerValue      int
  doubleValue       float
  stringValue       str
  timestampValue    datetime.datetime (UTC, microsecond precision)
  keyValue          key.Key
  blobValue         bytes
  geoPointValue     LatLng
  entityValue       FullEntity
  arrayValue        list
"""
from __future__ import annotations

import base64
import copy
import dataclasses
import datetime
import re
from typing import Any, Callable, Dict, FrozenSet, List, Mapping, Optional

from gcloud_model import gcloud_model_errors
from gcloud_model.datastore import datastore_wire
from gcloud_model.datastore import key as key_module


# Meaning of an integer value that holds a timestamp in microseconds, returned
# when timestamps are projected.
_TIMESTAMP_MEANING = 18
_EPOCH = datetime.datetime(1970, 1, 1, tzinfo=datetime.timezone.utc)
_TIMESTAMP_REGEX = re.compile(
    r'(\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2})(?:\.(\d{1,9}))?'
    r'(Z|[+-]\d{2}:\d{2})',
    re.IGNORECASE,
)


@dataclasses.dataclass(frozen=True)
class LatLng:
  latitude: float = 0.0
  longitude: float = 0.0


def _parse_timestamp(text: str) -> datetime.datetime:
  """Returns UTC datetime for RFC 3339 text; digits past micros are dropped."""
  match = _TIMESTAMP_REGEX.fullmatch(text)
  if match is None:
    raise ValueError(f'Invalid timestamp: {text}')
  seconds, fraction, offset = match.groups()
  if offset.upper() == 'Z':
    tzinfo = datetime.timezone.utc
  else:
    sign = -1 if offset[0] == '-' else 1
    hours, minutes = offset[1:].split(':')
    tzinfo = datetime.timezone(
        sign * datetime.timedelta(hours=int(hours), minutes=int(minutes))
    )
  result = datetime.datetime.strptime(
      seconds.upper(), '%Y-%m-%dT%H:%M:%S'
  ).replace(
      microsecond=int((fraction or '')[:6].ljust(6, '0')), tzinfo=tzinfo
  )
  return result.astimezone(datetime.timezone.utc)


def _format_timestamp(value: datetime.datetime) -> str:
  # Naive datetimes are treated as UTC.
  if value.tzinfo is None:
    value = value.replace(tzinfo=datetime.timezone.utc)
  value = value.astimezone(datetime.timezone.utc)
  # strftime('%Y') does not zero pad years before 1000 on all platforms.
  return (
      f'{value.year:04d}-{value.month:02d}-{value.day:02d}T'
      f'{value.hour:02d}:{value.minute:02d}:{value.second:02d}.'
      f'{value.microsecond:06d}Z'
  )


def _decode_array(array: Mapping[str, Any]) -> List[Any]:
  return [value_from_wire(value) for value in array.get('values', [])]


def _decode_geo_point(point: Mapping[str, Any]) -> LatLng:
  return LatLng(
      float(point.get('latitude', 0.0)), float(point.get('longitude', 0.0))
  )


_WIRE_VALUE_DECODERS: Mapping[str, Callable[[Any], Any]] = {
    'nullValue': lambda _: None,
    'booleanValue': bool,
    'integerValue': int,
    'doubleValue': float,
    'stringValue': str,
    'timestampValue': _parse_timestamp,
    'keyValue': lambda value: key_module.Key.from_wire(
        datastore_wire.KeyPb.from_dict(value)
    ),
    'blobValue': base64.b64decode,
    'geoPointValue': _decode_geo_point,
    'entityValue': lambda value: FullEntity.from_wire(
        datastore_wire.EntityPb.from_dict(value)
    ),
    'arrayValue': _decode_array,
}


def value_from_wire(value: Mapping[str, Any]) -> Any:
  """Returns python value for a wire (JSON) Value object.

  Args:
    value: JSON Value object, e.g. {'integerValue': '5'}.

  Raises:
    gcloud_model_errors.InvalidWireFormatError: Value kind unknown or value
      malformed.
  """
  for value_field, decoder in _WIRE_VALUE_DECODERS.items():
    if value_field not in value:
      continue
    try:
      return decoder(value[value_field])
    except (
        KeyError,
        ValueError,
        TypeError,
        AttributeError,
        OverflowError,
    ) as exp:
      raise gcloud_model_errors.InvalidWireFormatError(
          f'Invalid {value_field}: {value[value_field]!r}'
      ) from exp
  raise gcloud_model_errors.InvalidWireFormatError(
      f'Unsupported value: {value!r}'
  )


def value_to_wire(value: Any) -> Dict[str, Any]:
  """Returns wire (JSON) Value object for a python value.

  Args:
    value: Python value.

  Raises:
    gcloud_model_errors.InvalidArgumentError: Value type not supported.
  """
  if value is None:
    return {'nullValue': 'NULL_VALUE'}
  # bool is a subclass of int.
  if isinstance(value, bool):
    return {'booleanValue': value}
  if isinstance(value, int):
    return {'integerValue': str(value)}
  if isinstance(value, float):
    return {'doubleValue': value}
  if isinstance(value, str):
    return {'stringValue': value}
  if isinstance(value, bytes):
    return {'blobValue': base64.b64encode(value).decode('ascii')}
  if isinstance(value, datetime.datetime):
    return {'timestampValue': _format_timestamp(value)}
  if isinstance(value, key_module.Key):
    return {'keyValue': value.to_wire().to_dict()}
  if isinstance(value, LatLng):
    return {
        'geoPointValue': {
            'latitude': value.latitude,
            'longitude': value.longitude,
        }
    }
  if isinstance(value, BaseEntity):
    return {'entityValue': value.to_wire().to_dict()}
  if isinstance(value, (list, tuple)):
    return {'arrayValue': {'values': [value_to_wire(v) for v in value]}}
  raise gcloud_model_errors.InvalidArgumentError(
      f'Unsupported property value type: {type(value).__name__}'
  )


class BaseEntity:
  """Key and property values shared by all entity types."""

  def __init__(
      self,
      key: Optional[key_module.Key] = None,
      properties: Optional[Mapping[str, Any]] = None,
  ):
    """Constructor.

    Args:
      key: Key of the entity.
      properties: Property name to python value.

    Raises:
      gcloud_model_errors.InvalidArgumentError: Key not valid for entity type
        or unsupported property value.
    """
    self._check_key(key)
    wire_properties = {
        name: value_to_wire(value)
        for name, value in ({} if properties is None else properties).items()
    }
    self._init(key, wire_properties)

  def _init(
      self,
      key: Optional[key_module.Key],
      wire_properties: Dict[str, Dict[str, Any]],
  ) -> None:
    self._key = key
    self._wire_properties = wire_properties
    self._properties = {
        name: value_from_wire(value) for name, value in wire_properties.items()
    }

  @classmethod
  def _check_key(cls, key: Optional[key_module.Key]) -> None:
    del key

  @classmethod
  def from_wire(cls, entity_pb: datastore_wire.EntityPb) -> BaseEntity:
    """Returns entity decoded from wire entity.

    Args:
      entity_pb: Decoded wire entity.

    Raises:
      gcloud_model_errors.InvalidWireFormatError: Entity malformed or key not
        valid for entity type.
    """
    key = None
    if entity_pb.key is not None:
      key = key_module.Key.from_wire(entity_pb.key)
    try:
      cls._check_key(key)
    except gcloud_model_errors.InvalidArgumentError as exp:
      raise gcloud_model_errors.InvalidWireFormatError(str(exp)) from exp
    entity = cls.__new__(cls)
    entity._init(key, copy.deepcopy(dict(entity_pb.properties)))
    return entity

  def to_wire(self) -> datastore_wire.EntityPb:
    return datastore_wire.EntityPb(
        None if self._key is None else self._key.to_wire(),
        copy.deepcopy(self._wire_properties),
    )

  @property
  def key(self) -> Optional[key_module.Key]:
    return self._key

  @property
  def has_key(self) -> bool:
    return self._key is not None

  @property
  def names(self) -> FrozenSet[str]:
    return frozenset(self._properties)

  @property
  def properties(self) -> Dict[str, Any]:
    """Returns copy of property name to python value mapping."""
    return copy.deepcopy(self._properties)

  def get(self, name: str, default: Any = None) -> Any:
    if name not in self._properties:
      return default
    return copy.deepcopy(self._properties[name])

  def get_meaning(self, name: str) -> Optional[int]:
    """Returns the meaning of a property value, None if undefined."""
    return self._wire_properties[name].get('meaning')

  def is_excluded_from_indexes(self, name: str) -> bool:
    return bool(self._wire_properties[name].get('excludeFromIndexes', False))

  def __getitem__(self, name: str) -> Any:
    return copy.deepcopy(self._properties[name])

  def __contains__(self, name: object) -> bool:
    return name in self._properties

  def __len__(self) -> int:
    return len(self._properties)

  def __eq__(self, other: Any) -> bool:
    """Entities are equal if their keys and wire values are; class ignored."""
    if isinstance(other, BaseEntity):
      return (
          self._key == other._key
          and self._wire_properties == other._wire_properties
      )
    return False

  def __hash__(self) -> int:
    return hash(self._key)

  def __repr__(self) -> str:
    return (
        f'{type(self).__name__}(key={self._key!r},'
        f' properties={self._properties!r})'
    )


class FullEntity(BaseEntity):
  """A complete entity; key may be missing or incomplete (e.g. embedded)."""


class Entity(FullEntity):
  """A complete entity with a complete key."""

  @classmethod
  def _check_key(cls, key: Optional[key_module.Key]) -> None:
    if key is None:
      raise gcloud_model_errors.InvalidArgumentError('Entity key is missing.')
    if not key.is_complete:
      raise gcloud_model_errors.InvalidArgumentError(
          f'Entity key {key} is incomplete.'
      )

  @property
  def key(self) -> key_module.Key:
    return self._key


class ProjectionEntity(BaseEntity):
  """Entity holding the projected properties returned by a projection query."""

  def get_timestamp(self, name: str) -> datetime.datetime:
    """Returns timestamp property.

    Projected timestamps are returned by the service as integer values (with
    meaning 18) holding microseconds since the epoch.

    Args:
      name: Property name.

    Raises:
      KeyError: Property undefined.
      gcloud_model_errors.InvalidArgumentError: Property is not a timestamp.
      gcloud_model_errors.InvalidWireFormatError: Projected microseconds out
        of the datetime range.
    """
    wire_value = self._wire_properties[name]
    if (
        wire_value.get('meaning') == _TIMESTAMP_MEANING
        and 'integerValue' in wire_value
    ):
      micros = int(wire_value['integerValue'])
      try:
        return _EPOCH + datetime.timedelta(microseconds=micros)
      except OverflowError as exp:
        raise gcloud_model_errors.InvalidWireFormatError(
            f'Timestamp out of range: {micros} microseconds'
        ) from exp
    value = self._properties[name]
    if not isinstance(value, datetime.datetime):
      raise gcloud_model_errors.InvalidArgumentError(
          f'Property {name} is not a timestamp.'
      )
    return value
