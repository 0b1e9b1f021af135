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
"""Cloud Datastore keys."""
from __future__ import annotations

import dataclasses
from typing import Optional, Sequence, Tuple, Union

from gcloud_model import gcloud_model_errors
from gcloud_model.datastore import datastore_wire


IdOrName = Union[int, str]


@dataclasses.dataclass(frozen=True)
class PathElement:
  """Element of a key path; an incomplete element has neither id nor name."""

  kind: str
  id: Optional[int] = None
  name: Optional[str] = None

  def __post_init__(self) -> None:
    if not self.kind:
      raise gcloud_model_errors.InvalidArgumentError('Kind cannot be empty.')
    if self.id is not None and self.name is not None:
      raise gcloud_model_errors.InvalidArgumentError(
          f'Path element {self.kind} defines both id and name.'
      )
    if self.name is not None and not self.name:
      raise gcloud_model_errors.InvalidArgumentError('Name cannot be empty.')

  @classmethod
  def of(
      cls, kind: str, id_or_name: Optional[IdOrName] = None
  ) -> PathElement:
    if id_or_name is None:
      return cls(kind)
    if isinstance(id_or_name, str):
      return cls(kind, name=id_or_name)
    return cls(kind, id=id_or_name)

  @property
  def is_complete(self) -> bool:
    return self.id is not None or self.name is not None

  @property
  def id_or_name(self) -> Optional[IdOrName]:
    return self.id if self.id is not None else self.name

  @classmethod
  def from_wire(cls, element_pb: datastore_wire.PathElementPb) -> PathElement:
    element_id = None
    if element_pb.id is not None:
      try:
        element_id = int(element_pb.id)
      except ValueError as exp:
        raise gcloud_model_errors.InvalidWireFormatError(
            f'Invalid key id: {element_pb.id}'
        ) from exp
    return cls(element_pb.kind, element_id, element_pb.name)

  def to_wire(self) -> datastore_wire.PathElementPb:
    return datastore_wire.PathElementPb(
        self.kind,
        None if self.id is None else str(self.id),
        self.name,
    )


@dataclasses.dataclass(frozen=True)
class Key:
  """A Datastore key.

  The last path element identifies the entity, preceding elements are its
  ancestors. A key whose last element has neither id nor name is incomplete;
  the service allocates an id for it on insert.

  Attributes:
    project_id: Project the key belongs to.
    path: Path elements, ancestors first.
    namespace: Namespace of the key, empty string for the default namespace.
    database_id: Database of the key, empty string for the default database.
  """

  project_id: str
  path: Tuple[PathElement, ...]
  namespace: str = ''
  database_id: str = ''

  def __post_init__(self) -> None:
    object.__setattr__(self, 'path', tuple(self.path))
    if not self.path:
      raise gcloud_model_errors.InvalidArgumentError('Key path is empty.')
    for element in self.path[:-1]:
      if not element.is_complete:
        raise gcloud_model_errors.InvalidArgumentError(
            f'Key ancestor {element.kind} is incomplete.'
        )

  @classmethod
  def of(
      cls,
      project_id: str,
      kind: str,
      id_or_name: Optional[IdOrName] = None,
      namespace: str = '',
      ancestors: Sequence[PathElement] = (),
  ) -> Key:
    """Returns key for kind under optional ancestors.

    Args:
      project_id: Project the key belongs to.
      kind: Kind of the entity.
      id_or_name: Int id or str name of the entity; None for incomplete key.
      namespace: Namespace of the key.
      ancestors: Ancestor path elements.
    """
    path = tuple(ancestors) + (PathElement.of(kind, id_or_name),)
    return cls(project_id, path, namespace)

  @property
  def kind(self) -> str:
    return self.path[-1].kind

  @property
  def id(self) -> Optional[int]:
    return self.path[-1].id

  @property
  def name(self) -> Optional[str]:
    return self.path[-1].name

  @property
  def id_or_name(self) -> Optional[IdOrName]:
    return self.path[-1].id_or_name

  @property
  def is_complete(self) -> bool:
    return self.path[-1].is_complete

  @property
  def ancestors(self) -> Tuple[PathElement, ...]:
    return self.path[:-1]

  @property
  def parent(self) -> Optional[Key]:
    if len(self.path) == 1:
      return None
    return Key(
        self.project_id, self.path[:-1], self.namespace, self.database_id
    )

  def __str__(self) -> str:
    path = '/'.join(
        f'{element.kind}/{element.id_or_name}' for element in self.path
    )
    return f'{self.project_id}/{self.namespace}/{path}'

  @classmethod
  def from_wire(cls, key_pb: Optional[datastore_wire.KeyPb]) -> Key:
    """Returns key decoded from wire key.

    Args:
      key_pb: Decoded wire key.

    Raises:
      gcloud_model_errors.InvalidWireFormatError: Key missing or malformed.
    """
    if key_pb is None:
      raise gcloud_model_errors.InvalidWireFormatError('Key is missing.')
    partition = key_pb.partition_id or datastore_wire.PartitionIdPb()
    try:
      return cls(
          partition.project_id,
          tuple(PathElement.from_wire(element) for element in key_pb.path),
          partition.namespace_id or '',
          partition.database_id or '',
      )
    except gcloud_model_errors.InvalidArgumentError as exp:
      raise gcloud_model_errors.InvalidWireFormatError(str(exp)) from exp

  def to_wire(self) -> datastore_wire.KeyPb:
    return datastore_wire.KeyPb(
        datastore_wire.PartitionIdPb(
            self.project_id,
            self.namespace or None,
            self.database_id or None,
        ),
        [element.to_wire() for element in self.path],
    )
