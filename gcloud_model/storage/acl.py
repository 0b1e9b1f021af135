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
"""Access control list entries for Cloud Storage buckets and objects.

See https://cloud.google.com/storage/docs/access-control/lists.
"""
from __future__ import annotations

import dataclasses
import enum
import logging
from typing import Any, Optional, Union

from gcloud_model import gcloud_model_errors
from gcloud_model.storage import storage_wire

_ALL_USERS = 'allUsers'
_ALL_AUTHENTICATED_USERS = 'allAuthenticatedUsers'

AccessControlPb = Union[
    storage_wire.BucketAccessControlPb, storage_wire.ObjectAccessControlPb
]


class Role(enum.Enum):
  OWNER = 'OWNER'
  READER = 'READER'
  WRITER = 'WRITER'


class EntityType(enum.Enum):
  """Type of an ACL entity; value is the entity string prefix."""

  DOMAIN = 'domain'
  GROUP = 'group'
  USER = 'user'
  PROJECT = 'project'
  UNKNOWN = ''


class ProjectRole(enum.Enum):
  OWNERS = 'owners'
  EDITORS = 'editors'
  VIEWERS = 'viewers'


class Entity:
  """Entity an ACL grants a role to."""

  def __init__(self, entity_type: EntityType, value: str):
    self._type = entity_type
    self._value = value

  @property
  def type(self) -> EntityType:
    return self._type

  @property
  def value(self) -> str:
    return self._value

  def __eq__(self, other: Any) -> bool:
    if isinstance(other, Entity):
      return self._type == other._type and self._value == other._value
    return False

  def __hash__(self) -> int:
    return hash((self._type, self._value))

  def __repr__(self) -> str:
    return f'{type(self).__name__}({self.to_wire()!r})'

  def to_wire(self) -> str:
    """Returns the entity string used by the JSON API."""
    return f'{self._type.value}-{self._value}'

  @classmethod
  def from_wire(cls, entity: str) -> Entity:
    """Returns entity parsed from JSON API entity string.

    Args:
      entity: Entity string, e.g. user-liz@example.com or
        project-viewers-123456.

    Returns:
      Typed entity; RawEntity if the string is not recognized.
    """
    if entity.startswith('user-'):
      return User(entity[len('user-'):])
    if entity == _ALL_USERS:
      return User.of_all_users()
    if entity == _ALL_AUTHENTICATED_USERS:
      return User.of_all_authenticated_users()
    if entity.startswith('group-'):
      return Group(entity[len('group-'):])
    if entity.startswith('domain-'):
      return Domain(entity[len('domain-'):])
    if entity.startswith('project-'):
      team, _, project_id = entity[len('project-'):].partition('-')
      try:
        return Project(ProjectRole(team), project_id)
      except (ValueError, gcloud_model_errors.InvalidArgumentError):
        logging.debug('Unrecognized ACL project entity: %s', entity)
    return RawEntity(entity)


class Domain(Entity):
  """All users of a Google Apps domain."""

  def __init__(self, domain: str):
    super().__init__(EntityType.DOMAIN, domain)

  @property
  def domain(self) -> str:
    return self.value


class Group(Entity):
  """A Google group, identified by email."""

  def __init__(self, email: str):
    super().__init__(EntityType.GROUP, email)

  @property
  def email(self) -> str:
    return self.value


class User(Entity):
  """A user identified by email, or all (authenticated) users."""

  def __init__(self, email: str):
    super().__init__(EntityType.USER, email)

  @property
  def email(self) -> str:
    return self.value

  def to_wire(self) -> str:
    if self.value in (_ALL_USERS, _ALL_AUTHENTICATED_USERS):
      return self.value
    return super().to_wire()

  @classmethod
  def of_all_users(cls) -> User:
    return cls(_ALL_USERS)

  @classmethod
  def of_all_authenticated_users(cls) -> User:
    return cls(_ALL_AUTHENTICATED_USERS)


class Project(Entity):
  """Members of a project team (owners, editors or viewers)."""

  def __init__(self, project_role: ProjectRole, project_id: str):
    if not project_id:
      raise gcloud_model_errors.InvalidArgumentError(
          'Project id cannot be empty.'
      )
    super().__init__(EntityType.PROJECT, f'{project_role.value}-{project_id}')
    self._project_role = project_role
    self._project_id = project_id

  @property
  def project_role(self) -> ProjectRole:
    return self._project_role

  @property
  def project_id(self) -> str:
    return self._project_id


class RawEntity(Entity):
  """Entity string not recognized by this library."""

  def __init__(self, entity: str):
    super().__init__(EntityType.UNKNOWN, entity)

  def to_wire(self) -> str:
    return self.value


@dataclasses.dataclass(frozen=True)
class Acl:
  """Access control entry granting a role to an entity.

  Use dataclasses.replace to derive a modified copy.

  Attributes:
    entity: Entity the role is granted to.
    role: Role granted.
    etag: Entity tag of the entry, set by the service.
    id: ID of the entry, set by the service.
  """

  entity: Entity
  role: Role
  etag: Optional[str] = None
  id: Optional[str] = None

  def __post_init__(self) -> None:
    if self.entity is None or self.role is None:
      raise gcloud_model_errors.InvalidArgumentError(
          'ACL entity and role are required.'
      )

  @classmethod
  def of(cls, entity: Entity, role: Role) -> Acl:
    return cls(entity, role)

  def to_bucket_wire(self) -> storage_wire.BucketAccessControlPb:
    return storage_wire.BucketAccessControlPb(
        self.entity.to_wire(), self.role.value, self.etag, self.id
    )

  def to_object_wire(self) -> storage_wire.ObjectAccessControlPb:
    return storage_wire.ObjectAccessControlPb(
        self.entity.to_wire(), self.role.value, self.etag, self.id
    )

  @classmethod
  def from_wire(cls, access_control_pb: AccessControlPb) -> Acl:
    """Returns ACL decoded from a bucket or object access control.

    Args:
      access_control_pb: Bucket or object access control resource.

    Raises:
      gcloud_model_errors.InvalidWireFormatError: Role not recognized.
    """
    try:
      role = Role(access_control_pb.role)
    except ValueError as exp:
      raise gcloud_model_errors.InvalidWireFormatError(
          f'Unrecognized ACL role: {access_control_pb.role}'
      ) from exp
    return cls(
        Entity.from_wire(access_control_pb.entity),
        role,
        access_control_pb.etag,
        access_control_pb.id,
    )
