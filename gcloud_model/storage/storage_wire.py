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
"""Decoded Cloud Storage JSON API access control resources."""
import dataclasses
from typing import Any, Dict, Optional

import dataclasses_json

BUCKET_ACCESS_CONTROL_KIND = 'storage#bucketAccessControl'
OBJECT_ACCESS_CONTROL_KIND = 'storage#objectAccessControl'


def _omit_if_none() -> Dict[str, Any]:
  return dataclasses_json.config(exclude=lambda value: value is None)


@dataclasses_json.dataclass_json(letter_case=dataclasses_json.LetterCase.CAMEL)
@dataclasses.dataclass(frozen=True)
class BucketAccessControlPb:
  """bucketAccessControls resource.

  Attributes:
    entity: Entity holding the permission, e.g. user-liz@example.com.
    role: Access permission, OWNER, READER or WRITER.
    etag: HTTP 1.1 entity tag of the access control entry.
    id: ID of the access control entry.
    bucket: Name of the bucket.
  """

  entity: str
  role: str
  etag: Optional[str] = dataclasses.field(
      default=None, metadata=_omit_if_none()
  )
  id: Optional[str] = dataclasses.field(default=None, metadata=_omit_if_none())
  bucket: Optional[str] = dataclasses.field(
      default=None, metadata=_omit_if_none()
  )
  kind: str = BUCKET_ACCESS_CONTROL_KIND


@dataclasses_json.dataclass_json(letter_case=dataclasses_json.LetterCase.CAMEL)
@dataclasses.dataclass(frozen=True)
class ObjectAccessControlPb:
  """objectAccessControls resource.

  Attributes:
    entity: Entity holding the permission, e.g. group-example@googlegroups.com.
    role: Access permission, OWNER or READER.
    etag: HTTP 1.1 entity tag of the access control entry.
    id: ID of the access control entry.
    bucket: Name of the bucket.
    object: Name of the object.
    generation: Content generation of the object.
  """

  entity: str
  role: str
  etag: Optional[str] = dataclasses.field(
      default=None, metadata=_omit_if_none()
  )
  id: Optional[str] = dataclasses.field(default=None, metadata=_omit_if_none())
  bucket: Optional[str] = dataclasses.field(
      default=None, metadata=_omit_if_none()
  )
  object: Optional[str] = dataclasses.field(
      default=None, metadata=_omit_if_none()
  )
  generation: Optional[str] = dataclasses.field(
      default=None, metadata=_omit_if_none()
  )
  kind: str = OBJECT_ACCESS_CONTROL_KIND
