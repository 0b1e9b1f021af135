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
"""Decoded Cloud Datastore v1 REST messages.

The transport layer decodes JSON responses into these dataclasses (e.g.
RunQueryResponsePb.from_dict(response.json())). Field names follow the
python naming convention; the JSON (camelCase) names are used by from_dict and
to_dict. Property values are kept as the JSON Value objects, e.g.
{'stringValue': 'abc'} or {'integerValue': '5', 'meaning': 18}.
"""
import dataclasses
import enum
from typing import Any, Dict, List, Optional

import dataclasses_json

WireValue = Dict[str, Any]


def _omit_if_none() -> Dict[str, Any]:
  return dataclasses_json.config(exclude=lambda value: value is None)


class WireResultType(enum.Enum):
  """EntityResult.ResultType; the kind of entity returned by a query."""

  RESULT_TYPE_UNSPECIFIED = 'RESULT_TYPE_UNSPECIFIED'
  FULL = 'FULL'
  PROJECTION = 'PROJECTION'
  KEY_ONLY = 'KEY_ONLY'


class MoreResultsType(enum.Enum):
  """QueryResultBatch.MoreResultsType."""

  MORE_RESULTS_TYPE_UNSPECIFIED = 'MORE_RESULTS_TYPE_UNSPECIFIED'
  NOT_FINISHED = 'NOT_FINISHED'
  MORE_RESULTS_AFTER_LIMIT = 'MORE_RESULTS_AFTER_LIMIT'
  MORE_RESULTS_AFTER_CURSOR = 'MORE_RESULTS_AFTER_CURSOR'
  NO_MORE_RESULTS = 'NO_MORE_RESULTS'


@dataclasses_json.dataclass_json(letter_case=dataclasses_json.LetterCase.CAMEL)
@dataclasses.dataclass(frozen=True)
class PartitionIdPb:
  project_id: str = ''
  namespace_id: Optional[str] = dataclasses.field(
      default=None, metadata=_omit_if_none()
  )
  database_id: Optional[str] = dataclasses.field(
      default=None, metadata=_omit_if_none()
  )


@dataclasses_json.dataclass_json(letter_case=dataclasses_json.LetterCase.CAMEL)
@dataclasses.dataclass(frozen=True)
class PathElementPb:
  """Key path element; id is an int64 serialized as a decimal string."""

  kind: str
  id: Optional[str] = dataclasses.field(default=None, metadata=_omit_if_none())
  name: Optional[str] = dataclasses.field(
      default=None, metadata=_omit_if_none()
  )


@dataclasses_json.dataclass_json(letter_case=dataclasses_json.LetterCase.CAMEL)
@dataclasses.dataclass(frozen=True)
class KeyPb:
  partition_id: Optional[PartitionIdPb] = dataclasses.field(
      default=None, metadata=_omit_if_none()
  )
  path: List[PathElementPb] = dataclasses.field(default_factory=list)


@dataclasses_json.dataclass_json(letter_case=dataclasses_json.LetterCase.CAMEL)
@dataclasses.dataclass(frozen=True)
class EntityPb:
  """One entity as received from the service.

  Attributes:
    key: Entity key; absent for some projection results.
    properties: Property name to JSON Value object.
  """

  key: Optional[KeyPb] = dataclasses.field(
      default=None, metadata=_omit_if_none()
  )
  properties: Dict[str, WireValue] = dataclasses.field(default_factory=dict)


@dataclasses_json.dataclass_json(letter_case=dataclasses_json.LetterCase.CAMEL)
@dataclasses.dataclass(frozen=True)
class EntityResultPb:
  entity: EntityPb
  cursor: Optional[str] = dataclasses.field(
      default=None, metadata=_omit_if_none()
  )
  version: Optional[str] = dataclasses.field(
      default=None, metadata=_omit_if_none()
  )


@dataclasses_json.dataclass_json(letter_case=dataclasses_json.LetterCase.CAMEL)
@dataclasses.dataclass(frozen=True)
class QueryResultBatchPb:
  """A batch of results produced by a query.

  entity_result_type and more_results hold the raw enum names so responses
  carrying values unknown to this library still decode.
  """

  entity_result_type: Optional[str] = dataclasses.field(
      default=None, metadata=_omit_if_none()
  )
  entity_results: List[EntityResultPb] = dataclasses.field(
      default_factory=list
  )
  skipped_results: int = 0
  skipped_cursor: Optional[str] = dataclasses.field(
      default=None, metadata=_omit_if_none()
  )
  end_cursor: Optional[str] = dataclasses.field(
      default=None, metadata=_omit_if_none()
  )
  more_results: Optional[str] = dataclasses.field(
      default=None, metadata=_omit_if_none()
  )


@dataclasses_json.dataclass_json(letter_case=dataclasses_json.LetterCase.CAMEL)
@dataclasses.dataclass(frozen=True)
class RunQueryResponsePb:
  """Response to a RunQuery request.

  Attributes:
    batch: Results of the query.
    query: Structured query executed; returned for GQL queries.
  """

  batch: QueryResultBatchPb = dataclasses.field(
      default_factory=QueryResultBatchPb
  )
  query: Optional[Dict[str, Any]] = dataclasses.field(
      default=None, metadata=_omit_if_none()
  )
