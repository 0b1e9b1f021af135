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
"""Builders of decoded Datastore wire messages used in tests."""
from typing import Any, Dict, List, Mapping, Optional, Sequence

from gcloud_model.datastore import datastore_wire

PROJECT_ID = 'test-project'
NAMESPACE = 'test-namespace'
KIND = 'Book'


def key_json(
    name: Optional[str] = 'book-1',
    kind: str = KIND,
    project_id: str = PROJECT_ID,
    namespace: Optional[str] = None,
) -> Dict[str, Any]:
  """Returns JSON Key object with a single named path element."""
  partition = {'projectId': project_id}
  if namespace:
    partition['namespaceId'] = namespace
  element = {'kind': kind}
  if name is not None:
    element['name'] = name
  return {'partitionId': partition, 'path': [element]}


def key_pb(
    name: Optional[str] = 'book-1', kind: str = KIND
) -> datastore_wire.KeyPb:
  return datastore_wire.KeyPb.from_dict(key_json(name, kind))


def entity_pb(
    key: Optional[datastore_wire.KeyPb] = None,
    properties: Optional[Mapping[str, Dict[str, Any]]] = None,
) -> datastore_wire.EntityPb:
  return datastore_wire.EntityPb(
      key, {} if properties is None else dict(properties)
  )


def book_properties() -> Dict[str, Dict[str, Any]]:
  return {
      'title': {'stringValue': 'Dune'},
      'pages': {'integerValue': '412', 'excludeFromIndexes': True},
      'in_print': {'booleanValue': True},
  }


def run_query_response(
    entities: Sequence[datastore_wire.EntityPb] = (),
    entity_result_type: Optional[str] = None,
    end_cursor: Optional[str] = 'end-cursor',
    more_results: Optional[str] = 'NOT_FINISHED',
    skipped_results: int = 0,
    query: Optional[Dict[str, Any]] = None,
    cursors: Optional[List[str]] = None,
) -> datastore_wire.RunQueryResponsePb:
  """Returns decoded RunQuery response holding entities."""
  if cursors is None:
    cursors = [f'cursor-{i}' for i in range(len(entities))]
  return datastore_wire.RunQueryResponsePb(
      datastore_wire.QueryResultBatchPb(
          entity_result_type=entity_result_type,
          entity_results=[
              datastore_wire.EntityResultPb(entity, cursor)
              for entity, cursor in zip(entities, cursors)
          ],
          skipped_results=skipped_results,
          end_cursor=end_cursor,
          more_results=more_results,
      ),
      query,
  )
