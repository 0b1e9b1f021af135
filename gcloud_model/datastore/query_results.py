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
"""Typed results of one RunQuery response."""
from __future__ import annotations

from typing import Any, Iterator, List, Optional

from gcloud_model import gcloud_model_errors
from gcloud_model import gcloud_model_logging_factory
from gcloud_model.datastore import datastore_wire
from gcloud_model.datastore import query as query_module
from gcloud_model.datastore import result_type as result_type_module


class QueryResultBatch:
  """Results of a query converted to the query's result type.

  The batch does not fetch further results; use next_query to build the query
  for the next RunQuery request while has_more_results is True.
  """

  def __init__(
      self,
      query: query_module.Query,
      response: datastore_wire.RunQueryResponsePb,
      logging_factory: Optional[
          gcloud_model_logging_factory.AbstractLoggingInterfaceFactory
      ] = None,
  ):
    """Constructor.

    Args:
      query: Query that produced response.
      response: Decoded RunQuery response.
      logging_factory: Factory used to construct the batch logger.

    Raises:
      gcloud_model_errors.UnexpectedResultTypeError: Result type of response
        is not compatible with the query result type.
      gcloud_model_errors.InvalidWireFormatError: Malformed result.
    """
    if logging_factory is None:
      logging_factory = gcloud_model_logging_factory.PythonLoggerFactory()
    self._logger = logging_factory.create_logger(
        {'query_result_type': query.result_type}
    )
    self._query = query
    self._response = response
    batch = response.batch
    actual_result_type = result_type_module.from_wire(
        batch.entity_result_type
    )
    # Projection entities can represent every type of result.
    if query.result_type == result_type_module.PROJECTION_ENTITY:
      actual_result_type = result_type_module.PROJECTION_ENTITY
    if not query.result_type.is_assignable_from(actual_result_type):
      self._logger.error(
          'Query result type does not match batch result type.',
          {'entity_result_type': batch.entity_result_type},
      )
      raise gcloud_model_errors.UnexpectedResultTypeError(
          query.result_type, actual_result_type
      )
    self._result_type = actual_result_type
    self._results = [
        actual_result_type.convert(result.entity)
        for result in batch.entity_results
    ]
    self._logger.debug(
        'Converted query result batch.',
        {
            'batch_result_type': actual_result_type,
            'result_count': len(self._results),
            'more_results': batch.more_results,
        },
    )

  @property
  def query(self) -> query_module.Query:
    return self._query

  @property
  def result_type(self) -> result_type_module.ResultType:
    """Result type used to convert the batch."""
    return self._result_type

  @property
  def results(self) -> List[Any]:
    return list(self._results)

  @property
  def cursors(self) -> List[Optional[str]]:
    """Returns cursor after each result; None where none was returned."""
    return [result.cursor for result in self._response.batch.entity_results]

  @property
  def end_cursor(self) -> Optional[str]:
    return self._response.batch.end_cursor

  @property
  def skipped_results(self) -> int:
    return self._response.batch.skipped_results

  @property
  def more_results(self) -> datastore_wire.MoreResultsType:
    try:
      return datastore_wire.MoreResultsType(self._response.batch.more_results)
    except ValueError:
      return datastore_wire.MoreResultsType.MORE_RESULTS_TYPE_UNSPECIFIED

  @property
  def has_more_results(self) -> bool:
    """Returns True if the query has results following this batch."""
    return self.more_results == datastore_wire.MoreResultsType.NOT_FINISHED

  def next_query(self) -> query_module.Query:
    return self._query.next_query(self._response)

  def __iter__(self) -> Iterator[Any]:
    return iter(list(self._results))

  def __len__(self) -> int:
    return len(self._results)
