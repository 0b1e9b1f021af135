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
"""Cloud Datastore queries.

Queries are immutable. GqlQuery holds a GQL query string and its bindings,
StructuredQuery holds a query built from kind, filter, order, projection and
paging parameters. Use dataclasses.replace to derive modified copies.

Note that queries require proper indexing, see
https://cloud.google.com/datastore/docs/tools/indexconfig.

to_wire returns the JSON body of a RunQuery request. next_query returns the
query that continues reading after a RunQuery response.
"""
from __future__ import annotations

import abc
import dataclasses
import enum
from typing import Any, Dict, Mapping, Optional, Tuple, Union

from gcloud_model import gcloud_model_errors
from gcloud_model.datastore import datastore_wire
from gcloud_model.datastore import entity
from gcloud_model.datastore import key as key_module
from gcloud_model.datastore import result_type as result_type_module

KEY_PROPERTY_NAME = '__key__'


class Operator(enum.Enum):
  LESS_THAN = 'LESS_THAN'
  LESS_THAN_OR_EQUAL = 'LESS_THAN_OR_EQUAL'
  GREATER_THAN = 'GREATER_THAN'
  GREATER_THAN_OR_EQUAL = 'GREATER_THAN_OR_EQUAL'
  EQUAL = 'EQUAL'
  HAS_ANCESTOR = 'HAS_ANCESTOR'


class CompositeOperator(enum.Enum):
  AND = 'AND'


class Direction(enum.Enum):
  ASCENDING = 'ASCENDING'
  DESCENDING = 'DESCENDING'


@dataclasses.dataclass(frozen=True)
class PropertyFilter:
  """Filter on a single property."""

  property_name: str
  operator: Operator
  value: Any

  def __post_init__(self) -> None:
    if not self.property_name:
      raise gcloud_model_errors.InvalidArgumentError(
          'Filter property name cannot be empty.'
      )
    if self.operator == Operator.HAS_ANCESTOR and not isinstance(
        self.value, key_module.Key
    ):
      raise gcloud_model_errors.InvalidArgumentError(
          'HAS_ANCESTOR filter value must be a key.'
      )
    # Raises if value cannot be sent.
    entity.value_to_wire(self.value)

  @classmethod
  def lt(cls, property_name: str, value: Any) -> PropertyFilter:
    return cls(property_name, Operator.LESS_THAN, value)

  @classmethod
  def le(cls, property_name: str, value: Any) -> PropertyFilter:
    return cls(property_name, Operator.LESS_THAN_OR_EQUAL, value)

  @classmethod
  def gt(cls, property_name: str, value: Any) -> PropertyFilter:
    return cls(property_name, Operator.GREATER_THAN, value)

  @classmethod
  def ge(cls, property_name: str, value: Any) -> PropertyFilter:
    return cls(property_name, Operator.GREATER_THAN_OR_EQUAL, value)

  @classmethod
  def eq(cls, property_name: str, value: Any) -> PropertyFilter:
    return cls(property_name, Operator.EQUAL, value)

  @classmethod
  def has_ancestor(cls, ancestor: key_module.Key) -> PropertyFilter:
    return cls(KEY_PROPERTY_NAME, Operator.HAS_ANCESTOR, ancestor)

  def to_wire(self) -> Dict[str, Any]:
    return {
        'propertyFilter': {
            'property': {'name': self.property_name},
            'op': self.operator.value,
            'value': entity.value_to_wire(self.value),
        }
    }


@dataclasses.dataclass(frozen=True)
class CompositeFilter:
  filters: Tuple[Filter, ...]
  operator: CompositeOperator = CompositeOperator.AND

  def __post_init__(self) -> None:
    object.__setattr__(self, 'filters', tuple(self.filters))
    if not self.filters:
      raise gcloud_model_errors.InvalidArgumentError(
          'Composite filter requires at least one filter.'
      )

  @classmethod
  def and_(cls, first: Filter, *others: Filter) -> CompositeFilter:
    return cls((first,) + others)

  def to_wire(self) -> Dict[str, Any]:
    return {
        'compositeFilter': {
            'op': self.operator.value,
            'filters': [f.to_wire() for f in self.filters],
        }
    }


Filter = Union[PropertyFilter, CompositeFilter]


def filter_from_wire(filter_pb: Mapping[str, Any]) -> Filter:
  """Returns filter decoded from wire (JSON) Filter object."""
  if 'propertyFilter' in filter_pb:
    property_filter = filter_pb['propertyFilter']
    return PropertyFilter(
        property_filter['property']['name'],
        Operator(property_filter['op']),
        entity.value_from_wire(property_filter['value']),
    )
  if 'compositeFilter' in filter_pb:
    composite = filter_pb['compositeFilter']
    return CompositeFilter(
        tuple(filter_from_wire(f) for f in composite.get('filters', [])),
        CompositeOperator(composite['op']),
    )
  raise gcloud_model_errors.InvalidWireFormatError(
      f'Unsupported filter: {filter_pb!r}'
  )


@dataclasses.dataclass(frozen=True)
class OrderBy:
  property_name: str
  direction: Direction = Direction.ASCENDING

  @classmethod
  def asc(cls, property_name: str) -> OrderBy:
    return cls(property_name, Direction.ASCENDING)

  @classmethod
  def desc(cls, property_name: str) -> OrderBy:
    return cls(property_name, Direction.DESCENDING)

  def to_wire(self) -> Dict[str, Any]:
    return {
        'property': {'name': self.property_name},
        'direction': self.direction.value,
    }

  @classmethod
  def from_wire(cls, order_pb: Mapping[str, Any]) -> OrderBy:
    return cls(
        order_pb['property']['name'],
        Direction(order_pb.get('direction', Direction.ASCENDING.value)),
    )


def _run_query_request(
    namespace: Optional[str], body: Dict[str, Any]
) -> Dict[str, Any]:
  if namespace:
    body['partitionId'] = {'namespaceId': namespace}
  return body


class Query(metaclass=abc.ABCMeta):
  """A Google Cloud Datastore query.

  Attributes:
    result_type: Expected type of the values returned by the query.
    namespace: Namespace to query; None for the default namespace.
  """

  result_type: result_type_module.ResultType
  namespace: Optional[str]

  @abc.abstractmethod
  def to_wire(self) -> Dict[str, Any]:
    """Returns JSON body of the RunQuery request for the query."""

  @abc.abstractmethod
  def next_query(self, response: datastore_wire.RunQueryResponsePb) -> Query:
    """Returns query that reads the results following response.

    Args:
      response: Response returned for this query.
    """


def _check_result_type(
    result_type: Optional[result_type_module.ResultType],
) -> None:
  if result_type is None:
    raise gcloud_model_errors.InvalidArgumentError(
        'Query result type cannot be None.'
    )


@dataclasses.dataclass(frozen=True)
class GqlQuery(Query):
  """A GQL query.

  See https://cloud.google.com/datastore/docs/apis/gql/gql_reference.

  Attributes:
    query_string: GQL query string.
    result_type: Expected result type; UNKNOWN converts each result by
      inspecting its content.
    namespace: Namespace to query.
    allow_literals: Whether the query string may contain literal values.
    named_bindings: Values bound to @name arguments.
    positional_bindings: Values bound to @1, @2, ... arguments.
  """

  query_string: str
  result_type: result_type_module.ResultType = result_type_module.UNKNOWN
  namespace: Optional[str] = None
  allow_literals: bool = False
  named_bindings: Mapping[str, Any] = dataclasses.field(default_factory=dict)
  positional_bindings: Tuple[Any, ...] = ()

  def __post_init__(self) -> None:
    _check_result_type(self.result_type)
    if not self.query_string:
      raise gcloud_model_errors.InvalidArgumentError(
          'GQL query string cannot be empty.'
      )
    object.__setattr__(self, 'named_bindings', dict(self.named_bindings))
    object.__setattr__(
        self, 'positional_bindings', tuple(self.positional_bindings)
    )
    for value in self.named_bindings.values():
      entity.value_to_wire(value)
    for value in self.positional_bindings:
      entity.value_to_wire(value)

  def to_wire(self) -> Dict[str, Any]:
    gql_query = {
        'queryString': self.query_string,
        'allowLiterals': self.allow_literals,
    }
    if self.named_bindings:
      gql_query['namedBindings'] = {
          name: {'value': entity.value_to_wire(value)}
          for name, value in self.named_bindings.items()
      }
    if self.positional_bindings:
      gql_query['positionalBindings'] = [
          {'value': entity.value_to_wire(value)}
          for value in self.positional_bindings
      ]
    return _run_query_request(self.namespace, {'gqlQuery': gql_query})

  def next_query(
      self, response: datastore_wire.RunQueryResponsePb
  ) -> StructuredQuery:
    """Returns structured query continuing the GQL query.

    Args:
      response: Response returned for this query.

    Raises:
      gcloud_model_errors.InvalidWireFormatError: Response does not include
        the executed query.
    """
    if response.query is None:
      raise gcloud_model_errors.InvalidWireFormatError(
          'RunQuery response for GQL query is missing the executed query.'
      )
    return StructuredQuery.from_wire(
        self.result_type, self.namespace, response.query
    ).next_query(response)


@dataclasses.dataclass(frozen=True)
class StructuredQuery(Query):
  """A query built from kind, filter, order, projection and paging parameters.

  Attributes:
    result_type: ENTITY, KEY or PROJECTION_ENTITY.
    namespace: Namespace to query.
    kind: Kind to query; None queries all kinds.
    projection: Names of the properties to return.
    distinct_on: Names of the properties results are made distinct on.
    filter: Filter applied to the results.
    order_by: Result order.
    start_cursor: Cursor at which to start returning results.
    end_cursor: Cursor at which to stop returning results.
    offset: Number of results to skip.
    limit: Maximum number of results to return; None for no limit.
  """

  result_type: result_type_module.ResultType
  namespace: Optional[str] = None
  kind: Optional[str] = None
  projection: Tuple[str, ...] = ()
  distinct_on: Tuple[str, ...] = ()
  filter: Optional[Filter] = None
  order_by: Tuple[OrderBy, ...] = ()
  start_cursor: Optional[str] = None
  end_cursor: Optional[str] = None
  offset: int = 0
  limit: Optional[int] = None

  def __post_init__(self) -> None:
    _check_result_type(self.result_type)
    object.__setattr__(self, 'projection', tuple(self.projection))
    object.__setattr__(self, 'distinct_on', tuple(self.distinct_on))
    object.__setattr__(self, 'order_by', tuple(self.order_by))
    if self.result_type == result_type_module.ENTITY:
      if self.projection or self.distinct_on:
        raise gcloud_model_errors.InvalidArgumentError(
            'Entity queries cannot define projection or distinct_on.'
        )
    elif self.result_type == result_type_module.KEY:
      if self.projection != (KEY_PROPERTY_NAME,) or self.distinct_on:
        raise gcloud_model_errors.InvalidArgumentError(
            f'Key queries must project only {KEY_PROPERTY_NAME}.'
        )
    elif self.result_type != result_type_module.PROJECTION_ENTITY:
      raise gcloud_model_errors.InvalidArgumentError(
          f'Unsupported structured query result type: {self.result_type}.'
      )
    if self.offset < 0:
      raise gcloud_model_errors.InvalidArgumentError('Offset must be >= 0.')
    if self.limit is not None and self.limit < 0:
      raise gcloud_model_errors.InvalidArgumentError('Limit must be >= 0.')

  def to_wire(self) -> Dict[str, Any]:
    query = {}
    if self.projection:
      query['projection'] = [
          {'property': {'name': name}} for name in self.projection
      ]
    if self.kind:
      query['kind'] = [{'name': self.kind}]
    if self.filter is not None:
      query['filter'] = self.filter.to_wire()
    if self.order_by:
      query['order'] = [order.to_wire() for order in self.order_by]
    if self.distinct_on:
      query['distinctOn'] = [{'name': name} for name in self.distinct_on]
    if self.start_cursor:
      query['startCursor'] = self.start_cursor
    if self.end_cursor:
      query['endCursor'] = self.end_cursor
    if self.offset:
      query['offset'] = self.offset
    if self.limit is not None:
      query['limit'] = self.limit
    return _run_query_request(self.namespace, {'query': query})

  @classmethod
  def from_wire(
      cls,
      result_type: result_type_module.ResultType,
      namespace: Optional[str],
      query_pb: Mapping[str, Any],
  ) -> StructuredQuery:
    """Returns query decoded from wire (JSON) Query object.

    Args:
      result_type: Result type of the query; if UNKNOWN the result type is
        derived from the projection.
      namespace: Namespace of the query.
      query_pb: JSON Query object.

    Raises:
      gcloud_model_errors.InvalidWireFormatError: Query malformed.
    """
    try:
      projection = tuple(
          p['property']['name'] for p in query_pb.get('projection', [])
      )
      if result_type == result_type_module.UNKNOWN:
        if not projection:
          result_type = result_type_module.ENTITY
        elif projection == (KEY_PROPERTY_NAME,):
          result_type = result_type_module.KEY
        else:
          result_type = result_type_module.PROJECTION_ENTITY
      kinds = [k['name'] for k in query_pb.get('kind', [])]
      if len(kinds) > 1:
        raise gcloud_model_errors.InvalidWireFormatError(
            f'Query defines more than one kind: {kinds}'
        )
      filter_pb = query_pb.get('filter')
      return cls(
          result_type,
          namespace=namespace,
          kind=kinds[0] if kinds else None,
          projection=projection,
          distinct_on=tuple(d['name'] for d in query_pb.get('distinctOn', [])),
          filter=None if filter_pb is None else filter_from_wire(filter_pb),
          order_by=tuple(
              OrderBy.from_wire(o) for o in query_pb.get('order', [])
          ),
          start_cursor=query_pb.get('startCursor'),
          end_cursor=query_pb.get('endCursor'),
          offset=int(query_pb.get('offset', 0)),
          limit=None if 'limit' not in query_pb else int(query_pb['limit']),
      )
    except (
        gcloud_model_errors.InvalidArgumentError,
        KeyError,
        TypeError,
        ValueError,
    ) as exp:
      raise gcloud_model_errors.InvalidWireFormatError(
          f'Invalid query: {query_pb!r}'
      ) from exp

  def next_query(
      self, response: datastore_wire.RunQueryResponsePb
  ) -> StructuredQuery:
    """Returns query starting at the end cursor of the response batch.

    Offset and limit are reduced by the results skipped and returned by the
    batch.

    Args:
      response: Response returned for this query.
    """
    batch = response.batch
    changes: Dict[str, Any] = {'start_cursor': batch.end_cursor}
    if self.offset > 0 and batch.skipped_results < self.offset:
      changes['offset'] = self.offset - batch.skipped_results
    else:
      changes['offset'] = 0
      if self.limit is not None:
        changes['limit'] = max(0, self.limit - len(batch.entity_results))
    return dataclasses.replace(self, **changes)


def new_entity_query(**kwargs: Any) -> StructuredQuery:
  """Returns structured query for full entities."""
  return StructuredQuery(result_type_module.ENTITY, **kwargs)


def new_key_query(**kwargs: Any) -> StructuredQuery:
  """Returns structured query for keys only."""
  return StructuredQuery(
      result_type_module.KEY, projection=(KEY_PROPERTY_NAME,), **kwargs
  )


def new_projection_entity_query(**kwargs: Any) -> StructuredQuery:
  """Returns structured query for projection entities."""
  return StructuredQuery(result_type_module.PROJECTION_ENTITY, **kwargs)
