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
"""Options for Pub/Sub list calls (topics, subscriptions)."""
from __future__ import annotations

from gcloud_model import gcloud_model_errors
from gcloud_model import option


class ListOptionType(option.OptionType):
  PAGE_SIZE = 'pageSize'
  PAGE_TOKEN = 'pageToken'


class ListOption(option.Option):
  """Option for listing topics or subscriptions."""

  @classmethod
  def page_size(cls, page_size: int) -> ListOption:
    """Returns option that sets the maximum number of results per page.

    Args:
      page_size: Maximum number of results per page, must be > 0.

    Raises:
      gcloud_model_errors.InvalidArgumentError: Invalid page size.
    """
    if isinstance(page_size, bool) or not isinstance(page_size, int):
      raise gcloud_model_errors.InvalidArgumentError(
          f'Page size must be an int; received: {page_size!r}.'
      )
    if page_size < 1:
      raise gcloud_model_errors.InvalidArgumentError(
          f'Page size must be > 0; received: {page_size}.'
      )
    return cls(ListOptionType.PAGE_SIZE, page_size)

  @classmethod
  def page_token(cls, page_token: str) -> ListOption:
    """Returns option that starts listing at the page identified by token."""
    return cls(ListOptionType.PAGE_TOKEN, page_token)
