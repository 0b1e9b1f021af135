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
"""Tests for pubsub options."""
from absl.testing import absltest
from absl.testing import parameterized

from gcloud_model import gcloud_model_errors
from gcloud_model import option
from gcloud_model.pubsub import pubsub_options


class PubsubOptionsTest(parameterized.TestCase):

  def test_page_size(self):
    opt = pubsub_options.ListOption.page_size(42)
    self.assertIsInstance(opt, pubsub_options.ListOption)
    self.assertEqual(opt.option_type, pubsub_options.ListOptionType.PAGE_SIZE)
    self.assertEqual(opt.value, 42)

  @parameterized.parameters(0, -1, '10', 1.5, True)
  def test_page_size_raises_if_invalid(self, page_size):
    with self.assertRaises(gcloud_model_errors.InvalidArgumentError):
      pubsub_options.ListOption.page_size(page_size)

  def test_page_token(self):
    opt = pubsub_options.ListOption.page_token('cursor')
    self.assertEqual(opt.option_type, pubsub_options.ListOptionType.PAGE_TOKEN)
    self.assertEqual(opt.value, 'cursor')

  def test_list_option_equals_base_option(self):
    self.assertEqual(
        pubsub_options.ListOption.page_token('cursor'),
        option.Option(pubsub_options.ListOptionType.PAGE_TOKEN, 'cursor'),
    )

  def test_request_params(self):
    self.assertEqual(
        option.to_request_params([
            pubsub_options.ListOption.page_size(10),
            pubsub_options.ListOption.page_token('next'),
        ]),
        {'pageSize': 10, 'pageToken': 'next'},
    )

  def test_request_params_duplicate_raises(self):
    with self.assertRaises(gcloud_model_errors.DuplicateOptionError):
      option.to_request_params([
          pubsub_options.ListOption.page_size(10),
          pubsub_options.ListOption.page_size(20),
      ])


if __name__ == '__main__':
  absltest.main()
