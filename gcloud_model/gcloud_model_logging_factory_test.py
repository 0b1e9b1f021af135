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
"""Tests for gcloud model python logging factory."""
import logging
from typing import Any, Mapping, Optional
from unittest import mock

from absl.testing import absltest
from absl.testing import parameterized

from gcloud_model import gcloud_model_logging_factory


def _create_logger(
    name: Optional[str] = 'test-logger',
    signature: Optional[Mapping[str, Any]] = None,
) -> gcloud_model_logging_factory.AbstractLoggingInterface:
  return gcloud_model_logging_factory.PythonLoggerFactory(name).create_logger(
      signature
  )


class PythonLoggerTest(parameterized.TestCase):

  def setUp(self):
    super().setUp()
    logging.getLogger('test-logger').setLevel(logging.DEBUG)

  @parameterized.named_parameters(
      dict(testcase_name='debug', method='debug', level=logging.DEBUG),
      dict(testcase_name='info', method='info', level=logging.INFO),
      dict(testcase_name='warning', method='warning', level=logging.WARNING),
      dict(testcase_name='error', method='error', level=logging.ERROR),
  )
  def test_level_helpers(self, method, level):
    with mock.patch.object(logging.Logger, 'log', autospec=True) as mock_log:
      getattr(_create_logger(), method)('test')
    mock_log.assert_called_once_with(
        logging.getLogger('test-logger'), level, 'test'
    )

  @mock.patch.object(logging.Logger, 'log', autospec=True)
  def test_structured_elements_sorted_with_signature(self, mock_log):
    _create_logger(signature={'query': 'q1'}).info(
        'test', {'b': 2, 'a': 1}, ValueError('bad'), None, {}
    )
    mock_log.assert_called_once_with(
        logging.getLogger('test-logger'),
        logging.INFO,
        'test; a: 1; b: 2; query: q1; EXCEPTION: bad',
    )

  @mock.patch.object(logging.Logger, 'log', autospec=True)
  def test_disabled_level_not_logged(self, mock_log):
    logging.getLogger('test-logger').setLevel(logging.WARNING)
    _create_logger().debug('test')
    mock_log.assert_not_called()

  def test_default_logger_name(self):
    logger = gcloud_model_logging_factory.PythonLoggerFactory().create_logger()
    self.assertIs(
        logger._logger,
        logging.getLogger(
            gcloud_model_logging_factory.DEFAULT_GCLOUD_MODEL_PYTHON_LOGGER_NAME
        ),
    )


if __name__ == '__main__':
  absltest.main()
