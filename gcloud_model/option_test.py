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
"""Tests for option."""
from absl.testing import absltest
from absl.testing import parameterized

from gcloud_model import gcloud_model_errors
from gcloud_model import option


class _ListType(option.OptionType):
  PAGE_SIZE = 'pageSize'
  PAGE_TOKEN = 'pageToken'


class _WriteType(option.OptionType):
  PAGE_SIZE = 'pageSize'


class _ListOption(option.Option):
  pass


class _WriteOption(option.Option):
  pass


_VALUE = 'some value'
_OTHER_VALUE = 'another value'


class OptionTest(parameterized.TestCase):

  def test_constructor(self):
    opt = option.Option(_ListType.PAGE_SIZE, _VALUE)
    self.assertEqual(opt.option_type, _ListType.PAGE_SIZE)
    self.assertEqual(opt.value, _VALUE)

  def test_constructor_accepts_none_value(self):
    opt = option.Option(_ListType.PAGE_SIZE, None)
    self.assertEqual(opt.option_type, _ListType.PAGE_SIZE)
    self.assertIsNone(opt.value)

  @parameterized.parameters(_VALUE, None, 10)
  def test_constructor_raises_if_option_type_none(self, value):
    with self.assertRaises(gcloud_model_errors.InvalidArgumentError):
      option.Option(None, value)

  def test_equals(self):
    opt = _ListOption(_ListType.PAGE_SIZE, _VALUE)
    self.assertEqual(opt, _ListOption(_ListType.PAGE_SIZE, _VALUE))
    self.assertNotEqual(opt, _ListOption(_ListType.PAGE_TOKEN, _OTHER_VALUE))
    self.assertNotEqual(opt, _ListOption(_ListType.PAGE_TOKEN, _VALUE))
    self.assertNotEqual(opt, _ListOption(_ListType.PAGE_SIZE, _OTHER_VALUE))
    self.assertNotEqual(opt, _ListOption(_ListType.PAGE_SIZE, None))
    self.assertNotEqual(opt, (_ListType.PAGE_SIZE, _VALUE))

  def test_equals_across_families(self):
    self.assertEqual(
        _ListOption(_ListType.PAGE_SIZE, _VALUE),
        _WriteOption(_ListType.PAGE_SIZE, _VALUE),
    )
    self.assertEqual(
        option.Option(_ListType.PAGE_SIZE, None),
        _WriteOption(_ListType.PAGE_SIZE, None),
    )

  def test_distinct_kind_enums_not_equal(self):
    self.assertNotEqual(
        option.Option(_ListType.PAGE_SIZE, 1),
        option.Option(_WriteType.PAGE_SIZE, 1),
    )

  def test_hash(self):
    self.assertEqual(
        hash(_ListOption(_ListType.PAGE_SIZE, _VALUE)),
        hash(_WriteOption(_ListType.PAGE_SIZE, _VALUE)),
    )
    self.assertLen(
        {
            option.Option(_ListType.PAGE_SIZE, _VALUE),
            option.Option(_ListType.PAGE_SIZE, _VALUE),
            option.Option(_ListType.PAGE_TOKEN, _VALUE),
        },
        2,
    )

  def test_immutable(self):
    opt = option.Option(_ListType.PAGE_SIZE, _VALUE)
    with self.assertRaises(AttributeError):
      opt._value = _OTHER_VALUE  # pylint: disable=protected-access
    self.assertEqual(opt.value, _VALUE)

  def test_repr(self):
    self.assertEqual(
        repr(_ListOption(_ListType.PAGE_TOKEN, 'abc')),
        "_ListOption(option_type=<_ListType.PAGE_TOKEN: 'pageToken'>,"
        " value='abc')",
    )

  def test_option_map(self):
    self.assertEqual(
        option.option_map([
            option.Option(_ListType.PAGE_SIZE, 5),
            option.Option(_ListType.PAGE_TOKEN, None),
        ]),
        {_ListType.PAGE_SIZE: 5, _ListType.PAGE_TOKEN: None},
    )

  def test_option_map_raises_on_duplicate(self):
    with self.assertRaises(gcloud_model_errors.DuplicateOptionError):
      option.option_map([
          option.Option(_ListType.PAGE_SIZE, 5),
          option.Option(_ListType.PAGE_SIZE, 6),
      ])

  def test_to_request_params(self):
    self.assertEqual(
        option.to_request_params([
            option.Option(_ListType.PAGE_SIZE, 5),
            option.Option(_ListType.PAGE_TOKEN, None),
        ]),
        {'pageSize': 5},
    )

  def test_to_request_params_non_enum_kind(self):
    self.assertEqual(
        option.to_request_params([option.Option('prefix', 'a/')]),
        {'prefix': 'a/'},
    )


if __name__ == '__main__':
  absltest.main()
