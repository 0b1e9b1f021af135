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
"""Tests for storage acl."""
import dataclasses

from absl.testing import absltest
from absl.testing import parameterized

from gcloud_model import gcloud_model_errors
from gcloud_model.storage import acl
from gcloud_model.storage import storage_wire

_ROLE = acl.Role.OWNER
_ENTITY = acl.User.of_all_authenticated_users()
_ETAG = 'etag'
_ID = 'id'
_ACL = acl.Acl(_ENTITY, _ROLE, _ETAG, _ID)


class AclTest(parameterized.TestCase):

  def test_attributes(self):
    self.assertEqual(_ACL.role, _ROLE)
    self.assertEqual(_ACL.entity, _ENTITY)
    self.assertEqual(_ACL.etag, _ETAG)
    self.assertEqual(_ACL.id, _ID)

  def test_replace(self):
    self.assertEqual(dataclasses.replace(_ACL), _ACL)
    replaced = dataclasses.replace(
        _ACL,
        etag='otherEtag',
        id='otherId',
        role=acl.Role.READER,
        entity=acl.User.of_all_users(),
    )
    self.assertEqual(replaced.role, acl.Role.READER)
    self.assertEqual(replaced.entity, acl.User.of_all_users())
    self.assertEqual(replaced.etag, 'otherEtag')
    self.assertEqual(replaced.id, 'otherId')

  def test_immutable(self):
    with self.assertRaises(dataclasses.FrozenInstanceError):
      _ACL.role = acl.Role.READER  # pytype: disable=not-writable

  def test_to_and_from_wire(self):
    self.assertEqual(acl.Acl.from_wire(_ACL.to_bucket_wire()), _ACL)
    self.assertEqual(acl.Acl.from_wire(_ACL.to_object_wire()), _ACL)

  def test_to_bucket_wire(self):
    self.assertEqual(
        _ACL.to_bucket_wire().to_dict(),
        {
            'entity': 'allAuthenticatedUsers',
            'role': 'OWNER',
            'etag': 'etag',
            'id': 'id',
            'kind': storage_wire.BUCKET_ACCESS_CONTROL_KIND,
        },
    )

  def test_from_object_wire_json(self):
    object_pb = storage_wire.ObjectAccessControlPb.from_dict({
        'kind': 'storage#objectAccessControl',
        'entity': 'group-readers@example.com',
        'role': 'READER',
        'bucket': 'b1',
        'object': 'o1',
        'generation': '12',
    })
    self.assertEqual(
        acl.Acl.from_wire(object_pb),
        acl.Acl.of(acl.Group('readers@example.com'), acl.Role.READER),
    )

  def test_from_wire_unknown_role_raises(self):
    with self.assertRaises(gcloud_model_errors.InvalidWireFormatError):
      acl.Acl.from_wire(storage_wire.BucketAccessControlPb('user-u1', 'ADMIN'))

  def test_missing_entity_raises(self):
    with self.assertRaises(gcloud_model_errors.InvalidArgumentError):
      acl.Acl(None, _ROLE)

  def test_of(self):
    of_acl = acl.Acl.of(acl.User.of_all_users(), acl.Role.READER)
    self.assertEqual(of_acl.entity, acl.User.of_all_users())
    self.assertEqual(of_acl.role, acl.Role.READER)
    self.assertIsNone(of_acl.etag)
    self.assertIsNone(of_acl.id)
    self.assertEqual(acl.Acl.from_wire(of_acl.to_object_wire()), of_acl)
    self.assertEqual(acl.Acl.from_wire(of_acl.to_bucket_wire()), of_acl)


class EntityTest(parameterized.TestCase):

  def test_domain_entity(self):
    domain = acl.Domain('d1')
    self.assertEqual(domain.domain, 'd1')
    self.assertEqual(domain.type, acl.EntityType.DOMAIN)
    self.assertEqual(domain.to_wire(), 'domain-d1')
    self.assertEqual(acl.Entity.from_wire(domain.to_wire()), domain)

  def test_group_entity(self):
    group = acl.Group('g1')
    self.assertEqual(group.email, 'g1')
    self.assertEqual(group.type, acl.EntityType.GROUP)
    self.assertEqual(acl.Entity.from_wire(group.to_wire()), group)

  def test_user_entity(self):
    user = acl.User('u1')
    self.assertEqual(user.email, 'u1')
    self.assertEqual(user.type, acl.EntityType.USER)
    self.assertEqual(user.to_wire(), 'user-u1')
    self.assertEqual(acl.Entity.from_wire(user.to_wire()), user)

  @parameterized.named_parameters(
      dict(
          testcase_name='all_users',
          user=acl.User.of_all_users(),
          wire='allUsers',
      ),
      dict(
          testcase_name='all_authenticated_users',
          user=acl.User.of_all_authenticated_users(),
          wire='allAuthenticatedUsers',
      ),
  )
  def test_special_user_entity(self, user, wire):
    self.assertEqual(user.type, acl.EntityType.USER)
    self.assertEqual(user.to_wire(), wire)
    self.assertEqual(acl.Entity.from_wire(wire), user)

  def test_project_entity(self):
    project = acl.Project(acl.ProjectRole.VIEWERS, 'p1')
    self.assertEqual(project.project_role, acl.ProjectRole.VIEWERS)
    self.assertEqual(project.project_id, 'p1')
    self.assertEqual(project.type, acl.EntityType.PROJECT)
    self.assertEqual(project.to_wire(), 'project-viewers-p1')
    self.assertEqual(acl.Entity.from_wire(project.to_wire()), project)

  def test_project_id_with_dash(self):
    project = acl.Entity.from_wire('project-owners-my-project')
    self.assertIsInstance(project, acl.Project)
    self.assertEqual(project.project_role, acl.ProjectRole.OWNERS)
    self.assertEqual(project.project_id, 'my-project')

  def test_empty_project_id_raises(self):
    with self.assertRaises(gcloud_model_errors.InvalidArgumentError):
      acl.Project(acl.ProjectRole.EDITORS, '')

  def test_raw_entity(self):
    raw = acl.RawEntity('bla')
    self.assertEqual(raw.value, 'bla')
    self.assertEqual(raw.type, acl.EntityType.UNKNOWN)
    self.assertEqual(raw.to_wire(), 'bla')
    self.assertEqual(acl.Entity.from_wire(raw.to_wire()), raw)

  @parameterized.parameters(
      'project-admins-p1', 'project-viewers-', 'project-viewers'
  )
  def test_unrecognized_project_is_raw(self, wire):
    self.assertEqual(acl.Entity.from_wire(wire), acl.RawEntity(wire))

  def test_entity_equality_uses_type(self):
    self.assertNotEqual(acl.User('x'), acl.Group('x'))
    self.assertEqual(hash(acl.User('x')), hash(acl.User('x')))

  def test_repr(self):
    self.assertEqual(repr(acl.Group('g1')), "Group('group-g1')")


if __name__ == '__main__':
  absltest.main()
