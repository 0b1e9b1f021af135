# !/usr/bin/python
#
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
"""Install script for gcloud-model."""

import setuptools

setuptools.setup(
    name='gcloud_model',
    version='0.1.0',
    author='Google LLC.',
    author_email='no-reply@google.com',
    license='Apache 2.0',
    description=(
        'Typed request options, Datastore query result types and Cloud'
        ' Storage ACL models for Google Cloud JSON APIs.'
    ),
    install_requires=[
        'absl-py',
        'dataclasses-json',
    ],
    package_dir={
        'gcloud_model': 'gcloud_model',
        'gcloud_model.datastore': 'gcloud_model/datastore',
        'gcloud_model.pubsub': 'gcloud_model/pubsub',
        'gcloud_model.storage': 'gcloud_model/storage',
        'gcloud_model.test_utils': 'gcloud_model/test_utils',
    },
    packages=setuptools.find_namespace_packages(
        include=[
            'gcloud_model',
            'gcloud_model.datastore',
            'gcloud_model.pubsub',
            'gcloud_model.storage',
            'gcloud_model.test_utils',
        ]
    ),
    python_requires='>=3.10',
)
