#!/usr/bin/python
# Copyright (c) 2026 OpenStack Foundation.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#    http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or
# implied.
# See the License for the specific language governing permissions and
# limitations under the License.

from setuptools import setup, find_packages

from stowage import __canonical_version__ as version


name = 'stowage'


setup(
    name=name,
    version=version,
    description='Request signing and addressing for S3-style object storage',
    license='Apache License (2.0)',
    author='OpenStack Foundation',
    author_email='openstack-discuss@lists.openstack.org',
    packages=find_packages(exclude=['test', 'test.*', 'bin']),
    python_requires='>=3.9',
    classifiers=[
        'Development Status :: 4 - Beta',
        'License :: OSI Approved :: Apache Software License',
        'Operating System :: POSIX :: Linux',
        'Programming Language :: Python :: 3',
        'Environment :: Console',
        ],
    install_requires=[
        'eventlet>=0.33.0',
        'lxml>=4.2.3',
    ],
    extras_require={
        'test': [
            'pytest',
        ],
    },
    entry_points={
        'console_scripts': [
            'stowage-sign-request=stowage.cli.sign_request:main',
            ],
        },
    )
