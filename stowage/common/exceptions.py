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


class StowageException(Exception):
    pass


class ConfigurationError(StowageException):
    """
    Missing or invalid credentials, or a bucket identifier the storage
    service will not accept. Raised when a client or handle is constructed.
    """


class ValidationError(StowageException):
    """
    A query parameter, header or batch size the requested operation does
    not support. Raised while a request is being assembled, before any
    descriptor is returned.
    """

    def __init__(self, msg, operation=None):
        super(ValidationError, self).__init__(msg)
        self.operation = operation


class SigningError(StowageException):
    """
    Input to the signer could not be encoded to the bytes it hashes.
    """
