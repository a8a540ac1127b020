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

"""Miscellaneous utility functions for use in stowage."""

from stowage.common.utils.config import (  # noqa
    TRUE_VALUES,
    config_port_value,
    config_true_value,
    readconf,
)
from stowage.common.utils.logs import (  # noqa
    StowageLogAdapter,
    StowageLogFormatter,
    get_logger,
    get_prefixed_logger,
)
