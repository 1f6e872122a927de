#
# Copyright 2024 gmslink Project Authors. All rights reserved.
# Use of this source code is governed by a MIT-style
# license that can be found at
#
# https://opensource.org/license/MIT
#
# The above copyright notice and this permission
# notice shall be included in all copies or
# substantial portions of the Software.

"""Android project file helpers for gmslink."""

from .sdk import AndroidSdk, SupportLibrary, SUPPORT_LIBRARIES
from .properties import (
    read_api_version,
    write_api_version,
    add_library_references,
    library_references,
    remove_library_references,
)
from .manifest import ensure_fragment, register_play_services

__all__ = [
    'AndroidSdk',
    'SupportLibrary',
    'SUPPORT_LIBRARIES',
    'read_api_version',
    'write_api_version',
    'add_library_references',
    'library_references',
    'remove_library_references',
    'ensure_fragment',
    'register_play_services',
]
