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

"""
Error types raised while linking the support libraries.

Every error is fatal: the orchestrator stops at the first one and the
``link`` command exits with the error's ``exit_code``.
"""


class GmsLinkError(Exception):
    """Base class for all gmslink errors"""

    exit_code = 1


class ConfigError(GmsLinkError):
    """Missing or invalid configuration (ANDROID_HOME, GMSLINK.toml)"""

    exit_code = 2


class FileError(GmsLinkError):
    """A file or directory could not be read, written or copied"""

    exit_code = 3

    def __init__(self, message, path=None):
        super().__init__(message)
        self.path = path


class CommandError(GmsLinkError):
    """An external command failed to start or exited non-zero"""

    exit_code = 4

    def __init__(self, message, command=None, return_code=None):
        super().__init__(message)
        self.command = command
        self.return_code = return_code
