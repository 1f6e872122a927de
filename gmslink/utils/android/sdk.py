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
Layout of a locally installed Android SDK.

Only the legacy ``extras`` support library projects and the ``tools/android``
command are needed.
"""

import os

try:
    from gmslink.utils.errors import ConfigError
except ImportError:
    from utils.errors import ConfigError

ANDROID_HOME_ENV = "ANDROID_HOME"


class SupportLibrary:
    """A library project shipped in the SDK and copied into the host project"""

    def __init__(self, name: str, sdk_subpath: str):
        self.name = name
        self.sdk_subpath = sdk_subpath

    def __repr__(self):
        return f"SupportLibrary(name={self.name}, sdk_subpath={self.sdk_subpath})"


APPCOMPAT = SupportLibrary("AppCompatLib", "extras/android/support/v7/appcompat")
MEDIAROUTER = SupportLibrary("MediarouterLib", "extras/android/support/v7/mediarouter")
PLAY_SERVICES = SupportLibrary(
    "PlayServicesLib",
    "extras/google/google_play_services/libproject/google-play-services_lib",
)

# copy and link order
SUPPORT_LIBRARIES = [APPCOMPAT, MEDIAROUTER, PLAY_SERVICES]


class AndroidSdk:
    def __init__(self, root: str, android_tool: str = None):
        self.root = root
        self.android_tool = android_tool or os.path.join(root, "tools", "android")

    @classmethod
    def from_env(cls, android_tool: str = None, environ=None):
        """
        Locate the SDK through ANDROID_HOME.

        Raises:
            ConfigError: If ANDROID_HOME is not set
        """
        environ = os.environ if environ is None else environ
        root = environ.get(ANDROID_HOME_ENV)
        if not root:
            raise ConfigError(
                f"Environment variable {ANDROID_HOME_ENV} is not set to Android SDK directory"
            )
        print(f"Found Android SDK at {root}")
        return cls(root, android_tool=android_tool)

    def library_source(self, library: SupportLibrary) -> str:
        return os.path.join(self.root, *library.sdk_subpath.split("/"))
