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

import os

try:
    from gmslink.utils.errors import FileError
except ImportError:
    from utils.errors import FileError

ANDROID_MANIFEST = "AndroidManifest.xml"
MANIFEST_CLOSING_TAG = "</manifest>"
PLAY_SERVICES_VERSION_ENTRY = (
    '<meta-data android:name="com.google.android.gms.version" '
    'android:value="@integer/google_play_services_version" />'
)


def ensure_fragment(path, fragment, before_tag):
    """
    Insert fragment right before the first before_tag unless it is already there.

    This is plain text substitution, not XML editing: the fragment is looked
    up literally and before_tag is expected to occur once.

    Returns:
        bool: True if the file was changed
    """
    try:
        with open(path, "r", encoding="utf-8", newline="") as f:
            data = f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise FileError(f"Error reading {path}: {e}", path=path) from e

    if fragment in data:
        return False

    index = data.find(before_tag)
    if index == -1:
        raise FileError(f"{before_tag} not found in {path}", path=path)

    data = data[:index] + fragment + "\n" + data[index:]
    try:
        with open(path, "w", encoding="utf-8", newline="") as f:
            f.write(data)
    except OSError as e:
        raise FileError(f"Error writing {path}: {e}", path=path) from e
    return True


def register_play_services(platform_path, manifest_name=ANDROID_MANIFEST):
    """Register the Play Services version entry in the project's manifest."""
    manifest = os.path.join(platform_path, manifest_name)
    if ensure_fragment(manifest, PLAY_SERVICES_VERSION_ENTRY, MANIFEST_CLOSING_TAG):
        print(f"Updated {manifest}")
        return True
    print(f"  ℹ️  {manifest} already registers Play Services")
    return False
