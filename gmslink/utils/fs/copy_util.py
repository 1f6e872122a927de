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
import shutil

try:
    from gmslink.utils.errors import FileError
except ImportError:
    from utils.errors import FileError


def copy_tree(src, dst):
    """
    Copy an entire directory into another.

    Directories are created as needed (an existing destination is reused)
    and files are copied byte for byte, overwriting what is already there.
    Symlinks are followed and file modes are not preserved.

    Args:
        src: Source file or directory path
        dst: Destination file or directory path

    Returns:
        int: Number of files copied

    Raises:
        FileError: If src does not exist or anything cannot be copied.
            Whatever was copied before the failure stays in place.
    """
    if not os.path.exists(src):
        raise FileError(f"Source not found: {src}", path=src)

    if os.path.isdir(src):
        try:
            os.makedirs(dst, exist_ok=True)
            children = sorted(os.listdir(src))
        except OSError as e:
            raise FileError(f"Error copying {src} to {dst}: {e}", path=dst) from e
        copied = 0
        for child in children:
            copied += copy_tree(os.path.join(src, child), os.path.join(dst, child))
        return copied

    try:
        shutil.copyfile(src, dst)
    except OSError as e:
        raise FileError(f"Error copying {src} to {dst}: {e}", path=src) from e
    return 1
