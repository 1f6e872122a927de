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
Editor for Android ``project.properties`` files.

The file is treated as plain text: values are found with regular
expressions and the rest of the file is kept byte for byte, including
comments and line endings.
"""

import os
import re
from typing import List, Optional, Tuple

try:
    from gmslink.utils.errors import FileError
except ImportError:
    from utils.errors import FileError

PROJECT_PROPERTIES = "project.properties"

TARGET_PATTERN = re.compile(r"target=android-(\d+)")

REFERENCE_KEY_PREFIX = "android.library.reference."
# any mention of a reference key, commented out ones included
REFERENCE_ORDINAL_PATTERN = re.compile(r"android\.library\.reference\.(\d+)")
REFERENCE_LINE_PATTERN = re.compile(
    r"^[ \t]*android\.library\.reference\.(\d+)[ \t]*=[ \t]*(.*?)[ \t]*\r?$",
    re.MULTILINE,
)


def get_properties_path(project_path: str) -> str:
    return os.path.join(project_path, PROJECT_PROPERTIES)


def _read_text(path: str) -> str:
    try:
        with open(path, "r", encoding="utf-8", newline="") as f:
            return f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise FileError(f"Error reading {path}: {e}", path=path) from e


def _write_text(path: str, text: str, mode: str = "w"):
    try:
        with open(path, mode, encoding="utf-8", newline="") as f:
            f.write(text)
    except OSError as e:
        raise FileError(f"Error writing {path}: {e}", path=path) from e


def _new_lines(text: str, lines: List[str]) -> str:
    """Text to append so that every entry of lines lands on its own line."""
    prefix = "" if not text or text.endswith("\n") else "\n"
    return prefix + "".join(f"{line}\n" for line in lines)


def read_api_version(project_path: str) -> Optional[str]:
    """
    Read the android api version (e.g. 21) from a project's properties.

    Returns:
        str: The digits of the first ``target=android-<n>`` entry, or None
    """
    text = _read_text(get_properties_path(project_path))
    match = TARGET_PATTERN.search(text)
    return match.group(1) if match else None


def write_api_version(project_path: str, new_version: Optional[str]):
    """
    Set the android api version in a project's properties.

    Replaces the existing ``target=android-<n>`` entry in place, or appends
    one when there is none. Does nothing when new_version is empty.

    Args:
        project_path: The project's path
        new_version: The new version, e.g. 21
    """
    if not new_version:
        return

    properties_path = get_properties_path(project_path)
    text = _read_text(properties_path)
    entry = f"target=android-{new_version}"
    match = TARGET_PATTERN.search(text)
    if match:
        text = text[: match.start()] + entry + text[match.end() :]
    else:
        text += _new_lines(text, [entry])
    _write_text(properties_path, text)
    print(f"Added android api version {new_version} to {properties_path}")


def library_references(project_path: str) -> List[Tuple[int, str]]:
    """Library references of a project as (ordinal, relative path), in file order."""
    text = _read_text(get_properties_path(project_path))
    return [(int(m.group(1)), m.group(2)) for m in REFERENCE_LINE_PATTERN.finditer(text)]


def next_reference_ordinal(text: str) -> int:
    """
    First ordinal above every reference key mentioned in text.

    Gaps left by removed references are never filled, so an ordinal that
    shows up anywhere in the file is never handed out again.
    """
    ordinals = [int(m.group(1)) for m in REFERENCE_ORDINAL_PATTERN.finditer(text)]
    return max(ordinals, default=0) + 1


def add_library_references(project_path: str, reference_paths: List[str]) -> List[int]:
    """
    Add library references to a project.

    Args:
        project_path: The location of the project
        reference_paths: The relative locations of the references

    Returns:
        list: The ordinals given to the new references
    """
    properties_path = get_properties_path(project_path)
    print(f"Adding references {reference_paths} to {properties_path}")

    text = _read_text(properties_path)
    if not reference_paths:
        return []

    first = next_reference_ordinal(text)
    ordinals = list(range(first, first + len(reference_paths)))
    lines = [
        f"{REFERENCE_KEY_PREFIX}{ordinal}={path}"
        for ordinal, path in zip(ordinals, reference_paths)
    ]
    _write_text(properties_path, _new_lines(text, lines), mode="a")
    print(f"Added references to {properties_path}: {', '.join(lines)}")
    return ordinals


def remove_library_references(project_path: str, reference_paths: List[str]) -> int:
    """
    Remove the reference lines pointing at any of reference_paths.

    Paths are compared after normalization, so "./Lib" matches "Lib".
    Ordinals of the remaining references are left as they are.

    Returns:
        int: Number of lines removed
    """
    properties_path = get_properties_path(project_path)
    text = _read_text(properties_path)
    targets = {os.path.normpath(p) for p in reference_paths}

    kept = []
    removed = 0
    for line in text.splitlines(keepends=True):
        match = REFERENCE_LINE_PATTERN.match(line.rstrip("\n"))
        if match and os.path.normpath(match.group(2)) in targets:
            removed += 1
            continue
        kept.append(line)

    if removed:
        _write_text(properties_path, "".join(kept))
    return removed
