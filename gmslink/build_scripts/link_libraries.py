#!/usr/bin/env python3
# -- coding: utf-8 --
#
# link_libraries.py
# gmslink
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
Google Play Services linking for Cordova Android projects.

Copies the AppCompat, MediaRouter and Play Services library projects out of
the Android SDK into platforms/android, turns each copy into an Android
library project and links them to each other and to the host project:

- AppCompatLib is converted first
- MediarouterLib references ../AppCompatLib, then gets converted
- PlayServicesLib is converted
- the host project references all three
- AndroidManifest.xml gets the Play Services version entry

Converting a library means writing the host's api version into its
project.properties, then running `android update lib-project`,
`ant clean` and `ant release` on it.

Steps run strictly one after another and the first error stops the chain.
Nothing is rolled back, so a failed run may leave the project half linked;
use `gmslink clean` before running again.

Requirements:
- Android SDK with the legacy support library extras (ANDROID_HOME)
- Apache Ant on PATH
"""

import os

try:
    from gmslink.utils.android.sdk import (
        AndroidSdk,
        SUPPORT_LIBRARIES,
        APPCOMPAT,
        MEDIAROUTER,
        PLAY_SERVICES,
    )
    from gmslink.utils.android.properties import (
        read_api_version,
        write_api_version,
        add_library_references,
    )
    from gmslink.utils.android.manifest import register_play_services
    from gmslink.utils.cmd.cmd_util import run_command
    from gmslink.utils.config import GmsLinkConfig
    from gmslink.utils.context.result import CliResult
    from gmslink.utils.errors import GmsLinkError
    from gmslink.utils.fs.copy_util import copy_tree
except ImportError:
    # Fallback to relative import when run directly
    from utils.android.sdk import (
        AndroidSdk,
        SUPPORT_LIBRARIES,
        APPCOMPAT,
        MEDIAROUTER,
        PLAY_SERVICES,
    )
    from utils.android.properties import (
        read_api_version,
        write_api_version,
        add_library_references,
    )
    from utils.android.manifest import register_play_services
    from utils.cmd.cmd_util import run_command
    from utils.config import GmsLinkConfig
    from utils.context.result import CliResult
    from utils.errors import GmsLinkError
    from utils.fs.copy_util import copy_tree


# Steps of the linking chain, in execution order
CHECK_ALREADY_INITIALIZED = "CheckAlreadyInitialized"
COPY_LIBRARIES = "CopyLibraries"
CONVERT_APPCOMPAT = "ConvertLib1"
LINK_MEDIAROUTER_TO_APPCOMPAT = "LinkLib2ToLib1"
CONVERT_MEDIAROUTER = "ConvertLib2"
CONVERT_PLAY_SERVICES = "ConvertLib3"
LINK_ALL_TO_HOST_PROJECT = "LinkAllToHostProject"
PATCH_MANIFEST = "PatchManifest"
DONE = "Done"

# run() value when a previous run already linked the libraries
SKIPPED = "skipped"


class LibraryLinker:
    """Links the SDK support libraries into one Cordova Android project"""

    def __init__(self, config: GmsLinkConfig, sdk: AndroidSdk, runner=run_command):
        """
        Args:
            config: Loaded gmslink configuration
            sdk: The Android SDK to copy the libraries from
            runner: Callable executing one command line, raising on failure
        """
        self.config = config
        self.sdk = sdk
        self.runner = runner
        self.platform_path = config.platform_path
        self.api_version = None
        self.completed_steps = []

    def library_path(self, library) -> str:
        return os.path.join(self.platform_path, library.name)

    def is_already_initialized(self) -> bool:
        """A PlayServicesLib directory is left behind by every previous run."""
        return os.path.isdir(self.library_path(PLAY_SERVICES))

    def detect_api_version(self):
        if self.config.api_version:
            print(f"Using configured android api version: {self.config.api_version}")
            return self.config.api_version
        version = read_api_version(self.platform_path)
        print(f"Detected project's android api version: {version}")
        return version

    def execute(self, command):
        return self.runner(command, timeout_second=self.config.timeout)

    def copy_libraries(self):
        for library in SUPPORT_LIBRARIES:
            src = self.sdk.library_source(library)
            dst = self.library_path(library)
            count = copy_tree(src, dst)
            print(f"  ✅ Copied {library.name} ({count} files) from {src}")

    def prepare_library_project(self, library_path, version):
        """
        Turn a project into an android "library project".

        Args:
            library_path: The location of the project
            version: The android api version, e.g. 21
        """
        write_api_version(library_path, version)
        build_xml = os.path.join(library_path, "build.xml")
        self.execute(f'"{self.sdk.android_tool}" update lib-project -p "{library_path}"')
        self.execute(f'"{self.config.ant}" clean -f "{build_xml}"')
        self.execute(f'"{self.config.ant}" release -f "{build_xml}"')
        print(f"Turned {library_path} into a library project")

    def link_mediarouter(self):
        add_library_references(self.library_path(MEDIAROUTER), [f"../{APPCOMPAT.name}"])

    def link_host_project(self):
        add_library_references(
            self.platform_path, [f"./{library.name}" for library in SUPPORT_LIBRARIES]
        )

    def patch_manifest(self):
        register_play_services(self.platform_path, self.config.manifest)

    def get_steps(self):
        return [
            (COPY_LIBRARIES, self.copy_libraries),
            (CONVERT_APPCOMPAT,
             lambda: self.prepare_library_project(self.library_path(APPCOMPAT), self.api_version)),
            (LINK_MEDIAROUTER_TO_APPCOMPAT, self.link_mediarouter),
            (CONVERT_MEDIAROUTER,
             lambda: self.prepare_library_project(self.library_path(MEDIAROUTER), self.api_version)),
            (CONVERT_PLAY_SERVICES,
             lambda: self.prepare_library_project(self.library_path(PLAY_SERVICES), self.api_version)),
            (LINK_ALL_TO_HOST_PROJECT, self.link_host_project),
            (PATCH_MANIFEST, self.patch_manifest),
        ]

    def run(self) -> CliResult:
        """
        Run the whole linking chain.

        Returns:
            CliResult: value DONE or SKIPPED on success, the GmsLinkError
                that stopped the chain otherwise
        """
        self.completed_steps = []

        if self.is_already_initialized():
            print(
                f"Already found play services lib at {self.library_path(PLAY_SERVICES)}. "
                "Skipping initialization."
            )
            self.completed_steps.extend([CHECK_ALREADY_INITIALIZED, DONE])
            return CliResult(value=SKIPPED)
        self.completed_steps.append(CHECK_ALREADY_INITIALIZED)

        try:
            self.api_version = self.detect_api_version()
        except GmsLinkError as e:
            return CliResult(error=e)

        for name, step in self.get_steps():
            print("\n" + "=" * 60)
            print(f"  {name}")
            print("=" * 60)
            try:
                step()
            except GmsLinkError as e:
                print(f"  ❌ {name} failed: {e}")
                return CliResult(error=e)
            self.completed_steps.append(name)

        self.completed_steps.append(DONE)
        print("\n✅ Added Play Services to project")
        return CliResult(value=DONE)
