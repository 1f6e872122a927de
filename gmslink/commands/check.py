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
import sys
import argparse
import shutil

# setup path
# >>>>>>>>>>>>>>
SCRIPT_PATH = os.path.split(os.path.realpath(__file__))[0]
PROJECT_ROOT_PATH = os.path.dirname(SCRIPT_PATH)
sys.path.append(SCRIPT_PATH)
sys.path.append(PROJECT_ROOT_PATH)
PACKAGE_NAME = os.path.basename(SCRIPT_PATH)
# <<<<<<<<<<<<<
# import this project modules
try:
    from gmslink.utils.context.namespace import CliNameSpace
    from gmslink.utils.context.context import CliContext
    from gmslink.utils.context.command import CliCommand
    from gmslink.utils.android.sdk import AndroidSdk, SUPPORT_LIBRARIES, ANDROID_HOME_ENV
    from gmslink.utils.android.properties import (
        get_properties_path,
        read_api_version,
        library_references,
    )
    from gmslink.utils.android.manifest import PLAY_SERVICES_VERSION_ENTRY, MANIFEST_CLOSING_TAG
    from gmslink.utils.config import load_gmslink_config
    from gmslink.utils.errors import GmsLinkError
except ImportError:
    from utils.context.namespace import CliNameSpace
    from utils.context.context import CliContext
    from utils.context.command import CliCommand
    from utils.android.sdk import AndroidSdk, SUPPORT_LIBRARIES, ANDROID_HOME_ENV
    from utils.android.properties import (
        get_properties_path,
        read_api_version,
        library_references,
    )
    from utils.android.manifest import PLAY_SERVICES_VERSION_ENTRY, MANIFEST_CLOSING_TAG
    from utils.config import load_gmslink_config
    from utils.errors import GmsLinkError


class Check(CliCommand):
    def description(self) -> str:
        return """
        This is a subcommand to check that 'gmslink link' can run.

        Checks ANDROID_HOME, the support library extras inside the SDK, the
        'android' and 'ant' tools, and the project's project.properties and
        AndroidManifest.xml.

        Examples:
            gmslink check
            gmslink check --verbose
        """

    def cli(self) -> CliNameSpace:
        parser = argparse.ArgumentParser(
            prog="gmslink check",
            formatter_class=argparse.RawDescriptionHelpFormatter,
            description=self.description(),
        )
        parser.add_argument(
            "--project-dir",
            action="store",
            default=None,
            help="Cordova project directory (default: current directory)",
        )
        parser.add_argument(
            "--verbose",
            action="store_true",
            help="Show detailed information",
        )
        module_name = os.path.splitext(os.path.basename(__file__))[0]
        input_argv = [x for x in sys.argv[1:] if x != module_name]
        args, unknown = parser.parse_known_args(input_argv, namespace=CliNameSpace())
        return args

    def exec(self, context: CliContext, args: CliNameSpace):
        project_dir = os.path.abspath(args.project_dir or context.project_dir)
        print(f"🔍 Checking '{project_dir}'...\n")

        checker = EnvironmentChecker(project_dir, verbose=args.verbose)
        checker.check_all()
        checker.print_summary()

        if checker.errors:
            sys.exit(1)


class EnvironmentChecker:
    def __init__(self, project_dir, verbose=False, environ=None):
        self.project_dir = project_dir
        self.verbose = verbose
        self.environ = os.environ if environ is None else environ
        self.warnings = []
        self.errors = []

    def print_ok(self, msg):
        """Print success message"""
        print(f"  ✅ {msg}")

    def print_error(self, msg):
        """Print error message"""
        print(f"  ❌ {msg}")
        self.errors.append(msg)

    def print_warning(self, msg):
        """Print warning message"""
        print(f"  ⚠️  {msg}")
        self.warnings.append(msg)

    def print_info(self, msg):
        """Print info message"""
        print(f"  ℹ️  {msg}")

    def print_section(self, title):
        """Print section header"""
        print(f"\n{'='*60}")
        print(f"  {title}")
        print(f"{'='*60}")

    def check_all(self):
        try:
            config = load_gmslink_config(self.project_dir)
        except GmsLinkError as e:
            self.print_error(str(e))
            return
        sdk = self.check_sdk(config)
        self.check_tools(config, sdk)
        self.check_project(config)

    def check_sdk(self, config):
        """Check ANDROID_HOME and the library sources inside it"""
        self.print_section("Android SDK")

        root = self.environ.get(ANDROID_HOME_ENV)
        if not root:
            self.print_error(f"{ANDROID_HOME_ENV}: Not set")
            return None
        if not os.path.isdir(root):
            self.print_error(f"{ANDROID_HOME_ENV}: Set to '{root}' but directory doesn't exist")
            return None
        self.print_ok(f"{ANDROID_HOME_ENV}: {root}")

        sdk = AndroidSdk(root, android_tool=config.android_tool)
        for library in SUPPORT_LIBRARIES:
            src = sdk.library_source(library)
            if os.path.isdir(src):
                self.print_ok(f"{library.name}: {src}")
            else:
                self.print_error(f"{library.name}: {src} not found (install it with the SDK manager)")
        return sdk

    def check_tools(self, config, sdk):
        """Check the external tools invoked while converting libraries"""
        self.print_section("Tools")

        if sdk is not None:
            if os.path.isfile(sdk.android_tool):
                self.print_ok(f"android: {sdk.android_tool}")
            else:
                self.print_error(f"android: {sdk.android_tool} not found")

        ant = shutil.which(config.ant)
        if ant:
            self.print_ok(f"ant: {ant}")
        else:
            self.print_error(f"ant: '{config.ant}' not found in PATH")

    def check_project(self, config):
        """Check the Cordova Android platform files that get patched"""
        self.print_section("Cordova Android project")

        platform_path = config.platform_path
        if not os.path.isdir(platform_path):
            self.print_error(f"{platform_path} not found (run 'cordova platform add android')")
            return

        self.check_properties(config)
        self.check_manifest(config)

        linked = [lib.name for lib in SUPPORT_LIBRARIES
                  if os.path.isdir(os.path.join(platform_path, lib.name))]
        if linked:
            self.print_info(f"Already copied: {', '.join(linked)}")

    def check_properties(self, config):
        platform_path = config.platform_path
        properties = get_properties_path(platform_path)
        if not os.path.isfile(properties):
            self.print_error(f"{properties} not found")
            return

        try:
            version = read_api_version(platform_path)
            references = library_references(platform_path)
        except GmsLinkError as e:
            self.print_error(str(e))
            return

        if version:
            self.print_ok(f"project.properties: target android-{version}")
        elif config.api_version:
            self.print_ok(f"project.properties: no target, using configured {config.api_version}")
        else:
            self.print_warning("project.properties: no target=android-<n>, libraries keep their own")
        if self.verbose:
            for ordinal, path in references:
                self.print_info(f"android.library.reference.{ordinal}={path}")

    def check_manifest(self, config):
        manifest = os.path.join(config.platform_path, config.manifest)
        if not os.path.isfile(manifest):
            self.print_error(f"{manifest} not found")
            return

        try:
            with open(manifest, "r", encoding="utf-8") as f:
                data = f.read()
        except (OSError, UnicodeDecodeError) as e:
            self.print_error(f"{config.manifest}: cannot be read as UTF-8 ({e})")
            return

        if PLAY_SERVICES_VERSION_ENTRY in data:
            self.print_info(f"{config.manifest}: Play Services already registered")
        elif MANIFEST_CLOSING_TAG not in data:
            self.print_error(f"{config.manifest}: {MANIFEST_CLOSING_TAG} not found")
        else:
            self.print_ok(f"{config.manifest}: found")

    def print_summary(self):
        """Print summary of check results"""
        print(f"\n{'='*60}")
        print("  Summary")
        print(f"{'='*60}")

        if not self.errors and not self.warnings:
            print("  ✅ Everything is ready for 'gmslink link'")
        else:
            if self.errors:
                print(f"  ❌ {len(self.errors)} error(s):")
                for error in self.errors:
                    print(f"     - {error}")
            if self.warnings:
                print(f"  ⚠️  {len(self.warnings)} warning(s):")
                for warning in self.warnings:
                    print(f"     - {warning}")
        print("=" * 60 + "\n")
