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
    from gmslink.utils.android.sdk import AndroidSdk
    from gmslink.utils.config import load_gmslink_config
    from gmslink.utils.errors import GmsLinkError, ConfigError
    from gmslink.build_scripts.link_libraries import LibraryLinker, SKIPPED
except ImportError:
    from utils.context.namespace import CliNameSpace
    from utils.context.context import CliContext
    from utils.context.command import CliCommand
    from utils.android.sdk import AndroidSdk
    from utils.config import load_gmslink_config
    from utils.errors import GmsLinkError, ConfigError
    from build_scripts.link_libraries import LibraryLinker, SKIPPED


class Link(CliCommand):
    def description(self) -> str:
        return """
        This is a subcommand to add Google Play Services to a Cordova Android project.

        AppCompat, MediaRouter and Play Services are copied from the Android
        SDK (ANDROID_HOME) into platforms/android, turned into library
        projects and referenced from the app's project.properties. The Play
        Services version entry is added to AndroidManifest.xml.

        Nothing is done when platforms/android/PlayServicesLib already exists.

        Examples:
            gmslink link
            gmslink link --project-dir ~/work/my-cordova-app
        """

    def cli(self) -> CliNameSpace:
        parser = argparse.ArgumentParser(
            prog="gmslink link",
            formatter_class=argparse.RawDescriptionHelpFormatter,
            description=self.description(),
        )
        parser.add_argument(
            "--project-dir",
            action="store",
            default=None,
            help="Cordova project directory (default: current directory)",
        )
        module_name = os.path.splitext(os.path.basename(__file__))[0]
        input_argv = [x for x in sys.argv[1:] if x != module_name]
        args, unknown = parser.parse_known_args(input_argv, namespace=CliNameSpace())
        return args

    def exec(self, context: CliContext, args: CliNameSpace):
        project_dir = os.path.abspath(args.project_dir or context.project_dir)
        print(f"Linking Google Play Services into '{project_dir}'\n")

        try:
            config = load_gmslink_config(project_dir)
            sdk = AndroidSdk.from_env(android_tool=config.android_tool)
        except GmsLinkError as e:
            self.fail(e)
            return

        result = LibraryLinker(config, sdk).run()
        if result.is_failure():
            self.fail(result.get_error())
            return

        if result.get_value() == SKIPPED:
            print("ℹ️  Libraries already linked, nothing to do")

    def fail(self, error: GmsLinkError):
        print(f"\nERROR: {error}", file=sys.stderr)
        if not isinstance(error, ConfigError):
            print("The project may be partially linked. Run 'gmslink clean' before retrying.",
                  file=sys.stderr)
        sys.exit(error.exit_code)
