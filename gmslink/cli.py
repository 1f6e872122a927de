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
import importlib
import argparse

# setup path
# >>>>>>>>>>>>>>
SCRIPT_PATH = os.path.split(os.path.realpath(__file__))[0]
PROJECT_ROOT_PATH = os.path.dirname(SCRIPT_PATH)
sys.path.append(SCRIPT_PATH)
sys.path.append(PROJECT_ROOT_PATH)
PACKAGE_NAME = os.path.basename(SCRIPT_PATH)
# <<<<<<<<<<<<<<
# import this project modules
try:
    from gmslink.utils.context.namespace import CliNameSpace
    from gmslink.utils.context.context import CliContext
    from gmslink.utils.context.command import CliCommand
except ImportError:
    from utils.context.namespace import CliNameSpace
    from utils.context.context import CliContext
    from utils.context.command import CliCommand

DEFAULT_COMMAND = "link"


# Root Class for Command Line Interface
class Cli(CliCommand):
    def description(self) -> str:
        return """GMSLINK - Google Play Services linker for Cordova Android projects

Copies AppCompat, MediaRouter and Google Play Services from the local
Android SDK into platforms/android, turns them into library projects and
links them to the app. Meant to run as a Cordova hook from the project root.

USAGE:
    gmslink [command] [options]

COMMANDS:
    link        Copy, convert and link the libraries (default)
    check       Check ANDROID_HOME, SDK extras, tools and project files
    clean       Remove the copied libraries and their references

ENVIRONMENT:
    ANDROID_HOME    Android SDK directory (required)

EXAMPLES:
    gmslink                      # Same as 'gmslink link'
    gmslink check                # Verify the environment first
    gmslink clean -y             # Undo a failed run, then link again

For more information on a specific command:
    gmslink <command> --help
        """

    def get_command_list(self) -> list:
        arr = []
        for command in os.listdir(os.path.join(SCRIPT_PATH, "commands")):
            # test modules live next to the commands
            if command.startswith(("_", "test_")) or not command.endswith(".py"):
                continue
            arr.append(os.path.splitext(os.path.basename(command))[0])
        return sorted(arr)

    def cli(self) -> CliNameSpace:
        # Check if user wants help for main command (gmslink --help or gmslink -h)
        # But NOT for subcommands (gmslink link --help)
        if len(sys.argv) == 2 and sys.argv[1] in ['--help', '-h']:
            parser = argparse.ArgumentParser(
                prog="gmslink",
                formatter_class=argparse.RawDescriptionHelpFormatter,
                description=self.description(),
            )
            parser.add_argument(
                "subcommand",
                metavar=f"{self.get_command_list()}",
                type=str,
                choices=self.get_command_list(),
            )
            parser.print_help()
            sys.exit(0)

        # Parse subcommand without automatic help handling
        parser = argparse.ArgumentParser(
            prog="gmslink",
            formatter_class=argparse.RawDescriptionHelpFormatter,
            description=self.description(),
            add_help=False,
        )
        parser.add_argument(
            "subcommand",
            metavar=f"{self.get_command_list()}",
            type=str,
            nargs='?',
            choices=self.get_command_list(),
        )
        # parse only known args - this will NOT consume --help if present
        args, unknown = parser.parse_known_args(namespace=CliNameSpace())
        return args

    def exec(self, context: CliContext, args: CliNameSpace):
        # Hooks are invoked without arguments
        subcommand = args.subcommand or DEFAULT_COMMAND

        # get module name
        module_name = f"{PACKAGE_NAME}.commands.{subcommand}"
        # get class name
        class_name = subcommand.capitalize()
        # import module
        module = importlib.import_module(module_name)
        # get class of module
        klass = getattr(module, class_name)
        # instance class
        sub_cmd = klass()
        # now execute the subcommand
        sub_cmd.exec(context, sub_cmd.cli())


def main():
    cmd = Cli()
    cmd.exec(CliContext(), cmd.cli())


if __name__ == "__main__":
    main()
