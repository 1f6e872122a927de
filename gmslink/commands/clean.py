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
    from gmslink.utils.android.sdk import SUPPORT_LIBRARIES
    from gmslink.utils.android.properties import (
        get_properties_path,
        remove_library_references,
    )
    from gmslink.utils.config import load_gmslink_config
    from gmslink.utils.errors import GmsLinkError
except ImportError:
    from utils.context.namespace import CliNameSpace
    from utils.context.context import CliContext
    from utils.context.command import CliCommand
    from utils.android.sdk import SUPPORT_LIBRARIES
    from utils.android.properties import (
        get_properties_path,
        remove_library_references,
    )
    from utils.config import load_gmslink_config
    from utils.errors import GmsLinkError


class Clean(CliCommand):
    def description(self) -> str:
        return """
        This is a subcommand to undo 'gmslink link'.

        Removes the following from platforms/android:
        - AppCompatLib/
        - MediarouterLib/
        - PlayServicesLib/
        - their android.library.reference.N entries in project.properties

        The Play Services entry in AndroidManifest.xml is kept; linking
        again leaves it untouched.

        Examples:
            gmslink clean              # Clean with confirmation
            gmslink clean --dry-run    # Preview what will be cleaned
            gmslink clean -y           # Clean without confirmation
        """

    def cli(self) -> CliNameSpace:
        parser = argparse.ArgumentParser(
            prog="gmslink clean",
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
            "--dry-run",
            action="store_true",
            help="Show what would be cleaned without actually deleting",
        )
        parser.add_argument(
            "-y", "--yes",
            action="store_true",
            help="Skip confirmation prompts",
        )
        module_name = os.path.splitext(os.path.basename(__file__))[0]
        input_argv = [x for x in sys.argv[1:] if x != module_name]
        args, unknown = parser.parse_known_args(input_argv, namespace=CliNameSpace())
        return args

    def exec(self, context: CliContext, args: CliNameSpace):
        print("Cleaning linked support libraries...\n")
        project_dir = os.path.abspath(args.project_dir or context.project_dir)

        try:
            config = load_gmslink_config(project_dir)
        except GmsLinkError as e:
            print(f"ERROR: {e}")
            sys.exit(e.exit_code)

        cleaner = LibraryCleaner(config.platform_path, dry_run=args.dry_run, skip_confirm=args.yes)
        if not cleaner.confirm_clean(f"Remove linked libraries from {config.platform_path}?"):
            print("  ⏭️  Aborted")
            return

        cleaner.clean_all()
        cleaner.print_summary()
        if cleaner.failed:
            sys.exit(1)


class LibraryCleaner:
    def __init__(self, platform_path, dry_run=False, skip_confirm=False):
        self.platform_path = platform_path
        self.dry_run = dry_run
        self.skip_confirm = skip_confirm
        self.cleaned = []
        self.failed = []

    def confirm_clean(self, message):
        """Ask user for confirmation"""
        if self.skip_confirm or self.dry_run:
            return True

        response = input(f"{message} (y/N): ").strip().lower()
        return response in ['y', 'yes']

    def remove_directory(self, dir_path, dir_name=None):
        """Remove a directory and track the result"""
        if not os.path.isdir(dir_path):
            return False

        display_name = dir_name or os.path.basename(dir_path)

        if self.dry_run:
            print(f"  [DRY RUN] Would remove: {display_name}")
            return True

        try:
            shutil.rmtree(dir_path)
            self.cleaned.append(display_name)
            print(f"  ✅ Removed: {display_name}")
            return True
        except OSError as e:
            self.failed.append((display_name, str(e)))
            print(f"  ❌ Failed to remove {display_name}: {e}")
            return False

    def clean_libraries(self):
        """Remove the copied library projects"""
        print("\n" + "="*60)
        print("  Cleaning library projects")
        print("="*60)

        found = False
        for library in SUPPORT_LIBRARIES:
            found |= self.remove_directory(
                os.path.join(self.platform_path, library.name), f"{library.name}/"
            )
        if not found:
            print("  ℹ️  No library project found")

    def clean_references(self):
        """Remove the host project's references to the library projects"""
        print("\n" + "="*60)
        print("  Cleaning project.properties references")
        print("="*60)

        properties = get_properties_path(self.platform_path)
        if not os.path.isfile(properties):
            print("  ℹ️  project.properties does not exist")
            return

        paths = [f"./{library.name}" for library in SUPPORT_LIBRARIES]
        if self.dry_run:
            print(f"  [DRY RUN] Would remove references to: {', '.join(paths)}")
            return

        try:
            removed = remove_library_references(self.platform_path, paths)
        except GmsLinkError as e:
            self.failed.append(("project.properties", str(e)))
            print(f"  ❌ Failed to update project.properties: {e}")
            return
        if removed:
            self.cleaned.append(f"project.properties ({removed} references)")
            print(f"  ✅ Removed {removed} references")
        else:
            print("  ℹ️  No references found")

    def clean_all(self):
        self.clean_libraries()
        self.clean_references()

    def print_summary(self):
        """Print summary of cleaning operation"""
        print("\n" + "="*60)
        print("  Cleaning Summary")
        print("="*60)

        if self.dry_run:
            print("  [DRY RUN MODE - No files were actually deleted]")

        if self.cleaned:
            print(f"  ✅ Successfully cleaned {len(self.cleaned)} items:")
            for name in self.cleaned:
                print(f"     - {name}")
        else:
            print("  ℹ️  Nothing was cleaned")

        if self.failed:
            print(f"\n  ❌ Failed to clean {len(self.failed)} items:")
            for name, error in self.failed:
                print(f"     - {name}: {error}")

        print("="*60 + "\n")

        if self.dry_run:
            print("💡 Tip: Run without --dry-run to actually delete the files")
