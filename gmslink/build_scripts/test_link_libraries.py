#!/usr/bin/env python3
"""
Tests for the Play Services linking chain.

The SDK and the Cordova project are built in a temporary directory and
the external commands are recorded instead of executed.

Run with: python3 -m pytest gmslink/build_scripts/test_link_libraries.py
"""

import os
import shutil
import tempfile
import unittest

from gmslink.build_scripts.link_libraries import (
    LibraryLinker,
    CHECK_ALREADY_INITIALIZED,
    COPY_LIBRARIES,
    CONVERT_APPCOMPAT,
    LINK_MEDIAROUTER_TO_APPCOMPAT,
    CONVERT_MEDIAROUTER,
    CONVERT_PLAY_SERVICES,
    LINK_ALL_TO_HOST_PROJECT,
    PATCH_MANIFEST,
    DONE,
    SKIPPED,
)
from gmslink.utils.android.sdk import AndroidSdk, SUPPORT_LIBRARIES
from gmslink.utils.android.manifest import PLAY_SERVICES_VERSION_ENTRY
from gmslink.utils.android.properties import library_references, read_api_version
from gmslink.utils.config import GmsLinkConfig
from gmslink.utils.errors import CommandError, FileError

MANIFEST = """<?xml version='1.0' encoding='utf-8'?>
<manifest package="io.cordova.hello" xmlns:android="http://schemas.android.com/apk/res/android">
    <application android:label="@string/app_name" />
</manifest>
"""

LIBRARY_PROPERTIES = {
    "AppCompatLib": "target=android-21\nandroid.library=true\n",
    "MediarouterLib": "target=android-21\nandroid.library=true\nandroid.library.reference.1=../appcompat\n",
    "PlayServicesLib": "target=android-9\nandroid.library=true\n",
}


def write(path, text):
    os.makedirs(os.path.dirname(path), exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        f.write(text)


def read(path):
    with open(path, "r", encoding="utf-8") as f:
        return f.read()


class RecordingRunner:
    def __init__(self, fail_on=None):
        self.commands = []
        self.fail_on = fail_on
        self.hooks = []

    def __call__(self, command, timeout_second=None):
        self.commands.append(command)
        for hook in self.hooks:
            hook(command)
        if self.fail_on and self.fail_on in command:
            raise CommandError(f"Error executing {command}: 1", command=command, return_code=1)
        return ""


class TestLibraryLinker(unittest.TestCase):
    def setUp(self):
        self.tmp = tempfile.mkdtemp()
        self.sdk_root = os.path.join(self.tmp, "sdk")
        self.project = os.path.join(self.tmp, "app")
        self.platform = os.path.join(self.project, "platforms", "android")

        sdk = AndroidSdk(self.sdk_root)
        for library in SUPPORT_LIBRARIES:
            src = sdk.library_source(library)
            write(os.path.join(src, "project.properties"), LIBRARY_PROPERTIES[library.name])
            write(os.path.join(src, "build.xml"), "<project />\n")
            write(os.path.join(src, "res", "values", "values.xml"), "<resources />\n")

        write(
            os.path.join(self.platform, "project.properties"),
            "target=android-23\nandroid.library.reference.1=CordovaLib\n",
        )
        write(os.path.join(self.platform, "AndroidManifest.xml"), MANIFEST)

    def tearDown(self):
        shutil.rmtree(self.tmp)

    def make_linker(self, runner, config=None):
        config = config or GmsLinkConfig({}, self.project)
        return LibraryLinker(config, AndroidSdk(self.sdk_root), runner=runner)

    def lib(self, name):
        return os.path.join(self.platform, name)

    def test_full_chain(self):
        runner = RecordingRunner()
        linker = self.make_linker(runner)

        result = linker.run()

        self.assertTrue(result.is_success())
        self.assertEqual(result.get_value(), DONE)
        self.assertEqual(linker.completed_steps, [
            CHECK_ALREADY_INITIALIZED,
            COPY_LIBRARIES,
            CONVERT_APPCOMPAT,
            LINK_MEDIAROUTER_TO_APPCOMPAT,
            CONVERT_MEDIAROUTER,
            CONVERT_PLAY_SERVICES,
            LINK_ALL_TO_HOST_PROJECT,
            PATCH_MANIFEST,
            DONE,
        ])

        android_tool = os.path.join(self.sdk_root, "tools", "android")
        expected = []
        for name in ["AppCompatLib", "MediarouterLib", "PlayServicesLib"]:
            build_xml = os.path.join(self.lib(name), "build.xml")
            expected += [
                f'"{android_tool}" update lib-project -p "{self.lib(name)}"',
                f'"ant" clean -f "{build_xml}"',
                f'"ant" release -f "{build_xml}"',
            ]
        self.assertEqual(runner.commands, expected)

    def test_project_files(self):
        self.make_linker(RecordingRunner()).run()

        for name in ["AppCompatLib", "MediarouterLib", "PlayServicesLib"]:
            self.assertEqual(read_api_version(self.lib(name)), "23")
            self.assertTrue(os.path.isfile(os.path.join(self.lib(name), "res", "values", "values.xml")))

        self.assertEqual(
            library_references(self.lib("MediarouterLib")),
            [(1, "../appcompat"), (2, "../AppCompatLib")],
        )
        self.assertEqual(library_references(self.platform), [
            (1, "CordovaLib"),
            (2, "./AppCompatLib"),
            (3, "./MediarouterLib"),
            (4, "./PlayServicesLib"),
        ])

        manifest = read(os.path.join(self.platform, "AndroidManifest.xml"))
        self.assertEqual(manifest.count(PLAY_SERVICES_VERSION_ENTRY), 1)
        self.assertIn(PLAY_SERVICES_VERSION_ENTRY + "\n</manifest>", manifest)

    def test_mediarouter_is_linked_before_conversion(self):
        runner = RecordingRunner()
        seen = []

        def check(command):
            if "MediarouterLib" in command and not seen:
                seen.append(read(os.path.join(self.lib("MediarouterLib"), "project.properties")))

        runner.hooks.append(check)
        self.make_linker(runner).run()
        self.assertIn("android.library.reference.2=../AppCompatLib", seen[0])
        self.assertIn("target=android-23", seen[0])

    def test_skip_when_already_initialized(self):
        os.makedirs(self.lib("PlayServicesLib"))
        runner = RecordingRunner()
        linker = self.make_linker(runner)

        result = linker.run()

        self.assertEqual(result.get_value(), SKIPPED)
        self.assertEqual(linker.completed_steps, [CHECK_ALREADY_INITIALIZED, DONE])
        self.assertEqual(runner.commands, [])
        self.assertFalse(os.path.exists(self.lib("AppCompatLib")))
        self.assertEqual(library_references(self.platform), [(1, "CordovaLib")])

    def test_second_run_is_skipped(self):
        self.make_linker(RecordingRunner()).run()
        properties = read(os.path.join(self.platform, "project.properties"))

        runner = RecordingRunner()
        self.assertEqual(self.make_linker(runner).run().get_value(), SKIPPED)
        self.assertEqual(runner.commands, [])
        self.assertEqual(read(os.path.join(self.platform, "project.properties")), properties)

    def test_command_failure_stops_chain(self):
        runner = RecordingRunner(fail_on='"ant" release')
        linker = self.make_linker(runner)

        result = linker.run()

        self.assertTrue(result.is_failure())
        self.assertIsInstance(result.get_error(), CommandError)
        self.assertEqual(result.get_error().return_code, 1)
        self.assertEqual(linker.completed_steps, [CHECK_ALREADY_INITIALIZED, COPY_LIBRARIES])
        self.assertEqual(len(runner.commands), 3)
        # no rollback: the copies stay, the host project is not linked yet
        self.assertTrue(os.path.isdir(self.lib("PlayServicesLib")))
        self.assertEqual(library_references(self.platform), [(1, "CordovaLib")])
        self.assertNotIn(
            PLAY_SERVICES_VERSION_ENTRY, read(os.path.join(self.platform, "AndroidManifest.xml"))
        )

    def test_missing_sdk_library(self):
        shutil.rmtree(AndroidSdk(self.sdk_root).library_source(SUPPORT_LIBRARIES[1]))
        runner = RecordingRunner()
        linker = self.make_linker(runner)

        result = linker.run()

        self.assertIsInstance(result.get_error(), FileError)
        self.assertEqual(linker.completed_steps, [CHECK_ALREADY_INITIALIZED])
        self.assertEqual(runner.commands, [])

    def test_missing_host_properties(self):
        os.remove(os.path.join(self.platform, "project.properties"))
        result = self.make_linker(RecordingRunner()).run()
        self.assertIsInstance(result.get_error(), FileError)

    def test_host_without_target_keeps_library_targets(self):
        write(os.path.join(self.platform, "project.properties"), "android.library.reference.1=CordovaLib\n")
        self.make_linker(RecordingRunner()).run()
        self.assertEqual(read_api_version(self.lib("AppCompatLib")), "21")
        self.assertEqual(read_api_version(self.lib("PlayServicesLib")), "9")

    def test_configured_tools_and_version(self):
        config = GmsLinkConfig(
            {
                "android": {"api_version": 22},
                "tools": {"android": "/opt/android", "ant": "/usr/local/bin/ant"},
            },
            self.project,
        )
        runner = RecordingRunner()
        sdk = AndroidSdk(self.sdk_root, android_tool=config.android_tool)
        LibraryLinker(config, sdk, runner=runner).run()

        self.assertEqual(read_api_version(self.lib("MediarouterLib")), "22")
        self.assertTrue(runner.commands[0].startswith('"/opt/android" update lib-project'))
        self.assertTrue(runner.commands[1].startswith('"/usr/local/bin/ant" clean'))

    def test_ant_path_with_spaces_is_quoted(self):
        config = GmsLinkConfig({"tools": {"ant": "/opt/apache ant/bin/ant"}}, self.project)
        runner = RecordingRunner()
        self.make_linker(runner, config=config).run()

        build_xml = os.path.join(self.lib("AppCompatLib"), "build.xml")
        self.assertEqual(runner.commands[1], f'"/opt/apache ant/bin/ant" clean -f "{build_xml}"')
        self.assertEqual(runner.commands[2], f'"/opt/apache ant/bin/ant" release -f "{build_xml}"')

    def test_non_utf8_manifest_is_a_file_error(self):
        with open(os.path.join(self.platform, "AndroidManifest.xml"), "wb") as f:
            f.write(b"<manifest><!-- caf\xe9 --></manifest>\n")
        linker = self.make_linker(RecordingRunner())

        result = linker.run()

        self.assertTrue(result.is_failure())
        self.assertIsInstance(result.get_error(), FileError)
        self.assertEqual(result.get_error().exit_code, 3)
        self.assertEqual(linker.completed_steps[-1], LINK_ALL_TO_HOST_PROJECT)
        with open(os.path.join(self.platform, "AndroidManifest.xml"), "rb") as f:
            self.assertEqual(f.read(), b"<manifest><!-- caf\xe9 --></manifest>\n")

    def test_non_utf8_host_properties_is_a_file_error(self):
        with open(os.path.join(self.platform, "project.properties"), "wb") as f:
            f.write(b"# r\xe9sum\xe9\ntarget=android-23\n")
        linker = self.make_linker(RecordingRunner())

        result = linker.run()

        self.assertIsInstance(result.get_error(), FileError)
        self.assertEqual(linker.completed_steps, [CHECK_ALREADY_INITIALIZED])


if __name__ == "__main__":
    unittest.main()
