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
Configuration handler for gmslink.

Reads the optional GMSLINK.toml from the project directory. Every key has a
default matching a plain Cordova project, so the file is only needed to
point the hook somewhere else.
"""

import os
import re
import sys
from typing import Any, Dict, Optional

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

try:
    from gmslink.utils.errors import ConfigError
    from gmslink.utils.cmd.cmd_util import COMMAND_TIMEOUT_SECOND
except ImportError:
    from utils.errors import ConfigError
    from utils.cmd.cmd_util import COMMAND_TIMEOUT_SECOND

CONFIG_FILE_NAME = "GMSLINK.toml"

DEFAULT_PLATFORM_DIR = "platforms/android"
DEFAULT_MANIFEST = "AndroidManifest.xml"
DEFAULT_ANT = "ant"


class GmsLinkConfig:
    """Handle gmslink configuration."""

    def __init__(self, config: Dict[str, Any], project_dir: str):
        """
        Initialize configuration.

        Args:
            config: Configuration dictionary from GMSLINK.toml
            project_dir: Root directory of the Cordova project
        """
        self.raw_config = config
        self.project_dir = project_dir

        android_config = config.get('android', {})
        tools_config = config.get('tools', {})

        self.platform_dir = self._expand_env(android_config.get('platform_dir', DEFAULT_PLATFORM_DIR))
        self.manifest = self._expand_env(android_config.get('manifest', DEFAULT_MANIFEST))
        self.api_version = str(self._expand_env(android_config.get('api_version', '')) or '')

        self.android_tool = self._expand_env(tools_config.get('android', '')) or None
        self.ant = self._expand_env(tools_config.get('ant', DEFAULT_ANT))
        try:
            self.timeout = int(tools_config.get('timeout', COMMAND_TIMEOUT_SECOND))
        except (TypeError, ValueError):
            raise ConfigError(f"Invalid tools.timeout: {tools_config.get('timeout')!r}")
        if self.timeout <= 0:
            raise ConfigError(f"tools.timeout must be positive, got {self.timeout}")

    @property
    def platform_path(self) -> str:
        return os.path.join(self.project_dir, self.platform_dir)

    def _expand_env(self, value: str) -> str:
        """
        Expand environment variables in configuration values.

        Supports ${VAR_NAME} and $VAR_NAME syntax.
        """
        if not isinstance(value, str):
            return value

        # Pattern for ${VAR_NAME}
        pattern1 = re.compile(r'\$\{([^}]+)\}')
        value = pattern1.sub(lambda m: os.environ.get(m.group(1), m.group(0)), value)

        # Pattern for $VAR_NAME
        pattern2 = re.compile(r'\$([A-Za-z_][A-Za-z0-9_]*)')
        value = pattern2.sub(lambda m: os.environ.get(m.group(1), m.group(0)), value)

        return value


def load_gmslink_config(project_dir: Optional[str] = None) -> GmsLinkConfig:
    """
    Load configuration from GMSLINK.toml, falling back to defaults.

    Raises:
        ConfigError: If the file exists but cannot be parsed
    """
    project_dir = project_dir or os.getcwd()
    config_file = os.path.join(project_dir, CONFIG_FILE_NAME)

    if not os.path.isfile(config_file):
        return GmsLinkConfig({}, project_dir)

    # Must open in rb mode for tomllib
    try:
        with open(config_file, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Error parsing {config_file}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Error reading {config_file}: {e}") from e
    print(f"Loaded configuration from {config_file}")
    return GmsLinkConfig(data, project_dir)
