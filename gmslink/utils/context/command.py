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

try:
    from gmslink.utils.context.namespace import CliNameSpace
    from gmslink.utils.context.context import CliContext
except ImportError:
    from utils.context.namespace import CliNameSpace
    from utils.context.context import CliContext


# Base class of every command, the root one included
class CliCommand:
    def description(self) -> str:
        return ""

    def cli(self) -> CliNameSpace:
        raise NotImplementedError

    def exec(self, context: CliContext, args: CliNameSpace):
        raise NotImplementedError
