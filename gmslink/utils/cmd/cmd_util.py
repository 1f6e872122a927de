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

import subprocess
import sys
import time
from threading import Timer

try:
    from gmslink.utils.errors import CommandError
except ImportError:
    from utils.errors import CommandError

DEFAULT_TIMEOUT_SECOND = 10
# timeout is 3 hours
COMMAND_TIMEOUT_SECOND = 3 * 3600


def decode_bytes(input: bytes) -> str:
    """
    Decode bytes to string with fallback encoding support.

    Attempts UTF-8 decoding first, falls back to GBK for Chinese Windows systems.
    """
    if not input:
        return ""
    try:
        return bytes.decode(input, "UTF-8")
    except UnicodeDecodeError:
        return bytes.decode(input, "GBK", errors="replace")


def exec_command_with_timeout_second(
    command,
    timeout_second=DEFAULT_TIMEOUT_SECOND,
    cwd=None,
):
    """
    Execute a shell command, killing it when the timeout elapses.

    Returns:
        tuple: (exit_code, stdout, stderr) with both streams decoded
    """
    start_mills = int(time.time() * 1000)
    compile_popen = subprocess.Popen(
        command,
        shell=True,
        cwd=cwd,
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
    )
    timer = Timer(timeout_second, lambda process: process.kill(), [compile_popen])
    try:
        timer.start()
        stdout, stderr = compile_popen.communicate()
    finally:
        timer.cancel()
    err_code = compile_popen.returncode
    out_msg = decode_bytes(stdout)
    err_msg = decode_bytes(stderr)
    if err_code == -9 and not err_msg:
        use_time = int(time.time() * 1000) - start_mills
        err_msg = f"Failed for timeout({err_code}), use_time: {use_time}ms"
    return err_code, out_msg, err_msg


def run_command(command, cwd=None, timeout_second=COMMAND_TIMEOUT_SECOND):
    """
    Execute an external command and fail hard when it does not succeed.

    Output of the command is forwarded as-is: stdout to stdout and stderr
    to stderr, each prefixed with "Exec:".

    Args:
        command: Shell command line
        cwd: Working directory of the command (default: current directory)
        timeout_second: Seconds before the command is killed

    Returns:
        str: The captured stdout

    Raises:
        CommandError: If the command cannot be spawned or exits non-zero
    """
    print(f"Executing {command} ...")
    try:
        err_code, out_msg, err_msg = exec_command_with_timeout_second(
            command, timeout_second, cwd=cwd
        )
    except OSError as e:
        raise CommandError(f"Exec: {e}", command=command) from e

    if out_msg:
        print(f"Exec: {out_msg}")
    if err_msg:
        print(f"Exec: {err_msg}", file=sys.stderr)
    if err_code != 0:
        raise CommandError(
            f"Error executing {command}: {err_code}",
            command=command,
            return_code=err_code,
        )
    print(f"Executed {command}")
    return out_msg
