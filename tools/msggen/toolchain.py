"""
External tool invocation: message compiler and resource compiler.

On a Windows host, or for an MSVC target, tools are run by their bare name.
Anywhere else we are cross compiling with MinGW-w64 and the tool name gets
the ``<arch>-w64-mingw32-`` prefix.
"""

import subprocess
from dataclasses import dataclass
from typing import List, Optional

from .config import BuildConfig

CROSS_VENDOR = "w64-mingw32"

# ToolResult.status values.
STATUS_OK = "ok"
STATUS_SPAWN_FAILED = "spawn-failed"


@dataclass
class ToolResult:
    """Outcome of one tool invocation."""
    program: str
    status: str
    returncode: Optional[int] = None
    stdout: str = ""
    stderr: str = ""
    error: str = ""

    @property
    def spawned(self) -> bool:
        return self.status == STATUS_OK


def is_cross_compiling(config: BuildConfig) -> bool:
    """True when tools must come from the MinGW-w64 cross toolchain."""
    if config.host_is_windows:
        return False
    return "msvc" not in config.target


def resolve_tool_name(tool: str, config: BuildConfig) -> str:
    """Map a logical tool name to the executable to run.

    >>> resolve_tool_name("mc.exe", BuildConfig("x86_64-pc-windows-gnu", "."))
    'x86_64-w64-mingw32-mc.exe'
    """
    if not is_cross_compiling(config):
        return tool
    return f"{config.arch}-{CROSS_VENDOR}-{tool}"


def run_tool(tool: str, args: List[str], config: BuildConfig) -> ToolResult:
    """Run ``tool`` to completion and forward its output to the build log.

    Failing to spawn the program is reported in the returned ToolResult
    rather than raised; the caller decides what to do about it.
    """
    program = resolve_tool_name(tool, config)
    print(f">>> {' '.join([program] + list(args))}")

    try:
        proc = subprocess.run(
            [program] + list(args),
            capture_output=True,
            text=True,
            errors="replace",
        )
    except OSError as e:
        print(f"ERROR: Failed to run command: {program}, error: {e}")
        return ToolResult(program=program, status=STATUS_SPAWN_FAILED, error=str(e))

    if proc.stderr:
        print(proc.stderr.rstrip("\n"))
    if proc.stdout:
        print(proc.stdout.rstrip("\n"))
    if proc.returncode != 0:
        print(f"{program} exited with status {proc.returncode}")

    return ToolResult(
        program=program,
        status=STATUS_OK,
        returncode=proc.returncode,
        stdout=proc.stdout or "",
        stderr=proc.stderr or "",
    )
