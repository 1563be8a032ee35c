"""Shared fixtures for msggen tests."""

import os
import sys

import pytest

# Add the project root to sys.path so 'tools.msggen' is importable
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "..", ".."))

from tools.msggen.config import BuildConfig
from tools.msggen.toolchain import STATUS_OK, ToolResult


EVENTMSGS_MC = """\
MessageIdTypedef=DWORD

SeverityNames=(Success=0x0:STATUS_SEVERITY_SUCCESS
               Informational=0x1:STATUS_SEVERITY_INFORMATIONAL
               Warning=0x2:STATUS_SEVERITY_WARNING
               Error=0x3:STATUS_SEVERITY_ERROR
              )

MessageId=0x1
Severity=Informational
SymbolicName=MSG_SERVICE_STARTED
Language=English
Service started.
.
"""


EVENTMSGS_H = """\
//
//  Values are 32 bit values laid out as follows:
//
#define STATUS_SEVERITY_SUCCESS          0x0
#define STATUS_SEVERITY_INFORMATIONAL    0x1

//
// MessageId: MSG_SERVICE_STARTED
//
// MessageText:
//
// Service started.
//
#define MSG_SERVICE_STARTED              ((DWORD)0x40000001L)

#define MSG_SERVICE_STOPPED              ((DWORD)0x40000002L)

#define MSG_SERVICE_FAILED               ((DWORD)0xC0000003L)
"""


@pytest.fixture
def header_text():
    """Header as written by the message compiler."""
    return EVENTMSGS_H


@pytest.fixture
def project_root(tmp_path):
    """Project directory containing res/eventmsgs.mc."""
    res = tmp_path / "res"
    res.mkdir()
    (res / "eventmsgs.mc").write_text(EVENTMSGS_MC, encoding="utf-8")
    return tmp_path


@pytest.fixture
def native_config(project_root):
    """Windows host building for an MSVC target."""
    return BuildConfig(
        target="x86_64-pc-windows-msvc",
        project_root=str(project_root),
        host_is_windows=True,
    )


@pytest.fixture
def cross_config(project_root, tmp_path_factory):
    """Linux host cross compiling for a GNU Windows target."""
    return BuildConfig(
        target="x86_64-pc-windows-gnu",
        project_root=str(project_root),
        out_dir=str(tmp_path_factory.mktemp("out")),
        host_is_windows=False,
    )


class FakeToolRunner:
    """Stands in for run_tool; mc writes <input stem>.h into its -h dir."""

    def __init__(self, header=EVENTMSGS_H):
        self.header = header
        self.calls = []

    def __call__(self, tool, args, config):
        self.calls.append((tool, list(args)))
        if tool in ("mc.exe", "windmc"):
            header_dir = args[args.index("-h") + 1]
            stem = os.path.splitext(os.path.basename(args[-1]))[0]
            with open(os.path.join(header_dir, f"{stem}.h"), "w") as f:
                f.write(self.header)
        return ToolResult(program=tool, status=STATUS_OK, returncode=0)

    @property
    def tools(self):
        return [tool for tool, _ in self.calls]


@pytest.fixture
def fake_runner():
    return FakeToolRunner()
