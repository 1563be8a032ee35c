"""
Pipeline: hash -> (cache check) -> mc -> rc -> translate -> link directives.

Two branches, chosen once per run:

* native (Windows host): artifacts live in the project's ``res/`` directory,
  which is checked in, so regeneration is skipped when the constants file
  already carries the current digest.
* cross (any other host): artifacts go to the build's scratch ``OUT_DIR``,
  which starts empty, so everything is always regenerated.

Link directives are emitted on both branches, on every run.
"""

import os
from dataclasses import dataclass, field
from typing import Callable, List, Mapping, Optional

from .config import BuildConfig, MessageProject, ValidationError
from .digest import file_contains, file_hash
from .toolchain import ToolResult, run_tool
from .translate import translate_header

BRANCH_NATIVE = "native"
BRANCH_CROSS = "cross"

ToolRunner = Callable[[str, List[str], BuildConfig], ToolResult]


@dataclass
class PipelineResult:
    """What a pipeline run did."""
    branch: str
    digest: str
    regenerated: bool = False
    constants: int = 0
    tool_results: List[ToolResult] = field(default_factory=list)
    directives: List[str] = field(default_factory=list)


def link_directives(lib_dir: str, lib_name: str) -> List[str]:
    """Cargo directives that link the generated message-table library."""
    return [
        f"cargo:rustc-link-search=native={lib_dir}",
        f"cargo:rustc-link-lib=dylib={lib_name}",
    ]


def dump_environment(environ: Mapping[str, str]) -> None:
    """Print every environment variable, for debugging build setups."""
    for key in sorted(environ):
        print(f"Env[{key}]={environ[key]}")


def _invoke(runner: ToolRunner, tool: str, args: List[str],
            config: BuildConfig, result: PipelineResult) -> None:
    outcome = runner(tool, args, config)
    result.tool_results.append(outcome)
    if not outcome.spawned:
        # A missing toolchain surfaces later as a link error; keep going.
        print(f"Continuing without {outcome.program}")


def _emit(result: PipelineResult, lib_dir: str, lib_name: str) -> None:
    result.directives = link_directives(lib_dir, lib_name)
    for directive in result.directives:
        print(directive)


def run_native(config: BuildConfig, project: MessageProject,
               runner: ToolRunner = run_tool) -> PipelineResult:
    """Generate into the checked-in resource directory, if stale."""
    input_path = project.input_path(config.project_root)
    res = project.res_path(config.project_root)
    generated = os.path.join(res, f"{project.name}.rs")

    digest = file_hash(input_path)
    result = PipelineResult(branch=BRANCH_NATIVE, digest=digest)

    if not file_contains(generated, digest):
        print(f"Generating {generated} from {input_path} with hash {digest}")

        _invoke(runner, "mc.exe", ["-U", "-h", res, "-r", res, input_path],
                config, result)
        _invoke(runner, "rc.exe",
                ["/v", "/fo", os.path.join(res, f"{project.name}.lib"),
                 os.path.join(res, f"{project.compiled_stem}.rc")],
                config, result)
        result.constants = translate_header(
            os.path.join(res, f"{project.compiled_stem}.h"), generated, digest
        )
        result.regenerated = True

    _emit(result, res, project.name)
    return result


def run_cross(config: BuildConfig, project: MessageProject,
              runner: ToolRunner = run_tool) -> PipelineResult:
    """Generate everything into the build's scratch directory."""
    if not config.out_dir:
        raise ValidationError("Missing required environment variable 'OUT_DIR'")

    out_dir = config.out_dir
    input_path = project.input_path(config.project_root)
    rc = os.path.join(out_dir, f"{project.compiled_stem}.rc")
    lib = os.path.join(out_dir, f"{project.name}.lib")
    header = os.path.join(out_dir, f"{project.compiled_stem}.h")
    generated = os.path.join(out_dir, f"{project.name}.rs")

    digest = file_hash(input_path)
    result = PipelineResult(branch=BRANCH_CROSS, digest=digest)

    print(f"Generating {generated} from {input_path} with hash {digest}")

    _invoke(runner, "windmc", ["-U", "-h", out_dir, "-r", out_dir, input_path],
            config, result)
    _invoke(runner, "windres", ["-v", "-i", rc, "-o", lib], config, result)
    result.constants = translate_header(header, generated, digest)
    result.regenerated = True

    _emit(result, out_dir, project.name)
    return result


def run_pipeline(config: BuildConfig, project: Optional[MessageProject] = None,
                 runner: ToolRunner = run_tool) -> PipelineResult:
    """Run the branch that matches the build host."""
    if project is None:
        project = MessageProject()

    if config.host_is_windows:
        return run_native(config, project, runner)
    return run_cross(config, project, runner)
