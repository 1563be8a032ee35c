"""
Build configuration for msggen.

Two pieces of configuration feed the pipeline:

* ``BuildConfig`` -- what the invoking build system tells us (target triple,
  scratch output directory, project root, host OS). Built once from the
  environment and passed explicitly to everything that needs it.
* ``MessageProject`` -- the names of the project's message artifacts,
  optionally described by a ``msggen.yaml`` file in the project root.
"""

import os
import sys
from dataclasses import dataclass
from typing import Mapping, Optional

import yaml

PROJECT_FILE = "msggen.yaml"

DEFAULT_INPUT = "res/eventmsgs.mc"
DEFAULT_RES_DIR = "res"
DEFAULT_NAME = "eventmsgs"


def running_on_windows() -> bool:
    return sys.platform == "win32"


class ValidationError(Exception):
    """Raised when the build environment or msggen.yaml is invalid."""
    pass


@dataclass
class BuildConfig:
    """Build host/target description, read once at startup."""
    target: str
    project_root: str
    out_dir: Optional[str] = None
    host_is_windows: bool = False

    @property
    def arch(self) -> str:
        """Target architecture: the first component of the triple."""
        return self.target.split("-")[0]

    @classmethod
    def from_env(cls, environ: Mapping[str, str],
                 default_root: Optional[str] = None,
                 host_is_windows: Optional[bool] = None) -> "BuildConfig":
        """Build a BuildConfig from cargo-style environment variables.

        Reads ``TARGET``, ``OUT_DIR`` and ``CARGO_MANIFEST_DIR``.
        ``OUT_DIR`` is optional here; the cross branch checks for it.
        """
        target = environ.get("TARGET")
        if not target:
            raise ValidationError("Missing required environment variable 'TARGET'")

        project_root = environ.get("CARGO_MANIFEST_DIR") or default_root or os.getcwd()

        if host_is_windows is None:
            host_is_windows = running_on_windows()

        return cls(
            target=target,
            project_root=project_root,
            out_dir=environ.get("OUT_DIR") or None,
            host_is_windows=host_is_windows,
        )


@dataclass
class MessageProject:
    """Locations of the message definition and its generated artifacts."""
    input: str = DEFAULT_INPUT
    res_dir: str = DEFAULT_RES_DIR
    name: str = DEFAULT_NAME

    @property
    def compiled_stem(self) -> str:
        """Base name mc/windmc give the .h and .rc: the input's stem."""
        return os.path.splitext(os.path.basename(self.input))[0]

    def input_path(self, project_root: str) -> str:
        return os.path.join(project_root, self.input)

    def res_path(self, project_root: str) -> str:
        return os.path.join(project_root, self.res_dir)


def _require(data: dict, key: str, context: str = "msggen") -> object:
    """Require a key in a dict, raising ValidationError if missing."""
    if key not in data or data[key] is None:
        raise ValidationError(
            f"Missing required field '{key}' in {context} section"
        )
    return data[key]


def parse_project_yaml(yaml_str: str) -> MessageProject:
    """Parse a msggen.yaml string into a MessageProject.

    The file holds a single ``msggen`` mapping; every key in it is optional
    and falls back to the defaults used by the stock project layout::

        msggen:
          input: res/eventmsgs.mc
          res_dir: res
          name: eventmsgs

    Raises:
        ValidationError: If the YAML is malformed or a field has the wrong type.
    """
    if not yaml_str or not yaml_str.strip():
        return MessageProject()

    try:
        data = yaml.safe_load(yaml_str)
    except yaml.YAMLError as e:
        raise ValidationError(f"Invalid YAML: {e}")

    if not isinstance(data, dict):
        raise ValidationError("YAML root must be a mapping")

    section = _require(data, "msggen", "root")
    if not isinstance(section, dict):
        raise ValidationError("'msggen' section must be a mapping")

    project = MessageProject()
    for key in ("input", "res_dir", "name"):
        if key in section and section[key] is not None:
            value = section[key]
            if not isinstance(value, str) or not value.strip():
                raise ValidationError(
                    f"Field '{key}' in msggen section must be a non-empty string"
                )
            setattr(project, key, value)

    return project


def load_project(path: str) -> MessageProject:
    """Load msggen.yaml from ``path``; a missing file means all defaults."""
    if not os.path.exists(path):
        return MessageProject()

    with open(path, "r", encoding="utf-8") as f:
        return parse_project_yaml(f.read())
