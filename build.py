#!/usr/bin/env python3
"""
Event-message build step.

Run by the crate's build script with cargo's environment (TARGET, OUT_DIR,
CARGO_MANIFEST_DIR). Compiles res/eventmsgs.mc into the message-table
library, regenerates the Rust constants, and prints the cargo link
directives.

Usage:
    python3 build.py                            # Use cargo's environment
    python3 build.py --input res/other.mc       # Different definition file
    python3 build.py --config path/msggen.yaml  # Explicit project file
    python3 build.py --dump-env                 # Print the environment first
"""

import argparse
import os
import sys

PROJECT_DIR = os.path.dirname(os.path.abspath(__file__))

sys.path.insert(0, PROJECT_DIR)

from tools.msggen.config import PROJECT_FILE, BuildConfig, ValidationError, load_project
from tools.msggen.pipeline import dump_environment, run_pipeline


def main(argv=None, environ=None):
    parser = argparse.ArgumentParser(description="event-message build step")
    parser.add_argument("--input", default=None,
                        help="Message definition file, relative to the project root "
                             "(default: from msggen.yaml, else res/eventmsgs.mc)")
    parser.add_argument("--config", default=None,
                        help=f"Project file (default: <project root>/{PROJECT_FILE})")
    parser.add_argument("--dump-env", action="store_true",
                        help="Print every environment variable before building")
    args = parser.parse_args(argv)

    if environ is None:
        environ = os.environ

    if args.dump_env:
        dump_environment(environ)

    try:
        config = BuildConfig.from_env(environ, default_root=PROJECT_DIR)
        project = load_project(args.config or os.path.join(config.project_root, PROJECT_FILE))
        if args.input:
            project.input = args.input
        return run_pipeline(config, project)
    except (ValidationError, OSError) as e:
        print(f"Error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
