"""
CLI entry point for msggen (translation only).

Regenerates the Rust constants from an existing message-compiler header,
without running mc/rc. The full pipeline is driven by build.py.

Usage:
    python3 -m tools.msggen res/eventmsgs.h -o res/eventmsgs.rs --origin res/eventmsgs.mc
"""

import argparse
import sys

from .digest import file_hash
from .translate import translate_header


def main():
    parser = argparse.ArgumentParser(
        description="Translate a message-compiler header into Rust constants"
    )
    parser.add_argument("header", help="Input header generated by mc/windmc")
    parser.add_argument("-o", "--output", required=True, help="Output .rs file")
    parser.add_argument("--origin", required=True,
                        help="Message definition (.mc) file whose hash stamps the output")
    args = parser.parse_args()

    try:
        digest = file_hash(args.origin)
        translate_header(args.header, args.output, digest)
    except OSError as e:
        print(f"Error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
