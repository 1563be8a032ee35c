"""
Translator: message-compiler header -> Rust constants.

The message compiler emits one ``#define`` per message id, e.g.::

    #define MSG_SERVICE_STARTED              ((DWORD)0x40000001L)
    #define CATEGORY_GENERAL                 0x00000001L

Each such line becomes ``pub const NAME: u32 = 0xHEX;``. The cast, when
present, is matched but dropped: every id is a u32. The hex literal is
copied as written, minus any C suffix.
"""

import os
import re
from typing import Iterable, Iterator, Optional, Tuple

CONST_TYPE = "u32"

PROVENANCE = "// Auto-generated from origin with SHA256 {}."

DEFINE_RE = re.compile(
    r"""
    ^\#define\ (?P<name>\S+)      # keyword and identifier
    \s+ \(?                       # optional outer parenthesis
    (?P<cast>\([A-Za-z]+\))?      # optional type cast, e.g. (DWORD)
    \s* (?P<value>0x[0-9A-Fa-f]+) # hex literal
    """,
    re.VERBOSE,
)


def match_define(line: str) -> Optional[Tuple[str, str]]:
    """Return ``(name, hex_value)`` for a recognised #define, else None."""
    m = DEFINE_RE.match(line)
    if m is None:
        return None
    return m.group("name"), m.group("value")


def iter_constants(lines: Iterable[str]) -> Iterator[Tuple[str, str]]:
    """Yield ``(name, hex_value)`` for every matching line, in order."""
    for line in lines:
        found = match_define(line)
        if found is not None:
            yield found


def render_constant(name: str, value: str) -> str:
    return f"pub const {name}: {CONST_TYPE} = {value};"


def translate_header(header: str, generated: str, origin_hash: str) -> int:
    """Write the constants for ``header`` to ``generated``.

    The first line records ``origin_hash`` so the cache gate can tell the
    file is current. Returns the number of constants written.

    Raises OSError if either file cannot be opened.
    """
    count = 0
    with open(header, "r", encoding="utf-8", errors="replace") as src:
        os.makedirs(os.path.dirname(generated) or ".", exist_ok=True)
        with open(generated, "w", encoding="utf-8", newline="\n") as out:
            out.write(PROVENANCE.format(origin_hash) + "\n")
            for name, value in iter_constants(src):
                out.write(render_constant(name, value) + "\n")
                count += 1

    print(f"  wrote {generated} ({count} constants)")
    return count
