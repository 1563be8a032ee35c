"""
Content hashing and the cache gate.

The SHA-256 of the message definition file is both the cache key and the
provenance stamp written into the generated constants file.
"""

import hashlib

CHUNK_SIZE = 64 * 1024


def file_hash(path: str) -> str:
    """Return the hex SHA-256 digest of the file at ``path``.

    Raises OSError if the file cannot be opened or read.
    """
    hasher = hashlib.sha256()
    with open(path, "rb") as f:
        for chunk in iter(lambda: f.read(CHUNK_SIZE), b""):
            hasher.update(chunk)

    digest = hasher.hexdigest()
    print(f"file={path}, hash={digest}")
    return digest


def file_contains(path: str, needle: str) -> bool:
    """True if any line of the file at ``path`` contains ``needle``.

    A file that is missing or cannot be read simply doesn't contain it.
    """
    try:
        with open(path, "r", encoding="utf-8", errors="replace") as f:
            for line in f:
                if needle in line:
                    print(f"file={path} contains {needle}")
                    return True
    except OSError as e:
        print(f"file={path} unreadable ({e}), treating as stale")
        return False

    print(f"file={path} does not contain {needle}")
    return False
