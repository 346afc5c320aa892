"""
Parsers for the per-process files exposed under /proc.

Each parser takes the raw file content and returns plain Python values.
They raise ValueError on malformed input and never touch the filesystem.
"""


def _decode(raw: bytes) -> str:
    return raw.decode("utf-8", errors="replace")


def parse_stat(raw: bytes) -> tuple[str, int]:
    """
    Extract the name and parent pid from a /proc/[pid]/stat line.

    Args:
        raw: Content of the stat file

    Returns:
        Tuple of (name, parent pid)

    The name is wrapped in parentheses and may itself contain spaces or
    parentheses, so it is taken between the first "(" and the last ")".
    The fields after the closing parenthesis are state, ppid, pgrp, ...

    Example:
        b"42 (my process) S 1 42 42 0 -1 ..." -> ("my process", 1)
    """
    line = _decode(raw)
    start = line.find("(")
    end = line.rfind(")")
    if start == -1 or end < start:
        raise ValueError(f"name field is not delimited: {line[:64]!r}")

    name = line[start + 1 : end]
    fields = line[end + 1 :].split()
    if len(fields) < 2:
        raise ValueError(f"stat line has too few fields: {line[:64]!r}")

    try:
        ppid = int(fields[1])
    except ValueError:
        raise ValueError(f"parent pid is not an integer: {fields[1]!r}") from None

    return name, ppid


def decode_cmdline(raw: bytes) -> str:
    """
    Render a NUL-separated argument block as a single string.

    Every NUL becomes a space and the trailing separator is dropped, so
    b"ls\\0-la\\0" becomes "ls -la". An empty block yields "".
    """
    cmdline = _decode(raw).replace("\0", " ")
    if cmdline:
        cmdline = cmdline[:-1]
    return cmdline


def parse_environ(raw: bytes) -> dict[str, str]:
    """
    Parse a NUL-separated KEY=VALUE block into a dictionary.

    Entries are split on the first "=". Entries with an empty name are
    dropped, entries without "=" map to "", and later duplicates win.
    """
    environ: dict[str, str] = {}
    for entry in _decode(raw).split("\0"):
        name, _, value = entry.partition("=")
        if not name:
            continue
        environ[name] = value
    return environ
