"""Shared fixtures: a fake procfs tree built under tmp_path."""

from pathlib import Path

import pytest

# Pid the scanner under test treats as its own; never present in fake trees
# unless a test adds it on purpose.
SCANNER_PID = 99999


class FakeProcfs:
    """Builds /proc/[pid]/{stat,cmdline,environ} files in a directory."""

    def __init__(self, root: Path) -> None:
        self.root = root

    def add(
        self,
        pid: int,
        name: str = "worker",
        ppid: int = 1,
        cmdline: bytes | None = b"/usr/bin/worker\0--serve\0",
        environ: bytes | None = b"PATH=/usr/bin\0HOME=/root\0",
        stat: bytes | None = None,
    ) -> Path:
        """
        Add a process directory.

        Passing None for cmdline or environ leaves that file out. A raw
        stat line overrides the generated one.
        """
        proc_dir = self.root / str(pid)
        proc_dir.mkdir()
        if stat is None:
            stat = f"{pid} ({name}) S {ppid} {pid} {pid} 0 -1 4194560 120 0 0 0\n".encode()
        (proc_dir / "stat").write_bytes(stat)
        if cmdline is not None:
            (proc_dir / "cmdline").write_bytes(cmdline)
        if environ is not None:
            (proc_dir / "environ").write_bytes(environ)
        return proc_dir

    def add_entry(self, name: str, is_dir: bool = True) -> None:
        """Add a non-process entry such as 'self' or 'meminfo'."""
        path = self.root / name
        if is_dir:
            path.mkdir()
        else:
            path.write_text("")


@pytest.fixture
def procfs(tmp_path: Path) -> FakeProcfs:
    """Empty fake procfs root."""
    root = tmp_path / "proc"
    root.mkdir()
    return FakeProcfs(root)
