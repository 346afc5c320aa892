"""Process table acquisition engine for procjson."""

import logging
import os
from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor
from enum import Enum
from pathlib import Path
from types import MappingProxyType

import psutil

from procjson.errors import (
    EnumerationFailure,
    ParseFailure,
    ProcessReadError,
    ProcessVanished,
)
from procjson.models import ProcessRecord
from procjson.procfs import decode_cmdline, parse_environ, parse_stat

logger = logging.getLogger(__name__)


class ScanPolicy(Enum):
    """What a scan does when a single pid cannot be read."""

    STRICT = "strict"  # abort the whole scan
    PARTIAL = "partial"  # skip the pid and keep going


class ProcessScanner:
    """
    Reads the process table from a procfs mount.

    The scanner only holds configuration. Every call to read_all() performs
    a fresh, independent pass over the process directory, so one instance
    can serve concurrent requests without locking.
    """

    def __init__(
        self,
        proc_root: str | os.PathLike[str] | None = None,
        policy: ScanPolicy = ScanPolicy.STRICT,
        max_workers: int = 1,
        own_pid: int | None = None,
    ) -> None:
        """
        Initialize the ProcessScanner.

        Args:
            proc_root: procfs mount point. Defaults to psutil.PROCFS_PATH.
            policy: Failure handling for pids that vanish or fail to parse.
            max_workers: Number of threads reading pids. 1 reads sequentially.
            own_pid: Pid to leave out of the listing. Defaults to os.getpid().
        """
        self._root = Path(psutil.PROCFS_PATH if proc_root is None else proc_root)
        self._policy = policy
        self._max_workers = max(1, max_workers)
        self._own_pid = os.getpid() if own_pid is None else own_pid

    @property
    def proc_root(self) -> Path:
        """Get the procfs root being scanned."""
        return self._root

    @property
    def policy(self) -> ScanPolicy:
        """Get the per-pid failure policy."""
        return self._policy

    @property
    def max_workers(self) -> int:
        """Get the number of reader threads."""
        return self._max_workers

    def list_process_ids(self) -> list[int]:
        """
        List the pids currently present under the procfs root.

        Entries that are not positive integers are skipped, as is the
        caller's own pid. The order is whatever the directory yields.

        Raises:
            EnumerationFailure: If the procfs root cannot be listed
        """
        try:
            names = os.listdir(self._root)
        except OSError as e:
            raise EnumerationFailure(str(self._root), e) from e

        pids: list[int] = []
        for name in names:
            if not (name.isascii() and name.isdigit()):
                continue
            pid = int(name)
            if pid <= 0 or pid == self._own_pid:
                continue
            pids.append(pid)
        return pids

    def read_process(self, pid: int) -> ProcessRecord:
        """
        Read and parse the metadata of a single pid.

        Raises:
            ProcessVanished: If the stat or cmdline file cannot be read
            ParseFailure: If the stat line is malformed
        """
        proc_dir = self._root / str(pid)

        try:
            stat_raw = (proc_dir / "stat").read_bytes()
        except OSError as e:
            raise ProcessVanished(pid, f"Failed to read stat file: {e}") from e

        try:
            name, parent_pid = parse_stat(stat_raw)
        except ValueError as e:
            raise ParseFailure(pid, f"Failed to parse stat file: {e}") from e

        try:
            cmdline_raw = (proc_dir / "cmdline").read_bytes()
        except OSError as e:
            raise ProcessVanished(pid, f"Failed to read cmdline file: {e}") from e

        # environ is usually restricted to the owning user
        try:
            environ_raw = (proc_dir / "environ").read_bytes()
        except OSError as e:
            logger.debug(f"environ of pid {pid} unavailable: {e}")
            environment = None
        else:
            environment = MappingProxyType(parse_environ(environ_raw))

        return ProcessRecord(
            pid=pid,
            parent_pid=parent_pid,
            name=name,
            command_line=decode_cmdline(cmdline_raw),
            environment=environment,
        )

    def read_all(self) -> list[ProcessRecord]:
        """
        Enumerate the process table and read every pid in it.

        Records are returned in enumeration order, also when reads run on
        several threads.

        Raises:
            EnumerationFailure: If the procfs root cannot be listed
            ProcessReadError: Under the strict policy, for the first pid
                that could not be read
        """
        pids = self.list_process_ids()

        if self._max_workers > 1 and len(pids) > 1:
            with ThreadPoolExecutor(
                max_workers=self._max_workers,
                thread_name_prefix="ProcessScanner",
            ) as pool:
                outcomes = list(pool.map(self._read_outcome, pids))
        else:
            outcomes = map(self._read_outcome, pids)

        records = self._collect(outcomes)
        logger.debug(f"Read {len(records)} of {len(pids)} processes from {self._root}")
        return records

    def _read_outcome(self, pid: int) -> ProcessRecord | ProcessReadError:
        """Read a pid, returning the failure instead of raising it."""
        try:
            return self.read_process(pid)
        except ProcessReadError as e:
            return e

    def _collect(
        self, outcomes: Iterable[ProcessRecord | ProcessReadError]
    ) -> list[ProcessRecord]:
        """Apply the scan policy to per-pid outcomes."""
        records: list[ProcessRecord] = []
        for outcome in outcomes:
            if isinstance(outcome, ProcessReadError):
                if self._policy is ScanPolicy.STRICT:
                    raise outcome
                logger.debug(f"Skipping {outcome}")
                continue
            records.append(outcome)
        return records
