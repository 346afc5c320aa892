"""Data models for procjson."""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any


@dataclass(slots=True, frozen=True)
class ProcessRecord:
    """Immutable snapshot of one process at read time."""

    pid: int
    parent_pid: int
    name: str
    command_line: str | None  # None when absent, "" when present but empty
    environment: Mapping[str, str] | None  # None when unreadable

    def to_json(self) -> dict[str, Any]:
        """
        Render the record with the service's wire keys.

        An absent command line becomes ``false`` and a missing environment
        becomes ``null``, so consumers can tell both apart from empty values.
        """
        return {
            "Pid": self.pid,
            "Ppid": self.parent_pid,
            "Name": self.name,
            "Cmdline": False if self.command_line is None else self.command_line,
            "Environ": None if self.environment is None else dict(self.environment),
        }
