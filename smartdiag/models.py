"""Data models for smartdiag."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

_LEADING_INT = re.compile(r"^\s*(-?\d+)")


def leading_int(text: str, default: int | None = 0) -> int | None:
    """Return the leading integer of a raw value like '36 (Min/Max 20/45)'."""
    match = _LEADING_INT.match(text or "")
    if match is None:
        return default
    return int(match.group(1))


class Verdict(str, Enum):
    """Health verdict for an attribute or a whole device."""

    GOOD = "GOOD"
    BAD_ATTRIBUTE_NOW = "BAD_ATTRIBUTE_NOW"
    BAD_ATTRIBUTE_IN_THE_PAST = "BAD_ATTRIBUTE_IN_THE_PAST"
    BAD_SECTOR = "BAD_SECTOR"
    BAD_SECTOR_MANY = "BAD_SECTOR_MANY"  # device level only
    BAD_STATUS = "BAD_STATUS"

    def __str__(self) -> str:
        return self.value

    def is_problem(self) -> bool:
        """Return True for every verdict except GOOD."""
        return self is not Verdict.GOOD


class InformationKind(str, Enum):
    """Amount of information requested from smartctl."""

    DEFAULT = "default"
    ALL = "all"

    def __str__(self) -> str:
        return self.value

    def covers(self, other: InformationKind) -> bool:
        """Return True if output fetched with this kind can answer `other`."""
        return self is other or self is InformationKind.ALL


@dataclass
class Attribute:
    """One row of the SMART attribute table."""

    id: int
    name: str
    flags: str
    value: int
    worst: int
    threshold: int  # 0 when smartctl prints '---'
    when_failed: str
    raw_value: str
    description: str = ""
    verdict: Verdict = Verdict.GOOD

    @property
    def prefailure(self) -> bool:
        return "P" in self.flags.upper()

    @property
    def raw_int(self) -> int:
        return leading_int(self.raw_value)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "id": self.id,
            "name": self.name,
            "flags": self.flags,
            "value": self.value,
            "worst": self.worst,
            "threshold": self.threshold,
            "when_failed": self.when_failed,
            "raw_value": self.raw_value,
            "description": self.description,
            "prefailure": self.prefailure,
            "verdict": str(self.verdict),
        }


@dataclass
class SelfTestLogEntry:
    """One entry of the device self-test log."""

    num: int
    description: str
    status: str
    remaining: int
    lifetime: int
    lba_of_first_error: str

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "num": self.num,
            "description": self.description,
            "status": self.status,
            "remaining": self.remaining,
            "lifetime": self.lifetime,
            "lba_of_first_error": self.lba_of_first_error,
        }


@dataclass(frozen=True)
class FetchCache:
    """Last captured smartctl output and the kind it was fetched with.

    ``EMPTY_CACHE`` is the state before the first fetch and after a
    refresh.
    """

    kind: InformationKind | None = None
    lines: tuple[str, ...] = ()

    @property
    def is_empty(self) -> bool:
        return self.kind is None

    def satisfies(self, kind: InformationKind) -> bool:
        """Return True if the cached output can answer a request for `kind`."""
        return self.kind is not None and self.kind.covers(kind)


EMPTY_CACHE = FetchCache()


@dataclass
class CommandOutput:
    """Exit status and merged stdout/stderr of one command run."""

    command: list[str]
    exit_status: int
    lines: list[str] = field(default_factory=list)


@dataclass
class Device:
    """Handle for a block device to query."""

    path: str
    type_hint: str | None = None
    size_bytes: int | None = None

    @classmethod
    def from_path(
        cls,
        path: str,
        type_hint: str | None = None,
        sys_block: str | Path = "/sys/class/block",
    ) -> Device:
        """Create a device handle, reading its size from sysfs if possible."""
        return cls(
            path=path,
            type_hint=type_hint or None,
            size_bytes=read_sysfs_size(path, sys_block),
        )


def read_sysfs_size(path: str, sys_block: str | Path = "/sys/class/block") -> int | None:
    """Return the size of a block device in bytes, or None if unknown.

    sysfs always reports the size in 512-byte units regardless of the
    logical sector size.
    """
    size_file = Path(sys_block) / Path(path).name / "size"
    try:
        return int(size_file.read_text().strip()) * 512
    except (OSError, ValueError) as e:
        logger.debug(f"Cannot read size of {path} from {size_file}: {e}")
        return None


@dataclass
class DeviceReport:
    """Device-level summary combining all queries."""

    device: str
    status: Verdict
    model: str = ""
    serial: str = ""
    firmware: str = ""
    capacity: str = ""
    temperature: int | None = None
    power_on_hours: int = -1
    power_cycle_count: int = -1
    power_mode: str = "UNKNOWN"
    attributes: list[Attribute] = field(default_factory=list)
    selftests: list[SelfTestLogEntry] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "device": self.device,
            "status": str(self.status),
            "model": self.model,
            "serial": self.serial,
            "firmware": self.firmware,
            "capacity": self.capacity,
            "temperature": self.temperature,
            "power_on_hours": self.power_on_hours,
            "power_cycle_count": self.power_cycle_count,
            "power_mode": self.power_mode,
            "attributes": [a.to_dict() for a in self.attributes],
            "selftests": [t.to_dict() for t in self.selftests],
        }
