"""Parsers for the text output of smartctl.

The patterns below describe the smartctl output formats this package
understands. They are shared by all device classes (ATA, SAS/SCSI, NVMe)
and any change to them changes which output is accepted.
"""

from __future__ import annotations

import re
from typing import Iterable

from smartdiag.assessment import assess
from smartdiag.models import Attribute, SelfTestLogEntry
from smartdiag.smart_attrs import describe

# ID# ATTRIBUTE_NAME          FLAGS    VALUE WORST THRESH FAIL RAW_VALUE
#   5 Reallocated_Sector_Ct   PO--CK   100   100   010    -    0
ATTRIBUTE_LINE = re.compile(
    r"^\s*(?P<id>\d+)\s+(?P<name>\S+)\s+(?P<flags>(?i:[POSRCK-]+)\+?)\s+"
    r"(?P<value>\d+)\s+(?P<worst>\d+)\s+(?P<threshold>\d+|---)\s+"
    r"(?P<when_failed>\S+)\s+(?P<raw_value>.+)$"
)

# Num  Test_Description    Status                  Remaining  LifeTime(hours)  LBA_of_first_error
# # 1  Short offline       Completed without error       00%     26540         -
SELFTEST_DESCRIPTIONS = (
    "Short offline",
    "Extended offline",
    "Short captive",
    "Extended captive",
)
SELFTEST_LINE = re.compile(
    r"^#\s*(?P<num>\d+)\s+(?P<description>"
    + "|".join(SELFTEST_DESCRIPTIONS)
    + r")\s+(?P<status>.+?)\s+(?P<remaining>\d+)%\s+(?P<lifetime>\d+)\s+"
    r"(?P<lba>.+)$"
)

INFORMATION_START = "=== START OF INFORMATION SECTION ==="
INFORMATION_END = (
    "=== START OF READ SMART DATA SECTION ===",
    "=== START OF SMART DATA SECTION ===",
)

# Newer smartctl releases renamed some labels; {source: target}
INFORMATION_ALIASES = {
    "modelnumber": "devicemodel",
}

# SAS: "Current Drive Temperature:     30 C"
# NVMe: "Temperature:                        33 Celsius"
TEMPERATURE_LINE = re.compile(
    r"^\s*(?:Current Drive Temperature|Current Temperature|Temperature):\s*"
    r"(?P<temperature>-?\d+)\s+(?:C|Celsius)\b"
)

# Last line of output when "-n standby,0" skipped a sleeping device
POWER_MODE_LINE = re.compile(
    r"Device is in (?P<mode>\S+) mode, exit\((?P<status>\d+)\)",
    re.IGNORECASE,
)

# Health line of any outcome, printed when the device supports SMART
HEALTH_LINE = re.compile(
    r"^(?:SMART Health Status|SMART overall-health self-assessment test result):"
)


def parse_attribute_line(line: str) -> Attribute | None:
    """Parse one attribute table row, or return None if it is not one."""
    match = ATTRIBUTE_LINE.match(line)
    if match is None:
        return None

    threshold = match.group("threshold")
    attr = Attribute(
        id=int(match.group("id")),
        name=match.group("name"),
        flags=match.group("flags"),
        value=int(match.group("value")),
        worst=int(match.group("worst")),
        threshold=0 if threshold == "---" else int(threshold),
        when_failed=match.group("when_failed"),
        raw_value=match.group("raw_value").strip(),
    )
    attr.description = describe(attr.id)
    attr.verdict = assess(attr)
    return attr


def parse_attributes(lines: Iterable[str]) -> list[Attribute]:
    """Extract all attribute table rows, in order, duplicates included."""
    attributes: list[Attribute] = []
    for line in lines:
        attr = parse_attribute_line(line)
        if attr is not None:
            attributes.append(attr)
    return attributes


def parse_information(lines: Iterable[str]) -> dict[str, str]:
    """Collect the 'label: value' pairs of the information section.

    Labels are lowercased with spaces removed, e.g. 'Device Model' becomes
    'devicemodel'. Later duplicates overwrite earlier ones.
    """
    info: dict[str, str] = {}
    in_section = False

    for line in lines:
        if not in_section:
            if INFORMATION_START in line:
                in_section = True
            continue

        if any(marker in line for marker in INFORMATION_END):
            break

        label, sep, value = line.partition(":")
        if not sep:
            continue
        key = label.strip().lower().replace(" ", "")
        if not key:
            continue
        info[key] = value.strip()

    for source, target in INFORMATION_ALIASES.items():
        if source in info and target in info and not info[target]:
            info[target] = info[source]

    return info


def parse_selftest_log(lines: Iterable[str]) -> list[SelfTestLogEntry]:
    """Extract the self-test log entries in the order they are listed."""
    entries: list[SelfTestLogEntry] = []
    for line in lines:
        match = SELFTEST_LINE.match(line.strip())
        if match is None:
            continue
        entries.append(
            SelfTestLogEntry(
                num=int(match.group("num")),
                description=match.group("description"),
                status=match.group("status"),
                remaining=int(match.group("remaining")),
                lifetime=int(match.group("lifetime")),
                lba_of_first_error=match.group("lba").strip(),
            )
        )
    return entries


def find_temperature_line(lines: Iterable[str]) -> int | None:
    """Return the first temperature reported as text (SAS/SCSI, NVMe)."""
    for line in lines:
        match = TEMPERATURE_LINE.search(line)
        if match:
            return int(match.group("temperature"))
    return None


def has_health_line(lines: Iterable[str]) -> bool:
    """Return True if smartctl printed an overall health line."""
    return any(HEALTH_LINE.match(line.strip()) for line in lines)


def find_power_mode_line(line: str) -> str | None:
    """Return the mode of a 'Device is in STANDBY mode, exit(0)' line."""
    match = POWER_MODE_LINE.search(line)
    if match:
        return match.group("mode")
    return None
