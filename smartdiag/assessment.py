"""Health assessment of SMART attributes and whole devices."""

from __future__ import annotations

import logging
import math
import re
from typing import Iterable, Sequence

from smartdiag.models import Attribute, Verdict

logger = logging.getLogger(__name__)

# Thresholds outside this range mean "always passing" or "always failing"
THRESHOLD_MIN = 0x01
THRESHOLD_MAX = 0xFD

ATTR_REALLOCATED_SECTORS = 5
ATTR_REPORTED_UNCORRECT = 187
ATTR_CURRENT_PENDING_SECTORS = 197

SECTOR_SIZE = 512

# Devices without an attribute table (SAS/SCSI, NVMe) only report a line
HEALTH_PASSED_LINE = re.compile(
    r"SMART Health Status:\s*OK"
    r"|SMART overall-health self-assessment test result:\s*PASSED",
    re.IGNORECASE,
)


def assess(attr: Attribute) -> Verdict:
    """Classify a single attribute. The first matching rule wins."""
    if not attr.prefailure:
        if attr.id == ATTR_REPORTED_UNCORRECT and attr.raw_int > 0:
            return Verdict.BAD_ATTRIBUTE_NOW
        return Verdict.GOOD

    if not THRESHOLD_MIN <= attr.threshold <= THRESHOLD_MAX:
        return Verdict.BAD_STATUS
    if attr.value <= attr.threshold:
        return Verdict.BAD_ATTRIBUTE_NOW
    if attr.worst <= attr.threshold:
        return Verdict.BAD_ATTRIBUTE_IN_THE_PAST
    if (
        attr.id in (ATTR_REALLOCATED_SECTORS, ATTR_CURRENT_PENDING_SECTORS)
        and attr.raw_int >= 1
    ):
        return Verdict.BAD_SECTOR
    return Verdict.GOOD


def has_health_passed(lines: Iterable[str]) -> bool:
    """Return True if the output contains a passed health line."""
    return any(HEALTH_PASSED_LINE.search(line) for line in lines)


def bad_sector_threshold(size_bytes: int | None) -> int | None:
    """
    Number of bad sectors from which a device counts as failing.

    Scales with the natural logarithm of the sector count, e.g. about
    21900 for a 1 TB disk. Returns None if the size is unknown.
    """
    if not size_bytes or size_bytes < SECTOR_SIZE:
        return None
    return math.floor(math.log(size_bytes / SECTOR_SIZE) * 1024)


def find_attribute(attributes: Iterable[Attribute], attr_id: int) -> Attribute | None:
    """Return the first attribute with the given id."""
    for attr in attributes:
        if attr.id == attr_id:
            return attr
    return None


def count_bad_sectors(attributes: Sequence[Attribute]) -> int:
    """Sum of reallocated and pending sector raw counts."""
    total = 0
    for attr_id in (ATTR_REALLOCATED_SECTORS, ATTR_CURRENT_PENDING_SECTORS):
        attr = find_attribute(attributes, attr_id)
        if attr is not None:
            total += attr.raw_int
    return total


def evaluate_overall_status(
    attributes: Sequence[Attribute],
    lines: Iterable[str],
    size_bytes: int | None = None,
) -> Verdict:
    """
    Aggregate attribute verdicts into one device-level verdict.

    BAD_STATUS attribute verdicts are inconclusive and do not fail the
    device.
    """
    if not attributes:
        return Verdict.GOOD if has_health_passed(lines) else Verdict.BAD_STATUS

    num_sectors = count_bad_sectors(attributes)

    threshold = bad_sector_threshold(size_bytes)
    if threshold is None:
        logger.debug("Device size unknown, skipping bad sector threshold check")
    elif num_sectors >= threshold:
        return Verdict.BAD_SECTOR_MANY

    for attr in attributes:
        if attr.verdict not in (Verdict.GOOD, Verdict.BAD_STATUS):
            return attr.verdict

    if num_sectors > 0:
        return Verdict.BAD_SECTOR

    return Verdict.GOOD
