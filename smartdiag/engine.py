"""SMART information of a single device."""

from __future__ import annotations

import logging
from typing import TypeVar

from smartdiag.assessment import evaluate_overall_status, find_attribute
from smartdiag.config import SmartctlConfig
from smartdiag.executor import (
    CommandRunner,
    ExecutionGate,
    check_exit_status,
    default_gate,
    run_command,
)
from smartdiag.models import (
    EMPTY_CACHE,
    Attribute,
    CommandOutput,
    Device,
    DeviceReport,
    FetchCache,
    InformationKind,
    SelfTestLogEntry,
    Verdict,
    leading_int,
)
from smartdiag.parsers import (
    find_power_mode_line,
    find_temperature_line,
    has_health_line,
    parse_attributes,
    parse_information,
    parse_selftest_log,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_ARGS = ["-A", "-f", "brief", "-i", "-H", "-l", "selftest"]
ALL_ARGS = ["-x"]

# Airflow temperature, drive temperature, vendor temperature; in priority order
TEMPERATURE_ATTRS = (190, 194, 231)
TEMPERATURE_MIN = -15
TEMPERATURE_MAX = 100

ATTR_POWER_ON_HOURS = 9
ATTR_POWER_CYCLE_COUNT = 12

# Do not spin up sleeping disks; exit 0 so the output is not rejected
POWER_MODE_NO_CHECK = "standby,0"


def build_command(
    binary: str,
    device_path: str,
    kind: InformationKind = InformationKind.DEFAULT,
    no_check: str | None = None,
    device_type: str | None = None,
) -> list[str]:
    """Build the smartctl command line; the device path is always last."""
    cmd = [binary]
    cmd.extend(ALL_ARGS if kind is InformationKind.ALL else DEFAULT_ARGS)
    if no_check:
        cmd.extend(["-n", no_check])
    if device_type:
        cmd.extend(["-d", device_type])
    cmd.append(device_path)
    return cmd


class SmartInformation:
    """Query and assess the SMART data of one device.

    Output of smartctl is cached per instance. A cache filled with
    ``InformationKind.ALL`` also answers ``DEFAULT`` queries; call
    :meth:`refresh` to force a new run.
    """

    def __init__(
        self,
        device: Device,
        config: SmartctlConfig | None = None,
        runner: CommandRunner | None = None,
        gate: ExecutionGate | None = None,
    ):
        self.device = device
        self.config = config or SmartctlConfig()
        self._runner = runner or self._run
        self._gate = gate or default_gate
        self._cache = EMPTY_CACHE

    def _run(self, command: list[str]) -> CommandOutput:
        return run_command(command, timeout=self.config.timeout_seconds)

    @property
    def cache(self) -> FetchCache:
        return self._cache

    def refresh(self) -> None:
        """Discard cached output so the next query runs smartctl again."""
        self._cache = EMPTY_CACHE

    def fetch(
        self,
        kind: InformationKind = InformationKind.DEFAULT,
        no_check: str | None = None,
        device_type: str | None = None,
    ) -> list[str]:
        """Return smartctl output lines, running smartctl unless cached."""
        if self._cache.satisfies(kind):
            logger.debug(f"{self.device.path}: using cached {self._cache.kind} output")
            return list(self._cache.lines)

        command = build_command(
            self.config.binary,
            self.device.path,
            kind=kind,
            no_check=no_check or self.config.no_check or None,
            device_type=device_type or self.device.type_hint,
        )

        output = self._gate.run(self.device.path, lambda: self._runner(command))
        check_exit_status(output)

        # A sleeping device skipped by -n yields no SMART data to reuse
        if output.lines and (mode := find_power_mode_line(output.lines[-1])):
            logger.debug(f"{self.device.path}: skipped in {mode} mode, output not cached")
        else:
            self._cache = FetchCache(kind=kind, lines=tuple(output.lines))
        return list(output.lines)

    def get_extended_information(self) -> str:
        """Return the complete output of 'smartctl -x'."""
        return "\n".join(self.fetch(InformationKind.ALL))

    def get_attributes(self) -> list[Attribute]:
        """Return the assessed attribute table; empty for SAS/SCSI and NVMe."""
        return parse_attributes(self.fetch())

    def get_attribute(self, attr_id: int) -> Attribute | None:
        """Return the first attribute with the given id, or None."""
        return find_attribute(self.get_attributes(), attr_id)

    def get_information(self) -> dict[str, str]:
        """Return the device information section as a dictionary."""
        return parse_information(self.fetch())

    def get_selftest_logs(self) -> list[SelfTestLogEntry]:
        """Return the self-test log, most recent entry first."""
        return parse_selftest_log(self.fetch())

    def is_supported(self) -> bool:
        """Return True if the device reports SMART data."""
        # ATA prints "SMART support is:" twice (capability, then state)
        support = self.get_information().get("smartsupportis")
        if support is not None:
            return not support.startswith("Unavailable")
        return has_health_line(self.fetch())

    def get_temperature(self, default: T = None) -> int | T:
        """
        Return the current temperature in degrees Celsius.

        Attributes 190, 194 and 231 are tried in that order and the first
        plausible reading wins. Devices without an attribute table report
        the temperature as a text line instead.
        """
        attributes = self.get_attributes()

        if not attributes:
            temperature = find_temperature_line(self.fetch())
            return default if temperature is None else temperature

        for attr_id in TEMPERATURE_ATTRS:
            for attr in attributes:
                if attr.id != attr_id:
                    continue
                temperature = leading_int(attr.raw_value, default=None)
                if temperature is not None and TEMPERATURE_MIN <= temperature <= TEMPERATURE_MAX:
                    return temperature
                logger.debug(
                    f"{self.device.path}: ignoring implausible temperature "
                    f"{attr.raw_value!r} of attribute {attr_id}"
                )

        return default

    def _stat_from_info(self, key: str) -> int:
        value = self.get_information().get(key)
        if value is None:
            return -1
        return leading_int(value.replace(",", ""), default=-1)

    def get_power_cycle_count(self) -> int:
        """Return the number of power cycles, or -1 if unknown."""
        attr = self.get_attribute(ATTR_POWER_CYCLE_COUNT)
        if attr is not None:
            return attr.raw_int
        return self._stat_from_info("powercycles")

    def get_power_on_hours(self) -> int:
        """Return the power-on hours, or -1 if unknown."""
        attr = self.get_attribute(ATTR_POWER_ON_HOURS)
        if attr is not None:
            return attr.raw_int
        return self._stat_from_info("poweronhours")

    def get_power_mode(self) -> str:
        """
        Return the power mode, e.g. 'ACTIVE or IDLE' or 'STANDBY'.

        Returns 'ERROR' if smartctl failed and 'UNKNOWN' if the output does
        not tell.
        """
        try:
            lines = self.fetch(no_check=POWER_MODE_NO_CHECK)
        except Exception as e:
            logger.warning(f"Failed to get power mode of {self.device.path}: {e}")
            return "ERROR"

        info = parse_information(lines)
        if "powermodeis" in info:
            return info["powermodeis"]

        if lines and (mode := find_power_mode_line(lines[-1])):
            return mode

        return "UNKNOWN"

    def get_overall_status(self) -> Verdict:
        """Return the device-level health verdict."""
        attributes = self.get_attributes()
        return evaluate_overall_status(
            attributes,
            self.fetch(),
            size_bytes=self.device.size_bytes,
        )

    def get_report(self) -> DeviceReport:
        """Collect all queries into one report."""
        info = self.get_information()
        return DeviceReport(
            device=self.device.path,
            status=self.get_overall_status(),
            model=info.get("devicemodel") or info.get("modelnumber", ""),
            serial=info.get("serialnumber", ""),
            firmware=info.get("firmwareversion", ""),
            capacity=info.get("usercapacity") or info.get("totalnvmcapacity", ""),
            temperature=self.get_temperature(),
            power_on_hours=self.get_power_on_hours(),
            power_cycle_count=self.get_power_cycle_count(),
            power_mode=self.get_power_mode(),
            attributes=self.get_attributes(),
            selftests=self.get_selftest_logs(),
        )
